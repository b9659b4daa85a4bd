"""Unit tests for the analysis service client, using httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from repowiki.services.analysis import (
    AnalysisServiceClient,
    AnalysisServiceError,
    AnalysisServiceNotFound,
)

BASE = "http://adocs.test"


def _client(handler) -> tuple[AnalysisServiceClient, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(record))
    return AnalysisServiceClient(http, base_url=BASE + "/"), seen


class TestGetDocumentation:
    @pytest.mark.asyncio
    async def test_full_bundle(self) -> None:
        bundle = {"repository": "octocat/Hello-World", "sections": {"overview": "# Hi"}}
        client, seen = _client(lambda request: httpx.Response(200, json=bundle))

        result = await client.get_documentation("octocat/Hello-World")

        assert result == bundle
        assert seen[0].url.path == "/api/documentation"
        assert dict(seen[0].url.params) == {"repo": "octocat/Hello-World", "docs_type": "docs"}

    @pytest.mark.asyncio
    async def test_single_section(self) -> None:
        section = {
            "content": "# Overview",
            "section": "overview",
            "repository": "octocat/Hello-World",
            "generated_at": "2025-01-01T00:00:00Z",
        }
        client, seen = _client(lambda request: httpx.Response(200, json=section))

        result = await client.get_documentation("octocat/Hello-World", section="overview", docs_type="wiki")

        assert result == section
        assert seen[0].url.params["section"] == "overview"
        assert seen[0].url.params["docs_type"] == "wiki"

    @pytest.mark.asyncio
    async def test_not_found(self) -> None:
        client, _ = _client(lambda request: httpx.Response(404, json={"detail": "Section not found"}))

        with pytest.raises(AnalysisServiceNotFound) as exc_info:
            await client.get_documentation("octocat/Hello-World", section="nope")

        assert exc_info.value.message == "Section not found"
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_server_error_carries_detail(self) -> None:
        client, _ = _client(lambda request: httpx.Response(500, json={"detail": "disk full"}))

        with pytest.raises(AnalysisServiceError) as exc_info:
            await client.get_documentation("octocat/Hello-World")

        assert exc_info.value.message == "disk full"
        assert not isinstance(exc_info.value, AnalysisServiceNotFound)

    @pytest.mark.asyncio
    async def test_error_without_json_body(self) -> None:
        client, _ = _client(lambda request: httpx.Response(502, text="Bad Gateway"))

        with pytest.raises(AnalysisServiceError) as exc_info:
            await client.get_documentation("octocat/Hello-World")

        assert exc_info.value.message == "Failed to get documentation"

    @pytest.mark.asyncio
    async def test_connection_error(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client, _ = _client(refuse)

        with pytest.raises(AnalysisServiceError):
            await client.get_documentation("octocat/Hello-World")


class TestListRepositories:
    @pytest.mark.asyncio
    async def test_lists(self) -> None:
        payload = {"repositories": [{"name": "octocat/Hello-World", "sections": ["overview"]}]}
        client, seen = _client(lambda request: httpx.Response(200, json=payload))

        assert await client.list_repositories("wiki") == payload
        assert seen[0].url.path == "/api/repositories"
        assert seen[0].url.params["docs_type"] == "wiki"

    @pytest.mark.asyncio
    async def test_failure(self) -> None:
        client, _ = _client(lambda request: httpx.Response(503, json={"detail": "starting"}))

        with pytest.raises(AnalysisServiceError):
            await client.list_repositories()
