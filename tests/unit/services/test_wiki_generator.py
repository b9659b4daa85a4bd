"""
Tests for WikiGenerator.

Tests cover:
- JSON enhancement parsing and field validation
- Text fallback extraction
- Rate-limit retry and failure summaries
- Repository summary
"""

import json
from unittest.mock import AsyncMock, patch

import pytest

from repowiki.services.docs.types import Page
from repowiki.services.docs.wiki import (
    FAILED_SUMMARY,
    RATE_LIMITED_SUMMARY,
    REPOSITORY_SUMMARY_UNAVAILABLE,
    WikiGenerator,
    extract_improvements,
    extract_key_points,
    extract_summary,
    parse_enhancement,
)
from tests.helpers.mock_factories import (
    make_anthropic_client,
    make_rate_limit_error,
    make_text_message,
)

ENHANCED = {
    "summary": "A demo repository.",
    "enhancedContent": "# README\n\nBetter.",
    "keyPoints": ["one", "two"],
    "suggestedImprovements": ["add tests"],
}

README = Page(title="README", content="Hello World", path="README.md", type="readme")


def _generator(client) -> WikiGenerator:
    return WikiGenerator(client, model="test-model", cooldown=0, delay=0)


class TestParseEnhancement:
    def test_valid_json(self) -> None:
        result = parse_enhancement("Sure! " + json.dumps(ENHANCED), "orig")

        assert result.summary == "A demo repository."
        assert result.enhanced_content == "# README\n\nBetter."
        assert result.key_points == ["one", "two"]
        assert result.suggested_improvements == ["add tests"]

    def test_missing_field_uses_text_fallback(self) -> None:
        partial = {k: v for k, v in ENHANCED.items() if k != "keyPoints"}

        result = parse_enhancement(json.dumps(partial), "orig")

        assert result.enhanced_content == "orig"

    def test_wrong_types_use_text_fallback(self) -> None:
        bad = {**ENHANCED, "keyPoints": "not a list"}
        assert parse_enhancement(json.dumps(bad), "orig").enhanced_content == "orig"

    def test_plain_text_fallback(self) -> None:
        text = (
            "Summary: This project prints a greeting.\n\n"
            "Key points:\n- Tiny\n* Friendly\n\n"
            "Suggested improvements:\n• Add docs\n- Add tests"
        )

        result = parse_enhancement(text, "orig")

        assert result.summary == "This project prints a greeting."
        assert result.enhanced_content == "orig"
        assert result.key_points == ["Tiny", "Friendly"]
        assert result.suggested_improvements == ["Add docs", "Add tests"]


class TestTextExtraction:
    def test_summary_missing(self) -> None:
        assert extract_summary("nothing useful") == "Summary not available."

    def test_lists_missing(self) -> None:
        assert extract_key_points("nothing") == []
        assert extract_improvements("nothing") == []

    def test_key_points_stop_at_capitalized_line(self) -> None:
        text = "Key points:\n- alpha\n- beta\nNext section"
        assert extract_key_points(text) == ["alpha", "beta"]


class TestEnhancePage:
    @pytest.mark.asyncio
    async def test_success(self) -> None:
        client = make_anthropic_client(make_text_message(json.dumps(ENHANCED)))

        result = await _generator(client).enhance_page(README, "Hello-World")

        assert result.summary == "A demo repository."
        kwargs = client.messages.create.call_args.kwargs
        assert (kwargs["max_tokens"], kwargs["temperature"]) == (2000, 0.3)
        assert "Hello World" in kwargs["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_rate_limit_retry_succeeds(self) -> None:
        client = make_anthropic_client(make_rate_limit_error(), make_text_message(json.dumps(ENHANCED)))
        generator = WikiGenerator(client, cooldown=60, delay=0)

        with patch("repowiki.services.docs.claude_helpers.asyncio.sleep", new=AsyncMock()) as sleep:
            result = await generator.enhance_page(README, "Hello-World")

        sleep.assert_awaited_once_with(60)
        assert result.enhanced_content == "# README\n\nBetter."

    @pytest.mark.asyncio
    async def test_rate_limit_retry_fails(self) -> None:
        client = make_anthropic_client(make_rate_limit_error(), make_rate_limit_error())

        result = await _generator(client).enhance_page(README, "Hello-World")

        assert result.summary == RATE_LIMITED_SUMMARY
        assert result.enhanced_content == "Hello World"
        assert result.key_points == []
        assert client.messages.create.await_count == 2

    @pytest.mark.asyncio
    async def test_other_failure(self) -> None:
        client = make_anthropic_client(RuntimeError("boom"))

        result = await _generator(client).enhance_page(README, "Hello-World")

        assert result.summary == FAILED_SUMMARY
        assert result.enhanced_content == "Hello World"
        assert client.messages.create.await_count == 1


class TestEnhancePages:
    @pytest.mark.asyncio
    async def test_keeps_order_and_original_content(self) -> None:
        pages = [README, Page(title="Intro", content="# Intro", path="docs/intro.md", type="docs")]
        client = make_anthropic_client(
            make_text_message(json.dumps(ENHANCED)), RuntimeError("boom")
        )

        wiki_pages = await _generator(client).enhance_pages(pages, "Hello-World")

        assert [p.title for p in wiki_pages] == ["README", "Intro"]
        assert wiki_pages[1].original_content == "# Intro"
        assert wiki_pages[1].enhanced.enhanced_content == "# Intro"


class TestSummarizeRepository:
    @pytest.mark.asyncio
    async def test_summary(self, metadata) -> None:
        client = make_anthropic_client(make_text_message("Long summary."))

        summary = await _generator(client).summarize_repository(metadata, [README])

        assert summary == "Long summary."
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["max_tokens"] == 800
        assert "Documentation Pages: README" in kwargs["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_failure(self, metadata) -> None:
        client = make_anthropic_client(RuntimeError("boom"))

        summary = await _generator(client).summarize_repository(metadata, [])

        assert summary == REPOSITORY_SUMMARY_UNAVAILABLE
