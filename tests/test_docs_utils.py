"""
Tests for documentation utilities.

Tests cover:
- GitHub URL parsing
- Title derivation from file paths
- Document type inference
- Slugs and sibling collision handling
- Best-effort JSON extraction from model output
"""

import json

import pytest

from repowiki.services.docs.claude_helpers import ModelJSONError, parse_model_json
from repowiki.services.docs.utils import (
    infer_doc_type,
    join_breadcrumb,
    join_path,
    parse_github_url,
    slugify,
    title_from_path,
    unique_slugs,
)


class TestParseGithubUrl:
    """Tests for owner/repo extraction."""

    def test_plain_repository_url(self) -> None:
        assert parse_github_url("https://github.com/octocat/Hello-World") == ("octocat", "Hello-World")

    def test_strips_git_suffix(self) -> None:
        assert parse_github_url("https://github.com/octocat/Hello-World.git") == (
            "octocat",
            "Hello-World",
        )

    def test_ignores_trailing_path_and_query(self) -> None:
        assert parse_github_url("https://github.com/psf/requests/tree/main/docs?x=1") == (
            "psf",
            "requests",
        )

    def test_url_without_scheme(self) -> None:
        assert parse_github_url("github.com/psf/requests") == ("psf", "requests")

    @pytest.mark.parametrize(
        "url",
        ["", "https://github.com/octocat", "https://gitlab.com/a/b", "not a url"],
    )
    def test_rejects_non_repository_urls(self, url: str) -> None:
        assert parse_github_url(url) is None


class TestTitleFromPath:
    """Tests for title derivation."""

    def test_readme_keeps_case(self) -> None:
        assert title_from_path("README.md") == "README"

    def test_kebab_case(self) -> None:
        assert title_from_path("docs/getting-started.md") == "Getting Started"

    def test_snake_case(self) -> None:
        assert title_from_path("guide/api_reference.rst") == "Api Reference"

    def test_other_extensions_are_kept(self) -> None:
        assert title_from_path("examples/demo.py") == "Demo.Py"


class TestInferDocType:
    """Tests for doc type inference priority."""

    def test_readme(self) -> None:
        assert infer_doc_type("docs/README.md") == "readme"

    def test_docs(self) -> None:
        assert infer_doc_type("documentation/setup.md") == "docs"

    def test_examples_are_code(self) -> None:
        assert infer_doc_type("examples/basic.md") == "code"

    def test_other(self) -> None:
        assert infer_doc_type("guide/intro.md") == "other"


class TestSlugs:
    """Tests for slug generation."""

    def test_slugify_basic(self) -> None:
        assert slugify("Getting Started") == "getting-started"

    def test_slugify_drops_punctuation(self) -> None:
        assert slugify("API Reference (v2)!") == "api-reference-v2"

    def test_slugify_empty(self) -> None:
        assert slugify("?!") == "untitled"

    def test_unique_slugs_disambiguates_siblings(self) -> None:
        assert unique_slugs(["Setup", "setup!", "Usage", "SETUP"]) == [
            "setup",
            "setup-2",
            "usage",
            "setup-3",
        ]

    def test_unique_slugs_suffix_does_not_collide_with_existing_title(self) -> None:
        assert unique_slugs(["Setup 2", "Setup", "Setup"]) == ["setup-2", "setup", "setup-3"]

    def test_join_helpers(self) -> None:
        assert join_path("", "intro") == "intro"
        assert join_path("guide", "intro") == "guide/intro"
        assert join_breadcrumb("", "Guide") == "Guide"
        assert join_breadcrumb("Guide", "Intro") == "Guide > Intro"


class TestParseModelJson:
    """Tests for JSON extraction from free-form model output."""

    def test_plain_object(self) -> None:
        assert parse_model_json('{"summary": "ok"}') == {"summary": "ok"}

    def test_markdown_fence(self) -> None:
        text = '```json\n{"summary": "ok", "keyPoints": []}\n```'
        assert parse_model_json(text) == {"summary": "ok", "keyPoints": []}

    def test_object_surrounded_by_prose(self) -> None:
        text = 'Here is the result:\n{"summary": "ok"}\nHope this helps!'
        assert parse_model_json(text) == {"summary": "ok"}

    def test_braces_inside_strings(self) -> None:
        payload = {"enhancedContent": "use `{}` and } carefully", "summary": "s"}
        text = f"Result: {json.dumps(payload)} done"
        assert parse_model_json(text) == payload

    def test_escaped_quotes_inside_strings(self) -> None:
        payload = {"summary": 'He said "{hi}"'}
        assert parse_model_json("x " + json.dumps(payload)) == payload

    def test_skips_invalid_span_and_takes_next_object(self) -> None:
        text = '{not json} and then {"summary": "second"}'
        assert parse_model_json(text) == {"summary": "second"}

    def test_greedy_match_would_fail_but_first_object_wins(self) -> None:
        text = '{"summary": "first"} trailing {"summary": "second"}'
        assert parse_model_json(text) == {"summary": "first"}

    def test_unbalanced_prefix(self) -> None:
        text = '{ oops {"summary": "ok"}'
        assert parse_model_json(text) == {"summary": "ok"}

    def test_top_level_array_is_not_an_object(self) -> None:
        with pytest.raises(ModelJSONError):
            parse_model_json("[1, 2, 3]")

    @pytest.mark.parametrize("text", ["", "   ", "no json here", "{", "}{"])
    def test_raises_when_nothing_parses(self, text: str) -> None:
        with pytest.raises(ModelJSONError):
            parse_model_json(text)
