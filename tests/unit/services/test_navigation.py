"""
Tests for navigation assembly.

Tests cover:
- One item per outline node, preserving depth and order, for both shapes
- hasContent/content for generated, placeholder and missing pages
- Matching by path, breadcrumb and (section, subsection)
- Back-reference stripping and JSON safety
"""

import json

from repowiki.services.docs.navigation import build_navigation, strip_back_references
from repowiki.services.docs.structure import default_outline, parse_outline
from repowiki.services.docs.types import Page

NESTED = [
    {
        "title": "root",
        "children": [
            {"title": "Getting Started", "children": []},
            {
                "title": "Architecture",
                "children": [{"title": "Components", "children": [{"title": "Parser"}]}],
            },
        ],
    }
]


def _page(title: str, path: str, content: str, **kwargs) -> Page:
    return Page(title=title, content=content, path=path, **kwargs)


def _shape(items: list[dict]) -> list:
    """Reduce navigation to (title, [children]) tuples."""
    return [(item["title"], _shape(item.get("children") or [])) for item in items]


class TestNestedNavigation:
    def test_mirrors_outline_structure(self) -> None:
        navigation = build_navigation(parse_outline(NESTED), [])

        assert _shape(navigation) == [
            ("Getting Started", []),
            ("Architecture", [("Components", [("Parser", [])])]),
        ]
        assert navigation[0]["path"] == "getting-started"
        assert navigation[1]["children"][0]["children"][0]["path"] == "architecture/components/parser"

    def test_content_attached_by_path(self) -> None:
        pages = [
            _page("Getting Started", "getting-started", "# GS"),
            _page("Parser", "architecture/components/parser", "# Parser"),
        ]

        navigation = build_navigation(parse_outline(NESTED), pages)

        assert navigation[0]["hasContent"] is True
        assert navigation[0]["content"] == "# GS"
        assert navigation[1]["hasContent"] is False
        assert navigation[1]["content"] is None
        parser = navigation[1]["children"][0]["children"][0]
        assert (parser["hasContent"], parser["content"]) == (True, "# Parser")

    def test_leaf_items_have_no_children_key(self) -> None:
        navigation = build_navigation(parse_outline(NESTED), [])
        assert "children" not in navigation[0]
        assert navigation[0]["type"] == "docs"

    def test_placeholder_pages_still_count_as_content(self) -> None:
        pages = [_page("Getting Started", "getting-started", "placeholder", placeholder=True)]

        navigation = build_navigation(parse_outline(NESTED), pages)

        assert navigation[0]["hasContent"] is True
        assert navigation[0]["content"] == "placeholder"


class TestSectionsNavigation:
    def test_one_item_per_section_and_subsection(self) -> None:
        navigation = build_navigation(default_outline(), [])

        assert [item["path"] for item in navigation] == [
            "getting-started",
            "architecture",
            "development",
            "api-reference",
            "contributing",
        ]
        assert all(len(item["children"]) == 3 for item in navigation)
        assert all(item["hasContent"] is False and item["content"] is None for item in navigation)

    def test_section_without_subsections_has_empty_children(self) -> None:
        outline = parse_outline({"sections": [{"title": "Lonely", "subsections": []}]})
        navigation = build_navigation(outline, [])
        assert navigation[0]["children"] == []

    def test_matches_by_section_and_subsection(self) -> None:
        pages = [
            _page(
                "Installation",
                "somewhere/else.md",
                "# Install",
                section="Getting Started",
                subsection="Installation",
            )
        ]

        navigation = build_navigation(default_outline(), pages)

        installation = navigation[0]["children"][0]
        assert installation["path"] == "getting-started/installation.md"
        assert installation["hasContent"] is True
        assert installation["content"] == "# Install"
        assert navigation[0]["children"][1]["hasContent"] is False

    def test_matches_by_breadcrumb(self) -> None:
        pages = [_page("Setup", "x.md", "# Setup", full_path="Development > Setup")]

        navigation = build_navigation(default_outline(), pages)

        setup = navigation[2]["children"][0]
        assert (setup["title"], setup["hasContent"]) == ("Setup", True)


class TestStripBackReferences:
    def test_removes_parent_and_root_keys_recursively(self) -> None:
        data = [
            {
                "title": "a",
                "parent": {"x": 1},
                "children": [{"title": "b", "root": "r", "children": []}],
            }
        ]

        assert strip_back_references(data) == [
            {"title": "a", "children": [{"title": "b", "children": []}]}
        ]

    def test_cyclic_structure_becomes_serializable(self) -> None:
        root = {"title": "root", "children": []}
        child = {"title": "child", "parent": root, "children": []}
        child["self"] = child
        root["children"].append(child)
        root["root"] = root

        cleaned = strip_back_references([root])

        json.dumps(cleaned)
        assert cleaned[0]["children"][0]["title"] == "child"
        assert cleaned[0]["children"][0]["self"] is None

    def test_navigation_output_serializes(self) -> None:
        pages = [_page("Installation", "getting-started/installation.md", "# I")]
        navigation = build_navigation(default_outline(), pages)
        assert json.loads(json.dumps(navigation)) == navigation

    def test_input_is_not_mutated(self) -> None:
        data = {"title": "a", "parent": "p"}
        strip_back_references(data)
        assert data == {"title": "a", "parent": "p"}
