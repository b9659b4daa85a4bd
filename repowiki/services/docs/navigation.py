"""
Navigation assembly.

Joins the outline with the generated pages into a tree of plain dicts ready
for JSON serialization. Items never hold a reference to their parent.
"""

import logging
from typing import Any

from repowiki.services.docs.outline import resolve_outline
from repowiki.services.docs.types import NavigationItem, Outline, OutlineEntry, Page

logger = logging.getLogger(__name__)

BACK_REFERENCE_KEYS = frozenset({"parent", "root"})


class _PageIndex:
    """Lookup of pages by path, breadcrumb and (section, subsection)."""

    def __init__(self, pages: list[Page]) -> None:
        self.by_path: dict[str, Page] = {}
        self.by_breadcrumb: dict[str, Page] = {}
        self.by_pair: dict[tuple[str, str], Page] = {}

        for page in pages:
            self.by_path.setdefault(page.path, page)
            if page.full_path:
                self.by_breadcrumb.setdefault(page.full_path, page)
            if page.section and page.subsection:
                self.by_pair.setdefault((page.section, page.subsection), page)

    def find(self, entry: OutlineEntry) -> Page | None:
        return (
            self.by_path.get(entry.path)
            or self.by_breadcrumb.get(entry.breadcrumb)
            or self.by_pair.get((entry.section, entry.node.title))
        )


def _build_item(entry: OutlineEntry, index: _PageIndex) -> NavigationItem:
    page = index.find(entry) if entry.generate else None
    children = [_build_item(child, index) for child in entry.children]

    return NavigationItem(
        title=entry.node.title,
        path=entry.path,
        has_content=page is not None,
        content=page.content if page else None,
        # Section headers always expose a children list, even if empty
        children=children if children or not entry.generate else None,
    )


def build_navigation(outline: Outline, pages: list[Page]) -> list[dict[str, Any]]:
    """
    Build the navigation tree for an outline.

    Produces one item per outline node, preserving depth and order.
    ``hasContent`` is true when a page matches the node by path, by
    breadcrumb, or by (section, subsection), in that order.

    Args:
        outline: The documentation outline
        pages: Pages produced by the content enhancer

    Returns:
        JSON-ready list of navigation dicts
    """
    index = _PageIndex(pages)
    items = [_build_item(entry, index) for entry in resolve_outline(outline)]
    logger.debug(f"Built navigation with {len(items)} top-level items")
    return strip_back_references([item.to_dict() for item in items])


def strip_back_references(value: Any) -> Any:
    """
    Recursively drop ``parent`` and ``root`` keys from dicts and lists.

    Returns a new structure; the input is left untouched. Objects already
    visited on the current branch are replaced with None so a cyclic input
    still yields a finite, serializable result.
    """
    return _strip(value, set())


def _strip(value: Any, active: set[int]) -> Any:
    if not isinstance(value, (dict, list)):
        return value

    marker = id(value)
    if marker in active:
        return None

    active.add(marker)
    try:
        if isinstance(value, dict):
            return {
                key: _strip(item, active)
                for key, item in value.items()
                if key not in BACK_REFERENCE_KEYS
            }
        return [_strip(item, active) for item in value]
    finally:
        active.discard(marker)
