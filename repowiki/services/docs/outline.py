"""
Outline path resolution.

Assigns every outline node its canonical path, section label and breadcrumb
once, so the content enhancer and the navigation assembler always agree on
where a node lives. Sibling slug collisions are disambiguated here.
"""

from collections.abc import Iterator

from repowiki.services.docs.types import Outline, OutlineEntry, OutlineNode, OutlineShape
from repowiki.services.docs.utils import join_breadcrumb, join_path, unique_slugs

TOP_LEVEL_SECTION = "Documentation"


def _resolve_nested(
    nodes: list[OutlineNode],
    parent_path: str = "",
    parent_breadcrumb: str = "",
) -> list[OutlineEntry]:
    entries: list[OutlineEntry] = []
    slugs = unique_slugs([node.title for node in nodes])

    for node, slug in zip(nodes, slugs):
        path = join_path(parent_path, slug)
        breadcrumb = join_breadcrumb(parent_breadcrumb, node.title)
        entries.append(
            OutlineEntry(
                node=node,
                path=path,
                section=parent_breadcrumb or TOP_LEVEL_SECTION,
                breadcrumb=breadcrumb,
                children=_resolve_nested(node.children, path, breadcrumb),
            )
        )

    return entries


def _resolve_sections(nodes: list[OutlineNode]) -> list[OutlineEntry]:
    entries: list[OutlineEntry] = []
    section_slugs = unique_slugs([node.title for node in nodes])

    for section, section_slug in zip(nodes, section_slugs):
        sub_slugs = unique_slugs([child.title for child in section.children])
        children = [
            OutlineEntry(
                node=child,
                path=f"{section_slug}/{sub_slug}.md",
                section=section.title,
                breadcrumb=join_breadcrumb(section.title, child.title),
            )
            for child, sub_slug in zip(section.children, sub_slugs)
        ]
        entries.append(
            OutlineEntry(
                node=section,
                path=section_slug,
                section=section.title,
                breadcrumb=section.title,
                generate=False,
                children=children,
            )
        )

    return entries


def resolve_outline(outline: Outline) -> list[OutlineEntry]:
    """
    Resolve an outline into a tree of OutlineEntry.

    Nested shape: every node is generated; its section label is the parent's
    breadcrumb (``Documentation`` at the top level) and its path is the slug
    chain, e.g. ``architecture/data-flow``.

    Sections shape: section headers are not generated; subsections get
    ``{section-slug}/{subsection-slug}.md`` paths and the section title as
    their section label.
    """
    if outline.shape == OutlineShape.NESTED:
        return _resolve_nested(outline.nodes)
    return _resolve_sections(outline.nodes)


def iter_entries(entries: list[OutlineEntry]) -> Iterator[OutlineEntry]:
    """Yield entries depth-first, each node before its children."""
    for entry in entries:
        yield entry
        yield from iter_entries(entry.children)
