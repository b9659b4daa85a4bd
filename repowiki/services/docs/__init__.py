"""
Documentation services.

Fetches a GitHub repository, derives metadata, synthesizes an outline,
generates page content with Claude and assembles the navigation tree.
"""

from repowiki.services.docs.analyzer import RepositoryAnalyzer, build_metadata
from repowiki.services.docs.enhancer import SectionContentEnhancer
from repowiki.services.docs.fetcher import RepositoryFetcher, source_pages
from repowiki.services.docs.navigation import build_navigation, strip_back_references
from repowiki.services.docs.orchestrator import DocumentationPipeline, WikiPipeline
from repowiki.services.docs.structure import StructureSynthesizer, default_outline
from repowiki.services.docs.wiki import WikiGenerator

__all__ = [
    "DocumentationPipeline",
    "RepositoryAnalyzer",
    "RepositoryFetcher",
    "SectionContentEnhancer",
    "StructureSynthesizer",
    "WikiGenerator",
    "WikiPipeline",
    "build_metadata",
    "build_navigation",
    "default_outline",
    "source_pages",
    "strip_back_references",
]
