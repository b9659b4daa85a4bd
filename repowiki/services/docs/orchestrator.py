"""
Pipelines - Coordinate the documentation and wiki generation flows.

Documentation flow:
    Fetch repository → Analyze metadata → Synthesize outline →
    Generate a page per outline node → Assemble navigation

Wiki flow:
    Fetch repository → Build metadata → Summarize repository →
    Enhance each source page

Both pipelines live for exactly one request. Collaborators are injected so
tests can replace any stage.
"""

import logging
from dataclasses import replace

from anthropic import AsyncAnthropic

from repowiki.services.docs.analyzer import RepositoryAnalyzer, build_metadata
from repowiki.services.docs.enhancer import SectionContentEnhancer
from repowiki.services.docs.fetcher import RepositoryFetcher, source_pages
from repowiki.services.docs.navigation import build_navigation
from repowiki.services.docs.structure import StructureSynthesizer
from repowiki.services.docs.types import DocumentationResult, WikiResult
from repowiki.services.docs.wiki import WikiGenerator
from repowiki.services.github import GitHubReadOperations

logger = logging.getLogger(__name__)


class DocumentationPipeline:
    """
    Runs the generate-documentation flow for one repository.

    Only a failure to read the repository itself propagates. Every later
    stage degrades on its own: the synthesizer falls back to the default
    outline and the enhancer substitutes placeholders.
    """

    def __init__(
        self,
        fetcher: RepositoryFetcher,
        analyzer: RepositoryAnalyzer,
        synthesizer: StructureSynthesizer,
        enhancer: SectionContentEnhancer,
    ) -> None:
        self.fetcher = fetcher
        self.analyzer = analyzer
        self.synthesizer = synthesizer
        self.enhancer = enhancer

    @classmethod
    def create(cls, github: GitHubReadOperations, anthropic: AsyncAnthropic) -> "DocumentationPipeline":
        """Wire the default stages around shared clients."""
        return cls(
            fetcher=RepositoryFetcher(github),
            analyzer=RepositoryAnalyzer(anthropic),
            synthesizer=StructureSynthesizer(),
            enhancer=SectionContentEnhancer(anthropic),
        )

    async def run(self, owner: str, repo: str) -> DocumentationResult:
        snapshot = await self.fetcher.fetch(owner, repo)
        metadata = await self.analyzer.analyze(snapshot)

        outline = await self.synthesizer.synthesize(metadata)
        generated = await self.enhancer.enhance_outline(
            outline, metadata, snapshot.readme, snapshot.manifests
        )
        navigation = build_navigation(outline, generated)

        pages = source_pages(snapshot) + generated
        logger.info(
            f"Documentation for {metadata.full_name}: {len(pages)} pages "
            f"({len(generated)} generated), {len(navigation)} navigation sections"
        )

        return DocumentationResult(
            repository=metadata,
            outline=outline,
            pages=pages,
            navigation=navigation,
        )


class WikiPipeline:
    """Runs the generate-wiki flow for one repository."""

    def __init__(self, fetcher: RepositoryFetcher, generator: WikiGenerator) -> None:
        self.fetcher = fetcher
        self.generator = generator

    @classmethod
    def create(cls, github: GitHubReadOperations, anthropic: AsyncAnthropic) -> "WikiPipeline":
        return cls(fetcher=RepositoryFetcher(github), generator=WikiGenerator(anthropic))

    async def run(self, owner: str, repo: str) -> WikiResult:
        snapshot = await self.fetcher.fetch(owner, repo)
        pages = source_pages(snapshot)
        metadata = build_metadata(snapshot)

        summary = await self.generator.summarize_repository(metadata, pages)
        wiki_pages = await self.generator.enhance_pages(pages, metadata.name)

        logger.info(f"Wiki for {metadata.full_name}: {len(wiki_pages)} pages")
        return WikiResult(
            repository=replace(metadata, summary=summary),
            pages=wiki_pages,
            structure=[{"title": page.title, "path": page.path} for page in pages],
        )
