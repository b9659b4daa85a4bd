"""
SectionContentEnhancer - Generates markdown for every outline node.

Walks the resolved outline depth-first and asks Claude for one page per
node, grounded only in the repository README, metadata and manifests.
Calls are strictly sequential with a short pause between them. A rate-limit
error gets exactly one retry after a cooldown; any other failure produces a
placeholder page so a single bad node never aborts the whole run.
"""

import asyncio
import json
import logging

from anthropic import AsyncAnthropic

from repowiki.config import settings
from repowiki.services.docs.claude_helpers import (
    SECTION_MAX_TOKENS,
    SECTION_TEMPERATURE,
    call_with_rate_limit_retry,
    extract_text,
)
from repowiki.services.docs.outline import iter_entries, resolve_outline
from repowiki.services.docs.section_context import build_section_context
from repowiki.services.docs.types import (
    DocFileType,
    Outline,
    OutlineEntry,
    Page,
    RepositoryMetadata,
)

logger = logging.getLogger(__name__)

README_PROMPT_LIMIT = 2000


def placeholder_content(title: str, section: str) -> str:
    """Markdown used when generation for a node fails."""
    return f"# {title}\n\nContent for {title} in {section} section."


class SectionContentEnhancer:
    """
    Produces one Page per generated outline node.

    Args:
        client: Shared Anthropic client
        model: Model name, defaults to settings.anthropic_model
        cooldown: Seconds to wait before the single rate-limit retry
        delay: Seconds to pause between consecutive generation calls
    """

    def __init__(
        self,
        client: AsyncAnthropic,
        model: str | None = None,
        cooldown: float | None = None,
        delay: float | None = None,
    ) -> None:
        self.client = client
        self.model = model or settings.anthropic_model
        self.cooldown = settings.rate_limit_cooldown_seconds if cooldown is None else cooldown
        self.delay = settings.generation_delay_seconds if delay is None else delay

    async def enhance_outline(
        self,
        outline: Outline,
        metadata: RepositoryMetadata,
        readme: str,
        manifests: dict[str, str],
    ) -> list[Page]:
        """
        Generate a page for every outline node that carries content.

        Returns:
            Pages in depth-first outline order, one per generated node
        """
        pages: list[Page] = []
        entries = [entry for entry in iter_entries(resolve_outline(outline)) if entry.generate]

        for index, entry in enumerate(entries):
            if index > 0 and self.delay > 0:
                await asyncio.sleep(self.delay)
            pages.append(await self._generate_page(entry, metadata, readme, manifests))

        failed = sum(1 for page in pages if page.placeholder)
        logger.info(
            f"Generated {len(pages) - failed}/{len(pages)} sections for {metadata.full_name}"
            + (f" ({failed} placeholders)" if failed else "")
        )
        return pages

    async def _generate_page(
        self,
        entry: OutlineEntry,
        metadata: RepositoryMetadata,
        readme: str,
        manifests: dict[str, str],
    ) -> Page:
        title = entry.node.title
        content, placeholder = await self.generate_section(
            section=entry.section,
            title=title,
            metadata=metadata,
            readme=readme,
            manifests=manifests,
            hint=build_section_context(title, metadata),
        )
        return Page(
            title=title,
            content=content,
            path=entry.path,
            type=DocFileType.DOCS.value,
            section=entry.section,
            subsection=title,
            full_path=entry.breadcrumb,
            placeholder=placeholder,
        )

    async def generate_section(
        self,
        section: str,
        title: str,
        metadata: RepositoryMetadata,
        readme: str,
        manifests: dict[str, str],
        hint: str = "",
    ) -> tuple[str, bool]:
        """
        Generate markdown for a single node.

        Returns:
            (content, placeholder) where placeholder is True if generation failed
        """
        prompt = self._build_prompt(section, title, metadata, readme, manifests, hint)

        async def _call():
            return await self.client.messages.create(
                model=self.model,
                max_tokens=SECTION_MAX_TOKENS,
                temperature=SECTION_TEMPERATURE,
                messages=[{"role": "user", "content": prompt}],
            )

        try:
            response = await call_with_rate_limit_retry(
                _call,
                cooldown=self.cooldown,
                operation_name=f"Section '{title}'",
            )
        except Exception as e:
            logger.error(f"Error generating section '{title}' in '{section}': {e}")
            return placeholder_content(title, section), True

        text = extract_text(response)
        if not text:
            logger.warning(f"Section '{title}' returned no text content")
            return placeholder_content(title, section), True

        return text, False

    def _build_prompt(
        self,
        section: str,
        title: str,
        metadata: RepositoryMetadata,
        readme: str,
        manifests: dict[str, str],
        hint: str,
    ) -> str:
        manifest_block = (
            "\n\n".join(f"--- {name} ---\n{content}" for name, content in manifests.items())
            or "None found"
        )

        lines = [
            f'Generate comprehensive documentation for the "{title}" section '
            f'under "{section}" for the repository {metadata.full_name}.',
            "",
            "REPOSITORY CONTEXT:",
            f"- Name: {metadata.name}",
            f"- Description: {metadata.description or 'No description'}",
            f"- Summary: {metadata.summary or 'Not available'}",
            f"- Primary Language: {metadata.language or 'Unknown'}",
            f"- Business Domain: {metadata.business_domain}",
            f"- Architecture: {metadata.architecture.pattern} - {metadata.architecture.description}",
            f"- Technology Stack: {json.dumps(metadata.tech_stack.to_dict())}",
            f"- Install Command: {metadata.setup.install or 'Not specified'}",
            f"- Run Command: {metadata.setup.run or 'Not specified'}",
            f"- Test Command: {metadata.setup.test or 'Not specified'}",
            f"- License: {metadata.license}",
            "",
            "README CONTENT:",
            readme[:README_PROMPT_LIMIT] if readme else "No README available",
            "",
            "MANIFEST FILES:",
            manifest_block,
        ]

        if hint:
            lines.extend(["", hint])

        lines.extend([
            "",
            "CRITICAL INSTRUCTIONS:",
            "- Use ONLY the information provided above. Do not invent features, "
            "commands, endpoints or configuration that are not supported by it.",
            "- If information for this section is missing, say so briefly instead of guessing.",
            "- Write in markdown, starting with a level-1 heading of the section title.",
            "- Include code blocks only for commands or snippets present in the context.",
            "- Keep it focused on this section; do not repeat the whole README.",
        ])

        return "\n".join(lines)
