"""
WikiGenerator - Turns a repository's own documentation into an enhanced wiki.

Each source page (README first, then discovered doc files) is sent to Claude,
which returns a JSON object with a summary, rewritten content, key points and
suggested improvements. Model output is parsed best-effort: when no valid
object can be recovered the original content is kept and the summary, key
points and improvements are scraped from the text instead.
"""

import asyncio
import logging
import re
from typing import Any

from anthropic import AsyncAnthropic

from repowiki.config import settings
from repowiki.services.docs.claude_helpers import (
    WIKI_MAX_TOKENS,
    WIKI_SUMMARY_MAX_TOKENS,
    WIKI_TEMPERATURE,
    ModelJSONError,
    call_with_rate_limit_retry,
    extract_text,
    parse_model_json,
)
from repowiki.services.docs.types import EnhancedContent, Page, RepositoryMetadata, WikiPage

logger = logging.getLogger(__name__)

RATE_LIMITED_SUMMARY = "Unable to generate summary due to rate limiting."
FAILED_SUMMARY = "Unable to generate summary."
MISSING_SUMMARY = "Summary not available."
REPOSITORY_SUMMARY_UNAVAILABLE = "Unable to generate repository summary at this time."

_SUMMARY_RE = re.compile(r"summary[:\s]+([^.\n]+[.\n])", re.IGNORECASE)
_KEY_POINTS_RE = re.compile(r"key points?[:\s]+([\s\S]*?)(?=\n\n|\n[A-Z]|$)", re.IGNORECASE)
_IMPROVEMENTS_RE = re.compile(
    r"suggested improvements?[:\s]+([\s\S]*?)(?=\n\n|\n[A-Z]|$)", re.IGNORECASE
)
_BULLET_RE = re.compile(r"^[-*•]\s*")


def extract_summary(text: str) -> str:
    """Pull a one-sentence summary out of free-form text."""
    match = _SUMMARY_RE.search(text)
    return match.group(1).strip() if match else MISSING_SUMMARY


def _extract_list(pattern: re.Pattern[str], text: str) -> list[str]:
    match = pattern.search(text)
    if not match:
        return []
    items = (_BULLET_RE.sub("", line).strip() for line in match.group(1).split("\n"))
    return [item for item in items if item]


def extract_key_points(text: str) -> list[str]:
    return _extract_list(_KEY_POINTS_RE, text)


def extract_improvements(text: str) -> list[str]:
    return _extract_list(_IMPROVEMENTS_RE, text)


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def parse_enhancement(text: str, original_content: str) -> EnhancedContent:
    """
    Convert model output into EnhancedContent.

    A JSON object with all four fields wins. Anything else falls back to
    regex extraction from the raw text with the original content kept.
    """
    try:
        data = parse_model_json(text)
    except ModelJSONError as e:
        logger.info(f"Wiki enhancement was not JSON, using text fallback: {e}")
        data = None

    if data is not None:
        summary = data.get("summary")
        enhanced = data.get("enhancedContent")
        key_points = data.get("keyPoints")
        improvements = data.get("suggestedImprovements")

        if (
            isinstance(summary, str)
            and summary
            and isinstance(enhanced, str)
            and enhanced
            and _is_string_list(key_points)
            and _is_string_list(improvements)
        ):
            return EnhancedContent(
                summary=summary,
                enhanced_content=enhanced,
                key_points=key_points,
                suggested_improvements=improvements,
            )

        logger.info(
            "Wiki enhancement JSON missing required fields: "
            f"summary={isinstance(summary, str) and bool(summary)}, "
            f"enhancedContent={isinstance(enhanced, str) and bool(enhanced)}, "
            f"keyPoints={_is_string_list(key_points)}, "
            f"suggestedImprovements={_is_string_list(improvements)}"
        )

    return EnhancedContent(
        summary=extract_summary(text),
        enhanced_content=original_content,
        key_points=extract_key_points(text),
        suggested_improvements=extract_improvements(text),
    )


class WikiGenerator:
    """
    Enhances source pages one at a time.

    Args:
        client: Shared Anthropic client
        model: Model name, defaults to settings.anthropic_model
        cooldown: Seconds to wait before the single rate-limit retry
        delay: Seconds to pause between pages
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
        self.cooldown = settings.wiki_rate_limit_cooldown_seconds if cooldown is None else cooldown
        self.delay = settings.wiki_generation_delay_seconds if delay is None else delay

    async def summarize_repository(self, metadata: RepositoryMetadata, pages: list[Page]) -> str:
        """Long-form technical summary of the repository. Never raises."""
        prompt = self._build_summary_prompt(metadata, pages)

        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=WIKI_SUMMARY_MAX_TOKENS,
                temperature=WIKI_TEMPERATURE,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            logger.error(f"Error generating repository summary for {metadata.full_name}: {e}")
            return REPOSITORY_SUMMARY_UNAVAILABLE

        return extract_text(response) or REPOSITORY_SUMMARY_UNAVAILABLE

    async def enhance_pages(self, pages: list[Page], repo_name: str) -> list[WikiPage]:
        """Enhance every page in order, pausing between calls."""
        wiki_pages: list[WikiPage] = []

        for index, page in enumerate(pages):
            if index > 0 and self.delay > 0:
                await asyncio.sleep(self.delay)
            enhanced = await self.enhance_page(page, repo_name)
            wiki_pages.append(
                WikiPage(
                    title=page.title,
                    path=page.path,
                    type=page.type,
                    original_content=page.content,
                    enhanced=enhanced,
                )
            )

        return wiki_pages

    async def enhance_page(self, page: Page, repo_name: str) -> EnhancedContent:
        """
        Enhance a single page.

        A rate-limit error is retried once after the cooldown. If that retry
        fails too, or any other error occurs, the original content is kept
        with an explanatory summary.
        """
        prompt = self._build_page_prompt(page, repo_name)
        attempts = 0

        async def _call():
            nonlocal attempts
            attempts += 1
            return await self.client.messages.create(
                model=self.model,
                max_tokens=WIKI_MAX_TOKENS,
                temperature=WIKI_TEMPERATURE,
                messages=[{"role": "user", "content": prompt}],
            )

        try:
            response = await call_with_rate_limit_retry(
                _call,
                cooldown=self.cooldown,
                operation_name=f"Wiki page '{page.title}'",
            )
        except Exception as e:
            logger.error(f"Failed to enhance page {page.title}: {e}")
            summary = RATE_LIMITED_SUMMARY if attempts > 1 else FAILED_SUMMARY
            return EnhancedContent(summary=summary, enhanced_content=page.content)

        text = extract_text(response)
        if not text:
            logger.warning(f"Wiki page '{page.title}' returned no text content")
            return EnhancedContent(summary=FAILED_SUMMARY, enhanced_content=page.content)

        return parse_enhancement(text, page.content)

    def _build_summary_prompt(self, metadata: RepositoryMetadata, pages: list[Page]) -> str:
        page_titles = ", ".join(page.title for page in pages)
        return "\n".join([
            "You are analyzing a GitHub repository to write a technical deep-dive summary.",
            "",
            "Repository Information:",
            f"- Name: {metadata.name}",
            f"- Description: {metadata.description or 'No description provided'}",
            f"- Language: {metadata.language or 'Not specified'}",
            f"- Stars: {metadata.stars}",
            f"- Topics: {', '.join(metadata.topics) or 'None'}",
            f"- Documentation Pages: {page_titles}",
            "",
            "Write a 4-5 paragraph technical summary covering the project's purpose, "
            "system architecture, notable implementation choices, performance and "
            "scalability considerations, and development practices.",
            "Base it on the information above; do not invent details.",
        ])

    def _build_page_prompt(self, page: Page, repo_name: str) -> str:
        return "\n".join([
            f'You are a software architect writing wiki documentation for the GitHub repository "{repo_name}".',
            "",
            f'Analyze the following content titled "{page.title}":',
            "",
            page.content,
            "",
            "Respond with ONLY a JSON object, no text before or after it, in this format:",
            "{",
            '  "summary": "3-4 sentence technical summary",',
            f'  "enhancedContent": "# {page.title}\\n\\n... improved, well-structured markdown ...",',
            '  "keyPoints": ["insight 1", "insight 2", "insight 3", "insight 4", "insight 5"],',
            '  "suggestedImprovements": ["improvement 1", "improvement 2", "improvement 3", '
            '"improvement 4", "improvement 5"]',
            "}",
            "",
            "Rules:",
            "1. Use double quotes for all strings and escape quotes inside them",
            "2. Include exactly five key points and five suggested improvements",
            "3. enhancedContent must be markdown grounded in the content above",
        ])
