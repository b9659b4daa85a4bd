"""Shared constants and utilities for Claude-powered documentation services.

Centralizes model settings, rate-limit detection, the single-retry rate-limit
backoff and best-effort JSON extraction from free-form model output. These
were previously duplicated across the section enhancer and the wiki generator.
"""

import asyncio
import json
import logging
import re
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from anthropic import RateLimitError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Generation parameters
# ---------------------------------------------------------------------------
SECTION_TEMPERATURE = 0.2
SECTION_MAX_TOKENS = 1500

SUMMARY_TEMPERATURE = 0.3
SUMMARY_MAX_TOKENS = 200

WIKI_TEMPERATURE = 0.3
WIKI_MAX_TOKENS = 2000
WIKI_SUMMARY_MAX_TOKENS = 800

T = TypeVar("T")


class ModelJSONError(ValueError):
    """Model output did not contain a parseable JSON object."""


def is_rate_limited(error: BaseException) -> bool:
    """Check whether an exception signals API throttling (HTTP 429)."""
    if isinstance(error, RateLimitError):
        return True
    return getattr(error, "status_code", None) == 429 or getattr(error, "status", None) == 429


def extract_text(message: Any) -> str | None:
    """Return the text of the first content block, or None if it isn't text."""
    content = getattr(message, "content", None)
    if not content:
        return None

    block = content[0]
    if getattr(block, "type", None) != "text":
        return None
    return block.text


async def call_with_rate_limit_retry(
    fn: Callable[[], Awaitable[T]],
    *,
    cooldown: float,
    operation_name: str = "API call",
) -> T:
    """Execute an async call, retrying exactly once after a rate-limit error.

    Args:
        fn: Zero-arg async callable that performs the API call.
        cooldown: Seconds to wait before the single retry.
        operation_name: Label for log messages (e.g. "Section generation").

    Returns:
        The value returned by *fn*.

    Raises:
        The original exception when it is not a rate-limit error, or the
        retry's exception when the second attempt also fails.
    """
    try:
        return await fn()
    except Exception as e:
        if not is_rate_limited(e):
            raise
        logger.warning(f"{operation_name} rate limited, retrying once in {cooldown}s")

    await asyncio.sleep(cooldown)
    return await fn()


# ---------------------------------------------------------------------------
# JSON extraction
# ---------------------------------------------------------------------------
_FENCE_RE = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?```$", re.DOTALL | re.IGNORECASE)


def _balanced_object_spans(text: str) -> list[str]:
    """Find every top-level balanced ``{...}`` span, left to right.

    String literals are tracked so braces inside quoted values do not
    affect nesting depth.
    """
    spans: list[str] = []
    start = text.find("{")

    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        end = -1

        for i in range(start, len(text)):
            char = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue

            if char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    end = i
                    break

        if end == -1:
            # Unbalanced from here on; try the next opening brace
            start = text.find("{", start + 1)
            continue

        spans.append(text[start : end + 1])
        start = text.find("{", end + 1)

    return spans


def parse_model_json(text: str) -> dict[str, Any]:
    """Extract a JSON object from free-form model output.

    Tries, in order:
    1. The whole response (after stripping whitespace and a markdown fence)
    2. Each balanced ``{...}`` span, left to right; the first that parses
       to an object wins

    Args:
        text: Raw model output

    Returns:
        The parsed JSON object

    Raises:
        ModelJSONError: If no JSON object can be recovered
    """
    if not text or not text.strip():
        raise ModelJSONError("Empty model response")

    stripped = text.strip()
    fence = _FENCE_RE.match(stripped)
    if fence:
        stripped = fence.group(1).strip()

    try:
        parsed = json.loads(stripped)
        if isinstance(parsed, dict):
            return parsed
    except json.JSONDecodeError:
        pass

    for span in _balanced_object_spans(stripped):
        try:
            parsed = json.loads(span)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed

    raise ModelJSONError("No JSON object found in model response")
