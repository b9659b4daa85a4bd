"""
StructureSynthesizer - Produces the documentation outline for a repository.

The outline normally comes from an external generation process (the ADocS
structure generator), run as a subprocess with the repository metadata as a
JSON argument. Whatever goes wrong with that process, the synthesizer falls
back to a fixed five-section outline, so the pipeline always has something
to generate.

Two outline shapes are accepted:

    nested:   [{"title": "root", "children": [{"title": ..., "children": [...]}]}]
    sections: {"sections": [{"title": ..., "subsections": ["...", ...]}]}
"""

import asyncio
import json
import logging
import os
import shlex
from typing import Any

from repowiki.config import settings
from repowiki.services.docs.types import Outline, OutlineNode, OutlineShape, RepositoryMetadata

logger = logging.getLogger(__name__)

DEFAULT_SECTIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Getting Started", ("Installation", "Quick Start", "Configuration")),
    ("Architecture", ("System Overview", "Components", "Data Flow")),
    ("Development", ("Setup", "Testing", "Deployment")),
    ("API Reference", ("Endpoints", "Authentication", "Examples")),
    ("Contributing", ("Guidelines", "Code Style", "Pull Requests")),
)


class StructureServiceError(Exception):
    """The external structure generator could not produce an outline."""


def default_outline_structure() -> dict[str, Any]:
    """Build a fresh copy of the default outline in the sections shape."""
    return {
        "sections": [
            {"title": title, "subsections": list(subsections)}
            for title, subsections in DEFAULT_SECTIONS
        ]
    }


def default_outline() -> Outline:
    """The fallback outline. Never fails and is identical on every call."""
    return parse_outline(default_outline_structure())


def _parse_nested_nodes(items: list[Any]) -> list[OutlineNode]:
    nodes: list[OutlineNode] = []
    for item in items:
        if not isinstance(item, dict) or not isinstance(item.get("title"), str):
            logger.debug(f"Skipping outline item without a title: {item!r}")
            continue
        children = item.get("children")
        nodes.append(
            OutlineNode(
                title=item["title"],
                children=_parse_nested_nodes(children) if isinstance(children, list) else [],
            )
        )
    return nodes


def _parse_sections(sections: list[Any]) -> list[OutlineNode]:
    nodes: list[OutlineNode] = []
    for section in sections:
        if not isinstance(section, dict) or not isinstance(section.get("title"), str):
            logger.debug(f"Skipping section without a title: {section!r}")
            continue
        subsections = section.get("subsections")
        children = [
            OutlineNode(title=sub)
            for sub in (subsections if isinstance(subsections, list) else [])
            if isinstance(sub, str)
        ]
        nodes.append(OutlineNode(title=section["title"], children=children))
    return nodes


def parse_outline(raw: Any) -> Outline:
    """
    Detect the outline shape and convert it to OutlineNodes.

    Args:
        raw: Structure in the nested or sections shape

    Returns:
        Outline with the detected shape and the raw structure attached

    Raises:
        StructureServiceError: If the structure matches neither shape or is empty
    """
    if isinstance(raw, list) and raw:
        root = raw[0]
        if isinstance(root, dict) and isinstance(root.get("children"), list):
            nodes = _parse_nested_nodes(root["children"])
            if nodes:
                return Outline(shape=OutlineShape.NESTED, nodes=nodes, raw=raw)

    if isinstance(raw, dict) and isinstance(raw.get("sections"), list):
        nodes = _parse_sections(raw["sections"])
        if nodes:
            return Outline(shape=OutlineShape.SECTIONS, nodes=nodes, raw=raw)

    raise StructureServiceError("Unsupported or empty documentation structure")


class StructureSynthesizer:
    """
    Produces the outline, preferring the external generator.

    Args:
        command: Generator command line; empty means "always use the default outline"
        timeout: Seconds to wait for the generator before killing it
        api_key: Anthropic key handed to the generator through its environment
    """

    def __init__(
        self,
        command: str | None = None,
        timeout: float | None = None,
        api_key: str | None = None,
    ) -> None:
        self.command = settings.structure_service_command if command is None else command
        self.timeout = settings.structure_service_timeout if timeout is None else timeout
        self.api_key = settings.anthropic_api_key if api_key is None else api_key

    async def synthesize(self, metadata: RepositoryMetadata) -> Outline:
        """Return the generated outline, or the default outline on any failure."""
        try:
            raw = await self._run_generator(metadata)
            outline = parse_outline(raw)
        except Exception as e:
            logger.warning(f"Structure generation failed for {metadata.full_name}, using default outline: {e}")
            return default_outline()

        logger.info(
            f"Generated {outline.shape.value} outline with {len(outline.nodes)} top-level sections "
            f"for {metadata.full_name}"
        )
        return outline

    def _build_payload(self, metadata: RepositoryMetadata) -> dict[str, Any]:
        return {
            "github_url": metadata.url,
            "overview": metadata.description,
            "business_domain": metadata.business_domain,
            "architecture": {
                "pattern": metadata.architecture.pattern,
                "description": metadata.architecture.description,
            },
            "tech_stack": metadata.tech_stack.to_dict(),
        }

    async def _run_generator(self, metadata: RepositoryMetadata) -> Any:
        """Run the external generator and return its documentation_structure."""
        if not self.command:
            raise StructureServiceError("No structure generator configured")

        args = [*shlex.split(self.command), "generate", json.dumps(self._build_payload(metadata))]
        env = {**os.environ, "ANTHROPIC_API_KEY": self.api_key}

        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=env,
        )

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise StructureServiceError(f"Structure generator timed out after {self.timeout}s")

        if process.returncode != 0:
            raise StructureServiceError(
                f"Structure generator exited with code {process.returncode}: "
                f"{stderr.decode(errors='replace').strip()[:500]}"
            )

        try:
            result = json.loads(stdout.decode())
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StructureServiceError(f"Structure generator returned invalid JSON: {e}") from e

        if isinstance(result, dict) and "documentation_structure" in result:
            if result.get("success") is False:
                raise StructureServiceError(f"Structure generator reported failure: {result.get('error')}")
            if result.get("output_directory"):
                logger.info(f"Structure generator wrote files to {result['output_directory']}")
            return result["documentation_structure"]

        raise StructureServiceError("Structure generator response has no documentation_structure")
