"""
Section-specific context hints.

A small rule table maps title keywords to a context builder. Every rule whose
keywords appear in a node title contributes its block to the generation
prompt; a title that matches nothing simply gets no extra hints.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass

from repowiki.services.docs.types import RepositoryMetadata

NOT_SPECIFIED = "Not specified"


def _or_missing(value: str) -> str:
    return value or NOT_SPECIFIED


def _join_or_missing(values: list[str]) -> str:
    return ", ".join(values) or NOT_SPECIFIED


def getting_started_context(metadata: RepositoryMetadata) -> str:
    return "\n".join([
        "GETTING STARTED CONTEXT:",
        f"- Use the actual setup commands: {_or_missing(metadata.setup.install)}",
        "- Reference the actual technology stack for installation requirements",
        f"- Include the actual run command: {_or_missing(metadata.setup.run)}",
        f"- Mention the actual test command: {_or_missing(metadata.setup.test)}",
    ])


def architecture_context(metadata: RepositoryMetadata) -> str:
    return "\n".join([
        "ARCHITECTURE CONTEXT:",
        f"- This repository uses: {_or_missing(metadata.architecture.pattern)}",
        f"- Architecture description: {_or_missing(metadata.architecture.description)}",
        f"- Technology stack: {json.dumps(metadata.tech_stack.to_dict())}",
    ])


def api_context(metadata: RepositoryMetadata) -> str:
    tech = metadata.tech_stack
    return "\n".join([
        "API CONTEXT:",
        f"- Backend technology: {_join_or_missing(tech.backend)}",
        f"- Frontend technology: {_join_or_missing(tech.frontend)}",
        f"- Database: {_join_or_missing(tech.databases)}",
    ])


def deployment_context(metadata: RepositoryMetadata) -> str:
    return "\n".join([
        "DEPLOYMENT CONTEXT:",
        f"- DevOps tools: {_join_or_missing(metadata.tech_stack.devops)}",
        f"- Architecture pattern: {_or_missing(metadata.architecture.pattern)}",
        f"- License: {_or_missing(metadata.license)}",
    ])


@dataclass(frozen=True)
class ContextRule:
    """Adds a context block when any keyword occurs in the node title."""

    keywords: tuple[str, ...]
    build: Callable[[RepositoryMetadata], str]

    def matches(self, title: str) -> bool:
        title_lower = title.lower()
        return any(keyword in title_lower for keyword in self.keywords)


CONTEXT_RULES: list[ContextRule] = [
    ContextRule(("getting started", "installation"), getting_started_context),
    ContextRule(("architecture", "design"), architecture_context),
    ContextRule(("api", "endpoint"), api_context),
    ContextRule(("deployment", "production"), deployment_context),
]


def build_section_context(
    title: str,
    metadata: RepositoryMetadata,
    rules: list[ContextRule] | None = None,
) -> str:
    """Concatenate the context blocks of every rule matching ``title``."""
    active_rules = CONTEXT_RULES if rules is None else rules
    return "\n\n".join(rule.build(metadata) for rule in active_rules if rule.matches(title))
