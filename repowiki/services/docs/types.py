"""
Shared data types for the documentation pipeline.

These dataclasses flow between the fetcher, analyzer, structure synthesizer,
content enhancer and navigation assembler. They live for a single request.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DocFileType(str, Enum):
    """Coarse classification of a discovered documentation file."""

    README = "readme"
    DOCS = "docs"
    CODE = "code"
    OTHER = "other"


class OutlineShape(str, Enum):
    """Wire shapes an outline can arrive in."""

    NESTED = "nested"  # [{"title": ..., "children": [...]}]
    SECTIONS = "sections"  # {"sections": [{"title": ..., "subsections": [str]}]}


@dataclass
class DocFile:
    """A documentation file discovered in the repository."""

    path: str
    content: str
    title: str
    type: DocFileType


@dataclass
class TechStack:
    """Technology stack guessed from manifest files."""

    languages: list[str] = field(default_factory=list)
    frontend: list[str] = field(default_factory=list)
    backend: list[str] = field(default_factory=list)
    databases: list[str] = field(default_factory=list)
    devops: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "languages": list(self.languages),
            "frontend": list(self.frontend),
            "backend": list(self.backend),
            "databases": list(self.databases),
            "devops": list(self.devops),
        }


@dataclass
class Architecture:
    """Architecture pattern guess."""

    pattern: str = ""
    description: str = ""


@dataclass
class SetupCommands:
    """Install/run/test command guesses."""

    install: str = ""
    run: str = ""
    test: str = ""


@dataclass(frozen=True)
class RepositoryMetadata:
    """Everything the pipeline knows about a repository.

    Built once per request by RepositoryAnalyzer and never mutated afterwards.
    """

    owner: str
    name: str
    full_name: str
    url: str
    description: str
    language: str
    stars: int
    forks: int
    license: str
    topics: list[str]
    archived: bool
    created_at: str | None
    updated_at: str | None
    business_domain: str
    tech_stack: TechStack
    architecture: Architecture
    setup: SetupCommands
    summary: str = ""

    @property
    def status(self) -> str:
        return "Archived" if self.archived else "Active"


@dataclass
class RepositorySnapshot:
    """Raw material fetched from GitHub for one repository."""

    owner: str
    repo: str
    readme: str  # Empty string when the repository has no README
    readme_path: str | None
    doc_files: list[DocFile]
    manifests: dict[str, str]  # manifest filename -> content
    details: Any  # GitHubRepo


@dataclass
class OutlineNode:
    """One node of the documentation outline."""

    title: str
    children: list["OutlineNode"] = field(default_factory=list)


@dataclass
class Outline:
    """A documentation outline plus the shape it was received in.

    ``raw`` keeps the structure exactly as produced so it can be echoed back
    to the client as ``documentationStructure``.
    """

    shape: OutlineShape
    nodes: list[OutlineNode]
    raw: Any


@dataclass
class OutlineEntry:
    """An outline node resolved to its position in the tree."""

    node: OutlineNode
    path: str  # Unique slug chain, e.g. "architecture/data-flow"
    section: str  # Label of the enclosing section
    breadcrumb: str  # ">"-joined chain of ancestor titles
    generate: bool = True  # False for section headers of the sections shape
    children: list["OutlineEntry"] = field(default_factory=list)


@dataclass
class Page:
    """Markdown content bound to one outline node (or one source file)."""

    title: str
    content: str
    path: str
    type: str = DocFileType.DOCS.value
    section: str | None = None
    subsection: str | None = None
    full_path: str | None = None  # Breadcrumb title
    placeholder: bool = False  # True when generation failed and placeholder text was used


@dataclass
class NavigationItem:
    """Navigation tree node with page content inlined."""

    title: str
    path: str
    type: str = DocFileType.DOCS.value
    has_content: bool = False
    content: str | None = None
    children: list["NavigationItem"] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "title": self.title,
            "path": self.path,
            "type": self.type,
            "hasContent": self.has_content,
            "content": self.content,
        }
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@dataclass
class EnhancedContent:
    """Structured result of enhancing one wiki page."""

    summary: str
    enhanced_content: str
    key_points: list[str] = field(default_factory=list)
    suggested_improvements: list[str] = field(default_factory=list)


@dataclass
class WikiPage:
    """A source documentation page with its enhancement attached."""

    title: str
    path: str
    type: str
    original_content: str
    enhanced: EnhancedContent


@dataclass
class DocumentationResult:
    """Complete result of the generate-documentation pipeline."""

    repository: RepositoryMetadata
    outline: Outline
    pages: list[Page]
    navigation: list[dict[str, Any]]


@dataclass
class WikiResult:
    """Complete result of the generate-wiki pipeline."""

    repository: RepositoryMetadata
    pages: list[WikiPage]
    structure: list[dict[str, str]]
