"""Pydantic schemas for the documentation and wiki generation endpoints.

Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from repowiki.services.docs.types import (
    DocumentationResult,
    Page,
    RepositoryMetadata,
    WikiPage,
    WikiResult,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerateRequest(CamelModel):
    """Body for POST /generate-documentation and POST /generate-wiki."""

    repo_url: str | None = None


class ArchitectureSchema(CamelModel):
    pattern: str
    description: str


class SetupSchema(CamelModel):
    install: str
    run: str
    test: str


class TechStackSchema(CamelModel):
    languages: list[str] = []
    frontend: list[str] = []
    backend: list[str] = []
    databases: list[str] = []
    devops: list[str] = []


class RepositoryStats(CamelModel):
    stars: int
    forks: int
    license: str
    status: str  # "Active" or "Archived"


class RepositorySchema(CamelModel):
    """Repository metadata as returned by generate-documentation."""

    name: str
    description: str
    owner: str
    stars: int
    language: str
    topics: list[str] = []
    created_at: str | None = None
    updated_at: str | None = None
    business_domain: str
    tech_stack: TechStackSchema
    architecture: ArchitectureSchema
    setup: SetupSchema
    metadata: RepositoryStats
    summary: str = ""

    @classmethod
    def from_metadata(cls, metadata: RepositoryMetadata) -> "RepositorySchema":
        return cls(
            name=metadata.name,
            description=metadata.description,
            owner=metadata.owner,
            stars=metadata.stars,
            language=metadata.language,
            topics=list(metadata.topics),
            created_at=metadata.created_at,
            updated_at=metadata.updated_at,
            business_domain=metadata.business_domain,
            tech_stack=TechStackSchema(**metadata.tech_stack.to_dict()),
            architecture=ArchitectureSchema(
                pattern=metadata.architecture.pattern,
                description=metadata.architecture.description,
            ),
            setup=SetupSchema(
                install=metadata.setup.install,
                run=metadata.setup.run,
                test=metadata.setup.test,
            ),
            metadata=RepositoryStats(
                stars=metadata.stars,
                forks=metadata.forks,
                license=metadata.license,
                status=metadata.status,
            ),
            summary=metadata.summary,
        )


class PageSchema(CamelModel):
    title: str
    content: str
    path: str
    type: str
    section: str | None = None
    subsection: str | None = None
    full_path: str | None = None

    @classmethod
    def from_page(cls, page: Page) -> "PageSchema":
        return cls(
            title=page.title,
            content=page.content,
            path=page.path,
            type=page.type,
            section=page.section,
            subsection=page.subsection,
            full_path=page.full_path,
        )


class DocumentationResponse(CamelModel):
    """Response for POST /generate-documentation."""

    repository: RepositorySchema
    documentation_structure: Any  # Outline exactly as synthesized (nested list or {"sections": [...]})
    pages: list[PageSchema]
    navigation: list[dict[str, Any]]

    @classmethod
    def from_result(cls, result: DocumentationResult) -> "DocumentationResponse":
        return cls(
            repository=RepositorySchema.from_metadata(result.repository),
            documentation_structure=result.outline.raw,
            pages=[PageSchema.from_page(page) for page in result.pages],
            navigation=result.navigation,
        )


class WikiRepositorySchema(CamelModel):
    name: str
    description: str
    owner: str
    stars: int
    language: str
    topics: list[str] = []
    created_at: str | None = None
    updated_at: str | None = None
    summary: str = ""


class WikiPageSchema(CamelModel):
    title: str
    content: str
    path: str
    type: str
    original_content: str
    enhanced_content: str
    summary: str
    key_points: list[str] = []
    suggested_improvements: list[str] = []

    @classmethod
    def from_wiki_page(cls, page: WikiPage) -> "WikiPageSchema":
        return cls(
            title=page.title,
            content=page.original_content,
            path=page.path,
            type=page.type,
            original_content=page.original_content,
            enhanced_content=page.enhanced.enhanced_content,
            summary=page.enhanced.summary,
            key_points=page.enhanced.key_points,
            suggested_improvements=page.enhanced.suggested_improvements,
        )


class WikiStructureItem(CamelModel):
    title: str
    path: str


class WikiResponse(CamelModel):
    """Response for POST /generate-wiki."""

    repository: WikiRepositorySchema
    pages: list[WikiPageSchema]
    structure: list[WikiStructureItem]

    @classmethod
    def from_result(cls, result: WikiResult) -> "WikiResponse":
        repo = result.repository
        return cls(
            repository=WikiRepositorySchema(
                name=repo.name,
                description=repo.description,
                owner=repo.owner,
                stars=repo.stars,
                language=repo.language,
                topics=list(repo.topics),
                created_at=repo.created_at,
                updated_at=repo.updated_at,
                summary=repo.summary,
            ),
            pages=[WikiPageSchema.from_wiki_page(page) for page in result.pages],
            structure=[WikiStructureItem(**item) for item in result.structure],
        )
