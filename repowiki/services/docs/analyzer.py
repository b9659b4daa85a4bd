"""
RepositoryAnalyzer - Derives RepositoryMetadata from GitHub data and manifests.

Detects the tech stack, setup commands, business domain and architecture
pattern from root manifest files using simple keyword heuristics, then asks
Claude for a short summary. The summary is best-effort: any failure falls
back to a one-line description built from the heuristics.
"""

import json
import logging
import re
from dataclasses import replace

from anthropic import AsyncAnthropic

from repowiki.config import settings
from repowiki.services.docs.claude_helpers import (
    SUMMARY_MAX_TOKENS,
    SUMMARY_TEMPERATURE,
    extract_text,
)
from repowiki.services.docs.types import (
    Architecture,
    RepositoryMetadata,
    RepositorySnapshot,
    SetupCommands,
    TechStack,
)

logger = logging.getLogger(__name__)

# Repository-name keywords -> business domain, first match wins
BUSINESS_DOMAIN_RULES: list[tuple[tuple[str, ...], str]] = [
    (("web", "frontend", "ui"), "Web Development"),
    (("api", "backend", "server"), "Backend Development"),
    (("mobile", "ios", "android"), "Mobile Development"),
    (("data", "ml", "ai"), "Data Science"),
    (("devops", "infra", "deploy"), "DevOps"),
]
DEFAULT_BUSINESS_DOMAIN = "Software Development"


def _add(items: list[str], *values: str) -> None:
    """Append values that are not already present, preserving order."""
    for value in values:
        if value not in items:
            items.append(value)


def _analyze_package_json(content: str, tech: TechStack, setup: SetupCommands) -> None:
    try:
        pkg = json.loads(content)
    except json.JSONDecodeError:
        logger.debug("package.json is not valid JSON, skipping")
        return
    if not isinstance(pkg, dict):
        return

    deps = {**(pkg.get("dependencies") or {}), **(pkg.get("devDependencies") or {})}
    if not deps:
        return

    _add(tech.languages, "JavaScript", "TypeScript")
    for dep in deps:
        if any(name in dep for name in ("react", "vue", "angular")):
            _add(tech.frontend, dep)
        if any(name in dep for name in ("express", "fastify", "koa")):
            _add(tech.backend, dep)
        if "mongodb" in dep or "mongoose" in dep:
            _add(tech.databases, "MongoDB")
        if "mysql" in dep or "postgresql" in dep:
            _add(tech.databases, dep)

    scripts = pkg.get("scripts")
    if isinstance(scripts, dict) and scripts:
        setup.install = "npm install"
        setup.run = scripts.get("start") or scripts.get("dev") or "npm start"
        setup.test = scripts.get("test") or "npm test"


def _analyze_requirements(content: str, tech: TechStack, setup: SetupCommands) -> None:
    if not content.strip():
        return

    _add(tech.languages, "Python")
    for line in content.splitlines():
        dep = re.split(r"==|>=|<=|~=|\[", line)[0].strip().lower()
        if not dep or dep.startswith("#"):
            continue
        if any(name in dep for name in ("django", "flask", "fastapi")):
            _add(tech.backend, dep)
        if "pandas" in dep or "numpy" in dep:
            _add(tech.databases, "Data Analysis")

    setup.install = "pip install -r requirements.txt"
    setup.run = "python app.py"
    setup.test = "python -m pytest"


def detect_tech_stack(manifests: dict[str, str]) -> tuple[TechStack, SetupCommands]:
    """
    Detect technology stack and setup commands from manifest contents.

    Manifests are applied in a fixed order; later ones override setup
    commands set by earlier ones (a Dockerfile wins over package.json).

    Args:
        manifests: Mapping of manifest filename to file content

    Returns:
        (TechStack, SetupCommands)
    """
    tech = TechStack()
    setup = SetupCommands()

    if "package.json" in manifests:
        _analyze_package_json(manifests["package.json"], tech, setup)

    if "requirements.txt" in manifests:
        _analyze_requirements(manifests["requirements.txt"], tech, setup)

    if "<groupId>" in manifests.get("pom.xml", ""):
        _add(tech.languages, "Java")
        _add(tech.backend, "Maven")
        setup.install = "mvn clean install"
        setup.run = "mvn spring-boot:run"
        setup.test = "mvn test"

    gradle = manifests.get("build.gradle", "")
    if "plugins" in gradle or "dependencies" in gradle:
        _add(tech.languages, "Java", "Kotlin")
        _add(tech.backend, "Gradle")
        setup.install = "./gradlew build"
        setup.run = "./gradlew bootRun"
        setup.test = "./gradlew test"

    if "FROM" in manifests.get("Dockerfile", ""):
        _add(tech.devops, "Docker")
        setup.install = "docker build -t app ."
        setup.run = "docker run -p 3000:3000 app"

    compose = manifests.get("docker-compose.yml", "")
    if "version:" in compose or "services:" in compose:
        _add(tech.devops, "Docker Compose")
        setup.run = "docker-compose up"

    return tech, setup


def guess_business_domain(repo_name: str) -> str:
    """Guess the business domain from keywords in the repository name."""
    name = repo_name.lower()
    for keywords, domain in BUSINESS_DOMAIN_RULES:
        if any(keyword in name for keyword in keywords):
            return domain
    return DEFAULT_BUSINESS_DOMAIN


def guess_architecture(tech: TechStack) -> Architecture:
    """Guess the architecture pattern from the detected stack."""
    if "Docker" in tech.devops or "Docker Compose" in tech.devops:
        return Architecture("Containerized", "Application containerized with Docker")
    if tech.frontend and tech.backend:
        return Architecture(
            "Full-Stack", "Full-stack application with separate frontend and backend"
        )
    if tech.backend:
        return Architecture("Backend Service", "Backend service or API")
    if tech.frontend:
        return Architecture("Frontend Application", "Frontend application or UI component")
    return Architecture(
        "Library/Utility", "A library/utility built with " + ", ".join(tech.languages)
    )


def build_metadata(snapshot: RepositorySnapshot) -> RepositoryMetadata:
    """Derive heuristic metadata for a fetched repository, without a summary."""
    details = snapshot.details
    tech, setup = detect_tech_stack(snapshot.manifests)

    return RepositoryMetadata(
        owner=details.owner,
        name=details.name,
        full_name=details.full_name,
        url=details.url,
        description=details.description or "",
        language=details.language or "",
        stars=details.stars_count,
        forks=details.forks_count,
        license=details.license_name or "Unknown",
        topics=list(details.topics),
        archived=details.archived,
        created_at=details.created_at,
        updated_at=details.updated_at,
        business_domain=guess_business_domain(details.name),
        tech_stack=tech,
        architecture=guess_architecture(tech),
        setup=setup,
    )


class RepositoryAnalyzer:
    """Builds RepositoryMetadata for a fetched repository."""

    def __init__(self, client: AsyncAnthropic, model: str | None = None) -> None:
        self.client = client
        self.model = model or settings.anthropic_model

    async def analyze(self, snapshot: RepositorySnapshot) -> RepositoryMetadata:
        """
        Derive metadata and a summary for the repository.

        Never raises for summary failures; heuristics always succeed.
        """
        metadata = build_metadata(snapshot)
        summary = await self._generate_summary(metadata)
        return replace(metadata, summary=summary)

    async def _generate_summary(self, metadata: RepositoryMetadata) -> str:
        fallback = f"{metadata.full_name} is a {metadata.business_domain.lower()} project."
        prompt = self._build_summary_prompt(metadata)

        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=SUMMARY_MAX_TOKENS,
                temperature=SUMMARY_TEMPERATURE,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            logger.error(f"Error generating summary for {metadata.full_name}: {e}")
            return fallback

        text = extract_text(response)
        return text.strip() if text else fallback

    def _build_summary_prompt(self, metadata: RepositoryMetadata) -> str:
        return "\n".join([
            "Analyze this repository and provide a brief summary:",
            "",
            f"Repository: {metadata.full_name}",
            f"Description: {metadata.description or 'No description'}",
            f"Languages: {', '.join(metadata.tech_stack.languages)}",
            f"Architecture: {metadata.architecture.pattern}",
            f"Business Domain: {metadata.business_domain}",
            "",
            "Provide a 2-3 sentence summary of what this repository does and its main purpose.",
        ])
