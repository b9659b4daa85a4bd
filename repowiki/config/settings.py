from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # GitHub - optional; anonymous requests get a much lower rate limit
    github_token: str = ""

    # AI / Anthropic
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"

    # ADocS analysis backend (serves previously generated documentation)
    adocs_api_base: str = "http://127.0.0.1:8000"

    # External outline generator, e.g. "python3 /opt/adocs/enhanced_adocs_service.py"
    # Empty string = always use the default outline
    structure_service_command: str = ""
    structure_service_timeout: float = 300.0

    # Section generation pacing (seconds)
    rate_limit_cooldown_seconds: float = 10.0
    generation_delay_seconds: float = 0.5

    # Wiki generation pacing (seconds)
    wiki_rate_limit_cooldown_seconds: float = 60.0
    wiki_generation_delay_seconds: float = 1.0

    # Documentation discovery caps - bound the number of GitHub calls per request
    docs_max_depth: int = 5
    docs_max_files: int = 100

    @property
    def github_authenticated(self) -> bool:
        """Check if a GitHub token is configured."""
        return bool(self.github_token)


settings = Settings()
