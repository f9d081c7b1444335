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

    # Provider API roots (override for self-hosted GitHub Enterprise / GitLab)
    github_api_url: str = "https://api.github.com"
    gitlab_api_url: str = "https://gitlab.com/api/v4"

    # HTTP client
    http_timeout_seconds: float = 30.0
    http_connect_timeout_seconds: float = 5.0

    # Detail backfill: only the first N list items get a per-item detail fetch
    # (stats), the rest keep core fields only.
    enrichment_limit: int = 10
    max_concurrent_detail_fetches: int = 10

    # TTL for cached branch/contributor lists (seconds)
    cache_ttl_seconds: int = 600


settings = Settings()
