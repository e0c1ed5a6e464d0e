"""
Application configuration using Pydantic Settings.
All configuration is loaded from environment variables.
"""
from functools import lru_cache
from typing import List

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Company Directory"
    app_version: str = "1.3.0"
    debug: bool = False
    environment: str = "development"  # development, staging, production
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api/v1"
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Listing store
    database_url: str = "sqlite+aiosqlite:///./company_directory.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_echo: bool = False
    store_query_timeout_seconds: float = 5.0

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_storage_uri: str = "memory://"

    # Site
    site_url: str = "http://localhost:8000"
    site_name: str = "Job Board"
    site_description: str = ""
    title_separator: str = "-"

    # Company profiles
    company_slug: str = "company"
    directory_path: str = "/companies"
    permalinks_enabled: bool = True
    trailing_slash: bool = True
    show_letters: bool = True
    hide_filled_positions: bool = False
    listings_per_page: int = 20

    @model_validator(mode="after")
    def _normalize_site_routing(self) -> "Settings":
        """Reject slugs that cannot live in a single path segment."""
        slug = self.company_slug
        if not slug or "/" in slug or any(ch.isspace() for ch in slug):
            raise ValueError(
                f"company_slug must be a non-empty single path segment, got {slug!r}"
            )
        self.site_url = self.site_url.rstrip("/")
        if not self.directory_path.startswith("/"):
            self.directory_path = "/" + self.directory_path
        return self


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
