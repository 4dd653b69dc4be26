"""Configuration management for postmeta using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings configurable via environment variables and .env file.

    Environment variables must be prefixed with POSTMETA_.
    Example: POSTMETA_POSTS_DIR=content/_posts
    """

    model_config = SettingsConfigDict(  # pyright: ignore[reportUnannotatedClassAttribute]
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTMETA_",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Discovery ---

    POSTS_DIR: Path = Field(
        default=Path.cwd() / "_posts",
        description="Directory scanned for post files.",
    )

    POST_EXTENSIONS: list[str] = Field(
        default=[".md", ".markdown", ".html"],
        description="File extensions treated as posts.",
    )

    @field_validator("POST_EXTENSIONS")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in v]

    # --- Search index ---

    SITE_URL: str = Field(
        default="",
        description="Base URL prefixed to post URLs in the search index.",
    )

    SEARCH_CONTENT_CHARS: int = Field(
        default=2000,
        description="Maximum characters of body text stored per search document.",
    )

    # --- Logging ---

    LOG_LEVEL: str = Field(
        default="WARNING",
        description="Log level for the postmeta loggers.",
    )


# Global settings instance
settings = Settings()
