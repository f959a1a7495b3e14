"""Environment configuration management for the article query service."""

import logging
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from article_query.models.filter_spec import SORTABLE_FIELDS, SortOrder


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Allow extra env vars without error
    )

    # Server configuration
    APP_NAME: str = "Article Query API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Query defaults
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100
    DEFAULT_SORT_BY: str = "createdAt"
    DEFAULT_SORT_ORDER: str = "desc"

    # Optional YAML seed file for the in-memory article source
    ARTICLES_FILE: Optional[str] = None

    # CORS settings
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    CORS_CREDENTIALS: bool = True
    CORS_METHODS: list[str] = ["GET"]
    CORS_HEADERS: list[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @field_validator("MAX_PAGE_SIZE")
    @classmethod
    def validate_max_page_size(cls, v: int) -> int:
        if v < 1 or v > 100:
            raise ValueError("MAX_PAGE_SIZE must be between 1 and 100")
        return v

    @field_validator("DEFAULT_PAGE_SIZE")
    @classmethod
    def validate_default_page_size(cls, v: int) -> int:
        if v < 1 or v > 100:
            raise ValueError("DEFAULT_PAGE_SIZE must be between 1 and 100")
        return v

    @field_validator("DEFAULT_SORT_BY")
    @classmethod
    def validate_default_sort_by(cls, v: str) -> str:
        if v not in SORTABLE_FIELDS:
            raise ValueError(f"DEFAULT_SORT_BY must be one of {', '.join(SORTABLE_FIELDS)}")
        return v

    @field_validator("DEFAULT_SORT_ORDER")
    @classmethod
    def validate_default_sort_order(cls, v: str) -> str:
        allowed = [order.value for order in SortOrder]
        if v.lower() not in allowed:
            raise ValueError(f"DEFAULT_SORT_ORDER must be one of {', '.join(allowed)}")
        return v.lower()


# Global settings instance
settings = Settings()


def get_cors_config() -> dict:
    """Get CORS configuration."""
    return {
        "allow_origins": settings.CORS_ORIGINS,
        "allow_credentials": settings.CORS_CREDENTIALS,
        "allow_methods": settings.CORS_METHODS,
        "allow_headers": settings.CORS_HEADERS,
    }


def configure_logging(level: Optional[str] = None) -> None:
    """Apply LOG_LEVEL / LOG_FORMAT to the root logger."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=settings.LOG_FORMAT,
    )
