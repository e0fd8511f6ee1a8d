"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Self

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rendering.models import DEFAULT_DIRECTOR_NAME, DEFAULT_PLATFORM_NAME


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    environment: str = "development"

    # Base URL printed into verification links and QR codes.
    # Empty means "use the base URL of the incoming request".
    public_base_url: str = ""

    # Branding shown on every certificate
    platform_name: str = DEFAULT_PLATFORM_NAME
    director_name: str = DEFAULT_DIRECTOR_NAME

    # Pin PDF timestamp and document id (byte-identical output, for testing)
    pdf_invariant: bool = False

    # Use "redis://host:port" in production for distributed rate limiting
    # memory:// only works for single-instance deployments
    ratelimit_storage_uri: str = "memory://"

    # Feature flags, production defaults
    debug: bool = False
    enable_docs: bool = False  # Swagger UI at /docs

    @model_validator(mode="after")
    def validate_config(self) -> Self:
        if self.public_base_url and not self.public_base_url.startswith(
            ("http://", "https://")
        ):
            raise ValueError(
                "PUBLIC_BASE_URL must start with http:// or https://, "
                f"got {self.public_base_url!r}"
            )

        if not self.debug and self.environment == "production" and self.pdf_invariant:
            raise ValueError(
                "PDF_INVARIANT must not be enabled in production. "
                "Set DEBUG=true to skip this check."
            )
        return self

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this in tests to reset settings between test cases.
    After clearing, the next get_settings() call will create
    a fresh Settings instance with current environment variables.

    Example:
        def test_something(monkeypatch):
            monkeypatch.setenv("PLATFORM_NAME", "Example Academy")
            clear_settings_cache()
            settings = get_settings()  # Fresh instance
    """
    get_settings.cache_clear()
