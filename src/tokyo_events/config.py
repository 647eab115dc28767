"""Application configuration.

Configuration is loaded from environment variables using pydantic-settings.
All sensitive values (secrets, API keys) should be provided via environment
variables, not config files.

## Required Environment Variables

- SECRET_KEY: Application secret for session signing

## Optional Environment Variables

- PERPLEXITY_API_KEY: API key for the Perplexity event source
- PERPLEXITY_MODEL: Model used for event searches (default: sonar)
- EVENT_CACHE_TTL_SECONDS: How long fetched events stay cached
- LOG_LEVEL: Logging level for the CLI server (default: INFO)
- DEBUG: Enable debug mode and API docs (default: false)

## Example .env file

```
SECRET_KEY=your-secret-key-at-least-32-characters
PERPLEXITY_API_KEY=pplx-...
```
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Tokyo Event Finder"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Security
    secret_key: str = Field(
        ...,
        min_length=32,
        description="Secret key for signing session tokens (min 32 chars)",
    )
    bcrypt_rounds: int = Field(default=10, ge=4, le=16)

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5000"],
        description="CORS allowed origins",
    )

    # Session
    session_cookie_name: str = "tokyo_events_session"
    session_max_age_seconds: int = 60 * 60 * 24 * 7  # 7 days

    # Event source (Perplexity)
    perplexity_api_key: str | None = None
    perplexity_base_url: str = "https://api.perplexity.ai"
    perplexity_model: str = "sonar"
    event_source_timeout_seconds: float = Field(default=60.0, gt=0)
    event_source_max_attempts: int = Field(default=1, ge=1, le=5)

    # Event cache
    event_cache_ttl_seconds: int = Field(default=60 * 60 * 6, ge=1)
    event_cache_max_entries: int = Field(default=5000, ge=1)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lower-case level names from the environment."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("perplexity_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/") if isinstance(v, str) else v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def event_source_configured(self) -> bool:
        """Check if the Perplexity API key is set."""
        return bool(self.perplexity_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
    ```python
    get_settings.cache_clear()
    ```
    """
    return Settings()
