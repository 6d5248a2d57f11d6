"""Application configuration using Pydantic Settings with YAML support.

Configuration is layered:
- YAML files organized by domain under config/base/
- Environment-specific overrides under config/environments/{APP_ENV}/
- A .env file and environment variables (secrets, ad-hoc overrides)
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "Recipe Generator Service"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """API configuration settings."""

    v1_prefix: str = "/api/v1"
    cors_origins: list[str] = []


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"
    file: str | None = None


class MetricsSettings(BaseModel):
    """Metrics configuration settings."""

    enabled: bool = True


class ObservabilitySettings(BaseModel):
    """Observability configuration settings."""

    metrics: MetricsSettings = MetricsSettings()


class RateLimitingSettings(BaseModel):
    """Rate limiting configuration.

    ``storage_uri`` selects the counter store shared by all workers:
    ``memory://`` for a single process, ``redis://host:port/db`` otherwise.
    """

    enabled: bool = True
    storage_uri: str = "memory://"
    default: str = "100/minute"
    generate: str = "10/minute"


class LLMSettings(BaseModel):
    """Text-generation backend (OpenAI-compatible chat completions)."""

    enabled: bool = True
    base_url: str = "http://localhost:1234/v1"
    model: str = "local-model"
    timeout: float = 120.0
    max_retries: int = 2
    requests_per_minute: float = 60.0
    temperature: float = 0.7
    top_p: float = 0.9
    max_tokens: int = 2000


class RecipeSettings(BaseModel):
    """Recipe persistence policy shared with the storage layer."""

    duplicate_window_seconds: int = Field(default=300, gt=0)
    duplicate_similarity_threshold: float = Field(default=0.8, gt=0, le=1)
    max_saved_per_user: int = Field(default=100, gt=0)


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Priority (highest to lowest):
    1. Values passed to Settings()
    2. Environment variables
    3. .env file
    4. Environment-specific YAML files (config/environments/{APP_ENV}/)
    5. Base YAML files (config/base/)
    6. Defaults in code

    Nested values use the '__' delimiter, e.g. LLM__BASE_URL=http://gpu:1234/v1.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    logging: LoggingSettings = LoggingSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
    rate_limiting: RateLimitingSettings = RateLimitingSettings()
    llm: LLMSettings = LLMSettings()
    recipes: RecipeSettings = RecipeSettings()

    # Secrets (environment only, never in YAML)
    LLM_API_KEY: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the YAML source below environment variables and .env."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    # =========================================================================
    # Environment Helpers
    # =========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"

    @property
    def is_non_production(self) -> bool:
        """True for local, test and development, where API docs are served."""
        return self.APP_ENV in ("local", "test", "development")


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()
