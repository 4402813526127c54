"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    recipe_provider_base_url: str = "https://api.edamam.com/api/recipes/v2"
    recipe_provider_app_id: str | None = None
    recipe_provider_app_key: str | None = None
    recipe_provider_timeout_seconds: float = 5.0
    recipe_provider_retry_attempts: int = 1
    recipe_cache_ttl_seconds: int = 3600
    plan_max_attempts: int = 3
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def recipe_provider_enabled(self) -> bool:
        """Return True when provider credentials are configured."""
        return bool(self.recipe_provider_app_id and self.recipe_provider_app_key)
