from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings

from src.pipeline_config import EnhancementProvider


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # API Keys
    openai_api_key: str = ""
    anthropic_api_key: str = ""

    # Enhancement providers
    enhancement_provider: EnhancementProvider = EnhancementProvider.OPENAI
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str = "https://api.openai.com/v1"
    anthropic_model: str = "claude-3-haiku-20240307"

    # App config
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def api_key_for(self, provider: EnhancementProvider) -> str:
        """Return the configured credential for ``provider`` (empty if unset)."""
        if provider is EnhancementProvider.ANTHROPIC:
            return self.anthropic_api_key
        return self.openai_api_key

    def model_for(self, provider: EnhancementProvider) -> str:
        """Return the default model name for ``provider``."""
        if provider is EnhancementProvider.ANTHROPIC:
            return self.anthropic_model
        return self.openai_model


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
