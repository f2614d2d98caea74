"""
Application configuration.

Loads settings from environment variables with sensible defaults.
Content dimensions and node types live in YAML, see `config_loader`.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # ==========================================================================
    # Node translation
    # ==========================================================================

    node_translation_enabled: bool = True
    translate_inline_editables: bool = True
    language_dimension_name: str = "language"
    live_workspace_name: str = "live"

    # Directory holding dimensions.yaml and node_types/ (empty: bundled config/)
    config_dir: str = ""

    # ==========================================================================
    # AI / LLM
    # ==========================================================================

    # Primary: Gemini (accepts either GOOGLE_API_KEY or GEMINI_API_KEY)
    google_api_key: str = ""
    gemini_api_key: str = ""  # Alias for google_api_key
    gemini_model: str = "gemini-2.0-flash"

    # Fallback providers
    openai_api_key: str = ""
    openai_model: str = "gpt-4-turbo"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-3-opus-20240229"

    # Which provider to use
    llm_provider: str = "gemini"

    translation_max_attempts: int = 3

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def config_path(self) -> Path:
        if self.config_dir:
            return Path(self.config_dir)
        return Path(__file__).parent.parent / "config"

    def lm_options(self, provider: str | None = None, model: str | None = None) -> dict[str, str]:
        """
        Keyword arguments for `dspy.LM` (litellm model string and API key).

        Raises:
            ValueError: Unknown provider, or its API key is not set
        """
        provider = provider or self.llm_provider
        if provider == "gemini":
            api_key = self.google_api_key or self.gemini_api_key
            model = model or self.gemini_model
        elif provider == "openai":
            api_key = self.openai_api_key
            model = model or self.openai_model
        elif provider == "anthropic":
            api_key = self.anthropic_api_key
            model = model or self.anthropic_model
        else:
            raise ValueError(f"Unknown provider: {provider}")

        if not api_key:
            raise ValueError(f"No API key configured for {provider}")
        return {"model": f"{provider}/{model}", "api_key": api_key}

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
