"""
LLM client configuration using DSPy.

The provider, model and key come from `Settings.lm_options`.
"""

from __future__ import annotations

from functools import lru_cache

import dspy

from localesync.config import get_settings


@lru_cache
def get_lm(provider: str | None = None, model: str | None = None) -> dspy.LM:
    """Language model for `provider` (default: settings.llm_provider)."""
    return dspy.LM(**get_settings().lm_options(provider, model))


def configure_lm(provider: str | None = None, model: str | None = None) -> None:
    """Configure DSPy with the specified LM as default."""
    dspy.configure(lm=get_lm(provider, model))
