"""
AI services using DSPy.

The language model configured here backs `DSPyTranslationService`.
"""

from localesync.services.ai.client import get_lm, configure_lm

__all__ = [
    "get_lm",
    "configure_lm",
]
