"""
Translation provider boundary.

`TranslationService` is the only network-facing interface of the
synchronization engine. Requests are batched per node: a mapping of
property name to text goes out, the same keys come back translated.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import dspy
from tenacity import Retrying, stop_after_attempt, wait_exponential
from tenacity.wait import wait_base

from localesync.config import get_settings

logger = logging.getLogger(__name__)


class TranslationError(Exception):
    """Raised when the provider's answer cannot be used."""
    pass


class TranslationService(ABC):
    """Batch translator keyed by property name."""

    @abstractmethod
    def translate(
        self,
        texts: dict[str, str],
        target_language: str,
        source_language: str | None = None,
    ) -> dict[str, str]:
        """
        Translate every value of `texts`.

        Args:
            texts: Property name -> text
            target_language: Provider language code to translate into
            source_language: Provider language code of `texts`

        Returns:
            Property name -> translated text, with exactly the keys of `texts`
        """
        pass


# =============================================================================
# DSPy Signatures for Translation
# =============================================================================


class TranslateProperties(dspy.Signature):
    """
    Translate the values of a mapping of content properties.

    Keep the keys unchanged. Keep HTML markup, placeholders and line breaks
    intact and translate only human-readable text.
    """

    texts: dict[str, str] = dspy.InputField(desc="Property name -> text to translate")
    source_language: str = dspy.InputField(desc="Source language code (e.g., 'en')")
    target_language: str = dspy.InputField(desc="Target language code (e.g., 'de')")

    translated_texts: dict[str, str] = dspy.OutputField(
        desc="Property name -> translated text, same keys as the input"
    )


# =============================================================================
# Translator Service
# =============================================================================


class DSPyTranslationService(TranslationService):
    """
    Translation through the configured language model.

    Usage:
        translator = DSPyTranslationService()
        translator.translate({"title": "Hello"}, target_language="de", source_language="en")
        # -> {"title": "Hallo"}

    Failed calls are retried with exponential backoff and re-raised once
    the attempts are used up.
    """

    def __init__(
        self,
        max_attempts: int | None = None,
        wait: wait_base | None = None,
    ):
        self.max_attempts = max_attempts or get_settings().translation_max_attempts
        self.wait = wait or wait_exponential(multiplier=1, min=4, max=10)

        # DSPy module (lazy initialized)
        self._translate_module: dspy.Predict | None = None

    @property
    def translate_module(self) -> dspy.Predict:
        if self._translate_module is None:
            self._translate_module = dspy.Predict(TranslateProperties)
        return self._translate_module

    def translate(
        self,
        texts: dict[str, str],
        target_language: str,
        source_language: str | None = None,
    ) -> dict[str, str]:
        if not texts:
            return {}

        from localesync.services.ai.client import configure_lm
        configure_lm()

        retryer = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self.wait,
            before_sleep=self._log_retry,
            reraise=True,
        )
        return retryer(self._translate_once, texts, target_language, source_language)

    def _translate_once(
        self,
        texts: dict[str, str],
        target_language: str,
        source_language: str | None,
    ) -> dict[str, str]:
        result = self.translate_module(
            texts=texts,
            source_language=source_language or "auto-detect",
            target_language=target_language,
        )

        translated = dict(result.translated_texts or {})
        if set(translated) != set(texts):
            raise TranslationError(
                f"Provider returned keys {sorted(translated)} for {sorted(texts)}"
            )

        return {name: str(value) for name, value in translated.items()}

    @staticmethod
    def _log_retry(retry_state) -> None:
        logger.warning(
            f"Translation attempt {retry_state.attempt_number} failed: "
            f"{retry_state.outcome.exception()}"
        )
