"""
Locale presets and the language codes sent to the translation provider.

Preset identifiers are internal locale codes such as "en_US". The provider
gets the part before the first underscore ("en") unless the preset names
its own provider code via `options.translationLanguage`.
"""

from __future__ import annotations

from localesync.core.models import DimensionConfig, LanguagePreset, TranslationStrategy


def default_language_code(preset_identifier: str) -> str:
    """Language code derived from a preset identifier alone."""
    return preset_identifier.split("_", 1)[0]


class LocaleStrategyResolver:
    """
    Answers per-preset questions about the language dimension.

    Pure lookups: an unknown preset raises `ConfigurationError`.
    """

    def __init__(self, dimension: DimensionConfig):
        self.dimension = dimension

    @property
    def default_preset(self) -> str:
        return self.dimension.default_preset

    def resolve(self, preset_identifier: str) -> tuple[TranslationStrategy, str | None]:
        """Strategy and provider language override of a preset."""
        preset = self.dimension.get_preset(preset_identifier)
        return preset.translation_strategy, preset.translation_language

    def strategy_for(self, preset_identifier: str) -> TranslationStrategy:
        return self.dimension.get_preset(preset_identifier).translation_strategy

    def language_for(self, preset_identifier: str) -> str:
        """Effective provider language code of a preset."""
        preset = self.dimension.get_preset(preset_identifier)
        if preset.translation_language:
            return preset.translation_language
        return default_language_code(preset_identifier)

    def presets_with_strategy(self, strategy: TranslationStrategy) -> list[LanguagePreset]:
        """Presets using `strategy`, in configuration order."""
        return [
            preset
            for preset in self.dimension.presets.values()
            if preset.translation_strategy == strategy
        ]
