"""
Core configuration models for localesync.

These models describe the two schemas the synchronization engine reads:
content dimensions (with their locale presets and translation strategies)
and node types (with their property declarations). Both are parsed from
YAML and are read-only at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ConfigurationError(Exception):
    """Raised when dimension or node type configuration is missing or invalid."""
    pass


# =============================================================================
# Enums
# =============================================================================


class TranslationStrategy(str, Enum):
    """How a locale variant tracks its canonical-locale source."""

    NONE = "none"  # Never synchronized
    ONCE = "once"  # Translated once, when the variant is first adopted
    SYNC = "sync"  # Re-synchronized on every publish of the canonical node


# =============================================================================
# Content Dimensions
# =============================================================================


@dataclass
class LanguagePreset:
    """A configured value of the language dimension."""

    identifier: str
    label: str = ""
    translation_strategy: TranslationStrategy = TranslationStrategy.NONE

    # Provider language code, when it differs from the preset identifier
    translation_language: str | None = None

    @classmethod
    def from_dict(cls, identifier: str, data: dict[str, Any] | None) -> LanguagePreset:
        data = data or {}
        options = data.get("options") or {}

        strategy = options.get("translationStrategy")
        try:
            translation_strategy = TranslationStrategy(strategy or TranslationStrategy.NONE)
        except ValueError:
            raise ConfigurationError(
                f"Preset '{identifier}' has unknown translation strategy '{strategy}'"
            )

        return cls(
            identifier=identifier,
            label=data.get("label", ""),
            translation_strategy=translation_strategy,
            translation_language=options.get("translationLanguage"),
        )


@dataclass
class DimensionConfig:
    """
    A named content dimension.

    The default preset is the canonical locale: only edits to nodes in that
    locale are propagated to `sync` presets.
    """

    name: str
    default_preset: str
    presets: dict[str, LanguagePreset] = field(default_factory=dict)

    def get_preset(self, identifier: str) -> LanguagePreset:
        """Get a preset by identifier."""
        if identifier not in self.presets:
            raise ConfigurationError(
                f"Preset '{identifier}' not found in dimension '{self.name}'"
            )
        return self.presets[identifier]

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> DimensionConfig:
        default_preset = data.get("defaultPreset")
        if not default_preset:
            raise ConfigurationError(f"Dimension '{name}' has no defaultPreset")

        presets = {
            identifier: LanguagePreset.from_dict(identifier, preset)
            for identifier, preset in (data.get("presets") or {}).items()
        }
        if default_preset not in presets:
            raise ConfigurationError(
                f"Default preset '{default_preset}' of dimension '{name}' is not a preset"
            )

        return cls(name=name, default_preset=default_preset, presets=presets)


# =============================================================================
# Node Types
# =============================================================================


@dataclass
class PropertyDefinition:
    """Schema declaration of a single node property."""

    name: str
    type: str | None = None
    inline_editable: bool = False
    automatic_translation: bool | None = None

    # @deprecated: renamed to automatic_translation
    translate_on_adoption: bool | None = None

    def translation_override(self) -> bool | None:
        """
        Explicit per-property translation flag, if any.

        The current option name wins over the deprecated one.
        """
        for value in (self.automatic_translation, self.translate_on_adoption):
            if value is not None:
                return value
        return None

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any] | None) -> PropertyDefinition:
        data = data or {}
        ui = data.get("ui") or {}
        options = data.get("options") or {}
        return cls(
            name=name,
            type=data.get("type"),
            inline_editable=bool(ui.get("inlineEditable", False)),
            automatic_translation=options.get("automaticTranslation"),
            translate_on_adoption=options.get("translateOnAdoption"),
        )


@dataclass
class NodeType:
    """A node type schema: property declarations plus type-level options."""

    name: str
    properties: dict[str, PropertyDefinition] = field(default_factory=dict)
    automatic_translation: bool | None = None

    @property
    def is_automatic_translation_enabled(self) -> bool:
        """Node types take part in automatic translation unless switched off."""
        if self.automatic_translation is None:
            return True
        return self.automatic_translation

    def get_property(self, name: str) -> PropertyDefinition | None:
        return self.properties.get(name)

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any] | None) -> NodeType:
        data = data or {}
        options = data.get("options") or {}
        return cls(
            name=name,
            properties={
                prop_name: PropertyDefinition.from_dict(prop_name, prop)
                for prop_name, prop in (data.get("properties") or {}).items()
            },
            automatic_translation=options.get("automaticTranslation"),
        )
