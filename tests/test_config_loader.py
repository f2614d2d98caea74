"""Tests for configuration models and the YAML loader."""

from pathlib import Path

import pytest

from localesync.config_loader import ConfigLoader, load_config
from localesync.core.models import (
    ConfigurationError,
    DimensionConfig,
    NodeType,
    PropertyDefinition,
    TranslationStrategy,
)
from localesync.core.registry import Registry, RegistryError, get_registry, reset_registry

BUNDLED_CONFIG = Path(__file__).parent.parent / "config"


# =============================================================================
# Models
# =============================================================================


class TestDimensionConfig:
    def test_unknown_strategy(self):
        with pytest.raises(ConfigurationError):
            DimensionConfig.from_dict("language", {
                "defaultPreset": "en",
                "presets": {"en": {}, "de": {"options": {"translationStrategy": "always"}}},
            })

    def test_missing_default_preset(self):
        with pytest.raises(ConfigurationError):
            DimensionConfig.from_dict("language", {"presets": {"en": {}}})

    def test_default_preset_must_exist(self):
        with pytest.raises(ConfigurationError):
            DimensionConfig.from_dict("language", {"defaultPreset": "en", "presets": {"de": {}}})

    def test_unknown_preset(self, dimension):
        with pytest.raises(ConfigurationError):
            dimension.get_preset("xx")

    def test_preset_options(self, dimension):
        preset = dimension.get_preset("fr_CA")

        assert preset.translation_strategy == TranslationStrategy.SYNC
        assert preset.translation_language == "fr-CA"


class TestNodeType:
    def test_automatic_translation_defaults_to_enabled(self):
        assert NodeType.from_dict("Page", {}).is_automatic_translation_enabled

    def test_automatic_translation_switched_off(self):
        node_type = NodeType.from_dict("Page", {"options": {"automaticTranslation": False}})

        assert not node_type.is_automatic_translation_enabled

    def test_translation_override_fallback_chain(self):
        assert PropertyDefinition("a", automatic_translation=False, translate_on_adoption=True).translation_override() is False
        assert PropertyDefinition("b", translate_on_adoption=True).translation_override() is True
        assert PropertyDefinition("c").translation_override() is None

    def test_property_parsing(self):
        node_type = NodeType.from_dict("Text", {
            "properties": {"text": {"type": "string", "ui": {"inlineEditable": True}}},
        })

        definition = node_type.get_property("text")
        assert definition.type == "string"
        assert definition.inline_editable


# =============================================================================
# Loader
# =============================================================================


class TestConfigLoader:
    def test_loads_bundled_config(self):
        registry = Registry()

        counts = load_config(BUNDLED_CONFIG, registry)

        assert counts == {"dimensions": 1, "node_types": 4}
        assert registry.get_dimension("language").default_preset == "en_US"
        assert not registry.get_node_type("Site").is_automatic_translation_enabled

    def test_deprecated_option_in_yaml(self):
        registry = Registry()
        load_config(BUNDLED_CONFIG, registry)

        anchor = registry.get_node_type("Headline").get_property("anchor")
        assert anchor.translation_override() is False

    def test_rejects_non_mapping(self, tmp_path):
        (tmp_path / "dimensions.yaml").write_text("- not\n- a mapping\n")

        with pytest.raises(ConfigurationError):
            ConfigLoader(tmp_path, Registry()).load_all()

    def test_empty_directory(self, tmp_path):
        assert ConfigLoader(tmp_path, Registry()).load_all() == {"dimensions": 0, "node_types": 0}

    def test_duplicate_node_type(self, tmp_path):
        node_types = tmp_path / "node_types"
        node_types.mkdir()
        (node_types / "a.yaml").write_text("Page: {}\n")
        (node_types / "b.yaml").write_text("Page: {}\n")

        with pytest.raises(RegistryError):
            ConfigLoader(tmp_path, Registry()).load_all()

    def test_defaults_to_bundled_config_and_default_registry(self):
        reset_registry()
        try:
            load_config()

            assert "Page" in get_registry().list_node_types()
        finally:
            reset_registry()
