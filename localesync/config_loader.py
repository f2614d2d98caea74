"""
Configuration loader.

Loads content dimensions and node types from the YAML files of the
config directory and registers them with the system.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from localesync.config import get_settings
from localesync.core.models import ConfigurationError, DimensionConfig, NodeType
from localesync.core.registry import Registry, get_registry


class ConfigLoader:
    """
    Loads configuration files and registers them with the system.

    Layout of the config directory:

        dimensions.yaml        dimension name -> {defaultPreset, presets}
        node_types/*.yaml      node type name -> {options, properties}
    """

    def __init__(
        self,
        config_dir: Path | str | None = None,
        registry: Registry | None = None,
    ):
        self.registry = registry or get_registry()

        if config_dir is None:
            config_dir = get_settings().config_path
        self.config_dir = Path(config_dir)

    def load_all(self) -> dict[str, int]:
        """
        Load all configuration files.

        Returns:
            Dict with counts of each type loaded
        """
        counts = {
            "dimensions": 0,
            "node_types": 0,
        }

        dimensions_file = self.config_dir / "dimensions.yaml"
        if dimensions_file.exists():
            counts["dimensions"] = len(self.load_dimensions(dimensions_file))

        node_types_dir = self.config_dir / "node_types"
        if node_types_dir.exists():
            for path in sorted(node_types_dir.glob("*.y*ml")):
                counts["node_types"] += len(self.load_node_types(path))

        return counts

    def load_dimensions(self, path: Path | str) -> list[DimensionConfig]:
        """Load content dimensions from YAML."""
        dimensions = [
            DimensionConfig.from_dict(name, data or {})
            for name, data in self._read(path).items()
        ]
        for dimension in dimensions:
            self.registry.register_dimension(dimension)
        return dimensions

    def load_node_types(self, path: Path | str) -> list[NodeType]:
        """Load node types from YAML."""
        node_types = [
            NodeType.from_dict(name, data)
            for name, data in self._read(path).items()
        ]
        for node_type in node_types:
            self.registry.register_node_type(node_type)
        return node_types

    @staticmethod
    def _read(path: Path | str) -> dict:
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path} must contain a mapping")
        return data


def load_config(
    config_dir: Path | str | None = None,
    registry: Registry | None = None,
) -> dict[str, int]:
    """
    Convenience function to load all configuration.

    Returns:
        Dict with counts of each type loaded
    """
    loader = ConfigLoader(config_dir, registry)
    return loader.load_all()
