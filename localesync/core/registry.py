"""
Registry for node types and content dimensions.

The registry is the central place where parsed configuration is
registered and looked up by name. Services and the in-memory content
repository resolve node types through it.
"""

from __future__ import annotations

from localesync.core.models import ConfigurationError, DimensionConfig, NodeType


class RegistryError(ConfigurationError):
    """Raised when there's an error with the registry."""
    pass


class Registry:
    """
    Central registry for configuration objects.

    Components register themselves by name; everything that needs a node
    type or a dimension asks the registry instead of re-reading YAML.
    """

    def __init__(self):
        self._node_types: dict[str, NodeType] = {}
        self._dimensions: dict[str, DimensionConfig] = {}

    # =========================================================================
    # Node Types
    # =========================================================================

    def register_node_type(self, node_type: NodeType) -> None:
        """Register a node type by its name."""
        if node_type.name in self._node_types:
            raise RegistryError(f"Node type '{node_type.name}' is already registered")
        self._node_types[node_type.name] = node_type

    def get_node_type(self, name: str) -> NodeType:
        """Get a node type by name."""
        if name not in self._node_types:
            raise RegistryError(f"Node type '{name}' not found")
        return self._node_types[name]

    def list_node_types(self) -> list[str]:
        """List all registered node type names."""
        return list(self._node_types.keys())

    # =========================================================================
    # Dimensions
    # =========================================================================

    def register_dimension(self, dimension: DimensionConfig) -> None:
        """Register a content dimension by its name."""
        if dimension.name in self._dimensions:
            raise RegistryError(f"Dimension '{dimension.name}' is already registered")
        self._dimensions[dimension.name] = dimension

    def get_dimension(self, name: str) -> DimensionConfig:
        """Get a content dimension by name."""
        if name not in self._dimensions:
            raise RegistryError(f"Dimension '{name}' not found")
        return self._dimensions[name]

    @property
    def dimensions(self) -> dict[str, DimensionConfig]:
        return dict(self._dimensions)


# Singleton registry for the application
_default_registry: Registry | None = None


def get_registry() -> Registry:
    """Get the default registry instance."""
    global _default_registry
    if _default_registry is None:
        _default_registry = Registry()
    return _default_registry


def reset_registry() -> None:
    """Reset the default registry (useful for testing)."""
    global _default_registry
    _default_registry = None
