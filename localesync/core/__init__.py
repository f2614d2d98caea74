"""
Core module - configuration models and infrastructure.

This module contains:
- models: Dimension, preset and node type configuration
- events: Event system for node lifecycle events
- registry: Registry of node types and dimensions
- utils: Shared utility functions
"""

from localesync.core.models import (
    ConfigurationError,
    DimensionConfig,
    LanguagePreset,
    NodeType,
    PropertyDefinition,
    TranslationStrategy,
)

from localesync.core.events import (
    NODE_ADOPTED,
    NODE_PUBLISHED,
    Event,
    EventBus,
    node_adopted,
    node_published,
)

from localesync.core.registry import (
    Registry,
    RegistryError,
    get_registry,
    reset_registry,
)

from localesync.core.utils import (
    strip_tags,
)

__all__ = [
    # Models
    "ConfigurationError",
    "DimensionConfig",
    "LanguagePreset",
    "NodeType",
    "PropertyDefinition",
    "TranslationStrategy",
    # Events
    "NODE_ADOPTED",
    "NODE_PUBLISHED",
    "Event",
    "EventBus",
    "node_adopted",
    "node_published",
    # Registry
    "Registry",
    "RegistryError",
    "get_registry",
    "reset_registry",
    # Utils
    "strip_tags",
]
