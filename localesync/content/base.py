"""
Content repository abstraction layer.

The synchronization engine never persists anything itself. Every read and
write goes through these interfaces, which the hosting content repository
implements. `localesync.content.memory` provides an in-memory
implementation for development and tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from localesync.core.models import NodeType


class NodeExistsError(Exception):
    """Raised when a node is moved to a location that is already taken."""
    pass


class InvalidReferenceError(Exception):
    """Raised when a node is moved relative to a missing or unusable node."""
    pass


# =============================================================================
# Nodes
# =============================================================================


class Node(ABC):
    """
    A locale variant of a content node.

    All variants of the same conceptual node share one `identifier`; each
    variant has its own properties and structural attributes.
    """

    @property
    @abstractmethod
    def identifier(self) -> str:
        """Stable aggregate identifier, shared by all locale variants."""
        pass

    @property
    @abstractmethod
    def context(self) -> Context:
        """The context this variant was loaded through."""
        pass

    @property
    @abstractmethod
    def path(self) -> str:
        pass

    @property
    def name(self) -> str:
        return self.path.rstrip("/").rsplit("/", 1)[-1]

    @property
    def parent_path(self) -> str:
        parent_path = self.path.rstrip("/").rsplit("/", 1)[0]
        return parent_path or "/"

    @abstractmethod
    def get_parent(self) -> Node | None:
        """Get the parent node visible in this node's context."""
        pass

    @abstractmethod
    def move_into(self, reference: Node | None) -> None:
        """
        Move this node below `reference`.

        Raises:
            NodeExistsError: A node with the same name exists there already
            InvalidReferenceError: `reference` is missing or unusable
        """
        pass

    # -------------------------------------------------------------------------
    # Node type
    # -------------------------------------------------------------------------

    @abstractmethod
    def get_node_type(self) -> NodeType:
        pass

    @abstractmethod
    def set_node_type(self, node_type: NodeType) -> None:
        pass

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @abstractmethod
    def get_properties(self) -> dict[str, Any]:
        """Get a copy of all property values."""
        pass

    @abstractmethod
    def get_property(self, name: str) -> Any:
        pass

    @abstractmethod
    def set_property(self, name: str, value: Any) -> None:
        pass

    # -------------------------------------------------------------------------
    # Structural attributes
    # -------------------------------------------------------------------------

    @abstractmethod
    def is_hidden(self) -> bool:
        pass

    @abstractmethod
    def set_hidden(self, hidden: bool) -> None:
        pass

    @abstractmethod
    def is_hidden_in_index(self) -> bool:
        pass

    @abstractmethod
    def set_hidden_in_index(self, hidden_in_index: bool) -> None:
        pass

    @abstractmethod
    def get_hidden_before_datetime(self) -> datetime | None:
        pass

    @abstractmethod
    def set_hidden_before_datetime(self, value: datetime | None) -> None:
        pass

    @abstractmethod
    def get_hidden_after_datetime(self) -> datetime | None:
        pass

    @abstractmethod
    def set_hidden_after_datetime(self, value: datetime | None) -> None:
        pass

    @abstractmethod
    def get_index(self) -> int | None:
        """Sibling sort position."""
        pass

    @abstractmethod
    def set_index(self, index: int | None) -> None:
        pass

    @abstractmethod
    def is_removed(self) -> bool:
        pass

    @abstractmethod
    def set_removed(self, removed: bool) -> None:
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.identifier}, path={self.path})>"


# =============================================================================
# Contexts
# =============================================================================


class FirstLevelNodeCache(ABC):
    """Per-context cache of already loaded nodes."""

    @abstractmethod
    def flush(self) -> None:
        pass


class Context(ABC):
    """
    Access context: a workspace seen through an ordered list of dimension
    values, with one target value that new variants are created in.
    """

    @property
    @abstractmethod
    def workspace_name(self) -> str:
        pass

    @property
    @abstractmethod
    def dimensions(self) -> dict[str, list[str]]:
        """Dimension name -> visible values, most specific first."""
        pass

    @property
    @abstractmethod
    def target_dimensions(self) -> dict[str, str]:
        """Dimension name -> value new variants are written to."""
        pass

    @property
    @abstractmethod
    def first_level_node_cache(self) -> FirstLevelNodeCache:
        pass

    @abstractmethod
    def get_node_by_identifier(self, identifier: str) -> Node | None:
        pass

    @abstractmethod
    def adopt_node(self, node: Node, recursive: bool = False) -> Node:
        """Return the variant of `node` in this context, creating it if absent."""
        pass


class ContextFactory(ABC):
    """Creates access contexts. Construction is expected to be expensive."""

    @abstractmethod
    def create(
        self,
        workspace_name: str,
        dimensions: dict[str, list[str]],
        target_dimensions: dict[str, str],
        invisible_content_shown: bool = False,
        removed_content_shown: bool = False,
        inaccessible_content_shown: bool = False,
    ) -> Context:
        pass


# =============================================================================
# Publishing and persistence
# =============================================================================


class PublishingService(ABC):
    """Publishes node changes to the live workspace."""

    @abstractmethod
    def publish_node(self, node: Node) -> None:
        pass


class NodeDataRepository(ABC):
    """Flushes pending node changes to durable storage."""

    @abstractmethod
    def persist_entities(self) -> None:
        pass
