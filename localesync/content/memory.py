"""
In-memory content repository for development and tests.

Implements every collaborator interface from `localesync.content.base`
without any external services. Node variants are stored as pydantic
records keyed by workspace, dimension value and identifier.
"""

from __future__ import annotations

import copy
import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from localesync.content.base import (
    Context,
    ContextFactory,
    FirstLevelNodeCache,
    InvalidReferenceError,
    Node,
    NodeDataRepository,
    NodeExistsError,
    PublishingService,
)
from localesync.core.events import EventBus, node_adopted, node_published
from localesync.core.models import NodeType
from localesync.core.registry import Registry

logger = logging.getLogger(__name__)


class NodeData(BaseModel):
    """Stored state of one node variant."""

    identifier: str
    workspace_name: str
    dimension_value: str
    node_type: str
    path: str
    properties: dict[str, Any] = Field(default_factory=dict)

    hidden: bool = False
    hidden_in_index: bool = False
    hidden_before_datetime: datetime | None = None
    hidden_after_datetime: datetime | None = None
    index: int | None = None
    removed: bool = False


# =============================================================================
# Repository
# =============================================================================


class InMemoryContentRepository(NodeDataRepository):
    """
    Holds all node variants of all workspaces.

    Every `set_property` call is recorded in `property_writes`, which lets
    tests observe whether a synchronization actually wrote anything.
    """

    def __init__(
        self,
        registry: Registry,
        dimension_name: str = "language",
        event_bus: EventBus | None = None,
    ):
        self.registry = registry
        self.dimension_name = dimension_name
        self.event_bus = event_bus

        self._records: dict[tuple[str, str, str], NodeData] = {}
        self.property_writes: list[tuple[str, str, str]] = []
        self.persist_count = 0

    def add_node(
        self,
        identifier: str,
        path: str,
        node_type: str,
        dimension_value: str,
        properties: dict[str, Any] | None = None,
        workspace_name: str = "live",
        **attributes: Any,
    ) -> NodeData:
        """Store a node variant directly, bypassing contexts."""
        # Fail early on unknown node types
        self.registry.get_node_type(node_type)

        record = NodeData(
            identifier=identifier,
            workspace_name=workspace_name,
            dimension_value=dimension_value,
            node_type=node_type,
            path=path,
            properties=copy.deepcopy(properties or {}),
            **attributes,
        )
        self.store(record)
        return record

    def store(self, record: NodeData) -> None:
        key = (record.workspace_name, record.dimension_value, record.identifier)
        self._records[key] = record

    def get_record(
        self, identifier: str, workspace_name: str, dimension_value: str
    ) -> NodeData | None:
        return self._records.get((workspace_name, dimension_value, identifier))

    def find_record(
        self,
        identifier: str,
        workspace_name: str,
        dimension_values: list[str],
        include_removed: bool = False,
    ) -> NodeData | None:
        """Find a variant, trying dimension values in order."""
        for value in dimension_values:
            record = self.get_record(identifier, workspace_name, value)
            if record is not None and (include_removed or not record.removed):
                return record
        return None

    def find_record_by_path(
        self,
        path: str,
        workspace_name: str,
        dimension_values: list[str],
        include_removed: bool = False,
    ) -> NodeData | None:
        for value in dimension_values:
            for record in self._records.values():
                if (
                    record.path == path
                    and record.workspace_name == workspace_name
                    and record.dimension_value == value
                    and (include_removed or not record.removed)
                ):
                    return record
        return None

    def get_variants(self, identifier: str, workspace_name: str = "live") -> dict[str, NodeData]:
        """All variants of a node in a workspace, keyed by dimension value."""
        return {
            record.dimension_value: record
            for record in self._records.values()
            if record.identifier == identifier and record.workspace_name == workspace_name
        }

    def get_variants_below(self, node: MemoryNode) -> list[NodeData]:
        """Direct children of `node` in its own workspace and dimension value."""
        prefix = node.path.rstrip("/") + "/"
        return [
            record
            for record in self._records.values()
            if record.workspace_name == node.record.workspace_name
            and record.dimension_value == node.record.dimension_value
            and record.path.startswith(prefix)
            and "/" not in record.path[len(prefix):]
        ]

    def move_subtree(self, record: NodeData, new_path: str) -> None:
        """Re-root `record` and its descendants in the same workspace and dimension."""
        old_path = record.path
        for other in self._records.values():
            if (
                other.workspace_name == record.workspace_name
                and other.dimension_value == record.dimension_value
                and other.path.startswith(old_path + "/")
            ):
                other.path = new_path + other.path[len(old_path):]
        record.path = new_path

    def persist_entities(self) -> None:
        self.persist_count += 1

    def context(
        self,
        dimension_value: str,
        fallback: str | None = None,
        workspace_name: str = "live",
    ) -> MemoryContext:
        """Convenience constructor for a context showing everything."""
        values = [dimension_value] + ([fallback] if fallback else [])
        return MemoryContext(
            repository=self,
            workspace_name=workspace_name,
            dimensions={self.dimension_name: values},
            target_dimensions={self.dimension_name: dimension_value},
            invisible_content_shown=True,
            removed_content_shown=True,
            inaccessible_content_shown=True,
        )


# =============================================================================
# Nodes
# =============================================================================


class MemoryNode(Node):
    """A node variant loaded through a `MemoryContext`."""

    def __init__(self, record: NodeData, context: MemoryContext):
        self.record = record
        self._context = context

    @property
    def _repository(self) -> InMemoryContentRepository:
        return self._context.repository

    @property
    def identifier(self) -> str:
        return self.record.identifier

    @property
    def context(self) -> MemoryContext:
        return self._context

    @property
    def path(self) -> str:
        return self.record.path

    @property
    def dimension_value(self) -> str:
        return self.record.dimension_value

    def get_parent(self) -> MemoryNode | None:
        if self.path == self.parent_path:
            return None
        return self._context.get_node_by_path(self.parent_path)

    def move_into(self, reference: Node | None) -> None:
        if reference is None:
            raise InvalidReferenceError(f"Cannot move {self.path} into a missing node")
        if reference.path == self.path or reference.path.startswith(self.path + "/"):
            raise InvalidReferenceError(f"Cannot move {self.path} into itself")

        new_path = reference.path.rstrip("/") + "/" + self.name
        if new_path == self.path:
            return

        occupant = self._repository.find_record_by_path(
            new_path, self.record.workspace_name, [self.record.dimension_value]
        )
        if occupant is not None and occupant.identifier != self.identifier:
            raise NodeExistsError(f"Node {new_path} already exists")

        self._repository.move_subtree(self.record, new_path)
        self._context.first_level_node_cache.flush()

    def get_node_type(self) -> NodeType:
        return self._repository.registry.get_node_type(self.record.node_type)

    def set_node_type(self, node_type: NodeType) -> None:
        self.record.node_type = node_type.name

    def get_properties(self) -> dict[str, Any]:
        # Variants never share mutable values
        return copy.deepcopy(self.record.properties)

    def get_property(self, name: str) -> Any:
        return copy.deepcopy(self.record.properties.get(name))

    def set_property(self, name: str, value: Any) -> None:
        self.record.properties[name] = copy.deepcopy(value)
        self._repository.property_writes.append(
            (self.identifier, self.record.dimension_value, name)
        )

    def is_hidden(self) -> bool:
        return self.record.hidden

    def set_hidden(self, hidden: bool) -> None:
        self.record.hidden = hidden

    def is_hidden_in_index(self) -> bool:
        return self.record.hidden_in_index

    def set_hidden_in_index(self, hidden_in_index: bool) -> None:
        self.record.hidden_in_index = hidden_in_index

    def get_hidden_before_datetime(self) -> datetime | None:
        return self.record.hidden_before_datetime

    def set_hidden_before_datetime(self, value: datetime | None) -> None:
        self.record.hidden_before_datetime = value

    def get_hidden_after_datetime(self) -> datetime | None:
        return self.record.hidden_after_datetime

    def set_hidden_after_datetime(self, value: datetime | None) -> None:
        self.record.hidden_after_datetime = value

    def get_index(self) -> int | None:
        return self.record.index

    def set_index(self, index: int | None) -> None:
        self.record.index = index

    def is_removed(self) -> bool:
        return self.record.removed

    def set_removed(self, removed: bool) -> None:
        self.record.removed = removed


# =============================================================================
# Contexts
# =============================================================================


class MemoryFirstLevelNodeCache(FirstLevelNodeCache):
    """Identifier -> node cache of one context."""

    def __init__(self):
        self._nodes: dict[str, MemoryNode] = {}
        self.flush_count = 0

    def get(self, identifier: str) -> MemoryNode | None:
        return self._nodes.get(identifier)

    def set(self, identifier: str, node: MemoryNode) -> None:
        self._nodes[identifier] = node

    def flush(self) -> None:
        self._nodes.clear()
        self.flush_count += 1


class MemoryContext(Context):
    """A view on one workspace of an `InMemoryContentRepository`."""

    def __init__(
        self,
        repository: InMemoryContentRepository,
        workspace_name: str,
        dimensions: dict[str, list[str]],
        target_dimensions: dict[str, str],
        invisible_content_shown: bool = False,
        removed_content_shown: bool = False,
        inaccessible_content_shown: bool = False,
    ):
        self.repository = repository
        self._workspace_name = workspace_name
        self._dimensions = dimensions
        self._target_dimensions = target_dimensions
        self.invisible_content_shown = invisible_content_shown
        self.removed_content_shown = removed_content_shown
        self.inaccessible_content_shown = inaccessible_content_shown
        self._first_level_node_cache = MemoryFirstLevelNodeCache()

    @property
    def workspace_name(self) -> str:
        return self._workspace_name

    @property
    def dimensions(self) -> dict[str, list[str]]:
        return self._dimensions

    @property
    def target_dimensions(self) -> dict[str, str]:
        return self._target_dimensions

    @property
    def first_level_node_cache(self) -> MemoryFirstLevelNodeCache:
        return self._first_level_node_cache

    @property
    def _dimension_values(self) -> list[str]:
        return self._dimensions.get(self.repository.dimension_name, [])

    def _wrap(self, record: NodeData | None) -> MemoryNode | None:
        if record is None:
            return None
        if record.hidden and not self.invisible_content_shown:
            return None
        return MemoryNode(record, self)

    def get_node_by_identifier(self, identifier: str) -> MemoryNode | None:
        cached = self._first_level_node_cache.get(identifier)
        if cached is not None:
            return cached

        node = self._wrap(self.repository.find_record(
            identifier,
            self._workspace_name,
            self._dimension_values,
            include_removed=self.removed_content_shown,
        ))
        if node is not None:
            self._first_level_node_cache.set(identifier, node)
        return node

    def get_node_by_path(self, path: str) -> MemoryNode | None:
        return self._wrap(self.repository.find_record_by_path(
            path,
            self._workspace_name,
            self._dimension_values,
            include_removed=self.removed_content_shown,
        ))

    def adopt_node(self, node: Node, recursive: bool = False) -> MemoryNode:
        target_value = self._target_dimensions[self.repository.dimension_name]
        record = self.repository.get_record(node.identifier, self._workspace_name, target_value)

        if record is None:
            record = NodeData(
                identifier=node.identifier,
                workspace_name=self._workspace_name,
                dimension_value=target_value,
                node_type=node.get_node_type().name,
                path=node.path,
                properties=copy.deepcopy(node.get_properties()),
                hidden=node.is_hidden(),
                hidden_in_index=node.is_hidden_in_index(),
                hidden_before_datetime=node.get_hidden_before_datetime(),
                hidden_after_datetime=node.get_hidden_after_datetime(),
                index=node.get_index(),
            )
            self.repository.store(record)
            logger.debug(f"Adopted {node.identifier} into {target_value}")

            if self.repository.event_bus is not None:
                self.repository.event_bus.publish(node_adopted(node, self, recursive))

        if recursive and isinstance(node, MemoryNode):
            source_context = node.context
            for child in self.repository.get_variants_below(node):
                self.adopt_node(MemoryNode(child, source_context), recursive=True)

        adopted = MemoryNode(record, self)
        self._first_level_node_cache.set(node.identifier, adopted)
        return adopted


class MemoryContextFactory(ContextFactory):
    """Creates `MemoryContext` instances and remembers each one it created."""

    def __init__(self, repository: InMemoryContentRepository):
        self.repository = repository
        self.created: list[MemoryContext] = []

    def create(
        self,
        workspace_name: str,
        dimensions: dict[str, list[str]],
        target_dimensions: dict[str, str],
        invisible_content_shown: bool = False,
        removed_content_shown: bool = False,
        inaccessible_content_shown: bool = False,
    ) -> MemoryContext:
        context = MemoryContext(
            repository=self.repository,
            workspace_name=workspace_name,
            dimensions=dimensions,
            target_dimensions=target_dimensions,
            invisible_content_shown=invisible_content_shown,
            removed_content_shown=removed_content_shown,
            inaccessible_content_shown=inaccessible_content_shown,
        )
        self.created.append(context)
        return context


# =============================================================================
# Publishing
# =============================================================================


class MemoryPublishingService(PublishingService):
    """
    Copies variants into the live workspace and reports `node.published`.

    Publishing a node that already lives in the target workspace only
    raises the event.
    """

    def __init__(
        self,
        repository: InMemoryContentRepository,
        event_bus: EventBus | None = None,
        target_workspace: str = "live",
    ):
        self.repository = repository
        self.event_bus = event_bus
        self.target_workspace = target_workspace
        self.published: list[Node] = []

    def publish_node(self, node: Node) -> None:
        if isinstance(node, MemoryNode) and node.record.workspace_name != self.target_workspace:
            self.repository.store(node.record.model_copy(
                update={"workspace_name": self.target_workspace},
                deep=True,
            ))

        self.published.append(node)
        if self.event_bus is not None:
            self.event_bus.publish(node_published(node, self.target_workspace))
