"""
Content repository interfaces.

The hosting repository implements `localesync.content.base`;
`localesync.content.memory` is the in-memory implementation.
"""

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
from localesync.content.memory import (
    InMemoryContentRepository,
    MemoryContext,
    MemoryContextFactory,
    MemoryNode,
    MemoryPublishingService,
    NodeData,
)

__all__ = [
    "Context",
    "ContextFactory",
    "FirstLevelNodeCache",
    "InvalidReferenceError",
    "Node",
    "NodeDataRepository",
    "NodeExistsError",
    "PublishingService",
    "InMemoryContentRepository",
    "MemoryContext",
    "MemoryContextFactory",
    "MemoryNode",
    "MemoryPublishingService",
    "NodeData",
]
