"""
Cache of access contexts used during synchronization.

Building a context is expensive and the orchestrator asks for the same
(target, source, workspace) combination repeatedly within one event. The
cache lives as long as the service instance that owns it.
"""

from __future__ import annotations

import logging

from localesync.content.base import Context, ContextFactory

logger = logging.getLogger(__name__)

ContextKey = tuple[str, str, str]


class ContextCache:
    """Memoizes contexts by (source locale, target locale, workspace)."""

    def __init__(self, context_factory: ContextFactory, dimension_name: str):
        self.context_factory = context_factory
        self.dimension_name = dimension_name
        self._contexts: dict[ContextKey, Context] = {}

    def get(
        self,
        target_language: str,
        source_language: str | None = None,
        workspace_name: str = "live",
    ) -> Context:
        """
        Get the context writing to `target_language`.

        When `source_language` is given, nodes that only exist in the source
        locale are visible through the context as well. Hidden, removed and
        inaccessible nodes are always visible.
        """
        key = (source_language or "", target_language, workspace_name)
        if key in self._contexts:
            return self._contexts[key]

        language_dimensions = [target_language]
        if source_language is not None:
            language_dimensions.append(source_language)

        logger.debug(f"Creating context for {key}")
        context = self.context_factory.create(
            workspace_name=workspace_name,
            dimensions={self.dimension_name: language_dimensions},
            target_dimensions={self.dimension_name: target_language},
            invisible_content_shown=True,
            removed_content_shown=True,
            inaccessible_content_shown=True,
        )
        self._contexts[key] = context
        return context

    def clear(self) -> None:
        self._contexts.clear()

    def __len__(self) -> int:
        return len(self._contexts)
