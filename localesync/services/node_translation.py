"""
Node translation service.

Reacts to the content repository's lifecycle events and keeps locale
variants of a node in step with the canonical-locale node:

- `once` presets are translated when their variant is first adopted
- `sync` presets are re-synchronized whenever the canonical node is
  published live, and removed along with it

Publishing a synchronized variant raises another publish event. While a
synchronization pass is running the service's guard is active, and the
middleware installed by `register` drops those events.
"""

from __future__ import annotations

import logging
import warnings
from contextlib import contextmanager
from enum import Enum
from typing import Iterator

from localesync.config import Settings, get_settings
from localesync.content.base import Context, ContextFactory, Node, NodeDataRepository, PublishingService
from localesync.core.events import NODE_ADOPTED, NODE_PUBLISHED, Event, EventBus
from localesync.core.models import ConfigurationError, DimensionConfig, TranslationStrategy
from localesync.i18n.languages import LocaleStrategyResolver
from localesync.i18n.translator import TranslationService
from localesync.services.base import Service
from localesync.services.context_cache import ContextCache
from localesync.services.reconciler import NodeReconciler, ReconcileResult

logger = logging.getLogger(__name__)


class SyncOutcome(str, Enum):
    """What happened to one preset during `sync_node`."""

    SYNCHRONIZED = "synchronized"
    REMOVED = "removed"
    NOT_FOUND = "not_found"  # Source removed, target variant never existed


class SyncGuard:
    """Marks a synchronization pass as in flight. One per service instance."""

    def __init__(self):
        self._active = False

    def is_active(self) -> bool:
        return self._active

    @contextmanager
    def engaged(self) -> Iterator[SyncGuard]:
        previous = self._active
        self._active = True
        try:
            yield self
        finally:
            self._active = previous


class NodeTranslationService(Service):
    """
    Synchronizes and translates locale variants of nodes.

    Usage:
        service = NodeTranslationService(
            translation_service=DSPyTranslationService(),
            publishing_service=publishing_service,
            node_data_repository=repository,
            context_factory=context_factory,
            content_dimensions=registry.dimensions,
        )
        service.register(event_bus)
    """

    service_id = "node_translation"
    subscribes_to = [NODE_ADOPTED, NODE_PUBLISHED]

    def __init__(
        self,
        translation_service: TranslationService,
        publishing_service: PublishingService,
        node_data_repository: NodeDataRepository,
        context_factory: ContextFactory,
        content_dimensions: dict[str, DimensionConfig],
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.translation_service = translation_service
        self.publishing_service = publishing_service
        self.node_data_repository = node_data_repository
        self.content_dimensions = content_dimensions

        self.dimension_name = self.settings.language_dimension_name
        self.guard = SyncGuard()
        self.contexts = ContextCache(context_factory, self.dimension_name)

        self._reconciler: NodeReconciler | None = None

    # =========================================================================
    # Wiring
    # =========================================================================

    @property
    def dimension(self) -> DimensionConfig:
        if self.dimension_name not in self.content_dimensions:
            raise ConfigurationError(
                f"Content dimension '{self.dimension_name}' is not configured"
            )
        return self.content_dimensions[self.dimension_name]

    @property
    def resolver(self) -> LocaleStrategyResolver:
        return LocaleStrategyResolver(self.dimension)

    @property
    def reconciler(self) -> NodeReconciler:
        if self._reconciler is None:
            self._reconciler = NodeReconciler(
                resolver=self.resolver,
                translation_service=self.translation_service,
                dimension_name=self.dimension_name,
                translate_inline_editables=self.settings.translate_inline_editables,
            )
        return self._reconciler

    def is_active(self) -> bool:
        """Whether a synchronization pass is currently running."""
        return self.guard.is_active()

    def register(self, event_bus: EventBus) -> None:
        super().register(event_bus)
        event_bus.add_middleware(self._suppress_while_active)

    def _suppress_while_active(self, event: Event) -> Event | None:
        if self.is_active() and event.event_type in self.subscribes_to:
            logger.debug(f"Ignoring {event.event_type} raised during synchronization")
            return None
        return event

    def handle(self, event: Event) -> list[Event]:
        payload = event.payload
        if event.event_type == NODE_ADOPTED:
            self.after_adopt_node(
                payload["node"], payload["context"], payload.get("recursive", False)
            )
        elif event.event_type == NODE_PUBLISHED:
            self.after_node_publish(payload["node"], payload["workspace_name"])
        return []

    # =========================================================================
    # Lifecycle entry points
    # =========================================================================

    def after_adopt_node(
        self, node: Node, context: Context, recursive: bool = False
    ) -> ReconcileResult | None:
        """
        Translate a freshly adopted variant for `once` presets.

        Args:
            node: The node that was adopted (source variant)
            context: Context of the new variant's locale
            recursive: Whether the adoption included child nodes
        """
        if not self.settings.node_translation_enabled:
            return None
        if not node.get_node_type().is_automatic_translation_enabled:
            return None

        target_preset = self._dimension_value(context)
        if self.resolver.strategy_for(target_preset) != TranslationStrategy.ONCE:
            return None

        with self.guard.engaged():
            adopted_node = context.get_node_by_identifier(node.identifier)
            if adopted_node is None:
                logger.warning(f"Adopted variant of {node.identifier} not found in {target_preset}")
                return None

            result = self.reconciler.reconcile(node, adopted_node, context)

        if result.skipped:
            logger.info(f"Skipped {node.identifier} -> {target_preset}: {result.skipped}")
        else:
            logger.info(f"Translated {node.identifier} once into {target_preset}")
        return result

    def after_node_publish(
        self, node: Node, workspace_name: str
    ) -> dict[str, SyncOutcome] | None:
        """Synchronize `sync` presets after `node` was published live."""
        if not self.settings.node_translation_enabled:
            return None
        if workspace_name != self.settings.live_workspace_name:
            return None

        return self.sync_node(node, workspace_name)

    def sync_node(
        self,
        node: Node,
        workspace_name: str = "live",
        translate: bool = True,
    ) -> dict[str, SyncOutcome]:
        """
        Synchronize every `sync` preset with a canonical-locale node.

        Nodes of other locales are ignored, so edits made directly to a
        dependent variant never fan back out.

        Args:
            node: Source node, expected in the default preset
            workspace_name: Workspace the variants are written to
            translate: Translate eligible properties (otherwise they are left alone)

        Returns:
            Outcome per synchronized preset identifier
        """
        if not node.get_node_type().is_automatic_translation_enabled:
            return {}

        source_preset = self._dimension_value(node.context)
        if source_preset != self.resolver.default_preset:
            return {}

        outcomes: dict[str, SyncOutcome] = {}

        with self.guard.engaged():
            for preset in self.resolver.presets_with_strategy(TranslationStrategy.SYNC):
                if preset.identifier == source_preset:
                    continue

                if not node.is_removed():
                    self._sync_variant(node, preset.identifier, source_preset, workspace_name, translate)
                    outcomes[preset.identifier] = SyncOutcome.SYNCHRONIZED
                else:
                    outcomes[preset.identifier] = self._remove_variant(
                        node, preset.identifier, workspace_name
                    )

                logger.info(f"{node.identifier} -> {preset.identifier}: {outcomes[preset.identifier].value}")

        return outcomes

    def _sync_variant(
        self,
        node: Node,
        target_preset: str,
        source_preset: str,
        workspace_name: str,
        translate: bool,
    ) -> None:
        context = self.get_context(target_preset, source_preset, workspace_name)
        context.first_level_node_cache.flush()

        adopted_node = context.adopt_node(node)
        self.reconciler.reconcile(node, adopted_node, context, translate)

        context.first_level_node_cache.flush()
        self.publishing_service.publish_node(adopted_node)
        self.node_data_repository.persist_entities()

    def _remove_variant(self, node: Node, target_preset: str, workspace_name: str) -> SyncOutcome:
        context = self.get_context(target_preset, None, workspace_name)
        variant = context.get_node_by_identifier(node.identifier)
        if variant is None:
            return SyncOutcome.NOT_FOUND

        variant.set_removed(True)
        return SyncOutcome.REMOVED

    # =========================================================================
    # Contexts
    # =========================================================================

    def get_context(
        self,
        target_language: str,
        source_language: str | None = None,
        workspace_name: str = "live",
    ) -> Context:
        """Cached context for a target preset, optionally showing the source preset."""
        return self.contexts.get(target_language, source_language, workspace_name)

    def get_context_for_language(self, language: str, workspace_name: str = "live") -> Context:
        """Deprecated: use `get_context(language, None, workspace_name)`."""
        warnings.warn(
            "get_context_for_language() is deprecated, use get_context()",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.get_context(language, None, workspace_name)

    def _dimension_value(self, context: Context) -> str:
        value = context.target_dimensions.get(self.dimension_name)
        if value is None:
            raise ConfigurationError(
                f"Context has no value for dimension '{self.dimension_name}'"
            )
        return value
