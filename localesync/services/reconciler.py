"""
Convergence of one locale variant toward its source.

The reconciler places the target variant below the matching parent,
copies structural attributes, and writes properties (translated where
eligible) only where they differ. Running it twice against an unchanged
source writes no property the second time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Union

from localesync.content.base import Context, InvalidReferenceError, Node, NodeExistsError
from localesync.i18n.languages import LocaleStrategyResolver
from localesync.i18n.properties import select_properties
from localesync.i18n.translator import TranslationService

logger = logging.getLogger(__name__)


# =============================================================================
# Outcomes
# =============================================================================


@dataclass(frozen=True)
class Moved:
    """The target variant was moved below `parent_path`."""

    parent_path: str


@dataclass(frozen=True)
class Skipped:
    """The target variant was left where it was."""

    reason: str


MoveOutcome = Union[Moved, Skipped]


@dataclass
class ReconcileResult:
    """What a single reconciliation did to the target variant."""

    source_language: str = ""
    target_language: str = ""

    # Set when nothing was done at all
    skipped: str | None = None

    # None when the target already sat below the right parent
    move: MoveOutcome | None = None

    translated: list[str] = field(default_factory=list)
    written: list[str] = field(default_factory=list)


# =============================================================================
# Reconciler
# =============================================================================


class NodeReconciler:
    """Applies one (source variant, target variant) synchronization."""

    def __init__(
        self,
        resolver: LocaleStrategyResolver,
        translation_service: TranslationService,
        dimension_name: str,
        translate_inline_editables: bool = True,
    ):
        self.resolver = resolver
        self.translation_service = translation_service
        self.dimension_name = dimension_name
        self.translate_inline_editables = translate_inline_editables

    def reconcile(
        self,
        source_node: Node,
        target_node: Node,
        context: Context,
        translate: bool = True,
    ) -> ReconcileResult:
        """
        Bring `target_node` in line with `source_node`.

        Args:
            source_node: Variant in the source locale
            target_node: Variant in the target locale
            context: Context of the target locale
            translate: Send eligible text to the translation service; when
                off, translatable properties are left untouched

        Returns:
            ReconcileResult describing the changes

        Raises:
            ConfigurationError: A locale is not a configured preset
            Exception: Whatever the translation service raised; structural
                changes made before the call stay applied, no property is written
        """
        source_preset = source_node.context.target_dimensions[self.dimension_name]
        target_preset = context.target_dimensions[self.dimension_name]

        result = ReconcileResult(
            source_language=self.resolver.language_for(source_preset),
            target_language=self.resolver.language_for(target_preset),
        )

        if not result.source_language or not result.target_language:
            result.skipped = "language code missing"
            return result
        if result.source_language == result.target_language:
            result.skipped = f"source and target are both '{result.source_language}'"
            return result

        target_parent = target_node.get_parent()
        if target_parent is None or source_node.parent_path != target_node.parent_path:
            result.move = self._place(source_node, target_node, context)

        self._sync_attributes(source_node, target_node)

        properties = self._converged_properties(source_node, result, translate)

        for name, value in properties.items():
            if target_node.get_property(name) != value:
                target_node.set_property(name, value)
                result.written.append(name)

        return result

    def _place(self, source_node: Node, target_node: Node, context: Context) -> MoveOutcome:
        """Move the target below the target-locale variant of the source's parent."""
        source_parent = source_node.get_parent()
        if source_parent is None:
            return Skipped("source node has no parent")

        reference = context.get_node_by_identifier(source_parent.identifier)
        try:
            target_node.move_into(reference)
        except (NodeExistsError, InvalidReferenceError) as e:
            logger.debug(f"Not moving {target_node.identifier}: {e}")
            return Skipped(str(e))

        return Moved(parent_path=target_node.parent_path)

    @staticmethod
    def _sync_attributes(source_node: Node, target_node: Node) -> None:
        target_node.set_node_type(source_node.get_node_type())
        target_node.set_hidden(source_node.is_hidden())
        target_node.set_hidden_in_index(source_node.is_hidden_in_index())
        target_node.set_hidden_before_datetime(source_node.get_hidden_before_datetime())
        target_node.set_hidden_after_datetime(source_node.get_hidden_after_datetime())
        target_node.set_index(source_node.get_index())

    def _converged_properties(
        self,
        source_node: Node,
        result: ReconcileResult,
        translate: bool,
    ) -> dict[str, Any]:
        selection = select_properties(
            source_node.get_node_type(),
            source_node.get_properties(),
            self.translate_inline_editables,
        )

        properties = dict(selection.to_copy)
        if translate and selection.to_translate:
            translated = self.translation_service.translate(
                selection.to_translate,
                result.target_language,
                result.source_language,
            )
            properties.update(translated)
            result.translated = sorted(translated)

        return properties
