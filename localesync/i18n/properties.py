"""
Selection of the properties that are sent to translation.

Only plain text is translated. Everything else (references, dates, assets,
empty or markup-only text, properties the node type does not declare) is
copied to the target variant verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from localesync.core.models import NodeType, PropertyDefinition
from localesync.core.utils import strip_tags

TRANSLATABLE_TYPE = "string"


@dataclass
class PropertySelection:
    """Disjoint partition of a node's properties."""

    to_copy: dict[str, Any] = field(default_factory=dict)
    to_translate: dict[str, str] = field(default_factory=dict)


def wants_translation(definition: PropertyDefinition, translate_inline_editables: bool) -> bool:
    """
    Whether a declared property should be translated.

    An explicit per-property flag decides; without one, inline editable
    properties are translated when `translate_inline_editables` is on.
    """
    override = definition.translation_override()
    if override is not None:
        return bool(override)
    return translate_inline_editables and definition.inline_editable


def is_translatable(definition: PropertyDefinition | None, value: Any) -> bool:
    """Whether `value` is text worth sending to the provider at all."""
    if not value or definition is None:
        return False
    if definition.type != TRANSLATABLE_TYPE or not isinstance(value, str):
        return False
    return strip_tags(value).strip() != ""


def select_properties(
    node_type: NodeType,
    properties: dict[str, Any],
    translate_inline_editables: bool = True,
) -> PropertySelection:
    """
    Partition `properties` into verbatim copies and translation candidates.

    Args:
        node_type: Schema of the source node
        properties: Current property values of the source node
        translate_inline_editables: Global default for inline editable text

    Returns:
        A PropertySelection whose two maps share no key
    """
    selection = PropertySelection()

    for name, value in properties.items():
        definition = node_type.get_property(name)
        if is_translatable(definition, value) and wants_translation(
            definition, translate_inline_editables
        ):
            selection.to_translate[name] = value
        else:
            selection.to_copy[name] = value

    return selection
