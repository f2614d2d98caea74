"""
Internationalization - language resolution, property selection, translation.

Usage:
    from localesync.i18n import LocaleStrategyResolver, select_properties

    resolver = LocaleStrategyResolver(dimension)
    resolver.language_for("en_US")  # -> "en"

    selection = select_properties(node_type, node.get_properties())
    selection.to_translate  # text sent to the TranslationService
"""

from localesync.i18n.languages import (
    LocaleStrategyResolver,
    default_language_code,
)
from localesync.i18n.properties import (
    PropertySelection,
    is_translatable,
    select_properties,
    wants_translation,
)
from localesync.i18n.translator import (
    DSPyTranslationService,
    TranslateProperties,
    TranslationError,
    TranslationService,
)

__all__ = [
    # Languages
    "LocaleStrategyResolver",
    "default_language_code",
    # Property selection
    "PropertySelection",
    "is_translatable",
    "select_properties",
    "wants_translation",
    # Translation
    "DSPyTranslationService",
    "TranslateProperties",
    "TranslationError",
    "TranslationService",
]
