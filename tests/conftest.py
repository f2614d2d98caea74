"""Shared fixtures: a small site in an in-memory content repository."""

from datetime import datetime, timezone

import pytest

from localesync.config import Settings
from localesync.content.memory import (
    InMemoryContentRepository,
    MemoryContextFactory,
    MemoryPublishingService,
)
from localesync.core.events import EventBus
from localesync.core.models import DimensionConfig, NodeType
from localesync.core.registry import Registry
from localesync.i18n.languages import LocaleStrategyResolver
from localesync.i18n.translator import TranslationService
from localesync.services.node_translation import NodeTranslationService
from localesync.services.reconciler import NodeReconciler


class FakeTranslationService(TranslationService):
    """Prefixes every text with the target language and records each call."""

    def __init__(self):
        self.calls: list[tuple[dict[str, str], str, str | None]] = []
        self.fail_with: Exception | None = None
        self.on_call = None

    def translate(self, texts, target_language, source_language=None):
        self.calls.append((dict(texts), target_language, source_language))
        if self.on_call is not None:
            self.on_call()
        if self.fail_with is not None:
            raise self.fail_with
        return {name: f"[{target_language}] {text}" for name, text in texts.items()}

    @property
    def target_languages(self) -> list[str]:
        return [target for _, target, _ in self.calls]


DIMENSIONS = {
    "language": {
        "defaultPreset": "en_US",
        "presets": {
            "en_US": {"label": "English"},
            "en_GB": {"label": "British English"},
            "de": {"options": {"translationStrategy": "sync"}},
            "fr_CA": {
                "options": {
                    "translationStrategy": "sync",
                    "translationLanguage": "fr-CA",
                },
            },
            "es": {"options": {"translationStrategy": "once"}},
            "it": {"options": {"translationStrategy": "none"}},
        },
    },
}

NODE_TYPES = {
    "Page": {
        "properties": {
            "title": {"type": "string", "ui": {"inlineEditable": True}},
            "uriPathSegment": {"type": "string"},
            "metaDescription": {"type": "string", "options": {"automaticTranslation": True}},
            "teaser": {
                "type": "string",
                "ui": {"inlineEditable": True},
                "options": {"automaticTranslation": False},
            },
            "publishedAt": {"type": "DateTime"},
            "author": {"type": "reference"},
        },
    },
    "Text": {
        "properties": {
            "text": {"type": "string", "ui": {"inlineEditable": True}},
        },
    },
    "Shortcut": {
        "options": {"automaticTranslation": False},
        "properties": {
            "title": {"type": "string", "ui": {"inlineEditable": True}},
        },
    },
}


@pytest.fixture
def dimension():
    return DimensionConfig.from_dict("language", DIMENSIONS["language"])


@pytest.fixture
def registry(dimension):
    registry = Registry()
    registry.register_dimension(dimension)
    for name, data in NODE_TYPES.items():
        registry.register_node_type(NodeType.from_dict(name, data))
    return registry


@pytest.fixture
def settings():
    return Settings(
        node_translation_enabled=True,
        translate_inline_editables=True,
        language_dimension_name="language",
        live_workspace_name="live",
    )


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def repository(registry, event_bus):
    return InMemoryContentRepository(registry, "language", event_bus)


@pytest.fixture
def translator():
    return FakeTranslationService()


@pytest.fixture
def publishing_service(repository, event_bus):
    return MemoryPublishingService(repository, event_bus)


@pytest.fixture
def context_factory(repository):
    return MemoryContextFactory(repository)


@pytest.fixture
def service(translator, publishing_service, repository, context_factory, registry, settings, event_bus):
    service = NodeTranslationService(
        translation_service=translator,
        publishing_service=publishing_service,
        node_data_repository=repository,
        context_factory=context_factory,
        content_dimensions=registry.dimensions,
        settings=settings,
    )
    service.register(event_bus)
    return service


@pytest.fixture
def reconciler(dimension, translator):
    return NodeReconciler(
        resolver=LocaleStrategyResolver(dimension),
        translation_service=translator,
        dimension_name="language",
        translate_inline_editables=True,
    )


@pytest.fixture
def site(repository):
    """A home page with one sub page and one text element, in en_US only."""
    repository.add_node("home", "/sites/example", "Page", "en_US", {"title": "Home"})
    repository.add_node(
        "about",
        "/sites/example/about",
        "Page",
        "en_US",
        {
            "title": "About us",
            "uriPathSegment": "about",
            "metaDescription": "Who we are",
            "teaser": "Read on",
            "publishedAt": datetime(2024, 5, 1, tzinfo=timezone.utc),
            "author": "person-42",
        },
        index=3,
    )
    repository.add_node(
        "intro",
        "/sites/example/about/intro",
        "Text",
        "en_US",
        {"text": "<p>We build <em>tools</em>.</p>"},
    )
    return repository


@pytest.fixture
def en_context(site):
    return site.context("en_US")
