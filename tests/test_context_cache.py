"""Tests for the per-service context cache."""

import pytest

from localesync.services.context_cache import ContextCache


@pytest.fixture
def cache(context_factory):
    return ContextCache(context_factory, "language")


class TestContextCache:
    def test_same_key_returns_same_context(self, cache, context_factory):
        first = cache.get("de", "en_US", "live")
        second = cache.get("de", "en_US", "live")

        assert first is second
        assert len(context_factory.created) == 1

    def test_different_workspace_gets_own_context(self, cache):
        live = cache.get("de", "en_US", "live")
        draft = cache.get("de", "en_US", "user-admin")

        assert live is not draft
        assert draft.workspace_name == "user-admin"

    def test_source_is_part_of_the_key(self, cache):
        with_source = cache.get("de", "en_US")
        without_source = cache.get("de")

        assert with_source is not without_source
        assert len(cache) == 2

    def test_no_collision_between_concatenations(self, cache):
        # "a" + "bc" and "ab" + "c" concatenate to the same string
        first = cache.get("bc", "a", "live")
        second = cache.get("c", "ab", "live")

        assert first is not second

    def test_context_shows_source_as_fallback(self, cache):
        context = cache.get("de", "en_US")

        assert context.dimensions == {"language": ["de", "en_US"]}
        assert context.target_dimensions == {"language": "de"}

    def test_context_shows_everything(self, cache):
        context = cache.get("de")

        assert context.dimensions == {"language": ["de"]}
        assert context.invisible_content_shown
        assert context.removed_content_shown
        assert context.inaccessible_content_shown

    def test_clear(self, cache, context_factory):
        cache.get("de", "en_US")
        cache.clear()
        cache.get("de", "en_US")

        assert len(context_factory.created) == 2
