"""
Tests for the reconciler.

Core principle: a second run against an unchanged source writes nothing.
"""

from datetime import datetime, timezone

import pytest

from localesync.services.reconciler import Moved, Skipped


@pytest.fixture
def source(en_context):
    return en_context.get_node_by_identifier("about")


@pytest.fixture
def de_context(site):
    return site.context("de", "en_US")


@pytest.fixture
def target(de_context, source):
    return de_context.adopt_node(source)


# =============================================================================
# Properties
# =============================================================================


class TestPropertyConvergence:
    def test_translates_eligible_and_copies_the_rest(self, reconciler, source, target, de_context, translator):
        result = reconciler.reconcile(source, target, de_context)

        assert translator.calls == [
            ({"title": "About us", "metaDescription": "Who we are"}, "de", "en"),
        ]
        assert target.get_property("title") == "[de] About us"
        assert target.get_property("metaDescription") == "[de] Who we are"
        assert target.get_property("uriPathSegment") == "about"
        assert target.get_property("teaser") == "Read on"
        assert target.get_property("author") == "person-42"
        assert result.translated == ["metaDescription", "title"]

    def test_only_changed_properties_are_written(self, reconciler, source, target, de_context):
        result = reconciler.reconcile(source, target, de_context)

        # The adopted copy already carries every untranslated value
        assert sorted(result.written) == ["metaDescription", "title"]

    def test_second_run_writes_nothing(self, reconciler, source, target, de_context, site):
        reconciler.reconcile(source, target, de_context)
        writes_after_first_run = list(site.property_writes)
        state_after_first_run = target.get_properties()

        result = reconciler.reconcile(source, target, de_context)

        assert result.written == []
        assert site.property_writes == writes_after_first_run
        assert target.get_properties() == state_after_first_run

    def test_source_edits_are_picked_up(self, reconciler, source, target, de_context):
        reconciler.reconcile(source, target, de_context)
        source.set_property("uriPathSegment", "about-us")
        source.set_property("title", "About")

        result = reconciler.reconcile(source, target, de_context)

        assert target.get_property("uriPathSegment") == "about-us"
        assert target.get_property("title") == "[de] About"
        assert sorted(result.written) == ["title", "uriPathSegment"]

    def test_without_translation_translatable_properties_are_left_alone(
        self, reconciler, source, target, de_context, translator
    ):
        target.set_property("title", "Über uns")
        source.set_property("uriPathSegment", "about-us")

        reconciler.reconcile(source, target, de_context, translate=False)

        assert translator.calls == []
        assert target.get_property("title") == "Über uns"
        assert target.get_property("uriPathSegment") == "about-us"

    def test_translated_values_override_without_duplicates(self, reconciler, source, target, de_context):
        source.set_property("title_raw", "About us")

        reconciler.reconcile(source, target, de_context)

        properties = target.get_properties()
        assert properties["title"] == "[de] About us"
        assert properties["title_raw"] == "About us"
        assert len([name for name in properties if name.startswith("title")]) == 2

    def test_provider_language_override_is_used(self, reconciler, source, site, translator):
        context = site.context("fr_CA", "en_US")
        target = context.adopt_node(source)

        reconciler.reconcile(source, target, context)

        assert translator.target_languages == ["fr-CA"]

    def test_same_language_is_a_no_op(self, reconciler, source, site, translator):
        context = site.context("en_GB", "en_US")
        target = context.adopt_node(source)
        target.set_property("title", "About Us (GB)")
        writes = len(site.property_writes)

        result = reconciler.reconcile(source, target, context)

        assert result.skipped is not None
        assert translator.calls == []
        assert len(site.property_writes) == writes
        assert target.get_property("title") == "About Us (GB)"


# =============================================================================
# Structure
# =============================================================================


class TestStructuralSync:
    def test_attributes_are_copied(self, reconciler, source, target, de_context):
        hide_before = datetime(2030, 1, 1, tzinfo=timezone.utc)
        source.set_hidden(True)
        source.set_hidden_in_index(True)
        source.set_hidden_before_datetime(hide_before)
        source.set_index(7)

        reconciler.reconcile(source, target, de_context)

        assert target.is_hidden()
        assert target.is_hidden_in_index()
        assert target.get_hidden_before_datetime() == hide_before
        assert target.get_hidden_after_datetime() is None
        assert target.get_index() == 7

    def test_node_type_is_copied(self, reconciler, source, target, de_context, registry):
        target.set_node_type(registry.get_node_type("Text"))

        reconciler.reconcile(source, target, de_context)

        assert target.get_node_type().name == "Page"

    def test_no_move_when_parents_match(self, reconciler, source, target, de_context):
        result = reconciler.reconcile(source, target, de_context)

        assert result.move is None
        assert target.path == "/sites/example/about"

    def test_moves_below_the_matching_parent(self, reconciler, source, site, de_context):
        site.add_node("home", "/sites/example", "Page", "de", {"title": "Startseite"})
        site.add_node("archive", "/sites/archive", "Page", "de", {"title": "Archiv"})
        site.add_node("about", "/sites/archive/about", "Page", "de", {"title": "Über uns"})
        target = de_context.get_node_by_identifier("about")

        result = reconciler.reconcile(source, target, de_context)

        assert result.move == Moved(parent_path="/sites/example")
        assert target.path == "/sites/example/about"

    def test_occupied_location_is_skipped(self, reconciler, source, site, de_context):
        site.add_node("home", "/sites/example", "Page", "de", {"title": "Startseite"})
        site.add_node("archive", "/sites/archive", "Page", "de", {"title": "Archiv"})
        site.add_node("about", "/sites/archive/about", "Page", "de", {"title": "Über uns"})
        site.add_node("squatter", "/sites/example/about", "Page", "de", {"title": "Besetzt"})
        target = de_context.get_node_by_identifier("about")

        result = reconciler.reconcile(source, target, de_context)

        assert isinstance(result.move, Skipped)
        assert "already exists" in result.move.reason
        assert target.path == "/sites/archive/about"
        # Reconciliation carries on after the skipped move
        assert target.get_property("title") == "[de] About us"

    def test_missing_parent_variant_is_skipped(self, reconciler, source, site):
        site.add_node("about", "/orphans/about", "Page", "de", {"title": "Über uns"})
        context = site.context("de")
        target = context.get_node_by_identifier("about")

        result = reconciler.reconcile(source, target, context)

        assert isinstance(result.move, Skipped)
        assert target.path == "/orphans/about"


# =============================================================================
# Failures
# =============================================================================


class TestTranslationFailure:
    def test_failure_propagates_and_writes_no_property(self, reconciler, source, target, de_context, site, translator):
        translator.fail_with = RuntimeError("provider down")
        source.set_hidden(True)
        source.set_property("uriPathSegment", "about-us")
        writes = len(site.property_writes)

        with pytest.raises(RuntimeError, match="provider down"):
            reconciler.reconcile(source, target, de_context)

        # Structural sync already happened and is kept
        assert target.is_hidden()
        assert len(site.property_writes) == writes
        assert target.get_property("uriPathSegment") == "about"
