"""Tests for the type registry and type-candidate normalisation."""

import pytest
from activity_vocab.entity import VocabularyEntity
from activity_vocab.registry import (
    TypeRegistry,
    default_registry,
    reset_default_registry,
    type_candidates,
)
from activity_vocab.schema import TypeSchema
from activity_vocab.vocabulary import OBJECT_TYPE


@pytest.fixture
def registry():
    return TypeRegistry()


def _factory(name="Widget"):
    schema = TypeSchema(name, extends=(OBJECT_TYPE,))
    return lambda: VocabularyEntity(schema)


# ── Registration ────────────────────────────────────────────────────

class TestRegister:
    def test_object_view_by_default(self, registry):
        registry.register("Widget", _factory())
        assert registry.resolve_object("Widget") is not None
        assert registry.resolve_link("Widget") is None

    def test_link_only(self, registry):
        registry.register("Ref", _factory("Ref"), as_object=False, as_link=True)
        assert registry.resolve_object("Ref") is None
        assert registry.resolve_link("Ref") is not None

    def test_both_views(self, registry):
        factory = _factory()
        registry.register("Widget", factory, as_link=True)
        assert registry.resolve_object("Widget") is factory
        assert registry.resolve_link("Widget") is factory

    def test_duplicate_rejected(self, registry):
        registry.register("Widget", _factory())
        with pytest.raises(ValueError, match="already registered"):
            registry.register("Widget", _factory())

    def test_force_overrides(self, registry):
        registry.register("Widget", _factory())
        replacement = _factory()
        registry.register("Widget", replacement, force=True)
        assert registry.resolve_object("Widget") is replacement

    def test_same_name_in_other_view_is_not_duplicate(self, registry):
        registry.register("Widget", _factory())
        registry.register("Widget", _factory(), as_object=False, as_link=True)
        assert registry.link_types() == ["Widget"]

    @pytest.mark.parametrize("name", ["", "   ", None, 42])
    def test_bad_names(self, registry, name):
        with pytest.raises(ValueError, match="non-empty string"):
            registry.register(name, _factory())

    def test_non_callable(self, registry):
        with pytest.raises(TypeError, match="callable"):
            registry.register("Widget", "not a factory")

    def test_no_view(self, registry):
        with pytest.raises(ValueError, match="object-like"):
            registry.register("Widget", _factory(), as_object=False)


class TestLookup:
    def test_unregister(self, registry):
        registry.register("Widget", _factory(), as_link=True)
        registry.unregister("Widget")
        assert "Widget" not in registry
        assert len(registry) == 0

    def test_unregister_missing(self, registry):
        with pytest.raises(KeyError, match="Widget"):
            registry.unregister("Widget")

    def test_listing_keeps_registration_order(self, registry):
        for name in ("B", "A", "C"):
            registry.register(name, _factory(name))
        assert registry.object_types() == ["B", "A", "C"]

    def test_contains(self, registry):
        registry.register("Widget", _factory())
        assert "Widget" in registry
        assert "Gadget" not in registry


# ── Type candidates ─────────────────────────────────────────────────

class TestTypeCandidates:
    def test_string(self):
        assert type_candidates("Note") == ["Note"]

    def test_list_preserves_order(self):
        assert type_candidates(["Article", "Note"]) == ["Article", "Note"]

    def test_non_strings_skipped(self):
        assert type_candidates(["Note", 3, None, {"x": 1}, "Page"]) == ["Note", "Page"]

    @pytest.mark.parametrize("raw", [None, 5, {"type": "Note"}])
    def test_unusable(self, raw):
        assert type_candidates(raw) == []


# ── Default registry ────────────────────────────────────────────────

class TestDefaultRegistry:
    def test_populated_with_vocabulary(self):
        registry = default_registry()
        assert "Note" in registry.object_types()
        assert "Mention" in registry.link_types()
        assert "Mention" not in registry.object_types()

    def test_cached(self):
        assert default_registry() is default_registry()

    def test_reset_rebuilds(self):
        first = default_registry()
        reset_default_registry()
        second = default_registry()
        assert first is not second
        assert second.object_types() == first.object_types()
