"""Tests for resource limit enforcement."""

import pytest
from activity_vocab.limits import DEFAULT_RESOURCE_LIMITS, enforce_resource_limits


def _nested(depth):
    doc = {"type": "Note"}
    for _ in range(depth):
        doc = {"type": "Note", "object": doc}
    return doc


class TestEnforceResourceLimits:
    def test_defaults(self):
        assert DEFAULT_RESOURCE_LIMITS["max_graph_depth"] == 100
        assert DEFAULT_RESOURCE_LIMITS["max_document_size"] == 10 * 1024 * 1024
        assert DEFAULT_RESOURCE_LIMITS["max_embedded_depth"] == 32

    def test_returns_parsed_text(self):
        assert enforce_resource_limits('{"type": "Note"}') == {"type": "Note"}

    def test_returns_dict_unchanged(self):
        doc = {"type": "Note"}
        assert enforce_resource_limits(doc) is doc

    def test_none(self):
        with pytest.raises(TypeError, match="must not be None"):
            enforce_resource_limits(None)

    def test_unsupported_type(self):
        with pytest.raises(TypeError, match="str, dict, or list"):
            enforce_resource_limits(42)

    def test_not_serializable(self):
        with pytest.raises(TypeError, match="not JSON-serializable"):
            enforce_resource_limits({"x": object()})

    def test_size_limit(self):
        with pytest.raises(ValueError, match="size"):
            enforce_resource_limits({"name": "x" * 100}, {"max_document_size": 50})

    def test_depth_limit(self):
        enforce_resource_limits(_nested(3), {"max_graph_depth": 4})
        with pytest.raises(ValueError, match="depth"):
            enforce_resource_limits(_nested(5), {"max_graph_depth": 4})

    def test_invalid_json(self):
        with pytest.raises(ValueError, match="not valid JSON"):
            enforce_resource_limits("{")

    def test_embedded_depth_counts_typed_objects(self):
        enforce_resource_limits(_nested(2), {"max_embedded_depth": 3})
        with pytest.raises(ValueError, match="max_embedded_depth"):
            enforce_resource_limits(_nested(3), {"max_embedded_depth": 3})

    def test_untyped_nesting_is_not_embedding(self):
        doc = {"type": "Note", "x": {"a": {"b": {"c": {"d": 1}}}}}
        enforce_resource_limits(doc, {"max_embedded_depth": 1})
        with pytest.raises(ValueError, match="max_graph_depth"):
            enforce_resource_limits(doc, {"max_graph_depth": 4})

    def test_arrays_count_toward_depth(self):
        with pytest.raises(ValueError, match="max_graph_depth"):
            enforce_resource_limits({"tag": [[["deep"]]]}, {"max_graph_depth": 3})
