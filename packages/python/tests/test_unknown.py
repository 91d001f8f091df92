"""Tests for the unknown/extension bag."""

import pytest
from activity_vocab.unknown import UnknownBag


@pytest.fixture
def bag():
    return UnknownBag(declared={"name", "nameMap"})


class TestUnknownBag:
    def test_put_get(self, bag):
        bag.put("x", 42)
        assert bag.get("x") == 42
        assert "x" in bag

    def test_missing_get_returns_default(self, bag):
        assert bag.get("nope") is None
        assert bag.get("nope", "fallback") == "fallback"

    def test_remove(self, bag):
        bag.put("x", [1])
        assert bag.remove("x") == [1]
        assert bag.remove("x") is None
        assert len(bag) == 0

    def test_context_rejected(self, bag):
        with pytest.raises(ValueError, match="@context"):
            bag.put("@context", "https://www.w3.org/ns/activitystreams")

    def test_non_string_key(self, bag):
        with pytest.raises(TypeError):
            bag.put(1, "x")

    def test_declared_keys_go_to_overflow(self, bag):
        bag.put("nameMap", "not a map")
        bag.put("ext:flag", True)
        assert bag.overflow_keys() == {"nameMap"}
        assert bag.extension_keys() == {"ext:flag"}
        assert bag.keys() == {"nameMap", "ext:flag"}

    def test_items_extensions_first(self, bag):
        bag.put("nameMap", 1)
        bag.put("b", 2)
        bag.put("a", 3)
        assert list(bag.items()) == [("b", 2), ("a", 3), ("nameMap", 1)]

    def test_encode_into_copies(self, bag):
        raw = {"nested": [1, 2]}
        bag.put("x", raw)
        out = {}
        bag.encode_into(out)
        assert out == {"x": raw}
        out["x"]["nested"].append(3)
        assert raw == {"nested": [1, 2]}

    def test_put_copies(self, bag):
        raw = {"nested": [1, 2]}
        bag.put("x", raw)
        raw["nested"].append(3)
        assert bag.get("x") == {"nested": [1, 2]}

    def test_equality(self):
        a, b = UnknownBag(), UnknownBag()
        a.put("x", 1)
        assert a != b
        b.put("x", 1)
        assert a == b

    def test_clear(self, bag):
        bag.put("x", 1)
        bag.put("name", 2)
        bag.clear()
        assert bag.keys() == set()
