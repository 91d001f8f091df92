"""Tests for natural-language maps."""

import pytest
from activity_vocab.errors import DecodeFailure, MalformedLanguageMap
from activity_vocab.langmap import LanguageMap, decode_language_map, encode_language_map
from activity_vocab.slot import ABSENT


class TestLanguageMap:
    def test_mapping_behaviour(self):
        m = LanguageMap({"en": "Hello"})
        m["es"] = "Hola"
        assert dict(m) == {"en": "Hello", "es": "Hola"}
        del m["en"]
        assert list(m) == ["es"]
        assert len(m) == 1

    def test_rejects_non_string_value(self):
        with pytest.raises(TypeError, match="'en'"):
            LanguageMap()["en"] = 5

    def test_rejects_non_string_tag(self):
        with pytest.raises(TypeError):
            LanguageMap()[1] = "one"

    def test_equality_with_dict(self):
        assert LanguageMap({"en": "Hi"}) == {"en": "Hi"}
        assert LanguageMap({"en": "Hi"}) == LanguageMap({"en": "Hi"})
        assert LanguageMap() != LanguageMap({"en": "Hi"})


class TestDecode:
    def test_well_formed(self):
        m, errors = decode_language_map("nameMap", {"en": "A Note", "fr": "Une note"})
        assert m == {"en": "A Note", "fr": "Une note"}
        assert errors == []

    def test_bad_entry_reported_and_dropped(self):
        m, errors = decode_language_map("nameMap", {"en": "A Note", "de": 7, "fr": None})
        assert m == {"en": "A Note"}
        assert [e.tag for e in errors] == ["de", "fr"]
        assert all(isinstance(e, MalformedLanguageMap) for e in errors)

    def test_not_an_object(self):
        m, errors = decode_language_map("nameMap", "A Note")
        assert len(m) == 0
        assert len(errors) == 1
        assert errors[0].tag is None
        assert "must be an object" in str(errors[0])

    def test_errors_are_decode_failures(self):
        _, errors = decode_language_map("contentMap", {"en": 1})
        assert isinstance(errors[0], DecodeFailure)
        assert errors[0].property_name == "contentMap"


class TestEncode:
    def test_empty_is_absent(self):
        assert encode_language_map(LanguageMap()) is ABSENT

    def test_single_entry_stays_a_map(self):
        assert encode_language_map(LanguageMap({"en": "Hi"})) == {"en": "Hi"}
