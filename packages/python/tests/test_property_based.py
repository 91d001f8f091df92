"""
Property-based tests for the vocabulary codec using Hypothesis.

Invariants checked over generated inputs:

* decoding a serialized entity gives back an equal entity
* a one-element repeated property decodes the same bare or wrapped
* the first declared kind that accepts a value always wins
* undeclared keys survive a decode/encode cycle unchanged
* duration and date-time text survives a parse/format cycle
* out-of-range offsets and overflowing durations are kind mismatches
"""

from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from activity_vocab.entity import VocabularyEntity
from activity_vocab.errors import KindMismatch
from activity_vocab.kinds import (
    MIME_MEDIA_TYPE,
    XSD_DATE_TIME,
    XSD_FLOAT,
    XSD_STRING,
    format_date_time,
    format_duration,
    parse_date_time,
    parse_duration,
)
from activity_vocab.multiplicity import decode_property, encode_property
from activity_vocab.registry import TypeRegistry
from activity_vocab.schema import PropertySpec
from activity_vocab.slot import IRI, Primitive, decode_slot
from activity_vocab.vocabulary import NAME, SCHEMAS, register_vocabulary

_REGISTRY = TypeRegistry()
register_vocabulary(_REGISTRY)

# ═══════════════════════════════════════════════════════════════════
# Strategies
# ═══════════════════════════════════════════════════════════════════

_text = st.text(min_size=0, max_size=20)
_iris = st.from_regex(r"\Ahttps://example\.com/[a-z0-9]{1,10}\Z")
_aware_datetimes = st.datetimes(
    min_value=datetime(1970, 1, 1),
    max_value=datetime(2100, 1, 1),
    timezones=st.just(timezone.utc),
)
_durations = st.timedeltas(
    min_value=timedelta(days=-5000), max_value=timedelta(days=5000)
)
_json_scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-10**6, max_value=10**6),
    _text,
)
_json_values = st.recursive(
    _json_scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=3),
        st.dictionaries(_text, children, max_size=3),
    ),
    max_leaves=8,
)


@st.composite
def notes(draw):
    """A Note built only from declared properties."""
    note = VocabularyEntity(SCHEMAS["Note"])
    for value in draw(st.lists(_text, max_size=3)):
        note["name"].append(Primitive(XSD_STRING, value))
    for uri in draw(st.lists(_iris, max_size=3)):
        note["to"].append(IRI(uri))
    published = draw(st.none() | _aware_datetimes)
    if published is not None:
        note["published"].set(Primitive(XSD_DATE_TIME, published))
    altitude = draw(st.none() | st.floats(allow_nan=False, allow_infinity=False))
    if altitude is not None:
        note["altitude"].set(Primitive(XSD_FLOAT, altitude))
    for tag, value in draw(st.dictionaries(st.sampled_from(["en", "fr", "ja"]), _text)).items():
        note.language_map("content")[tag] = value
    return note


# ═══════════════════════════════════════════════════════════════════
# Codec invariants
# ═══════════════════════════════════════════════════════════════════


class TestRoundTrip:
    @given(notes())
    @settings(max_examples=100)
    def test_deserialize_serialize(self, note):
        decoded = VocabularyEntity(SCHEMAS["Note"])
        decoded.deserialize(note.serialize(), registry=_REGISTRY)
        assert decoded == note

    @given(notes())
    @settings(max_examples=50)
    def test_serialize_stable(self, note):
        assert note.serialize() == note.serialize()


class TestCompaction:
    @given(_text)
    def test_single_value_bare_or_wrapped(self, value):
        bare = decode_property(NAME, value, registry=_REGISTRY)
        wrapped = decode_property(NAME, [value], registry=_REGISTRY)
        assert bare == wrapped
        assert len(bare) == 1
        assert encode_property(bare) == value


class TestPriority:
    @given(st.sampled_from(["text/html", "image/png", "application/activity+json"]))
    def test_first_accepting_kind_wins(self, media_type):
        spec = PropertySpec("p", (MIME_MEDIA_TYPE, XSD_STRING))
        assert decode_slot(spec, media_type, registry=_REGISTRY).kind is MIME_MEDIA_TYPE


class TestUnknownPreservation:
    @given(
        st.dictionaries(
            st.from_regex(r"\Aext:[a-z]{1,8}\Z"), _json_values, max_size=4
        )
    )
    @settings(max_examples=100)
    def test_undeclared_keys_survive(self, extensions):
        raw = {"type": "Note", **extensions}
        note = VocabularyEntity(SCHEMAS["Note"])
        note.deserialize(raw, registry=_REGISTRY)
        assert note.serialize() == raw


# ═══════════════════════════════════════════════════════════════════
# Literal codecs
# ═══════════════════════════════════════════════════════════════════


class TestLiterals:
    @given(_durations)
    def test_duration_roundtrip(self, value):
        assert parse_duration(format_duration(value)) == value

    @given(_aware_datetimes)
    def test_date_time_roundtrip(self, value):
        assert parse_date_time(format_date_time(value)) == value

    @given(
        st.datetimes(min_value=datetime(1970, 1, 1), max_value=datetime(2100, 1, 1)),
        st.integers(min_value=-14 * 60, max_value=14 * 60),
    )
    def test_offsets_preserved(self, naive, offset_minutes):
        tz = timezone(timedelta(minutes=offset_minutes))
        value = naive.replace(tzinfo=tz)
        parsed = parse_date_time(format_date_time(value))
        assert parsed == value
        assert parsed.utcoffset() == value.utcoffset()

    @pytest.mark.parametrize("text", ["PT0S", "P1Y", "P1M", "-PT1.5S", "P1Y2M3DT4H5M6S"])
    def test_canonical_text_stable(self, text):
        assert format_duration(parse_duration(text)) == text

    @given(
        st.integers(min_value=24, max_value=99),
        st.integers(min_value=0, max_value=99),
        st.sampled_from(["+", "-"]),
    )
    def test_out_of_range_offsets_rejected(self, hours, minutes, sign):
        with pytest.raises(KindMismatch):
            parse_date_time(f"2020-01-01T00:00:00{sign}{hours:02d}:{minutes:02d}")

    @given(st.integers(min_value=10**9, max_value=10**40), st.sampled_from("YMD"))
    def test_overflowing_durations_rejected(self, amount, unit):
        with pytest.raises(KindMismatch):
            parse_duration(f"P{amount}{unit}")
