"""
Primitive kind parsers for ActivityStreams literal values.

Each kind pairs a parser with a serializer.  Parsers receive a value that
has already been decoded from JSON (``str``, ``int``, ``float``, ``bool``
or ``None``) and either return a typed Python value or raise
:class:`~activity_vocab.errors.KindMismatch` so the caller can try the
next kind a property allows.  Serializers turn the typed value back into
a JSON-compatible value and raise
:class:`~activity_vocab.errors.EncodeFailure` when handed something the
kind cannot represent.

Supported kinds:

    ``xsd:string``, ``rdf:langString``, ``xsd:anyURI``, ``xsd:dateTime``,
    ``xsd:duration``, ``xsd:float``, ``xsd:boolean``,
    ``xsd:nonNegativeInteger``, BCP 47 language tags, MIME media types,
    link relations (RFC 5988), ``units`` values, and an ``any`` kind that
    accepts every raw value unchanged.
"""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable
from urllib.parse import urlsplit

from activity_vocab.errors import EncodeFailure, KindMismatch

XSD = "http://www.w3.org/2001/XMLSchema#"
RDF = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"


@dataclass(frozen=True)
class PrimitiveKind:
    """A literal kind: a named parser/serializer pair."""

    name: str
    uri: str
    parse: Callable[[Any], Any] = field(repr=False, compare=False)
    serialize: Callable[[Any], Any] = field(repr=False, compare=False)


# ── Type guards ────────────────────────────────────────────────────


def _is_number(raw: Any) -> bool:
    # bool is an int subclass but never a JSON number
    return isinstance(raw, (int, float)) and not isinstance(raw, bool)


def _require_string(kind: str, raw: Any) -> str:
    if not isinstance(raw, str):
        raise KindMismatch(kind, raw, "not a string")
    return raw


# ── xsd:dateTime ───────────────────────────────────────────────────

# RFC 3339, plus the minute-precision form "2006-01-02T15:04Z07:00".
_DATE_TIME_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2})"
    r"(?::(\d{2})(?:\.(\d+))?)?"
    r"([Zz]|[+-]\d{2}:\d{2})$"
)


def parse_date_time(raw: Any) -> datetime:
    """Parse an RFC 3339 timestamp into a timezone-aware datetime."""
    text = _require_string("xsd:dateTime", raw)
    match = _DATE_TIME_RE.match(text)
    if match is None:
        raise KindMismatch("xsd:dateTime", raw, "not an RFC 3339 timestamp")
    year, month, day, hour, minute, second, fraction, offset = match.groups()
    micro = int((fraction or "0")[:6].ljust(6, "0"))
    try:
        tz = _parse_offset(offset)
        return datetime(
            int(year), int(month), int(day),
            int(hour), int(minute), int(second or 0), micro,
            tzinfo=tz,
        )
    except ValueError as exc:
        raise KindMismatch("xsd:dateTime", raw, str(exc)) from exc


def _parse_offset(offset: str) -> timezone:
    if offset in ("Z", "z"):
        return timezone.utc
    hours, minutes = int(offset[1:3]), int(offset[4:6])
    if hours > 23 or minutes > 59:
        raise ValueError(f"offset {offset} out of range")
    delta = timedelta(hours=hours, minutes=minutes)
    return timezone(-delta if offset[0] == "-" else delta)


def format_date_time(value: Any) -> str:
    """Format an aware datetime as RFC 3339 (``Z`` for UTC)."""
    if not isinstance(value, datetime):
        raise EncodeFailure("xsd:dateTime", value, "not a datetime")
    offset = value.utcoffset()
    if offset is None:
        raise EncodeFailure("xsd:dateTime", value, "naive datetime has no offset")
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += f".{value.microsecond:06d}".rstrip("0")
    if offset == timedelta(0):
        return text + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(offset) // timedelta(minutes=1)
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


# ── xsd:duration ───────────────────────────────────────────────────

# Calendar units have no fixed length; a year is 365 days and a month
# 30 days.
_DAYS_PER_YEAR = 365
_DAYS_PER_MONTH = 30

_DURATION_RE = re.compile(
    r"^(-)?P(?:(\d+)Y)?(?:(\d+)M)?(?:(\d+)D)?"
    r"(T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$"
)


def parse_duration(raw: Any) -> timedelta:
    """Parse an ISO 8601 duration such as ``PT2H30M`` or ``-P1DT5S``."""
    text = _require_string("xsd:duration", raw)
    match = _DURATION_RE.match(text)
    if match is None:
        raise KindMismatch("xsd:duration", raw, "not an ISO 8601 duration")
    neg, years, months, days, time_part, hours, minutes, seconds = match.groups()
    date_parts = (years, months, days)
    time_parts = (hours, minutes, seconds)
    if time_part is not None and all(p is None for p in time_parts):
        raise KindMismatch("xsd:duration", raw, "empty time section")
    if all(p is None for p in date_parts + time_parts):
        raise KindMismatch("xsd:duration", raw, "no duration components")
    try:
        total = timedelta(
            days=int(years or 0) * _DAYS_PER_YEAR
            + int(months or 0) * _DAYS_PER_MONTH
            + int(days or 0),
            hours=int(hours or 0),
            minutes=int(minutes or 0),
            seconds=float(seconds or 0),
        )
    except (OverflowError, ValueError) as exc:
        raise KindMismatch("xsd:duration", raw, f"out of range: {exc}") from exc
    return -total if neg else total


def format_duration(value: Any) -> str:
    """Format a timedelta as an ISO 8601 duration (greedy Y/M/D/H/M/S)."""
    if not isinstance(value, timedelta):
        raise EncodeFailure("xsd:duration", value, "not a timedelta")
    if value == timedelta(0):
        return "PT0S"
    sign = "-" if value < timedelta(0) else ""
    value = abs(value)

    years, days = divmod(value.days, _DAYS_PER_YEAR)
    months, days = divmod(days, _DAYS_PER_MONTH)
    hours, rest = divmod(value.seconds, 3600)
    minutes, seconds = divmod(rest, 60)

    text = sign + "P"
    if years:
        text += f"{years}Y"
    if months:
        text += f"{months}M"
    if days:
        text += f"{days}D"
    if hours or minutes or seconds or value.microseconds:
        text += "T"
        if hours:
            text += f"{hours}H"
        if minutes:
            text += f"{minutes}M"
        if value.microseconds:
            text += f"{seconds}.{value.microseconds:06d}".rstrip("0") + "S"
        elif seconds:
            text += f"{seconds}S"
    return text


# ── Numbers & booleans ─────────────────────────────────────────────


def _parse_float(raw: Any) -> float:
    if not _is_number(raw):
        raise KindMismatch("xsd:float", raw, "not a number")
    return float(raw)


def _serialize_float(value: Any) -> float:
    if not _is_number(value):
        raise EncodeFailure("xsd:float", value, "not a number")
    return float(value)


def _parse_boolean(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if _is_number(raw) and raw in (0, 1):
        return raw == 1
    raise KindMismatch("xsd:boolean", raw, "not a boolean or 0/1")


def _serialize_boolean(value: Any) -> bool:
    if not isinstance(value, bool):
        raise EncodeFailure("xsd:boolean", value, "not a bool")
    return value


def _parse_non_negative_integer(raw: Any) -> int:
    if not _is_number(raw):
        raise KindMismatch("xsd:nonNegativeInteger", raw, "not a number")
    try:
        value = int(raw)
    except (OverflowError, ValueError) as exc:
        raise KindMismatch("xsd:nonNegativeInteger", raw, str(exc)) from exc
    if value < 0:
        raise KindMismatch("xsd:nonNegativeInteger", raw, "negative")
    return value


def _serialize_non_negative_integer(value: Any) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise EncodeFailure("xsd:nonNegativeInteger", value, "not a non-negative int")
    return value


# ── String-shaped kinds ────────────────────────────────────────────

_LANGUAGE_TAG_RE = re.compile(r"^(?:[A-Za-z]{2,8}|[IiXx])(?:-[A-Za-z0-9]{1,8})*$")
_MIME_TYPE_RE = re.compile(
    r"^[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]{0,126}"
    r"/[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]{0,126}"
    r"(?:\s*;.*)?$"
)
_LINK_RELATION_RE = re.compile(r"^[^\s,]+$")

UNITS_VALUES = frozenset({"cm", "feet", "inches", "km", "m", "miles"})


def _pattern_kind(name: str, pattern: re.Pattern[str], reason: str) -> Callable[[Any], str]:
    def parse(raw: Any) -> str:
        text = _require_string(name, raw)
        if pattern.match(text) is None:
            raise KindMismatch(name, raw, reason)
        return text

    return parse


def _string_serializer(name: str) -> Callable[[Any], str]:
    def serialize(value: Any) -> str:
        if not isinstance(value, str):
            raise EncodeFailure(name, value, "not a string")
        return value

    return serialize


def _parse_units(raw: Any) -> str:
    text = _require_string("units", raw)
    if text not in UNITS_VALUES:
        raise KindMismatch("units", raw, f"expected one of {sorted(UNITS_VALUES)}")
    return text


def parse_any_uri(raw: Any) -> str:
    """Accept any string the URL parser understands (relative included)."""
    text = _require_string("xsd:anyURI", raw)
    try:
        urlsplit(text)
    except ValueError as exc:
        raise KindMismatch("xsd:anyURI", raw, str(exc)) from exc
    return text


def parse_iri(raw: Any) -> str:
    """Accept an absolute IRI: a scheme is required and whitespace is not."""
    text = _require_string("IRI", raw)
    if not text or any(ch.isspace() for ch in text):
        raise KindMismatch("IRI", raw, "empty or contains whitespace")
    try:
        parts = urlsplit(text)
    except ValueError as exc:
        raise KindMismatch("IRI", raw, str(exc)) from exc
    if not parts.scheme:
        raise KindMismatch("IRI", raw, "missing scheme")
    return text


def format_iri(value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise EncodeFailure("IRI", value, "not a non-empty string")
    return value


# ═══════════════════════════════════════════════════════════════════
# KIND TABLE
# ═══════════════════════════════════════════════════════════════════

XSD_STRING = PrimitiveKind(
    "xsd:string", XSD + "string",
    lambda raw: _require_string("xsd:string", raw),
    _string_serializer("xsd:string"),
)
RDF_LANG_STRING = PrimitiveKind(
    "rdf:langString", RDF + "langString",
    lambda raw: _require_string("rdf:langString", raw),
    _string_serializer("rdf:langString"),
)
XSD_ANY_URI = PrimitiveKind(
    "xsd:anyURI", XSD + "anyURI", parse_any_uri, _string_serializer("xsd:anyURI"),
)
XSD_DATE_TIME = PrimitiveKind(
    "xsd:dateTime", XSD + "dateTime", parse_date_time, format_date_time,
)
XSD_DURATION = PrimitiveKind(
    "xsd:duration", XSD + "duration", parse_duration, format_duration,
)
XSD_FLOAT = PrimitiveKind(
    "xsd:float", XSD + "float", _parse_float, _serialize_float,
)
XSD_BOOLEAN = PrimitiveKind(
    "xsd:boolean", XSD + "boolean", _parse_boolean, _serialize_boolean,
)
XSD_NON_NEGATIVE_INTEGER = PrimitiveKind(
    "xsd:nonNegativeInteger", XSD + "nonNegativeInteger",
    _parse_non_negative_integer, _serialize_non_negative_integer,
)
BCP47_LANGUAGE_TAG = PrimitiveKind(
    "bcp47LanguageTag", "https://tools.ietf.org/html/bcp47",
    _pattern_kind("bcp47LanguageTag", _LANGUAGE_TAG_RE, "not a BCP 47 language tag"),
    _string_serializer("bcp47LanguageTag"),
)
MIME_MEDIA_TYPE = PrimitiveKind(
    "mimeMediaType", "https://tools.ietf.org/html/rfc2045",
    _pattern_kind("mimeMediaType", _MIME_TYPE_RE, "not a type/subtype media type"),
    _string_serializer("mimeMediaType"),
)
LINK_RELATION = PrimitiveKind(
    "linkRelation", "https://tools.ietf.org/html/rfc5988",
    _pattern_kind("linkRelation", _LINK_RELATION_RE, "empty or contains whitespace/commas"),
    _string_serializer("linkRelation"),
)
UNITS = PrimitiveKind(
    "units", "https://www.w3.org/ns/activitystreams#units",
    _parse_units, _string_serializer("units"),
)
ANY_VALUE = PrimitiveKind(
    "any", "", copy.deepcopy, copy.deepcopy,
)

PRIMITIVE_KINDS: tuple[PrimitiveKind, ...] = (
    XSD_STRING,
    RDF_LANG_STRING,
    XSD_ANY_URI,
    XSD_DATE_TIME,
    XSD_DURATION,
    XSD_FLOAT,
    XSD_BOOLEAN,
    XSD_NON_NEGATIVE_INTEGER,
    BCP47_LANGUAGE_TAG,
    MIME_MEDIA_TYPE,
    LINK_RELATION,
    UNITS,
    ANY_VALUE,
)
