"""
Property slot codec.

A slot holds exactly one value of a property, as one alternative of a
tagged union:

    ``Primitive(kind, value)``   literal parsed by a :class:`PrimitiveKind`
    ``TypedObject(value)``       embedded object-like vocabulary entity
    ``TypedLink(value)``         embedded link-like vocabulary entity
    ``IRI(uri)``                 bare reference
    ``Unknown(raw)``             value no allowed kind accepted, kept verbatim

An empty slot is ``None``.  Because every alternative is its own frozen
dataclass a slot can never hold two alternatives at once.

Decoding walks the property's kinds in declared order and the first kind
that accepts the raw value wins.  For JSON objects each typed kind tries
every ``"type"`` candidate in turn (kind-major), resolving it through a
:class:`~activity_vocab.registry.TypeRegistry`.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Union

from activity_vocab.errors import DecodeFailure, KindMismatch
from activity_vocab.kinds import PrimitiveKind, format_iri, parse_iri
from activity_vocab.registry import TypeRegistry, type_candidates

if TYPE_CHECKING:
    from activity_vocab.schema import PropertySpec

logger = logging.getLogger(__name__)


class _Absent:
    """Marker returned by encoders when a property must be omitted."""

    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


# ═══════════════════════════════════════════════════════════════════
# NON-PRIMITIVE KINDS
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ObjectKind:
    """Accepts an embedded object-like entity whose type is-a ``base``."""

    base: str = "Object"


@dataclass(frozen=True)
class LinkKind:
    """Accepts an embedded link-like entity whose type is-a ``base``."""

    base: str = "Link"


@dataclass(frozen=True)
class IRIKind:
    """Accepts a bare absolute IRI."""

    name: str = "IRI"


IRI_KIND = IRIKind()

Kind = Union[PrimitiveKind, ObjectKind, LinkKind, IRIKind]


# ═══════════════════════════════════════════════════════════════════
# SLOT ALTERNATIVES
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Primitive:
    kind: PrimitiveKind
    value: Any


@dataclass(frozen=True)
class TypedObject:
    value: Any

    @property
    def type_name(self) -> str:
        return self.value.type_name


@dataclass(frozen=True)
class TypedLink:
    value: Any

    @property
    def type_name(self) -> str:
        return self.value.type_name


@dataclass(frozen=True)
class IRI:
    uri: str


@dataclass(frozen=True)
class Unknown:
    raw: Any


PropertySlot = Union[Primitive, TypedObject, TypedLink, IRI, Unknown]


def slot_allowed(spec: "PropertySpec", slot: Any) -> bool:
    """Whether *spec* could ever hold *slot*."""
    if isinstance(slot, Primitive):
        return slot.kind in spec.kinds
    if isinstance(slot, IRI):
        return IRI_KIND in spec.kinds
    if isinstance(slot, TypedObject):
        return any(
            isinstance(kind, ObjectKind) and slot.value.schema.is_a(kind.base)
            for kind in spec.kinds
        )
    if isinstance(slot, TypedLink):
        return any(
            isinstance(kind, LinkKind) and slot.value.schema.is_a(kind.base)
            for kind in spec.kinds
        )
    if isinstance(slot, Unknown):
        return spec.allow_unknown
    return False


# ═══════════════════════════════════════════════════════════════════
# DECODE
# ═══════════════════════════════════════════════════════════════════


def _resolve_typed(
    spec: "PropertySpec",
    kind: Union[ObjectKind, LinkKind],
    raw: dict[str, Any],
    registry: TypeRegistry,
    strict: bool,
) -> Optional[PropertySlot]:
    candidates = type_candidates(raw.get("type"))
    for name in candidates:
        if isinstance(kind, ObjectKind):
            factory = registry.resolve_object(name)
        else:
            factory = registry.resolve_link(name)
        if factory is None:
            continue
        entity = factory()
        if not entity.schema.is_a(kind.base):
            continue
        try:
            entity.deserialize(raw, registry=registry, strict=strict)
        except DecodeFailure as exc:
            if strict:
                raise DecodeFailure(
                    spec.name, raw,
                    f"Property '{spec.name}' holds a '{name}' that failed "
                    f"to decode: {exc}",
                ) from exc
            logger.debug(
                "Candidate type %r rejected for property %r: %s",
                name, spec.name, exc,
            )
            continue
        if isinstance(kind, ObjectKind):
            return TypedObject(entity)
        return TypedLink(entity)
    return None


def decode_slot(
    spec: "PropertySpec",
    raw: Any,
    *,
    registry: TypeRegistry,
    strict: bool = False,
) -> PropertySlot:
    """Decode one raw JSON value into a slot for *spec*.

    Raises:
        DecodeFailure: no kind accepted *raw* and the property does not
            tolerate unknown values (or *strict* is True).
    """
    is_object = isinstance(raw, dict)
    for kind in spec.kinds:
        if isinstance(kind, (ObjectKind, LinkKind)):
            if not is_object or "type" not in raw:
                continue
            slot = _resolve_typed(spec, kind, raw, registry, strict)
            if slot is not None:
                return slot
        elif isinstance(kind, IRIKind):
            try:
                return IRI(parse_iri(raw))
            except KindMismatch:
                continue
        else:
            try:
                return Primitive(kind, kind.parse(raw))
            except KindMismatch:
                continue

    if strict or not spec.allow_unknown:
        raise DecodeFailure(spec.name, raw)
    logger.debug("Property %r keeps unrecognised value %r", spec.name, raw)
    return Unknown(copy.deepcopy(raw))


# ═══════════════════════════════════════════════════════════════════
# ENCODE
# ═══════════════════════════════════════════════════════════════════


def encode_slot(slot: Optional[PropertySlot]) -> Any:
    """Encode a slot back to its JSON value; an empty slot yields ABSENT.

    Raises:
        EncodeFailure: a primitive value cannot be serialized by its kind.
    """
    if slot is None:
        return ABSENT
    if isinstance(slot, Primitive):
        return slot.kind.serialize(slot.value)
    if isinstance(slot, (TypedObject, TypedLink)):
        return slot.value.serialize()
    if isinstance(slot, IRI):
        return format_iri(slot.uri)
    if isinstance(slot, Unknown):
        return copy.deepcopy(slot.raw)
    raise TypeError(f"Not a property slot: {type(slot).__name__}")
