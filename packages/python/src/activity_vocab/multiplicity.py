"""Functional and repeated property containers and their JSON compaction.

A *functional* property holds at most one slot; a *repeated* property
holds an ordered list of slots.  On encode a repeated property with one
value is written bare and with several values as a JSON array; on
decode a bare value, a single object and an array are all accepted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Iterator, Optional, Union

from activity_vocab.errors import IndexOutOfRange
from activity_vocab.registry import TypeRegistry
from activity_vocab.slot import (
    ABSENT,
    PropertySlot,
    decode_slot,
    encode_slot,
    slot_allowed,
)

if TYPE_CHECKING:
    from activity_vocab.schema import PropertySpec


def _check_allowed(spec: "PropertySpec", slot: Any) -> None:
    if not slot_allowed(spec, slot):
        raise ValueError(
            f"Property '{spec.name}' cannot hold {slot!r}"
        )


class Functional:
    """Zero or one slot."""

    functional = True

    def __init__(self, spec: "PropertySpec", slot: Optional[PropertySlot] = None) -> None:
        self.spec = spec
        self._slot: Optional[PropertySlot] = None
        if slot is not None:
            self.set(slot)

    def get(self) -> Optional[PropertySlot]:
        return self._slot

    def set(self, slot: PropertySlot) -> None:
        _check_allowed(self.spec, slot)
        self._slot = slot

    def clear(self) -> None:
        self._slot = None

    def is_empty(self) -> bool:
        return self._slot is None

    def slots(self) -> list[PropertySlot]:
        return [] if self._slot is None else [self._slot]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Functional):
            return NotImplemented
        return self.spec.name == other.spec.name and self._slot == other._slot

    def __repr__(self) -> str:
        return f"Functional({self.spec.name!r}, {self._slot!r})"


class Repeated:
    """An ordered list of slots.

    Mutations never reorder the remaining elements.  Indexed operations
    raise :class:`~activity_vocab.errors.IndexOutOfRange` and leave the
    list untouched when the index is invalid.
    """

    functional = False

    def __init__(self, spec: "PropertySpec", slots: Iterable[PropertySlot] = ()) -> None:
        self.spec = spec
        self._slots: list[PropertySlot] = []
        for slot in slots:
            self.append(slot)

    def _check_index(self, index: int, length: Optional[int] = None) -> int:
        size = len(self._slots) if length is None else length
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError(f"Index must be an int, got {type(index).__name__}")
        if index < 0 or index >= size:
            raise IndexOutOfRange(self.spec.name, index, len(self._slots))
        return index

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[PropertySlot]:
        return iter(list(self._slots))

    def get(self, index: int) -> PropertySlot:
        return self._slots[self._check_index(index)]

    def append(self, slot: PropertySlot) -> None:
        _check_allowed(self.spec, slot)
        self._slots.append(slot)

    def prepend(self, slot: PropertySlot) -> None:
        _check_allowed(self.spec, slot)
        self._slots.insert(0, slot)

    def insert(self, index: int, slot: PropertySlot) -> None:
        """Insert before *index*; ``len(self)`` appends."""
        self._check_index(index, len(self._slots) + 1)
        _check_allowed(self.spec, slot)
        self._slots.insert(index, slot)

    def set_at(self, index: int, slot: PropertySlot) -> None:
        self._check_index(index)
        _check_allowed(self.spec, slot)
        self._slots[index] = slot

    def remove_at(self, index: int) -> PropertySlot:
        return self._slots.pop(self._check_index(index))

    def clear(self) -> None:
        self._slots.clear()

    def is_empty(self) -> bool:
        return not self._slots

    def slots(self) -> list[PropertySlot]:
        return list(self._slots)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Repeated):
            return NotImplemented
        return self.spec.name == other.spec.name and self._slots == other._slots

    def __repr__(self) -> str:
        return f"Repeated({self.spec.name!r}, {self._slots!r})"


PropertyMultiplicity = Union[Functional, Repeated]


def new_multiplicity(spec: "PropertySpec") -> PropertyMultiplicity:
    return Functional(spec) if spec.functional else Repeated(spec)


def decode_property(
    spec: "PropertySpec",
    raw: Any,
    *,
    registry: TypeRegistry,
    strict: bool = False,
) -> PropertyMultiplicity:
    """Decode the raw value of one JSON key into a multiplicity for *spec*.

    A functional property decodes its value as a single slot, so a JSON
    array given to one ends up as a single ``Unknown`` slot.
    """
    if spec.functional:
        return Functional(spec, decode_slot(spec, raw, registry=registry, strict=strict))
    elements = raw if isinstance(raw, list) else [raw]
    return Repeated(
        spec,
        [decode_slot(spec, element, registry=registry, strict=strict) for element in elements],
    )


def encode_property(multiplicity: PropertyMultiplicity) -> Any:
    """Encode a multiplicity; returns ``ABSENT`` when nothing is set."""
    if isinstance(multiplicity, Functional):
        return encode_slot(multiplicity.get())
    encoded = [encode_slot(slot) for slot in multiplicity]
    if not encoded:
        return ABSENT
    # A lone array value stays wrapped so it decodes back to one element.
    if len(encoded) == 1 and not isinstance(encoded[0], list):
        return encoded[0]
    return encoded
