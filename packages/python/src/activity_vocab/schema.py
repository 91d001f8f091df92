"""Declarative property and type schemas.

A vocabulary type is described by a :class:`TypeSchema`: its own
:class:`PropertySpec` list, the types it extends, and the inherited
property specs it drops.  The generic codec in
:mod:`activity_vocab.entity` is driven entirely by these declarations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class PropertySpec:
    """One property: its name, allowed kinds in priority order, multiplicity.

    ``allow_unknown=False`` marks a property whose value must match one of
    its kinds; anything else is a decode failure instead of an ``Unknown``
    slot.
    """

    name: str
    kinds: tuple[Any, ...]
    functional: bool = False
    natural_language_map: bool = False
    allow_unknown: bool = True
    uri: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError(f"Property name must be a non-empty string, got: {self.name!r}")
        object.__setattr__(self, "kinds", tuple(self.kinds))
        if not self.kinds:
            raise ValueError(f"Property '{self.name}' must allow at least one kind")

    @property
    def map_key(self) -> str:
        return self.name + "Map"


@dataclass(frozen=True, eq=False)
class TypeSchema:
    """A vocabulary type.

    Parameters
    ----------
    name:
        Canonical type name, injected into ``type`` on serialize.
    properties:
        Properties the type declares itself.  They take precedence over
        inherited properties of the same name.
    extends:
        Parent schemas, searched depth-first in order.
    without:
        Inherited property specs this type does not carry.
    link_like:
        Registered in the link-like registry view instead of object-like.
    """

    name: str
    properties: tuple[PropertySpec, ...] = ()
    extends: tuple["TypeSchema", ...] = ()
    without: tuple[PropertySpec, ...] = ()
    link_like: bool = False
    uri: Optional[str] = None
    _ordered: tuple[PropertySpec, ...] = field(init=False, repr=False)
    _by_name: dict[str, PropertySpec] = field(init=False, repr=False)
    _ancestors: tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", tuple(self.properties))
        object.__setattr__(self, "extends", tuple(self.extends))
        object.__setattr__(self, "without", tuple(self.without))

        ordered: list[PropertySpec] = []
        seen: set[str] = set()
        for spec in self.properties:
            if spec.name not in seen:
                ordered.append(spec)
                seen.add(spec.name)
        for parent in self.extends:
            for spec in parent.properties_in_order():
                if spec.name in seen or spec in self.without:
                    continue
                ordered.append(spec)
                seen.add(spec.name)
        object.__setattr__(self, "_ordered", tuple(ordered))
        object.__setattr__(self, "_by_name", {spec.name: spec for spec in ordered})

        ancestors: list[str] = []
        for parent in self.extends:
            for name in (parent.name, *parent.ancestors()):
                if name not in ancestors:
                    ancestors.append(name)
        object.__setattr__(self, "_ancestors", tuple(ancestors))

    def properties_in_order(self) -> tuple[PropertySpec, ...]:
        return self._ordered

    def property(self, name: str) -> Optional[PropertySpec]:
        return self._by_name.get(name)

    def ancestors(self) -> tuple[str, ...]:
        return self._ancestors

    def is_a(self, type_name: str) -> bool:
        return type_name == self.name or type_name in self._ancestors

    def declared_keys(self) -> frozenset[str]:
        """Every JSON key this type understands, language-map keys included."""
        keys = set(self._by_name)
        keys.update(spec.map_key for spec in self._ordered if spec.natural_language_map)
        return frozenset(keys)

    def __repr__(self) -> str:
        return f"TypeSchema({self.name!r})"
