"""
VocabularyEntity: the whole-object codec.

An entity is driven by its :class:`~activity_vocab.schema.TypeSchema`.
It owns one multiplicity per declared property, one language map per
language-mappable property, and an :class:`~activity_vocab.unknown.UnknownBag`.

Deserialize
    Every key of the input map is dispatched to its declared property,
    its language map, or the unknown bag.  ``"@context"`` is skipped.
    State is rebuilt from scratch, so decoding the same input twice gives
    the same entity, and a failure leaves the previous state untouched.

Serialize
    The unknown bag is written first, then every declared property in
    schema order (overwriting stale bag entries of the same name).  The
    entity's own type name is appended to ``type`` when missing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Optional

from activity_vocab.errors import MalformedLanguageMap, UnhandledType
from activity_vocab.kinds import ANY_VALUE
from activity_vocab.langmap import LanguageMap, decode_language_map, encode_language_map
from activity_vocab.multiplicity import (
    PropertyMultiplicity,
    Repeated,
    decode_property,
    encode_property,
    new_multiplicity,
)
from activity_vocab.registry import TypeRegistry, default_registry
from activity_vocab.schema import TypeSchema
from activity_vocab.slot import ABSENT, IRI, Primitive, Unknown
from activity_vocab.unknown import CONTEXT_KEY, UnknownBag

logger = logging.getLogger(__name__)

TYPE_PROPERTY = "type"

# Forms of the public collection address seen in the wild.
PUBLIC_ADDRESSES = frozenset({
    "https://www.w3.org/ns/activitystreams#Public",
    "as:Public",
    "Public",
})

_ADDRESSING_PROPERTIES = ("to", "bto", "cc", "bcc")


@dataclass
class DecodeReport:
    """Non-fatal findings from :meth:`VocabularyEntity.deserialize`.

    Attributes:
        unknown_keys: Top-level keys the schema does not declare.
        unknown_values: Declared properties holding at least one value
            that no allowed kind accepted.
        language_map_errors: Malformed language maps or map entries.
    """

    unknown_keys: list[str] = field(default_factory=list)
    unknown_values: list[str] = field(default_factory=list)
    language_map_errors: list[MalformedLanguageMap] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not (self.unknown_keys or self.unknown_values or self.language_map_errors)


class VocabularyEntity:
    """A schema-driven ActivityStreams object."""

    def __init__(self, schema: TypeSchema) -> None:
        self.schema = schema
        self._reset()

    def _reset(self) -> None:
        self._properties, self._language_maps, self.unknown = self._empty_state()

    def _empty_state(
        self,
    ) -> tuple[dict[str, PropertyMultiplicity], dict[str, LanguageMap], UnknownBag]:
        properties = {
            spec.name: new_multiplicity(spec)
            for spec in self.schema.properties_in_order()
        }
        language_maps = {
            spec.name: LanguageMap()
            for spec in self.schema.properties_in_order()
            if spec.natural_language_map
        }
        return properties, language_maps, UnknownBag(self.schema.declared_keys())

    # ── Accessors ──────────────────────────────────────────────────

    @property
    def type_name(self) -> str:
        return self.schema.name

    def property(self, name: str) -> PropertyMultiplicity:
        """Return the multiplicity of declared property *name*.

        Raises:
            KeyError: *name* is not declared by this entity's schema.
        """
        try:
            return self._properties[name]
        except KeyError:
            raise KeyError(
                f"'{self.type_name}' has no property '{name}'"
            ) from None

    def __getitem__(self, name: str) -> PropertyMultiplicity:
        return self.property(name)

    def __contains__(self, name: object) -> bool:
        return name in self._properties

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def language_map(self, name: str) -> LanguageMap:
        """Return the language map attached to property *name*.

        Raises:
            KeyError: *name* is not a language-mappable property.
        """
        try:
            return self._language_maps[name]
        except KeyError:
            raise KeyError(
                f"'{self.type_name}' property '{name}' has no language map"
            ) from None

    def types(self) -> list[str]:
        """String values of the ``type`` property, in order."""
        multiplicity = self._properties.get(TYPE_PROPERTY)
        if multiplicity is None:
            return []
        return [
            slot.value
            for slot in multiplicity.slots()
            if isinstance(slot, Primitive) and isinstance(slot.value, str)
        ]

    def has_type(self, type_name: str) -> bool:
        return type_name == self.type_name or type_name in self.types()

    def is_activity(self) -> bool:
        return self.schema.is_a("Activity")

    def is_public(self) -> bool:
        """Whether any addressing property names the public collection."""
        for name in _ADDRESSING_PROPERTIES:
            multiplicity = self._properties.get(name)
            if multiplicity is None:
                continue
            for slot in multiplicity.slots():
                if isinstance(slot, IRI):
                    address = slot.uri
                elif isinstance(slot, Unknown) and isinstance(slot.raw, str):
                    # bare "Public" has no scheme, so it never decodes as an IRI
                    address = slot.raw
                else:
                    continue
                if address in PUBLIC_ADDRESSES:
                    return True
        return False

    # ── Codec ──────────────────────────────────────────────────────

    def deserialize(
        self,
        m: Mapping[str, Any],
        *,
        registry: Optional[TypeRegistry] = None,
        strict: bool = False,
    ) -> DecodeReport:
        """Replace this entity's state with the decoded contents of *m*.

        Args:
            m: A decoded JSON object.
            registry: Registry used to resolve embedded objects; defaults
                to :func:`~activity_vocab.registry.default_registry`.
            strict: Raise instead of keeping unrecognised property values.

        Raises:
            TypeError: *m* is not a mapping.
            DecodeFailure: A declared property's value matched none of its
                kinds and the property (or *strict*) forbids ``Unknown``.
        """
        if not isinstance(m, Mapping):
            raise TypeError(
                f"'{self.type_name}' can only decode a JSON object, "
                f"got {type(m).__name__}"
            )
        if registry is None:
            registry = default_registry()

        properties, language_maps, unknown = self._empty_state()
        map_keys = {
            spec.map_key: spec.name
            for spec in self.schema.properties_in_order()
            if spec.natural_language_map
        }
        report = DecodeReport()

        for key, raw in m.items():
            if key == CONTEXT_KEY:
                continue
            spec = self.schema.property(key)
            if spec is not None:
                multiplicity = decode_property(spec, raw, registry=registry, strict=strict)
                properties[key] = multiplicity
                if any(isinstance(slot, Unknown) for slot in multiplicity.slots()):
                    report.unknown_values.append(key)
            elif key in map_keys:
                decoded, errors = decode_language_map(key, raw)
                language_maps[map_keys[key]] = decoded
                report.language_map_errors.extend(errors)
                if not isinstance(raw, Mapping):
                    unknown.put(key, raw)
            else:
                logger.debug("'%s' keeps undeclared key %r", self.type_name, key)
                unknown.put(key, raw)
                report.unknown_keys.append(key)

        self._properties, self._language_maps, self.unknown = properties, language_maps, unknown
        return report

    def _inject_type(self) -> None:
        multiplicity = self._properties.get(TYPE_PROPERTY)
        if multiplicity is None:
            return
        for slot in multiplicity.slots():
            if isinstance(slot, Primitive) and slot.value == self.type_name:
                return
        logger.debug("Injecting type name %r", self.type_name)
        type_slot = Primitive(ANY_VALUE, self.type_name)
        if isinstance(multiplicity, Repeated):
            multiplicity.append(type_slot)
        else:
            multiplicity.set(type_slot)

    def serialize(self) -> dict[str, Any]:
        """Encode this entity as a JSON-compatible dict (no ``@context``).

        Raises:
            EncodeFailure: A populated slot cannot be serialized.
        """
        self._inject_type()
        out: dict[str, Any] = {}
        self.unknown.encode_into(out)
        for spec in self.schema.properties_in_order():
            raw = encode_property(self._properties[spec.name])
            if raw is not ABSENT:
                out[spec.name] = raw
            if spec.natural_language_map:
                encoded_map = encode_language_map(self._language_maps[spec.name])
                if encoded_map is not ABSENT:
                    out[spec.map_key] = encoded_map
        if TYPE_PROPERTY not in self._properties:
            out.setdefault(TYPE_PROPERTY, self.type_name)
        return out

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VocabularyEntity):
            return NotImplemented
        return (
            self.type_name == other.type_name
            and self._properties == other._properties
            and self._language_maps == other._language_maps
            and self.unknown == other.unknown
        )

    def __repr__(self) -> str:
        populated = [
            name for name, multiplicity in self._properties.items()
            if not multiplicity.is_empty()
        ]
        return f"VocabularyEntity({self.type_name!r}, properties={populated!r})"


def create(type_name: str, registry: Optional[TypeRegistry] = None) -> VocabularyEntity:
    """Build an empty entity of a registered type.

    Raises:
        UnhandledType: *type_name* is not registered.
    """
    if registry is None:
        registry = default_registry()
    factory = registry.resolve_object(type_name) or registry.resolve_link(type_name)
    if factory is None:
        raise UnhandledType(f"No vocabulary type registered as '{type_name}'")
    return factory()
