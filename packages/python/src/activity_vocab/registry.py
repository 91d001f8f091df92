"""Type registry: maps a JSON ``"type"`` discriminator to an entity factory.

The registry keeps two independent views.  The *object-like* view answers
``resolve_object`` and the *link-like* view answers ``resolve_link``; a
single type name may be registered in either or both.  Factories are
zero-argument callables returning a fresh, empty
:class:`~activity_vocab.entity.VocabularyEntity` which is then asked to
deserialize the JSON object.

Registration follows the same fail-loud rules as other registries in
this codebase:

* empty or non-string names raise ``ValueError``
* non-callable factories raise ``TypeError``
* duplicates raise ``ValueError`` unless ``force=True``

The registry does no locking.  Populate it up front (or let
:func:`default_registry` populate itself on first use) and treat it as
read-only afterwards; concurrent registration must be synchronised by
the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

EntityFactory = Callable[[], Any]


class TypeRegistry:
    """Name -> factory mapping with separate object-like and link-like views."""

    def __init__(self) -> None:
        self._object_types: dict[str, EntityFactory] = {}
        self._link_types: dict[str, EntityFactory] = {}

    def register(
        self,
        type_name: str,
        factory: EntityFactory,
        *,
        as_object: bool = True,
        as_link: bool = False,
        force: bool = False,
    ) -> None:
        """Register *factory* under *type_name* in the requested views.

        Raises:
            ValueError: *type_name* is empty, no view was requested, or the
                name is already taken in a requested view and *force* is
                False.
            TypeError: *factory* is not callable.
        """
        if not isinstance(type_name, str) or not type_name.strip():
            raise ValueError(
                f"Type name must be a non-empty string, got: {type_name!r}"
            )
        if not callable(factory):
            raise TypeError(
                f"Factory must be callable, got: {type(factory).__name__}"
            )
        if not as_object and not as_link:
            raise ValueError(
                f"Type '{type_name}' must be registered as object-like, "
                "link-like, or both"
            )

        if not force:
            if as_object and type_name in self._object_types:
                raise ValueError(
                    f"Object type '{type_name}' is already registered. "
                    "Use force=True to override."
                )
            if as_link and type_name in self._link_types:
                raise ValueError(
                    f"Link type '{type_name}' is already registered. "
                    "Use force=True to override."
                )

        if as_object:
            self._object_types[type_name] = factory
        if as_link:
            self._link_types[type_name] = factory

    def unregister(self, type_name: str) -> None:
        """Remove *type_name* from both views.

        Raises:
            KeyError: *type_name* is not registered in either view.
        """
        found = False
        if type_name in self._object_types:
            del self._object_types[type_name]
            found = True
        if type_name in self._link_types:
            del self._link_types[type_name]
            found = True
        if not found:
            raise KeyError(f"Type '{type_name}' is not registered")

    def resolve_object(self, type_name: str) -> Optional[EntityFactory]:
        return self._object_types.get(type_name)

    def resolve_link(self, type_name: str) -> Optional[EntityFactory]:
        return self._link_types.get(type_name)

    def object_types(self) -> list[str]:
        """Object-like type names in registration order."""
        return list(self._object_types)

    def link_types(self) -> list[str]:
        """Link-like type names in registration order."""
        return list(self._link_types)

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._object_types or type_name in self._link_types

    def __len__(self) -> int:
        return len(set(self._object_types) | set(self._link_types))

    def __repr__(self) -> str:
        return (
            f"TypeRegistry(object_types={len(self._object_types)}, "
            f"link_types={len(self._link_types)})"
        )


def type_candidates(raw_type: Any) -> list[str]:
    """Normalise a ``"type"`` value to an ordered list of type names.

    A bare string becomes a one-element list; a list keeps its string
    entries in order and skips anything else.

    >>> type_candidates("Note")
    ['Note']
    >>> type_candidates(["Note", 7, "Article"])
    ['Note', 'Article']
    """
    if isinstance(raw_type, str):
        return [raw_type]
    if isinstance(raw_type, (list, tuple)):
        return [name for name in raw_type if isinstance(name, str)]
    return []


# ═══════════════════════════════════════════════════════════════════
# PROCESS-WIDE DEFAULT
# ═══════════════════════════════════════════════════════════════════

_default_registry: Optional[TypeRegistry] = None


def default_registry() -> TypeRegistry:
    """Return the process-wide registry, populating it on first use."""
    global _default_registry
    if _default_registry is None:
        # vocabulary imports entity, which imports this module
        from activity_vocab.vocabulary import register_vocabulary

        registry = TypeRegistry()
        register_vocabulary(registry)
        logger.debug(
            "Populated default type registry with %d types", len(registry)
        )
        _default_registry = registry
    return _default_registry


def reset_default_registry() -> None:
    """Drop the process-wide registry; the next lookup rebuilds it."""
    global _default_registry
    _default_registry = None
