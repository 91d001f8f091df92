"""Top-level type resolution and callback dispatch.

:func:`to_entity` turns a decoded JSON object into the vocabulary entity
named by its ``"type"``.  :class:`Resolver` goes one step further and
hands the entity to a callback chosen by type name, which is the usual
shape of an inbox or outbox handler.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from activity_vocab.entity import VocabularyEntity
from activity_vocab.errors import DecodeFailure, NoCallbackMatch, UnhandledType
from activity_vocab.registry import TypeRegistry, default_registry, type_candidates

logger = logging.getLogger(__name__)

EntityCallback = Callable[[VocabularyEntity], Any]


def to_entity(
    m: Mapping[str, Any],
    *,
    registry: Optional[TypeRegistry] = None,
    strict: bool = False,
) -> VocabularyEntity:
    """Decode *m* into the first registered type its ``"type"`` names.

    Each candidate name is looked up in the object-like view, then the
    link-like view.  The first candidate that both resolves and decodes
    wins; a candidate whose decode fails is skipped unless *strict*.

    Raises:
        UnhandledType: *m* has no ``"type"``, or none of its type names
            is registered.
        DecodeFailure: every registered candidate rejected a declared
            property (the last failure is raised), or, when *strict*,
            the first one did.
    """
    if not isinstance(m, Mapping):
        raise TypeError(f"Expected a JSON object, got {type(m).__name__}")
    if registry is None:
        registry = default_registry()
    if "type" not in m:
        raise UnhandledType("Cannot resolve a JSON object without a 'type'")

    last_failure: Optional[DecodeFailure] = None
    for name in type_candidates(m["type"]):
        factory = registry.resolve_object(name) or registry.resolve_link(name)
        if factory is None:
            continue
        entity = factory()
        try:
            entity.deserialize(m, registry=registry, strict=strict)
        except DecodeFailure as exc:
            if strict:
                raise
            logger.debug("Candidate type %r rejected: %s", name, exc)
            last_failure = exc
            continue
        return entity
    if last_failure is not None:
        raise last_failure
    raise UnhandledType(f"No vocabulary type registered for type {m['type']!r}")


class Resolver:
    """Dispatches decoded entities to per-type callbacks.

    Example::

        resolver = Resolver({
            "Create": handle_create,
            "Follow": handle_follow,
        })
        resolver.resolve(json.loads(body))
    """

    def __init__(
        self,
        callbacks: Mapping[str, EntityCallback],
        *,
        registry: Optional[TypeRegistry] = None,
        strict: bool = False,
    ) -> None:
        for name, callback in callbacks.items():
            if not callable(callback):
                raise TypeError(
                    f"Callback for type '{name}' must be callable, "
                    f"got: {type(callback).__name__}"
                )
        self._callbacks = dict(callbacks)
        self._registry = registry
        self._strict = strict

    def resolve(self, m: Mapping[str, Any]) -> Any:
        """Decode *m* and return the matching callback's result.

        Raises:
            UnhandledType: *m* cannot be decoded into a registered type.
            NoCallbackMatch: no callback is registered for the decoded type.
        """
        entity = to_entity(m, registry=self._registry, strict=self._strict)
        callback = self._callbacks.get(entity.type_name)
        if callback is None:
            raise NoCallbackMatch(
                f"No callback registered for type '{entity.type_name}'; "
                f"available: {sorted(self._callbacks)}"
            )
        logger.debug("Dispatching %r to its callback", entity.type_name)
        return callback(entity)
