"""Storage for data the schema does not model.

Two namespaces share one bag:

* *extensions* hold top-level keys the entity's schema does not declare
* *overflow* holds values stored under a declared key that no slot or
  language map can represent (for example a ``nameMap`` that is not a
  JSON object)

Keeping them apart means an extension can never shadow a declared
property.  ``"@context"`` is envelope data and is never stored.
"""

from __future__ import annotations

import copy
from typing import Any, Iterable, Iterator, Optional

CONTEXT_KEY = "@context"


class UnknownBag:
    def __init__(self, declared: Iterable[str] = frozenset()) -> None:
        self._declared = frozenset(declared)
        self.extensions: dict[str, Any] = {}
        self.overflow: dict[str, Any] = {}

    def _target(self, key: str) -> dict[str, Any]:
        return self.overflow if key in self._declared else self.extensions

    def put(self, key: str, raw: Any) -> None:
        """Store *raw* under *key*.

        Raises:
            ValueError: *key* is ``"@context"``.
            TypeError: *key* is not a string.
        """
        if not isinstance(key, str):
            raise TypeError(f"Unknown key must be a string, got {type(key).__name__}")
        if key == CONTEXT_KEY:
            raise ValueError("'@context' is envelope data and cannot be stored")
        self._target(key)[key] = copy.deepcopy(raw)

    def get(self, key: str, default: Any = None) -> Any:
        return self._target(key).get(key, default)

    def remove(self, key: str) -> Optional[Any]:
        """Remove *key* and return its value, or ``None`` if it was absent."""
        return self._target(key).pop(key, None)

    def keys(self) -> set[str]:
        return set(self.extensions) | set(self.overflow)

    def extension_keys(self) -> set[str]:
        return set(self.extensions)

    def overflow_keys(self) -> set[str]:
        return set(self.overflow)

    def items(self) -> Iterator[tuple[str, Any]]:
        """Extensions first, then overflow, each in insertion order."""
        yield from self.extensions.items()
        yield from self.overflow.items()

    def clear(self) -> None:
        self.extensions.clear()
        self.overflow.clear()

    def encode_into(self, out: dict[str, Any]) -> None:
        for key, raw in self.items():
            out[key] = copy.deepcopy(raw)

    def __contains__(self, key: object) -> bool:
        return key in self.extensions or key in self.overflow

    def __len__(self) -> int:
        return len(self.extensions) + len(self.overflow)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnknownBag):
            return NotImplemented
        return self.extensions == other.extensions and self.overflow == other.overflow

    def __repr__(self) -> str:
        return f"UnknownBag(extensions={self.extensions!r}, overflow={self.overflow!r})"
