"""Natural-language maps: BCP 47 language tag -> string.

A language map sits beside a textual property (``name`` -> ``nameMap``)
and lives independently of it: either may be set while the other is
empty.  An empty map is omitted on encode; a non-empty one is always
written as a JSON object, even with a single entry.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Iterator, Mapping, Optional

from activity_vocab.errors import MalformedLanguageMap
from activity_vocab.slot import ABSENT


class LanguageMap(MutableMapping):
    """A ``str -> str`` mapping that refuses anything else."""

    def __init__(self, entries: Optional[Mapping[str, str]] = None) -> None:
        self._entries: dict[str, str] = {}
        if entries:
            self.update(entries)

    def __getitem__(self, tag: str) -> str:
        return self._entries[tag]

    def __setitem__(self, tag: str, value: str) -> None:
        if not isinstance(tag, str):
            raise TypeError(f"Language tag must be a string, got {type(tag).__name__}")
        if not isinstance(value, str):
            raise TypeError(
                f"Value for language tag {tag!r} must be a string, "
                f"got {type(value).__name__}"
            )
        self._entries[tag] = value

    def __delitem__(self, tag: str) -> None:
        del self._entries[tag]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LanguageMap):
            return self._entries == other._entries
        if isinstance(other, Mapping):
            return self._entries == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"LanguageMap({self._entries!r})"


def decode_language_map(
    property_name: str, raw: Any
) -> tuple[LanguageMap, list[MalformedLanguageMap]]:
    """Decode *raw* into a :class:`LanguageMap`, collecting per-key errors.

    A non-object *raw* produces an empty map and one error.  Entries whose
    value is not a string are dropped and reported individually; the
    remaining entries are still decoded.
    """
    errors: list[MalformedLanguageMap] = []
    result = LanguageMap()
    if not isinstance(raw, Mapping):
        errors.append(MalformedLanguageMap(property_name, raw))
        return result, errors
    for tag, value in raw.items():
        if not isinstance(value, str):
            errors.append(MalformedLanguageMap(property_name, value, tag=tag))
            continue
        result[tag] = value
    return result, errors


def encode_language_map(language_map: Mapping[str, str]) -> Any:
    if not language_map:
        return ABSENT
    return dict(language_map)
