"""Error taxonomy for the ActivityStreams vocabulary codec.

Every exception also derives from the built-in family callers would
expect (``ValueError``, ``IndexError``, ``KeyError``), so code that only
knows the standard library still catches them.
"""

from __future__ import annotations

from typing import Any, Optional


class ActivityVocabError(Exception):
    """Base class for all codec errors."""


class KindMismatch(ActivityVocabError, ValueError):
    """A single kind parser could not interpret a raw value.

    Raised by :mod:`activity_vocab.kinds` parsers and always caught by
    the slot codec, which moves on to the next declared kind.
    """

    def __init__(self, kind: str, raw: Any, reason: str = "") -> None:
        self.kind = kind
        self.raw = raw
        message = f"{raw!r} cannot be interpreted as {kind}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class DecodeFailure(ActivityVocabError, ValueError):
    """A declared property's value satisfied none of its allowed kinds."""

    def __init__(
        self,
        property_name: str,
        raw: Any,
        message: Optional[str] = None,
    ) -> None:
        self.property_name = property_name
        self.raw = raw
        super().__init__(
            message or f"Property '{property_name}' cannot decode value {raw!r}"
        )


class MalformedLanguageMap(DecodeFailure):
    """A natural-language map, or one of its entries, is not well formed.

    ``tag`` is ``None`` when the map value itself is not a JSON object.
    """

    def __init__(self, property_name: str, raw: Any, tag: Optional[str] = None) -> None:
        self.tag = tag
        if tag is None:
            message = (
                f"Language map '{property_name}' must be an object, "
                f"got {type(raw).__name__}"
            )
        else:
            message = (
                f"Language map '{property_name}' entry {tag!r} must be a string, "
                f"got {type(raw).__name__}"
            )
        super().__init__(property_name, raw, message)


class EncodeFailure(ActivityVocabError, ValueError):
    """A populated slot could not be serialized with its kind's serializer."""

    def __init__(self, kind: str, value: Any, reason: str = "") -> None:
        self.kind = kind
        self.value = value
        message = f"{value!r} cannot be serialized as {kind}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class IndexOutOfRange(ActivityVocabError, IndexError):
    """Indexed access on a repeated property with an invalid index."""

    def __init__(self, property_name: str, index: int, length: int) -> None:
        self.property_name = property_name
        self.index = index
        self.length = length
        super().__init__(
            f"Index {index} out of range for property '{property_name}' "
            f"with {length} value(s)"
        )


class UnhandledType(ActivityVocabError, KeyError):
    """A JSON object's ``type`` names no registered vocabulary type."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class NoCallbackMatch(ActivityVocabError, LookupError):
    """A resolved entity has no callback registered for its type."""
