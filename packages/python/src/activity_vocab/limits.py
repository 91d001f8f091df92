"""Resource limits applied to incoming documents before decoding.

``max_document_size``
    Length of the JSON text, in characters.
``max_graph_depth``
    Nesting of JSON objects and arrays.
``max_embedded_depth``
    Nesting of embedded entities, i.e. objects carrying a ``"type"``.
    An ``Announce`` of a ``Create`` of a ``Note`` has an embedded depth
    of 3.  Decoding recurses once per embedded entity.
"""

from __future__ import annotations

import json
from typing import Any, Optional

DEFAULT_RESOURCE_LIMITS = {
    "max_graph_depth": 100,
    "max_document_size": 10 * 1024 * 1024,  # 10 MB of JSON text
    "max_embedded_depth": 32,
}


def _json_text(document: Any) -> str:
    if isinstance(document, str):
        return document
    if isinstance(document, (dict, list)):
        try:
            return json.dumps(document)
        except (TypeError, ValueError) as exc:
            raise TypeError(f"Document is not JSON-serializable: {exc}") from exc
    raise TypeError(
        f"Document must be a str, dict, or list, got: {type(document).__name__}"
    )


def enforce_resource_limits(
    document: str | dict | Any,
    limits: Optional[dict[str, int]] = None,
) -> Any:
    """Check *document* against size and nesting limits.

    *document* is either JSON text or an already-decoded value.  Returns
    the decoded value so callers that received text need not parse twice.

    Raises:
        TypeError: *document* is None, not JSON-serializable, or of an
            unsupported type.
        ValueError: a limit is exceeded or the text is not valid JSON.
    """
    if document is None:
        raise TypeError("Document must not be None")
    resolved = {**DEFAULT_RESOURCE_LIMITS, **(limits or {})}

    text = _json_text(document)
    if len(text) > resolved["max_document_size"]:
        raise ValueError(
            f"Document size {len(text)} exceeds max_document_size "
            f"{resolved['max_document_size']}"
        )
    if isinstance(document, str):
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Document is not valid JSON: {exc}") from exc

    _check_nesting(
        document, resolved["max_graph_depth"], resolved["max_embedded_depth"]
    )
    return document


def _check_nesting(document: Any, max_depth: int, max_embedded: int) -> None:
    # Iterative walk; stops at the first container past either limit.
    pending = [(document, 0, 0)]
    while pending:
        value, depth, embedded = pending.pop()
        if isinstance(value, dict):
            children = list(value.values())
            if "type" in value:
                embedded += 1
        elif isinstance(value, list):
            children = value
        else:
            continue
        depth += 1
        if depth > max_depth:
            raise ValueError(
                f"Document nesting depth exceeds max_graph_depth {max_depth}"
            )
        if embedded > max_embedded:
            raise ValueError(
                f"Document embeds entities deeper than max_embedded_depth {max_embedded}"
            )
        pending.extend((child, depth, embedded) for child in children)
