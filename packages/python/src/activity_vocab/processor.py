"""
ActivityStreamsProcessor: codec plus JSON-LD processing.

Decodes and encodes ActivityStreams documents with the vocabulary codec,
attaches or strips the ``@context`` envelope, and hands the JSON-LD
algorithms (expansion, compaction, RDF conversion) to PyLD.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Mapping, Optional, Union

from pyld import jsonld

from activity_vocab.entity import VocabularyEntity
from activity_vocab.limits import DEFAULT_RESOURCE_LIMITS, enforce_resource_limits
from activity_vocab.registry import TypeRegistry
from activity_vocab.resolver import to_entity
from activity_vocab.unknown import CONTEXT_KEY
from activity_vocab.vocabulary import ACTIVITY_STREAMS_CONTEXT

logger = logging.getLogger(__name__)

DocumentLoader = Callable[..., dict[str, Any]]


def static_document_loader(documents: Mapping[str, Any]) -> DocumentLoader:
    """Build a PyLD document loader that serves *documents* from memory.

    Keys are URLs, values are the decoded JSON documents.  Unknown URLs
    raise ``JsonLdError`` so no request ever leaves the process.

    >>> loader = static_document_loader({"https://example.org/ctx": {"@context": {}}})
    >>> loader("https://example.org/ctx")["document"]
    {'@context': {}}
    """
    served = dict(documents)

    def loader(url: str, options: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        if url not in served:
            raise jsonld.JsonLdError(
                f"No document available offline for {url}",
                "jsonld.LoadDocumentError",
                {"url": url},
                code="loading document failed",
            )
        return {"contextUrl": None, "documentUrl": url, "document": served[url]}

    return loader


class ActivityStreamsProcessor:
    """Vocabulary codec with JSON-LD processing through PyLD."""

    def __init__(
        self,
        resource_limits: Optional[dict[str, int]] = None,
        registry: Optional[TypeRegistry] = None,
        context: Any = ACTIVITY_STREAMS_CONTEXT,
        document_loader: Optional[DocumentLoader] = None,
        strict: bool = False,
    ):
        self._limits = {**DEFAULT_RESOURCE_LIMITS, **(resource_limits or {})}
        self._registry = registry
        self._context = context
        self._document_loader = document_loader
        self._strict = strict

    def _options(self, kwargs: dict[str, Any]) -> dict[str, Any]:
        options = dict(kwargs)
        if self._document_loader is not None:
            options.setdefault("documentLoader", self._document_loader)
        return options

    def _document(self, entity_or_doc: Union[VocabularyEntity, Mapping[str, Any]]) -> dict[str, Any]:
        if isinstance(entity_or_doc, VocabularyEntity):
            return self.serialize(entity_or_doc)
        doc = dict(entity_or_doc)
        enforce_resource_limits(doc, self._limits)
        return doc

    # ── Codec ────────────────────────────────────────────────────

    def deserialize(self, doc: Union[str, Mapping[str, Any]]) -> VocabularyEntity:
        """Decode JSON text or a decoded object into a vocabulary entity.

        Raises:
            ValueError: the document breaks a resource limit or is not JSON.
            TypeError: the document is not a JSON object.
            UnhandledType: the document's ``type`` is not registered.
        """
        if isinstance(doc, Mapping):
            doc = dict(doc)
        parsed = enforce_resource_limits(doc, self._limits)
        if not isinstance(parsed, dict):
            raise TypeError(
                f"An ActivityStreams document must be a JSON object, got {type(parsed).__name__}"
            )
        if CONTEXT_KEY not in parsed:
            logger.debug("Document has no @context; decoding it as ActivityStreams")
        return to_entity(parsed, registry=self._registry, strict=self._strict)

    def serialize(self, entity: VocabularyEntity, include_context: bool = True) -> dict[str, Any]:
        body = entity.serialize()
        if not include_context:
            return body
        return {CONTEXT_KEY: self._context, **body}

    def dumps(self, entity: VocabularyEntity, **kwargs: Any) -> str:
        """Serialize *entity* with ``@context`` to JSON text."""
        return json.dumps(self.serialize(entity), **kwargs)

    # ── JSON-LD Operations ───────────────────────────────────────

    def expand(self, entity_or_doc: Any, **kwargs: Any) -> list[dict[str, Any]]:
        """Expand an entity or document with PyLD."""
        return jsonld.expand(self._document(entity_or_doc), self._options(kwargs))

    def compact(self, entity_or_doc: Any, ctx: Any = None, **kwargs: Any) -> dict[str, Any]:
        """Compact against *ctx* (the configured context by default)."""
        if ctx is None:
            ctx = self._context
        return jsonld.compact(self._document(entity_or_doc), ctx, self._options(kwargs))

    def to_rdf(self, entity_or_doc: Any, **kwargs: Any) -> str:
        """Convert to N-Quads."""
        options = self._options(kwargs)
        options["format"] = "application/n-quads"
        return jsonld.to_rdf(self._document(entity_or_doc), options)
