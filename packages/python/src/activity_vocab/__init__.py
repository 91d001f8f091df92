"""
activity-vocab: a schema-driven codec for the ActivityStreams 2.0 vocabulary

Decodes JSON objects into vocabulary entities whose properties may hold
literals, embedded objects, links, bare IRIs, or unrecognised values, and
encodes them back without losing data.  Wraps PyLD for JSON-LD processing.
"""

__version__ = "0.1.0"

from activity_vocab.errors import (
    ActivityVocabError,
    KindMismatch,
    DecodeFailure,
    MalformedLanguageMap,
    EncodeFailure,
    IndexOutOfRange,
    UnhandledType,
    NoCallbackMatch,
)
from activity_vocab.kinds import (
    PrimitiveKind,
    XSD_STRING,
    RDF_LANG_STRING,
    XSD_ANY_URI,
    XSD_DATE_TIME,
    XSD_DURATION,
    XSD_FLOAT,
    XSD_BOOLEAN,
    XSD_NON_NEGATIVE_INTEGER,
    BCP47_LANGUAGE_TAG,
    MIME_MEDIA_TYPE,
    LINK_RELATION,
    UNITS,
    ANY_VALUE,
    parse_date_time,
    format_date_time,
    parse_duration,
    format_duration,
)
from activity_vocab.registry import (
    TypeRegistry,
    type_candidates,
    default_registry,
    reset_default_registry,
)
from activity_vocab.slot import (
    ABSENT,
    IRI_KIND,
    ObjectKind,
    LinkKind,
    Primitive,
    TypedObject,
    TypedLink,
    IRI,
    Unknown,
    decode_slot,
    encode_slot,
)
from activity_vocab.multiplicity import (
    Functional,
    Repeated,
    decode_property,
    encode_property,
)
from activity_vocab.langmap import LanguageMap, decode_language_map, encode_language_map
from activity_vocab.unknown import UnknownBag
from activity_vocab.schema import PropertySpec, TypeSchema
from activity_vocab.entity import VocabularyEntity, DecodeReport, create
from activity_vocab.vocabulary import (
    ACTIVITY_STREAMS_CONTEXT,
    SCHEMAS,
    register_vocabulary,
)
from activity_vocab.resolver import Resolver, to_entity
from activity_vocab.limits import DEFAULT_RESOURCE_LIMITS, enforce_resource_limits
from activity_vocab.processor import ActivityStreamsProcessor, static_document_loader

__all__ = [
    "ActivityStreamsProcessor",
    "static_document_loader",
    # Errors
    "ActivityVocabError",
    "KindMismatch",
    "DecodeFailure",
    "MalformedLanguageMap",
    "EncodeFailure",
    "IndexOutOfRange",
    "UnhandledType",
    "NoCallbackMatch",
    # Primitive kinds
    "PrimitiveKind",
    "XSD_STRING",
    "RDF_LANG_STRING",
    "XSD_ANY_URI",
    "XSD_DATE_TIME",
    "XSD_DURATION",
    "XSD_FLOAT",
    "XSD_BOOLEAN",
    "XSD_NON_NEGATIVE_INTEGER",
    "BCP47_LANGUAGE_TAG",
    "MIME_MEDIA_TYPE",
    "LINK_RELATION",
    "UNITS",
    "ANY_VALUE",
    "parse_date_time",
    "format_date_time",
    "parse_duration",
    "format_duration",
    # Registry
    "TypeRegistry",
    "type_candidates",
    "default_registry",
    "reset_default_registry",
    # Slots
    "ABSENT",
    "IRI_KIND",
    "ObjectKind",
    "LinkKind",
    "Primitive",
    "TypedObject",
    "TypedLink",
    "IRI",
    "Unknown",
    "decode_slot",
    "encode_slot",
    # Multiplicity
    "Functional",
    "Repeated",
    "decode_property",
    "encode_property",
    # Language maps & unknown values
    "LanguageMap",
    "decode_language_map",
    "encode_language_map",
    "UnknownBag",
    # Schemas & entities
    "PropertySpec",
    "TypeSchema",
    "VocabularyEntity",
    "DecodeReport",
    "create",
    "ACTIVITY_STREAMS_CONTEXT",
    "SCHEMAS",
    "register_vocabulary",
    # Resolution
    "Resolver",
    "to_entity",
    # Limits
    "DEFAULT_RESOURCE_LIMITS",
    "enforce_resource_limits",
]
