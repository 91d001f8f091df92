"""
ActivityStreams 2.0 vocabulary declarations.

Declares the core types (Object, Link, Activity, IntransitiveActivity,
Collection, OrderedCollection, CollectionPage, OrderedCollectionPage),
the extended types, and the ActivityPub actor properties, as
:class:`~activity_vocab.schema.TypeSchema` instances.

Ranges list kinds in decode priority order.  Every property whose range
lacks ``xsd:anyURI`` also accepts a bare IRI as its last kind.  A
property whose range is exactly ``xsd:anyURI`` rejects anything else
instead of keeping it as an unknown value.
"""

from __future__ import annotations

from functools import partial
from typing import Any

from activity_vocab.entity import VocabularyEntity
from activity_vocab.kinds import (
    ANY_VALUE,
    BCP47_LANGUAGE_TAG,
    LINK_RELATION,
    MIME_MEDIA_TYPE,
    RDF_LANG_STRING,
    UNITS,
    XSD_ANY_URI,
    XSD_BOOLEAN,
    XSD_DATE_TIME,
    XSD_DURATION,
    XSD_FLOAT,
    XSD_NON_NEGATIVE_INTEGER,
    XSD_STRING,
)
from activity_vocab.registry import TypeRegistry
from activity_vocab.schema import PropertySpec, TypeSchema
from activity_vocab.slot import IRI_KIND, LinkKind, ObjectKind

AS_NS = "https://www.w3.org/ns/activitystreams#"
ACTIVITY_STREAMS_CONTEXT = "https://www.w3.org/ns/activitystreams"


def _prop(
    name: str,
    *kinds: Any,
    functional: bool = False,
    natural_language_map: bool = False,
) -> PropertySpec:
    kinds_list = list(kinds)
    if XSD_ANY_URI not in kinds_list:
        kinds_list.append(IRI_KIND)
    return PropertySpec(
        name,
        tuple(kinds_list),
        functional=functional,
        natural_language_map=natural_language_map,
        allow_unknown=kinds_list != [XSD_ANY_URI],
        uri=AS_NS + name,
    )


_OBJECT = ObjectKind("Object")
_LINK = LinkKind("Link")
_IMAGE = ObjectKind("Image")
_COLLECTION = ObjectKind("Collection")
_ORDERED_COLLECTION = ObjectKind("OrderedCollection")
_COLLECTION_PAGE = ObjectKind("CollectionPage")
_ORDERED_COLLECTION_PAGE = ObjectKind("OrderedCollectionPage")


# ═══════════════════════════════════════════════════════════════════
# PROPERTIES
# ═══════════════════════════════════════════════════════════════════

ID = PropertySpec("id", (XSD_ANY_URI,), functional=True, allow_unknown=False, uri="@id")
TYPE = PropertySpec("type", (ANY_VALUE,), uri="@type")

ACTOR = _prop("actor", _OBJECT, _LINK)
ATTACHMENT = _prop("attachment", _OBJECT, _LINK)
ATTRIBUTED_TO = _prop("attributedTo", _OBJECT, _LINK)
AUDIENCE = _prop("audience", _OBJECT, _LINK)
BCC = _prop("bcc", _OBJECT, _LINK)
BTO = _prop("bto", _OBJECT, _LINK)
CC = _prop("cc", _OBJECT, _LINK)
CONTEXT = _prop("context", _OBJECT, _LINK)
CURRENT = _prop("current", _COLLECTION_PAGE, _LINK, functional=True)
CURRENT_ORDERED = _prop("current", _ORDERED_COLLECTION_PAGE, _LINK, functional=True)
FIRST = _prop("first", _COLLECTION_PAGE, _LINK, functional=True)
FIRST_ORDERED = _prop("first", _ORDERED_COLLECTION_PAGE, _LINK, functional=True)
GENERATOR = _prop("generator", _OBJECT, _LINK)
ICON = _prop("icon", _IMAGE, _LINK)
IMAGE = _prop("image", _IMAGE, _LINK)
IN_REPLY_TO = _prop("inReplyTo", _OBJECT, _LINK)
INSTRUMENT = _prop("instrument", _OBJECT, _LINK)
LAST = _prop("last", _COLLECTION_PAGE, _LINK, functional=True)
LAST_ORDERED = _prop("last", _ORDERED_COLLECTION_PAGE, _LINK, functional=True)
LOCATION = _prop("location", _OBJECT, _LINK)
ITEMS = _prop("items", _OBJECT, _LINK)
ORDERED_ITEMS = _prop("orderedItems", _OBJECT, _LINK)
ONE_OF = _prop("oneOf", _OBJECT, _LINK)
ANY_OF = _prop("anyOf", _OBJECT, _LINK)
CLOSED = _prop("closed", XSD_DATE_TIME, XSD_BOOLEAN, _OBJECT, _LINK)
ORIGIN = _prop("origin", _OBJECT, _LINK)
NEXT = _prop("next", _COLLECTION_PAGE, _LINK, functional=True)
NEXT_ORDERED = _prop("next", _ORDERED_COLLECTION_PAGE, _LINK, functional=True)
OBJECT = _prop("object", _OBJECT)
PREV = _prop("prev", _COLLECTION_PAGE, _LINK, functional=True)
PREV_ORDERED = _prop("prev", _ORDERED_COLLECTION_PAGE, _LINK, functional=True)
PREVIEW = _prop("preview", _OBJECT, _LINK)
RESULT = _prop("result", _OBJECT, _LINK)
REPLIES = _prop("replies", _COLLECTION, functional=True)
TAG = _prop("tag", _OBJECT, _LINK)
TARGET = _prop("target", _OBJECT, _LINK)
TO = _prop("to", _OBJECT, _LINK)
URL = _prop("url", XSD_ANY_URI, _LINK)
ACCURACY = _prop("accuracy", XSD_FLOAT, functional=True)
ALTITUDE = _prop("altitude", XSD_FLOAT, functional=True)
# xsd:string is tried first, so rdf:langString is never selected on decode.
CONTENT = _prop("content", XSD_STRING, RDF_LANG_STRING, natural_language_map=True)
NAME = _prop("name", XSD_STRING, RDF_LANG_STRING, natural_language_map=True)
SUMMARY = _prop("summary", XSD_STRING, RDF_LANG_STRING, natural_language_map=True)
DURATION = _prop("duration", XSD_DURATION, functional=True)
HEIGHT = _prop("height", XSD_NON_NEGATIVE_INTEGER, functional=True)
HREF = _prop("href", XSD_ANY_URI, functional=True)
HREFLANG = _prop("hreflang", BCP47_LANGUAGE_TAG, functional=True)
PART_OF = _prop("partOf", _LINK, _COLLECTION, functional=True)
LATITUDE = _prop("latitude", XSD_FLOAT, functional=True)
LONGITUDE = _prop("longitude", XSD_FLOAT, functional=True)
MEDIA_TYPE = _prop("mediaType", MIME_MEDIA_TYPE, functional=True)
END_TIME = _prop("endTime", XSD_DATE_TIME, functional=True)
PUBLISHED = _prop("published", XSD_DATE_TIME, functional=True)
START_TIME = _prop("startTime", XSD_DATE_TIME, functional=True)
RADIUS = _prop("radius", XSD_FLOAT, functional=True)
REL = _prop("rel", LINK_RELATION)
START_INDEX = _prop("startIndex", XSD_NON_NEGATIVE_INTEGER, functional=True)
TOTAL_ITEMS = _prop("totalItems", XSD_NON_NEGATIVE_INTEGER, functional=True)
UNITS_PROPERTY = _prop("units", UNITS, XSD_ANY_URI, functional=True)
UPDATED = _prop("updated", XSD_DATE_TIME, functional=True)
WIDTH = _prop("width", XSD_NON_NEGATIVE_INTEGER, functional=True)
SUBJECT = _prop("subject", _OBJECT, _LINK, functional=True)
RELATIONSHIP = _prop("relationship", _OBJECT, functional=True)
DESCRIBES = _prop("describes", _OBJECT, functional=True)
FORMER_TYPE = _prop("formerType", XSD_STRING, _OBJECT)
DELETED = _prop("deleted", XSD_DATE_TIME, functional=True)

# ── ActivityPub ──
SOURCE = _prop("source", _OBJECT, functional=True)
INBOX = _prop("inbox", _ORDERED_COLLECTION, XSD_ANY_URI, functional=True)
OUTBOX = _prop("outbox", _ORDERED_COLLECTION, XSD_ANY_URI, functional=True)
FOLLOWING = _prop("following", _COLLECTION, _ORDERED_COLLECTION, XSD_ANY_URI, functional=True)
FOLLOWERS = _prop("followers", _COLLECTION, _ORDERED_COLLECTION, XSD_ANY_URI, functional=True)
LIKED = _prop("liked", _COLLECTION, _ORDERED_COLLECTION, XSD_ANY_URI, functional=True)
LIKES = _prop("likes", _COLLECTION, _ORDERED_COLLECTION, XSD_ANY_URI, functional=True)
STREAMS = _prop("streams", XSD_ANY_URI)
PREFERRED_USERNAME = _prop(
    "preferredUsername", XSD_STRING, functional=True, natural_language_map=True,
)
ENDPOINTS = _prop("endpoints", _OBJECT, functional=True)
PROXY_URL = _prop("proxyUrl", XSD_ANY_URI, functional=True)
OAUTH_AUTHORIZATION_ENDPOINT = _prop("oauthAuthorizationEndpoint", XSD_ANY_URI, functional=True)
OAUTH_TOKEN_ENDPOINT = _prop("oauthTokenEndpoint", XSD_ANY_URI, functional=True)
PROVIDE_CLIENT_KEY = _prop("provideClientKey", XSD_ANY_URI, functional=True)
SIGN_CLIENT_KEY = _prop("signClientKey", XSD_ANY_URI, functional=True)
SHARED_INBOX = _prop("sharedInbox", XSD_ANY_URI, functional=True)


# ═══════════════════════════════════════════════════════════════════
# CORE TYPES
# ═══════════════════════════════════════════════════════════════════

OBJECT_TYPE = TypeSchema(
    "Object",
    properties=(
        ALTITUDE, ATTACHMENT, ATTRIBUTED_TO, AUDIENCE, CONTENT, CONTEXT, NAME,
        END_TIME, GENERATOR, ICON, ID, IMAGE, IN_REPLY_TO, LOCATION, PREVIEW,
        PUBLISHED, REPLIES, START_TIME, SUMMARY, TAG, TYPE, UPDATED, URL,
        TO, BTO, CC, BCC, MEDIA_TYPE, DURATION,
        SOURCE, INBOX, OUTBOX, FOLLOWING, FOLLOWERS, LIKED, LIKES, STREAMS,
        PREFERRED_USERNAME, ENDPOINTS, PROXY_URL, OAUTH_AUTHORIZATION_ENDPOINT,
        OAUTH_TOKEN_ENDPOINT, PROVIDE_CLIENT_KEY, SIGN_CLIENT_KEY, SHARED_INBOX,
    ),
    uri=AS_NS + "Object",
)
LINK_TYPE = TypeSchema(
    "Link",
    properties=(
        ATTRIBUTED_TO, HREF, ID, REL, TYPE, MEDIA_TYPE, NAME, SUMMARY,
        HREFLANG, HEIGHT, WIDTH, PREVIEW,
    ),
    link_like=True,
    uri=AS_NS + "Link",
)
ACTIVITY_TYPE = TypeSchema(
    "Activity",
    properties=(ACTOR, OBJECT, TARGET, RESULT, ORIGIN, INSTRUMENT),
    extends=(OBJECT_TYPE,),
    uri=AS_NS + "Activity",
)
INTRANSITIVE_ACTIVITY_TYPE = TypeSchema(
    "IntransitiveActivity",
    extends=(ACTIVITY_TYPE,),
    without=(OBJECT,),
    uri=AS_NS + "IntransitiveActivity",
)
COLLECTION_TYPE = TypeSchema(
    "Collection",
    properties=(TOTAL_ITEMS, CURRENT, FIRST, LAST, ITEMS),
    extends=(OBJECT_TYPE,),
    uri=AS_NS + "Collection",
)
ORDERED_COLLECTION_TYPE = TypeSchema(
    "OrderedCollection",
    properties=(ORDERED_ITEMS, CURRENT_ORDERED, FIRST_ORDERED, LAST_ORDERED),
    extends=(COLLECTION_TYPE,),
    without=(ITEMS, CURRENT, FIRST, LAST),
    uri=AS_NS + "OrderedCollection",
)
COLLECTION_PAGE_TYPE = TypeSchema(
    "CollectionPage",
    properties=(PART_OF, NEXT, PREV),
    extends=(COLLECTION_TYPE,),
    uri=AS_NS + "CollectionPage",
)
ORDERED_COLLECTION_PAGE_TYPE = TypeSchema(
    "OrderedCollectionPage",
    properties=(START_INDEX, NEXT_ORDERED, PREV_ORDERED),
    extends=(ORDERED_COLLECTION_TYPE, COLLECTION_PAGE_TYPE),
    without=(ITEMS, CURRENT, FIRST, LAST, NEXT, PREV),
    uri=AS_NS + "OrderedCollectionPage",
)

CORE_TYPES: tuple[TypeSchema, ...] = (
    OBJECT_TYPE,
    LINK_TYPE,
    ACTIVITY_TYPE,
    INTRANSITIVE_ACTIVITY_TYPE,
    COLLECTION_TYPE,
    ORDERED_COLLECTION_TYPE,
    COLLECTION_PAGE_TYPE,
    ORDERED_COLLECTION_PAGE_TYPE,
)


# ═══════════════════════════════════════════════════════════════════
# EXTENDED TYPES
# ═══════════════════════════════════════════════════════════════════


def _extended(name: str, parent: TypeSchema, *properties: PropertySpec) -> TypeSchema:
    return TypeSchema(
        name,
        properties=properties,
        extends=(parent,),
        link_like=parent.link_like,
        uri=AS_NS + name,
    )


ACCEPT_TYPE = _extended("Accept", ACTIVITY_TYPE)
IGNORE_TYPE = _extended("Ignore", ACTIVITY_TYPE)
OFFER_TYPE = _extended("Offer", ACTIVITY_TYPE)
REJECT_TYPE = _extended("Reject", ACTIVITY_TYPE)
DOCUMENT_TYPE = _extended("Document", OBJECT_TYPE)

EXTENDED_TYPES: tuple[TypeSchema, ...] = (
    ACCEPT_TYPE,
    _extended("TentativeAccept", ACCEPT_TYPE),
    _extended("Add", ACTIVITY_TYPE),
    _extended("Arrive", INTRANSITIVE_ACTIVITY_TYPE),
    _extended("Create", ACTIVITY_TYPE),
    _extended("Delete", ACTIVITY_TYPE),
    _extended("Follow", ACTIVITY_TYPE),
    IGNORE_TYPE,
    _extended("Join", ACTIVITY_TYPE),
    _extended("Leave", ACTIVITY_TYPE),
    _extended("Like", ACTIVITY_TYPE),
    OFFER_TYPE,
    _extended("Invite", OFFER_TYPE),
    REJECT_TYPE,
    _extended("TentativeReject", REJECT_TYPE),
    _extended("Remove", ACTIVITY_TYPE),
    _extended("Undo", ACTIVITY_TYPE),
    _extended("Update", ACTIVITY_TYPE),
    _extended("View", ACTIVITY_TYPE),
    _extended("Listen", ACTIVITY_TYPE),
    _extended("Read", ACTIVITY_TYPE),
    _extended("Move", ACTIVITY_TYPE),
    _extended("Travel", INTRANSITIVE_ACTIVITY_TYPE),
    _extended("Announce", ACTIVITY_TYPE),
    _extended("Block", IGNORE_TYPE),
    _extended("Flag", ACTIVITY_TYPE),
    _extended("Dislike", ACTIVITY_TYPE),
    _extended("Question", INTRANSITIVE_ACTIVITY_TYPE, ONE_OF, ANY_OF, CLOSED),
    _extended("Application", OBJECT_TYPE),
    _extended("Group", OBJECT_TYPE),
    _extended("Organization", OBJECT_TYPE),
    _extended("Person", OBJECT_TYPE),
    _extended("Service", OBJECT_TYPE),
    _extended("Relationship", OBJECT_TYPE, SUBJECT, OBJECT, RELATIONSHIP),
    _extended("Article", OBJECT_TYPE),
    DOCUMENT_TYPE,
    _extended("Audio", DOCUMENT_TYPE),
    _extended("Image", DOCUMENT_TYPE, HEIGHT, WIDTH),
    _extended("Video", DOCUMENT_TYPE),
    _extended("Note", OBJECT_TYPE),
    _extended("Page", DOCUMENT_TYPE),
    _extended("Event", OBJECT_TYPE),
    _extended(
        "Place", OBJECT_TYPE,
        ACCURACY, ALTITUDE, LATITUDE, LONGITUDE, RADIUS, UNITS_PROPERTY,
    ),
    _extended("Profile", OBJECT_TYPE, DESCRIBES),
    _extended("Tombstone", OBJECT_TYPE, FORMER_TYPE, DELETED),
    _extended("Mention", LINK_TYPE),
)

ALL_TYPES: tuple[TypeSchema, ...] = CORE_TYPES + EXTENDED_TYPES

SCHEMAS: dict[str, TypeSchema] = {schema.name: schema for schema in ALL_TYPES}


def register_vocabulary(registry: TypeRegistry, *, force: bool = False) -> None:
    """Register every ActivityStreams type in *registry*.

    Link-like types (``Link``, ``Mention``) go into the link-like view,
    everything else into the object-like view.
    """
    for schema in ALL_TYPES:
        registry.register(
            schema.name,
            partial(VocabularyEntity, schema),
            as_object=not schema.link_like,
            as_link=schema.link_like,
            force=force,
        )
