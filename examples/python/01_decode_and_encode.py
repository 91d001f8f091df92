"""
Example 01: Decode and Encode
==============================

Decodes an incoming ActivityStreams document, inspects its polymorphic
properties, edits it, and encodes it again without losing extension
data.

Use case: a federated server handling a Create activity from its inbox.
"""

import json
from activity_vocab import (
    ActivityStreamsProcessor,
    IRI,
    Primitive,
    TypedLink,
    TypedObject,
    Unknown,
    XSD_STRING,
)

incoming = {
    "@context": "https://www.w3.org/ns/activitystreams",
    "type": "Create",
    "id": "https://social.example/activities/42",
    "actor": "https://social.example/users/sam",
    "object": {
        "type": "Note",
        "content": "Hello @kim",
        "contentMap": {"en": "Hello @kim", "es": "Hola @kim"},
        "tag": [
            {"type": "Mention", "href": "https://other.example/users/kim", "name": "@kim"},
            {"type": "Emoji", "name": ":wave:"},
        ],
        "to": "https://www.w3.org/ns/activitystreams#Public",
    },
    "toot:sensitive": False,
}

processor = ActivityStreamsProcessor()

# ── 1. Decode ────────────────────────────────────────────────────

print("=== 1. Decode ===\n")

create = processor.deserialize(incoming)
print(f"  type: {create.type_name}  activity: {create.is_activity()}")

actor = create["actor"].get(0)
print(f"  actor slot: {actor!r}")
assert isinstance(actor, IRI)

note = create["object"].get(0).value
print(f"  object: {note.type_name}, public: {note.is_public()}")

# ── 2. Inspect polymorphic values ────────────────────────────────

print("\n=== 2. Tags ===\n")

for slot in note["tag"]:
    if isinstance(slot, TypedLink):
        print(f"  link    {slot.type_name}: {slot.value['href'].get().value}")
    elif isinstance(slot, TypedObject):
        print(f"  object  {slot.type_name}")
    elif isinstance(slot, Unknown):
        print(f"  unknown {slot.raw}")

print(f"\n  languages: {sorted(note.language_map('content'))}")
print(f"  extensions kept: {sorted(create.unknown.keys())}")

# ── 3. Edit and encode ───────────────────────────────────────────

print("\n=== 3. Encode ===\n")

note["summary"].append(Primitive(XSD_STRING, "A greeting"))
note.language_map("content")["fr"] = "Bonjour @kim"

print(json.dumps(processor.serialize(create), indent=2, ensure_ascii=False))
