"""
Example 02: Inbox Dispatch
===========================

Routes decoded activities to handlers by type, and shows how strict
decoding and resource limits reject bad input.

Use case: an inbox endpoint with one handler per activity type.
"""

from activity_vocab import (
    ActivityStreamsProcessor,
    DecodeFailure,
    NoCallbackMatch,
    Resolver,
    UnhandledType,
)


def handle_follow(follow):
    return f"follow request from {follow['actor'].get(0)!r}"


def handle_like(like):
    return f"like of {like['object'].get(0)!r}"


resolver = Resolver({"Follow": handle_follow, "Like": handle_like})

# ── 1. Dispatch ──────────────────────────────────────────────────

print("=== 1. Dispatch ===\n")

deliveries = [
    {"type": "Follow", "actor": "https://a.example/users/ana", "object": "https://b.example/users/bo"},
    {"type": "Like", "actor": "https://a.example/users/ana", "object": "https://b.example/notes/7"},
    {"type": "Undo", "object": "https://a.example/likes/3"},
    {"type": "Bite", "actor": "https://a.example/users/ana"},
    {"id": "https://a.example/no-type"},
]

for delivery in deliveries:
    try:
        print(f"  ✓ {resolver.resolve(delivery)}")
    except NoCallbackMatch as e:
        print(f"  - ignored: {e}")
    except UnhandledType as e:
        print(f"  ✗ rejected: {e}")

# ── 2. Strict decoding ───────────────────────────────────────────

print("\n=== 2. Strict Decoding ===\n")

lenient = ActivityStreamsProcessor()
strict = ActivityStreamsProcessor(strict=True)
doc = {"type": "Note", "published": "last tuesday"}

note = lenient.deserialize(doc)
print(f"  lenient keeps: {note['published'].get()!r}")
try:
    strict.deserialize(doc)
except DecodeFailure as e:
    print(f"  strict rejects '{e.property_name}': {e}")

# ── 3. Resource limits ───────────────────────────────────────────

print("\n=== 3. Resource Limits ===\n")

guarded = ActivityStreamsProcessor(resource_limits={"max_graph_depth": 5})
nested = {"type": "Note"}
for _ in range(10):
    nested = {"type": "Announce", "object": nested}
try:
    guarded.deserialize(nested)
except ValueError as e:
    print(f"  ✗ Blocked: {e}")
