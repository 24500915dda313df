"""Shared descriptors covering every kind in the core catalog."""

from __future__ import annotations

from schemafuzz import descriptors as d
from schemafuzz.descriptors import SchemaDescriptor


def linked_list() -> SchemaDescriptor:
    node = d.recursive("LinkedList", lambda: shape)
    shape = d.type_({"value": d.number(), "next": d.union(d.null(), node)}, name="LinkedListNode")
    return node


def tree() -> SchemaDescriptor:
    node = d.recursive("Tree", lambda: shape)
    shape = d.type_({"value": d.string(), "children": d.array(node)}, name="TreeNode")
    return node


def endless() -> SchemaDescriptor:
    """A self-reference with no finite instance."""
    node = d.recursive("Endless", lambda: shape)
    shape = d.type_({"inner": node}, name="EndlessNode")
    return node


TYPES: list[SchemaDescriptor] = [
    d.null(),
    d.undefined(),
    d.void(),
    d.unknown(),
    d.string(),
    d.number(),
    d.boolean(),
    d.literal("a"),
    d.literal(1),
    d.literal(True),
    d.keyof("a", "b", "c"),
    d.unknown_array(),
    d.unknown_record(),
    d.array(d.number()),
    d.readonly_array(d.string()),
    d.tuple_(d.number(), d.string(), d.boolean()),
    d.type_({"a": d.number(), "b": d.string()}),
    d.type_({}),
    d.partial({"a": d.number(), "b": d.string()}),
    d.record(d.string(), d.number()),
    d.record(d.keyof("x", "y"), d.boolean()),
    d.union(d.number(), d.string()),
    d.readonly(d.type_({"a": d.number()})),
    d.exact(d.type_({"a": d.number()})),
    d.refinement(d.number(), name="Positive"),
    d.array(d.type_({"nested": d.partial({"deep": d.array(d.unknown())})})),
    linked_list(),
    tree(),
]

UNKNOWN_TYPES: list[SchemaDescriptor] = [
    SchemaDescriptor("IntersectionType", "A & B", (d.number(), d.string())),
    SchemaDescriptor("BigIntType"),
    SchemaDescriptor("FunctionType", "Function"),
]


def nested_list() -> SchemaDescriptor:
    node = d.recursive("NestedList", lambda: shape)
    shape = d.array(node, name="NestedListItems")
    return node


def list_depth(value: object) -> int:
    """Nesting depth counted in lists only."""
    if isinstance(value, list):
        return 1 + max((list_depth(v) for v in value), default=0)
    if isinstance(value, dict):
        return max((list_depth(v) for v in value.values()), default=0)
    return 0


def dict_depth(value: object) -> int:
    """Nesting depth counted in dicts only."""
    if isinstance(value, dict):
        return 1 + max((dict_depth(v) for v in value.values()), default=0)
    if isinstance(value, list):
        return max((dict_depth(v) for v in value), default=0)
    return 0
