"""Schema descriptors: the read-only shape supplied by a schema library.

A descriptor is a node with a kind tag, an optional name and an ordered
tuple of children. The meaning of the children depends on the kind:

    InterfaceType / PartialType   property types, aligned with ``keys``
    ArrayType / ReadonlyArrayType the element type
    DictionaryType                (domain, codomain)
    TupleType                     positional element types
    UnionType                     the branches
    ReadonlyType / ExactType /
    RefinementType                the wrapped type

RecursiveType holds no children; its target comes from ``resolver`` and is
only looked up while generating.

The constructors below build descriptors with the catalog tags. Any object
exposing ``kind_tag``, ``name`` and ``children`` (plus the kind-specific
attributes) is accepted by the registry.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

CoreKind = Literal[
    "NullType",
    "UndefinedType",
    "VoidType",
    "UnknownType",
    "StringType",
    "NumberType",
    "BooleanType",
    "LiteralType",
    "KeyofType",
    "AnyArrayType",
    "AnyDictionaryType",
    "ArrayType",
    "ReadonlyArrayType",
    "TupleType",
    "InterfaceType",
    "PartialType",
    "DictionaryType",
    "UnionType",
    "ReadonlyType",
    "ExactType",
    "RefinementType",
    "RecursiveType",
]

CORE_KINDS: tuple[str, ...] = CoreKind.__args__


@dataclass(frozen=True)
class SchemaDescriptor:
    kind_tag: str
    name: str | None = None
    children: tuple[SchemaDescriptor, ...] = ()
    keys: tuple[str, ...] = ()
    value: Any = None
    resolver: Callable[[], SchemaDescriptor] | None = field(
        default=None, compare=False, repr=False,
    )

    def target(self) -> SchemaDescriptor:
        """Resolve the deferred target of a RecursiveType descriptor."""
        if self.resolver is None:
            raise TypeError(f"{self.kind_tag} descriptor has no resolver")
        return self.resolver()


# --- leaves ---

def null() -> SchemaDescriptor:
    return SchemaDescriptor("NullType", "null")


def undefined() -> SchemaDescriptor:
    return SchemaDescriptor("UndefinedType", "undefined")


def void() -> SchemaDescriptor:
    return SchemaDescriptor("VoidType", "void")


def unknown() -> SchemaDescriptor:
    return SchemaDescriptor("UnknownType", "unknown")


def string() -> SchemaDescriptor:
    return SchemaDescriptor("StringType", "string")


def number() -> SchemaDescriptor:
    return SchemaDescriptor("NumberType", "number")


def boolean() -> SchemaDescriptor:
    return SchemaDescriptor("BooleanType", "boolean")


def literal(value: str | int | float | bool) -> SchemaDescriptor:
    return SchemaDescriptor("LiteralType", repr(value), value=value)


def keyof(*keys: str) -> SchemaDescriptor:
    return SchemaDescriptor("KeyofType", " | ".join(repr(k) for k in keys), keys=tuple(keys))


def unknown_array() -> SchemaDescriptor:
    return SchemaDescriptor("AnyArrayType", "UnknownArray")


def unknown_record() -> SchemaDescriptor:
    return SchemaDescriptor("AnyDictionaryType", "UnknownRecord")


# --- composites ---

def array(item: SchemaDescriptor, name: str | None = None) -> SchemaDescriptor:
    return SchemaDescriptor("ArrayType", name or f"Array<{item.name}>", (item,))


def readonly_array(item: SchemaDescriptor, name: str | None = None) -> SchemaDescriptor:
    return SchemaDescriptor("ReadonlyArrayType", name or f"ReadonlyArray<{item.name}>", (item,))


def tuple_(*items: SchemaDescriptor, name: str | None = None) -> SchemaDescriptor:
    inner = ", ".join(str(i.name) for i in items)
    return SchemaDescriptor("TupleType", name or f"[{inner}]", tuple(items))


def _props_name(props: Mapping[str, SchemaDescriptor]) -> str:
    return "{ " + ", ".join(f"{k}: {v.name}" for k, v in props.items()) + " }"


def type_(props: Mapping[str, SchemaDescriptor], name: str | None = None) -> SchemaDescriptor:
    """Required-fields object."""
    return SchemaDescriptor(
        "InterfaceType",
        name or _props_name(props),
        tuple(props.values()),
        keys=tuple(props.keys()),
    )


def partial(props: Mapping[str, SchemaDescriptor], name: str | None = None) -> SchemaDescriptor:
    """Optional-fields object."""
    return SchemaDescriptor(
        "PartialType",
        name or f"Partial<{_props_name(props)}>",
        tuple(props.values()),
        keys=tuple(props.keys()),
    )


def record(
    domain: SchemaDescriptor,
    codomain: SchemaDescriptor,
    name: str | None = None,
) -> SchemaDescriptor:
    return SchemaDescriptor(
        "DictionaryType",
        name or f"{{ [K in {domain.name}]: {codomain.name} }}",
        (domain, codomain),
    )


def union(*branches: SchemaDescriptor, name: str | None = None) -> SchemaDescriptor:
    return SchemaDescriptor(
        "UnionType",
        name or " | ".join(str(b.name) for b in branches),
        tuple(branches),
    )


def readonly(inner: SchemaDescriptor, name: str | None = None) -> SchemaDescriptor:
    return SchemaDescriptor("ReadonlyType", name or f"Readonly<{inner.name}>", (inner,))


def exact(inner: SchemaDescriptor, name: str | None = None) -> SchemaDescriptor:
    return SchemaDescriptor("ExactType", name or f"Exact<{inner.name}>", (inner,))


def refinement(inner: SchemaDescriptor, name: str | None = None) -> SchemaDescriptor:
    # The predicate belongs to the schema library; examples are not filtered by it.
    return SchemaDescriptor("RefinementType", name or f"Refinement<{inner.name}>", (inner,))


def recursive(name: str, resolver: Callable[[], SchemaDescriptor]) -> SchemaDescriptor:
    return SchemaDescriptor("RecursiveType", name, resolver=resolver)
