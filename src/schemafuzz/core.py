"""Default fuzzers for the baseline descriptor catalog.

Leaf kinds are concrete functions of the seed. Composite kinds are
generators: they declare their children and combine the compiled child
encoders. Collection sizes and per-element seeds come from a
``random.Random(seed)`` stream, so the same seed always yields the same
value.
"""

from __future__ import annotations

import random
from collections.abc import Mapping
from typing import Any

from schemafuzz import descriptors as d
from schemafuzz.config import Config
from schemafuzz.context import GenerationContext
from schemafuzz.encoders import Encoder
from schemafuzz.errors import MalformedDescriptor
from schemafuzz.fuzzer import (
    Composition,
    Deferred,
    FuzzerDefinition,
    concrete,
    delegate,
    gen,
)
from schemafuzz.registry import Registry, create_registry

# Upper bound (exclusive) for derived child seeds
SEED_SPACE = 2**31


def derived_seeds(seed: int, max_length: int | None, span: int) -> list[int]:
    """Seeds for the elements of a collection generated from ``seed``.

    The length is drawn from ``[0, max_length]`` when a maximum is set and
    from ``[0, span)`` otherwise.
    """
    rng = random.Random(seed)
    if max_length is None:
        length = rng.randrange(span)
    else:
        length = rng.randint(0, max_length)
    return [rng.randrange(SEED_SPACE) for _ in range(length)]


def _positional_seeds(seed: int, count: int) -> list[int]:
    rng = random.Random(seed)
    return [rng.randrange(SEED_SPACE) for _ in range(count)]


def _require_children(descriptor: Any, count: int) -> tuple[Any, ...]:
    children = tuple(descriptor.children)
    if len(children) != count:
        raise MalformedDescriptor(
            descriptor, f"expected {count} child descriptor(s), got {len(children)}",
        )
    return children


def _props(descriptor: Any) -> tuple[tuple[str, ...], tuple[Any, ...]]:
    keys = tuple(getattr(descriptor, "keys", ()) or ())
    children = tuple(descriptor.children)
    if len(keys) != len(children):
        raise MalformedDescriptor(
            descriptor,
            f"{len(keys)} property name(s) for {len(children)} property type(s)",
        )
    return keys, children


# ---------------------------------------------------------------------------
# Leaves
# ---------------------------------------------------------------------------


def fuzz_number(n: int) -> int:
    return n


def fuzz_boolean(n: int) -> bool:
    return n % 2 == 0


def fuzz_string(n: int) -> str:
    return f"{n}"


def fuzz_none(n: int) -> None:
    return None


def fuzz_literal(b: Any) -> Composition:
    value = b.value
    return Composition(children=(), combine=lambda n, ctx: value)


def fuzz_keyof(b: Any) -> Composition:
    keys = tuple(getattr(b, "keys", ()) or ())
    if not keys:
        raise MalformedDescriptor(b, "key enumeration declares no keys")
    return Composition(children=(), combine=lambda n, ctx: keys[n % len(keys)])


def fuzz_unknown(b: Any) -> Composition:
    return Composition(
        children=(d.null(), d.number(), d.string(), d.boolean()),
        combine=_pick_branch,
        descends=False,
    )


# ---------------------------------------------------------------------------
# Unions and objects
# ---------------------------------------------------------------------------


def _pick_branch(n: int, ctx: GenerationContext, *branches: Encoder) -> Any:
    if ctx.bottomed:
        # Terminal values prefer a branch that cannot recurse again
        for branch in branches:
            if not branch.self_referential:
                return branch.encode(n, ctx)
    return branches[n % len(branches)].encode(n, ctx)


def fuzz_union(b: Any) -> Composition:
    if not b.children:
        raise MalformedDescriptor(b, "union declares no branches")
    return Composition(children=tuple(b.children), combine=_pick_branch)


def fuzz_interface_with_extra_props(extra: Mapping[str, Any]):
    """Required-fields object; extra property j is included iff bit j is set."""

    def func(b: Any) -> Composition:
        keys, children = _props(b)
        extra_keys = tuple(k for k in extra if k not in keys)
        extra_children = tuple(extra[k] for k in extra_keys)

        def combine(n: int, ctx: GenerationContext, *h: Encoder) -> dict[str, Any]:
            ret: dict[str, Any] = {}
            for k, v in zip(keys, h):
                ret[k] = v.encode(n, ctx)
            for j, (k, v) in enumerate(zip(extra_keys, h[len(keys):])):
                if n & (1 << j):
                    ret[k] = v.encode(n, ctx)
            return ret

        return Composition(children=children + extra_children, combine=combine)

    return func


def fuzz_partial_with_extra_props(extra: Mapping[str, Any]):
    """Optional-fields object; property i (declared, then extra) is included iff bit i is set."""

    def func(b: Any) -> Composition:
        keys, children = _props(b)
        extra_keys = tuple(k for k in extra if k not in keys)
        all_keys = keys + extra_keys
        all_children = children + tuple(extra[k] for k in extra_keys)

        def combine(n: int, ctx: GenerationContext, *h: Encoder) -> dict[str, Any]:
            ret: dict[str, Any] = {}
            for i, (k, v) in enumerate(zip(all_keys, h)):
                if n & (1 << i):
                    ret[k] = v.encode(n, ctx)
            return ret

        return Composition(children=all_children, combine=combine)

    return func


fuzz_interface = fuzz_interface_with_extra_props({})
fuzz_partial = fuzz_partial_with_extra_props({})


def fuzz_tuple(b: Any) -> Composition:
    def combine(n: int, ctx: GenerationContext, *h: Encoder) -> list[Any]:
        if ctx.bottomed:
            return [v.encode(0, ctx) for v in h]
        return [v.encode(s, ctx) for v, s in zip(h, _positional_seeds(n, len(h)))]

    return Composition(children=tuple(b.children), combine=combine)


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


_UNKNOWN = d.unknown()


def fuzz_array_with_max_length(max_length: int | None = None, *, span: int = 16):
    """Typed/readonly arrays: element type is the descriptor's only child."""

    def combine(n: int, ctx: GenerationContext, item: Encoder) -> list[Any]:
        if ctx.bottomed:
            return []
        return [item.encode(s, ctx) for s in derived_seeds(n, max_length, span)]

    def func(b: Any) -> Composition:
        (item,) = _require_children(b, 1)
        return Composition(children=(item,), combine=combine)

    return func


def fuzz_any_array_with_max_length(max_length: int | None = None, *, span: int = 16):
    """Any-typed arrays: elements are ``unknown``, resolved through the registry."""
    inner = fuzz_array_with_max_length(max_length, span=span)

    def func(b: Any) -> Composition:
        return inner(d.array(_UNKNOWN, name=getattr(b, "name", None)))

    return func


def fuzz_record_with_max_count(max_count: int | None = None, *, span: int = 16):
    """Typed dictionaries: children are (domain, codomain)."""

    def combine(n: int, ctx: GenerationContext, domain: Encoder, codomain: Encoder) -> dict[str, Any]:
        ret: dict[str, Any] = {}
        if ctx.bottomed:
            return ret
        for s in derived_seeds(n, max_count, span):
            ret[str(domain.encode(s, ctx))] = codomain.encode(s, ctx)
        return ret

    def func(b: Any) -> Composition:
        domain, codomain = _require_children(b, 2)
        return Composition(children=(domain, codomain), combine=combine)

    return func


def fuzz_unknown_record_with_max_count(max_count: int | None = None, *, span: int = 16):
    """Any-typed dictionaries: synthetic decimal keys, ``unknown`` values."""

    def combine(n: int, ctx: GenerationContext, value: Encoder) -> dict[str, Any]:
        ret: dict[str, Any] = {}
        if ctx.bottomed:
            return ret
        for s in derived_seeds(n, max_count, span):
            ret[f"{s}"] = value.encode(s, ctx)
        return ret

    def func(b: Any) -> Composition:
        return Composition(children=(_UNKNOWN,), combine=combine)

    return func


# ---------------------------------------------------------------------------
# Wrappers and self-reference
# ---------------------------------------------------------------------------


def fuzz_transparent(b: Any) -> Composition:
    (inner,) = _require_children(b, 1)
    return Composition(children=(inner,), combine=delegate, descends=False)


def fuzz_recursive(b: Any) -> Composition:
    resolver = getattr(b, "resolver", None)
    if resolver is None:
        raise MalformedDescriptor(b, "recursive descriptor has no resolver")
    return Composition(children=(Deferred(resolver),), combine=delegate, descends=False)


def core_fuzzers(span: int = 16) -> list[FuzzerDefinition]:
    return [
        concrete(fuzz_none, "NullType"),
        concrete(fuzz_none, "UndefinedType"),
        concrete(fuzz_none, "VoidType"),
        gen(fuzz_unknown, "UnknownType"),
        concrete(fuzz_number, "NumberType"),
        concrete(fuzz_boolean, "BooleanType"),
        concrete(fuzz_string, "StringType"),
        gen(fuzz_literal, "LiteralType"),
        gen(fuzz_keyof, "KeyofType"),
        gen(fuzz_union, "UnionType"),
        gen(fuzz_interface, "InterfaceType"),
        gen(fuzz_partial, "PartialType"),
        gen(fuzz_tuple, "TupleType"),
        gen(fuzz_array_with_max_length(span=span), "ArrayType"),
        gen(fuzz_array_with_max_length(span=span), "ReadonlyArrayType"),
        gen(fuzz_any_array_with_max_length(span=span), "AnyArrayType"),
        gen(fuzz_record_with_max_count(span=span), "DictionaryType"),
        gen(fuzz_unknown_record_with_max_count(span=span), "AnyDictionaryType"),
        gen(fuzz_transparent, "ReadonlyType"),
        gen(fuzz_transparent, "ExactType"),
        gen(fuzz_transparent, "RefinementType"),
        gen(fuzz_recursive, "RecursiveType"),
    ]


def create_core_registry(config: Config | None = None) -> Registry:
    """Create a registry loaded with fuzzers for every catalog kind."""
    registry = create_registry(config)
    return registry.register(*core_fuzzers(registry.collection_span))
