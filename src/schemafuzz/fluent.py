"""Fluent overrides on top of an existing registry.

The wrapper only holds a reference: every override is registered into the
wrapped registry, so it is also visible to anyone else holding it.

Usage:
    registry = create_core_registry()
    encoder = (
        fluent(registry)
        .with_array_fuzzer(3)
        .with_partial_fuzzer({"note": string()})
        .example_generator(descriptor)
    )
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from schemafuzz.core import (
    fuzz_any_array_with_max_length,
    fuzz_array_with_max_length,
    fuzz_interface_with_extra_props,
    fuzz_partial_with_extra_props,
    fuzz_record_with_max_count,
    fuzz_unknown_record_with_max_count,
)
from schemafuzz.encoders import Encoder
from schemafuzz.fuzzer import Composition, FuzzerDefinition, delegate, gen
from schemafuzz.registry import Registry


def _check_bound(label: str, value: int | None) -> int | None:
    if value is not None and value < 0:
        raise ValueError(f"{label} must be >= 0, got {value}")
    return value


class FluentRegistry:
    def __init__(self, registry: Registry):
        self.registry = registry

    # --- pass-throughs ---

    def register(self, *defs: FuzzerDefinition) -> FluentRegistry:
        self.registry.register(*defs)
        return self

    def get_fuzzer(self, descriptor: Any) -> FuzzerDefinition | None:
        return self.registry.get_fuzzer(descriptor)

    def example_generator(self, descriptor: Any) -> Encoder:
        return self.registry.example_generator(descriptor)

    # --- overrides ---

    def with_unknown_fuzzer(self, child: Any) -> FluentRegistry:
        """Generate ``unknown`` values (anywhere, including any-typed collections) from ``child``."""
        return self.register(
            gen(lambda b: Composition((child,), delegate, descends=False), "UnknownType"),
        )

    def with_array_fuzzer(self, max_length: int | None = None) -> FluentRegistry:
        _check_bound("max_length", max_length)
        span = self.registry.collection_span
        return self.register(gen(fuzz_array_with_max_length(max_length, span=span), "ArrayType"))

    def with_readonly_array_fuzzer(self, max_length: int | None = None) -> FluentRegistry:
        _check_bound("max_length", max_length)
        span = self.registry.collection_span
        return self.register(
            gen(fuzz_array_with_max_length(max_length, span=span), "ReadonlyArrayType"),
        )

    def with_any_array_fuzzer(self, max_length: int | None = None) -> FluentRegistry:
        _check_bound("max_length", max_length)
        span = self.registry.collection_span
        return self.register(
            gen(fuzz_any_array_with_max_length(max_length, span=span), "AnyArrayType"),
        )

    def with_record_fuzzer(self, max_count: int | None = None) -> FluentRegistry:
        _check_bound("max_count", max_count)
        span = self.registry.collection_span
        return self.register(
            gen(fuzz_record_with_max_count(max_count, span=span), "DictionaryType"),
        )

    def with_unknown_record_fuzzer(self, max_count: int | None = None) -> FluentRegistry:
        _check_bound("max_count", max_count)
        span = self.registry.collection_span
        return self.register(
            gen(fuzz_unknown_record_with_max_count(max_count, span=span), "AnyDictionaryType"),
        )

    def with_partial_fuzzer(self, extra_props: Mapping[str, Any]) -> FluentRegistry:
        """Append optional extra properties to every optional-fields object."""
        return self.register(
            gen(fuzz_partial_with_extra_props(dict(extra_props)), "PartialType"),
        )

    def with_interface_fuzzer(self, extra_props: Mapping[str, Any]) -> FluentRegistry:
        """Append optional extra properties to every required-fields object."""
        return self.register(
            gen(fuzz_interface_with_extra_props(dict(extra_props)), "InterfaceType"),
        )


def fluent(registry: Registry) -> FluentRegistry:
    return FluentRegistry(registry)
