"""schemafuzz: deterministic example values for schema descriptors."""

from schemafuzz.context import FuzzContextOptions, GenerationContext, fuzz_context
from schemafuzz.core import core_fuzzers, create_core_registry
from schemafuzz.descriptors import SchemaDescriptor
from schemafuzz.encoders import Encoder
from schemafuzz.errors import FuzzError, MalformedDescriptor, UnsupportedSchema
from schemafuzz.fluent import FluentRegistry, fluent
from schemafuzz.fuzzer import (
    Composition,
    Concrete,
    Deferred,
    FuzzerDefinition,
    FuzzerId,
    Generator,
    concrete,
    gen,
)
from schemafuzz.registry import Registry, create_registry

__all__ = [
    "Composition",
    "Concrete",
    "Deferred",
    "Encoder",
    "FluentRegistry",
    "FuzzContextOptions",
    "FuzzError",
    "FuzzerDefinition",
    "FuzzerId",
    "GenerationContext",
    "Generator",
    "MalformedDescriptor",
    "Registry",
    "SchemaDescriptor",
    "UnsupportedSchema",
    "concrete",
    "core_fuzzers",
    "create_core_registry",
    "create_registry",
    "fluent",
    "fuzz_context",
    "gen",
]
