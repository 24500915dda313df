"""Hypothesis strategies backed by compiled example generators.

Hypothesis only draws the integer seed; the value itself comes from the
encoder, so a failing example can be replayed from its seed alone.
"""

from __future__ import annotations

from typing import Any

from hypothesis import strategies as st

from schemafuzz.context import GenerationContext, fuzz_context
from schemafuzz.core import SEED_SPACE
from schemafuzz.encoders import Encoder
from schemafuzz.registry import Registry

seeds = st.integers(min_value=0, max_value=SEED_SPACE - 1)


def _context(max_recursion_hint: int | None) -> GenerationContext:
    if max_recursion_hint is None:
        return fuzz_context()
    return fuzz_context(max_recursion_hint=max_recursion_hint)


def examples(
    encoder: Encoder,
    *,
    max_recursion_hint: int | None = None,
) -> st.SearchStrategy[Any]:
    """Strategy producing ``encoder.encode(seed, ctx)`` for drawn seeds."""
    ctx = _context(max_recursion_hint)
    return seeds.map(lambda seed: encoder.encode(seed, ctx))


def seeded_examples(
    encoder: Encoder,
    *,
    max_recursion_hint: int | None = None,
) -> st.SearchStrategy[tuple[int, Any]]:
    """Like ``examples`` but yields ``(seed, value)`` pairs."""
    ctx = _context(max_recursion_hint)
    return seeds.map(lambda seed: (seed, encoder.encode(seed, ctx)))


def from_descriptor(
    registry: Registry,
    descriptor: Any,
    *,
    max_recursion_hint: int | None = None,
) -> st.SearchStrategy[Any]:
    """Compile ``descriptor`` now (raising UnsupportedSchema early) and wrap it."""
    return examples(
        registry.example_generator(descriptor),
        max_recursion_hint=max_recursion_hint,
    )
