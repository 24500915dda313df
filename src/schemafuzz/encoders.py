"""Compiled generator graph.

``Registry.example_generator`` turns a descriptor tree into a graph of
encoders once; ``encode`` then walks the graph without touching the
registry again (except for a self-reference's first resolution).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from schemafuzz.context import GenerationContext
from schemafuzz.fuzzer import CombineFn


class Encoder:
    """Produces an example value from a seed and a generation context."""

    # True when a self-reference is reachable below this node
    self_referential: bool = False

    def __init__(self, descriptor: Any):
        self.descriptor = descriptor

    def encode(self, seed: int, context: GenerationContext) -> Any:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {getattr(self.descriptor, 'name', None)!r}>"


class ConcreteEncoder(Encoder):
    def __init__(self, descriptor: Any, func: Callable[[int], Any]):
        super().__init__(descriptor)
        self.func = func

    def encode(self, seed: int, context: GenerationContext) -> Any:
        return self.func(seed)


class CompositeEncoder(Encoder):
    def __init__(
        self,
        descriptor: Any,
        combine: CombineFn,
        children: Sequence[Encoder],
        *,
        descends: bool = True,
    ):
        super().__init__(descriptor)
        self.combine = combine
        self.children = tuple(children)
        self.descends = descends
        self.self_referential = any(c.self_referential for c in self.children)

    def encode(self, seed: int, context: GenerationContext) -> Any:
        child_context = context.descend() if self.descends else context
        return self.combine(seed, child_context, *self.children)


class LazyEncoder(Encoder):
    """Deferred child: compiles its target on first use.

    Each expansion consumes one level of the depth budget. Once the budget
    is spent the target is encoded at seed 0 in a bottomed context; a
    second self-reference reached while bottomed yields ``None``.
    """

    self_referential = True

    def __init__(self, descriptor: Any, compile_target: Callable[[], Encoder]):
        super().__init__(descriptor)
        self._compile_target = compile_target
        self._target: Encoder | None = None

    @property
    def target(self) -> Encoder:
        if self._target is None:
            self._target = self._compile_target()
        return self._target

    def encode(self, seed: int, context: GenerationContext) -> Any:
        if not context.exhausted:
            return self.target.encode(seed, context.descend())
        if context.bottomed:
            return None
        return self.target.encode(0, context.bottom())
