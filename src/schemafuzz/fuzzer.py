"""Fuzzer definitions: the rules a registry maps descriptor kinds to.

Two rule shapes:
- Concrete: a pure function of the seed, used for leaf kinds.
- Generator: given a descriptor, declares the children to resolve and a
  combine function that receives the compiled child encoders.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal, Union

if TYPE_CHECKING:
    from schemafuzz.context import GenerationContext
    from schemafuzz.encoders import Encoder

KeyedBy = Literal["tag", "name"]

# combine(seed, context, *child_encoders) -> value
CombineFn = Callable[..., Any]


@dataclass(frozen=True)
class FuzzerId:
    keyed_by: KeyedBy
    value: str

    @property
    def key(self) -> tuple[str, str]:
        return (self.keyed_by, self.value)


@dataclass(frozen=True)
class Deferred:
    """A child resolved at generation time instead of composition time."""

    resolve: Callable[[], Any]


@dataclass(frozen=True)
class Composition:
    children: Sequence[Any]
    combine: CombineFn
    # False for transparent wrappers and self-references
    descends: bool = True


@dataclass(frozen=True)
class Concrete:
    func: Callable[[int], Any]


@dataclass(frozen=True)
class Generator:
    func: Callable[[Any], Composition]


FuzzerImpl = Union[Concrete, Generator]


@dataclass(frozen=True)
class FuzzerDefinition:
    id: FuzzerId
    impl: FuzzerImpl


def _fuzzer_id(tag: str | None, name: str | None) -> FuzzerId:
    if (tag is None) == (name is None):
        raise ValueError("Exactly one of tag or name must be given")
    if name is not None:
        return FuzzerId("name", name)
    return FuzzerId("tag", tag)


def concrete(
    func: Callable[[int], Any],
    tag: str | None = None,
    *,
    name: str | None = None,
) -> FuzzerDefinition:
    """Build a concrete (leaf) fuzzer keyed by tag or by name."""
    return FuzzerDefinition(_fuzzer_id(tag, name), Concrete(func))


def gen(
    func: Callable[[Any], Composition],
    tag: str | None = None,
    *,
    name: str | None = None,
) -> FuzzerDefinition:
    """Build a generator (composite) fuzzer keyed by tag or by name."""
    return FuzzerDefinition(_fuzzer_id(tag, name), Generator(func))


def delegate(seed: int, context: GenerationContext, child: Encoder) -> Any:
    """Combine function that hands the seed straight to a single child."""
    return child.encode(seed, context)
