"""Generation context: per-request recursion bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from schemafuzz.config import Config


class FuzzContextOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    max_recursion_hint: int = Field(alias="maxRecursionHint", ge=0)


@dataclass(frozen=True)
class GenerationContext:
    """Immutable; composites hand ``descend()`` to their children.

    ``bottomed`` is set while producing the terminal value for a
    self-reference whose depth budget ran out.
    """

    max_recursion_hint: int
    remaining_depth: int
    bottomed: bool = False

    @property
    def exhausted(self) -> bool:
        return self.remaining_depth <= 0

    @property
    def depth(self) -> int:
        """Composite levels entered so far."""
        return self.max_recursion_hint - self.remaining_depth

    def descend(self) -> GenerationContext:
        return replace(self, remaining_depth=self.remaining_depth - 1)

    def bottom(self) -> GenerationContext:
        return replace(self, bottomed=True)


def fuzz_context(
    options: FuzzContextOptions | dict[str, Any] | None = None,
    **kwargs: Any,
) -> GenerationContext:
    """Create a context for one top-level generation request.

    Accepts ``fuzz_context(max_recursion_hint=5)`` or
    ``fuzz_context({"maxRecursionHint": 5})``. Without a hint the
    configured default (SCHEMAFUZZ_MAX_RECURSION_HINT) is used.
    """
    if isinstance(options, FuzzContextOptions):
        opts = options
    else:
        data = {**(options or {}), **kwargs}
        if "max_recursion_hint" not in data and "maxRecursionHint" not in data:
            data["max_recursion_hint"] = Config.from_env().max_recursion_hint
        opts = FuzzContextOptions.model_validate(data)

    return GenerationContext(
        max_recursion_hint=opts.max_recursion_hint,
        remaining_depth=opts.max_recursion_hint,
    )
