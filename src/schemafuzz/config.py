import os
from dataclasses import dataclass

_PRECEDENCES = ("name", "tag")


def _int_from_env(var: str, default: int, *, minimum: int) -> int:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise RuntimeError(f"{var} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise RuntimeError(f"{var} must be >= {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class Config:
    max_recursion_hint: int = 10
    collection_span: int = 16
    lookup_precedence: str = "name"

    @classmethod
    def from_env(cls) -> "Config":
        precedence = os.environ.get("SCHEMAFUZZ_LOOKUP_PRECEDENCE", "name").strip().lower()
        if precedence not in _PRECEDENCES:
            raise RuntimeError(
                f"SCHEMAFUZZ_LOOKUP_PRECEDENCE must be 'name' or 'tag', got {precedence!r}"
            )

        return cls(
            max_recursion_hint=_int_from_env("SCHEMAFUZZ_MAX_RECURSION_HINT", 10, minimum=0),
            collection_span=_int_from_env("SCHEMAFUZZ_COLLECTION_SPAN", 16, minimum=1),
            lookup_precedence=precedence,
        )
