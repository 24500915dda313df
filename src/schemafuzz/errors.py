"""Error taxonomy for example generation.

Both errors surface while composing a generator, never from ``encode``.
"""

from __future__ import annotations

from typing import Any


class FuzzError(Exception):
    def __init__(
        self,
        *,
        code: str,
        message: str,
        descriptor: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.descriptor = descriptor


class UnsupportedSchema(FuzzError):
    """No fuzzer is registered for a descriptor's name or tag."""

    def __init__(self, descriptor: Any) -> None:
        tag = getattr(descriptor, "kind_tag", None)
        name = getattr(descriptor, "name", None)
        super().__init__(
            code="unsupported_schema",
            message=f"No fuzzer registered for kind_tag={tag!r} name={name!r}",
            descriptor=descriptor,
        )


class MalformedDescriptor(FuzzError):
    """A composite descriptor lacks a structurally required part."""

    def __init__(self, descriptor: Any, reason: str) -> None:
        tag = getattr(descriptor, "kind_tag", None)
        super().__init__(
            code="malformed_descriptor",
            message=f"Malformed {tag} descriptor: {reason}",
            descriptor=descriptor,
        )
        self.reason = reason
