import logging
from typing import Any

from schemafuzz.config import Config
from schemafuzz.encoders import CompositeEncoder, ConcreteEncoder, Encoder, LazyEncoder
from schemafuzz.errors import UnsupportedSchema
from schemafuzz.fuzzer import Concrete, Deferred, FuzzerDefinition

logger = logging.getLogger(__name__)

_PRECEDENCES = ("name", "tag")


class Registry:
    """Maps descriptor tags and names to fuzzer definitions.

    Registering a definition under a key that is already present replaces
    it; within one ``register`` call the last definition for a key wins.
    Mutation is expected to finish before generation starts and is not
    synchronized.
    """

    def __init__(self, *, precedence: str = "name", collection_span: int = 16):
        if precedence not in _PRECEDENCES:
            raise ValueError(f"precedence must be 'name' or 'tag', got {precedence!r}")
        if collection_span < 1:
            raise ValueError("collection_span must be >= 1")
        self.precedence = precedence
        self.collection_span = collection_span
        self._fuzzers: dict[tuple[str, str], FuzzerDefinition] = {}

    def register(self, *defs: FuzzerDefinition) -> "Registry":
        for d in defs:
            key = d.id.key
            if key in self._fuzzers:
                logger.debug("Replacing fuzzer for %s=%s", d.id.keyed_by, d.id.value)
            else:
                logger.debug("Registered fuzzer for %s=%s", d.id.keyed_by, d.id.value)
            self._fuzzers[key] = d
        return self

    def get_fuzzer(self, descriptor: Any) -> FuzzerDefinition | None:
        name = getattr(descriptor, "name", None)
        by_name = self._fuzzers.get(("name", name)) if name is not None else None
        by_tag = self._fuzzers.get(("tag", descriptor.kind_tag))
        if self.precedence == "name":
            return by_name or by_tag
        return by_tag or by_name

    def registered_keys(self) -> list[tuple[str, str]]:
        return list(self._fuzzers.keys())

    def example_generator(self, descriptor: Any) -> Encoder:
        """Compile ``descriptor`` into an encoder graph.

        Every child is resolved now, so a missing fuzzer raises
        UnsupportedSchema before anything is encoded. Deferred children
        (self-references) are compiled on first use.
        """
        encoder = self._compile(descriptor, {})
        logger.debug(
            "Compiled example generator for %s",
            getattr(descriptor, "name", None) or descriptor.kind_tag,
        )
        return encoder

    def _compile(self, descriptor: Any, memo: dict[int, tuple[Any, Encoder | None]]) -> Encoder:
        key = id(descriptor)
        if key in memo:
            cached = memo[key][1]
            if cached is None:
                # Reached again while its own children are compiling
                return LazyEncoder(descriptor, lambda: memo[key][1])
            return cached

        fuzzer = self.get_fuzzer(descriptor)
        if fuzzer is None:
            raise UnsupportedSchema(descriptor)

        # Keep the descriptor alive so its id cannot be reused within this compile
        memo[key] = (descriptor, None)
        encoder: Encoder
        try:
            if isinstance(fuzzer.impl, Concrete):
                encoder = ConcreteEncoder(descriptor, fuzzer.impl.func)
            else:
                composition = fuzzer.impl.func(descriptor)
                children = [self._compile_child(c, memo) for c in composition.children]
                encoder = CompositeEncoder(
                    descriptor,
                    composition.combine,
                    children,
                    descends=composition.descends,
                )
        except Exception:
            del memo[key]
            raise

        memo[key] = (descriptor, encoder)
        return encoder

    def _compile_child(self, child: Any, memo: dict[int, tuple[Any, Encoder | None]]) -> Encoder:
        if isinstance(child, Deferred):
            return LazyEncoder(child, lambda: self._compile(child.resolve(), memo))
        return self._compile(child, memo)


def create_registry(config: Config | None = None) -> Registry:
    """Create an empty registry."""
    config = config or Config.from_env()
    return Registry(
        precedence=config.lookup_precedence,
        collection_span=config.collection_span,
    )
