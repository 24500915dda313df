"""Tests for registration, lookup and composition."""

import pytest

from schemafuzz import descriptors as d
from schemafuzz.config import Config
from schemafuzz.context import fuzz_context
from schemafuzz.core import create_core_registry
from schemafuzz.descriptors import SchemaDescriptor
from schemafuzz.errors import FuzzError, MalformedDescriptor, UnsupportedSchema
from schemafuzz.fuzzer import Composition, FuzzerId, concrete, gen
from schemafuzz.registry import Registry, create_registry
from tests.catalog import TYPES, UNKNOWN_TYPES

fuzz_str1 = concrete(lambda n: f"Hello {n}", "StringType")
fuzz_str2 = concrete(lambda n: f"Bye {n}", "StringType")
fuzz_num = concrete(lambda n: n + 1, "NumberType")


def _ctx():
    return fuzz_context(max_recursion_hint=10)


class TestCreateRegistry:
    def test_has_no_fuzzers(self):
        for b in TYPES + UNKNOWN_TYPES:
            assert create_registry(Config()).get_fuzzer(b) is None

    def test_uses_config_precedence(self):
        r = create_registry(Config(lookup_precedence="tag", collection_span=4))
        assert r.precedence == "tag"
        assert r.collection_span == 4

    def test_rejects_bad_precedence(self):
        with pytest.raises(ValueError, match="precedence must be 'name' or 'tag'"):
            Registry(precedence="kind")


class TestRegister:
    def test_registers_a_simple_fuzzer(self):
        r = create_registry(Config())
        assert r.register(fuzz_str1) is r
        assert r.get_fuzzer(d.string()) is fuzz_str1

    def test_registers_multiple_fuzzers_sequentially(self):
        r = create_registry(Config())
        assert r.register(fuzz_str1) is r
        assert r.register(fuzz_num) is r
        assert r.get_fuzzer(d.string()) is fuzz_str1
        assert r.get_fuzzer(d.number()) is fuzz_num

    def test_registers_multiple_fuzzers_in_bulk(self):
        r = create_registry(Config())
        assert r.register(fuzz_str1, fuzz_num) is r
        assert r.get_fuzzer(d.string()) is fuzz_str1
        assert r.get_fuzzer(d.number()) is fuzz_num

    def test_later_registration_wins_across_calls(self):
        r = create_registry(Config()).register(fuzz_str1)
        r.register(fuzz_str2)
        assert r.get_fuzzer(d.string()) is fuzz_str2

        r = create_registry(Config()).register(fuzz_str2)
        r.register(fuzz_str1)
        assert r.get_fuzzer(d.string()) is fuzz_str1

    def test_later_registration_wins_within_one_call(self):
        r = create_registry(Config()).register(fuzz_str1, fuzz_str2)
        assert r.get_fuzzer(d.string()) is fuzz_str2

        r = create_registry(Config()).register(fuzz_str2, fuzz_str1)
        assert r.get_fuzzer(d.string()) is fuzz_str1

    def test_batched_and_sequential_registration_agree(self):
        batched = create_registry(Config()).register(fuzz_str1, fuzz_str2)
        sequential = create_registry(Config()).register(fuzz_str1).register(fuzz_str2)
        b = batched.example_generator(d.string())
        s = sequential.example_generator(d.string())
        for i in range(20):
            assert b.encode(i, _ctx()) == s.encode(i, _ctx()) == f"Bye {i}"

    def test_custom_string_fuzzer_encodes(self):
        r = create_registry(Config()).register(fuzz_str1)
        assert r.example_generator(d.string()).encode(5, _ctx()) == "Hello 5"

    def test_registered_keys(self):
        r = create_registry(Config()).register(fuzz_str1, fuzz_num, fuzz_str2)
        assert r.registered_keys() == [("tag", "StringType"), ("tag", "NumberType")]

    def test_registration_is_logged(self, caplog):
        with caplog.at_level("DEBUG", logger="schemafuzz.registry"):
            r = create_registry(Config()).register(fuzz_str1)
            r.register(fuzz_str2)
        assert "Registered fuzzer for tag=StringType" in caplog.text
        assert "Replacing fuzzer for tag=StringType" in caplog.text

    def test_fuzzer_needs_exactly_one_key(self):
        with pytest.raises(ValueError, match="Exactly one of tag or name"):
            concrete(lambda n: n)
        with pytest.raises(ValueError, match="Exactly one of tag or name"):
            concrete(lambda n: n, "NumberType", name="Age")


class TestLookupPrecedence:
    age = SchemaDescriptor("NumberType", "Age")
    by_name = concrete(lambda n: n % 120, name="Age")
    by_tag = concrete(lambda n: -n, "NumberType")

    def test_name_wins_by_default(self):
        r = create_registry(Config()).register(self.by_tag, self.by_name)
        assert r.get_fuzzer(self.age) is self.by_name
        assert r.get_fuzzer(d.number()) is self.by_tag

    def test_tag_wins_when_configured(self):
        r = Registry(precedence="tag").register(self.by_tag, self.by_name)
        assert r.get_fuzzer(self.age) is self.by_tag

    def test_falls_back_to_other_key(self):
        assert Registry(precedence="tag").register(self.by_name).get_fuzzer(self.age) is self.by_name
        assert Registry().register(self.by_tag).get_fuzzer(self.age) is self.by_tag

    def test_name_fuzzer_covers_unknown_tag(self):
        money = SchemaDescriptor("BigIntType", "Money")
        r = create_registry(Config()).register(concrete(lambda n: n * 100, name="Money"))
        assert r.example_generator(money).encode(3, _ctx()) == 300

    def test_name_keyed_fuzzer_inside_composite(self):
        r = create_core_registry(Config()).register(self.by_name)
        b = d.type_({"age": self.age, "count": d.number()})
        assert r.example_generator(b).encode(250, _ctx()) == {"age": 10, "count": 250}

    def test_fuzzer_id_key(self):
        assert FuzzerId("name", "Age").key == ("name", "Age")
        assert self.by_tag.id == FuzzerId("tag", "NumberType")


class TestExampleGenerator:
    def test_unsupported_root_raises_at_compose_time(self):
        for b in UNKNOWN_TYPES:
            with pytest.raises(UnsupportedSchema) as exc:
                create_core_registry(Config()).example_generator(b)
            assert exc.value.code == "unsupported_schema"
            assert exc.value.descriptor is b

    def test_unsupported_child_raises_before_encode(self):
        calls: list[int] = []
        r = create_registry(Config()).register(
            concrete(lambda n: calls.append(n), "NumberType"),
            create_core_registry(Config()).get_fuzzer(d.type_({})),
        )
        b = d.type_({"a": d.number(), "b": d.string()})
        with pytest.raises(UnsupportedSchema, match="StringType"):
            r.example_generator(b)
        assert calls == []

    def test_retry_after_registering(self):
        r = create_core_registry(Config())
        b = d.array(UNKNOWN_TYPES[1])
        with pytest.raises(UnsupportedSchema):
            r.example_generator(b)
        r.register(concrete(lambda n: n * 2, "BigIntType"))
        assert all(v % 2 == 0 for v in r.example_generator(b).encode(9, _ctx()))

    def test_deferred_target_fails_on_first_resolution(self):
        ghost = d.recursive("Ghost", lambda: UNKNOWN_TYPES[1])
        encoder = create_core_registry(Config()).example_generator(ghost)
        with pytest.raises(UnsupportedSchema):
            encoder.encode(0, _ctx())

    @pytest.mark.parametrize(
        "b",
        [
            d.union(),
            SchemaDescriptor("InterfaceType", "Bad", (d.number(),), keys=()),
            SchemaDescriptor("PartialType", "Bad", (), keys=("a",)),
            SchemaDescriptor("ArrayType", "Bad"),
            SchemaDescriptor("ReadonlyArrayType", "Bad", (d.number(), d.string())),
            SchemaDescriptor("DictionaryType", "Bad", (d.string(),)),
            SchemaDescriptor("ExactType", "Bad"),
            SchemaDescriptor("KeyofType", "Bad"),
            SchemaDescriptor("RecursiveType", "Bad"),
        ],
        ids=lambda b: b.kind_tag,
    )
    def test_malformed_descriptors(self, b):
        with pytest.raises(MalformedDescriptor) as exc:
            create_core_registry(Config()).example_generator(b)
        assert exc.value.code == "malformed_descriptor"
        assert isinstance(exc.value, FuzzError)

    def test_malformed_nested_descriptor(self):
        b = d.type_({"ok": d.number(), "bad": d.union()})
        with pytest.raises(MalformedDescriptor, match="no branches"):
            create_core_registry(Config()).example_generator(b)

    def test_shared_subtree_compiles_once(self):
        compiled: list[str] = []

        def point(b):
            compiled.append(b.name)
            return Composition((), lambda n, ctx: (n, n))

        shared = SchemaDescriptor("PointType", "Point")
        r = create_core_registry(Config()).register(gen(point, "PointType"))
        encoder = r.example_generator(d.type_({"a": shared, "b": shared}))
        assert compiled == ["Point"]
        assert encoder.encode(3, _ctx()) == {"a": (3, 3), "b": (3, 3)}

    def test_composition_containing_itself_terminates(self):
        def pair(n, ctx, num, again):
            return [num.encode(n, ctx), again.encode(n, ctx)]

        looping = SchemaDescriptor("LoopType", "Loop")
        r = create_core_registry(Config()).register(
            gen(lambda b: Composition((d.number(), b), pair), name="Loop"),
        )
        encoder = r.example_generator(looping)
        assert encoder.self_referential
        assert encoder.encode(7, fuzz_context(max_recursion_hint=2)) == [7, [7, [0, None]]]

    def test_generator_sees_descended_context(self):
        seen: list[int] = []

        def spy(b):
            def combine(n, ctx, child):
                seen.append(ctx.remaining_depth)
                return child.encode(n, ctx)

            return Composition((d.number(),), combine)

        r = create_core_registry(Config()).register(gen(spy, name="Spy"))
        r.example_generator(SchemaDescriptor("SpyType", "Spy")).encode(1, fuzz_context(max_recursion_hint=4))
        assert seen == [3]

    def test_compile_is_logged(self, caplog):
        with caplog.at_level("DEBUG", logger="schemafuzz.registry"):
            create_core_registry(Config()).example_generator(d.number())
        assert "Compiled example generator for number" in caplog.text
