from __future__ import annotations

from types import ModuleType

import pytest

from glue_runtime.glue.errors import MultipleWorldBuilders, NilWorld
from glue_runtime.glue.site import RegistrationSite
from glue_runtime.glue.world import EntryKind, Namespace, World, WorldBuilder, capabilities_of


class ModuleOne:
    def method_one(self) -> int:
        return 1


class ModuleMinusOne:
    def method_one(self) -> int:
        return -1


class ModuleTwo:
    def method_two(self) -> int:
        return 2


class ModuleThree:
    def method_three(self) -> int:
        return 3


class Inventory:
    def capabilities(self) -> list[str]:
        return ["fly"]


def _site(label: str) -> RegistrationSite:
    return RegistrationSite(label=label, filename="features/support/env.py", lineno=len(label))


def test_build_without_registrations_returns_plain_world() -> None:
    world = WorldBuilder().build()
    assert type(world) is World
    assert capabilities_of(world) == []


def test_mixins_extend_the_world() -> None:
    builder = WorldBuilder()
    builder.register_mixin(ModuleOne, _site("a"))
    builder.register_mixin(ModuleTwo, _site("b"))
    world = builder.build()
    assert world.method_one() == 1
    assert world.method_two() == 2
    assert "ModuleOne" in repr(world)
    assert "ModuleTwo" in repr(world)


def test_methods_are_bound_to_the_world() -> None:
    class Greeter:
        def greet(self) -> str:
            return f"hello {self.who}"

        @property
        def shout(self) -> str:
            return self.greet().upper()

        @staticmethod
        def plain() -> str:
            return "plain"

    builder = WorldBuilder()
    builder.register_mixin(Greeter, _site("a"))
    world = builder.build()
    world.who = "fish"
    assert world.greet() == "hello fish"
    assert world.shout == "HELLO FISH"
    assert world.plain() == "plain"


def test_module_mapping_and_instance_capabilities() -> None:
    helpers = ModuleType("helpers")
    helpers.double = lambda n: n * 2  # type: ignore[attr-defined]
    helpers._hidden = True  # type: ignore[attr-defined]

    class Counter:
        def __init__(self) -> None:
            self.count = 0

        def bump(self) -> int:
            self.count += 1
            return self.count

    counter = Counter()
    builder = WorldBuilder()
    builder.register_mixin(helpers, _site("a"))
    builder.register_mixin({"answer": 42}, _site("b"))
    builder.register_mixin(counter, _site("c"))
    world = builder.build()
    assert world.double(4) == 8
    assert not hasattr(world, "_hidden")
    assert world.answer == 42
    assert world.bump() == 1
    assert counter.count == 1
    # Data attributes are read from the instance, so they follow its methods.
    assert world.count == 1
    counter.count = 7
    assert world.count == 7


def test_namespaces_get_their_own_objects() -> None:
    builder = WorldBuilder()
    builder.register_mixin(ModuleOne, _site("a"))
    builder.register_namespaced("module_two", ModuleTwo, _site("b"))
    builder.register_namespaced("module_three", ModuleThree, _site("c"))
    world = builder.build()

    assert world.method_one() == 1
    assert isinstance(world.module_two, Namespace)
    assert world.module_two.method_two() == 2
    assert world.module_three.method_three() == 3
    assert not hasattr(world.module_two, "method_one")
    assert "ModuleTwo (as module_two)" in repr(world)
    assert "ModuleThree (as module_three)" in repr(world)


def test_namespace_merges_members_from_every_builder() -> None:
    builder = WorldBuilder()
    builder.register_namespaced("namespace", ModuleOne, _site("a"))
    builder.register_namespaced("namespace", ModuleTwo, _site("b"))
    world = builder.build()
    assert world.namespace.method_one() == 1
    assert world.namespace.method_two() == 2


def test_namespace_conflicts_resolve_to_last_registration() -> None:
    builder = WorldBuilder()
    builder.register_namespaced("namespace", ModuleOne, _site("a"))
    builder.register_namespaced("namespace", ModuleMinusOne, _site("b"))
    world = builder.build()
    assert world.namespace.method_one() == -1


def test_factory_and_mixins_apply_in_registration_order() -> None:
    builder = WorldBuilder()
    builder.register_mixin({"source": "mixin", "mixin_only": True}, _site("a"))
    builder.register_factory(lambda: {"source": "factory"}, _site("b"))
    world = builder.build()
    assert world.source == "factory"
    assert world.mixin_only is True
    assert [entry.kind for entry in builder.entries] == [EntryKind.MIXIN, EntryKind.FACTORY]


def test_build_is_deterministic_and_fresh() -> None:
    builder = WorldBuilder()
    builder.register_factory(lambda: {"items": []}, _site("a"))
    builder.register_namespaced("ns", ModuleOne, _site("b"))
    first = builder.build()
    second = builder.build()
    assert first is not second
    assert first.ns is not second.ns
    assert capabilities_of(first) == capabilities_of(second) == ["dict", "ModuleOne (as ns)"]


def test_second_factory_raises_with_both_sites() -> None:
    builder = WorldBuilder()
    first, second = _site("first"), _site("second!")
    builder.register_factory(lambda: {}, first)
    with pytest.raises(MultipleWorldBuilders) as exc_info:
        builder.register_factory(lambda: [], second)

    assert exc_info.value.sites == [first, second]
    message = str(exc_info.value)
    assert message.startswith("You can only pass a factory to World() once, but it's happening\nin 2 places:\n\n")
    assert f"{first}\n{second}\n" in message
    assert "namespaces" in message
    # The rejected factory is not recorded.
    assert len(builder.entries) == 1


def test_single_factory_and_many_mixins_never_conflict() -> None:
    builder = WorldBuilder()
    builder.register_factory(lambda: {}, _site("a"))
    for _ in range(3):
        builder.register_mixin(ModuleOne, _site("b"))
    assert len(builder.entries) == 4


def test_factory_returning_none_raises_nil_world() -> None:
    site = _site("world")
    builder = WorldBuilder()
    builder.register_factory(lambda: None, site)
    with pytest.raises(NilWorld) as exc_info:
        builder.build()
    assert str(exc_info.value) == "World procs should never return None"
    assert exc_info.value.sites == [site]


def test_namespace_must_be_identifier() -> None:
    with pytest.raises(ValueError):
        WorldBuilder().register_namespaced("not valid", ModuleOne, _site("a"))


def test_none_capability_is_rejected_at_registration() -> None:
    with pytest.raises(TypeError):
        WorldBuilder().register_mixin(None, _site("a"))


def test_capability_members_may_use_any_public_name() -> None:
    builder = WorldBuilder()
    builder.register_mixin(Inventory, _site("a"))
    builder.register_namespaced("inventory", Inventory, _site("b"))
    world = builder.build()
    assert world.capabilities() == ["fly"]
    assert world.inventory.capabilities() == ["fly"]
    assert capabilities_of(world) == ["Inventory", "Inventory (as inventory)"]
    assert capabilities_of(world.inventory) == ["Inventory"]


def test_register_records_nothing_when_any_part_is_invalid() -> None:
    builder = WorldBuilder()
    with pytest.raises(TypeError):
        builder.register(_site("a"), factory=dict, mixins=[ModuleOne, None])
    with pytest.raises(ValueError):
        builder.register(_site("b"), factory=dict, namespaced={"ok": ModuleTwo, "not ok": ModuleThree})
    assert builder.entries == []

    # The factory slot is still free after the failed calls.
    builder.register(_site("c"), factory=dict, mixins=[ModuleOne], namespaced={"ok": ModuleTwo})
    assert [entry.kind for entry in builder.entries] == [EntryKind.FACTORY, EntryKind.MIXIN, EntryKind.NAMESPACED]
