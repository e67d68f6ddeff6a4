from __future__ import annotations

import logging
import types
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum

from glue_runtime.glue.errors import MultipleWorldBuilders, NilWorld
from glue_runtime.glue.site import RegistrationSite

logger = logging.getLogger(__name__)


class EntryKind(str, Enum):
    FACTORY = "factory"
    MIXIN = "mixin"
    NAMESPACED = "namespaced"


@dataclass(frozen=True, slots=True)
class BuilderEntry:
    # One World() registration; applied in registration order by WorldBuilder.build().
    kind: EntryKind
    source: object
    site: RegistrationSite
    namespace: str | None = None


@dataclass(frozen=True, slots=True)
class _Computed:
    # Property taken from a capability class, evaluated against the receiving host.
    fget: Callable[[object], object]


@dataclass(frozen=True, slots=True)
class _Delegated:
    # Data attribute of an instance capability, read live from that instance.
    target: object
    name: str


# Member table merged from capabilities; later members replace earlier ones of the same name.
# Plain attribute assignment still works and wins over merged members, which is how steps keep state.
class CapabilityHost:
    def __init__(self) -> None:
        self._members: dict[str, object] = {}
        self._capabilities: list[str] = []

    def __getattr__(self, name: str) -> object:
        # Only reached when regular attribute lookup fails.
        members = self.__dict__.get("_members")
        if members is None or name not in members:
            raise AttributeError(f"{type(self).__name__} has no attribute {name!r}")
        value = members[name]
        if isinstance(value, _Computed):
            return value.fget(self)
        if isinstance(value, _Delegated):
            return getattr(value.target, value.name)
        return value

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self.__dict__.get("_members", {})))

    def _extend(self, capability: object) -> None:
        self._members.update(_members_of(capability, self))
        self._capabilities.append(_capability_name(capability))


def capabilities_of(host: CapabilityHost) -> list[str]:
    # Composed capability names in application order.
    return list(host._capabilities)


class Namespace(CapabilityHost):
    # Sub-object reached as world.<name>; shared by every builder registered under that name.
    def __init__(self, name: str) -> None:
        super().__init__()
        self._name = name

    def __repr__(self) -> str:
        return f"<Namespace {self._name}: {', '.join(self._capabilities)}>"


class World(CapabilityHost):
    # Per-scenario context object; replaced on every begin_scenario.
    def __init__(self) -> None:
        super().__init__()
        self._namespaces: dict[str, Namespace] = {}

    def __repr__(self) -> str:
        return f"<World {', '.join(self._capabilities)}>"

    def _extend_namespace(self, name: str, capability: object) -> None:
        namespace = self._namespaces.get(name)
        if namespace is None:
            namespace = Namespace(name)
            self._namespaces[name] = namespace
        namespace._extend(capability)
        self._members[name] = namespace
        self._capabilities.append(f"{_capability_name(capability)} (as {name})")


@dataclass
class WorldBuilder:
    # Ordered World() registrations; only one anonymous factory is allowed.
    _entries: list[BuilderEntry] = field(default_factory=list)
    _factory: BuilderEntry | None = None

    @property
    def entries(self) -> list[BuilderEntry]:
        return list(self._entries)

    def register(
        self,
        site: RegistrationSite,
        *,
        factory: Callable[[], object] | None = None,
        mixins: Sequence[object] = (),
        namespaced: Mapping[str, object] | None = None,
    ) -> None:
        # All-or-nothing: every entry is checked before any is recorded.
        entries: list[BuilderEntry] = []
        if factory is not None:
            entries.append(self._factory_entry(factory, site))
        entries.extend(_mixin_entry(capability, site) for capability in mixins)
        entries.extend(_namespaced_entry(name, capability, site) for name, capability in (namespaced or {}).items())
        for entry in entries:
            if entry.kind is EntryKind.FACTORY:
                self._factory = entry
            self._entries.append(entry)
            logger.debug("World %s %s registered at %s", entry.kind.value, _describe(entry), site)

    def register_factory(self, factory: Callable[[], object], site: RegistrationSite) -> None:
        self.register(site, factory=factory)

    def register_mixin(self, capability: object, site: RegistrationSite) -> None:
        self.register(site, mixins=[capability])

    def register_namespaced(self, name: str, capability: object, site: RegistrationSite) -> None:
        self.register(site, namespaced={name: capability})

    def _factory_entry(self, factory: Callable[[], object], site: RegistrationSite) -> BuilderEntry:
        if not callable(factory):
            raise TypeError("World factory must be callable")
        if self._factory is not None:
            raise MultipleWorldBuilders([self._factory.site, site])
        return BuilderEntry(kind=EntryKind.FACTORY, source=factory, site=site)

    def build(self) -> World:
        # All-or-nothing: the world is only returned once every entry applied.
        world = World()
        for entry in self._entries:
            if entry.kind is EntryKind.FACTORY:
                capability = entry.source()  # type: ignore[operator]
                if capability is None:
                    raise NilWorld(entry.site)
                world._extend(capability)
            elif entry.kind is EntryKind.MIXIN:
                world._extend(entry.source)
            else:
                assert entry.namespace is not None
                world._extend_namespace(entry.namespace, entry.source)
        return world


def _members_of(capability: object, receiver: object) -> dict[str, object]:
    if isinstance(capability, type):
        return _class_members(capability, receiver)
    if isinstance(capability, types.ModuleType):
        return {name: value for name, value in vars(capability).items() if not name.startswith("_")}
    if isinstance(capability, Mapping):
        members: dict[str, object] = {}
        for key, value in capability.items():
            if not isinstance(key, str):
                raise TypeError(f"World capability keys must be strings, got {key!r}")
            members[key] = value
        return members
    # Instance capabilities: methods stay bound to the instance, data is read from it on access.
    instance_members: dict[str, object] = {}
    for name in dir(capability):
        if name.startswith("_"):
            continue
        value = getattr(capability, name)
        instance_members[name] = value if callable(value) else _Delegated(capability, name)
    return instance_members


def _class_members(cls: type, receiver: object) -> dict[str, object]:
    # Walk the MRO base-first so subclasses override their bases.
    members: dict[str, object] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, value in vars(klass).items():
            if name.startswith("__") and name.endswith("__"):
                continue
            if isinstance(value, staticmethod):
                members[name] = value.__func__
            elif isinstance(value, classmethod):
                members[name] = types.MethodType(value.__func__, cls)
            elif isinstance(value, property):
                if value.fget is not None:
                    members[name] = _Computed(value.fget)
            elif isinstance(value, types.FunctionType):
                members[name] = types.MethodType(value, receiver)
            else:
                members[name] = value
    return members


def _capability_name(capability: object) -> str:
    if isinstance(capability, (type, types.ModuleType)):
        return getattr(capability, "__qualname__", capability.__name__)
    return type(capability).__name__


def _mixin_entry(capability: object, site: RegistrationSite) -> BuilderEntry:
    if capability is None:
        raise TypeError("World capability must not be None")
    return BuilderEntry(kind=EntryKind.MIXIN, source=capability, site=site)


def _namespaced_entry(name: str, capability: object, site: RegistrationSite) -> BuilderEntry:
    if not isinstance(name, str) or not name.isidentifier():
        raise ValueError(f"World namespace must be a valid identifier: {name!r}")
    if capability is None:
        raise TypeError(f"World capability for namespace {name!r} must not be None")
    return BuilderEntry(kind=EntryKind.NAMESPACED, source=capability, site=site, namespace=name)


def _describe(entry: BuilderEntry) -> str:
    if entry.kind is EntryKind.NAMESPACED:
        return f"{_capability_name(entry.source)} (as {entry.namespace})"
    if entry.kind is EntryKind.FACTORY:
        return repr(entry.source)
    return _capability_name(entry.source)
