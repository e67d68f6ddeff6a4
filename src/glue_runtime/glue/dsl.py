from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from glue_runtime.glue.errors import GlueError
from glue_runtime.glue.hooks import Hook, HookPhase
from glue_runtime.glue.site import RegistrationSite, caller_site

if TYPE_CHECKING:
    from glue_runtime.glue.registry import Registry

# Registration surface for step-definition files. Loaded files get these names seeded into their globals;
# every call forwards to the bound registry (the one loading the file, else the most recently created).
_active: Registry | None = None


def bind(registry: Registry) -> None:
    global _active
    _active = registry


@contextmanager
def bound(registry: Registry) -> Iterator[Registry]:
    # Binds registry for the duration of a code-file load, then restores the previous binding.
    global _active
    previous = _active
    _active = registry
    try:
        yield registry
    finally:
        _active = previous


def active_registry() -> Registry:
    if _active is None:
        raise GlueError("No glue registry is bound; create a Registry before loading code files")
    return _active


def world(*capabilities: object, factory: Callable[[], object] | None = None, **namespaced: object) -> None:
    # `factory` is reserved and cannot be used as a namespace name.
    active_registry().register_world(
        *capabilities,
        factory=factory,
        site=caller_site("world"),
        **namespaced,
    )


def _hook_decorator(
    phase: HookPhase,
    tag_expressions: tuple[str, ...],
    name: str | None,
    site: RegistrationSite,
) -> Callable[[Callable[..., object]], Hook]:
    registry = active_registry()

    def _decorate(action: Callable[..., object]) -> Hook:
        return registry.register_hook(phase, *tag_expressions, action=action, site=site, name=name)

    return _decorate


def before(*tag_expressions: str, name: str | None = None) -> Callable[[Callable[..., object]], Hook]:
    return _hook_decorator(HookPhase.BEFORE, tag_expressions, name, caller_site("before"))


def after(*tag_expressions: str, name: str | None = None) -> Callable[[Callable[..., object]], Hook]:
    return _hook_decorator(HookPhase.AFTER, tag_expressions, name, caller_site("after"))


def around(*tag_expressions: str, name: str | None = None) -> Callable[[Callable[..., object]], Hook]:
    # Around actions receive (scenario, run_scenario) and must call run_scenario themselves.
    return _hook_decorator(HookPhase.AROUND, tag_expressions, name, caller_site("around"))


def after_step(*tag_expressions: str, name: str | None = None) -> Callable[[Callable[..., object]], Hook]:
    return _hook_decorator(HookPhase.AFTER_STEP, tag_expressions, name, caller_site("after_step"))


def before_all(*, name: str | None = None) -> Callable[[Callable[..., object]], Hook]:
    return _hook_decorator(HookPhase.BEFORE_ALL, (), name, caller_site("before_all"))


def after_all(*, name: str | None = None) -> Callable[[Callable[..., object]], Hook]:
    return _hook_decorator(HookPhase.AFTER_ALL, (), name, caller_site("after_all"))


def namespace() -> dict[str, object]:
    # Globals seeded into every loaded code file.
    return {
        "world": world,
        "before": before,
        "after": after,
        "around": around,
        "after_step": after_step,
        "before_all": before_all,
        "after_all": after_all,
    }
