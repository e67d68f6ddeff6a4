from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from glue_runtime.glue.site import RegistrationSite

logger = logging.getLogger(__name__)


class HookPhase(str, Enum):
    BEFORE = "before"
    AFTER = "after"
    AROUND = "around"
    AFTER_STEP = "after_step"
    BEFORE_ALL = "before_all"
    AFTER_ALL = "after_all"


@dataclass(frozen=True, slots=True, eq=False)
class Hook:
    # Hooks compare by identity so the same tags + action registered twice stay distinct.
    phase: HookPhase
    tag_expressions: tuple[str, ...]
    action: Callable[..., object]
    site: RegistrationSite
    name: str | None = None

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.action(*args, **kwargs)

    @property
    def location(self) -> str:
        return str(self.site)


class HookAcceptor(Protocol):
    # Scenario-side capability deciding whether a hook's tag expressions apply.
    def accept_hook(self, hook: Hook) -> bool:
        raise NotImplementedError("Scenario must implement accept_hook")


@dataclass
class HookRegistry:
    # Hooks per phase in registration order; queries never mutate this state.
    _hooks: dict[HookPhase, list[Hook]] = field(default_factory=dict)

    def register(
        self,
        phase: HookPhase | str,
        tag_expressions: Sequence[str],
        action: Callable[..., object],
        site: RegistrationSite,
        *,
        name: str | None = None,
    ) -> Hook:
        if not callable(action):
            raise TypeError("Hook action must be callable")
        resolved = HookPhase(phase)
        hook = Hook(
            phase=resolved,
            tag_expressions=tuple(tag_expressions),
            action=action,
            site=site,
            name=name,
        )
        self._hooks.setdefault(resolved, []).append(hook)
        logger.debug("%s hook registered at %s tags=%s", resolved.value, site, list(hook.tag_expressions))
        return hook

    def hooks(self, phase: HookPhase | str) -> list[Hook]:
        return list(self._hooks.get(HookPhase(phase), []))

    def hooks_for(self, phase: HookPhase | str, scenario: HookAcceptor) -> list[Hook]:
        # accept_hook is asked once per hook, in order; no short-circuit across hooks.
        return [hook for hook in self._hooks.get(HookPhase(phase), []) if scenario.accept_hook(hook)]
