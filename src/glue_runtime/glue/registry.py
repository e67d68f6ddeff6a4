from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from glue_runtime.config.options import LoaderOptions
from glue_runtime.glue import dsl
from glue_runtime.glue.hooks import Hook, HookAcceptor, HookPhase, HookRegistry
from glue_runtime.glue.site import RegistrationSite, caller_site
from glue_runtime.glue.source_loader import SourceLoader
from glue_runtime.glue.world import World, WorldBuilder

logger = logging.getLogger(__name__)


# Composition root: owns the source loader, world builder and hook registry, and the running scenario's world.
# Registration calls made by a loaded file go to the registry whose load_code_file ran it.
# A begin_scenario that fails leaves current_world exactly as it was.
class Registry:
    def __init__(self, options: LoaderOptions | None = None) -> None:
        self.options = options if options is not None else LoaderOptions()
        self.world_builder = WorldBuilder()
        self.hook_registry = HookRegistry()
        self.source_loader = SourceLoader(self.options, init_globals=dsl.namespace)
        self._current_world: World | None = None
        dsl.bind(self)

    @property
    def current_world(self) -> World | None:
        return self._current_world

    def load_code_file(self, path: str | Path) -> None:
        with dsl.bound(self):
            self.source_loader.load_code_file(path)

    def register_world(
        self,
        *capabilities: object,
        factory: Callable[[], object] | None = None,
        site: RegistrationSite | None = None,
        **namespaced: object,
    ) -> None:
        site = site if site is not None else caller_site("register_world")
        self.world_builder.register(site, factory=factory, mixins=capabilities, namespaced=namespaced)

    def register_hook(
        self,
        phase: HookPhase | str,
        *tag_expressions: str,
        action: Callable[..., object],
        site: RegistrationSite | None = None,
        name: str | None = None,
    ) -> Hook:
        site = site if site is not None else caller_site("register_hook")
        return self.hook_registry.register(phase, tag_expressions, action, site, name=name)

    def begin_scenario(self, scenario: object) -> World:
        # The world never depends on the scenario.
        world = self.world_builder.build()
        self._current_world = world
        logger.debug("World built: %r", world)
        return world

    def end_scenario(self) -> None:
        self._current_world = None

    def hooks_for(self, phase: HookPhase | str, scenario: HookAcceptor) -> list[Hook]:
        return self.hook_registry.hooks_for(phase, scenario)

    def hooks(self, phase: HookPhase | str) -> list[Hook]:
        return self.hook_registry.hooks(phase)
