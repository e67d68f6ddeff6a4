from __future__ import annotations

from collections.abc import Sequence

from glue_runtime.glue.site import RegistrationSite


class GlueError(RuntimeError):
    # Base class for glue-layer failures.
    pass


class NilWorld(GlueError):
    # Raised when a world factory returns None; carries only the factory's registration site.
    def __init__(self, site: RegistrationSite) -> None:
        super().__init__("World procs should never return None")
        self.site = site

    @property
    def sites(self) -> list[RegistrationSite]:
        return [self.site]


class MultipleWorldBuilders(GlueError):
    # Raised at the second anonymous World factory registration.
    def __init__(self, sites: Sequence[RegistrationSite]) -> None:
        self.sites = list(sites)
        lines = "\n".join(str(site) for site in self.sites)
        super().__init__(
            "You can only pass a factory to World() once, but it's happening\n"
            f"in {len(self.sites)} places:\n\n"
            f"{lines}\n\n"
            "Use capability classes or namespaces instead to extend your worlds:\n"
            "World(MyHelpers) or World(helpers=MyHelpers).\n"
        )
