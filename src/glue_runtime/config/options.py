from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class LoaderOptions:
    # Injected into SourceLoader; fields are read on every call so they can be flipped mid-run.
    use_legacy_autoloader: bool = False
    source_extensions: tuple[str, ...] = (".py",)
