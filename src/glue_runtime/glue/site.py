from __future__ import annotations

import sys
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RegistrationSite:
    # Where a world builder or hook was declared; rendered into error messages.
    label: str
    filename: str | None = None
    lineno: int | None = None

    def __str__(self) -> str:
        if self.filename is None:
            return self.label
        return f"{self.filename}:{self.lineno}:in `{self.label}'"


def caller_site(label: str, depth: int = 1) -> RegistrationSite:
    # depth=1 is the caller of the function invoking caller_site.
    frame = sys._getframe(depth + 1)
    return RegistrationSite(label=label, filename=frame.f_code.co_filename, lineno=frame.f_lineno)
