from __future__ import annotations

import logging
import runpy
from collections.abc import Callable, Mapping
from pathlib import Path

from glue_runtime.config.options import LoaderOptions

logger = logging.getLogger(__name__)


# Executes step-definition source files. By default each file runs at most once per loader, keyed by its
# resolved path; with options.use_legacy_autoloader set every call re-runs it and the loaded set is untouched.
# Files whose suffix is not in options.source_extensions are skipped. Errors propagate and the file stays unrecorded.
class SourceLoader:
    def __init__(
        self,
        options: LoaderOptions,
        *,
        init_globals: Callable[[], Mapping[str, object]] | None = None,
    ) -> None:
        self._options = options
        self._init_globals = init_globals
        self._loaded: set[str] = set()

    @property
    def options(self) -> LoaderOptions:
        return self._options

    @property
    def loaded_files(self) -> frozenset[str]:
        return frozenset(self._loaded)

    def load_code_file(self, path: str | Path) -> None:
        code_file = Path(path)
        if code_file.suffix not in self._options.source_extensions:
            logger.debug("Skipping non-source file %s", code_file)
            return

        if self._options.use_legacy_autoloader:
            self._execute(code_file)
            return

        canonical = str(code_file.expanduser().resolve())
        if canonical in self._loaded:
            logger.debug("Already loaded %s", canonical)
            return
        self._execute(Path(canonical))
        self._loaded.add(canonical)

    def _execute(self, code_file: Path) -> None:
        logger.info("Loading code file %s", code_file)
        init_globals = dict(self._init_globals()) if self._init_globals is not None else None
        runpy.run_path(str(code_file), init_globals=init_globals)
