from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from glue_runtime.config.options import LoaderOptions

# Config models map the `glue:` YAML section to typed structures.


class LoaderConfig(BaseModel):
    # Code-file loading strategy and recognised source extensions.
    model_config = ConfigDict(extra="forbid")
    use_legacy_autoloader: bool = False
    source_extensions: list[str] = Field(default_factory=lambda: [".py"])

    @field_validator("source_extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        normalized: list[str] = []
        for ext in value:
            ext = ext.strip()
            if not ext:
                raise ValueError("source_extensions entries must be non-empty")
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        return normalized


class GlueConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    loader: LoaderConfig = Field(default_factory=LoaderConfig)

    def loader_options(self) -> LoaderOptions:
        return LoaderOptions(
            use_legacy_autoloader=self.loader.use_legacy_autoloader,
            source_extensions=tuple(self.loader.source_extensions),
        )
