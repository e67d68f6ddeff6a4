from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from glue_runtime.config.models import GlueConfig


# ConfigError is raised for invalid configuration (fail fast).
class ConfigError(ValueError):
    pass


def load_yaml_config(path: Path) -> dict[str, object]:
    # Raw YAML mapping; validation happens in load_glue_config.
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    return raw


def load_glue_config(path: Path) -> GlueConfig:
    raw = load_yaml_config(path)
    unknown = set(raw.keys()) - {"glue"}
    if unknown:
        raise ConfigError(f"Unknown top-level keys: {sorted(unknown)}")
    section = raw.get("glue") or {}
    if not isinstance(section, dict):
        raise ConfigError("glue must be a mapping")
    try:
        return GlueConfig.model_validate(section)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
