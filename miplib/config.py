"""Settings persisted as YAML in the miplib home directory."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, model_validator

from miplib.backends.base import BackendKind

_CONFIG_DIRNAME = ".miplib"
_CONFIG_FILENAME = "config.yaml"


class IndicatorPolicy(str, Enum):
    REFORMULATE = "reformulate"
    REFORMULATE_IF_UNSUPPORTED = "reformulate_if_unsupported"
    NATIVE = "native"


class Settings(BaseModel):
    backend: BackendKind = BackendKind.ANY
    indicator_policy: IndicatorPolicy = IndicatorPolicy.REFORMULATE_IF_UNSUPPORTED
    scale_constraints: bool = False
    scale_skip_lb: float = 1e-4
    scale_skip_ub: float = 1e4
    amplitude_warning: float = 1e8
    ignore_inf_var_bounds: bool = False

    @model_validator(mode="after")
    def _validate_scaling(self) -> "Settings":
        if self.scale_skip_lb <= 0:
            raise ValueError("scale_skip_lb must be positive")
        if self.scale_skip_lb > self.scale_skip_ub:
            raise ValueError("scale_skip_lb must not exceed scale_skip_ub")
        if self.amplitude_warning <= 1:
            raise ValueError("amplitude_warning must be greater than 1")
        return self


def miplib_home() -> Path:
    override = os.environ.get("MIPLIB_HOME")
    if override:
        return Path(override).expanduser().resolve()
    return (Path.home() / _CONFIG_DIRNAME).resolve()


def config_file() -> Path:
    return miplib_home() / _CONFIG_FILENAME


def _read_config() -> dict[str, Any]:
    path = config_file()
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            parsed = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError):
        return {}
    return parsed if isinstance(parsed, dict) else {}


def load_settings() -> Settings:
    """Read settings from ``$MIPLIB_HOME/config.yaml``, falling back to defaults."""
    return Settings.model_validate(_read_config())


def save_settings(settings: Settings) -> Path:
    path = config_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(settings.model_dump(mode="json"), handle, sort_keys=False)
    return path
