"""Typed configuration schema and loader for the validation engine."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, conint, field_validator

DEBUG_ENV = "PROSECHECK_DEBUG"
LOG_LEVEL_ENV = "PROSECHECK_LOG_LEVEL"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSEY = {"0", "false", "no", "off", ""}

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class CategorySettings(BaseModel):
    """A classification of checks, e.g. grammar or style."""

    id: str
    name: str
    colour: str

    model_config = ConfigDict(extra="forbid")


class MatchColourSettings(BaseModel):
    """Colours handed to renderers for highlights."""

    default: str
    hovered: str
    selected: str
    debug_dirty: str
    debug_inflight: str

    model_config = ConfigDict(extra="forbid")


class LoggingSettings(BaseModel):
    """Logging verbosity for the package logger."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    model_config = ConfigDict(extra="forbid")

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)  # type: ignore[valid-type]
    debug: bool
    categories: list[CategorySettings]
    match_colours: MatchColourSettings
    skip_node_types: list[str]
    logging: LoggingSettings

    model_config = ConfigDict(extra="forbid")

    @field_validator("categories")
    @classmethod
    def _unique_category_ids(cls, value: list[CategorySettings]) -> list[CategorySettings]:
        ids = [c.id for c in value]
        if len(ids) != len(set(ids)):
            raise ValueError("category ids must be unique")
        return value


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def _parse_bool(raw: str, name: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSEY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    environment variables.
    """

    with (
        importlib_resources.files("prosecheck.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    environ = env if env is not None else os.environ
    env_overrides: dict[str, Any] = {}
    if DEBUG_ENV in environ:
        env_overrides["debug"] = _parse_bool(environ[DEBUG_ENV], DEBUG_ENV)
    if LOG_LEVEL_ENV in environ:
        env_overrides["logging"] = {"level": environ[LOG_LEVEL_ENV]}
    if env_overrides:
        merged = deep_merge_dicts(merged, env_overrides)

    return ConfigModel.model_validate(merged)


__all__ = [
    "CategorySettings",
    "ConfigModel",
    "LoggingSettings",
    "MatchColourSettings",
    "deep_merge_dicts",
    "load_config",
]
