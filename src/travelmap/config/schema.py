"""Typed configuration schema and loader for the travelmap package."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, confloat, conint, model_validator

from travelmap.utils.errors import ConfigError

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class ClusteringSettings(BaseModel):
    """Options controlling the proximity clusterer."""

    radius: confloat(gt=0.0, allow_inf_nan=False)  # type: ignore[valid-type]
    metric: Literal["euclidean", "haversine"]
    index: Literal["linear", "grid"]
    require_finite: bool = True
    radius_env: str | None = None

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _grid_needs_euclidean(self) -> "ClusteringSettings":
        if self.index == "grid" and self.metric != "euclidean":
            raise ValueError("the grid index only supports the euclidean metric")
        return self


class FilterSettings(BaseModel):
    """Default traveler filters; empty lists impose no constraint."""

    statuses: list[Literal["available", "busy", "offline"]] = []
    languages: list[str] = []
    nationalities: list[str] = []
    interests: list[str] = []
    stay_duration: tuple[float, float] | None = None

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _ordered_stay_duration(self) -> "FilterSettings":
        if self.stay_duration is not None:
            low, high = self.stay_duration
            if not 0 <= low <= high:
                raise ValueError("stay_duration must be [min, max] with 0 <= min <= max")
        return self


class OutputSettings(BaseModel):
    """Formatting of written summaries; ``indent: 0`` writes compact JSON."""

    indent: conint(ge=0) = 2  # type: ignore[valid-type]

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)  # type: ignore[valid-type]
    clustering: ClusteringSettings
    filters: FilterSettings
    output: OutputSettings

    model_config = ConfigDict(extra="forbid")


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


def _read_yaml(path: str | os.PathLike[str]) -> dict[str, Any]:
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping")
    return data


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    environment variable named by ``clustering.radius_env``.

    Raises
    ------
    ConfigError
        If a source cannot be parsed or the merged result fails validation.
    FileNotFoundError
        If ``path`` does not exist.
    """

    with (
        importlib_resources.files("travelmap.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        merged = deep_merge_dicts(defaults, _read_yaml(path))
    else:
        merged = defaults

    environ = env if env is not None else os.environ
    clustering = merged.get("clustering")
    radius_env = clustering.get("radius_env") if isinstance(clustering, dict) else None
    if isinstance(radius_env, str) and environ.get(radius_env, "").strip():
        raw = environ[radius_env].strip()
        try:
            radius = float(raw)
        except ValueError:
            raise ConfigError(f"{radius_env}={raw!r} is not a number") from None
        merged = deep_merge_dicts(merged, {"clustering": {"radius": radius}})

    try:
        return ConfigModel.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


__all__ = [
    "ConfigModel",
    "ClusteringSettings",
    "FilterSettings",
    "OutputSettings",
    "deep_merge_dicts",
    "load_config",
]
