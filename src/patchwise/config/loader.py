"""Load and merge configuration from .patchwise.toml, CLI flags, and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from patchwise.config.schema import (
    LOG_LEVELS,
    OUTPUT_FORMATS,
    ApplyConfig,
    LoggingConfig,
    OutputConfig,
    PatchwiseConfig,
)

CONFIG_FILENAME = ".patchwise.toml"

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: PatchwiseConfig) -> None:
    """Apply PATCHWISE_* environment variable overrides."""
    if val := os.environ.get("PATCHWISE_STRICT_CONTEXT"):
        if val.lower() in _TRUTHY:
            cfg.apply.strict_context = True
        elif val.lower() in _FALSY:
            cfg.apply.strict_context = False
    if val := os.environ.get("PATCHWISE_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("PATCHWISE_LOG_LEVEL"):
        if val.upper() in LOG_LEVELS:
            cfg.logging.level = val.upper()


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: PatchwiseConfig) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"Invalid output format: {cfg.output.format!r}")
    if str(cfg.logging.level).upper() not in LOG_LEVELS:
        raise ConfigError(f"Invalid log level: {cfg.logging.level!r}")
    cfg.logging.level = str(cfg.logging.level).upper()


def load_config(
    root: Path,
    config_override: Optional[str] = None,
) -> PatchwiseConfig:
    """Load, validate, and return a PatchwiseConfig."""
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = PatchwiseConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = PatchwiseConfig(
            version=raw.get("version", "1.0"),
            apply=_build_section(raw, ApplyConfig, "apply"),
            output=_build_section(raw, OutputConfig, "output"),
            logging=_build_section(raw, LoggingConfig, "logging"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
