# src/taskgraph/config.py

"""
Settings layer.

Sources, lowest to highest precedence:
- built-in defaults,
- a YAML file (--config or TASKGRAPH_CONFIG),
- TASKGRAPH_* environment variables,
- command-line flags (applied by the caller via `dataclasses.replace`).

Nothing here is read at import time.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .engine.render import GRAPH_ORDERS

ENV_PREFIX = "TASKGRAPH"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when settings cannot be loaded or are invalid."""


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# ---------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Logging ----
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    # ---- Presentation ----
    graph_order: str = "insertion"
    color: bool = True

    @property
    def log_level_no(self) -> int:
        return logging.getLevelName(self.log_level)

    def validate(self) -> None:
        if self.log_level not in _LOG_LEVELS:
            allowed = ", ".join(_LOG_LEVELS)
            raise ConfigError(f"Invalid log_level '{self.log_level}' (allowed: {allowed})")

        if self.graph_order not in GRAPH_ORDERS:
            allowed = ", ".join(GRAPH_ORDERS)
            raise ConfigError(f"Invalid graph_order '{self.graph_order}' (allowed: {allowed})")


# ---------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------

def load_settings(
    config_path: str | Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """
    Build Settings from defaults, the YAML file and the environment.

    `config_path` wins over TASKGRAPH_CONFIG. A missing explicit file is
    an error; no file at all is fine.
    """
    env = os.environ if env is None else env

    values: dict[str, Any] = {}

    path = config_path or env.get(_k("CONFIG")) or None
    if path:
        values.update(_read_yaml(Path(path).expanduser()))

    values.update(_read_env(env))

    settings = Settings(**values)
    settings.validate()
    return settings


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"{path}: cannot read file: {e}") from e

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: YAML root must be a mapping/dictionary")

    bad_keys = [k for k in data if not isinstance(k, str)]
    if bad_keys:
        raise ConfigError(f"{path}: keys must be strings, got: {', '.join(map(repr, bad_keys))}")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"{path}: unknown key(s): {', '.join(map(str, unknown))}")

    out: dict[str, Any] = {}

    if "log_level" in data:
        out["log_level"] = _require_str(path, data, "log_level").strip().upper()

    if "log_file" in data:
        raw = data["log_file"]
        if raw is None:
            out["log_file"] = None
        elif isinstance(raw, str) and raw.strip():
            out["log_file"] = Path(raw).expanduser()
        else:
            raise ConfigError(f"{path}: key 'log_file' must be a non-empty string or null")

    if "graph_order" in data:
        out["graph_order"] = _require_str(path, data, "graph_order").strip().lower()

    if "color" in data:
        raw = data["color"]
        if not isinstance(raw, bool):
            raise ConfigError(f"{path}: key 'color' must be a boolean")
        out["color"] = raw

    return out


def _require_str(path: Path, data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise ConfigError(f"{path}: key '{key}' must be a string")
    return value


def _read_env(env: Mapping[str, str]) -> dict[str, Any]:
    out: dict[str, Any] = {}

    raw = env.get(_k("LOG_LEVEL"))
    if raw is not None and raw.strip():
        out["log_level"] = raw.strip().upper()

    raw = env.get(_k("LOG_FILE"))
    if raw is not None and raw.strip():
        out["log_file"] = Path(raw.strip()).expanduser()

    raw = env.get(_k("GRAPH_ORDER"))
    if raw is not None and raw.strip():
        out["graph_order"] = raw.strip().lower()

    raw = env.get(_k("COLOR"))
    if raw is not None and raw.strip():
        out["color"] = raw.strip().lower() in {"1", "true", "yes", "y", "on"}

    return out
