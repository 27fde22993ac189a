"""Locate and read chartnorm.toml.

Resolution order: explicit path (``--config``), the CHARTNORM_CONFIG
env var, then a walk up from the starting directory to the filesystem root.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from chartnorm.config.models import ChartnormConfig

CONFIG_FILENAME = "chartnorm.toml"
CONFIG_ENV_VAR = "CHARTNORM_CONFIG"


class ConfigFileError(ValueError):
    """chartnorm.toml exists but is not valid TOML."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid TOML in {path}: {reason}")
        self.path = path


def _walk_up(start: Path) -> Path | None:
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def find_config(start: Path | None = None, *, explicit: str | Path | None = None) -> Path | None:
    """Return the config file to use, or None when there is none.

    An explicit path or CHARTNORM_CONFIG that points at a missing file
    yields None rather than falling back to discovery.
    """
    override = explicit or os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None
    return _walk_up((start or Path.cwd()).resolve())


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path*, wrapping decode failures in :class:`ConfigFileError`."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileError(path, str(exc)) from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> ChartnormConfig:
    """Load and validate the configuration.

    Returns the code defaults when no file is found.
    """
    if path is None:
        path = find_config(cwd)
    if path is None:
        return ChartnormConfig()
    return ChartnormConfig.model_validate(read_toml(path))
