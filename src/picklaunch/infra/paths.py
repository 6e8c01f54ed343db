"""XDG base-directory resolution for the config file and cache directory.

``$XDG_CONFIG_HOME`` / ``$XDG_CACHE_HOME`` are honoured only when they
hold an absolute path; otherwise ``~/.config`` / ``~/.cache`` are used.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from picklaunch.exceptions import ConfigError

APP_DIR_NAME: str = "picklaunch"
CONFIG_FILE_NAME: str = "config.yml"


def _xdg_base(
    variable: str,
    fallback: str,
    environ: Mapping[str, str] | None = None,
) -> Path:
    env = environ if environ is not None else os.environ
    value = env.get(variable)
    if value:
        candidate = Path(value)
        if candidate.is_absolute():
            return candidate
    return Path.home() / fallback


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Return ``<config home>/picklaunch/config.yml``."""
    return _xdg_base("XDG_CONFIG_HOME", ".config", environ) / APP_DIR_NAME / CONFIG_FILE_NAME


def default_cache_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Return ``<cache home>/picklaunch``."""
    return _xdg_base("XDG_CACHE_HOME", ".cache", environ) / APP_DIR_NAME


def ensure_dir(path: Path) -> Path:
    """Create *path* (and parents) if needed and return it.

    Raises
    ------
    ConfigError
        If the directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigError(f"Unable to create {path}: {exc}") from exc
    return path
