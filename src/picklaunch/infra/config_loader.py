"""Load the YAML menu definition from disk.

This module is the **only** place in the codebase that imports PyYAML.
File-system and YAML errors are re-raised as
:class:`~picklaunch.exceptions.ConfigError`; the document itself is
validated by :func:`picklaunch.core.config_parser.parse_config`.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml

from picklaunch.core.config_parser import parse_config
from picklaunch.core.models import LauncherConfig
from picklaunch.exceptions import ConfigError

logger = logging.getLogger(__name__)

FALLBACK_SHELL: str = "sh"

_EXAMPLE_CONFIG = """\
options:
  hello:
    type: Command
    description: Say hello
    command: echo hello {0}
    widgets:
      - type: FreeText"""


def load_config(path: Path) -> LauncherConfig:
    """Read and parse the configuration file at *path*.

    Raises
    ------
    ConfigError
        If the file is missing, unreadable, not valid YAML, or does not
        describe a valid menu.
    """
    if not path.is_file():
        raise ConfigError(
            f"Couldn't read config file: {path}",
            hint=f"Create it with a menu such as:\n{_EXAMPLE_CONFIG}",
        )

    logger.debug("Loading configuration from %s", path)
    try:
        with path.open("r", encoding="utf-8") as fh:
            document = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigError(f"Couldn't read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    return parse_config(document)


def resolve_shell(
    config: LauncherConfig,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the shell: config ``shell``, then ``$SHELL``, then ``sh``."""
    if config.shell:
        return config.shell
    env = environ if environ is not None else os.environ
    return env.get("SHELL") or FALLBACK_SHELL
