"""Subprocess-backed implementation of :class:`~picklaunch.core.protocols.ShellExecutor`.

This module is the **only** place in the codebase that runs user
command lines.  ``OSError`` and decoding failures are caught here and
re-raised as :class:`~picklaunch.exceptions.ShellError` subclasses.

Rules
-----
* Every child process receives ``PICKLAUNCH_CACHE_DIR``.
* Strict-mode flags are looked up by shell name in
  :data:`STRICT_MODE_FLAGS`; unknown shells get none.
* The exit status of the final interactive command is returned, never
  raised.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping
from pathlib import PurePath

from picklaunch.core.models import RuntimeContext
from picklaunch.exceptions import ShellDecodeError, ShellSpawnError

logger = logging.getLogger(__name__)

CACHE_DIR_ENV: str = "PICKLAUNCH_CACHE_DIR"
"""Environment variable carrying the cache directory to child processes."""

STRICT_MODE_FLAGS: dict[str, tuple[str, ...]] = {
    "zsh": ("--shwordsplit", "--no-unset", "--errexit"),
    "bash": ("-e", "-u"),
}
"""Extra arguments inserted before ``-c`` for each shell family."""


class SubprocessShellExecutor:
    """Concrete :class:`ShellExecutor` backed by :mod:`subprocess`.

    This class satisfies the :class:`~picklaunch.core.protocols.ShellExecutor`
    protocol structurally — no explicit inheritance required.

    Parameters
    ----------
    environ:
        Base environment for child processes.  Defaults to
        :data:`os.environ` at call time.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ: Mapping[str, str] | None = environ

    # ------------------------------------------------------------------
    # Argument / environment construction (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def build_argv(command: str, shell: str) -> list[str]:
        """Return the argv running *command* under *shell*.

        The strict-mode lookup uses the shell's basename, so both
        ``bash`` and ``/usr/bin/bash`` match.
        """
        family = PurePath(shell).name
        return [shell, *STRICT_MODE_FLAGS.get(family, ()), "-c", command]

    def _build_env(self, context: RuntimeContext) -> dict[str, str]:
        base = self._environ if self._environ is not None else os.environ
        env = dict(base)
        env[CACHE_DIR_ENV] = str(context.cache_dir)
        return env

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def run_captured(self, command: str, context: RuntimeContext) -> str:
        """Run *command* and return its decoded standard output.

        Standard error stays attached to the terminal.  A non-zero exit
        status is logged; whatever was printed is still returned.

        Raises
        ------
        ShellSpawnError
            When the shell cannot be started.
        ShellDecodeError
            When the output is not valid UTF-8.
        """
        argv = self.build_argv(command, context.shell)
        logger.debug("Capturing: %s", argv)
        try:
            completed = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                env=self._build_env(context),
                check=False,
            )
        except OSError as exc:
            raise ShellSpawnError(
                f"Cannot start shell {context.shell!r}: {exc}",
                hint="Set 'shell' in the configuration file or the SHELL variable.",
            ) from exc

        if completed.returncode != 0:
            logger.debug(
                "Candidate command exited with status %d: %s",
                completed.returncode,
                command,
            )

        try:
            return completed.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ShellDecodeError(
                f"Output of {command!r} is not valid UTF-8: {exc}",
            ) from exc

    def run_interactive(self, command: str, context: RuntimeContext) -> int:
        """Run *command* attached to the terminal and return its exit status.

        Raises
        ------
        ShellSpawnError
            When the shell cannot be started.
        """
        argv = self.build_argv(command, context.shell)
        logger.debug("Running: %s", argv)
        try:
            completed = subprocess.run(
                argv,
                env=self._build_env(context),
                check=False,
            )
        except OSError as exc:
            raise ShellSpawnError(
                f"Cannot start shell {context.shell!r}: {exc}",
                hint="Set 'shell' in the configuration file or the SHELL variable.",
            ) from exc
        return completed.returncode
