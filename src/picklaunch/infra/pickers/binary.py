"""Pickers driving an external fuzzy-finder binary (fzf or skim).

Candidates are written to the binary's standard input, one per line;
the selected line is read back from its standard output.  The binary
draws on the terminal itself.  Every :class:`PickerOptions` field is
passed on its command line, defaults included, so height, margin,
layout and colours are the same whichever binary is used.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from picklaunch.core.picker_options import DEFAULT_COLOR, PickerOptions
from picklaunch.exceptions import PickerError
from picklaunch.infra.binary_detector import require_binary

logger = logging.getLogger(__name__)


class BinaryPicker:
    """Base :class:`~picklaunch.core.protocols.Picker` for fzf-compatible binaries.

    Subclasses set :attr:`binary` and, when the binary does not
    understand skim's colour names, clear :attr:`default_color_supported`.
    """

    binary: str = ""
    """Executable name looked up on PATH."""

    default_color_supported: bool = True
    """Whether the built-in colour theme is valid for this binary."""

    def __init__(self, options: PickerOptions | None = None) -> None:
        self._options: PickerOptions = options if options is not None else PickerOptions()

    # ------------------------------------------------------------------
    # Argument construction (pure)
    # ------------------------------------------------------------------

    def option_args(self) -> list[str]:
        """Translate the typed options into ``--opt=value`` arguments."""
        opts = self._options
        args = [
            f"--height={opts.height}",
            f"--margin={opts.margin}",
            f"--layout={opts.layout}",
        ]
        if self.default_color_supported or opts.color != DEFAULT_COLOR:
            args.append(f"--color={opts.color}")
        args += [f"--bind={binding}" for binding in opts.bind]
        for flag, enabled in (
            ("--reverse", opts.reverse),
            ("--tac", opts.tac),
            ("--no-sort", opts.no_sort),
            ("--inline-info", opts.inline_info),
        ):
            if enabled:
                args.append(flag)
        return args

    def build_args(self, preview: str | None) -> list[str]:
        """Return the options passed to the binary (without argv[0])."""
        args = self.option_args()
        if preview is not None:
            args += ["--preview", preview, "--preview-window", ":nohidden"]
        else:
            args += ["--preview-window", ":hidden"]
        return args

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def select(
        self,
        candidates: Sequence[str],
        preview: str | None = None,
    ) -> str | None:
        """Pipe *candidates* through the binary and return the chosen line.

        A non-zero exit status (abort, no match) yields ``None``.

        Raises
        ------
        PickerUnavailableError
            When the binary is not on PATH.
        PickerError
            When the binary cannot be started or prints invalid UTF-8.
        """
        if not candidates:
            return None

        path = require_binary(self.binary)
        argv = [str(path), *self.build_args(preview)]
        feed = "".join(f"{line}\n" for line in candidates).encode("utf-8")
        logger.debug("Running picker: %s", argv)

        try:
            completed = subprocess.run(
                argv,
                input=feed,
                stdout=subprocess.PIPE,
                check=False,
            )
        except OSError as exc:
            raise PickerError(f"Cannot start {self.binary}: {exc}") from exc

        if completed.returncode != 0:
            logger.debug("%s exited with status %d", self.binary, completed.returncode)
            return None

        try:
            output = completed.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PickerError(
                f"{self.binary} returned invalid UTF-8: {exc}",
            ) from exc

        return output.removesuffix("\n")


class FzfPicker(BinaryPicker):
    """Picker backed by the ``fzf`` binary.

    fzf rejects skim's colour names, so the built-in theme is only
    passed when the user overrides it.
    """

    binary = "fzf"
    default_color_supported = False


class SkimPicker(BinaryPicker):
    """Picker backed by the ``sk`` (skim) binary."""

    binary = "sk"
