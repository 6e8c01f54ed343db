"""Infrastructure: picker binary detection and platform guidance.

This module is responsible for locating the external picker binaries
(``fzf`` and ``sk``) on the system PATH and providing platform-specific
installation guidance when one is missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from picklaunch.exceptions import PickerUnavailableError


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BinaryStatus:
    """Result of a binary detection probe.

    Attributes
    ----------
    name : str
        Executable name that was probed (e.g. ``"fzf"``).
    found : bool
        Whether the binary was located on PATH.
    path : Path | None
        Absolute path to the binary, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the binary on the
        current platform.  Empty when it is already present.
    """

    name: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

_INSTALL_COMMANDS: dict[str, dict[str, tuple[str, ...]]] = {
    "fzf": {
        "windows": ("winget install fzf", "choco install fzf"),
        "linux": (
            "sudo apt install fzf",
            "sudo dnf install fzf",
            "sudo pacman -S fzf",
        ),
        "darwin": ("brew install fzf",),
    },
    "sk": {
        "windows": ("cargo install skim",),
        "linux": ("sudo pacman -S skim", "cargo install skim"),
        "darwin": ("brew install sk",),
    },
}


def _platform_install_commands(name: str) -> tuple[str, ...]:
    """Return install commands for *name* appropriate for the current OS."""
    system = platform.system().lower()
    by_platform = _INSTALL_COMMANDS.get(name, {})
    if system in by_platform:
        return by_platform[system]
    return (f"Please install {name} with your system package manager.",)


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_binary(name: str) -> BinaryStatus:
    """Probe the system for the executable *name*.

    Returns a :class:`BinaryStatus` regardless of whether it is
    present — the caller decides whether to abort or merely warn.
    """
    result = shutil.which(name)

    if result is not None:
        return BinaryStatus(
            name=name,
            found=True,
            path=Path(result).resolve(),
            install_commands=(),
        )

    return BinaryStatus(
        name=name,
        found=False,
        path=None,
        install_commands=_platform_install_commands(name),
    )


def require_binary(name: str) -> Path:
    """Locate *name* or raise :class:`PickerUnavailableError`."""
    status = detect_binary(name)
    if not status.found or status.path is None:
        hint_lines: list[str] = []
        if status.install_commands:
            hint_lines.append(f"Install {name} using one of:")
            hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        hint_lines.append("Or run without --fzf/--skim-binary to use the built-in picker.")
        raise PickerUnavailableError(
            f"{name} is not installed or not on PATH.",
            hint="\n".join(hint_lines),
        )
    return status.path
