"""Custom exception hierarchy for picklaunch.

All exceptions that cross layer boundaries must inherit from
:class:`PicklaunchError`.  Raw third-party and OS exceptions (from
``subprocess``, PyYAML, questionary) must NEVER propagate beyond the
infrastructure layer — they must be caught and re-raised as a typed
subclass defined here.

A picker returning ``None`` is *not* an error anywhere in this
hierarchy: backing out of a menu is ordinary control flow.

Hierarchy
---------
PicklaunchError
├── ConfigError
├── PickerOptionsError
├── InvalidPreselectionError
├── InputAbortedError
├── ShellError
│   ├── ShellSpawnError
│   └── ShellDecodeError
├── PickerError
│   └── PickerUnavailableError
├── ChildNotFoundError
├── SessionCancelledError
└── EnvironmentError
"""

from __future__ import annotations

from collections.abc import Sequence


class PicklaunchError(Exception):
    """Base exception for all picklaunch errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Configuration ---------------------------------------------------------

class ConfigError(PicklaunchError):
    """Raised when the menu definition cannot be read or is malformed."""


class PickerOptionsError(PicklaunchError):
    """Raised when the picker option string cannot be tokenized."""


# --- Resolution ------------------------------------------------------------

class InvalidPreselectionError(PicklaunchError):
    """Raised when ``--command`` names no label of the first menu.

    This is fatal: the CLI terminates with a dedicated exit code after
    listing the labels that would have been accepted.
    """

    def __init__(self, selection: str, valid_labels: Sequence[str]) -> None:
        self.selection: str = selection
        self.valid_labels: tuple[str, ...] = tuple(valid_labels)
        super().__init__(
            f"{selection!r} is an invalid selection and doesn't match any of "
            "the keys in your configuration file.\n"
            f"Available keys are: {', '.join(self.valid_labels)}",
        )


class InputAbortedError(PicklaunchError):
    """Raised when a free-text prompt is interrupted or hits end-of-input."""


class ChildNotFoundError(PicklaunchError):
    """Raised when a picked label does not map back to a menu entry.

    Candidates are built from the menu itself, so this signals an
    internal inconsistency rather than a user mistake.
    """


class SessionCancelledError(PicklaunchError):
    """Raised once the process-wide cancellation flag is observed set."""


# --- Shell execution -------------------------------------------------------

class ShellError(PicklaunchError):
    """Base class for subprocess failures."""


class ShellSpawnError(ShellError):
    """Raised when the shell process cannot be started."""


class ShellDecodeError(ShellError):
    """Raised when captured shell output is not valid UTF-8 text."""


# --- Pickers ---------------------------------------------------------------

class PickerError(PicklaunchError):
    """Raised when a picker back-end fails for reasons other than a cancel."""


class PickerUnavailableError(PickerError):
    """Raised when an external picker binary cannot be located on PATH."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(PicklaunchError):
    """Raised when a required runtime dependency is not available."""
