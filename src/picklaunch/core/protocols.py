"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
The resolution engine depends ONLY on these protocols — never on a
concrete picker back-end, shell or terminal — preserving the
dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from picklaunch.core.models import RuntimeContext


class Picker(Protocol):
    """Contract for interactive fuzzy-selection back-ends.

    Any object that implements :meth:`select` with the correct
    signature satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def select(
        self,
        candidates: Sequence[str],
        preview: str | None = None,
    ) -> str | None:
        """Let the user pick one of *candidates*.

        Parameters
        ----------
        candidates:
            Ordered candidate lines.  An empty sequence is legal and
            must yield ``None``.
        preview:
            Optional shell command rendered next to the list.  ``{}``
            stands for the currently highlighted line; substituting it
            is the back-end's job.

        Returns
        -------
        str | None
            The chosen line verbatim, or ``None`` when the user aborted
            or nothing was selected.  The two cases are not
            distinguished.
        """
        ...  # pragma: no cover


class ShellExecutor(Protocol):
    """Contract for running command lines in a subshell.

    Implementations must map OS-level failures to
    :class:`~picklaunch.exceptions.ShellError` subclasses.
    """

    def run_captured(self, command: str, context: RuntimeContext) -> str:
        """Run *command* and return its standard output as text.

        Raises
        ------
        ShellSpawnError
            When the shell cannot be started.
        ShellDecodeError
            When the output is not valid text.
        """
        ...  # pragma: no cover

    def run_interactive(self, command: str, context: RuntimeContext) -> int:
        """Run *command* attached to the terminal and return its exit status.

        Raises
        ------
        ShellSpawnError
            When the shell cannot be started.
        """
        ...  # pragma: no cover


class Prompt(Protocol):
    """Contract for reading one free-text line from the user."""

    def read_line(self) -> str:
        """Block until the user submits a line and return it.

        Raises
        ------
        InputAbortedError
            When input is interrupted or the stream is exhausted.
        """
        ...  # pragma: no cover
