"""Free-text prompt backed by questionary.

Implements :class:`~picklaunch.core.protocols.Prompt`.  The line is
returned exactly as typed; Ctrl+C and Ctrl+D abort the enclosing
command with :class:`~picklaunch.exceptions.InputAbortedError`.
"""

from __future__ import annotations

from typing import Any

from picklaunch.exceptions import EnvironmentError, InputAbortedError


def _import_questionary() -> Any:
    """Import questionary lazily for the text prompt."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


class QuestionaryPrompt:
    """Read one line from the terminal.

    Parameters
    ----------
    marker:
        Prompt marker displayed before the cursor.
    """

    def __init__(self, marker: str = ">") -> None:
        self._marker: str = marker

    def read_line(self) -> str:
        """Block until the user submits a line.

        Raises
        ------
        InputAbortedError
            On Ctrl+C (``Interrupted``) or Ctrl+D (``EOF``).
        """
        questionary = _import_questionary()
        try:
            answer = questionary.text("", qmark=self._marker).unsafe_ask()
        except KeyboardInterrupt as exc:
            raise InputAbortedError("Interrupted") from exc
        except EOFError as exc:
            raise InputAbortedError("EOF") from exc
        if answer is None:
            raise InputAbortedError("Interrupted")
        return str(answer)
