"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.  The
exit status of the launched command is never reflected here.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — a command was launched, or the user backed out of a menu."""

GENERAL_ERROR: int = 1
"""A known PicklaunchError was caught. User-facing message was displayed."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception or internal inconsistency escaped the engine."""

INVALID_PRESELECTION: int = 3
"""``--command`` named a label that does not exist in the first menu."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

CANCELLED: int = KEYBOARD_INTERRUPT
"""The session's cancellation flag was observed set."""
