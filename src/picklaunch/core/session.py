"""Per-process resolution state.

The resolution engine keeps no module-level globals.  Everything that
must survive across recursive calls lives in a :class:`ResolutionSession`
passed in explicitly:

* the shared :class:`CancellationFlag`, the only state written from
  outside the engine (by the SIGINT handler);
* the ``--command`` preselection and whether it was already consumed;
* the number of menu transitions performed.
"""

from __future__ import annotations

import threading


class CancellationFlag:
    """Monotonic false → true flag, safe to set from a signal handler.

    Backed by :class:`threading.Event`; once set it can never be cleared.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def set(self) -> None:
        """Request that the whole session stop (idempotent)."""
        self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()

    def __bool__(self) -> bool:
        return self.is_set()


class ResolutionSession:
    """Mutable bookkeeping for one walk of the menu tree.

    Parameters
    ----------
    flag:
        Cancellation flag shared with the interrupt handler.
    preselection:
        Label to pick at the first menu without showing a picker.
    """

    def __init__(
        self,
        flag: CancellationFlag | None = None,
        preselection: str | None = None,
    ) -> None:
        self.flag: CancellationFlag = flag if flag is not None else CancellationFlag()
        self._preselection: str | None = preselection
        self._preselection_consumed: bool = False
        self.resolutions: int = 0
        """Menu transitions performed so far."""

    @property
    def preselection_pending(self) -> bool:
        """True while a preselection exists and has not been used yet."""
        return self._preselection is not None and not self._preselection_consumed

    def consume_preselection(self) -> str | None:
        """Return the preselection exactly once, then ``None`` forever."""
        if not self.preselection_pending:
            return None
        self._preselection_consumed = True
        return self._preselection
