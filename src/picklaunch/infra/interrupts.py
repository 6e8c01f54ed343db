"""SIGINT handling that feeds the session's cancellation flag.

A single Ctrl+C usually reaches the foreground picker or command as
well, which handles it on its own (a picker returns "nothing
selected").  Pressing Ctrl+C again while the same session is active
sets the :class:`~picklaunch.core.session.CancellationFlag`; the
resolution engine polls it and aborts the whole walk.
"""

from __future__ import annotations

import logging
import signal
from collections.abc import Callable
from contextlib import AbstractContextManager
from types import FrameType
from typing import Any

from picklaunch.core.session import CancellationFlag

logger = logging.getLogger(__name__)


class RepeatedInterruptHandler(AbstractContextManager["RepeatedInterruptHandler"]):
    """Installs a SIGINT handler that sets *flag* after repeated presses.

    Parameters
    ----------
    flag:
        Flag set once *threshold* interrupts have been received.
    on_first:
        Called for every interrupt below the threshold, e.g. to print
        "press Ctrl+C again to abort".
    threshold:
        Number of interrupts that confirm cancellation.
    """

    def __init__(
        self,
        flag: CancellationFlag,
        *,
        on_first: Callable[[], None] | None = None,
        threshold: int = 2,
    ) -> None:
        self._flag = flag
        self._on_first = on_first
        self._threshold = threshold
        self._count = 0
        self._prev_handler: Any = None
        self._installed = False

    @property
    def count(self) -> int:
        """Interrupts received since the handler was installed."""
        return self._count

    def __enter__(self) -> RepeatedInterruptHandler:
        try:
            self._prev_handler = signal.getsignal(signal.SIGINT)
            signal.signal(signal.SIGINT, self._handle_sigint)
        except ValueError:
            # Not in the main thread; run without the handler.
            logger.debug("SIGINT handler not installed outside the main thread")
            return self
        self._installed = True
        return self

    def __exit__(self, *_args: object) -> None:
        if self._installed:
            signal.signal(signal.SIGINT, self._prev_handler)
            self._installed = False

    def _handle_sigint(self, signum: int, frame: FrameType | None) -> None:
        self._count += 1
        if self._count >= self._threshold:
            self._flag.set()
            return
        if self._on_first is not None:
            self._on_first()
