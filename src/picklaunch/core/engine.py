"""Action-tree resolution engine.

Walks the menu tree depth-first and turns it into a sequence of picker
calls, prompts, and at most one final shell execution.  All I/O is
delegated to the collaborators injected at construction time (see
:mod:`picklaunch.core.protocols`).

Outcomes
--------
* :attr:`Outcome.COMPLETED` — a command was launched.
* :attr:`Outcome.CANCELLED` — the user backed out of a picker at some
  level.  This is a successful no-op, not an error.
* Any :class:`~picklaunch.exceptions.PicklaunchError` — propagated to
  the caller unchanged.

The cancellation flag is checked on every menu transition, around every
picker call and prompt, and before every shell command, captured or
interactive.  Once it is seen
set, :class:`~picklaunch.exceptions.SessionCancelledError` unwinds the
whole walk and no further shell command runs.
"""

from __future__ import annotations

import logging

from picklaunch.core.models import (
    Command,
    FreeText,
    FromCommand,
    Node,
    Outcome,
    RuntimeContext,
    Select,
)
from picklaunch.core.protocols import Picker, Prompt, ShellExecutor
from picklaunch.core.session import ResolutionSession
from picklaunch.core.templating import (
    format_choice_label,
    parse_choice_label,
    split_output_lines,
    substitute,
)
from picklaunch.exceptions import (
    ChildNotFoundError,
    InvalidPreselectionError,
    SessionCancelledError,
)

logger = logging.getLogger(__name__)


class ActionResolver:
    """Resolve menu nodes to at most one shell execution.

    Parameters
    ----------
    picker:
        Any object satisfying the :class:`Picker` protocol.
    shell:
        Any object satisfying the :class:`ShellExecutor` protocol.
    prompt:
        Any object satisfying the :class:`Prompt` protocol.
    context:
        Shell name and cache directory for every subprocess.
    session:
        Cancellation flag and preselection state shared by the walk.
    """

    def __init__(
        self,
        picker: Picker,
        shell: ShellExecutor,
        prompt: Prompt,
        context: RuntimeContext,
        session: ResolutionSession | None = None,
    ) -> None:
        self._picker: Picker = picker
        self._shell: ShellExecutor = shell
        self._prompt: Prompt = prompt
        self._context: RuntimeContext = context
        self._session: ResolutionSession = (
            session if session is not None else ResolutionSession()
        )

    @property
    def session(self) -> ResolutionSession:
        return self._session

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, node: Node) -> Outcome:
        """Resolve *node* and everything below it.

        Raises
        ------
        SessionCancelledError
            When the cancellation flag is observed set.
        InvalidPreselectionError
            When the preselection matches no label of the first menu.
        ChildNotFoundError
            When a picked label does not map back to a menu entry.
        InputAbortedError, ShellError, PickerError
            Propagated from the collaborators.
        """
        if isinstance(node, Select):
            return self._resolve_select(node)
        if isinstance(node, Command):
            return self._resolve_command(node)
        raise TypeError(f"Unsupported node type: {type(node).__name__}")

    # ------------------------------------------------------------------
    # Select
    # ------------------------------------------------------------------

    def _resolve_select(self, node: Select) -> Outcome:
        selection = self._session.consume_preselection()
        if selection is not None:
            if selection not in node.children:
                raise InvalidPreselectionError(selection, list(node.children))
            logger.debug("Using preselection %r", selection)
            key = selection
        else:
            candidates = [
                format_choice_label(label, child)
                for label, child in node.children.items()
            ]
            picked = self._pick(candidates)
            if picked is None:
                logger.debug("Menu cancelled by user")
                return Outcome.CANCELLED
            key = parse_choice_label(picked)

        child = node.children.get(key)
        if child is None:
            raise ChildNotFoundError(
                f"Picked entry {key!r} does not match any menu label.",
                hint="Menu labels must not contain ':'.",
            )

        self._check_cancelled()
        self._session.resolutions += 1
        logger.debug("Entering %r (transition %d)", key, self._session.resolutions)
        return self.resolve(child)

    # ------------------------------------------------------------------
    # Command
    # ------------------------------------------------------------------

    def _resolve_command(self, node: Command) -> Outcome:
        arguments: list[str] = []

        for index, step in enumerate(node.steps):
            if isinstance(step, FreeText):
                self._check_cancelled()
                line = self._prompt.read_line()
                self._check_cancelled()
                arguments.append(line)
                continue

            if isinstance(step, FromCommand):
                value = self._run_from_command(step, arguments[:index])
                if value is None:
                    logger.debug("Step %d cancelled by user", index)
                    return Outcome.CANCELLED
                arguments.append(value)
                continue

            raise TypeError(f"Unsupported widget type: {type(step).__name__}")

        command_line = substitute(node.template, arguments)
        self._check_cancelled()
        logger.debug("Launching: %s", command_line)
        status = self._shell.run_interactive(command_line, self._context)
        if status != 0:
            logger.info("Command exited with status %d", status)
        return Outcome.COMPLETED

    def _run_from_command(
        self,
        step: FromCommand,
        earlier: list[str],
    ) -> str | None:
        """Run a widget's candidate command and let the user pick a line."""
        self._check_cancelled()
        command_line = substitute(step.template, earlier)
        logger.debug("Collecting candidates: %s", command_line)
        output = self._shell.run_captured(command_line, self._context)
        return self._pick(split_output_lines(output), step.preview)

    # ------------------------------------------------------------------
    # Picker and cancellation
    # ------------------------------------------------------------------

    def _pick(self, candidates: list[str], preview: str | None = None) -> str | None:
        self._check_cancelled()
        picked = self._picker.select(candidates, preview)
        self._check_cancelled()
        return picked

    def _check_cancelled(self) -> None:
        if self._session.flag.is_set():
            raise SessionCancelledError("Cancelled by user.")
