"""Tests for the action-tree resolution engine (core/engine.py).

Pickers, prompts and shells are replaced by in-memory fakes that record
every call, so each test can assert exactly what the user would have
seen and what would have been executed.

Coverage:
* Select candidate formatting, ordering and label recovery.
* Preselection: used once, invalid values are fatal.
* Command argument collection and placeholder substitution.
* Cancellation at a Select, at a widget, and via the shared flag.
* Error propagation from collaborators.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from picklaunch.core.engine import ActionResolver
from picklaunch.core.models import (
    Command,
    FreeText,
    FromCommand,
    Outcome,
    RuntimeContext,
    Select,
)
from picklaunch.core.session import CancellationFlag, ResolutionSession
from picklaunch.exceptions import (
    ChildNotFoundError,
    InputAbortedError,
    InvalidPreselectionError,
    SessionCancelledError,
    ShellSpawnError,
)


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakePicker:
    """Returns scripted answers and records every call."""

    def __init__(
        self,
        answers: Sequence[str | None] | Callable[[Sequence[str]], str | None] = (),
    ) -> None:
        self._answers = answers if callable(answers) else list(answers)
        self.calls: list[tuple[list[str], str | None]] = []

    def select(self, candidates: Sequence[str], preview: str | None = None) -> str | None:
        self.calls.append((list(candidates), preview))
        if callable(self._answers):
            return self._answers(candidates)
        return self._answers.pop(0)


class FakeShell:
    """Maps captured commands to canned output; records interactive runs."""

    def __init__(self, outputs: dict[str, str] | None = None, status: int = 0) -> None:
        self._outputs = outputs or {}
        self._status = status
        self.captured: list[str] = []
        self.executed: list[str] = []

    def run_captured(self, command: str, context: RuntimeContext) -> str:
        self.captured.append(command)
        return self._outputs.get(command, "")

    def run_interactive(self, command: str, context: RuntimeContext) -> int:
        self.executed.append(command)
        return self._status


class FakePrompt:
    def __init__(self, lines: Sequence[str] = ()) -> None:
        self._lines = list(lines)
        self.calls = 0

    def read_line(self) -> str:
        self.calls += 1
        if not self._lines:
            raise InputAbortedError("EOF")
        return self._lines.pop(0)


def _resolver(
    runtime_context: RuntimeContext,
    picker: FakePicker | None = None,
    shell: FakeShell | None = None,
    prompt: FakePrompt | None = None,
    session: ResolutionSession | None = None,
) -> ActionResolver:
    return ActionResolver(
        picker or FakePicker(),
        shell or FakeShell(),
        prompt or FakePrompt(),
        runtime_context,
        session,
    )


# ---------------------------------------------------------------------------
# Select
# ---------------------------------------------------------------------------

class TestSelect:
    def test_candidates_keep_order_and_descriptions(
        self, runtime_context: RuntimeContext,
    ) -> None:
        menu = Select(children={
            "A": Command(template="a", description="desc1"),
            "B": Command(template="b"),
        })
        picker = FakePicker([None])

        _resolver(runtime_context, picker=picker).resolve(menu)

        assert picker.calls == [(["A: desc1", "B"], None)]

    def test_empty_description_is_not_appended(
        self, runtime_context: RuntimeContext,
    ) -> None:
        menu = Select(children={"A": Command(template="a", description="")})
        picker = FakePicker([None])

        _resolver(runtime_context, picker=picker).resolve(menu)

        assert picker.calls[0][0] == ["A"]

    def test_nested_select_description_is_shown(
        self, runtime_context: RuntimeContext,
    ) -> None:
        menu = Select(children={
            "tools": Select(children={"x": Command(template="x")}, description="Tooling"),
        })
        picker = FakePicker([None])

        _resolver(runtime_context, picker=picker).resolve(menu)

        assert picker.calls[0][0] == ["tools: Tooling"]

    def test_description_with_colons_recovers_key(
        self, runtime_context: RuntimeContext,
    ) -> None:
        menu = Select(children={"A": Command(template="run-a", description="a:b")})
        shell = FakeShell()

        outcome = _resolver(
            runtime_context, picker=FakePicker(["A: a:b"]), shell=shell,
        ).resolve(menu)

        assert outcome is Outcome.COMPLETED
        assert shell.executed == ["run-a"]

    def test_cancel_returns_cancelled_without_recursion(
        self, runtime_context: RuntimeContext,
    ) -> None:
        menu = Select(children={"A": Command(template="a")})
        shell = FakeShell()
        resolver = _resolver(runtime_context, picker=FakePicker([None]), shell=shell)

        outcome = resolver.resolve(menu)

        assert outcome is Outcome.CANCELLED
        assert shell.executed == []
        assert resolver.session.resolutions == 0

    def test_cancel_in_submenu_is_not_an_error(
        self, runtime_context: RuntimeContext,
    ) -> None:
        menu = Select(children={
            "tools": Select(children={"lint": Command(template="lint")}),
        })
        picker = FakePicker(["tools", None])
        shell = FakeShell()

        outcome = _resolver(runtime_context, picker=picker, shell=shell).resolve(menu)

        assert outcome is Outcome.CANCELLED
        assert len(picker.calls) == 2
        assert shell.executed == []

    def test_nested_selection_reaches_command(
        self, runtime_context: RuntimeContext,
    ) -> None:
        menu = Select(children={
            "tools": Select(children={"lint": Command(template="make lint")}),
            "other": Command(template="other"),
        })
        shell = FakeShell()
        resolver = _resolver(
            runtime_context, picker=FakePicker(["tools", "lint"]), shell=shell,
        )

        assert resolver.resolve(menu) is Outcome.COMPLETED
        assert shell.executed == ["make lint"]
        assert resolver.session.resolutions == 2

    def test_unknown_pick_raises_child_not_found(
        self, runtime_context: RuntimeContext,
    ) -> None:
        menu = Select(children={"A": Command(template="a")})

        with pytest.raises(ChildNotFoundError):
            _resolver(runtime_context, picker=FakePicker(["Z"])).resolve(menu)

    def test_label_containing_colon_is_ambiguous(
        self, runtime_context: RuntimeContext,
    ) -> None:
        menu = Select(children={"k8s:prod": Command(template="a")})

        with pytest.raises(ChildNotFoundError):
            _resolver(runtime_context, picker=FakePicker(["k8s:prod"])).resolve(menu)


# ---------------------------------------------------------------------------
# Preselection
# ---------------------------------------------------------------------------

class TestPreselection:
    def test_valid_preselection_skips_first_picker(
        self, runtime_context: RuntimeContext,
    ) -> None:
        menu = Select(children={
            "build": Command(template="make"),
            "test": Command(template="pytest"),
        })
        picker = FakePicker()
        shell = FakeShell()

        outcome = _resolver(
            runtime_context,
            picker=picker,
            shell=shell,
            session=ResolutionSession(preselection="test"),
        ).resolve(menu)

        assert outcome is Outcome.COMPLETED
        assert picker.calls == []
        assert shell.executed == ["pytest"]

    def test_preselection_applies_only_once(
        self, runtime_context: RuntimeContext,
    ) -> None:
        menu = Select(children={
            "tools": Select(children={
                "tools": Command(template="inner"),
                "lint": Command(template="lint"),
            }),
        })
        picker = FakePicker(["lint"])
        shell = FakeShell()

        _resolver(
            runtime_context,
            picker=picker,
            shell=shell,
            session=ResolutionSession(preselection="tools"),
        ).resolve(menu)

        assert picker.calls == [(["tools", "lint"], None)]
        assert shell.executed == ["lint"]

    def test_invalid_preselection_lists_labels(
        self, runtime_context: RuntimeContext,
    ) -> None:
        menu = Select(children={
            "build": Command(template="make"),
            "test": Command(template="pytest"),
        })
        picker = FakePicker()

        with pytest.raises(InvalidPreselectionError) as exc_info:
            _resolver(
                runtime_context,
                picker=picker,
                session=ResolutionSession(preselection="deploy"),
            ).resolve(menu)

        assert "build, test" in str(exc_info.value)
        assert exc_info.value.valid_labels == ("build", "test")
        assert picker.calls == []

    def test_preselection_matches_key_not_description(
        self, runtime_context: RuntimeContext,
    ) -> None:
        menu = Select(children={"build": Command(template="make", description="Build")})

        with pytest.raises(InvalidPreselectionError):
            _resolver(
                runtime_context,
                session=ResolutionSession(preselection="build: Build"),
            ).resolve(menu)


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------

class TestCommand:
    def test_no_widgets_runs_template_verbatim(
        self, runtime_context: RuntimeContext,
    ) -> None:
        shell = FakeShell()

        outcome = _resolver(runtime_context, shell=shell).resolve(
            Command(template="echo {0}"),
        )

        assert outcome is Outcome.COMPLETED
        assert shell.executed == ["echo {0}"]

    def test_collected_arguments_are_substituted(
        self, runtime_context: RuntimeContext,
    ) -> None:
        command = Command(
            template="run {0} {1} {2}",
            steps=(FromCommand(template="echo {0}"), FreeText()),
        )
        shell = FakeShell({"echo {0}": "foo\n"})

        _resolver(
            runtime_context,
            picker=FakePicker(["foo"]),
            shell=shell,
            prompt=FakePrompt(["bar"]),
        ).resolve(command)

        assert shell.executed == ["run foo bar {2}"]

    def test_step_zero_template_is_not_substituted(
        self, runtime_context: RuntimeContext,
    ) -> None:
        shell = FakeShell()
        command = Command(template="x", steps=(FromCommand(template="ls {0}"),))

        _resolver(runtime_context, picker=FakePicker([None]), shell=shell).resolve(command)

        assert shell.captured == ["ls {0}"]

    def test_widget_sees_only_earlier_arguments(
        self, runtime_context: RuntimeContext,
    ) -> None:
        command = Command(
            template="{0} {1} {2}",
            steps=(
                FreeText(),
                FromCommand(template="list {0} {1}"),
                FromCommand(template="show {0} {1} {2}"),
            ),
        )
        shell = FakeShell({
            "list ns {1}": "pod-a\npod-b\n",
            "show ns pod-b {2}": "c1\n",
        })
        picker = FakePicker(["pod-b", "c1"])

        _resolver(
            runtime_context, picker=picker, shell=shell, prompt=FakePrompt(["ns"]),
        ).resolve(command)

        assert shell.captured == ["list ns {1}", "show ns pod-b {2}"]
        assert picker.calls[0][0] == ["pod-a", "pod-b"]
        assert shell.executed == ["ns pod-b c1"]

    def test_free_text_is_kept_verbatim(
        self, runtime_context: RuntimeContext,
    ) -> None:
        shell = FakeShell()

        _resolver(
            runtime_context, shell=shell, prompt=FakePrompt(["  spaced  "]),
        ).resolve(Command(template="echo [{0}]", steps=(FreeText(),)))

        assert shell.executed == ["echo [  spaced  ]"]

    def test_preview_is_passed_unmodified(
        self, runtime_context: RuntimeContext,
    ) -> None:
        picker = FakePicker(["a"])
        command = Command(
            template="x {0}",
            steps=(FromCommand(template="ls", preview="cat {} {0}"),),
        )

        _resolver(
            runtime_context, picker=picker, shell=FakeShell({"ls": "a\n"}),
        ).resolve(command)

        assert picker.calls == [(["a"], "cat {} {0}")]

    def test_empty_output_still_calls_picker(
        self, runtime_context: RuntimeContext,
    ) -> None:
        picker = FakePicker([None])
        shell = FakeShell()

        outcome = _resolver(runtime_context, picker=picker, shell=shell).resolve(
            Command(template="x", steps=(FromCommand(template="true"),)),
        )

        assert picker.calls == [([], None)]
        assert outcome is Outcome.CANCELLED
        assert shell.executed == []

    @pytest.mark.parametrize("cancel_at", [0, 1, 2])
    def test_cancel_at_any_widget_skips_execution(
        self, runtime_context: RuntimeContext, cancel_at: int,
    ) -> None:
        answers: list[str | None] = ["a", "b", "c"]
        answers[cancel_at] = None
        command = Command(
            template="run {0} {1} {2}",
            steps=tuple(FromCommand(template=f"step{i}") for i in range(3)),
        )
        shell = FakeShell({f"step{i}": "a\nb\nc\n" for i in range(3)})

        outcome = _resolver(
            runtime_context, picker=FakePicker(answers), shell=shell,
        ).resolve(command)

        assert outcome is Outcome.CANCELLED
        assert shell.executed == []
        assert len(shell.captured) == cancel_at + 1

    def test_non_zero_exit_status_is_not_an_error(
        self, runtime_context: RuntimeContext,
    ) -> None:
        shell = FakeShell(status=42)

        outcome = _resolver(runtime_context, shell=shell).resolve(Command(template="false"))

        assert outcome is Outcome.COMPLETED

    def test_prompt_abort_propagates(
        self, runtime_context: RuntimeContext,
    ) -> None:
        shell = FakeShell()
        menu = Select(children={"a": Command(template="echo {0}", steps=(FreeText(),))})

        with pytest.raises(InputAbortedError):
            _resolver(
                runtime_context, picker=FakePicker(["a"]), shell=shell, prompt=FakePrompt(),
            ).resolve(menu)
        assert shell.executed == []

    def test_shell_error_propagates(
        self, runtime_context: RuntimeContext,
    ) -> None:
        class BrokenShell(FakeShell):
            def run_captured(self, command: str, context: RuntimeContext) -> str:
                raise ShellSpawnError("no shell")

        with pytest.raises(ShellSpawnError):
            _resolver(runtime_context, shell=BrokenShell()).resolve(
                Command(template="x", steps=(FromCommand(template="ls"),)),
            )


# ---------------------------------------------------------------------------
# Cancellation flag
# ---------------------------------------------------------------------------

class TestCancellationFlag:
    def test_flag_set_before_first_picker(
        self, runtime_context: RuntimeContext,
    ) -> None:
        flag = CancellationFlag()
        flag.set()
        picker = FakePicker(["a"])
        shell = FakeShell()

        with pytest.raises(SessionCancelledError):
            _resolver(
                runtime_context,
                picker=picker,
                shell=shell,
                session=ResolutionSession(flag),
            ).resolve(Select(children={"a": Command(template="a")}))

        assert picker.calls == []
        assert shell.executed == []

    def test_flag_set_during_picker_aborts_walk(
        self, runtime_context: RuntimeContext,
    ) -> None:
        flag = CancellationFlag()

        def _answer(candidates: Sequence[str]) -> str | None:
            flag.set()
            return "a"

        shell = FakeShell()
        with pytest.raises(SessionCancelledError):
            _resolver(
                runtime_context,
                picker=FakePicker(_answer),
                shell=shell,
                session=ResolutionSession(flag),
            ).resolve(Select(children={"a": Command(template="a")}))

        assert shell.executed == []

    def test_flag_set_during_prompt_prevents_execution(
        self, runtime_context: RuntimeContext,
    ) -> None:
        flag = CancellationFlag()

        class InterruptingPrompt(FakePrompt):
            def read_line(self) -> str:
                flag.set()
                return "x"

        shell = FakeShell()
        with pytest.raises(SessionCancelledError):
            _resolver(
                runtime_context,
                shell=shell,
                prompt=InterruptingPrompt(),
                session=ResolutionSession(flag),
            ).resolve(Command(template="echo {0}", steps=(FreeText(),)))

        assert shell.executed == []

    def test_flag_checked_before_prompt(
        self, runtime_context: RuntimeContext,
    ) -> None:
        flag = CancellationFlag()
        flag.set()
        prompt = FakePrompt(["x"])

        with pytest.raises(SessionCancelledError):
            _resolver(
                runtime_context, prompt=prompt, session=ResolutionSession(flag),
            ).resolve(Command(template="echo {0}", steps=(FreeText(),)))

        assert prompt.calls == 0

    def test_flag_set_with_preselection_runs_no_candidate_command(
        self, runtime_context: RuntimeContext,
    ) -> None:
        flag = CancellationFlag()
        flag.set()
        menu = Select(children={
            "deploy": Command(
                template="echo {0}",
                steps=(FromCommand(template="printf 'x\\ny\\n'"),),
            ),
        })
        picker = FakePicker(["y"])
        shell = FakeShell()
        session = ResolutionSession(flag, preselection="deploy")

        with pytest.raises(SessionCancelledError):
            _resolver(
                runtime_context, picker=picker, shell=shell, session=session,
            ).resolve(menu)

        assert shell.captured == []
        assert shell.executed == []
        assert picker.calls == []
        assert session.resolutions == 0

    def test_flag_set_during_prompt_skips_next_candidate_command(
        self, runtime_context: RuntimeContext,
    ) -> None:
        flag = CancellationFlag()

        class InterruptingPrompt(FakePrompt):
            def read_line(self) -> str:
                flag.set()
                return "x"

        command = Command(
            template="done {0} {1}",
            steps=(FreeText(), FromCommand(template="rm -rf {0}")),
        )
        shell = FakeShell()

        with pytest.raises(SessionCancelledError):
            _resolver(
                runtime_context,
                shell=shell,
                prompt=InterruptingPrompt(),
                session=ResolutionSession(flag),
            ).resolve(command)

        assert shell.captured == []
        assert shell.executed == []

    def test_flag_checked_before_candidate_command(
        self, runtime_context: RuntimeContext,
    ) -> None:
        flag = CancellationFlag()
        flag.set()
        shell = FakeShell({"ls": "a\n"})

        with pytest.raises(SessionCancelledError):
            _resolver(
                runtime_context, shell=shell, session=ResolutionSession(flag),
            ).resolve(Command(template="x {0}", steps=(FromCommand(template="ls"),)))

        assert shell.captured == []


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

class TestDispatch:
    def test_unknown_node_type_raises(self, runtime_context: RuntimeContext) -> None:
        with pytest.raises(TypeError):
            _resolver(runtime_context).resolve("not a node")  # type: ignore[arg-type]
