"""Infrastructure layer — external system integration.

This layer wraps all interaction with the operating system: subshells,
picker binaries, the terminal, signals, and the configuration file.
Every raw third-party or OS exception must be caught here and
re-raised as a :class:`~picklaunch.exceptions.PicklaunchError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from picklaunch.infra.binary_detector import BinaryStatus, detect_binary, require_binary
from picklaunch.infra.config_loader import load_config, resolve_shell
from picklaunch.infra.interrupts import RepeatedInterruptHandler
from picklaunch.infra.pickers import build_picker, load_picker_options
from picklaunch.infra.prompt import QuestionaryPrompt
from picklaunch.infra.shell import SubprocessShellExecutor

__all__: list[str] = [
    "BinaryStatus",
    "QuestionaryPrompt",
    "RepeatedInterruptHandler",
    "SubprocessShellExecutor",
    "build_picker",
    "detect_binary",
    "load_config",
    "load_picker_options",
    "require_binary",
    "resolve_shell",
]
