"""Core / service layer — the menu model and the resolution engine.

Rules
-----
* No ``print()`` calls.
* No filesystem, terminal or subprocess I/O.
* No imports from ``cli`` or ``infra``.
* All collaborators are injected through :mod:`picklaunch.core.protocols`.
"""

from picklaunch.core.engine import ActionResolver
from picklaunch.core.models import (
    Command,
    FreeText,
    FromCommand,
    LauncherConfig,
    Outcome,
    RuntimeContext,
    Select,
)
from picklaunch.core.protocols import Picker, Prompt, ShellExecutor
from picklaunch.core.session import CancellationFlag, ResolutionSession

__all__: list[str] = [
    "ActionResolver",
    "CancellationFlag",
    "Command",
    "FreeText",
    "FromCommand",
    "LauncherConfig",
    "Outcome",
    "Picker",
    "Prompt",
    "ResolutionSession",
    "RuntimeContext",
    "Select",
    "ShellExecutor",
]
