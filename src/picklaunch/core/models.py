"""Domain models for picklaunch.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  The menu tree is built once from the
configuration file and only read afterwards.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union


# ---------------------------------------------------------------------------
# Widgets — argument collection steps
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FromCommand:
    """Pick one line of a shell command's output."""

    template: str
    """Shell command producing the candidate lines.  May reference
    arguments collected by earlier steps (``{0}``, ``{1}``, …)."""

    preview: str | None = None
    """Optional preview command; ``{}`` is the highlighted line."""


@dataclass(frozen=True, slots=True)
class FreeText:
    """Read one line typed by the user."""


Widget = Union[FromCommand, FreeText]


# ---------------------------------------------------------------------------
# Nodes — the menu tree
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Command:
    """Leaf action: collect arguments, then run ``template`` in a shell."""

    template: str
    steps: tuple[Widget, ...] = ()
    description: str | None = None


@dataclass(frozen=True, slots=True)
class Select:
    """Menu node: the user picks exactly one of ``children``.

    ``children`` preserves insertion order, which is also display order.
    """

    children: Mapping[str, Node] = field(default_factory=dict)
    description: str | None = None


Node = Union[Select, Command]


# ---------------------------------------------------------------------------
# Configuration and runtime
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LauncherConfig:
    """A fully parsed configuration file."""

    root: Select
    """Top-level menu synthesized from the document's ``options``."""

    shell: str | None = None
    """Shell configured in the document, if any."""


@dataclass(frozen=True, slots=True)
class RuntimeContext:
    """Process-wide settings handed to the shell executor."""

    shell: str
    cache_dir: Path


class Outcome(enum.Enum):
    """Non-error result of resolving a node.

    Failures are raised as :class:`~picklaunch.exceptions.PicklaunchError`
    subclasses, which makes the overall result tri-state.
    """

    COMPLETED = "completed"
    """A command was launched."""

    CANCELLED = "cancelled"
    """The user backed out of a picker; nothing was launched."""
