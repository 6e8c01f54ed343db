"""In-process picker built on questionary's searchable select prompt.

The candidate list is shown as an arrow-key menu; typing filters it.
Of the shared option surface ``--tac`` reverses the list and
``--color`` is translated into a questionary :class:`Style`.  Preview
commands, height, margin and layout have no questionary equivalent and
are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from picklaunch.core.picker_options import PickerOptions, color_entries
from picklaunch.exceptions import EnvironmentError

logger = logging.getLogger(__name__)

# Colour-spec names mapped to (questionary style class, fg/bg).
_STYLE_SLOTS: dict[str, tuple[str, str]] = {
    "prompt": ("qmark", "fg"),
    "cursor": ("pointer", "fg"),
    "current": ("highlighted", "fg"),
    "current_bg": ("highlighted", "bg"),
    "selected": ("selected", "fg"),
    "info": ("instruction", "fg"),
    "header": ("question", "fg"),
}

_ANSI_16: tuple[str, ...] = (
    "#000000", "#800000", "#008000", "#808000",
    "#000080", "#800080", "#008080", "#c0c0c0",
    "#808080", "#ff0000", "#00ff00", "#ffff00",
    "#0000ff", "#ff00ff", "#00ffff", "#ffffff",
)
_CUBE_LEVELS: tuple[int, ...] = (0, 95, 135, 175, 215, 255)


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def xterm_to_hex(value: str) -> str | None:
    """Convert an xterm-256 index or ``#rrggbb`` string to ``#rrggbb``."""
    if value.startswith("#") and len(value) == 7:
        return value.lower()
    if not value.isdigit():
        return None
    index = int(value)
    if index < 16:
        return _ANSI_16[index]
    if index < 232:
        index -= 16
        red, green, blue = index // 36, (index // 6) % 6, index % 6
        return "#{:02x}{:02x}{:02x}".format(
            _CUBE_LEVELS[red], _CUBE_LEVELS[green], _CUBE_LEVELS[blue],
        )
    if index < 256:
        level = 8 + 10 * (index - 232)
        return f"#{level:02x}{level:02x}{level:02x}"
    return None


def style_rules(color: str) -> list[tuple[str, str]]:
    """Build questionary style rules from a colour spec.

    Unknown names and values that are not colours are skipped.
    """
    parts: dict[str, list[str]] = {}
    for name, value in color_entries(color).items():
        slot = _STYLE_SLOTS.get(name)
        hex_value = xterm_to_hex(value)
        if slot is None or hex_value is None:
            continue
        style_class, channel = slot
        parts.setdefault(style_class, []).append(f"{channel}:{hex_value}")
    return [(style_class, " ".join(spec)) for style_class, spec in parts.items()]


class EmbeddedPicker:
    """Concrete :class:`~picklaunch.core.protocols.Picker` using questionary.

    This class satisfies the protocol structurally — no explicit
    inheritance required.
    """

    def __init__(self, options: PickerOptions | None = None) -> None:
        self._options: PickerOptions = options if options is not None else PickerOptions()

    def select(
        self,
        candidates: Sequence[str],
        preview: str | None = None,
    ) -> str | None:
        """Show *candidates* and return the chosen one, or ``None``.

        ``None`` is returned for an empty list and when the user presses
        Ctrl+C (questionary's ``ask()`` swallows the interrupt).
        """
        if not candidates:
            return None
        if preview is not None:
            logger.debug("Embedded picker ignores preview command %r", preview)

        questionary = _import_questionary()

        lines = list(candidates)
        if self._options.tac:
            lines.reverse()

        rules = style_rules(self._options.color)
        style = questionary.Style(rules) if rules else None

        choices = [questionary.Choice(title=line, value=line) for line in lines]
        selected: str | None = questionary.select(
            "",
            choices=choices,
            qmark=">",
            instruction=" ",
            style=style,
            use_shortcuts=False,
            use_jk_keys=False,
            use_search_filter=True,
        ).ask()  # Returns None on Ctrl+C
        return selected
