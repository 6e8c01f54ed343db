"""Picker display options parsed from a shell-style option string.

The option string (``PICKLAUNCH_DEFAULT_OPTS``) uses the same surface
as fzf/skim, e.g. ``--height 40% --layout=reverse --tac``.  Parsing is
pure: reading the environment is left to the infrastructure layer.

Rules
-----
* Tokenization follows shell quoting rules (:func:`shlex.split`).
* Value options accept both ``--opt value`` and ``--opt=value``.
* The first occurrence of a value option wins; ``--bind`` accumulates.
* A ``--color`` value containing ``{}`` is ignored.
* Unknown tokens are ignored.  Each back-end honours what it can.
"""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass

from picklaunch.exceptions import PickerOptionsError

logger = logging.getLogger(__name__)

DEFAULT_HEIGHT: str = "50%"
DEFAULT_MARGIN: str = "0%"
DEFAULT_LAYOUT: str = "default"
DEFAULT_COLOR: str = (
    "matched:108,matched_bg:0,current:254,current_bg:236,current_match:151,"
    "current_match_bg:236,spinner:148,info:144,prompt:110,cursor:161,"
    "selected:168,header:109,border:59"
)
"""Skim's built-in 256-colour theme."""

_VALUE_OPTIONS: dict[str, str] = {
    "--height": "height",
    "--margin": "margin",
    "--layout": "layout",
    "--color": "color",
    "--bind": "bind",
}

_FLAG_OPTIONS: dict[str, str] = {
    "--reverse": "reverse",
    "--tac": "tac",
    "--no-sort": "no_sort",
    "--inline-info": "inline_info",
}


@dataclass(frozen=True, slots=True)
class PickerOptions:
    """Resolved picker display options with their defaults applied."""

    height: str = DEFAULT_HEIGHT
    margin: str = DEFAULT_MARGIN
    layout: str = DEFAULT_LAYOUT
    color: str = DEFAULT_COLOR
    bind: tuple[str, ...] = ()
    reverse: bool = False
    tac: bool = False
    no_sort: bool = False
    inline_info: bool = False


def parse_picker_options(text: str | None) -> PickerOptions:
    """Parse *text* into :class:`PickerOptions`.

    Raises
    ------
    PickerOptionsError
        If *text* has unbalanced quotes.
    """
    if not text or not text.strip():
        return PickerOptions()

    try:
        tokens = shlex.split(text)
    except ValueError as exc:
        raise PickerOptionsError(
            f"Cannot parse picker options {text!r}: {exc}",
            hint="Check the quoting in PICKLAUNCH_DEFAULT_OPTS.",
        ) from exc

    values: dict[str, str] = {}
    flags: dict[str, bool] = {}
    bind: list[str] = []

    position = 0
    while position < len(tokens):
        token = tokens[position]
        position += 1

        if token in _FLAG_OPTIONS:
            flags[_FLAG_OPTIONS[token]] = True
            continue

        name, has_value, value = token.partition("=")
        if name not in _VALUE_OPTIONS:
            logger.debug("Ignoring picker option %r", token)
            continue
        if not has_value:
            if position >= len(tokens):
                logger.debug("Picker option %s has no value", name)
                continue
            value = tokens[position]
            position += 1

        field_name = _VALUE_OPTIONS[name]
        if field_name == "color" and "{}" in value:
            continue
        if field_name == "bind":
            bind.append(value)
        elif field_name in values:
            continue
        else:
            values[field_name] = value

    return PickerOptions(
        **values,
        **flags,
        bind=tuple(bind),
    )


def color_entries(color: str) -> dict[str, str]:
    """Split a ``name:value,name:value`` colour spec into a mapping.

    Entries without a ``:`` (base themes such as ``dark``) are skipped.
    """
    entries: dict[str, str] = {}
    for part in color.split(","):
        name, sep, value = part.strip().partition(":")
        if sep and name and value:
            entries[name] = value
    return entries
