"""Pure text transformations shared by the resolution engine.

Every function in this module is a **pure** transformation — no I/O,
no side effects, fully deterministic, and trivially unit-testable.

* Placeholder substitution — ``{0}``, ``{1}``, … → collected arguments.
* Choice labels — ``"label: description"`` formatting and parsing.
* Output splitting — captured shell output → candidate lines.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from picklaunch.core.models import Node

DESCRIPTION_SEPARATOR: str = ": "
"""Joins a menu label and its description in the candidate list."""

_PLACEHOLDER = re.compile(r"\{(0|[1-9][0-9]*)\}")


# ---------------------------------------------------------------------------
# Placeholder substitution
# ---------------------------------------------------------------------------

def substitute(template: str, arguments: Sequence[str]) -> str:
    """Replace ``{k}`` with ``arguments[k]`` for every available *k*.

    Placeholders whose index is out of range are left untouched, so a
    widget template can never refer to its own value or a later one.
    Substitution is a single pass over *template*: text inserted from an
    argument is not scanned again.
    """

    def _replace(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index < len(arguments):
            return arguments[index]
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, template)


# ---------------------------------------------------------------------------
# Choice labels
# ---------------------------------------------------------------------------

def format_choice_label(label: str, node: Node) -> str:
    """Render a menu entry as shown in the picker.

    Format: ``"label"`` or ``"label: description"`` when *node* carries
    a non-empty description.
    """
    if node.description:
        return f"{label}{DESCRIPTION_SEPARATOR}{node.description}"
    return label


def parse_choice_label(choice: str) -> str:
    """Recover the menu key from a picked candidate.

    Splits on the **first** colon only, so descriptions may contain
    colons.  A label that itself contains a colon cannot be recovered;
    the config parser warns about such labels.
    """
    key, _sep, _rest = choice.partition(":")
    return key


# ---------------------------------------------------------------------------
# Captured output
# ---------------------------------------------------------------------------

def split_output_lines(output: str) -> list[str]:
    """Split captured output into candidate lines.

    Lines end at ``\\n`` (an optional preceding ``\\r`` is dropped).  A
    trailing newline does not produce an empty final candidate.
    """
    if not output:
        return []
    lines = output.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
