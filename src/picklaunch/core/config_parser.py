"""Convert a loaded configuration document into the menu tree.

The document is whatever the YAML loader produced (plain dicts, lists
and scalars).  Every node is tagged by a ``type`` key:

* ``Select``  — ``options`` (mapping) and optional ``description``.
* ``Command`` — ``command`` (string), optional ``widgets`` (list) and
  optional ``description``.

Widgets are tagged the same way: ``FromCommand`` (``command``, optional
``preview``) or ``FreeText``.

The top level is an implicit ``Select`` whose children are the
document's ``options``, with optional ``shell`` and ``description``.

Parsing is pure and reports problems as :class:`ConfigError` naming the
offending location, e.g. ``options.tools.options.lint``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from picklaunch.core.models import (
    Command,
    FreeText,
    FromCommand,
    LauncherConfig,
    Node,
    Select,
    Widget,
)
from picklaunch.exceptions import ConfigError

logger = logging.getLogger(__name__)


def parse_config(document: Any) -> LauncherConfig:
    """Build a :class:`LauncherConfig` from a raw document.

    Raises
    ------
    ConfigError
        If the document does not match the menu grammar.
    """
    if not isinstance(document, Mapping):
        raise ConfigError(
            "Configuration must be a mapping with an 'options' key.",
        )
    if "options" not in document:
        raise ConfigError("Configuration is missing the 'options' key.")

    root = Select(
        children=_parse_children(document["options"], "options"),
        description=_optional_str(document, "description", "<root>"),
    )
    return LauncherConfig(
        root=root,
        shell=_optional_str(document, "shell", "<root>"),
    )


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------

def _parse_children(raw: Any, path: str) -> dict[str, Node]:
    if not isinstance(raw, Mapping):
        raise ConfigError(f"{path}: expected a mapping of menu entries.")

    children: dict[str, Node] = {}
    for label, entry in raw.items():
        label = str(label)
        if ":" in label:
            logger.warning(
                "Menu label %r contains ':' and cannot be picked reliably", label,
            )
        children[label] = _parse_node(entry, f"{path}.{label}")
    return children


def _parse_node(raw: Any, path: str) -> Node:
    if not isinstance(raw, Mapping):
        raise ConfigError(f"{path}: expected a mapping.")

    kind = raw.get("type")
    if kind == "Select":
        if "options" not in raw:
            raise ConfigError(f"{path}: Select requires 'options'.")
        return Select(
            children=_parse_children(raw["options"], f"{path}.options"),
            description=_optional_str(raw, "description", path),
        )
    if kind == "Command":
        return Command(
            template=_required_str(raw, "command", path),
            steps=_parse_widgets(raw.get("widgets"), f"{path}.widgets"),
            description=_optional_str(raw, "description", path),
        )
    raise ConfigError(
        f"{path}: unknown node type {kind!r}.",
        hint="Use 'type: Select' or 'type: Command'.",
    )


# ---------------------------------------------------------------------------
# Widgets
# ---------------------------------------------------------------------------

def _parse_widgets(raw: Any, path: str) -> tuple[Widget, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ConfigError(f"{path}: expected a list of widgets.")
    return tuple(
        _parse_widget(entry, f"{path}[{index}]") for index, entry in enumerate(raw)
    )


def _parse_widget(raw: Any, path: str) -> Widget:
    if not isinstance(raw, Mapping):
        raise ConfigError(f"{path}: expected a mapping.")

    kind = raw.get("type")
    if kind == "FromCommand":
        return FromCommand(
            template=_required_str(raw, "command", path),
            preview=_optional_str(raw, "preview", path),
        )
    if kind == "FreeText":
        return FreeText()
    raise ConfigError(
        f"{path}: unknown widget type {kind!r}.",
        hint="Use 'type: FromCommand' or 'type: FreeText'.",
    )


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

def _required_str(raw: Mapping[str, Any], key: str, path: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str):
        raise ConfigError(f"{path}: '{key}' must be a string.")
    return value


def _optional_str(raw: Mapping[str, Any], key: str, path: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{path}: '{key}' must be a string.")
    return value
