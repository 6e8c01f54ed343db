"""Picker back-ends and the registry used to choose one at startup.

The resolution engine only sees the
:class:`~picklaunch.core.protocols.Picker` protocol; which back-end
sits behind it is decided here, once per process.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping

from picklaunch.core.picker_options import PickerOptions, parse_picker_options
from picklaunch.core.protocols import Picker
from picklaunch.exceptions import PickerError
from picklaunch.infra.pickers.binary import BinaryPicker, FzfPicker, SkimPicker
from picklaunch.infra.pickers.embedded import EmbeddedPicker

PICKER_OPTIONS_ENV: str = "PICKLAUNCH_DEFAULT_OPTS"
"""Environment variable holding the shared picker option string."""

BACKENDS: dict[str, Callable[[PickerOptions], Picker]] = {
    "embedded": EmbeddedPicker,
    "fzf": FzfPicker,
    "skim": SkimPicker,
}


def load_picker_options(environ: Mapping[str, str] | None = None) -> PickerOptions:
    """Parse picker options from :data:`PICKER_OPTIONS_ENV`."""
    env = environ if environ is not None else os.environ
    return parse_picker_options(env.get(PICKER_OPTIONS_ENV))


def build_picker(
    backend: str = "embedded",
    options: PickerOptions | None = None,
) -> Picker:
    """Instantiate the picker registered under *backend*.

    Raises
    ------
    PickerError
        If *backend* is not registered.
    """
    factory = BACKENDS.get(backend)
    if factory is None:
        raise PickerError(
            f"Unknown picker back-end {backend!r}.",
            hint=f"Available back-ends: {', '.join(BACKENDS)}",
        )
    return factory(options if options is not None else load_picker_options())


__all__: list[str] = [
    "BACKENDS",
    "BinaryPicker",
    "EmbeddedPicker",
    "FzfPicker",
    "PICKER_OPTIONS_ENV",
    "SkimPicker",
    "build_picker",
    "load_picker_options",
]
