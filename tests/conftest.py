"""Shared pytest fixtures and configuration for the picklaunch test suite.

Guidelines
----------
* No real terminal interaction in any test.
* Pickers, prompts and shells are faked at the protocol boundary.
* Core tests must be pure — no side effects.
* Only the end-to-end test spawns a real ``/bin/sh``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from picklaunch.core.models import RuntimeContext


@pytest.fixture(autouse=True)
def _reset_picklaunch_logger() -> Iterator[None]:
    """Drop handlers installed by ``main()`` so they never outlive capsys."""
    yield
    logger = logging.getLogger("picklaunch")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def runtime_context(tmp_path: Path) -> RuntimeContext:
    return RuntimeContext(shell="sh", cache_dir=tmp_path / "cache")
