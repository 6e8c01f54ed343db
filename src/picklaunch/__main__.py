"""Allow ``python -m picklaunch`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m picklaunch`` behaves identically to the ``picklaunch``
console script.
"""

from __future__ import annotations

from picklaunch.cli.app import cli

if __name__ == "__main__":
    cli()
