"""``picklaunch --doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can run the launcher: the menu file
parses, a shell is available, and which picker binaries are installed.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import os
import platform
import sys
from pathlib import Path

from picklaunch.cli import exit_codes
from picklaunch.cli.console import console
from picklaunch.exceptions import ConfigError
from picklaunch.infra.binary_detector import BinaryStatus, detect_binary
from picklaunch.infra.config_loader import FALLBACK_SHELL, load_config
from picklaunch.infra.paths import default_config_path
from picklaunch.version import __version__

PICKER_BINARIES: tuple[str, ...] = ("fzf", "sk")


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _config_check(config_path: Path | None) -> tuple[str, str, str]:
    """Return (label, value, status) for the menu definition row."""
    path = config_path or default_config_path()
    try:
        config = load_config(path)
    except ConfigError as exc:
        return "config", str(exc).splitlines()[0], "[red]FAIL[/red]"
    entries = len(config.root.children)
    return "config", f"{path} ({entries} entries)", "[green]OK[/green]"


def _shell_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the fallback shell row."""
    shell = os.environ.get("SHELL") or FALLBACK_SHELL
    status_obj = detect_binary(shell)
    if status_obj.found:
        return "shell", shell, "[green]OK[/green]"
    return "shell", f"{shell} (not found)", "[red]FAIL[/red]"


def _binary_check(status_obj: BinaryStatus) -> tuple[str, str, str]:
    """Return (label, value, status) for an optional picker binary row."""
    if status_obj.found:
        path_str = str(status_obj.path) if status_obj.path else "found"
        return status_obj.name, path_str, "[green]OK[/green]"
    return status_obj.name, "not found", "[yellow]WARN[/yellow]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    release = platform.release()
    machine = platform.machine()
    value = f"{system_display} {release} ({machine})"
    return "OS", value, "[green]OK[/green]"


def _picklaunch_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the picklaunch version row."""
    return "picklaunch", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\npicklaunch doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        plain_status = _status_plain(status)
        print(f"{label:<12} {value:<40} {plain_status:<8}", file=sys.stderr)
    print(file=sys.stderr)


def _print_install_guidance(missing: list[BinaryStatus], rich_available: bool) -> None:
    for status_obj in missing:
        if rich_available:
            console.print(
                f"[yellow]{status_obj.name} is not installed[/yellow] "
                "(only needed for the matching picker flag)."
            )
            for cmd in status_obj.install_commands:
                console.print(f"  [bold]{cmd}[/bold]")
            console.print()
        else:
            print(
                f"{status_obj.name} is not installed "
                "(only needed for the matching picker flag).",
                file=sys.stderr,
            )
            for cmd in status_obj.install_commands:
                print(f"  {cmd}", file=sys.stderr)
            print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(config_path: Path | None = None) -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
        Missing picker binaries are warnings only.
    """
    binaries = [detect_binary(name) for name in PICKER_BINARIES]
    checks = [
        _picklaunch_version_check(),
        _python_version_check(),
        _config_check(config_path),
        _shell_check(),
        *(_binary_check(status_obj) for status_obj in binaries),
        _os_check(),
    ]

    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="picklaunch doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    _print_install_guidance(
        [status_obj for status_obj in binaries if not status_obj.found],
        rich_available,
    )

    if has_failure:
        if rich_available:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            print("Some checks failed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR

    if rich_available:
        console.print("[bold green]All checks passed.[/bold green]")
    else:
        print("All checks passed.", file=sys.stderr)
    return exit_codes.SUCCESS
