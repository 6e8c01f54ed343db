"""CLI application entry point and command routing for picklaunch.

This module is the **sole error boundary** for the entire application.
It catches :class:`~picklaunch.exceptions.PicklaunchError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core
  resolution engine and the infrastructure adapters.
* ``print()`` is forbidden outside the CLI layer; Rich console is used
  exclusively.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from picklaunch.cli import exit_codes
from picklaunch.cli.console import configure_logging, console
from picklaunch.exceptions import (
    ChildNotFoundError,
    InvalidPreselectionError,
    PicklaunchError,
    SessionCancelledError,
)
from picklaunch.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Sub-commands are not used; the CLI supports:
    * ``picklaunch``                — walk the menu interactively
    * ``picklaunch -c <label>``     — skip the first menu
    * ``picklaunch --doctor``       — environment diagnostics
    * ``picklaunch --version``
    """
    parser = argparse.ArgumentParser(
        prog="picklaunch",
        description="Command line launcher.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-c",
        "--command",
        metavar="LABEL",
        default=None,
        help="Entry of the top-level menu to open directly.",
    )
    backend = parser.add_mutually_exclusive_group()
    backend.add_argument(
        "-f",
        "--fzf",
        dest="backend",
        action="store_const",
        const="fzf",
        help="Use the fzf binary instead of the built-in picker.",
    )
    backend.add_argument(
        "-s",
        "--skim-binary",
        dest="backend",
        action="store_const",
        const="skim",
        help="Use the sk binary instead of the built-in picker.",
    )
    parser.set_defaults(backend="embedded")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Menu definition to load (default: $XDG_CONFIG_HOME/picklaunch/config.yml).",
    )
    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Run environment diagnostics and exit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug information to stderr.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _warn_interrupt() -> None:
    console.print("\n[yellow]Press Ctrl+C again to abort.[/yellow]")


def _handle_launch(args: argparse.Namespace) -> int:
    """Walk the configured menu and launch the assembled command.

    Flow:
    1. Load the menu definition and resolve shell + cache directory.
    2. Build the picker back-end selected on the command line.
    3. Resolve the menu tree with SIGINT feeding the cancellation flag.
    """
    from picklaunch.core.engine import ActionResolver
    from picklaunch.core.models import RuntimeContext
    from picklaunch.core.session import ResolutionSession
    from picklaunch.infra.config_loader import load_config, resolve_shell
    from picklaunch.infra.interrupts import RepeatedInterruptHandler
    from picklaunch.infra.paths import default_cache_dir, default_config_path, ensure_dir
    from picklaunch.infra.pickers import build_picker
    from picklaunch.infra.prompt import QuestionaryPrompt
    from picklaunch.infra.shell import SubprocessShellExecutor

    config_path: Path = args.config or default_config_path()
    config = load_config(config_path)

    context = RuntimeContext(
        shell=resolve_shell(config),
        cache_dir=ensure_dir(default_cache_dir()),
    )
    logger.debug("Shell %s, cache directory %s", context.shell, context.cache_dir)

    session = ResolutionSession(preselection=args.command)
    resolver = ActionResolver(
        build_picker(args.backend),
        SubprocessShellExecutor(),
        QuestionaryPrompt(),
        context,
        session,
    )

    with RepeatedInterruptHandler(session.flag, on_first=_warn_interrupt):
        outcome = resolver.resolve(config.root)

    logger.debug("Resolution finished: %s", outcome.value)
    return exit_codes.SUCCESS


def _handle_doctor(config_path: Path | None) -> int:
    """Dispatch the ``--doctor`` diagnostics command."""
    from picklaunch.cli.doctor import run_doctor

    return run_doctor(config_path)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the picklaunch CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if args.doctor:
        return _handle_doctor(args.config)

    return _handle_launch(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def _print_error(exc: PicklaunchError) -> None:
    console.print(f"[bold red]Error:[/bold red] {exc}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {exc.hint}")


def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except SessionCancelledError:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.CANCELLED)
    except InvalidPreselectionError as exc:
        _print_error(exc)
        sys.exit(exit_codes.INVALID_PRESELECTION)
    except ChildNotFoundError as exc:
        _print_error(exc)
        sys.exit(exit_codes.UNEXPECTED_ERROR)
    except PicklaunchError as exc:
        _print_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
