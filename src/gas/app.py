"""Typer application and CLI entry point for gas.

This module wires the root Typer application, registers the account
commands (``setup``, ``add``, ``remove``, ``use``, ``list``, ``with``,
``lang``) and the hidden credential-helper actions (``get``, ``store``,
``erase``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler, invokes the Typer app,
turns :class:`~gas.exceptions.GasError` into an exit code, and writes a
crash log under the data directory for anything else.

See Also:
    :mod:`gas.config`: Config file and environment resolution.
    :mod:`gas.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from gas import __version__
from gas.commands.accounts import (
    add_command,
    lang_command,
    list_command,
    remove_command,
    setup_command,
    use_command,
    with_command,
)
from gas.commands.helper import credential_erase, credential_get, credential_store
from gas.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED


app = typer.Typer(
    name="gas",
    help="Git Account Switcher - picks the right git account per directory.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("setup")(setup_command)
app.command("add")(add_command)
app.command("remove")(remove_command)
app.command("use")(use_command)
app.command("list")(list_command)
app.command(
    "with",
    add_help_option=False,
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)(with_command)
app.command("lang")(lang_command)
app.command("get", hidden=True)(credential_get)
app.command("store", hidden=True)(credential_store)
app.command("erase", hidden=True)(credential_erase)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"gas {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every command.

    Installs the global :class:`~gas.output.OutputManager` and routes
    library logging to stderr when ``--verbose`` is given.
    """
    from gas.output import OutputManager, configure_logging, set_output

    output = OutputManager(no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)
    configure_logging(output)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C (even mid-poll) exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from gas.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text("".join(traceback.format_exception(exc)))
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``gas`` console script.

    Unhandled :class:`~gas.exceptions.GasError` instances cause a clean
    exit with the error's ``exit_code``. All other exceptions produce a
    crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from gas.exceptions import GasError
        from gas.output import error

        if isinstance(exc, GasError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
