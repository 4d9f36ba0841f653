"""Typer application and CLI entry point for schemer.

This module wires together the top-level Typer application and registers
the sub-command groups (``path``, ``operation``, ``schema``, ``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
:class:`~schemer.exceptions.SchemerError` exits with the error's code;
any other exception is written to a crash log under the data directory.

See Also:
    :mod:`schemer.config`: Global and project configuration resolution.
    :mod:`schemer.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import NoReturn, Optional

import typer

from schemer import __version__
from schemer.commands.config import config_app
from schemer.commands.listing import operation_app, path_app, schema_app
from schemer.exceptions import SchemerError
from schemer.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED
from schemer.output import error


app = typer.Typer(
    name="schemer",
    help="List the paths, operations, and schemas of multi-file OpenAPI specs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(path_app, name="path", help="Paths declared under `paths`.")
app.add_typer(operation_app, name="operation", help="Operation ids of every path and method.")
app.add_typer(schema_app, name="schema", help="Schemas declared under `components.schemas`.")
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"schemer {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output, one name per line."
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
    recursive: Optional[bool] = typer.Option(
        None,
        "--recursive/--no-recursive",
        help="Follow $ref targets inside referenced documents during discovery.",
        show_default=False,
    ),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Output file path."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~schemer.output.OutputManager` from CLI
    flags (falling back to the configured ``output.format``), sets up
    logging for ``--verbose``, and stores shared options in the Typer
    context so that sub-commands can read them via ``ctx.obj``.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        json_output: Force JSON output format.
        plain_output: Force plain-text output format.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level diagnostic output.
        recursive: Override ``discovery.recursive`` for this invocation.
        output_file: Write primary data output to a file path.
    """
    from schemer.config import resolve_config
    from schemer.exceptions import ConfigError
    from schemer.output import OutputFormat, OutputManager, set_output, warning

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    config_warning: Optional[str] = None
    if fmt == OutputFormat.AUTO:
        try:
            fmt = OutputFormat(resolve_config().output.format)
        except ConfigError as exc:
            config_warning = str(exc)
        except ValueError:
            config_warning = "Unknown output.format in config, using auto"

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
        output_file=output_file,
    )
    set_output(output)
    if config_warning:
        warning(config_warning)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="[debug] %(name)s: %(message)s",
            stream=sys.stderr,
        )

    ctx.ensure_object(dict)
    ctx.obj["recursive"] = recursive
    ctx.obj["verbose"] = verbose


def _cancel() -> NoReturn:
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_INTERRUPTED)


def _setup_signal_handlers() -> None:
    """Turn Ctrl-C into a short message and exit status 130."""
    signal.signal(signal.SIGINT, lambda signum, frame: _cancel())


def _write_crash_log() -> Path:
    """Save the traceback of the exception being handled and return the log path.

    The log starts with the schemer version and the command line, so a
    report can be reproduced from the file alone.
    """
    from schemer.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(exist_ok=True)
    log_path = logs_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    header = f"schemer {__version__}\nargv: {' '.join(sys.argv)}\n\n"
    log_path.write_text(header + traceback.format_exc(), encoding="utf-8")
    return log_path


def main() -> None:
    """Console-script entry point.

    A :class:`~schemer.exceptions.SchemerError` that escapes a command ends
    the process with that error's exit code. Any other exception is saved
    to a crash log under the data directory and exits with status 1.
    """
    _setup_signal_handlers()
    try:
        app()
    except KeyboardInterrupt:
        _cancel()
    except SchemerError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception:
        error(f"Unexpected error. Debug log: {_write_crash_log()}")
        sys.exit(EXIT_GENERIC_FAILURE)
