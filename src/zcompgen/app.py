"""The ``zcompgen`` command line.

Commands:

* ``generate``   -- print the completion script for a command-tree document.
* ``candidates`` -- print a candidate list as an on-the-fly stream.
* ``install``    -- generate and write the script into ``~/.zfunc``.
* ``config``     -- ``show``, ``set`` and ``reset`` the user settings.

:func:`main` is the console-script entry point. Known failures
(:class:`~zcompgen.exceptions.ZcompgenError`) exit with their own code;
anything else leaves a traceback in a crash log under
:func:`~zcompgen.config.get_data_dir`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from zcompgen import __version__
from zcompgen.commands.config import config_app
from zcompgen.commands.generate import candidates_command, generate_command
from zcompgen.commands.install import install_command
from zcompgen.exceptions import ConfigError, ZcompgenError
from zcompgen.exit_codes import EXIT_GENERIC_FAILURE

EXIT_INTERRUPTED = 130

app = typer.Typer(
    name="zcompgen",
    help="Generate Zsh completion scripts from command-tree descriptions.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("generate")(generate_command)
app.command("candidates", context_settings={"ignore_unknown_options": True})(
    candidates_command
)
app.command("install")(install_command)
app.add_typer(config_app, name="config", help="Show or change zcompgen settings.")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"zcompgen {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Print the version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Print structured data (config show) as JSON."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable coloured diagnostics."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only print errors and warnings on stderr."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Print debug messages on stderr."
    ),
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Write the script or stream to this file."
    ),
) -> None:
    """Install the process-wide OutputManager built from the global flags."""
    from zcompgen.config import resolve_config
    from zcompgen.output import OutputFormat, OutputManager, set_output

    # An unreadable config is reported by the command that needs it;
    # `config reset` has to keep working.
    try:
        no_color = resolve_config(cli_no_color=no_color).output.no_color
    except ConfigError:
        pass

    set_output(
        OutputManager(
            format=OutputFormat.JSON if json_output else OutputFormat.AUTO,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
            output_file=output_file,
        )
    )


def _on_sigint(signum: int, frame: Any) -> None:
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_INTERRUPTED)


def _write_crash_log(exc: BaseException) -> str:
    """Save the traceback of *exc* as ``logs/crash-<timestamp>.log`` and return its path."""
    from zcompgen.config import get_data_dir

    log_dir = get_data_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"
    log_path.write_text("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
    return str(log_path)


def main() -> None:
    """Entry point of the ``zcompgen`` console script."""
    from zcompgen.output import error

    signal.signal(signal.SIGINT, _on_sigint)
    try:
        app()
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except ZcompgenError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error. Debug log: {_write_crash_log(exc)}")
        sys.exit(EXIT_GENERIC_FAILURE)


if __name__ == "__main__":
    main()
