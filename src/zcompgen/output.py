"""Route generated text to stdout and diagnostics to stderr.

A completion script is only useful if it reaches its destination
untouched, so zcompgen keeps two channels strictly apart:

* **Data** -- generated scripts, candidate streams and ``config show``
  dumps. Written to stdout (or the ``--output`` file) with
  :meth:`OutputManager.write_data`, which never adds markup.
* **Diagnostics** -- progress, warnings, errors and hints. Written to
  stderr through a Rich :class:`~rich.console.Console`, or as plain
  ``print`` lines when colour is off (``--no-color``, ``NO_COLOR``,
  ``TERM=dumb``).

``zcompgen generate tree.yaml > _myapp`` therefore always yields a clean
script, whatever is logged along the way.

:func:`~zcompgen.app.main_callback` builds one :class:`OutputManager` from
the global flags and installs it with :func:`set_output`; everything else
calls the module-level shortcuts (:func:`info`, :func:`debug`, ...).
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.syntax import Syntax


class OutputFormat(str, Enum):
    """Rendering of structured data (``config show``).

    ``AUTO`` picks ``RICH`` on a colour-capable terminal and ``PLAIN``
    otherwise. Scripts and candidate streams ignore the format.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


# (Rich style, plain prefix, suppressed by --quiet) per diagnostic level.
_LEVELS: dict[str, tuple[str, str, bool]] = {
    "info": ("", "", True),
    "success": ("green", "", True),
    "suggest": ("dim", "→ ", True),
    "warning": ("yellow", "Warning: ", False),
    "error": ("bold red", "Error: ", False),
}


class OutputManager:
    """Holds the output preferences chosen on the command line.

    Args:
        format: Rendering of structured data; ``AUTO`` is resolved here.
        no_color: Disable Rich styling on both streams.
        quiet: Drop ``info``, ``success`` and ``suggest`` messages.
        verbose: Show ``debug`` messages.
        output_file: Send data to this path instead of stdout.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
        output_file: Optional[str] = None,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._output_file = output_file

        if format == OutputFormat.AUTO:
            rich_ok = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich_ok else OutputFormat.PLAIN
        self._format = format

        self._stderr = Console(file=sys.stderr, stderr=True, no_color=self._no_color)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    @property
    def output_file(self) -> Optional[str]:
        return self._output_file

    # --- data ---

    def write_data(self, text: str) -> None:
        """Write *text* unchanged to the output file (replacing it) or stdout."""
        if self._output_file:
            with open(self._output_file, "w", encoding="utf-8") as f:
                f.write(text)
            return
        sys.stdout.write(text)
        sys.stdout.flush()

    def format_response(self, data: Any) -> None:
        """Write structured *data* in the resolved format.

        Plain mode prints one ``key<TAB>value`` line per top-level key of a
        mapping (nested values as compact JSON); anything else, and JSON
        mode, prints indented JSON. Rich mode highlights the JSON.
        """
        rendered = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if self._format == OutputFormat.RICH and not self._output_file:
            console = Console(file=sys.stdout, force_terminal=True, no_color=self._no_color)
            console.print(Syntax(rendered, "json", theme="monokai", word_wrap=True))
        elif self._format == OutputFormat.PLAIN and isinstance(data, dict):
            self.write_data("".join(f"{k}\t{_plain_value(v)}\n" for k, v in data.items()))
        else:
            self.write_data(rendered + "\n")

    # --- diagnostics ---

    def _emit(self, level: str, message: str) -> None:
        style, prefix, quietable = _LEVELS[level]
        if quietable and self._quiet:
            return
        if self._no_color:
            print(f"{prefix}{message}", file=sys.stderr, flush=True)
        elif level in ("warning", "error"):
            self._stderr.print(f"[{style}]{prefix.rstrip()}[/{style}] {message}")
        elif style:
            self._stderr.print(f"[{style}]{prefix}{message}[/{style}]")
        else:
            self._stderr.print(message)

    def info(self, message: str) -> None:
        self._emit("info", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def suggest(self, message: str) -> None:
        """Print a next step for the user, e.g. how to add a directory to fpath."""
        self._emit("suggest", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def debug(self, message: str) -> None:
        """Print a ``[debug]`` line; only with ``--verbose``."""
        if not self._verbose:
            return
        if self._no_color:
            print(f"[debug] {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[dim]\\[debug] {message}[/dim]")


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (to anything) or ``TERM`` is ``dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


def _plain_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


# --- process-wide instance ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager; tests call this between CLI runs."""
    global _output
    _output = None


def write_data(text: str) -> None:
    get_output().write_data(text)


def format_response(data: Any) -> None:
    get_output().format_response(data)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
