"""Built-in CLI commands for zcompgen.

Each sub-module defines one command or a :class:`typer.Typer` group that
:mod:`zcompgen.app` registers on the root application:

* :mod:`~zcompgen.commands.generate` -- ``generate`` and ``candidates``.
* :mod:`~zcompgen.commands.install` -- ``install``.
* :mod:`~zcompgen.commands.config` -- ``config show|set|reset``.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import typer

from zcompgen.exceptions import ZcompgenError
from zcompgen.output import error


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Report a :class:`~zcompgen.exceptions.ZcompgenError` and exit with its code."""
    try:
        yield
    except ZcompgenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
