"""Install command -- write a generated completion script into the fpath.

``zcompgen install`` generates the Zsh script for a command-tree document
and writes it to ``~/.zfunc/_<command>`` (or a path given explicitly), then
tells the user how to make Zsh pick it up.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from zcompgen.commands import exit_on_error
from zcompgen.exceptions import InvalidUsageError, ZcompgenError
from zcompgen.output import debug, success, suggest

DEFAULT_COMPLETION_DIR = "~/.zfunc"


def default_install_path(command_name: str) -> Path:
    """Return ``~/.zfunc/_<command_name>``, expanded."""
    return Path(DEFAULT_COMPLETION_DIR).expanduser() / f"_{command_name}"


def install_command(
    source: str = typer.Argument(
        help="Command-tree document: file path, http(s) URL, or '-' for stdin."
    ),
    path: Optional[str] = typer.Argument(
        None,
        help="Where to write the script: an absolute or ~ path, or 'default'.",
    ),
    prefix: Optional[str] = typer.Option(
        None, "--prefix", help="Prefix of generated function names."
    ),
) -> None:
    """Generate and install a Zsh completion script.

    Without *path* (or with ``default``) the script is written to
    ``~/.zfunc/_<command>``. Relative paths are rejected.

    Example::

        zcompgen install tree.yaml
        zcompgen install tree.yaml ~/.zsh/completions/_myapp
    """
    from zcompgen.config import resolve_config, write_text_atomic
    from zcompgen.generator import get_generator
    from zcompgen.loader import load_tree

    with exit_on_error():
        if path is not None and path != "default" and not path.startswith(("/", "~")):
            raise InvalidUsageError(
                "Relative paths not supported. Use an absolute path, ~/path, or 'default'."
            )

        config = resolve_config(cli_prefix=prefix)
        document = load_tree(source)
        generator = get_generator(
            "zsh",
            document.application,
            function_prefix=config.generator.function_prefix,
            attribution=config.generator.attribution,
        )
        script = generator.generate_script(document.commands)

        used_default = path is None or path == "default"
        if used_default:
            target = default_install_path(document.application.executable_name)
        else:
            target = Path(path).expanduser()

        debug(f"Writing completion script to {target}")
        try:
            write_text_atomic(target, script)
        except OSError as exc:
            raise ZcompgenError(f"Failed to write completion file: {exc}") from exc

    display_path = str(target).replace(str(Path.home()), "~")
    success(f"Zsh completion installed to {display_path}")
    if used_default:
        suggest(
            "Add to .zshrc: fpath+=~/.zfunc && autoload -Uz compinit && compinit"
        )
    else:
        suggest(f"Ensure {Path(display_path).parent} is in your fpath, then restart your shell.")
