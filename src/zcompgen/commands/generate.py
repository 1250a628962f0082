"""Generate commands -- write completion scripts and candidate streams.

``zcompgen generate`` loads a command-tree document and prints the
completion script for it. ``zcompgen candidates`` prints a list of
candidate values in the line format a generated script's on-the-fly helper
reads back, which is what an application prints when it serves a
``--completion-candidates`` request. With ``--request`` it serves such a
request itself from the keyword hints of a command-tree document.
"""

from __future__ import annotations

from typing import Optional

import typer

from zcompgen.commands import exit_on_error
from zcompgen.output import debug, write_data


def generate_command(
    source: str = typer.Argument(
        help="Command-tree document: file path, http(s) URL, or '-' for stdin."
    ),
    shell: str = typer.Option("zsh", "--shell", "-s", help="Target shell."),
    app_name: Optional[str] = typer.Option(
        None, "--app-name", help="Override the application display name."
    ),
    command_name: Optional[str] = typer.Option(
        None, "--command-name", help="Override the invocation (executable) name."
    ),
    prefix: Optional[str] = typer.Option(
        None, "--prefix", help="Prefix of generated function names."
    ),
) -> None:
    """Generate a completion script from a command-tree document.

    The script is written to stdout, or to the file given with the global
    ``--output`` flag.

    Example::

        zcompgen generate tree.yaml > ~/.zfunc/_myapp
        zcompgen generate https://example.com/tree.json --command-name myapp
    """
    from zcompgen.config import resolve_config
    from zcompgen.generator import get_generator
    from zcompgen.loader import load_tree

    with exit_on_error():
        config = resolve_config(cli_prefix=prefix)
        document = load_tree(source)

        metadata = document.application
        if app_name is not None:
            metadata = metadata.model_copy(update={"product_name": app_name})
        if command_name is not None:
            metadata = metadata.model_copy(update={"executable_name": command_name})

        generator = get_generator(
            shell,
            metadata,
            function_prefix=config.generator.function_prefix,
            attribution=config.generator.attribution,
        )
        debug(
            f"Generating {shell} completion for '{metadata.executable_name}' "
            f"({len(document.commands.all)} top-level commands)"
        )
        write_data(generator.generate_script(document.commands))


def candidates_command(
    source: str = typer.Argument(
        help="Candidate list (or, with --request, a command-tree document): "
        "file path, http(s) URL, or '-' for stdin."
    ),
    words: Optional[list[str]] = typer.Argument(
        None, help="With --request: the command line being completed."
    ),
    shell: str = typer.Option("zsh", "--shell", "-s", help="Target shell."),
    request_target: Optional[str] = typer.Option(
        None,
        "--request",
        "-r",
        help="Answer a '<shell>:<context>' completion request from a command tree.",
    ),
) -> None:
    """Render candidate values as an on-the-fly completion stream.

    Without ``--request`` the document is a list of strings or
    ``{value, description}`` objects (or an object with such a ``values``
    list). With ``--request`` it is a command-tree document, and the keyword
    values of the option or argument named by the request's context are
    printed. Nothing is printed when there are no candidates.

    Example::

        echo '[{"value": "debug", "description": "Debug build"}]' | zcompgen candidates -
        zcompgen candidates tree.yaml --request zsh:url -- myapp remote add origin
    """
    from zcompgen.exceptions import InvalidUsageError
    from zcompgen.generator import get_generator
    from zcompgen.loader import load_candidate_values, load_tree
    from zcompgen.models import ApplicationMetadata
    from zcompgen.request import CompletionRequest, resolve_request_values

    with exit_on_error():
        if request_target is None:
            if words:
                raise InvalidUsageError("Command-line words are only accepted with --request")
            values = load_candidate_values(source)
            metadata = ApplicationMetadata(product_name="zcompgen", executable_name="zcompgen")
        else:
            request = CompletionRequest.parse(request_target, words or [])
            shell = request.shell
            document = load_tree(source)
            metadata = document.application
            values = resolve_request_values(document.commands, request)
            debug(f"Resolved request '{request_target}' over {len(request.words)} words")

        generator = get_generator(shell, metadata)
        debug(f"Rendering {len(values)} candidates for {shell}")
        write_data(generator.render_candidates(values))
