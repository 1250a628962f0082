"""zcompgen -- Generate Zsh completion scripts from command-tree descriptions.

This package turns a description of a command-line application's command
tree (commands, sub-commands, options, positional arguments, and completion
hints) into a self-contained Zsh completion script. Commands whose values
are only known at run time are completed "on the fly": the generated script
re-invokes the application with ``--completion-candidates`` and parses the
``value:description`` lines it prints.

Typical workflow::

    zcompgen generate tree.yaml > ~/.zfunc/_myapp
    zcompgen candidates values.json   # render an on-the-fly candidate stream

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models describing command trees and candidates.
    generator: Shell completion code generators (Zsh).
    candidates: Providers deciding how each option/argument completes.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    loader: Load command-tree documents from files, URLs, or stdin.
    request: Parse ``--completion-candidates`` requests.
"""

__version__ = "0.1.0"
