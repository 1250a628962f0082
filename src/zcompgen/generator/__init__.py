"""Shell completion code generators.

This sub-package turns a :class:`~zcompgen.models.CommandCollection` into a
completion script, and renders the candidate streams that script reads back
when it completes values on the fly.

Typical usage::

    from zcompgen.generator import get_generator
    from zcompgen.models import ApplicationMetadata

    generator = get_generator("zsh", ApplicationMetadata(
        product_name="My App", executable_name="myapp",
    ))
    generator.generate(sys.stdout, collection)

Sub-modules:

* :mod:`~zcompgen.generator.base` -- The abstract
  :class:`ShellCompletionCodeGenerator` interface.
* :mod:`~zcompgen.generator.specs` -- Pure formatting functions, one per
  directive shape, with their quoting rules.
* :mod:`~zcompgen.generator.zsh` -- The tree walk producing Zsh functions.
"""

from __future__ import annotations

from typing import Any

from zcompgen.exceptions import UnsupportedShellError
from zcompgen.generator.base import ShellCompletionCodeGenerator
from zcompgen.generator.zsh import ZshCompletionCodeGenerator
from zcompgen.models import ApplicationMetadata

GENERATORS: dict[str, type[ShellCompletionCodeGenerator]] = {
    target: cls
    for cls in (ZshCompletionCodeGenerator,)
    for target in cls.targets
}
"""Generator classes keyed by shell name."""

SUPPORTED_SHELLS = tuple(sorted(GENERATORS))


def get_generator(
    shell: str,
    metadata: ApplicationMetadata,
    **kwargs: Any,
) -> ShellCompletionCodeGenerator:
    """Instantiate the generator registered for *shell*.

    Args:
        shell: Shell name, case-insensitive (e.g. ``"zsh"``).
        metadata: Application names passed to the generator.
        **kwargs: Extra generator options (``candidates``,
            ``function_prefix``, ``attribution``).

    Raises:
        UnsupportedShellError: If no generator targets *shell*.
    """
    cls = GENERATORS.get(shell.lower())
    if cls is None:
        raise UnsupportedShellError(
            f"Unsupported shell: {shell}. Supported: {', '.join(SUPPORTED_SHELLS)}"
        )
    return cls(metadata, **kwargs)


__all__ = [
    "GENERATORS",
    "SUPPORTED_SHELLS",
    "ShellCompletionCodeGenerator",
    "ZshCompletionCodeGenerator",
    "get_generator",
]
