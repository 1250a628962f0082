"""Parse the ``--completion-candidates`` requests issued by generated scripts.

The on-the-fly helper in a generated script runs::

    <executable> --completion-candidates zsh:<context> <words...>

where ``<context>`` is the name of the option or argument being completed
and ``<words>`` is the command line as the shell sees it. An application
serving such a request parses it with :meth:`CompletionRequest.parse`,
finds the descriptor being completed with :func:`find_candidates_target`,
computes its candidates (:func:`resolve_request_values` does both for a
tree document), and prints them with
:meth:`~zcompgen.generator.base.ShellCompletionCodeGenerator.generate_on_the_fly_candidates`.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

from pydantic import BaseModel, Field

from zcompgen.candidates import CompletionCandidatesProvider, DescriptorCandidatesProvider
from zcompgen.exceptions import InvalidUsageError
from zcompgen.models import (
    CommandArgumentDescriptor,
    CommandCollection,
    CommandDescriptor,
    CommandOptionDescriptor,
    CompletionCandidateResultType,
    CompletionCandidateValue,
)

CandidatesTarget = Union[CommandOptionDescriptor, CommandArgumentDescriptor]


class CompletionRequest(BaseModel):
    """A parsed ``--completion-candidates <shell>:<context> <words...>`` request."""

    shell: str
    context: str
    words: list[str] = Field(default_factory=list)

    @classmethod
    def parse(cls, target: str, words: Sequence[str] = ()) -> CompletionRequest:
        """Split *target* (``"zsh:name"``) into shell and context.

        Only the first colon separates the two, so the context may itself
        contain colons.

        Raises:
            InvalidUsageError: If *target* has no colon or an empty shell.
        """
        shell, sep, context = target.partition(":")
        if not sep or not shell:
            raise InvalidUsageError(
                f"Invalid completion target {target!r}; expected '<shell>:<context>'"
            )
        return cls(shell=shell.lower(), context=context, words=list(words))


def find_candidates_target(
    collection: CommandCollection,
    request: CompletionRequest,
) -> Optional[CandidatesTarget]:
    """Return the option or argument named by ``request.context``.

    ``request.words[0]`` is the executable and is skipped. The remaining
    words descend the sub-command tree for as long as they name a visible
    sub-command; words starting with ``-`` are ignored. The deepest command
    reached (or the root's primary command) is searched for an option whose
    long name, then an argument whose name, equals the context.

    Returns:
        The matching descriptor, or ``None`` if nothing matches.
    """
    command: Optional[CommandDescriptor] = collection.primary
    children = collection.visible()

    for word in request.words[1:]:
        if word.startswith("-"):
            continue
        match = next((c for c in children if c.name == word), None)
        if match is None:
            break
        command = match
        children = match.visible_sub_commands()

    if command is None:
        return None
    for option in command.options:
        if option.name == request.context:
            return option
    for argument in command.arguments:
        if argument.name == request.context:
            return argument
    return None


def resolve_request_values(
    collection: CommandCollection,
    request: CompletionRequest,
    provider: Optional[CompletionCandidatesProvider] = None,
) -> list[CompletionCandidateValue]:
    """Return the keyword values answering *request* from *collection*.

    Only a fixed keyword list can be answered from a tree document. A target
    that is not found, completes files or directories, or is itself
    on-the-fly yields an empty list, which prints nothing.
    """
    target = find_candidates_target(collection, request)
    if target is None:
        return []

    provider = provider or DescriptorCandidatesProvider()
    if isinstance(target, CommandOptionDescriptor):
        candidates = provider.get_static_candidates_from_option(target)
    else:
        candidates = provider.get_static_candidates_from_argument(target)

    result = candidates.result
    if candidates.is_on_the_fly or result is None:
        return []
    if result.result_type != CompletionCandidateResultType.KEYWORDS:
        return []
    return list(result.values)
