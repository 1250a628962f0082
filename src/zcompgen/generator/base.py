"""Interface shared by shell completion code generators."""

from __future__ import annotations

import abc
import io
from typing import ClassVar, Sequence, TextIO

from zcompgen.candidates import CompletionCandidatesProvider, DescriptorCandidatesProvider
from zcompgen.models import ApplicationMetadata, CommandCollection, CompletionCandidateValue


class ShellCompletionCodeGenerator(abc.ABC):
    """Generate a completion script and on-the-fly candidate streams for one shell.

    Args:
        metadata: Display and invocation names of the application.
        candidates: Provider of static candidates per option/argument.
            Defaults to :class:`~zcompgen.candidates.DescriptorCandidatesProvider`.
    """

    targets: ClassVar[Sequence[str]] = ()
    """Shell names this generator serves (e.g. ``("zsh",)``)."""

    def __init__(
        self,
        metadata: ApplicationMetadata,
        candidates: CompletionCandidatesProvider | None = None,
    ) -> None:
        self.metadata = metadata
        self.candidates = candidates or DescriptorCandidatesProvider()

    @abc.abstractmethod
    def generate(self, writer: TextIO, collection: CommandCollection) -> None:
        """Write the completion script for *collection* to *writer*."""

    @abc.abstractmethod
    def generate_on_the_fly_candidates(
        self, writer: TextIO, values: Sequence[CompletionCandidateValue]
    ) -> None:
        """Write *values* in the format the generated script parses back."""

    def generate_script(self, collection: CommandCollection) -> str:
        """Return the completion script for *collection* as a string."""
        buf = io.StringIO()
        self.generate(buf, collection)
        return buf.getvalue()

    def render_candidates(self, values: Sequence[CompletionCandidateValue]) -> str:
        """Return the candidate stream for *values* as a string."""
        buf = io.StringIO()
        self.generate_on_the_fly_candidates(buf, values)
        return buf.getvalue()
