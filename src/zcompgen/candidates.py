"""Resolve which completion candidates an option or argument offers.

Generators never decide what a value may be; they ask a
:class:`CompletionCandidatesProvider`. Applications that know their own
types (an enum-typed option, a ``Path`` argument, ...) implement the two
methods themselves. :class:`DescriptorCandidatesProvider` is the provider
used for tree documents: it reads the ``completion`` hint attached to each
descriptor and falls back to filesystem completion.
"""

from __future__ import annotations

import abc

from zcompgen.models import (
    CommandArgumentDescriptor,
    CommandOptionDescriptor,
    CompletionCandidateResult,
    CompletionHint,
    StaticCompletionCandidates,
)


class CompletionCandidatesProvider(abc.ABC):
    """Source of :class:`~zcompgen.models.StaticCompletionCandidates` per descriptor."""

    @abc.abstractmethod
    def get_static_candidates_from_option(
        self, option: CommandOptionDescriptor
    ) -> StaticCompletionCandidates:
        """Return the candidates for the value of *option*."""

    @abc.abstractmethod
    def get_static_candidates_from_argument(
        self, argument: CommandArgumentDescriptor
    ) -> StaticCompletionCandidates:
        """Return the candidates for the positional *argument*."""


class DescriptorCandidatesProvider(CompletionCandidatesProvider):
    """Read candidates from the ``completion`` hint on each descriptor.

    Descriptors without a hint complete filesystem entries
    (:attr:`~zcompgen.models.CompletionCandidateResultType.DEFAULT`).
    """

    def get_static_candidates_from_option(
        self, option: CommandOptionDescriptor
    ) -> StaticCompletionCandidates:
        return self._from_hint(option.completion)

    def get_static_candidates_from_argument(
        self, argument: CommandArgumentDescriptor
    ) -> StaticCompletionCandidates:
        return self._from_hint(argument.completion)

    @staticmethod
    def _from_hint(hint: CompletionHint | None) -> StaticCompletionCandidates:
        if hint is None:
            return StaticCompletionCandidates.from_result(CompletionCandidateResult.default())
        return hint.to_candidates()
