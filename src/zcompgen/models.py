"""Canonical Pydantic models shared across all zcompgen modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`GeneratorConfig`, :class:`OutputConfig`, and :class:`GlobalConfig`.

**Command-tree models** -- built by whoever describes the application (a
tree document on disk, or Python code) and consumed read-only by the
generators:
    :class:`CompletionCandidateResultType`, :class:`CompletionCandidateValue`,
    :class:`CompletionCandidateResult`, :class:`StaticCompletionCandidates`,
    :class:`CompletionHint`, :class:`OptionValueKind`,
    :class:`CommandOptionDescriptor`, :class:`CommandArgumentDescriptor`,
    :class:`CommandDescriptor`, :class:`CommandCollection`,
    :class:`ApplicationMetadata`, and :class:`CommandTreeDocument`.

All models use Pydantic v2. Generators never mutate a tree; the models are
plain records so that a tree can be built once and rendered any number of
times.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# --- Configuration ---


# First component of generated function names (`__cocona_<ns>_commands_root`).
DEFAULT_FUNCTION_PREFIX = "cocona"


class GeneratorConfig(BaseModel):
    """Script generation settings stored in :class:`GlobalConfig`."""

    function_prefix: str = Field(
        default=DEFAULT_FUNCTION_PREFIX,
        description="Prefix of every generated shell function name",
    )
    attribution: bool = Field(
        default=True, description="Emit the 'Generated by' comment block"
    )


class OutputConfig(BaseModel):
    """Diagnostic output preferences stored in :class:`GlobalConfig`."""

    no_color: bool = Field(default=False, description="Disable colour output")


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/zcompgen/config.json``.

    Loaded and saved by :func:`~zcompgen.config.load_global_config` and
    :func:`~zcompgen.config.save_global_config`. Fields here have the
    lowest precedence and can be overridden by project config, environment
    variables, or CLI flags. See :func:`~zcompgen.config.resolve_config`
    for the full precedence chain.
    """

    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


# --- Completion candidates ---


class CompletionCandidateResultType(str, enum.Enum):
    """How the shell should complete a value when candidates are static.

    ``DEFAULT`` and ``FILE`` both complete filesystem entries, ``DIRECTORY``
    completes directories only, and ``KEYWORDS`` offers a fixed list.
    """

    DEFAULT = "default"
    FILE = "file"
    DIRECTORY = "directory"
    KEYWORDS = "keywords"


class CompletionCandidateValue(BaseModel):
    """A single completion candidate: the value inserted plus its description.

    A bare string is accepted wherever a candidate is expected and becomes a
    value with an empty description.
    """

    value: str
    description: str = ""

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"value": data}
        return data


class CompletionCandidateResult(BaseModel):
    """Resolved static candidates: a result kind and, for keywords, the values."""

    result_type: CompletionCandidateResultType = CompletionCandidateResultType.DEFAULT
    values: list[CompletionCandidateValue] = Field(default_factory=list)

    @classmethod
    def default(cls) -> CompletionCandidateResult:
        return cls(result_type=CompletionCandidateResultType.DEFAULT)

    @classmethod
    def file(cls) -> CompletionCandidateResult:
        return cls(result_type=CompletionCandidateResultType.FILE)

    @classmethod
    def directory(cls) -> CompletionCandidateResult:
        return cls(result_type=CompletionCandidateResultType.DIRECTORY)

    @classmethod
    def keywords(cls, values: list[Any]) -> CompletionCandidateResult:
        """Build a keyword result from strings or :class:`CompletionCandidateValue` items."""
        return cls(result_type=CompletionCandidateResultType.KEYWORDS, values=values)


class StaticCompletionCandidates(BaseModel):
    """Candidates for one option or argument, as known at generation time.

    Either the candidates must be fetched at completion time by re-invoking
    the executable (``is_on_the_fly``), or ``result`` carries what the shell
    can complete on its own. Use :meth:`on_the_fly` and :meth:`from_result`
    rather than the constructor.
    """

    is_on_the_fly: bool = False
    result: Optional[CompletionCandidateResult] = None

    @model_validator(mode="after")
    def _check_variant(self) -> StaticCompletionCandidates:
        if not self.is_on_the_fly and self.result is None:
            raise ValueError("static candidates require a result")
        return self

    @classmethod
    def on_the_fly(cls) -> StaticCompletionCandidates:
        return cls(is_on_the_fly=True)

    @classmethod
    def from_result(cls, result: CompletionCandidateResult) -> StaticCompletionCandidates:
        return cls(result=result)


_HINT_KINDS = ("default", "file", "directory", "keywords", "onthefly")


class CompletionHint(BaseModel):
    """Completion hint attached to an option or argument in a tree document.

    Accepts a shorthand string (``"onthefly"``, ``"file"``, ``"directory"``,
    ``"default"``) or a mapping ``{"keywords": [...]}`` whose items are
    strings or ``{value, description}`` objects::

        completion: onthefly
        completion: {keywords: [debug, release]}
    """

    kind: str = "default"
    keywords: list[CompletionCandidateValue] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_shorthand(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"kind": data}
        if isinstance(data, dict) and "keywords" in data and "kind" not in data:
            return {"kind": "keywords", **data}
        return data

    @field_validator("kind")
    @classmethod
    def _check_kind(cls, value: str) -> str:
        normalized = value.lower().replace("-", "").replace("_", "")
        if normalized not in _HINT_KINDS:
            raise ValueError(
                f"unknown completion kind {value!r}; expected one of {', '.join(_HINT_KINDS)}"
            )
        return normalized

    def to_candidates(self) -> StaticCompletionCandidates:
        """Convert the hint into the :class:`StaticCompletionCandidates` it describes."""
        if self.kind == "onthefly":
            return StaticCompletionCandidates.on_the_fly()
        if self.kind == "keywords":
            return StaticCompletionCandidates.from_result(
                CompletionCandidateResult.keywords(self.keywords)
            )
        return StaticCompletionCandidates.from_result(
            CompletionCandidateResult(result_type=CompletionCandidateResultType(self.kind))
        )


# --- Command tree ---


class OptionValueKind(str, enum.Enum):
    """Whether an option is a flag or takes a value."""

    BOOLEAN = "boolean"
    VALUE = "value"


class CommandOptionDescriptor(BaseModel):
    """A named option (``--name`` plus optional single-character aliases).

    Boolean options are flags and never take a value; value options are
    followed by an argument whose candidates come from the candidates
    provider. ``is_enumerable_like`` marks options that may be repeated.
    """

    name: str
    short_name: list[str] = Field(default_factory=list)
    description: str = ""
    value_kind: OptionValueKind = OptionValueKind.BOOLEAN
    is_enumerable_like: bool = False
    is_hidden: bool = False
    completion: Optional[CompletionHint] = None

    @field_validator("short_name", mode="before")
    @classmethod
    def _coerce_short_name(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("short_name")
    @classmethod
    def _check_short_name(cls, value: list[str]) -> list[str]:
        for alias in value:
            if len(alias) != 1:
                raise ValueError(f"short option alias must be one character, got {alias!r}")
        return value

    @property
    def is_boolean(self) -> bool:
        return self.value_kind == OptionValueKind.BOOLEAN


class CommandArgumentDescriptor(BaseModel):
    """A positional argument bound by its 1-based ``order``."""

    name: str
    order: int = Field(ge=1, description="1-based position among positional arguments")
    description: str = ""
    completion: Optional[CompletionHint] = None


class CommandDescriptor(BaseModel):
    """One node of the command tree.

    The primary command is invoked when no sub-command name is given, so it
    is never offered as a sub-command; its options and arguments belong to
    the enclosing node instead. Hidden commands are left out of completion
    entirely.
    """

    name: str
    description: str = ""
    is_hidden: bool = False
    is_primary_command: bool = False
    sub_commands: Optional[CommandCollection] = None
    options: list[CommandOptionDescriptor] = Field(default_factory=list)
    arguments: list[CommandArgumentDescriptor] = Field(default_factory=list)

    def visible_sub_commands(self) -> list[CommandDescriptor]:
        """Return the sub-commands offered for completion (neither hidden nor primary)."""
        if self.sub_commands is None:
            return []
        return self.sub_commands.visible()


class CommandCollection(BaseModel):
    """An ordered set of sibling commands plus the optional primary command.

    When ``primary`` is not given explicitly, the first command in ``all``
    flagged ``is_primary_command`` is used. A bare list validates as the
    ``all`` field, so documents can write ``sub_commands: [...]``.
    """

    model_config = ConfigDict(populate_by_name=True)

    all: list[CommandDescriptor] = Field(default_factory=list, alias="commands")
    primary: Optional[CommandDescriptor] = None

    @model_validator(mode="before")
    @classmethod
    def _accept_list(cls, data: Any) -> Any:
        if isinstance(data, list):
            return {"all": data}
        return data

    @model_validator(mode="after")
    def _resolve_primary(self) -> CommandCollection:
        if self.primary is None:
            self.primary = next((c for c in self.all if c.is_primary_command), None)
        return self

    def visible(self) -> list[CommandDescriptor]:
        """Return the commands offered for completion (neither hidden nor primary)."""
        return [c for c in self.all if not c.is_hidden and not c.is_primary_command]


CommandDescriptor.model_rebuild()


class ApplicationMetadata(BaseModel):
    """Names of the application the script is generated for.

    ``product_name`` is the display name and only feeds the function
    namespace; ``executable_name`` is what users type and is used verbatim.
    """

    product_name: str
    executable_name: str


class CommandTreeDocument(BaseModel):
    """A command tree as stored on disk: application names plus the root collection.

    Example (YAML)::

        application:
          product_name: My App
          executable_name: myapp
        commands:
          - name: build
            options:
              - {name: target, short_name: t, value_kind: value, completion: onthefly}
    """

    application: ApplicationMetadata
    commands: CommandCollection = Field(default_factory=CommandCollection)
