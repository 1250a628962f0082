"""Format the individual pieces of a Zsh completion function.

Every directive shape the Zsh generator emits has one pure function here,
so that each shape's quoting rules are defined (and tested) once:

* :func:`option_trigger` -- ``--name`` or the brace group ``'{--name,-n}'``,
  with a leading ``*`` for repeatable options.
* :func:`boolean_option_spec` / :func:`value_option_spec` -- ``_arguments``
  specs for flags and value-taking options.
* :func:`argument_spec` -- ``<order>:<name>:<action>`` positional specs.
* :func:`sub_command_item` -- ``'name:description'`` entries of the
  ``commands`` array fed to ``_describe``.
* :func:`dispatch_header_specs` / :func:`dispatch_block` -- the two trailing
  ``_arguments`` specs and the ``case`` statement that hand the rest of the
  command line to a sub-command's function.
* :func:`candidates_action` -- the action fragment for a
  :class:`~zcompgen.models.StaticCompletionCandidates` value.
* :func:`candidate_line` -- one ``value:description`` line of an on-the-fly
  candidate stream.

**Quoting rules.** Specs are emitted inside single quotes, so a literal
``'`` becomes ``'\\''``. Option descriptions sit inside ``[...]`` and escape
the brackets. Fields that ``_arguments`` or ``_describe`` split on colons
(argument names, sub-command names, candidate values) escape ``:`` as
``\\:``; candidate values escape nothing else. Keyword values and the
members of an option's brace group sit outside quotes and backslash-escape
shell metacharacters. ``case`` patterns are single-quoted unless the name
is plain. Newlines never survive: they are folded to spaces.
"""

from __future__ import annotations

import re
from typing import Sequence

from zcompgen.models import (
    CommandArgumentDescriptor,
    CommandDescriptor,
    CommandOptionDescriptor,
    CompletionCandidateResultType,
    CompletionCandidateValue,
    StaticCompletionCandidates,
)

INDENT = "    "

# Matches any character that is not allowed in a function namespace.
_INVALID_NAMESPACE_RE = re.compile(r"[^a-zA-Z0-9_]")

# Characters escaped with a backslash inside a ``(...)`` keyword list.
_KEYWORD_SPECIALS = "\\ ()[]:;|&<>$`\"*?#~"

# Keyword specials plus the brace-group syntax and the quote character.
_BRACE_SPECIALS = _KEYWORD_SPECIALS + "{},'"

# Sub-command names that can stand as a bare `case` pattern.
_PLAIN_PATTERN_RE = re.compile(r"[A-Za-z0-9_.+-]+")


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


def sanitize_namespace(name: str) -> str:
    """Make an application display name safe for use inside function names.

    Every character outside ``[A-Za-z0-9_]`` becomes ``__``.

    Example::

        >>> sanitize_namespace("My App.Cli")
        'My__App__Cli'
    """
    return _INVALID_NAMESPACE_RE.sub("__", name)


def function_name(prefix: str, namespace: str, suffix: str) -> str:
    """Return ``__<prefix>_<namespace>_<suffix>``."""
    return f"__{prefix}_{namespace}_{suffix}"


def command_function_name(prefix: str, namespace: str, path: str) -> str:
    """Return the name of the completion function for the command at *path*.

    *path* is ``root`` for the top node and ``root_<name1>_<name2>...`` for
    descendants. Characters a function name cannot carry are sanitized like
    the namespace.
    """
    return function_name(prefix, namespace, f"commands_{sanitize_namespace(path)}")


# ---------------------------------------------------------------------------
# Escaping
# ---------------------------------------------------------------------------


def fold_newlines(text: str) -> str:
    """Replace line breaks with single spaces."""
    return " ".join(text.splitlines()) if ("\n" in text or "\r" in text) else text


def quote_single(text: str) -> str:
    """Escape *text* for use inside a single-quoted shell word."""
    return text.replace("'", "'\\''")


def escape_colons(text: str) -> str:
    """Backslash-escape colons (and backslashes) in a colon-separated field."""
    return text.replace("\\", "\\\\").replace(":", "\\:")


def escape_description(text: str) -> str:
    """Escape an option description for the ``[...]`` part of a spec."""
    text = fold_newlines(text)
    text = text.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")
    return quote_single(text)


def escape_keyword(value: str) -> str:
    """Escape one value of a ``(v1 v2 ...)`` keyword list."""
    value = fold_newlines(value)
    return "".join(f"\\{c}" if c in _KEYWORD_SPECIALS else c for c in value)


def escape_brace_word(word: str) -> str:
    """Escape one member of an unquoted ``{a,b}`` brace group."""
    return "".join(f"\\{c}" if c in _BRACE_SPECIALS else c for c in fold_newlines(word))


# ---------------------------------------------------------------------------
# Options and arguments
# ---------------------------------------------------------------------------


def option_trigger(option: CommandOptionDescriptor) -> str:
    """Return the trigger part of an option spec.

    Without short aliases this is ``--name``. With aliases it is a
    brace group closed off from the surrounding single quotes, e.g.
    ``'{--target,-t}'``, which the shell expands into one spec per name.
    Repeatable options get a leading ``*``.

    The plain form sits inside the spec's single quotes; the brace members
    do not, so they are backslash-escaped instead.
    """
    star = "*" if option.is_enumerable_like else ""
    if option.short_name:
        names = [f"--{option.name}", *(f"-{s}" for s in option.short_name)]
        group = ",".join(escape_brace_word(n) for n in names)
        return f"{star}'{{{group}}}'"
    return f"{star}--{quote_single(option.name)}"


def boolean_option_spec(option: CommandOptionDescriptor) -> str:
    """``'--name[description]'`` for a flag."""
    return f"'{option_trigger(option)}[{escape_description(option.description)}]'"


def value_option_spec(option: CommandOptionDescriptor, action: str) -> str:
    """``'--name[description]: :<action>'`` for an option taking a value."""
    return (
        f"'{option_trigger(option)}[{escape_description(option.description)}]"
        f": :{quote_single(action)}'"
    )


def option_spec(option: CommandOptionDescriptor, action: str | None) -> str:
    """Dispatch to :func:`boolean_option_spec` or :func:`value_option_spec`.

    *action* is ignored for boolean options.
    """
    if option.is_boolean:
        return boolean_option_spec(option)
    return value_option_spec(option, action or "_files")


def argument_spec(argument: CommandArgumentDescriptor, action: str) -> str:
    """``'<order>:<name>:<action>'`` for a positional argument."""
    name = quote_single(escape_colons(fold_newlines(argument.name)))
    return f"'{argument.order}:{name}:{quote_single(action)}'"


# ---------------------------------------------------------------------------
# Candidate actions
# ---------------------------------------------------------------------------


def on_the_fly_action(helper_name: str, context: str) -> str:
    """Action that runs the on-the-fly helper with *context* as its argument.

    The leading space makes ``_arguments`` call the words unchanged instead
    of treating them as a list of matches (see "actions" in zshcompsys(1)).
    """
    return f" {helper_name} {context}"


def keywords_action(values: Sequence[CompletionCandidateValue]) -> str:
    """``(v1 v2 ...)`` -- descriptions are not shown in this form."""
    return "(" + " ".join(escape_keyword(v.value) for v in values) + ")"


def candidates_action(
    candidates: StaticCompletionCandidates,
    context: str,
    helper_name: str,
) -> str:
    """Map *candidates* to the action fragment placed after ``: :``.

    ============================  =========================================
    candidates                    action
    ============================  =========================================
    on-the-fly                    `` <helper_name> <context>``
    ``default`` / ``file``        ``_files``
    ``directory``                 ``_path_files -/``
    ``keywords``                  ``(v1 v2 ...)``
    anything else                 ``_files``
    ============================  =========================================
    """
    if candidates.is_on_the_fly:
        return on_the_fly_action(helper_name, context)

    result = candidates.result
    if result is None:
        return "_files"
    if result.result_type == CompletionCandidateResultType.DIRECTORY:
        return "_path_files -/"
    if result.result_type == CompletionCandidateResultType.KEYWORDS:
        return keywords_action(result.values)
    return "_files"


# ---------------------------------------------------------------------------
# Sub-command list and dispatch
# ---------------------------------------------------------------------------


def sub_command_item(command: CommandDescriptor) -> str:
    """``'name:description'`` entry of the ``commands`` array."""
    name = quote_single(escape_colons(command.name))
    return f"'{name}:{quote_single(fold_newlines(command.description))}'"


def dispatch_header_specs() -> list[str]:
    """The two specs closing an ``_arguments`` call on a node with sub-commands.

    Position 1 completes a sub-command name from the ``commands`` array;
    everything after it is captured into the ``args`` state.
    """
    return [
        "\"1: :{_describe 'command' commands}\"",
        "'*:: :->args'",
    ]


def case_pattern(name: str) -> str:
    """Return *name* as a ``case`` pattern matching only itself."""
    if _PLAIN_PATTERN_RE.fullmatch(name):
        return name
    return f"'{quote_single(name)}'"


def dispatch_block(
    sub_commands: Sequence[CommandDescriptor],
    function_for: dict[str, str],
    indent: str = INDENT,
) -> list[str]:
    """Return the ``case`` statement delegating to each sub-command's function.

    Args:
        sub_commands: The visible sub-commands, in declaration order.
        function_for: Mapping from sub-command name to its function name.
        indent: Indentation of the outer ``case`` line.
    """
    lines = [
        f"{indent}case $state in",
        f"{indent}    args)",
        f"{indent}        case $words[1] in",
    ]
    for command in sub_commands:
        pattern = case_pattern(command.name)
        lines.append(f"{indent}            {pattern}) {function_for[command.name]};;")
    lines.extend([
        f"{indent}        esac",
        f"{indent}        ;;",
        f"{indent}esac",
    ])
    return lines


# ---------------------------------------------------------------------------
# Candidate stream
# ---------------------------------------------------------------------------


def candidate_line(candidate: CompletionCandidateValue) -> str:
    """``<value>:<description>`` as parsed back by ``_describe``.

    Only colons in the value are escaped (``\\:``); ``_describe`` splits
    each line on the first unescaped colon. Every other character of the
    value, and the whole description, is written as is.
    """
    value = fold_newlines(candidate.value).replace(":", "\\:")
    return f"{value}:{fold_newlines(candidate.description)}"
