"""Generate Zsh completion scripts from a command tree.

This is the core algorithm of zcompgen. It walks a
:class:`~zcompgen.models.CommandCollection` and writes one shell function
per visible command node, each calling ``_arguments`` with the node's own
option and argument specs and, when the node has sub-commands, dispatching
the rest of the command line to the matching child function.

**Script layout**

1. Header: ``#!/bin/zsh``, ``#compdef <command>``, attribution comment.
2. ``__<prefix>_<ns>_commands_root`` and, pre-order, one
   ``__<prefix>_<ns>_commands_root_<name>...`` function per visible
   sub-command. A child is always written after its parent.
3. ``__<prefix>_<ns>_onthefly`` -- re-invokes the application with
   ``--completion-candidates zsh:<context>`` and the current words, and
   hands the ``value:description`` lines it prints to ``_describe``.
4. ``_<command>`` entry function and a trailing ``#compdef`` binding.

``<ns>`` is the application's display name with every character outside
``[A-Za-z0-9_]`` replaced by ``__``, so scripts of several applications can
be loaded side by side.
"""

from __future__ import annotations

from typing import Sequence, TextIO

from zcompgen.candidates import CompletionCandidatesProvider
from zcompgen.generator import specs
from zcompgen.generator.base import ShellCompletionCodeGenerator
from zcompgen.models import (
    DEFAULT_FUNCTION_PREFIX,
    ApplicationMetadata,
    CommandArgumentDescriptor,
    CommandCollection,
    CommandDescriptor,
    CommandOptionDescriptor,
    CompletionCandidateValue,
)

_INDENT = specs.INDENT
_SPEC_INDENT = _INDENT * 2


class ZshCompletionCodeGenerator(ShellCompletionCodeGenerator):
    """Generate the shell completion code for Zsh.

    The namespace and invocation name are derived once, at construction;
    :meth:`generate` keeps no other state and can be called repeatedly.

    Args:
        metadata: Display name (namespacing) and executable name (used
            verbatim in ``#compdef`` and the entry function name).
        candidates: Provider of static candidates per option/argument.
        function_prefix: First component of every generated function name.
        attribution: Write the "Generated by" comment block in the header.

    Example::

        generator = ZshCompletionCodeGenerator(
            ApplicationMetadata(product_name="My App", executable_name="myapp"),
        )
        generator.generate(sys.stdout, collection)
    """

    targets = ("zsh",)

    def __init__(
        self,
        metadata: ApplicationMetadata,
        candidates: CompletionCandidatesProvider | None = None,
        *,
        function_prefix: str = DEFAULT_FUNCTION_PREFIX,
        attribution: bool = True,
    ) -> None:
        super().__init__(metadata, candidates)
        self.app_name = specs.sanitize_namespace(metadata.product_name)
        self.app_command_name = metadata.executable_name
        self.function_prefix = specs.sanitize_namespace(function_prefix)
        self.attribution = attribution

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    @property
    def on_the_fly_function(self) -> str:
        """Name of the helper fetching on-the-fly candidates."""
        return specs.function_name(self.function_prefix, self.app_name, "onthefly")

    def command_function(self, path: str) -> str:
        """Name of the completion function for the node at *path* (``root``, ``root_build``, ...)."""
        return specs.command_function_name(self.function_prefix, self.app_name, path)

    def generate(self, writer: TextIO, collection: CommandCollection) -> None:
        """Write a complete completion script for *collection* to *writer*.

        Args:
            writer: Any text sink with a ``write`` method.
            collection: The root command collection. Its primary command (if
                any) supplies the root function's options and arguments.
        """
        _write(writer, "#!/bin/zsh")
        _write(writer, f"#compdef {self.app_command_name}")
        if self.attribution:
            _write(writer, "# ")
            _write(writer, f"# Generated by zcompgen {type(self).__name__}")
            _write(writer, "# ")
        _write(writer)

        self._write_root_command_definition(writer, collection)

        root = self.command_function("root")
        _write(writer, f"{self.on_the_fly_function}() {{")
        _write(
            writer,
            f'{_INDENT}local -a items; items=(${{(f)"$("${{exec_command}}" '
            f'--completion-candidates "zsh:$1" "${{words[@]}}")"}})',
        )
        _write(writer, f"{_INDENT}_describe 'items' items")
        _write(writer, "}")
        _write(writer)

        entry = f"_{self.app_command_name}"
        _write(writer, f"{entry}() {{")
        _write(writer, f"{_INDENT}{root}")
        _write(writer, "}")
        _write(writer, f"#compdef {entry} '{specs.quote_single(self.app_command_name)}'")

    def generate_on_the_fly_candidates(
        self, writer: TextIO, values: Sequence[CompletionCandidateValue]
    ) -> None:
        """Write one ``value:description`` line per candidate, in order.

        An empty *values* writes nothing; the helper function then offers
        no completions.
        """
        for value in values:
            _write(writer, specs.candidate_line(value))

    def candidate_spec(
        self,
        descriptor: CommandOptionDescriptor | CommandArgumentDescriptor,
    ) -> str:
        """Return the action fragment completing the value of *descriptor*."""
        if isinstance(descriptor, CommandOptionDescriptor):
            candidates = self.candidates.get_static_candidates_from_option(descriptor)
        else:
            candidates = self.candidates.get_static_candidates_from_argument(descriptor)
        return specs.candidates_action(candidates, descriptor.name, self.on_the_fly_function)

    def argument_specs(
        self,
        command: CommandDescriptor | None,
        sub_commands: Sequence[CommandDescriptor],
    ) -> list[str]:
        """Return the ``_arguments`` specs for *command*, in emission order.

        Visible options come first in declaration order, then positional
        arguments by ``order``, then -- when *sub_commands* is non-empty --
        the two dispatch specs.
        """
        result: list[str] = []
        if command is not None:
            for option in command.options:
                if option.is_hidden:
                    continue
                action = None if option.is_boolean else self.candidate_spec(option)
                result.append(specs.option_spec(option, action))
            for argument in sorted(command.arguments, key=lambda a: a.order):
                result.append(specs.argument_spec(argument, self.candidate_spec(argument)))
        if sub_commands:
            result.extend(specs.dispatch_header_specs())
        return result

    # ------------------------------------------------------------------ #
    # Tree walk
    # ------------------------------------------------------------------ #

    def _write_root_command_definition(
        self, writer: TextIO, collection: CommandCollection
    ) -> None:
        sub_commands = collection.visible()

        _write(writer, f"{self.command_function('root')}() {{")
        _write(writer, f'{_INDENT}local exec_command; exec_command="${{words[1]}}"')
        self._write_zsh_arguments(writer, "root", collection.primary, sub_commands)
        _write(writer, "}")
        _write(writer)

        for sub_command in sub_commands:
            self._write_command_definition(writer, f"root_{sub_command.name}", sub_command)

    def _write_command_definition(
        self, writer: TextIO, path: str, command: CommandDescriptor
    ) -> None:
        sub_commands = command.visible_sub_commands()

        _write(writer, f"{self.command_function(path)}() {{")
        self._write_zsh_arguments(writer, path, command, sub_commands)
        _write(writer, "}")
        _write(writer)

        for sub_command in sub_commands:
            self._write_command_definition(writer, f"{path}_{sub_command.name}", sub_command)

    def _write_zsh_arguments(
        self,
        writer: TextIO,
        path: str,
        command: CommandDescriptor | None,
        sub_commands: Sequence[CommandDescriptor],
    ) -> None:
        _write(writer, f"{_INDENT}local -a commands")
        _write(writer, f"{_INDENT}commands=(")
        for sub_command in sub_commands:
            _write(writer, f"{_SPEC_INDENT}{specs.sub_command_item(sub_command)}")
        _write(writer, f"{_INDENT})")

        arg_specs = self.argument_specs(command, sub_commands)
        _write(writer, f"{_INDENT}_arguments -n -s : \\")
        if not sub_commands:
            for spec in arg_specs:
                _write(writer, f"{_SPEC_INDENT}{spec} \\")
            # Terminates the line continuation.
            _write(writer, f"{_SPEC_INDENT}#")
            return

        for spec in arg_specs[:-1]:
            _write(writer, f"{_SPEC_INDENT}{spec} \\")
        _write(writer, f"{_SPEC_INDENT}{arg_specs[-1]}")
        _write(writer)
        function_for = {
            c.name: self.command_function(f"{path}_{c.name}") for c in sub_commands
        }
        for line in specs.dispatch_block(sub_commands, function_for, _SPEC_INDENT):
            _write(writer, line)


def _write(writer: TextIO, text: str = "") -> None:
    writer.write(text + "\n")
