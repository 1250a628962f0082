"""Tests for zcompgen.generator.specs -- one directive shape per function."""

from __future__ import annotations

import pytest

from zcompgen.generator.specs import (
    argument_spec,
    boolean_option_spec,
    candidate_line,
    candidates_action,
    case_pattern,
    command_function_name,
    dispatch_block,
    dispatch_header_specs,
    escape_brace_word,
    escape_colons,
    escape_description,
    escape_keyword,
    fold_newlines,
    function_name,
    option_spec,
    option_trigger,
    quote_single,
    sanitize_namespace,
    sub_command_item,
    value_option_spec,
)
from zcompgen.models import (
    CommandArgumentDescriptor,
    CommandDescriptor,
    CommandOptionDescriptor,
    CompletionCandidateResult,
    CompletionCandidateValue,
    OptionValueKind,
    StaticCompletionCandidates,
)


def _option(name: str = "verbose", **kwargs) -> CommandOptionDescriptor:
    return CommandOptionDescriptor(name=name, **kwargs)


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


class TestNaming:
    """Test function-name construction and namespace sanitization."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("myapp", "myapp"),
            ("My App", "My__App"),
            ("my-app.cli", "my__app__cli"),
            ("snake_case_9", "snake_case_9"),
        ],
    )
    def test_sanitize_namespace(self, name: str, expected: str) -> None:
        assert sanitize_namespace(name) == expected

    def test_function_name(self) -> None:
        assert function_name("zcompgen", "myapp", "onthefly") == "__zcompgen_myapp_onthefly"

    def test_command_function_name(self) -> None:
        assert (
            command_function_name("zcompgen", "myapp", "root_build")
            == "__zcompgen_myapp_commands_root_build"
        )

    def test_command_function_name_sanitizes_path(self) -> None:
        assert (
            command_function_name("cocona", "myapp", "root_x)y")
            == "__cocona_myapp_commands_root_x__y"
        )


# ---------------------------------------------------------------------------
# Escaping
# ---------------------------------------------------------------------------


class TestEscaping:
    def test_fold_newlines(self) -> None:
        assert fold_newlines("one\ntwo\r\nthree") == "one two three"

    def test_fold_newlines_leaves_single_line_alone(self) -> None:
        assert fold_newlines("  padded  ") == "  padded  "

    def test_quote_single(self) -> None:
        assert quote_single("it's") == "it'\\''s"

    def test_escape_colons(self) -> None:
        assert escape_colons("host:port") == "host\\:port"

    def test_escape_colons_escapes_backslash_first(self) -> None:
        assert escape_colons("a\\:b") == "a\\\\\\:b"

    def test_escape_description_brackets_and_quotes(self) -> None:
        assert escape_description("[x] it's\nfine") == "\\[x\\] it'\\''s fine"

    def test_escape_description_keeps_colons(self) -> None:
        assert escape_description("key: value") == "key: value"

    def test_escape_keyword(self) -> None:
        assert escape_keyword("two words") == "two\\ words"
        assert escape_keyword("a(b)") == "a\\(b\\)"
        assert escape_keyword("plain") == "plain"

    def test_escape_brace_word(self) -> None:
        assert escape_brace_word("--a,b") == "--a\\,b"
        assert escape_brace_word("--it's") == "--it\\'s"
        assert escape_brace_word("--{x}") == "--\\{x\\}"
        assert escape_brace_word("--plain-name") == "--plain-name"


# ---------------------------------------------------------------------------
# Options and arguments
# ---------------------------------------------------------------------------


class TestOptionTrigger:
    def test_long_name_only(self) -> None:
        assert option_trigger(_option()) == "--verbose"

    def test_brace_group_with_short_name(self) -> None:
        assert option_trigger(_option("target", short_name=["t"])) == "'{--target,-t}'"

    def test_multiple_short_names(self) -> None:
        assert option_trigger(_option("force", short_name=["f", "F"])) == "'{--force,-f,-F}'"

    def test_repeatable_gets_star(self) -> None:
        assert option_trigger(_option("define", is_enumerable_like=True)) == "*--define"

    def test_repeatable_with_short_name(self) -> None:
        option = _option("define", short_name=["D"], is_enumerable_like=True)
        assert option_trigger(option) == "*'{--define,-D}'"

    def test_long_name_is_single_quote_safe(self) -> None:
        assert option_trigger(_option("it's")) == "--it'\\''s"
        assert boolean_option_spec(_option("it's")) == "'--it'\\''s[]'"

    def test_brace_members_are_escaped(self) -> None:
        assert option_trigger(_option("a,b", short_name=["x"])) == "'{--a\\,b,-x}'"
        assert option_trigger(_option("it's", short_name=["i"])) == "'{--it\\'s,-i}'"


class TestOptionSpecs:
    def test_boolean_option(self) -> None:
        option = _option(description="Verbose output")
        assert boolean_option_spec(option) == "'--verbose[Verbose output]'"

    def test_boolean_option_empty_description(self) -> None:
        assert boolean_option_spec(_option()) == "'--verbose[]'"

    def test_value_option(self) -> None:
        option = _option(
            "target",
            short_name=["t"],
            description="Target",
            value_kind=OptionValueKind.VALUE,
        )
        assert (
            value_option_spec(option, " __zcompgen_x_onthefly target")
            == "''{--target,-t}'[Target]: : __zcompgen_x_onthefly target'"
        )

    def test_value_option_quotes_action(self) -> None:
        option = _option("mode", value_kind=OptionValueKind.VALUE)
        assert value_option_spec(option, "(it's)") == "'--mode[]: :(it'\\''s)'"

    def test_option_spec_ignores_action_for_boolean(self) -> None:
        assert option_spec(_option(), "_files") == "'--verbose[]'"

    def test_option_spec_defaults_value_action_to_files(self) -> None:
        option = _option("out", value_kind=OptionValueKind.VALUE)
        assert option_spec(option, None) == "'--out[]: :_files'"


class TestArgumentSpec:
    def test_basic(self) -> None:
        argument = CommandArgumentDescriptor(name="path", order=1)
        assert argument_spec(argument, "_files") == "'1:path:_files'"

    def test_colon_in_name_is_escaped(self) -> None:
        argument = CommandArgumentDescriptor(name="host:port", order=2)
        assert argument_spec(argument, "_files") == "'2:host\\:port:_files'"


# ---------------------------------------------------------------------------
# Candidate actions
# ---------------------------------------------------------------------------


class TestCandidatesAction:
    HELPER = "__zcompgen_myapp_onthefly"

    def test_on_the_fly(self) -> None:
        action = candidates_action(StaticCompletionCandidates.on_the_fly(), "target", self.HELPER)
        assert action == " __zcompgen_myapp_onthefly target"

    @pytest.mark.parametrize(
        "result, expected",
        [
            (CompletionCandidateResult.default(), "_files"),
            (CompletionCandidateResult.file(), "_files"),
            (CompletionCandidateResult.directory(), "_path_files -/"),
        ],
    )
    def test_static_kinds(self, result: CompletionCandidateResult, expected: str) -> None:
        candidates = StaticCompletionCandidates.from_result(result)
        assert candidates_action(candidates, "x", self.HELPER) == expected

    def test_keywords(self) -> None:
        candidates = StaticCompletionCandidates.from_result(
            CompletionCandidateResult.keywords(["debug", "release"])
        )
        assert candidates_action(candidates, "x", self.HELPER) == "(debug release)"

    def test_empty_keywords(self) -> None:
        candidates = StaticCompletionCandidates.from_result(CompletionCandidateResult.keywords([]))
        assert candidates_action(candidates, "x", self.HELPER) == "()"


# ---------------------------------------------------------------------------
# Sub-commands and dispatch
# ---------------------------------------------------------------------------


class TestDispatch:
    def test_sub_command_item(self) -> None:
        command = CommandDescriptor(name="build", description="Build it")
        assert sub_command_item(command) == "'build:Build it'"

    def test_sub_command_item_escapes(self) -> None:
        command = CommandDescriptor(name="a:b", description="it's\nhere")
        assert sub_command_item(command) == "'a\\:b:it'\\''s here'"

    def test_dispatch_header_specs(self) -> None:
        assert dispatch_header_specs() == [
            "\"1: :{_describe 'command' commands}\"",
            "'*:: :->args'",
        ]

    def test_dispatch_block(self) -> None:
        commands = [CommandDescriptor(name="build"), CommandDescriptor(name="test")]
        lines = dispatch_block(commands, {"build": "f_build", "test": "f_test"}, indent="")
        assert lines == [
            "case $state in",
            "    args)",
            "        case $words[1] in",
            "            build) f_build;;",
            "            test) f_test;;",
            "        esac",
            "        ;;",
            "esac",
        ]

    @pytest.mark.parametrize(
        "name, arm",
        [
            ("a b", "'a b') f;;"),
            ("x)y", "'x)y') f;;"),
            ("*", "'*') f;;"),
            ("it's", "'it'\\''s') f;;"),
        ],
    )
    def test_case_patterns_are_quoted(self, name: str, arm: str) -> None:
        lines = dispatch_block([CommandDescriptor(name=name)], {name: "f"}, indent="")
        assert lines[3] == f"            {arm}"

    @pytest.mark.parametrize("name", ["build", "sub-cmd", "v1.2", "a_b"])
    def test_plain_case_pattern_is_bare(self, name: str) -> None:
        assert case_pattern(name) == name

    @pytest.mark.parametrize("name", ["", "a|b", "[ab]", "?"])
    def test_glob_case_pattern_is_quoted(self, name: str) -> None:
        assert case_pattern(name) == f"'{name}'"

    def test_dispatch_block_indent(self) -> None:
        lines = dispatch_block([CommandDescriptor(name="a")], {"a": "f"}, indent="  ")
        assert all(line.startswith("  ") for line in lines)


# ---------------------------------------------------------------------------
# Candidate stream
# ---------------------------------------------------------------------------


class TestCandidateLine:
    def test_value_and_description(self) -> None:
        value = CompletionCandidateValue(value="debug", description="Debug build")
        assert candidate_line(value) == "debug:Debug build"

    def test_empty_description(self) -> None:
        assert candidate_line(CompletionCandidateValue(value="x")) == "x:"

    def test_colon_in_value_is_escaped(self) -> None:
        assert candidate_line(CompletionCandidateValue(value="host:arm64")) == "host\\:arm64:"

    def test_backslash_in_value_is_kept(self) -> None:
        value = CompletionCandidateValue(value="C\\tmp", description="win path")
        assert candidate_line(value) == "C\\tmp:win path"

    def test_description_is_verbatim(self) -> None:
        value = CompletionCandidateValue(value="v", description="a: b")
        assert candidate_line(value) == "v:a: b"

    def test_newlines_folded(self) -> None:
        value = CompletionCandidateValue(value="v", description="line1\nline2")
        assert candidate_line(value) == "v:line1 line2"
