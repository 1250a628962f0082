"""Shared fixtures: command trees, isolated config directories, a CLI runner."""

from __future__ import annotations

from pathlib import Path

import pytest

from zcompgen.models import (
    ApplicationMetadata,
    CommandArgumentDescriptor,
    CommandCollection,
    CommandDescriptor,
    CommandOptionDescriptor,
    CommandTreeDocument,
    CompletionHint,
    OptionValueKind,
)
from zcompgen.output import reset_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Drop the global OutputManager after each test.

    It keeps the Rich console bound to the stderr it saw when it was
    created; after a CliRunner invocation that stream is closed.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Command trees
# ---------------------------------------------------------------------------


@pytest.fixture
def tree_document() -> CommandTreeDocument:
    """``fixtures/tree.yaml``: ``myapp`` with a primary command, nested remotes, hidden bits."""
    from zcompgen.loader import load_tree

    return load_tree(str(FIXTURES_DIR / "tree.yaml"))


@pytest.fixture
def metadata() -> ApplicationMetadata:
    return ApplicationMetadata(product_name="My App", executable_name="myapp")


@pytest.fixture
def primary_only_collection() -> CommandCollection:
    """Root with only a primary command: ``--verbose`` and a ``path`` argument."""
    primary = CommandDescriptor(
        name="main",
        is_primary_command=True,
        options=[CommandOptionDescriptor(name="verbose", description="Verbose output")],
        arguments=[
            CommandArgumentDescriptor(
                name="path", order=1, completion=CompletionHint(kind="file")
            )
        ],
    )
    return CommandCollection(all=[primary])


@pytest.fixture
def build_collection() -> CommandCollection:
    """Root with one ``build`` sub-command taking ``--target/-t`` (on-the-fly)."""
    build = CommandDescriptor(
        name="build",
        description="Build a target",
        options=[
            CommandOptionDescriptor(
                name="target",
                short_name=["t"],
                description="Target to build",
                value_kind=OptionValueKind.VALUE,
                completion=CompletionHint(kind="onthefly"),
            )
        ],
    )
    return CommandCollection(all=[build])


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and data directories into *tmp_path* and chdir there.

    Also clears ``ZCOMPGEN_FUNCTION_PREFIX`` and ``NO_COLOR`` so the
    developer's environment cannot leak into results.

    Returns:
        *tmp_path*, where tests may drop a ``zcompgen.json``.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("zcompgen.config._is_xdg_platform", lambda: True)
    monkeypatch.delenv("ZCOMPGEN_FUNCTION_PREFIX", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def cli_runner():
    from typer.testing import CliRunner

    return CliRunner()
