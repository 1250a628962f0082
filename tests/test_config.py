"""Tests for zcompgen.config -- XDG paths, atomic writes, precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from zcompgen.config import (
    ENV_FUNCTION_PREFIX,
    _atomic_write,
    get_config_dir,
    get_data_dir,
    load_global_config,
    load_project_config,
    resolve_config,
    save_global_config,
    set_config_value,
    write_text_atomic,
)
from zcompgen.exceptions import ConfigError
from zcompgen.models import GeneratorConfig, GlobalConfig


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG paths
# ---------------------------------------------------------------------------


class TestXDGPathsLinux:
    """XDG Base Directory resolution on Linux."""

    @pytest.fixture(autouse=True)
    def _linux(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("zcompgen.config.platform.system", lambda: "Linux")

    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_config_dir() == tmp_path / ".config" / "zcompgen"
        assert get_config_dir().is_dir()

    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
        assert get_config_dir() == tmp_path / "cfg" / "zcompgen"

    def test_data_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_data_dir() == tmp_path / ".local" / "share" / "zcompgen"

    def test_data_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
        assert get_data_dir() == tmp_path / "data" / "zcompgen"


class TestXDGPathsFallback:
    """Non-XDG platforms use ~/.zcompgen."""

    @pytest.fixture(autouse=True)
    def _macos(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("zcompgen.config.platform.system", lambda: "Darwin")
        monkeypatch.setattr(Path, "home", lambda: tmp_path)

    def test_config_dir_fallback(self, tmp_path: Path) -> None:
        assert get_config_dir() == tmp_path / ".zcompgen"

    def test_data_dir_fallback(self, tmp_path: Path) -> None:
        assert get_data_dir() == tmp_path / ".zcompgen" / "logs"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_creates_file_with_content(self, tmp_path: Path) -> None:
        target = tmp_path / "out.txt"
        _atomic_write(target, "hello")
        assert target.read_text(encoding="utf-8") == "hello"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "out.txt"
        target.write_text("old", encoding="utf-8")
        _atomic_write(target, "new")
        assert target.read_text(encoding="utf-8") == "new"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "_myapp"
        write_text_atomic(target, "#compdef myapp\n")
        assert target.read_text(encoding="utf-8") == "#compdef myapp\n"

    def test_no_temp_files_left_on_error(self, tmp_path: Path) -> None:
        target = tmp_path / "out.txt"
        with patch("zcompgen.config.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                _atomic_write(target, "data")
        assert list(tmp_path.iterdir()) == []


# ---------------------------------------------------------------------------
# Global config
# ---------------------------------------------------------------------------


class TestGlobalConfig:
    def test_load_returns_defaults_when_missing(self, isolated_config: Path) -> None:
        assert load_global_config() == GlobalConfig()

    def test_save_and_load_roundtrip(self, isolated_config: Path) -> None:
        config = GlobalConfig(generator=GeneratorConfig(function_prefix="acme", attribution=False))
        save_global_config(config)
        assert load_global_config() == config

    def test_saved_config_is_valid_json(self, isolated_config: Path) -> None:
        save_global_config(GlobalConfig())
        path = get_config_dir() / "config.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["generator"]["function_prefix"] == "cocona"

    def test_load_invalid_json_raises_config_error(self, isolated_config: Path) -> None:
        (get_config_dir() / "config.json").write_text("{oops", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid global config"):
            load_global_config()

    def test_load_invalid_schema_raises_config_error(self, isolated_config: Path) -> None:
        _write_json(get_config_dir() / "config.json", {"generator": {"attribution": "maybe"}})
        with pytest.raises(ConfigError):
            load_global_config()


# ---------------------------------------------------------------------------
# Project config
# ---------------------------------------------------------------------------


class TestProjectConfig:
    def test_load_returns_none_when_missing(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_load_valid_project_config(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "zcompgen.json", {"generator": {"function_prefix": "proj"}})
        assert load_project_config() == {"generator": {"function_prefix": "proj"}}

    def test_non_object_raises_config_error(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "zcompgen.json", ["not", "an", "object"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()


# ---------------------------------------------------------------------------
# Precedence resolution
# ---------------------------------------------------------------------------


class TestResolveConfig:
    """CLI > env > project > global > defaults."""

    @pytest.fixture(autouse=True)
    def _isolated(self, isolated_config: Path) -> None:
        save_global_config(
            GlobalConfig(generator=GeneratorConfig(function_prefix="global", attribution=False))
        )

    def test_global_applies(self) -> None:
        config = resolve_config()
        assert config.generator.function_prefix == "global"
        assert config.generator.attribution is False

    def test_project_overrides_global(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "zcompgen.json", {"generator": {"function_prefix": "proj"}})
        config = resolve_config()
        assert config.generator.function_prefix == "proj"
        # Keys the project file leaves out keep their global value.
        assert config.generator.attribution is False

    def test_env_overrides_project(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_json(isolated_config / "zcompgen.json", {"generator": {"function_prefix": "proj"}})
        monkeypatch.setenv(ENV_FUNCTION_PREFIX, "env")
        assert resolve_config().generator.function_prefix == "env"

    def test_cli_overrides_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_FUNCTION_PREFIX, "env")
        assert resolve_config(cli_prefix="cli").generator.function_prefix == "cli"

    def test_cli_no_color(self) -> None:
        assert resolve_config(cli_no_color=True).output.no_color is True

    def test_invalid_project_value_raises(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "zcompgen.json", {"output": {"no_color": "sometimes"}})
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()


# ---------------------------------------------------------------------------
# set_config_value
# ---------------------------------------------------------------------------


class TestSetConfigValue:
    def test_set_string(self) -> None:
        config = set_config_value(GlobalConfig(), "generator.function_prefix", "acme")
        assert config.generator.function_prefix == "acme"

    @pytest.mark.parametrize("raw, expected", [("true", True), ("YES", True), ("0", False)])
    def test_set_bool(self, raw: str, expected: bool) -> None:
        config = set_config_value(GlobalConfig(), "output.no_color", raw)
        assert config.output.no_color is expected

    def test_original_is_unchanged(self) -> None:
        original = GlobalConfig()
        set_config_value(original, "generator.function_prefix", "acme")
        assert original.generator.function_prefix == "cocona"

    @pytest.mark.parametrize("key", ["generator.missing", "nope.function_prefix", "generator"])
    def test_unknown_key(self, key: str) -> None:
        with pytest.raises(ConfigError):
            set_config_value(GlobalConfig(), key, "x")
