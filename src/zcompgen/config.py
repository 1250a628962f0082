"""Where zcompgen keeps its settings, and how the layers combine.

Settings are a :class:`~zcompgen.models.GlobalConfig`. They are read from
four layers, lowest precedence first:

1. defaults baked into the models;
2. the user file ``config.json`` in :func:`get_config_dir`;
3. ``./zcompgen.json`` in the working directory, for repositories that
   pin e.g. their function prefix (partial documents are merged key by
   key);
4. the ``ZCOMPGEN_FUNCTION_PREFIX`` environment variable;

and finally the command-line flags passed to :func:`resolve_config`.

Directories follow the XDG Base Directory layout on Linux and BSD, and
live under ``~/.zcompgen`` elsewhere. Files are replaced atomically, which
also covers completion scripts written by ``zcompgen install``.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from zcompgen.exceptions import ConfigError
from zcompgen.models import GlobalConfig

_APP_NAME = "zcompgen"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "zcompgen.json"

ENV_FUNCTION_PREFIX = "ZCOMPGEN_FUNCTION_PREFIX"

# kind -> (XDG variable, default location under $HOME, location on other platforms)
_DIRS: dict[str, tuple[str, tuple[str, ...], tuple[str, ...]]] = {
    "config": ("XDG_CONFIG_HOME", (".config",), ()),
    "data": ("XDG_DATA_HOME", (".local", "share"), ("logs",)),
}


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(kind: str) -> Path:
    env_var, xdg_default, fallback = _DIRS[kind]
    if _is_xdg_platform():
        base = os.environ.get(env_var)
        root = Path(base) if base else Path.home().joinpath(*xdg_default)
        path = root / _APP_NAME
    else:
        path = Path.home().joinpath(f".{_APP_NAME}", *fallback)
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Return (and create) the directory holding ``config.json``.

    ``$XDG_CONFIG_HOME/zcompgen`` (default ``~/.config/zcompgen``) on
    Linux/BSD, ``~/.zcompgen`` elsewhere.
    """
    return _app_dir("config")


def get_data_dir() -> Path:
    """Return (and create) the directory crash logs are written under.

    ``$XDG_DATA_HOME/zcompgen`` (default ``~/.local/share/zcompgen``) on
    Linux/BSD, ``~/.zcompgen/logs`` elsewhere.
    """
    return _app_dir("data")


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* via a sibling temp file and ``os.replace``.

    Readers see either the old or the new file, never a partial one. The
    temp file is removed if anything goes wrong.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise


def write_text_atomic(path: Path, data: str) -> None:
    """Atomically write a generated script (or any text file) to *path*."""
    _atomic_write(path, data)


def _read_json(path: Path, what: str) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Invalid {what} at {path}: {exc}") from exc


def load_global_config() -> GlobalConfig:
    """Read the user's ``config.json``; defaults when the file is absent.

    Raises:
        ConfigError: If the file is not valid JSON or not a valid config.
    """
    path = get_config_dir() / _CONFIG_FILENAME
    if not path.is_file():
        return GlobalConfig()
    data = _read_json(path, "global config")
    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    path = get_config_dir() / _CONFIG_FILENAME
    _atomic_write(path, json.dumps(config.model_dump(mode="json"), indent=2) + "\n")


def load_project_config() -> Optional[dict[str, Any]]:
    """Return the raw ``./zcompgen.json`` mapping, or ``None`` if there is none.

    Raises:
        ConfigError: If the file is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    data = _read_json(path, "project config")
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def resolve_config(
    cli_prefix: Optional[str] = None,
    cli_no_color: bool = False,
) -> GlobalConfig:
    """Merge every configuration layer into the effective settings.

    Args:
        cli_prefix: ``--prefix`` value, if given.
        cli_no_color: ``--no-color`` was passed.

    Raises:
        ConfigError: If a layer cannot be read or the merge is invalid.
    """
    data = load_global_config().model_dump(mode="json")

    project = load_project_config()
    if project is not None:
        data = _deep_merge(data, project)

    generator = data.setdefault("generator", {})
    env_prefix = os.environ.get(ENV_FUNCTION_PREFIX)
    if env_prefix:
        generator["function_prefix"] = env_prefix
    if cli_prefix is not None:
        generator["function_prefix"] = cli_prefix
    if cli_no_color:
        data.setdefault("output", {})["no_color"] = True

    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def set_config_value(config: GlobalConfig, key: str, value: str) -> GlobalConfig:
    """Return a copy of *config* with the dotted *key* set from the string *value*.

    Booleans accept ``true``, ``1`` and ``yes`` (any case); every other
    string means false.

    Example::

        config = set_config_value(config, "generator.function_prefix", "acme")

    Raises:
        ConfigError: If *key* does not name a setting or *value* is invalid.
    """
    data = config.model_dump(mode="json")

    *parents, leaf = key.split(".")
    section = data
    for part in parents:
        section = section.get(part)
        if not isinstance(section, dict):
            raise ConfigError(f"Invalid config key: {key}")
    if leaf not in section or isinstance(section[leaf], dict):
        raise ConfigError(f"Unknown config key: {key}")

    if isinstance(section[leaf], bool):
        section[leaf] = value.lower() in ("true", "1", "yes")
    else:
        section[leaf] = value

    try:
        return GlobalConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid value for {key}: {exc}") from exc
