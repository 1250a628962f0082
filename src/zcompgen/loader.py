"""Read command-tree and candidate documents.

A *source* is a local path, an ``http(s)://`` URL, or ``-`` for stdin.
Documents may be JSON or YAML; the file extension or the response's
``Content-Type`` picks the parser first, and otherwise JSON is tried before
YAML.

* :func:`load_document` -- raw parsed document (a mapping or a list).
* :func:`load_tree` -- a validated :class:`~zcompgen.models.CommandTreeDocument`.
* :func:`load_candidate_values` -- the values of an on-the-fly stream.

Every failure surfaces as :class:`~zcompgen.exceptions.TreeLoadError`.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml
from pydantic import TypeAdapter, ValidationError

from zcompgen.exceptions import TreeLoadError
from zcompgen.models import CommandTreeDocument, CompletionCandidateValue
from zcompgen.output import debug

_CANDIDATE_LIST = TypeAdapter(list[CompletionCandidateValue])

_FORMAT_BY_SUFFIX = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}

URL_TIMEOUT = 30.0


def load_document(source: str) -> Any:
    """Load and parse the document at *source*.

    Raises:
        TreeLoadError: If it cannot be read, is empty, or is neither a
            JSON/YAML mapping nor a list.
    """
    if source == "-":
        debug("Reading document from stdin")
        return _load_from_stdin()
    if source.startswith(("http://", "https://")):
        debug(f"Fetching document from {source}")
        return _load_from_url(source)
    debug(f"Reading document from {source}")
    return _load_from_file(source)


def load_tree(source: str) -> CommandTreeDocument:
    """Load a command-tree document (``application`` plus ``commands``).

    Raises:
        TreeLoadError: If the document is unreadable or not a valid tree.
    """
    data = load_document(source)
    if not isinstance(data, dict):
        raise TreeLoadError(
            f"Command tree must be a JSON/YAML object (got {type(data).__name__})"
        )
    try:
        return CommandTreeDocument.model_validate(data)
    except ValidationError as exc:
        raise TreeLoadError(f"Invalid command tree in {source}: {exc}") from exc


def load_candidate_values(source: str) -> list[CompletionCandidateValue]:
    """Load candidates from a list, or from the ``values`` list of a mapping.

    Items are plain strings or ``{value, description}`` mappings.
    """
    data = load_document(source)
    if isinstance(data, dict):
        data = data.get("values", [])
    try:
        return _CANDIDATE_LIST.validate_python(data)
    except ValidationError as exc:
        raise TreeLoadError(f"Invalid candidate list in {source}: {exc}") from exc


def _load_from_stdin() -> Any:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise TreeLoadError(f"Failed to read from stdin: {exc}") from exc
    if not content.strip():
        raise TreeLoadError("No input received from stdin")
    return _parse_content(content)


def _load_from_url(url: str) -> Any:
    try:
        response = httpx.get(url, timeout=URL_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise TreeLoadError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise TreeLoadError(f"Failed to fetch document from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"
    else:
        hint = ""
    return _parse_content(response.text, hint=hint)


def _load_from_file(path: str) -> Any:
    file_path = Path(path)
    if not file_path.is_file():
        raise TreeLoadError(f"File not found: {path}")
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TreeLoadError(f"Failed to read {path}: {exc}") from exc
    if not content.strip():
        raise TreeLoadError(f"File is empty: {path}")
    return _parse_content(content, hint=_FORMAT_BY_SUFFIX.get(file_path.suffix.lower(), ""))


def _parse_content(content: str, hint: str = "") -> Any:
    """Parse *content*; JSON first unless *hint* says YAML.

    A ``json`` hint makes JSON errors final instead of falling back to
    YAML, so a broken ``.json`` file reports the JSON error.
    """
    errors: list[str] = []

    if hint != "yaml":
        try:
            return _check_container(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise TreeLoadError(f"Invalid JSON: {exc}") from exc
            errors.append(f"JSON error: {exc}")

    try:
        return _check_container(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        errors.append(f"YAML error: {exc}")

    raise TreeLoadError(
        "Failed to parse document as JSON or YAML" + "".join(f"\n  {e}" for e in errors)
    )


def _check_container(result: Any) -> Any:
    if not isinstance(result, (dict, list)):
        kind = "empty document" if result is None else type(result).__name__
        raise TreeLoadError(f"Document must be a JSON/YAML object or list (got {kind})")
    return result
