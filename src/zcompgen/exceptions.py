"""Exception hierarchy for zcompgen.

All exceptions inherit from :class:`ZcompgenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`zcompgen.exit_codes`.
The top-level error handler in :func:`zcompgen.app.main` catches
``ZcompgenError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

The generator itself never raises these: it assumes a well-formed tree.
They cover the edges -- loading documents, reading configuration, and
parsing completion requests.

Subclass hierarchy::

    ZcompgenError (exit 1)
    +-- InvalidUsageError      (exit 2)
    |   +-- UnsupportedShellError (exit 2)
    +-- TreeLoadError          (exit 7)
    +-- ConfigError            (exit 1)
"""

from zcompgen.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_TREE_LOAD_ERROR,
)


class ZcompgenError(Exception):
    """Base exception for all zcompgen errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`zcompgen.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ZcompgenError):
    """Raised for invalid CLI arguments or malformed completion requests."""

    exit_code = EXIT_INVALID_USAGE


class UnsupportedShellError(InvalidUsageError):
    """Raised when no generator is registered for the requested shell."""


class TreeLoadError(ZcompgenError):
    """Raised when a command-tree or candidate document cannot be loaded or validated."""

    exit_code = EXIT_TREE_LOAD_ERROR


class ConfigError(ZcompgenError):
    """Raised for configuration problems (invalid JSON, unknown keys)."""

    exit_code = EXIT_GENERIC_FAILURE
