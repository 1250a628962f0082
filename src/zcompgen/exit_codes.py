"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~zcompgen.exceptions.ZcompgenError` subclass.
Shell wrappers can inspect the exit code to determine the failure class
without parsing stderr.

Example::

    $ zcompgen generate missing.yaml
    $ echo $?
    7   # EXIT_TREE_LOAD_ERROR -- the tree document could not be read
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or an unsupported shell."""

EXIT_TREE_LOAD_ERROR = 7
"""The command-tree document could not be loaded or validated."""
