"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~schemer.exceptions.SchemerError` subclass.
External tooling (CI scripts, shell wrappers) can inspect the exit code to
determine the failure class without parsing stderr.

Example::

    $ schemer schema list openapi.yaml
    $ echo $?
    8   # EXIT_STRUCTURE_ERROR -- the document has no ``components`` key
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_CONTENT_LOAD_ERROR = 6
"""A referenced document could not be read (missing file, unreachable URL)."""

EXIT_PARSE_ERROR = 7
"""A document could not be parsed as YAML or JSON."""

EXIT_STRUCTURE_ERROR = 8
"""A structural key was missing or held the wrong kind of node."""

EXIT_REFERENCE_ERROR = 9
"""A ``$ref`` could not be followed (unknown target or reference chain)."""

EXIT_INTERRUPTED = 130
"""The user pressed Ctrl-C (128 + SIGINT)."""
