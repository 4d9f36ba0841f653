"""Exception hierarchy for schemer.

All exceptions inherit from :class:`SchemerError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`schemer.exit_codes`.
The top-level error handler in :func:`schemer.app.main` catches
``SchemerError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    SchemerError (exit 1)
    +-- InvalidUsageError           (exit 2)
    +-- ConfigError                 (exit 1)
    +-- ContentLoadError            (exit 6)
    +-- DocumentParseError          (exit 7)
    +-- StructureError              (exit 8)
    |   +-- StructuralKeyMissingError
    |   +-- UnexpectedNodeError
    +-- ReferenceError_             (exit 9)
        +-- ReferenceChainError
        +-- UnresolvedReferenceError
"""

from schemer.exit_codes import (
    EXIT_CONTENT_LOAD_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_PARSE_ERROR,
    EXIT_REFERENCE_ERROR,
    EXIT_STRUCTURE_ERROR,
)


class SchemerError(Exception):
    """Base exception for all schemer errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`schemer.exit_codes`. The entry point catches
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


class InvalidUsageError(SchemerError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class ConfigError(SchemerError):
    """Raised for configuration problems (invalid JSON, unknown keys, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE


class ContentLoadError(SchemerError):
    """Raised when a document's raw text cannot be read from disk or fetched over HTTP."""

    exit_code = EXIT_CONTENT_LOAD_ERROR


class DocumentParseError(SchemerError):
    """Raised when a document is not valid YAML (or JSON).

    Args:
        source: Identity of the offending document (path, URL, or ``#``).
        detail: The underlying parser message.
    """

    exit_code = EXIT_PARSE_ERROR

    def __init__(self, source: str, detail: str):
        super().__init__(f"Could not parse document '{source}': {detail}")
        self.source = source


class StructureError(SchemerError):
    """Base class for documents that do not have the shape a walker expects."""

    exit_code = EXIT_STRUCTURE_ERROR


class StructuralKeyMissingError(StructureError):
    """Raised when an expected key (``paths``, ``components``, ``operationId``...) is absent."""

    def __init__(self, key: str, where: str | None = None):
        message = f"Expected key `{key}` was not found"
        if where:
            message += f" in {where}"
        super().__init__(message)
        self.key = key


class UnexpectedNodeError(StructureError):
    """Raised when a key holds a scalar or sequence where a mapping is required."""


class ReferenceError_(SchemerError):
    """Base class for ``$ref`` pointers that cannot be followed.

    Named with a trailing underscore to avoid shadowing the built-in
    ``ReferenceError``.
    """

    exit_code = EXIT_REFERENCE_ERROR


class ReferenceChainError(ReferenceError_):
    """Raised when a ``$ref`` leads to a document whose root is itself a ``$ref``."""


class UnresolvedReferenceError(ReferenceError_):
    """Raised when a ``$ref`` names a document that is not in the content snapshot."""

    def __init__(self, reference: str, reason: str = "document was not pre-loaded"):
        super().__init__(f"Cannot resolve $ref '{reference}': {reason}")
        self.reference = reference
