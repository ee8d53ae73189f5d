from typing import Any, Optional


class GenobaseError(Exception):
    """Base class for errors raised by Genobase."""

    pass


class NotFoundError(GenobaseError, LookupError):
    """
    Raised when no row or interval matches a lookup.

    This is always recoverable; the caller decides on a fallback.
    """

    def __init__(self, operation: str, key: Any, message: Optional[str] = None):
        self.operation = operation
        self.key = key
        super().__init__(message or f"{operation}: nothing found for {key!r}")


class StorageError(GenobaseError):
    """
    Raised when the backing store fails: I/O errors, constraint violations or an
    unusable connection. The original database error is chained as ``__cause__``.
    """

    def __init__(self, operation: str, key: Any, message: Optional[str] = None):
        self.operation = operation
        self.key = key
        super().__init__(message or f"{operation}: storage failure for {key!r}")


class ValidationError(GenobaseError, ValueError):
    """Raised on malformed input that indicates a programming error, such as an unsupported assembly."""

    pass


class ChainFileError(ValidationError):
    """Raised when a chain file cannot be parsed."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class Cancelled(GenobaseError):
    """Raised when the caller cancels an in-flight operation, or its deadline passes."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation}: cancelled")
