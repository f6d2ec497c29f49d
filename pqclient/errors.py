"""pqclient.errors

Central error types to keep error handling consistent.

Builtin bases are mixed in so callers can catch the generic class
(OSError, TimeoutError, FileNotFoundError, ValueError) as well as PQError.
"""

from __future__ import annotations
from typing import Any, Optional, Sequence


class PQError(Exception):
    """Base pqclient error."""


class ConfigError(PQError):
    """Raised when required configuration is missing or invalid."""


class QueryFileError(PQError, OSError):
    """Raised when creating, writing, reading or deleting a query file fails."""

    fatal = False

    def __init__(self, message: str, filename: Optional[str] = None, operation: str = ""):
        super().__init__(message)
        self.filename = filename
        self.operation = operation

    def __str__(self) -> str:
        msg = self.args[0] if self.args else ""
        if self.filename:
            return f"{msg} ({self.operation or 'file'}: {self.filename})"
        return str(msg)


class SecureDeleteFatalError(QueryFileError):
    """Secure delete failed after the file was opened.

    The file may be partially overwritten. The caller decides whether to abort.
    """

    fatal = True


class QueryTimeoutError(PQError, TimeoutError):
    """Raised when the primusquery subprocess exceeds its deadline."""

    def __init__(self, message: str, argv: Sequence[str] = (), timeout_seconds: Optional[float] = None):
        super().__init__(message)
        self.argv = list(argv)
        self.timeout_seconds = timeout_seconds


class ExecError(PQError):
    """Raised when primusquery cannot be launched or exits non-zero."""

    def __init__(self, message: str, argv: Sequence[str] = (), returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr


class OutputParseError(PQError, ValueError):
    """Raised when a matched numeric field in the tool output cannot be parsed."""

    def __init__(self, message: str, result: Any = None):
        super().__init__(message)
        self.result = result


class ImportFileNotFoundError(PQError, FileNotFoundError):
    """Raised when the import file is missing before invocation."""


class QueryFormatError(PQError, ValueError):
    """Raised when a rendered query document cannot be read back."""


class UnsafeQueryError(PQError):
    """Raised in strict mode when a payload could forge directive lines."""

    def __init__(self, violations: list[str]):
        super().__init__("; ".join(violations))
        self.violations = violations
