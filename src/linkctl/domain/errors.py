"""Error hierarchy for catalogue operations.

Every error carries a stable ``code`` so the service layer can turn it
into a :class:`~linkctl.services.result.ServiceError` without string
matching. Catch :class:`LinkctlError` to handle all of them at once.
"""

from __future__ import annotations


class LinkctlError(Exception):
    """Base class for all linkctl errors."""

    code = "ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NotFoundError(LinkctlError):
    """A referenced alias, link, or group does not exist."""

    code = "NOT_FOUND"

    def __init__(self, message: str, *, name: str) -> None:
        super().__init__(message)
        self.name = name


class DanglingReferenceError(LinkctlError):
    """An alias target or group member is missing at resolve time."""

    code = "DANGLING_REFERENCE"

    def __init__(self, message: str, *, name: str, target: str) -> None:
        super().__init__(message)
        self.name = name
        self.target = target


class ValidationFailedError(LinkctlError):
    """A write would introduce a dangling reference; rejected before mutation."""

    code = "VALIDATION_FAILED"


# ---------------------------------------------------------------------------
# Storage errors (never recovered by the services)
# ---------------------------------------------------------------------------


class StorageError(LinkctlError):
    """Base class for persisted-store failures."""

    code = "STORAGE_ERROR"


class StorageIOError(StorageError):
    """The persisted store could not be read or written."""

    code = "IO_ERROR"


class ParseError(StorageError):
    """The persisted store holds malformed content."""

    code = "PARSE_ERROR"


class ExternalProcessError(LinkctlError):
    """The editor or URI opener failed or exited non-zero."""

    code = "EXTERNAL_PROCESS_ERROR"

    def __init__(self, message: str, *, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode
