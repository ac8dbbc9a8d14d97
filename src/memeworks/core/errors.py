"""Error kinds and exceptions shared by the Memeworks core.

Failures never end a session. The async operations (catalog fetch and
download) raise these exceptions internally and convert them into result
records carrying an :class:`ErrorKind` at their boundary, leaving UI
feedback to the caller.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of recoverable failure reported by the core."""

    CATALOG_FETCH_FAILED = "catalog_fetch_failed"
    DOWNLOAD_FAILED = "download_failed"


class MemeworksError(Exception):
    """Base class for Memeworks errors.

    Attributes:
        kind: The error kind reported to callers
    """

    kind: ErrorKind

    def __init__(self, message: str, kind: ErrorKind):
        super().__init__(message)
        self.kind = kind


class CatalogFetchError(MemeworksError):
    """The template catalog could not be fetched or parsed."""

    def __init__(self, message: str):
        super().__init__(message, ErrorKind.CATALOG_FETCH_FAILED)


class DownloadError(MemeworksError):
    """The rendered image could not be fetched or saved."""

    def __init__(self, message: str):
        super().__init__(message, ErrorKind.DOWNLOAD_FAILED)
