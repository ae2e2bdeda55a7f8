"""Error taxonomy for a sync run.

Per-item errors (metadata, copy, delete) are caught by the engine, reported
and skipped. DestinationUnreadable only ends the prune phase. VaultUnavailable
and SyncInProgressError end the run before anything is written.
"""

from __future__ import annotations


class ContentSyncError(Exception):
    """Base class for every error raised by content_sync."""


class _PathError(ContentSyncError):
    """Wraps an I/O failure with the path it happened on."""

    operation = "access"

    def __init__(self, path: str, cause: Exception | str) -> None:
        self.path = path
        self.reason = str(cause)
        super().__init__(f"{self.operation} {path} failed: {self.reason}")
        if isinstance(cause, BaseException):
            self.__cause__ = cause


class MetadataUnavailable(_PathError):
    operation = "reading metadata of"


class CopyFailed(_PathError):
    operation = "copying"


class DeleteFailed(_PathError):
    operation = "removing"


class DestinationUnreadable(_PathError):
    operation = "listing"


class VaultUnavailable(_PathError):
    operation = "scanning vault"


class SyncInProgressError(ContentSyncError):
    def __init__(self) -> None:
        super().__init__("a sync is already running")
