"""Exception hierarchy for scan operations."""

from __future__ import annotations


class FileInventoryError(Exception):
    """Base exception for file-inventory errors."""

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Error message
        """
        super().__init__(message)
        self.message: str = message


class InvalidScanArgumentError(FileInventoryError, ValueError):
    """Raised when a scan is requested with an unusable root or depth.

    The scan is aborted before any traversal happens; no partial result
    is produced.
    """
