"""Logging infrastructure with optional syslog output and scan ID tracking.

Every log record carries the ID of the scan it belongs to, so warnings about
unreadable entries can be traced back to a single run even when several
scans share a process or a syslog stream.
"""

import contextvars
import logging
import logging.handlers
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Final, override

# Scan ID context variable, set for the duration of each scan
scan_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "scan_id",
    default=None,
)

# Log format constants
DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - [%(scan_id)s] - %(message)s"

SYSLOG_LOG_FORMAT: Final[str] = (
    "file-inventory[%(process)d]: %(levelname)s - [%(scan_id)s] - %(name)s - %(message)s"
)

DEFAULT_SYSLOG_ADDRESS: Final[str] = "/dev/log"


class ScanIdFilter(logging.Filter):
    """Logging filter that adds the current scan ID to log records.

    Reads the ID from the ContextVar; records emitted outside a scan get
    ``"N/A"``.
    """

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        """Add scan ID to log record from ContextVar.

        Args:
            record: Log record to enhance with the scan ID

        Returns:
            True to allow the record to be logged
        """
        scan_id = scan_id_var.get()
        record.scan_id = scan_id if scan_id is not None else "N/A"
        return True


def configure_logging(
    *,
    log_level: str = "INFO",
    enable_syslog: bool = False,
    syslog_address: str = DEFAULT_SYSLOG_ADDRESS,
    enable_console: bool = True,
) -> None:
    """Configure application logging.

    Replaces the root logger handlers with a console handler on stderr and,
    when requested, a syslog handler. Both handlers share one ScanIdFilter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_syslog: Enable syslog handler
        syslog_address: Syslog socket address
        enable_console: Enable console output handler

    Example:
        >>> configure_logging(log_level="DEBUG")
        >>> logging.getLogger(__name__).info("Scanning")
    """
    root_logger = logging.getLogger()

    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    scan_filter = ScanIdFilter()

    if enable_syslog:
        try:
            syslog_handler = logging.handlers.SysLogHandler(
                address=syslog_address,
                facility=logging.handlers.SysLogHandler.LOG_USER,
            )
            syslog_handler.setFormatter(logging.Formatter(SYSLOG_LOG_FORMAT))
            syslog_handler.addFilter(scan_filter)
            root_logger.addHandler(syslog_handler)

        except OSError as exc:
            # Syslog not available, console only
            print(
                f"Warning: Could not connect to syslog at {syslog_address}: {exc}",
                file=sys.stderr,
            )

    if enable_console:
        # stdout carries the listing itself
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        console_handler.addFilter(scan_filter)
        root_logger.addHandler(console_handler)


def set_scan_id(scan_id: str) -> contextvars.Token[str | None]:
    """Set the scan ID for the current context.

    Args:
        scan_id: Unique identifier of the scan

    Returns:
        Token that restores the previous value when passed to ``reset_scan_id``
    """
    return scan_id_var.set(scan_id)


def reset_scan_id(token: contextvars.Token[str | None]) -> None:
    """Restore the scan ID that was current before ``set_scan_id``."""
    scan_id_var.reset(token)


def get_scan_id() -> str | None:
    """Get the current scan ID from context.

    Returns:
        Current scan ID or None outside a scan
    """
    return scan_id_var.get()


@contextmanager
def scan_id_context(scan_id: str) -> Iterator[str]:
    """Set the scan ID for the duration of a ``with`` block.

    Example:
        >>> with scan_id_context("abc123"):
        ...     logger.info("Listing")  # tagged [abc123]
    """
    token = set_scan_id(scan_id)
    try:
        yield scan_id
    finally:
        reset_scan_id(token)
