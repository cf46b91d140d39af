"""Shared utility modules for common operations.

This package provides pure, stateless utility functions for:
- Data size formatting (bytes to human-readable)
- Time duration formatting (seconds to human-readable)
"""

from file_inventory.utils.formatting import (
    format_duration,
    format_size,
)

__all__ = [
    "format_duration",
    "format_size",
]
