"""Pure formatting utilities for human-readable output.

This module provides stateless formatting functions for converting raw data
into human-readable strings. All functions are pure with no side effects.
"""

# Binary unit constants (1024-based)
_KB_INT = 1024
_MB_INT = _KB_INT * 1024  # 1,048,576
_GB_INT = _MB_INT * 1024  # 1,073,741,824

# Time unit constants
_MINUTE = 60
_HOUR = _MINUTE * 60  # 3,600


def format_size(num_bytes: int) -> str:
    """Convert bytes to human-readable size format.

    Uses binary units (1024-based) with two decimals and the French unit
    suffixes o, Ko, Mo, Go. Values of one Go and above stay in Go.

    Args:
        num_bytes: Number of bytes to format (must be non-negative)

    Returns:
        Human-readable string representation of the size

    Examples:
        >>> format_size(512)
        '512 o'
        >>> format_size(1536)
        '1.50 Ko'
        >>> format_size(12939428)
        '12.34 Mo'
        >>> format_size(5 * 1024**4)
        '5120.00 Go'
    """
    if num_bytes < 0:
        msg = "num_bytes must be non-negative"
        raise ValueError(msg)

    if num_bytes >= _GB_INT:
        return f"{num_bytes / _GB_INT:.2f} Go"

    if num_bytes >= _MB_INT:
        return f"{num_bytes / _MB_INT:.2f} Mo"

    if num_bytes >= _KB_INT:
        return f"{num_bytes / _KB_INT:.2f} Ko"

    return f"{num_bytes} o"


def format_duration(seconds: float) -> str:
    """Convert seconds to human-readable duration format.

    Args:
        seconds: Duration in seconds (must be non-negative)

    Returns:
        Human-readable duration string.
        - Hours: "Xh Ym"
        - Minutes: "Xm Ys"
        - Seconds: "X.YZs" (two decimals, scans are often sub-second)

    Examples:
        >>> format_duration(0.25)
        '0.25s'
        >>> format_duration(90)
        '1m 30s'
        >>> format_duration(3665)
        '1h 1m'
    """
    if seconds < 0:
        msg = "seconds must be non-negative"
        raise ValueError(msg)

    if seconds < _MINUTE:
        return f"{seconds:.2f}s"

    total_seconds = int(seconds)

    if total_seconds >= _HOUR:
        hours = total_seconds // _HOUR
        minutes = (total_seconds % _HOUR) // _MINUTE
        if minutes > 0:
            return f"{hours}h {minutes}m"
        return f"{hours}h"

    minutes = total_seconds // _MINUTE
    remaining = total_seconds % _MINUTE
    if remaining > 0:
        return f"{minutes}m {remaining}s"
    return f"{minutes}m"
