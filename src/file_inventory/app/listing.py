"""Plain-text rendering of scan results."""

from __future__ import annotations

from collections.abc import Sequence

from file_inventory.types.models import Entry
from file_inventory.utils.formatting import format_duration, format_size

COLUMN_SEPARATOR = " | "


def format_entry(entry: Entry) -> str:
    """Render one entry as ``name | extension | type | category | size``.

    Folders get a trailing separator on the name so they stand out.
    """
    name = f"{entry.name}/" if entry.is_directory else entry.name
    return COLUMN_SEPARATOR.join(
        (
            name,
            entry.extension or "-",
            entry.content_type,
            entry.category.value,
            format_size(entry.size_bytes),
        )
    )


def total_size(entries: Sequence[Entry]) -> int:
    """Sum of all entry sizes; each byte is reported by exactly one entry."""
    return sum(entry.size_bytes for entry in entries)


def render_summary(entries: Sequence[Entry], elapsed_sec: float) -> str:
    files = sum(1 for entry in entries if not entry.is_directory)
    folders = len(entries) - files
    return (
        f"{len(entries)} entries ({files} files, {folders} folders), "
        f"total {format_size(total_size(entries))}, "
        f"scanned in {format_duration(elapsed_sec)}"
    )


def render_listing(entries: Sequence[Entry], elapsed_sec: float) -> str:
    """Render the full listing followed by the summary line.

    Args:
        entries: Scan result, already ordered
        elapsed_sec: Wall-clock duration of the scan

    Returns:
        Multi-line text, no trailing newline
    """
    if not entries:
        return "No entries found."

    lines = [format_entry(entry) for entry in entries]
    lines.append("")
    lines.append(render_summary(entries, elapsed_sec))
    return "\n".join(lines)
