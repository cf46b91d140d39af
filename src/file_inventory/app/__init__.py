"""Application layer: text rendering of scan results."""

from file_inventory.app.listing import format_entry, render_listing, render_summary, total_size

__all__ = [
    "format_entry",
    "render_listing",
    "render_summary",
    "total_size",
]
