"""Data access layer for file-inventory."""
