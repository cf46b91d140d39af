"""Filesystem operations module for tree scanning and folder size aggregation."""

from __future__ import annotations

from .exclusions import DEFAULT_EXCLUSION_RULES, ExclusionReason, ExclusionRules
from .scanner import TreeScanner, aggregate_folder_size, validate_scan_arguments

__all__ = [
    "DEFAULT_EXCLUSION_RULES",
    "ExclusionReason",
    "ExclusionRules",
    "TreeScanner",
    "aggregate_folder_size",
    "validate_scan_arguments",
]
