"""Exclusion rules for filesystem scanning.

The rules are an immutable value built once at startup and shared by every
scan. The same check applies to files and directories; an excluded
directory is opaque to the scanner.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from file_inventory.core.classifier import extract_extension


class ExclusionReason(str, Enum):
    """Why a name was excluded."""

    EXACT_NAME = "exact_name"
    RESOURCE_FORK = "resource_fork"
    HIDDEN = "hidden"
    EXTENSION = "extension"


DEFAULT_EXCLUDED_NAMES: Final[frozenset[str]] = frozenset(
    {
        # OS metadata
        "Thumbs.db",
        ".DS_Store",
        "desktop.ini",
        # VCS and editor directories
        ".git",
        ".svn",
        ".idea",
        ".vscode",
    }
)

DEFAULT_EXCLUDED_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {"tmp", "temp", "swp", "bak", "log", "~"}
)

DEFAULT_VISIBLE_DOTFILES: Final[frozenset[str]] = frozenset(
    {".gitignore", ".gitattributes", ".editorconfig"}
)

RESOURCE_FORK_PREFIX: Final[str] = "._"


def _normalize_extension(extension: str) -> str:
    return extension.removeprefix(".").lower()


@dataclass(frozen=True, slots=True)
class ExclusionRules:
    """Denylists and hidden-name policy applied to every scanned name.

    Attributes:
        excluded_names: Exact, case-sensitive names to exclude
        excluded_extensions: Lowercase extensions (without dot) to exclude
        visible_dotfiles: Hidden names that stay visible
        resource_fork_prefix: Prefix of macOS AppleDouble files
    """

    excluded_names: frozenset[str] = field(default=DEFAULT_EXCLUDED_NAMES)
    excluded_extensions: frozenset[str] = field(default=DEFAULT_EXCLUDED_EXTENSIONS)
    visible_dotfiles: frozenset[str] = field(default=DEFAULT_VISIBLE_DOTFILES)
    resource_fork_prefix: str = RESOURCE_FORK_PREFIX

    def exclusion_reason(self, name: str) -> ExclusionReason | None:
        """Return why ``name`` is excluded, or ``None`` when it is kept.

        Args:
            name: Final path component of a file or directory

        Returns:
            The first matching exclusion reason
        """
        if name in self.excluded_names:
            return ExclusionReason.EXACT_NAME

        if self.resource_fork_prefix and name.startswith(self.resource_fork_prefix):
            return ExclusionReason.RESOURCE_FORK

        if name.startswith(".") and name not in self.visible_dotfiles:
            return ExclusionReason.HIDDEN

        extension = extract_extension(name)
        if extension and extension in self.excluded_extensions:
            return ExclusionReason.EXTENSION

        return None

    def is_excluded(self, name: str) -> bool:
        """Check whether ``name`` is excluded from listing and aggregation."""
        return self.exclusion_reason(name) is not None

    def extended(
        self,
        *,
        names: Iterable[str] = (),
        extensions: Iterable[str] = (),
        visible_dotfiles: Iterable[str] = (),
    ) -> ExclusionRules:
        """Return new rules with extra entries added to each table.

        Args:
            names: Extra exact names to exclude
            extensions: Extra extensions to exclude, with or without a leading dot
            visible_dotfiles: Extra hidden names to keep visible

        Returns:
            A new ExclusionRules instance; ``self`` is left unchanged
        """
        return ExclusionRules(
            excluded_names=self.excluded_names | frozenset(names),
            excluded_extensions=self.excluded_extensions
            | frozenset(_normalize_extension(ext) for ext in extensions),
            visible_dotfiles=self.visible_dotfiles | frozenset(visible_dotfiles),
            resource_fork_prefix=self.resource_fork_prefix,
        )


DEFAULT_EXCLUSION_RULES: Final[ExclusionRules] = ExclusionRules()
