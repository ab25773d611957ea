"""
File filtering utilities for aicontext.

This module holds the path matching vocabulary shared by discovery and the
file enumerator:

- a bare name or pattern (`node_modules`, `LICENSE`) matches any path segment,
- an entry ending in `/` (`dist/`) matches ancestor directories only,
- a `*.ext` glob (`*.log`) matches the file's basename.

It also provides the second-pass extension filter.
"""

import os
from fnmatch import fnmatchcase
from typing import Iterable, List, Optional, Sequence

from ..core.models import Config
from .path_utils import PathUtils


def _matches_run(pattern_parts: Sequence[str], parts: Sequence[str]) -> bool:
    """Check if the pattern segments match a contiguous run of `parts`."""
    width = len(pattern_parts)
    if width == 0 or width > len(parts):
        return False
    for start in range(len(parts) - width + 1):
        if all(fnmatchcase(part, pat) for part, pat in zip(parts[start:start + width], pattern_parts)):
            return True
    return False


def matches_exclude_entry(entry: str, parts: Sequence[str]) -> bool:
    """
    Check a single exclusion entry against a split relative file path.

    Args:
        entry: Exclusion entry in the configuration vocabulary.
        parts: Path segments of the file, basename last.

    Returns:
        True if the entry rejects the file.
    """
    if not entry or not parts:
        return False
    if entry.endswith('/'):
        pattern_parts = PathUtils.normalize_and_split(entry)
        return _matches_run(pattern_parts, parts[:-1])
    if entry.startswith('*.'):
        return fnmatchcase(parts[-1], entry)
    return _matches_run(PathUtils.normalize_and_split(entry), parts)


def is_hidden(parts: Sequence[str]) -> bool:
    """Check if any path segment starts with a dot."""
    return any(part.startswith('.') for part in parts)


def is_force_included(parts: Sequence[str], include_paths: Iterable[str]) -> bool:
    """
    Check if the path is covered by a force-include entry.

    An entry covers a path when its segments are a prefix of the path's
    segments, so `.github` covers `.github/workflows/ci.yml`.
    """
    for entry in include_paths:
        entry_parts = PathUtils.normalize_and_split(entry)
        if entry_parts and list(parts[:len(entry_parts)]) == entry_parts:
            return True
    return False


class FileFilter:
    """Applies hidden-file, exclusion and force-include rules to paths."""

    def __init__(self, config: Config, extra_excludes: Optional[Iterable[str]] = None):
        """
        Initialize the filter.

        Args:
            config: Effective configuration for this run.
            extra_excludes: Additional exclusion entries (e.g. from the
                ignore file) matched with the same rules.
        """
        self.config = config
        self.excludes = list(config.exclude_paths) + list(extra_excludes or [])
        self.include_paths = list(config.include_paths)
        self._include_parts = [
            parts for parts in (PathUtils.normalize_and_split(p) for p in self.include_paths) if parts
        ]

    def is_excluded(self, file_path: str) -> bool:
        """Check if any exclusion entry rejects the file."""
        parts = PathUtils.normalize_and_split(file_path)
        return any(matches_exclude_entry(entry, parts) for entry in self.excludes)

    def is_hidden_file(self, file_path: str) -> bool:
        """Check if a file or one of its directories is hidden."""
        return is_hidden(PathUtils.normalize_and_split(file_path))

    def is_force_included(self, file_path: str) -> bool:
        """Check if the file is named by `includePaths`."""
        return is_force_included(PathUtils.normalize_and_split(file_path), self.include_paths)

    def get_excluded_reason(self, file_path: str) -> Optional[str]:
        """
        Get the reason why a file would be rejected by discovery.

        Returns:
            Reason string if the file would be rejected, None otherwise.
        """
        if self.is_force_included(file_path):
            return None
        if self.is_excluded(file_path):
            return "Matches exclude pattern"
        if self.is_hidden_file(file_path):
            return "Hidden file"
        return None

    def accepts(self, file_path: str) -> bool:
        """Check if the file is a discovery candidate."""
        return self.get_excluded_reason(file_path) is None

    def filter_files(self, file_paths: Iterable[str]) -> List[str]:
        """Filter paths by the discovery rules, returning them sorted."""
        return sorted(
            PathUtils.normalize_path(path) for path in file_paths if self.accepts(path)
        )

    def should_prune_directory(self, dir_path: str) -> bool:
        """
        Check if a directory can be skipped during enumeration.

        A directory is pruned when it is hidden or excluded and no
        force-include entry lies inside it or covers it.
        """
        parts = PathUtils.normalize_and_split(dir_path)
        if not parts:
            return False
        for include in self._include_parts:
            shared = min(len(include), len(parts))
            if include[:shared] == parts[:shared]:
                return False
        if is_hidden(parts):
            return True
        # every segment of the directory is an ancestor of the files inside it
        return any(
            not entry.startswith('*.') and _matches_run(PathUtils.normalize_and_split(entry), parts)
            for entry in self.excludes
        )


def filter_by_extension(file_paths: Iterable[str], include_extensions: Iterable[str]) -> List[str]:
    """
    Keep only paths whose extension is in the allow-list.

    An empty allow-list keeps everything. Comparison is case-insensitive and
    uses `os.path.splitext` semantics, so dotfiles such as `.env` have no
    extension.
    """
    allowed = {ext.lower() for ext in include_extensions}
    paths = list(file_paths)
    if not allowed:
        return paths
    return [path for path in paths if os.path.splitext(path)[1].lower() in allowed]
