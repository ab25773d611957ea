"""
File discovery for aicontext.

Decides which files under the project root are candidates for the context
document, before extension filtering. Enumeration itself is delegated to a
`FileEnumerator`; this module only applies policy.
"""

import logging
import os
from typing import List, Optional

from ..adapters import FileEnumerator, create_enumerator
from ..utils.file_filter import FileFilter
from ..utils.path_utils import PathUtils
from .exceptions import EnumerationFailure
from .models import Config

logger = logging.getLogger(__name__)

GITIGNORE_FILE = '.gitignore'


def load_ignore_entries(root: str) -> List[str]:
    """
    Read the project's `.gitignore` as exclusion entries.

    Blank lines, comments and negations are dropped and a leading `/` is
    stripped; everything else is matched with the exclusion rules. Entries
    are re-read on every run and never persisted.
    """
    path = os.path.join(root, GITIGNORE_FILE)
    if not os.path.isfile(path):
        return []
    try:
        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            lines = f.read().splitlines()
    except OSError as e:
        logger.warning(f"Could not read {path}: {e}")
        return []

    entries = []
    for line in lines:
        entry = line.strip()
        if not entry or entry.startswith('#'):
            continue
        if entry.startswith('!'):
            logger.debug(f"Ignoring negated ignore pattern: {entry}")
            continue
        entry = entry.lstrip('/')
        if entry and entry not in entries:
            entries.append(entry)
    return entries


def build_filter(config: Config, root: str) -> FileFilter:
    """Create the discovery filter for a run, folding in ignore-file entries."""
    extra = load_ignore_entries(root) if config.use_gitignore else []
    return FileFilter(config, extra_excludes=extra)


def discover_files(config: Config, root: str, enumerator: Optional[FileEnumerator] = None,
                   debug: bool = False) -> List[str]:
    """
    Find candidate files under `root`.

    Returns:
        Sorted relative paths of regular files that pass the hidden-file,
        exclusion and force-include rules. An enumeration failure yields an
        empty list.
    """
    file_filter = build_filter(config, root)
    enumerator = enumerator or create_enumerator(root, debug=debug)

    try:
        listed = enumerator.list_files(prune=file_filter.should_prune_directory)
    except EnumerationFailure as e:
        logger.error(f"File enumeration failed: {e}")
        return []
    if enumerator.errors:
        logger.warning(f"Skipped {len(enumerator.errors)} unreadable entries while listing files")
        for error in enumerator.errors:
            logger.debug(f"Listing error: {error}")

    output_path = config.output_file
    if os.path.isabs(output_path):
        output_path = os.path.relpath(output_path, os.path.abspath(root))
    output_path = PathUtils.normalize_path(output_path)

    candidates = []
    for path in file_filter.filter_files(listed):
        if path == output_path:
            continue
        candidates.append(path)
    if debug:
        logger.debug(f"Discovery kept {len(candidates)} of {len(listed)} files")
    return candidates
