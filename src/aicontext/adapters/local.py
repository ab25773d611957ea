"""Local filesystem enumerator implementation."""
import logging
import os
import stat
from typing import List, Optional

from ..core.exceptions import EnumerationFailure
from ..utils.path_utils import PathUtils
from .base import FileEnumerator, PruneFn

logger = logging.getLogger(__name__)


class LocalEnumerator(FileEnumerator):
    """Enumerates regular files of a local directory with os.walk."""

    def __init__(self, root: str, debug: bool = False):
        super().__init__(os.path.abspath(root), debug)

    def _on_walk_error(self, error: OSError) -> None:
        if os.path.abspath(getattr(error, 'filename', '') or '') == self.root:
            raise EnumerationFailure(f"Cannot list {self.root}: {error.strerror or error}")
        self.errors.append(str(error))
        if self.debug:
            logger.debug(f"Walk error: {error}")

    def list_files(self, prune: Optional[PruneFn] = None) -> List[str]:
        """List regular files under the root, skipping symlinks."""
        if not os.path.isdir(self.root):
            raise EnumerationFailure(f"Path is not a directory: {self.root}")

        files = []
        for dirpath, dirnames, filenames in os.walk(self.root, onerror=self._on_walk_error):
            rel_dir = os.path.relpath(dirpath, self.root)
            rel_dir = "" if rel_dir == os.curdir else PathUtils.normalize_path(rel_dir)

            kept = []
            for name in sorted(dirnames):
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if os.path.islink(os.path.join(dirpath, name)):
                    continue
                if prune is not None and prune(rel_path):
                    if self.debug:
                        logger.debug(f"Pruned directory: {rel_path}")
                    continue
                kept.append(name)
            dirnames[:] = kept

            for name in filenames:
                full_path = os.path.join(dirpath, name)
                try:
                    mode = os.lstat(full_path).st_mode
                except OSError as e:
                    self.errors.append(str(e))
                    continue
                # regular files only: no symlinks, sockets, fifos or devices
                if stat.S_ISREG(mode):
                    files.append(f"{rel_dir}/{name}" if rel_dir else name)

        if self.debug:
            logger.debug(f"Enumerated {len(files)} files under {self.root}")
        return sorted(files)
