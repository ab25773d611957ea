"""
Base file enumerator interface.

Enumerators are the only component that touches the directory listing
primitive. Discovery hands them a pruning predicate and receives a flat
list of relative file paths back.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

PruneFn = Callable[[str], bool]


class FileEnumerator(ABC):
    """
    Abstract base class for file enumerators.

    Implementations return POSIX-style paths relative to their root for
    regular files only, and raise `EnumerationFailure` when the listing
    cannot run at all.
    """

    def __init__(self, root: str, debug: bool = False):
        self.root = root
        self.debug = debug
        self.errors: List[str] = []

    @abstractmethod
    def list_files(self, prune: Optional[PruneFn] = None) -> List[str]:
        """
        List regular files under the root.

        Args:
            prune: Optional predicate receiving a relative directory path;
                directories for which it returns True are not descended.

        Returns:
            List of relative file paths.

        Raises:
            EnumerationFailure: If the root cannot be listed.
        """
        pass
