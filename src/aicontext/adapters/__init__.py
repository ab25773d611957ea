"""File enumerators for different sources."""

from .base import FileEnumerator
from .local import LocalEnumerator


def create_enumerator(root: str, debug: bool = False) -> FileEnumerator:
    """Create the enumerator for a project root."""
    return LocalEnumerator(root, debug=debug)


__all__ = ['FileEnumerator', 'LocalEnumerator', 'create_enumerator']
