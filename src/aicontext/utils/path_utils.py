"""Path normalization utilities for cross-platform compatibility."""

from typing import List


class PathUtils:
    """Utilities for consistent path handling across platforms."""

    @staticmethod
    def normalize_path(path: str) -> str:
        """
        Normalize a relative path to forward slashes without a './' prefix.

        Args:
            path: File path with potentially mixed separators

        Returns:
            Path with forward slashes only
        """
        path = path.replace('\\', '/')
        while path.startswith('./'):
            path = path[2:]
        return path

    @staticmethod
    def normalize_and_split(path: str) -> List[str]:
        """
        Normalize path and split into non-empty components.

        Args:
            path: File path to split

        Returns:
            List of path components
        """
        return [part for part in PathUtils.normalize_path(path).split('/') if part and part != '.']

    @staticmethod
    def join_path_components(components: List[str]) -> str:
        """Join path components with forward slashes."""
        return '/'.join(components)
