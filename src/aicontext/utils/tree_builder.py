"""FileNode tree building and rendering utilities."""

from typing import Iterable, List

from ..core.models import FileNode
from .path_utils import PathUtils


EMPTY_TREE = "[No files to display]"


class FileTreeBuilder:
    """Utilities for building and rendering FileNode trees."""

    @staticmethod
    def from_paths(root_name: str, file_paths: Iterable[str]) -> FileNode:
        """
        Build hierarchical FileNode tree from flat list of file paths.

        Args:
            root_name: Name of the root node
            file_paths: Relative file paths to include in tree

        Returns:
            Root FileNode with hierarchical structure
        """
        root_node = FileNode(path="", name=root_name, type="dir")

        for file_path in file_paths:
            parts = PathUtils.normalize_and_split(file_path)
            if not parts:
                continue
            current_node = root_node

            # Create directory nodes as needed
            for i, part in enumerate(parts[:-1]):
                existing = next(
                    (child for child in current_node.children
                     if child.name == part and child.is_directory()),
                    None
                )
                if existing is None:
                    existing = FileNode(
                        path=PathUtils.join_path_components(parts[:i + 1]),
                        name=part,
                        type="dir"
                    )
                    current_node.children.append(existing)
                current_node = existing

            current_node.children.append(FileNode(
                path=PathUtils.join_path_components(parts),
                name=parts[-1],
                type="file"
            ))

        return root_node

    @staticmethod
    def render(tree: FileNode) -> str:
        """
        Render the children of `tree` as a text diagram.

        Directories come before files, each group sorted by name. Every line
        ends with a newline. An empty tree renders as a placeholder.
        """
        if not tree.children:
            return f"{EMPTY_TREE}\n"

        lines: List[str] = []

        def render_recursive(node: FileNode, prefix: str) -> None:
            dirs = sorted((c for c in node.children if c.is_directory()), key=lambda c: c.name)
            files = sorted((c for c in node.children if c.is_file()), key=lambda c: c.name)
            ordered = dirs + files
            for i, child in enumerate(ordered):
                is_last = i == len(ordered) - 1
                connector = "└── " if is_last else "├── "
                if child.is_directory():
                    lines.append(f"{prefix}{connector}{child.name}/")
                    render_recursive(child, prefix + ("    " if is_last else "│   "))
                else:
                    lines.append(f"{prefix}{connector}{child.name}")

        render_recursive(tree, "")
        return "".join(f"{line}\n" for line in lines)


def render_tree(file_paths: Iterable[str]) -> str:
    """Render a flat list of relative paths as a directory tree."""
    return FileTreeBuilder.render(FileTreeBuilder.from_paths("", file_paths))
