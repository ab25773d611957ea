"""Utility modules for aicontext."""

from .file_filter import FileFilter, filter_by_extension
from .encodings import EncodingDetector
from .path_utils import PathUtils
from .tree_builder import FileTreeBuilder, render_tree

__all__ = [
    "FileFilter",
    "filter_by_extension",
    "EncodingDetector",
    "PathUtils",
    "FileTreeBuilder",
    "render_tree",
]
