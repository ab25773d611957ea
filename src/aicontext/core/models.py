"""
Core data models for aicontext.

This module contains the fundamental data structures used throughout
the application: the persisted configuration, the CLI delta applied to it,
the file tree used for rendering, and the statistics gathered while the
context document is assembled.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union


Number = Union[int, float]

# Wire keys of the persisted configuration, in the order they are written.
WIRE_KEYS = {
    'exclude_paths': 'excludePaths',
    'include_extensions': 'includeExtensions',
    'include_paths': 'includePaths',
    'max_file_size_kb': 'maxFileSizeKB',
    'output_file': 'outputFile',
    'use_gitignore': 'useGitignore',
    'presets': 'presets',
}


def canonical(values: Iterable[str]) -> Tuple[str, ...]:
    """Deduplicate and sort a collection of strings."""
    return tuple(sorted(set(values)))


def normalize_number(value: Number) -> Number:
    """Store integral floats as ints so 1.0 and 1 persist identically."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


@dataclass(frozen=True)
class Config:
    """
    Configuration settings for a context generation run.

    Instances are immutable; every merge produces a new value. Collection
    fields are always stored deduplicated and sorted so that persisted files
    diff cleanly and equality comparisons are meaningful.
    """

    exclude_paths: Tuple[str, ...] = ()
    include_extensions: Tuple[str, ...] = ()
    include_paths: Tuple[str, ...] = ()       # optional on the wire, defaults to empty
    max_file_size_kb: Number = 500
    output_file: str = 'context.md'
    use_gitignore: bool = False               # optional on the wire, defaults to off
    presets: Tuple[str, ...] = ()

    def __post_init__(self):
        # frozen, so bypass __setattr__ to canonicalise in place
        for name in ('exclude_paths', 'include_extensions', 'include_paths', 'presets'):
            object.__setattr__(self, name, canonical(getattr(self, name)))
        object.__setattr__(self, 'max_file_size_kb', normalize_number(self.max_file_size_kb))

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire representation (camelCase keys, list values)."""
        data = {}
        for attr, key in WIRE_KEYS.items():
            value = getattr(self, attr)
            data[key] = list(value) if isinstance(value, tuple) else value
        return data

    def summary(self) -> Dict[str, Any]:
        """Subset of the configuration relevant for reproducing a document."""
        return {
            'presets': list(self.presets),
            'outputFile': self.output_file,
            'maxFileSizeKB': self.max_file_size_kb,
        }


@dataclass
class ConfigDelta:
    """Modifications requested on the command line for a single invocation."""

    reset: bool = False
    presets: List[str] = field(default_factory=list)
    add_exclude: List[str] = field(default_factory=list)
    remove_exclude: List[str] = field(default_factory=list)
    add_ext: List[str] = field(default_factory=list)
    remove_ext: List[str] = field(default_factory=list)
    output_file: Optional[str] = None
    max_file_size_kb: Optional[Number] = None
    use_gitignore: Optional[bool] = None
    include: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Check if the delta requests no change at all."""
        values = asdict(self)
        # use_gitignore=False is an explicit request, unlike reset=False
        if values.pop('use_gitignore') is not None:
            return False
        return all(
            value is None or value is False or value == []
            for value in values.values()
        )


@dataclass
class FileNode:
    """Represents a file or directory in the rendered tree."""

    path: str
    name: str
    type: str  # 'file' or 'dir'
    children: List['FileNode'] = field(default_factory=list)

    def is_file(self) -> bool:
        """Check if this node represents a file."""
        return self.type == 'file'

    def is_directory(self) -> bool:
        """Check if this node represents a directory."""
        return self.type == 'dir'


@dataclass
class Statistics:
    """Counters accumulated while the context document is assembled."""

    total_files_found: int = 0
    total_files_processed: int = 0
    included_file_contents: int = 0
    skipped_due_to_size: int = 0
    skipped_other: int = 0
    total_tokens: int = 0
    total_original_size_kb: float = 0.0
    output_size_kb: float = 0.0


@dataclass
class GenerationResult:
    """Result of assembling a context document."""

    content: str
    statistics: Statistics
    file_paths: List[str]
    output_path: str
    errors: List[str] = field(default_factory=list)

    def has_errors(self) -> bool:
        """Check if any file could not be read."""
        return len(self.errors) > 0
