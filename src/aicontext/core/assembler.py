"""
Context document assembly.

Turns the filtered, sorted list of paths into the final Markdown document:
a header with the reproducibility-relevant configuration, the directory
tree, and one section per file with its content or a placeholder.
Statistics are accumulated along the way.
"""

import json
import logging
import os
import re
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from ..utils.encodings import EncodingDetector
from ..utils.languages import get_language
from ..utils.tree_builder import render_tree
from .exceptions import FileReadError
from .models import Config, GenerationResult, Statistics
from .tokenizer import estimate_tokens

logger = logging.getLogger(__name__)

EMPTY_FILE_MARKER = "[EMPTY FILE]"

Clock = Callable[[], datetime]


def format_file_size(size_kb: float) -> str:
    """Human readable size for a value in KB."""
    if 0 < size_kb < 0.01:
        return "< 0.01 KB"
    if size_kb == 0:
        return "0 KB"
    if size_kb < 1024:
        return f"{size_kb:.2f} KB"
    return f"{size_kb / 1024:.2f} MB"


def format_number(value: int) -> str:
    """Format an integer with thousands separators."""
    return f"{value:,}"


def format_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 timestamp with millisecond precision and a Z suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _fence_for(content: str) -> str:
    longest = max((len(run) for run in re.findall(r"`{3,}", content)), default=0)
    return "`" * max(3, longest + 1)


class DocumentAssembler:
    """Builds and writes the context document for one generation pass."""

    def __init__(self, config: Config, root: str = ".", clock: Optional[Clock] = None,
                 project_name: Optional[str] = None,
                 on_file: Optional[Callable[[str], None]] = None):
        """
        Initialize the assembler.

        Args:
            config: Effective configuration, read-only for the whole pass.
            root: Project root the relative paths refer to.
            clock: Returns the generation time; defaults to now in UTC.
            project_name: Title for the document; defaults to the root's name.
            on_file: Called with each path after it has been processed.
        """
        self.config = config
        self.root = os.path.abspath(root)
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.project_name = project_name or os.path.basename(self.root)
        self.on_file = on_file
        self.decoder = EncodingDetector()

    @property
    def output_path(self) -> str:
        return os.path.join(self.root, self.config.output_file)

    def read_file(self, file_path: str) -> str:
        """
        Read and decode a file relative to the root.

        Raises:
            FileReadError: If the file cannot be read, is binary, or cannot
                be decoded.
        """
        full_path = os.path.join(self.root, file_path)
        try:
            with open(full_path, 'rb') as f:
                raw = f.read()
        except PermissionError:
            raise FileReadError(file_path, "Permission denied")
        except OSError as e:
            raise FileReadError(file_path, e.strerror or str(e))

        if self.decoder.is_binary(raw, file_path):
            raise FileReadError(file_path, "Binary file")

        text, _, error = self.decoder.decode_bytes(raw, file_path)
        if text is None:
            raise FileReadError(file_path, error)
        return text

    def file_size_kb(self, file_path: str) -> float:
        """
        Size of a file in KB.

        Raises:
            FileReadError: If the file cannot be stat'ed.
        """
        try:
            return os.path.getsize(os.path.join(self.root, file_path)) / 1024
        except OSError as e:
            raise FileReadError(file_path, e.strerror or str(e))

    def render_header(self, paths: List[str]) -> str:
        summary = json.dumps(self.config.summary(), indent=2)
        return (
            f"# Project Context: {self.project_name}\n\n"
            f"Generated: {format_timestamp(self.clock())}\n\n"
            f"## Configuration Used\n\n```json\n{summary}\n```\n\n"
            f"## Directory Structure\n\n```\n{render_tree(paths)}```\n\n"
            f"## File Contents\n\n"
        )

    def render_file(self, file_path: str, stats: Statistics,
                    errors: List[str]) -> Tuple[str, str]:
        """
        Render one file section.

        Returns:
            Tuple of (structural_text, content_block). The content block is
            empty when the file's content was not inlined.
        """
        heading = f"### `{file_path}`\n\n"
        try:
            size_kb = self.file_size_kb(file_path)
            if size_kb > self.config.max_file_size_kb:
                stats.skipped_due_to_size += 1
                notice = (f"*File content skipped: Size {format_file_size(size_kb)} "
                          f"exceeds {self.config.max_file_size_kb} KB limit.*\n\n")
                return heading + notice, ""
            content = self.read_file(file_path)
        except FileReadError as e:
            stats.skipped_other += 1
            errors.append(f"{file_path}: {e}")
            logger.warning(f"Warning on {file_path}: {e}")
            return heading + f"*Error reading file: {e}*\n\n", ""

        stats.included_file_contents += 1
        stats.total_tokens += estimate_tokens(content)
        stats.total_original_size_kb += size_kb

        body = content if content.strip() else EMPTY_FILE_MARKER
        fence = _fence_for(body)
        block = f"{fence}{get_language(file_path)}\n{body}\n{fence}\n\n"
        return heading, block

    def assemble(self, paths: List[str], total_found: Optional[int] = None) -> GenerationResult:
        """
        Assemble the document for the given (filtered, sorted) paths.

        Args:
            paths: Relative paths that passed discovery and extension filtering.
            total_found: Number of files discovery found before extension
                filtering; defaults to len(paths).

        Returns:
            GenerationResult with the document text and statistics.
        """
        stats = Statistics(
            total_files_found=len(paths) if total_found is None else total_found,
            total_files_processed=len(paths),
        )
        errors: List[str] = []

        header = self.render_header(paths)
        structural = [header]
        document = [header]

        for file_path in paths:
            section, block = self.render_file(file_path, stats, errors)
            structural.append(section)
            document.append(section + block)
            if self.on_file is not None:
                self.on_file(file_path)

        stats.total_tokens += estimate_tokens("".join(structural))

        return GenerationResult(
            content="".join(document),
            statistics=stats,
            file_paths=list(paths),
            output_path=self.output_path,
            errors=errors,
        )

    def write(self, result: GenerationResult) -> str:
        """
        Write the document, overwriting any existing file.

        Raises:
            OSError: If the output file cannot be written.
        """
        directory = os.path.dirname(result.output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(result.output_path, 'w', encoding='utf-8', newline='') as f:
            f.write(result.content)
        result.statistics.output_size_kb = os.path.getsize(result.output_path) / 1024
        logger.debug(f"Wrote {result.output_path}")
        return result.output_path
