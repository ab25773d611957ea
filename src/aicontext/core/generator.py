"""Main context generation pipeline."""
import logging
from typing import Callable, Optional

from ..adapters import FileEnumerator
from ..utils.file_filter import filter_by_extension
from .assembler import Clock, DocumentAssembler
from .discovery import discover_files
from .models import Config, GenerationResult

logger = logging.getLogger(__name__)


class ContextGenerator:
    """
    Runs discovery, extension filtering and assembly for one project root.

    The configuration is treated as read-only for the whole pass.
    """

    def __init__(self, config: Config, root: str = ".", debug: bool = False,
                 enumerator: Optional[FileEnumerator] = None, clock: Optional[Clock] = None):
        self.config = config
        self.root = root
        self.debug = debug
        self.enumerator = enumerator
        self.clock = clock

    def generate(self, on_start: Optional[Callable[[int], None]] = None,
                 on_file: Optional[Callable[[str], None]] = None,
                 write: bool = True) -> Optional[GenerationResult]:
        """
        Generate the context document.

        Args:
            on_start: Called with the number of files about to be processed.
            on_file: Called after each file has been processed.
            write: Write the document to the configured output file.

        Returns:
            GenerationResult, or None when discovery found no files at all
            (nothing is written in that case).

        Raises:
            OSError: If the output document cannot be written.
        """
        candidates = discover_files(self.config, self.root, self.enumerator, debug=self.debug)
        if not candidates:
            logger.info("No files found that match the configuration")
            return None

        paths = filter_by_extension(candidates, self.config.include_extensions)
        if not paths:
            logger.warning(
                f"Found {len(candidates)} files, but none had the required extensions"
            )

        if on_start is not None:
            on_start(len(paths))

        assembler = DocumentAssembler(self.config, self.root, clock=self.clock, on_file=on_file)
        result = assembler.assemble(paths, total_found=len(candidates))
        if write:
            assembler.write(result)
        return result
