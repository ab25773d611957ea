"""
Encoding detection and handling utilities.

Decodes file bytes with a BOM check followed by an ordered list of
fallback encodings, after a sniff that keeps binary data out of the
document.
"""

import logging
import mimetypes
from typing import List, Optional, Tuple


# Common encodings to try, ordered by likelihood
DEFAULT_ENCODINGS = [
    'utf-8',
    'utf-8-sig',  # UTF-8 with BOM
    'cp1252',     # Windows-1252
    'latin-1',
]

# Bytes inspected when deciding whether a file is binary
BINARY_SAMPLE_SIZE = 8192

BINARY_MIME_PREFIXES = ('image/', 'audio/', 'video/', 'font/')

logger = logging.getLogger(__name__)


class EncodingDetector:
    """Handles encoding detection and text decoding."""

    def __init__(self, fallback_encodings: Optional[List[str]] = None):
        self.encodings = fallback_encodings or DEFAULT_ENCODINGS

    def decode_bytes(self, content: bytes, file_path: Optional[str] = None) -> Tuple[Optional[str], Optional[str], Optional[str]]:
        """
        Attempt to decode bytes to string using multiple encodings.

        Args:
            content: Raw bytes to decode.
            file_path: Optional file path for log messages.

        Returns:
            Tuple of (decoded_text, encoding_used, error_message).
            If successful: (text, encoding, None)
            If failed: (None, None, error_message)
        """
        has_bom, bom_encoding = self.has_bom(content)
        if has_bom:
            try:
                return content.decode(bom_encoding), bom_encoding, None
            except UnicodeDecodeError as e:
                logger.debug(f"BOM decode failed for {file_path}: {e}")

        last_error = None
        for encoding in self.encodings:
            try:
                decoded = content.decode(encoding)
                logger.debug(f"Decoded {file_path} using {encoding}")
                return decoded, encoding, None
            except UnicodeDecodeError as e:
                last_error = e

        error_msg = f"Unable to decode file with available encodings ({', '.join(self.encodings)})"
        if last_error is not None:
            error_msg += f" - failed at byte {last_error.start}"
        logger.info(f"Encoding detection failed for {file_path}")
        return None, None, error_msg

    def is_binary(self, content: bytes, file_path: Optional[str] = None) -> bool:
        """
        Check if content looks like binary data rather than text.

        Uses a sample of the content:
        1. Content with a BOM is text (UTF-16/32 contain NUL bytes)
        2. A NUL byte in the sample means binary
        3. A sample that is valid UTF-8 is text
        4. Otherwise mimetypes decides, so legacy-encoded text stays text
        """
        if self.has_bom(content)[0]:
            return False

        sample = content[:BINARY_SAMPLE_SIZE]
        if b'\x00' in sample:
            return True

        try:
            sample.decode('utf-8')
            return False
        except UnicodeDecodeError as e:
            # a multi-byte character cut off by the sample boundary
            if len(content) > len(sample) and e.start >= len(sample) - 3:
                return False

        if file_path is None:
            return False
        mime_type, _ = mimetypes.guess_type(file_path)
        return bool(mime_type) and mime_type.startswith(BINARY_MIME_PREFIXES)

    def has_bom(self, content: bytes) -> Tuple[bool, Optional[str]]:
        """Check if content starts with a Byte Order Mark (BOM)."""
        bom_checks = [
            (b'\xef\xbb\xbf', 'utf-8-sig'),
            (b'\xff\xfe\x00\x00', 'utf-32'),
            (b'\x00\x00\xfe\xff', 'utf-32'),
            (b'\xff\xfe', 'utf-16'),
            (b'\xfe\xff', 'utf-16'),
        ]
        for bom, encoding in bom_checks:
            if content.startswith(bom):
                return True, encoding
        return False, None
