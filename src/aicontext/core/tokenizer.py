"""
Token counting functionality for aicontext.

The statistics in a context document use `estimate_tokens`, a deterministic
proxy proportional to content length. `TokenCounter` can additionally count
a finished document exactly with tiktoken when the encoding is available.
"""

import logging
import math
from typing import Any, Optional

import tiktoken

logger = logging.getLogger(__name__)

# Roughly four characters per token for source code and English prose
TOKENS_PER_CHAR = 0.25


def estimate_tokens(text: str) -> int:
    """
    Estimate the token count of `text`.

    The result is `ceil(len(text) * 0.25)`: deterministic and monotonic in the
    length of the text. It is a budget signal, not a tokenizer.
    """
    if not text:
        return 0
    return math.ceil(len(text) * TOKENS_PER_CHAR)


class TokenCounter:
    """
    Exact token counting with tiktoken.

    Encodings are fetched lazily by tiktoken and may be unavailable offline;
    in that case the counter reports itself unavailable and counts 0.
    """

    def __init__(self, encoding_name: str = "cl100k_base"):
        """
        Initialize the token counter.

        Args:
            encoding_name: The name of the tiktoken encoding to use.
                         Default is cl100k_base (used by GPT-4).
        """
        self.encoding_name = encoding_name
        self.encoder: Optional[Any] = None

        try:
            self.encoder = tiktoken.get_encoding(encoding_name)
        except Exception as e:
            logger.warning(f"Failed to initialize token encoder '{encoding_name}': {e}")

    @property
    def is_available(self) -> bool:
        """Check if token counting is available."""
        return self.encoder is not None

    def count(self, text: str) -> int:
        """
        Count tokens in the given text.

        Returns:
            Number of tokens, or 0 if counting is unavailable.
        """
        if not self.is_available or not text:
            return 0

        try:
            return len(self.encoder.encode(text, disallowed_special=()))
        except Exception as e:
            logger.debug(f"Error counting tokens: {e}")
            return 0
