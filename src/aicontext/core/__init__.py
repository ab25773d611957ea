"""Core components for aicontext."""

from .models import Config, ConfigDelta, FileNode, GenerationResult, Statistics
from .presets import BASE_CONFIG, CONFIG_FILE_NAME, PRESETS, Preset
from .tokenizer import TokenCounter, estimate_tokens

__all__ = [
    "Config",
    "ConfigDelta",
    "FileNode",
    "GenerationResult",
    "Statistics",
    "BASE_CONFIG",
    "CONFIG_FILE_NAME",
    "PRESETS",
    "Preset",
    "TokenCounter",
    "estimate_tokens",
]
