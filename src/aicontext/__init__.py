"""Build reproducible AI-assistant context documents from a project directory."""

__version__ = "2.0.0"
