"""Error taxonomy for aicontext.

None of these errors aborts a generation run once discovery has produced a
candidate set. Callers catch them at the seam where they are raised and
degrade to defaults, warnings or inline placeholders.
"""


class AIContextError(Exception):
    """Base class for all aicontext errors."""


class ConfigParseError(AIContextError):
    """The persisted configuration file could not be parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not parse {path}: {reason}")


class UnknownPreset(AIContextError):
    """A preset name is not part of the catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Preset '{name}' not found.")


class EnumerationFailure(AIContextError):
    """The file enumeration mechanism could not run."""


class FileReadError(AIContextError):
    """A single file could not be read or decoded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(reason)


class PersistError(AIContextError):
    """The configuration could not be written to disk."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Error saving configuration to {path}: {reason}")
