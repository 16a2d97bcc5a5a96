"""
Custom exceptions for Mythic Scribe.

Only contract violations raise. Cursor positions that match nothing, and text
that is malformed because the user is still typing, resolve to None instead.
"""


class ScribeError(Exception):
    """Base exception for all Mythic Scribe errors."""

    pass


class SchemaDefinitionError(ScribeError):
    """Raised when supplied schema data does not describe a valid schema tree."""

    def __init__(self, message: str, path: list[str] | None = None):
        self.path = path or []
        location = ""
        if self.path:
            location = f" at {'.'.join(self.path)}"
        super().__init__(f"{message}{location}")


class DatasetError(ScribeError):
    """Raised when dataset records cannot be loaded into registries."""

    pass
