# node_viewer/core/errors.py

from typing import Optional


# --- Acquisition Errors ---
# Everything that can go wrong while obtaining a file from the user. The
# FileLoadingController catches these and turns them into an Error state, so
# none of them can ever take the application down.

class FileError(Exception):
    """Base class for all failures of a single file acquisition."""


class NoFileSelected(FileError):
    """The user closed the picker without choosing a file."""

    def __init__(self):
        super().__init__("No file selected")


class IoError(FileError):
    """Reading the chosen file from disk failed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Reading the file contents: {reason}")


class NameExtractionError(FileError):
    """The selected path has no usable display name."""

    def __init__(self, path: str = ""):
        self.path = path
        super().__init__("Getting the filename from the path")


# --- Classification Errors ---

class ParseError(Exception):
    """
    Raised when element-name extraction hits malformed or undecodable markup.

    The tokenizer's diagnostic is kept together with the line and column it
    reported, counted from the start of the whole buffer.
    """

    def __init__(self, diagnostic: str, line: Optional[int] = None, column: Optional[int] = None):
        self.diagnostic = diagnostic
        self.line = line
        self.column = column
        super().__init__(diagnostic)


# --- Configuration Errors ---

class SettingsError(ValueError):
    """A UI preference value is outside its recognized options."""
