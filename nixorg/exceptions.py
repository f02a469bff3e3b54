"""Package-specific exception types."""

from __future__ import annotations


class NixorgError(Exception):
    """Base class for conversion errors that abort the whole run."""


class ArchiveError(NixorgError):
    """Raised when the note archive cannot be opened, read, or parsed."""


class InvalidTimestampError(NixorgError, ValueError):
    """Raised when a note's creation timestamp is not an integer.

    Args:
        title: Title of the offending note.
        value: Raw timestamp text found in the archive.
    """

    def __init__(self, title: str, value: str):
        self.title = title
        self.value = value
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Note {self.title!r} has an invalid creation timestamp: {self.value!r} "
            "(expected epoch milliseconds)"
        )


class AttachmentError(NixorgError):
    """Raised when an attachment payload cannot be decoded."""


class OutputError(NixorgError, IOError):
    """Raised when an output directory or file cannot be written."""
