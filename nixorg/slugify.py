"""File-name generation from note titles."""

from __future__ import annotations

from .constants import TITLE_STRIP_CHARS


def sanitize_title(title: str) -> str:
    """Turn a note title into a path-safe file stem.

    Lowercases and trims the title, removes the characters
    ``- ' ( ) , : | ? . / "``, then replaces the remaining spaces with
    hyphens. No other normalization is applied, so two titles can map to
    the same stem.

    Args:
        title: Note title as found in the archive.

    Returns:
        str: Sanitized file stem; empty when nothing survives.

    Examples:
        sanitize_title("  Shopping List: Week 3 ")  # "shopping-list-week-3"
        sanitize_title("What's up?")  # "whats-up"
    """
    stem = title.lower().strip()
    stem = stem.translate(str.maketrans("", "", TITLE_STRIP_CHARS))
    return stem.replace(" ", "-")
