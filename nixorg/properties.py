"""Org header block built from note metadata."""

from __future__ import annotations

import re
from datetime import datetime

from .config import NixorgConfig
from .constants import EVERNOTE_URL_TEMPLATE
from .exceptions import InvalidTimestampError
from .models import Note

_EPOCH_MILLISECONDS = re.compile(r"[+-]?[0-9]+")


def format_timestamp(created: str, date_format: str, title: str = "") -> str:
    """Render an epoch-milliseconds string as local time.

    Args:
        created: Creation time in milliseconds since the epoch, as text.
        date_format: ``strftime`` format for the rendered value.
        title: Title of the note, used in error messages.

    Returns:
        str: Formatted local timestamp, truncated to whole seconds.

    Raises:
        InvalidTimestampError: If `created` is not an integer.

    Examples:
        format_timestamp("1577880000000", "%Y-%m-%d")
    """
    if not _EPOCH_MILLISECONDS.fullmatch(created):
        raise InvalidTimestampError(title, created)

    milliseconds = int(created)
    # Truncate toward zero so pre-1970 values keep their whole second
    seconds = -(-milliseconds // 1000) if milliseconds < 0 else milliseconds // 1000
    try:
        moment = datetime.fromtimestamp(seconds).astimezone()
    except (OverflowError, OSError, ValueError) as error:
        raise InvalidTimestampError(title, created) from error
    return moment.strftime(date_format)


def format_properties(note: Note, config: NixorgConfig | None = None) -> str:
    """Build the ``#+KEY: value`` header that precedes a note body.

    The title and startup directive are always present; every other line is
    written only when the note carries that piece of metadata. The title is
    written exactly as the archive holds it.

    Args:
        note: Parsed note.
        config: Controls the startup directive, date format, and deep link.
            Defaults to a new `NixorgConfig` when omitted.

    Returns:
        str: Header lines, each ending with a newline.

    Raises:
        InvalidTimestampError: If the note's creation timestamp is malformed.
    """
    config = config or NixorgConfig()
    attributes = note.attributes
    lines = [
        f"#+TITLE: {note.title}",
        f"#+STARTUP: {config.startup}",
    ]

    if attributes.author:
        lines.append(f"#+AUTHOR: {attributes.author}")
    if note.tags:
        lines.append(f"#+TAGS: {' '.join(note.tags)}")
    if note.created:
        lines.append(f"#+DATE: {format_timestamp(note.created, config.date_format, note.title)}")
    if attributes.latitude > 0:
        lines.append(f"#+LAT: {attributes.latitude:f}")
        lines.append(f"#+LON: {attributes.longitude:f}")
    if attributes.source:
        lines.append(f"#+SOURCE: {attributes.source}")
    if attributes.source_url:
        lines.append(f"#+DESCRIPTION: {attributes.source_url}")
    if note.guid and config.evernote_url:
        lines.append(f"#+EVERNOTE_URL: {EVERNOTE_URL_TEMPLATE.format(guid=note.guid)}")

    return "".join(f"{line}\n" for line in lines)
