"""Conversion of a whole archive into Org files and attachments."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from .archive import parse_archive
from .attachments import AttachmentResolver, decode_payload
from .config import NixorgConfig
from .exceptions import OutputError
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    ensure_directory,
    get_max_file_size,
    output_dir_for,
    write_bytes,
    write_text,
)
from .models import ConversionReport, Note
from .properties import format_properties
from .slugify import sanitize_title
from .tokenizer import tokenize
from .translator import translate

UNTITLED_STEM = "untitled"


def note_stem(note: Note) -> str:
    """File stem shared by a note's Org file and its attachment directory."""
    return sanitize_title(note.title) or UNTITLED_STEM


def write_attachments(note: Note, media_dir: Path) -> int:
    """Decode a note's resources into `media_dir`.

    The directory is only created when the note has resources. Resources
    sharing a display name overwrite each other; the last one wins.

    Args:
        note: Note whose resources are written.
        media_dir: Per-note attachment directory.

    Returns:
        int: Number of attachment files written.

    Raises:
        AttachmentError: If a payload cannot be decoded.
        OutputError: If the directory or a file cannot be written.
    """
    if not note.resources:
        return 0

    ensure_directory(media_dir)
    for resource in note.resources:
        if not resource.display_name:
            error_message = f"Note {note.title!r} has an attachment without a usable file name"
            raise OutputError(error_message)
        write_bytes(media_dir / resource.display_name, decode_payload(resource))
    return len(note.resources)


def render_note(
    note: Note,
    media_dir: Path,
    config: NixorgConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> str:
    """Render the full Org document of a note: header block plus body.

    Raises:
        InvalidTimestampError: If the note's creation timestamp is malformed.
    """
    config = config or NixorgConfig()
    resolver = AttachmentResolver.from_resources(note.resources)
    body = translate(tokenize(note.content), resolver, media_dir, warn=warn)
    return format_properties(note, config) + body


def convert_note(
    note: Note,
    output_dir: Path,
    config: NixorgConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> tuple[Path, int]:
    """Write one note and its attachments below `output_dir`.

    Args:
        note: Note to convert.
        output_dir: Directory receiving the note file and attachment directory.
        config: Conversion settings; defaults to a new `NixorgConfig`.
        warn: Optional callback for non-fatal notices.

    Returns:
        tuple[Path, int]: Path of the written note file and the number of
            attachments written.

    Raises:
        AttachmentError: If an attachment payload cannot be decoded.
        InvalidTimestampError: If the creation timestamp is malformed.
        OutputError: If any file or directory cannot be written.
    """
    config = config or NixorgConfig()
    stem = note_stem(note)
    media_dir = output_dir / stem

    attachment_count = write_attachments(note, media_dir)
    document = render_note(note, media_dir, config, warn=warn)

    note_path = output_dir / f"{stem}{config.extension}"
    write_text(note_path, document)
    return note_path, attachment_count


def convert_archive(
    archive_path: Path,
    config: NixorgConfig | None = None,
    output_dir: Path | None = None,
    warn: Callable[[str], None] | None = None,
) -> ConversionReport:
    """Convert every note of an archive, in archive order.

    Notes are written next to the archive, in a directory named after its
    stem, unless `output_dir` is given. The first fatal error aborts the run.

    Args:
        archive_path: Path to the exported archive.
        config: Conversion settings; defaults to a new `NixorgConfig`.
        output_dir: Optional override for the output directory.
        warn: Optional callback for non-fatal notices.

    Returns:
        ConversionReport: Output directory, counts, and written note paths.

    Raises:
        ArchiveError: If the archive is missing, too large, or malformed.
        AttachmentError: If an attachment payload cannot be decoded.
        InvalidTimestampError: If a creation timestamp is malformed.
        OutputError: If any file or directory cannot be written.
        ValueError: If the size-limit environment override is invalid.

    Examples:
        report = convert_archive(Path("notes.nnex"))
        print(report.notes, report.attachments)
    """
    config = config or NixorgConfig()

    stat_result = collect_file_stat(archive_path)
    enforce_file_size(stat_result, get_max_file_size(default=config.max_file_size), archive_path)

    notes = parse_archive(archive_path)
    report = ConversionReport(output_dir=ensure_directory(output_dir or output_dir_for(archive_path)))

    for note in notes:
        note_path, attachment_count = convert_note(note, report.output_dir, config, warn=warn)
        report.written.append(note_path)
        report.notes += 1
        report.attachments += attachment_count

    return report
