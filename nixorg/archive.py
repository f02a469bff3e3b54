"""Parsing of note archives into `Note` records."""

from __future__ import annotations

from pathlib import Path

from lxml import etree

from .exceptions import ArchiveError
from .models import Note, NoteAttributes, Resource


def _text(element: etree._Element | None, path: str) -> str:
    if element is None:
        return ""
    return (element.findtext(path) or "").strip()


def _coordinate(element: etree._Element | None, path: str, title: str) -> float:
    raw = _text(element, path)
    if not raw:
        return 0.0
    try:
        return float(raw)
    except ValueError as error:
        error_message = f"Note {title!r} has a malformed {path} value: {raw!r}"
        raise ArchiveError(error_message) from error


def _parse_resource(element: etree._Element) -> Resource:
    data = element.find("Data")
    encoding = "hex"
    if data is not None:
        encoding = (data.get("encoding") or "hex").strip() or "hex"
    return Resource(
        mime=_text(element, "Mime"),
        data=(data.findtext("Body") or "") if data is not None else "",
        encoding=encoding,
        hash=_text(data, "BodyHash"),
        file_name=_text(element.find("ResourceAttributes"), "FileName"),
    )


def parse_note(element: etree._Element) -> Note:
    """Build a `Note` from a ``<Note>`` element.

    Missing child elements read as empty values. Content is kept exactly as
    written, and so is the title (it is only trimmed when it becomes a file
    name); the remaining scalar fields are stripped of surrounding whitespace.

    Args:
        element: ``<Note>`` element of the archive.

    Returns:
        Note: Parsed note record.

    Raises:
        ArchiveError: If the latitude or longitude is not a number.
    """
    title = element.findtext("Title") or ""
    attributes = element.find("Attributes")
    return Note(
        guid=_text(element, "Guid"),
        title=title,
        content=element.findtext("Content") or "",
        created=_text(element, "Created"),
        tags=[(tag.text or "").strip() for tag in element.findall("Tag")],
        attributes=NoteAttributes(
            author=_text(attributes, "Author"),
            latitude=_coordinate(attributes, "Latitude", title),
            longitude=_coordinate(attributes, "Longitude", title),
            source=_text(attributes, "Source"),
            source_url=_text(attributes, "SourceUrl"),
        ),
        resources=[_parse_resource(resource) for resource in element.findall("NoteResource")],
    )


def parse_archive_bytes(data: bytes) -> list[Note]:
    """Parse archive content into notes, in document order.

    Args:
        data: Raw XML of the archive.

    Returns:
        list[Note]: One record per ``<Note>`` child of the root element.

    Raises:
        ArchiveError: If the XML is malformed or a note has malformed fields.

    Examples:
        parse_archive_bytes(b"<Query><Note><Title>Hi</Title></Note></Query>")
    """
    parser = etree.XMLParser(huge_tree=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as error:
        raise ArchiveError(f"Malformed archive: {error}") from error

    return [parse_note(element) for element in root.iterfind("Note")]


def parse_archive(archive_path: Path) -> list[Note]:
    """Read and parse an archive file.

    Args:
        archive_path: Path to the exported archive.

    Returns:
        list[Note]: Notes in archive order.

    Raises:
        ArchiveError: If the file cannot be read or parsed.

    Examples:
        notes = parse_archive(Path("export.nnex"))
    """
    try:
        data = archive_path.read_bytes()
    except OSError as error:
        raise ArchiveError(f"Error opening file {archive_path}: {error}") from error

    try:
        return parse_archive_bytes(data)
    except ArchiveError as error:
        raise ArchiveError(f"{archive_path}: {error}") from error
