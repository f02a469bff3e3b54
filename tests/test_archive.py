from __future__ import annotations

from pathlib import Path

import pytest

from helpers import SAMPLE_CONTENT
from nixorg.archive import parse_archive, parse_archive_bytes
from nixorg.exceptions import ArchiveError
from nixorg.models import NoteAttributes, Resource


def test_parse_archive_reads_all_fields(sample_archive: Path):
    first, second = parse_archive(sample_archive)

    assert first.guid == "abc-123"
    assert first.title == "Shopping List"
    assert first.content == SAMPLE_CONTENT
    assert first.created == "1577880000000"
    assert first.tags == ["food", "weekly"]
    assert first.attributes == NoteAttributes(
        author="Sam",
        latitude=48.5,
        longitude=2.25,
        source="mobile",
        source_url="https://example.com",
    )
    assert first.resources == [
        Resource(
            mime="image/png",
            data="48656c6c6f",
            encoding="hex",
            hash="deadbeef",
            file_name="photo.png",
        )
    ]

    assert second.title == "Plain (draft)"
    assert second.created == ""
    assert second.tags == []
    assert second.attributes == NoteAttributes()
    assert second.resources == []


def test_parse_archive_bytes_keeps_document_order():
    notes = parse_archive_bytes(
        b"<Query><Note><Title>B</Title></Note><Other/><Note><Title>A</Title></Note></Query>"
    )
    assert [note.title for note in notes] == ["B", "A"]


def test_resource_without_data_element():
    (note,) = parse_archive_bytes(
        b"<Query><Note><NoteResource><Mime>text/plain</Mime></NoteResource></Note></Query>"
    )
    assert note.resources == [Resource(mime="text/plain")]


def test_resource_encoding_attribute_is_kept():
    (note,) = parse_archive_bytes(
        b'<Query><Note><NoteResource><Data encoding="base64"><Body>aGk=</Body>'
        b"<BodyHash>h</BodyHash></Data></NoteResource></Note></Query>"
    )
    assert note.resources[0].encoding == "base64"
    assert note.resources[0].data == "aGk="


def test_empty_archive_has_no_notes():
    assert parse_archive_bytes(b"<Query/>") == []


def test_malformed_xml_raises():
    with pytest.raises(ArchiveError) as exc_info:
        parse_archive_bytes(b"<Query><Note></Query>")
    assert "Malformed archive" in str(exc_info.value)


def test_malformed_latitude_raises():
    with pytest.raises(ArchiveError) as exc_info:
        parse_archive_bytes(
            b"<Query><Note><Title>Here</Title><Attributes><Latitude>north</Latitude>"
            b"</Attributes></Note></Query>"
        )
    assert "Latitude" in str(exc_info.value)


def test_missing_archive_raises(tmp_path: Path):
    with pytest.raises(ArchiveError) as exc_info:
        parse_archive(tmp_path / "missing.nnex")
    assert "Error opening file" in str(exc_info.value)


def test_parse_error_mentions_archive_path(tmp_path: Path):
    target = tmp_path / "broken.nnex"
    target.write_bytes(b"<Query>")

    with pytest.raises(ArchiveError) as exc_info:
        parse_archive(target)
    assert str(target) in str(exc_info.value)


def test_title_is_kept_as_written():
    (note,) = parse_archive_bytes(
        b"<Query><Note><Title> Spaced </Title><Guid> g-1 </Guid></Note></Query>"
    )
    assert note.title == " Spaced "
    assert note.guid == "g-1"
