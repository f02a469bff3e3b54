from __future__ import annotations

import os
from pathlib import Path

import pytest

from nixorg.exceptions import ArchiveError, OutputError
from nixorg.filesystem import (
    collect_file_stat,
    enforce_file_size,
    ensure_directory,
    get_max_file_size,
    normalize_archive_path,
    output_dir_for,
    write_bytes,
    write_text,
)


def test_get_max_file_size_uses_default(monkeypatch):
    monkeypatch.delenv("NIXORG_MAX_FILE_SIZE", raising=False)
    assert get_max_file_size(default=123) == 123


def test_get_max_file_size_reads_environment(monkeypatch):
    monkeypatch.setenv("NIXORG_MAX_FILE_SIZE", "2048")
    assert get_max_file_size(default=123) == 2048


@pytest.mark.parametrize("value", ["invalid", "0", "-5"])
def test_get_max_file_size_rejects_bad_values(monkeypatch, value: str):
    monkeypatch.setenv("NIXORG_MAX_FILE_SIZE", value)
    with pytest.raises(ValueError):
        get_max_file_size()


def test_normalize_archive_path_resolves_relative_paths(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "notes.nnex").write_text("<Query/>", encoding="utf-8")

    assert normalize_archive_path("notes.nnex") == (tmp_path / "notes.nnex").resolve()


def test_normalize_archive_path_missing_file(tmp_path: Path):
    with pytest.raises(ArchiveError) as exc_info:
        normalize_archive_path(str(tmp_path / "missing.nnex"))
    assert "does not exist" in str(exc_info.value)


def test_normalize_archive_path_rejects_directory(tmp_path: Path):
    with pytest.raises(ArchiveError) as exc_info:
        normalize_archive_path(str(tmp_path))
    assert "not a regular file" in str(exc_info.value)


def test_collect_file_stat_handles_missing_file(tmp_path: Path):
    with pytest.raises(ArchiveError):
        collect_file_stat(tmp_path / "missing.nnex")


def test_collect_file_stat_rejects_directory(tmp_path: Path):
    with pytest.raises(ArchiveError):
        collect_file_stat(tmp_path)


def test_enforce_file_size(tmp_path: Path):
    target = tmp_path / "notes.nnex"
    target.write_bytes(b"x" * 10)
    stat_result = os.stat(target)

    enforce_file_size(stat_result, 10, target)
    with pytest.raises(ArchiveError) as exc_info:
        enforce_file_size(stat_result, 9, target)
    assert "exceeds the maximum allowed size" in str(exc_info.value)


def test_output_dir_for_uses_archive_stem():
    assert output_dir_for(Path("/data/exports/notes.nnex")) == Path("/data/exports/notes")


def test_ensure_directory_creates_parents(tmp_path: Path):
    target = tmp_path / "a" / "b"
    assert ensure_directory(target) == target
    assert target.is_dir()
    ensure_directory(target)


def test_ensure_directory_fails_when_file_is_in_the_way(tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(OutputError):
        ensure_directory(blocker)


def test_write_text_replaces_existing_file(tmp_path: Path):
    target = tmp_path / "note.org"
    target.write_text("old", encoding="utf-8")

    write_text(target, "#+TITLE: é\n")

    assert target.read_text(encoding="utf-8") == "#+TITLE: é\n"
    assert sorted(path.name for path in tmp_path.iterdir()) == ["note.org"]


def test_write_text_into_missing_directory_fails(tmp_path: Path):
    with pytest.raises(OutputError):
        write_text(tmp_path / "missing" / "note.org", "x")


def test_write_bytes_into_missing_directory_fails(tmp_path: Path):
    with pytest.raises(OutputError):
        write_bytes(tmp_path / "missing" / "photo.png", b"x")


def test_write_bytes(tmp_path: Path):
    target = tmp_path / "photo.png"
    write_bytes(target, b"\x89PNG")
    assert target.read_bytes() == b"\x89PNG"
