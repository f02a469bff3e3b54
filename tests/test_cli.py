from __future__ import annotations

from pathlib import Path

from helpers import write_archive
from nixorg.cli import cli


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(body, encoding="utf-8")
    return path


def test_cli_converts_archive(cli_runner, sample_archive: Path):
    result = cli_runner.invoke(cli, ["--input", str(sample_archive)])

    assert result.exit_code == 0, result.output
    assert f"input: {sample_archive}" in result.output
    assert "There are 2 notes and 1 attachments created" in result.output
    output_dir = sample_archive.parent / "notes"
    assert (output_dir / "shopping-list.org").exists()
    assert (output_dir / "plain-draft.org").exists()
    assert (output_dir / "shopping-list" / "photo.png").read_bytes() == b"Hello"


def test_cli_short_option_and_output_dir(cli_runner, sample_archive: Path, tmp_path: Path):
    target = tmp_path / "converted"

    result = cli_runner.invoke(cli, ["-i", str(sample_archive), "--output-dir", str(target)])

    assert result.exit_code == 0, result.output
    assert (target / "shopping-list.org").exists()
    assert not (sample_archive.parent / "notes").exists()


def test_cli_requires_input(cli_runner):
    result = cli_runner.invoke(cli, [])

    assert result.exit_code != 0
    assert "--input" in result.output


def test_cli_rejects_missing_archive(cli_runner, tmp_path: Path):
    result = cli_runner.invoke(cli, ["--input", str(tmp_path / "missing.nnex")])

    assert result.exit_code != 0
    assert "does not exist" in result.output


def test_cli_reports_malformed_archive(cli_runner, tmp_path: Path):
    archive = write_archive(tmp_path, "<Query><Note>")

    result = cli_runner.invoke(cli, ["--input", str(archive)])

    assert result.exit_code != 0
    assert "Malformed archive" in result.output


def test_cli_reports_invalid_timestamp(cli_runner, tmp_path: Path):
    archive = write_archive(
        tmp_path, "<Query><Note><Title>Late</Title><Created>soon</Created></Note></Query>"
    )

    result = cli_runner.invoke(cli, ["--input", str(archive)])

    assert result.exit_code != 0
    assert "invalid creation timestamp" in result.output


def test_cli_overrides(cli_runner, sample_archive: Path):
    result = cli_runner.invoke(
        cli,
        [
            "--input",
            str(sample_archive),
            "--extension",
            ".txt",
            "--startup",
            "overview",
            "--no-evernote-url",
        ],
    )

    assert result.exit_code == 0, result.output
    document = (sample_archive.parent / "notes" / "shopping-list.txt").read_text(encoding="utf-8")
    assert "#+STARTUP: overview\n" in document
    assert "EVERNOTE_URL" not in document


def test_cli_reads_config_beside_archive(cli_runner, sample_archive: Path):
    _write_pyproject(sample_archive.parent, '[tool.nixorg]\nextension = ".md"\n')

    result = cli_runner.invoke(cli, ["--input", str(sample_archive)])

    assert result.exit_code == 0, result.output
    assert (sample_archive.parent / "notes" / "shopping-list.md").exists()


def test_cli_rejects_invalid_config(cli_runner, sample_archive: Path):
    result = cli_runner.invoke(cli, ["--input", str(sample_archive), "--extension", "org"])

    assert result.exit_code != 0
    assert "`extension` must start with a dot" in result.output


def test_cli_verbose_reports_skipped_tags(cli_runner, tmp_path: Path):
    archive = write_archive(
        tmp_path,
        "<Query><Note><Title>x</Title><Content>&lt;marquee&gt;hi&lt;/marquee&gt;</Content></Note></Query>",
    )

    quiet = cli_runner.invoke(cli, ["--input", str(archive)])
    verbose = cli_runner.invoke(cli, ["--input", str(archive), "--verbose"])

    assert quiet.exit_code == 0
    assert "skip token" not in quiet.output
    assert verbose.exit_code == 0
    assert "skip token: marquee" in verbose.output
