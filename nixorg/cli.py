"""
Converts an exported note archive into Org files.
Each note becomes one `.org` file; attachments are extracted next to it.
"""

from __future__ import annotations

from pathlib import Path

import click
from .config import ConfigError, build_config
from .converter import convert_archive
from .exceptions import NixorgError
from .filesystem import normalize_archive_path

__all__ = ["cli"]


def _warn(message: str) -> None:
    click.echo(message, err=True)


@click.command()
@click.version_option()
@click.option(
    "--input",
    "-i",
    "input_path",
    required=True,
    help="Path to the exported note archive.",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    help="Directory for the converted notes (default: beside the archive).",
)
@click.option("--extension", help="File extension of the generated notes.")
@click.option("--startup", help="Value of the #+STARTUP: directive.")
@click.option(
    "--no-evernote-url",
    "no_evernote_url",
    is_flag=True,
    default=False,
    help="Do not add the #+EVERNOTE_URL: deep link.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Report skipped tags.")
def cli(
    input_path: str,
    output_dir: str | None = None,
    extension: str | None = None,
    startup: str | None = None,
    no_evernote_url: bool = False,
    verbose: bool = False,
):
    """
    Entry point for converting a note archive to Org files.

    Args:
        input_path: Path to the archive to convert.
        output_dir: Optional directory for the converted notes.
        extension: Override for the note file extension.
        startup: Override for the `#+STARTUP:` directive.
        no_evernote_url: Drop the `#+EVERNOTE_URL:` header line.
        verbose: Print a notice for every unrecognized tag.

    Raises:
        click.BadParameter: If the archive path or a configuration value is invalid.
        click.ClickException: If the archive cannot be parsed or an output
            file cannot be written.

    Examples:
        nixorg --input exports/notes.nnex
    """
    click.echo(f"input: {input_path}")

    try:
        archive_path = normalize_archive_path(input_path)
    except NixorgError as error:
        raise click.BadParameter(str(error), param_hint="'--input'") from error

    try:
        config = build_config(
            archive_path.parent,
            extension=extension,
            startup=startup,
            evernote_url=False if no_evernote_url else None,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        report = convert_archive(
            archive_path,
            config,
            output_dir=Path(output_dir) if output_dir else None,
            warn=_warn if verbose else None,
        )
    except (NixorgError, ValueError) as error:
        raise click.ClickException(str(error)) from error

    click.echo(
        f"\nThere are {report.notes} notes and {report.attachments} attachments created"
    )


if __name__ == "__main__":
    cli()
