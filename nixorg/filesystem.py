"""Filesystem helpers for nixorg."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE
from .exceptions import ArchiveError, OutputError

MAX_FILE_SIZE_ENV_VAR = "NIXORG_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed archive size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed archive size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["NIXORG_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def normalize_archive_path(raw_path: str) -> Path:
    """Resolve and validate the path of an archive file.

    Args:
        raw_path: User-supplied path to the archive (absolute or relative).

    Returns:
        Path: Absolute path to the archive.

    Raises:
        ArchiveError: If the path does not exist or is not a regular file.

    Examples:
        normalize_archive_path("~/exports/notes.nnex")
    """
    path = Path(raw_path).expanduser()

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ArchiveError(f"Error opening file: {path} does not exist.") from error
    except OSError as error:
        raise ArchiveError(f"Error resolving {path}: {error}") from error

    if not resolved.is_file():
        raise ArchiveError(f"Error opening file: {resolved} is not a regular file.")

    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for the archive.

    Args:
        filepath: Path to the file.

    Returns:
        os.stat_result: File metadata.

    Raises:
        ArchiveError: If the path is inaccessible or not a regular file.
    """
    try:
        stat_result = os.stat(filepath)
    except OSError as error:
        raise ArchiveError(f"Error accessing {filepath}: {error}") from error

    if not stat.S_ISREG(stat_result.st_mode):
        raise ArchiveError(f"{filepath} is not a regular file.")

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against archives that exceed the configured maximum size.

    Raises:
        ArchiveError: If `stat_result.st_size` exceeds `max_size`.

    Examples:
        enforce_file_size(os.stat("notes.nnex"), 102400, Path("notes.nnex"))
    """
    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise ArchiveError(error_message)


def output_dir_for(archive_path: Path) -> Path:
    """Directory beside the archive, named after its stem.

    Examples:
        output_dir_for(Path("/data/notes.nnex"))  # Path("/data/notes")
    """
    return archive_path.parent / archive_path.stem


def ensure_directory(directory: Path) -> Path:
    """Create `directory` (and missing parents) when it does not exist.

    Raises:
        OutputError: If the directory cannot be created or a non-directory
            already occupies the path.
    """
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise OutputError(f"Error creating directory {directory}: {error}") from error
    return directory


def write_bytes(filepath: Path, data: bytes) -> None:
    """Write binary content, replacing any existing file.

    Raises:
        OutputError: If the file cannot be written.
    """
    try:
        filepath.write_bytes(data)
    except OSError as error:
        raise OutputError(f"Error writing {filepath}: {error}") from error


def write_text(filepath: Path, text: str) -> None:
    """Write a UTF-8 text file atomically.

    Content goes to a temporary file in the same directory, which then
    replaces the target, so an interrupted run never leaves a truncated note.

    Raises:
        OutputError: If the file cannot be written or moved into place.

    Examples:
        write_text(Path("out/note.org"), "#+TITLE: Note\\n")
    """
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent, newline=""
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(text)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        os.chmod(temp_path, 0o644)

        # Replace the target with the temporary file (atomic operation)
        os.replace(temp_path, filepath)
    except OSError as error:
        raise OutputError(f"Error writing {filepath}: {error}") from error
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
