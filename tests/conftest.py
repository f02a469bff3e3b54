from pathlib import Path

import pytest
from click.testing import CliRunner

from helpers import write_archive


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def sample_archive(tmp_path: Path) -> Path:
    """Writes the two-note sample archive into a temporary directory."""
    return write_archive(tmp_path)
