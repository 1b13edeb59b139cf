from __future__ import annotations

from pathlib import Path
from typing import Dict

import pytest
from click.testing import CliRunner

from tests.helpers.fake_facts import RecordingFacts


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click runner configured for CLI smoke tests."""

    return CliRunner()


@pytest.fixture
def facts() -> RecordingFacts:
    """Provide a deterministic facts source that never touches the live machine."""

    return RecordingFacts()


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Return an empty configuration directory under a temporary home."""

    path = tmp_path / "home" / ".config" / "sysfetch"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def fetch_env(tmp_path: Path, config_dir: Path) -> Dict[str, str]:
    """Environment mapping whose home directory is isolated under ``tmp_path``."""

    return {"HOME": str(tmp_path / "home"), "USER": "alice"}
