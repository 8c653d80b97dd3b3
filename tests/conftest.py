from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Runner for invoking the lazy-comments command group."""
    return CliRunner()


@pytest.fixture()
def write_source(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a UTF-8 source file under `tmp_path` and return its path."""

    def write(filename: str, content: str) -> Path:
        path = tmp_path / filename
        path.write_text(content, encoding="utf-8")
        return path

    return write
