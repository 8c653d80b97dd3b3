from __future__ import annotations

from pathlib import Path

import pytest

from lazy_comments.exceptions import SourceReadError
from lazy_comments.filesystem import (
    DEFAULT_MAX_FILE_SIZE,
    MAX_FILE_SIZE_ENV_VAR,
    get_max_file_size,
    read_source,
)


def test_get_max_file_size_uses_default(monkeypatch):
    monkeypatch.delenv(MAX_FILE_SIZE_ENV_VAR, raising=False)
    assert get_max_file_size() == DEFAULT_MAX_FILE_SIZE
    assert get_max_file_size(default=100) == 100


def test_get_max_file_size_reads_environment(monkeypatch):
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "204800")
    assert get_max_file_size(default=100) == 204800


@pytest.mark.parametrize("value", ["big", "0", "-5"])
def test_get_max_file_size_rejects_invalid_values(monkeypatch, value):
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, value)
    with pytest.raises(ValueError):
        get_max_file_size()


def test_read_source_keeps_line_endings(tmp_path: Path):
    target = tmp_path / "crlf.py"
    target.write_bytes(b"# comment\r\nsubject\r\n")
    assert read_source(target) == "# comment\r\nsubject\r\n"


def test_read_source_enforces_size_limit(tmp_path: Path):
    target = tmp_path / "large.py"
    target.write_text("X" * 20, encoding="utf-8")

    with pytest.raises(SourceReadError, match="maximum allowed size"):
        read_source(target, max_file_size=10)


def test_read_source_uses_environment_limit(tmp_path: Path, monkeypatch):
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "10")
    target = tmp_path / "large.py"
    target.write_text("X" * 20, encoding="utf-8")

    with pytest.raises(SourceReadError):
        read_source(target)


def test_read_source_reports_invalid_environment_limit(tmp_path: Path, monkeypatch):
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "lots")
    target = tmp_path / "small.py"
    target.write_text("x", encoding="utf-8")

    with pytest.raises(SourceReadError, match=MAX_FILE_SIZE_ENV_VAR):
        read_source(target)


def test_read_source_rejects_invalid_utf8(tmp_path: Path):
    target = tmp_path / "binary.py"
    target.write_bytes(b"# \xff\xfe\n")

    with pytest.raises(SourceReadError, match="Invalid UTF-8"):
        read_source(target)


def test_read_source_rejects_missing_files(tmp_path: Path):
    with pytest.raises(SourceReadError):
        read_source(tmp_path / "missing.py")


def test_read_source_rejects_directories(tmp_path: Path):
    with pytest.raises(SourceReadError, match="not a regular file"):
        read_source(tmp_path)


def test_source_read_error_is_an_os_error(tmp_path: Path):
    with pytest.raises(OSError):
        read_source(tmp_path / "missing.py")
