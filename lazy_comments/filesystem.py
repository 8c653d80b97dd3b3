"""Filesystem helpers for lazy-comments."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import TextIO

from .config import DocConfig
from .exceptions import SourceReadError

MAX_FILE_SIZE_ENV_VAR = "LAZY_COMMENTS_MAX_FILE_SIZE"
DEFAULT_MAX_FILE_SIZE = DocConfig().max_file_size


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed source file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["LAZY_COMMENTS_MAX_FILE_SIZE"] = "204800"
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


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a regular file.

    Raises:
        SourceReadError: If the path is inaccessible or not a regular file.
    """
    try:
        stat_result = os.stat(filepath)
    except OSError as error:
        raise SourceReadError(f"Error accessing {filepath}: {error}") from error

    if not stat.S_ISREG(stat_result.st_mode):
        raise SourceReadError(f"{filepath} is not a regular file.")

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path) -> None:
    """Guard against files that exceed the configured maximum size.

    Raises:
        SourceReadError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise SourceReadError(error_message)


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading with consistent error handling.

    Raises:
        SourceReadError: If the path is missing, inaccessible, or not a file.
    """
    try:
        return open(filepath, "r", encoding="UTF-8", newline="")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        raise SourceReadError(f"Error accessing {filepath}: {error}") from error


def read_source(filepath: Path, max_file_size: int | None = None) -> str:
    """Read source text for resolution.

    Line endings are kept as written; the line indexer handles both ``\\n``
    and ``\\r\\n``.

    Args:
        filepath: File to read.
        max_file_size: Size limit in bytes; defaults to `get_max_file_size()`.

    Returns:
        str: The file contents.

    Raises:
        SourceReadError: If the file is missing, too large, not a regular file,
            or not valid UTF-8.

    Examples:
        text = read_source(Path("tool.py"))
    """
    if max_file_size is None:
        try:
            max_file_size = get_max_file_size()
        except ValueError as error:
            raise SourceReadError(str(error)) from error

    stat_result = collect_file_stat(filepath)
    enforce_file_size(stat_result, max_file_size, filepath)

    try:
        with safe_read(filepath) as file:
            return file.read()
    except UnicodeDecodeError as error:
        raise SourceReadError(f"Invalid UTF-8 sequence in {filepath}: {error}") from error
