"""Line indexing for source text."""

from __future__ import annotations

import re

_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(text: str) -> list[str]:
    """Split text into addressable lines.

    Splits on ``\\n`` and ``\\r\\n``. Trailing empty lines are dropped, but the
    result always holds at least one line, so empty (or newline-only) input
    yields ``[""]``.

    Args:
        text: Source text.

    Returns:
        list[str]: Lines without their terminators.

    Examples:
        split_lines("a\\r\\nb\\n")  # ["a", "b"]
        split_lines("")  # [""]
    """
    lines = _LINE_BREAK.split(text)
    while lines and lines[-1] == "":
        lines.pop()
    return lines or [""]


def line_of(text: str, offset: int) -> int:
    """Return the zero-based line containing `offset`.

    Counts the newlines in ``text[:offset]``.

    Examples:
        line_of("zero\\none\\ntwo", 9)  # 2
    """
    return text.count("\n", 0, offset)


def match_index(lines: list[str], pattern: re.Pattern[str]) -> int | None:
    """Return the index of the first line matching `pattern`, or None."""
    for index, line in enumerate(lines):
        if pattern.search(line):
            return index
    return None
