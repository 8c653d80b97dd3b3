"""Reflow of rendered comment text."""

from __future__ import annotations

import re

_LINE_SPLIT = re.compile(r"\s*?\n")


def wrap_line(line: str, cols: int = 80, tabsize: int | None = 2) -> list[str]:
    """Split text along whitespace into pieces at most `cols` wide.

    Tabs expand to `tabsize` spaces. Each piece is right-stripped. Embedded
    newlines always break, and runs of blank lines are kept as empty pieces.
    Text that is only whitespace yields no pieces at all.

    Args:
        line: Text to wrap; may span several lines.
        cols: Maximum width of a piece. Words longer than `cols` are split.
        tabsize: Spaces per tab, or None to leave tabs alone.

    Returns:
        list[str]: The wrapped pieces.

    Examples:
        wrap_line("some line that will wrap", 10)  # ["some line", "that will", "wrap"]
        wrap_line("     line that will wrap    ", 10)  # ["     line", "that will", "wrap"]
        wrap_line("   ", 10)  # []
    """
    if tabsize is not None:
        line = line.replace("\t", " " * tabsize)

    pattern = re.compile(rf"(.{{1,{cols}}})( +|$\r?\n?)|(.{{1,{cols}}})", re.MULTILINE)
    pieces = _LINE_SPLIT.split(pattern.sub(r"\1\3\n", line))
    while pieces and pieces[-1] == "":
        pieces.pop()
    return pieces
