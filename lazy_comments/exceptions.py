"""Package-specific exception types."""

from __future__ import annotations


class LazyCommentsError(ValueError):
    """Base class for errors raised while resolving comments and attributes."""


class AnchorRangeError(LazyCommentsError, IndexError):
    """Raised when an anchor resolves to a line outside the document.

    Args:
        line_number: Zero-based line index after negative indices are adjusted.
        line_count: Number of lines in the document.
    """

    def __init__(self, line_number: int, line_count: int):
        self.line_number = line_number
        self.line_count = line_count
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"line_number outside of lines: {self.line_number} ({self.line_count})"


class InvalidAnchorError(LazyCommentsError):
    """Raised when a pattern or resolver anchor cannot locate a line.

    Args:
        anchor: The pattern or callable that failed to produce a line index.
    """

    def __init__(self, anchor: object):
        self.anchor = anchor
        super().__init__(f"anchor did not resolve to a line: {anchor!r}")


class SubjectError(LazyCommentsError):
    """Raised when a subject line does not fit the comment that documents it."""


class UnsupportedInputError(LazyCommentsError, TypeError):
    """Raised when scanning input is neither a string nor a `Cursor`.

    Args:
        value: The rejected input.
    """

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"can't convert {type(value).__name__} into Cursor or str")


class SourceReadError(OSError):
    """Raised when a source file cannot be read for resolution."""
