"""Scanning of ``Scope::key value`` attribute declarations."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from .comment import parse_downward
from .constants import (
    ATTRIBUTE_PATTERN,
    DEFAULT_KEY_PATTERN,
    LEADER_PATTERN,
    SKIP_RESUME,
    SKIP_START,
)
from .lines import line_of, split_lines
from .models import AttributeRecord, Cursor, Declaration, ScanContext, ScannerState

logger = logging.getLogger(__name__)


def declaration_pattern(key_pattern: str = DEFAULT_KEY_PATTERN) -> re.Pattern[str]:
    """Compile the pattern locating the next declaration on the current line.

    The pattern is applied with `re.Pattern.match` at the scan position. Its
    ``leader`` group holds the text before ``::``; either ``stop`` (a skip-start
    sentinel) or ``key`` matches after it. A key must be followed by whitespace,
    ``-`` or the end of the line.

    Examples:
        declaration_pattern("key|alt").match("# Name::key value").group("key")  # "key"
    """
    stop = re.escape(SKIP_START[2:])
    return re.compile(
        rf"(?P<leader>[^\n]*?)::(?:(?P<stop>{stop})|(?P<key>{key_pattern})(?=[ \t\r\n-]|$))",
        re.MULTILINE,
    )


def _end_of_line(text: str, pos: int) -> int:
    newline = text.find("\n", pos)
    return len(text) if newline < 0 else newline


def _next_line(text: str, pos: int) -> int:
    newline = text.find("\n", pos)
    return len(text) if newline < 0 else newline + 1


def _try_enter_skip_region(ctx: ScanContext, cursor: Cursor, match: re.Match[str]) -> bool:
    """Enter the skip region opened by a matched skip-start sentinel.

    Returns:
        bool: True when `match` is a skip-start sentinel and the state changed.
    """
    if ctx.state is not ScannerState.SCANNING or match.group("stop") is None:
        return False

    ctx.state = ScannerState.IN_SKIP_REGION
    ctx.skip_started_at = line_of(cursor.text, match.end())
    cursor.pos = match.end()
    logger.debug("Skip region starts on line %d", ctx.skip_started_at)
    return True


def _try_leave_skip_region(ctx: ScanContext, cursor: Cursor) -> bool:
    """Move past the resume sentinel that closes the active skip region.

    Without a resume sentinel the rest of the text is skipped and the scanner
    stays in the skip region.

    Returns:
        bool: True when scanning resumes.
    """
    if ctx.state is not ScannerState.IN_SKIP_REGION:
        return False

    resume = cursor.text.find(SKIP_RESUME, cursor.pos)
    if resume < 0:
        logger.debug("Skip region from line %d runs to the end of the text", ctx.skip_started_at)
        cursor.pos = len(cursor.text)
        return False

    cursor.pos = resume + len(SKIP_RESUME)
    ctx.state = ScannerState.SCANNING
    ctx.skip_started_at = None
    logger.debug("Scanning resumes on line %d", line_of(cursor.text, cursor.pos))
    return True


def _is_end_marker(text: str, match: re.Match[str]) -> bool:
    return text.startswith("-", match.end())


def scan_declarations(
    source: str | Cursor, key_pattern: str = DEFAULT_KEY_PATTERN
) -> Iterator[Declaration]:
    """Yield declarations found in `source`, honoring skip regions.

    A declaration counts only when the text before its ``::`` contains a
    comment marker, optionally followed by the scope name. End markers
    (``Scope::key-``) are passed over without being yielded. When `source` is
    a `Cursor`, its position advances as scanning proceeds.

    Args:
        source: Text to scan, or a cursor into it.
        key_pattern: Regular expression alternation of accepted keys.

    Yields:
        Declaration: Each declaration in document order.

    Raises:
        UnsupportedInputError: If `source` is neither a string nor a `Cursor`.
    """
    cursor = Cursor.coerce(source)
    text = cursor.text
    pattern = declaration_pattern(key_pattern)
    ctx = ScanContext()
    logger.debug("Scanning %d characters for keys matching %r", len(text), key_pattern)

    while not cursor.at_end():
        if ctx.state is ScannerState.IN_SKIP_REGION:
            if not _try_leave_skip_region(ctx, cursor):
                break
            continue

        match = pattern.match(text, cursor.pos)
        if match is None:
            cursor.pos = _next_line(text, cursor.pos)
            continue

        if _try_enter_skip_region(ctx, cursor, match):
            continue

        leader = LEADER_PATTERN.search(match.group("leader"))
        if leader is None:
            # Not inside a comment; retry after this key on the same line.
            logger.debug("Rejected declaration leader %r", match.group("leader"))
            cursor.pos = match.end()
            continue

        line_end = _end_of_line(text, match.end())
        if _is_end_marker(text, match):
            cursor.pos = _next_line(text, match.end())
            continue

        declaration = Declaration(
            scope_name=leader.group("scope") or "",
            key=match.group("key"),
            value=text[match.end() : line_end].strip(),
            line_number=line_of(text, match.end()),
        )
        ctx.declarations += 1
        cursor.pos = _next_line(text, match.end())
        yield declaration

    logger.debug("Scan finished with %d declarations", ctx.declarations)


def scan(
    source: str | Cursor, key_pattern: str = DEFAULT_KEY_PATTERN
) -> Iterator[tuple[str, str, str]]:
    """Yield ``(scope_name, key, value)`` for each declaration in `source`.

    Examples:
        text = "# Name::Space::key value\\n# :::-\\n# Ignored::key value\\n# :::+\\n"
        list(scan(text, "key"))  # [("Name::Space", "key", "value")]
    """
    for declaration in scan_declarations(source, key_pattern):
        yield declaration.scope_name, declaration.key, declaration.value


def ends_block(line: str) -> bool:
    """Return True when `line` must not be read into a declaration's comment.

    Any declaration ends the block: an end marker for the current key, or the
    start of the next attribute. Skip sentinels end it too.
    """
    return (
        ATTRIBUTE_PATTERN.search(line) is not None or SKIP_START in line or SKIP_RESUME in line
    )


def parse(
    source: str | Cursor, key_pattern: str = DEFAULT_KEY_PATTERN
) -> Iterator[AttributeRecord]:
    """Yield each declaration together with the comment block below it.

    Args:
        source: Text to scan, or a cursor into it.
        key_pattern: Regular expression alternation of accepted keys.

    Yields:
        AttributeRecord: Declarations with their parsed comments.

    Raises:
        UnsupportedInputError: If `source` is neither a string nor a `Cursor`.

    Examples:
        text = "# Const::Name::key subject for key\\n# comment for key\\n"
        [(r.scope_name, r.key, r.value, r.comment.render()) for r in parse(text)]
        # [("Const::Name", "key", "subject for key", "comment for key")]
    """
    cursor = Cursor.coerce(source)
    lines = split_lines(cursor.text)

    for declaration in scan_declarations(cursor, key_pattern):
        comment = parse_downward(lines, declaration.line_number, True, ends_block)
        yield AttributeRecord(
            scope_name=declaration.scope_name,
            key=declaration.key,
            value=declaration.value,
            line_number=declaration.line_number,
            comment=comment,
        )
