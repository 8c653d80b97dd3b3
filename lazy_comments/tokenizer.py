"""Quote-aware scanning of signatures and trailing comments.

Only ``'`` and ``"`` delimit strings. Other literal syntaxes (percent
literals such as ``%Q{...}``, triple quotes) and signatures spanning several
lines are not recognized: a ``#`` inside such a literal is taken as the start
of a comment.
"""

from __future__ import annotations

import re

from .models import Cursor

_LEADING_PAREN = re.compile(r"\s*\(?\s*")
_ARGUMENT_DELIMITER = re.compile(r"""[,()\[\]{}'"#]""")
_TRAILER_DELIMITER = re.compile(r"""['"#]""")


def skip_quoted(text: str, pos: int, quote: str) -> int:
    """Return the position just past the next unescaped `quote`.

    A backslash immediately before the quote escapes it. Unterminated strings
    consume the rest of the text.

    Args:
        text: Text being scanned.
        pos: Position just after the opening quote.
        quote: The quote character to find.

    Returns:
        int: Offset following the closing quote, or ``len(text)``.

    Examples:
        skip_quoted("'ab' rest", 1, "'")  # 4
    """
    while True:
        index = text.find(quote, pos)
        if index < 0:
            return len(text)
        pos = index + 1
        if index == 0 or text[index - 1] != "\\":
            return pos


def scan_trailer(source: str | Cursor) -> str | None:
    """Return the stripped text after the first unquoted ``#``.

    Args:
        source: A line, or a cursor positioned within one.

    Returns:
        str | None: The trailing comment, or None when there is none.

    Raises:
        UnsupportedInputError: If `source` is neither a string nor a `Cursor`.

    Examples:
        scan_trailer("str with # trailer")  # "trailer"
        scan_trailer("'# in str' # trailer")  # "trailer"
        scan_trailer("%Q{# in str} # trailer")  # "in str} # trailer"
    """
    cursor = Cursor.coerce(source)
    text = cursor.text
    pos = cursor.pos

    while True:
        match = _TRAILER_DELIMITER.search(text, pos)
        if match is None:
            return None
        pos = match.end()
        if match.group() == "#":
            return text[pos:].strip()
        pos = skip_quoted(text, pos, match.group())


def split_arguments(source: str | Cursor) -> tuple[list[str], str | None]:
    """Split a signature into its top-level arguments.

    Skips leading whitespace and one opening parenthesis, then collects
    comma-separated arguments. Commas nested in parentheses, brackets, braces,
    or quoted strings never split an argument. Scanning ends at the unmatched
    closing parenthesis, at a ``#``, or at the end of input. A blank signature
    yields no arguments.

    When given a `Cursor`, its position is left on the character that ended
    the scan.

    Args:
        source: Signature text (anything after a method name), or a cursor.

    Returns:
        tuple[list[str], str | None]: Stripped arguments and the trailing
            comment, if any.

    Raises:
        UnsupportedInputError: If `source` is neither a string nor a `Cursor`.

    Examples:
        split_arguments("(a, b='default', *c, &d)")  # (["a", "b='default'", "*c", "&d"], None)
        split_arguments("a, b # note")  # (["a", "b"], "note")
    """
    cursor = Cursor.coerce(source)
    text = cursor.text
    pos = _LEADING_PAREN.match(text, cursor.pos).end()

    arguments: list[str] = []
    parens = brackets = braces = 0
    start = pos
    end = len(text)
    trailer: str | None = None

    while True:
        match = _ARGUMENT_DELIMITER.search(text, pos)
        if match is None:
            break
        delimiter = match.group()
        pos = match.end()

        if delimiter == ",":
            if parens > 0 or brackets > 0 or braces > 0:
                continue
            arguments.append(text[start : match.start()].strip())
            start = pos
        elif delimiter == "#":
            end = match.start()
            trailer = text[pos:].strip()
            break
        elif delimiter in "'\"":
            pos = skip_quoted(text, pos, delimiter)
        elif delimiter == "(":
            parens += 1
        elif delimiter == ")":
            if parens == 0:
                end = match.start()
                trailer = scan_trailer(text[pos:])
                break
            parens -= 1
        elif delimiter == "[":
            brackets += 1
        elif delimiter == "]":
            brackets -= 1
        elif delimiter == "{":
            braces += 1
        elif delimiter == "}":
            braces -= 1

    final = text[start:end].strip()
    if final or arguments:
        arguments.append(final)

    cursor.pos = end
    return arguments, trailer
