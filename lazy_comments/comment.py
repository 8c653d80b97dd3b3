"""Comment content parsing and lazily resolved comments."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Union

from .constants import COMMENT_LINE_PATTERN, DEFAULT_TABSIZE, DEFAULT_WRAP_COLS, METHOD_DEF_PATTERN
from .exceptions import AnchorRangeError, InvalidAnchorError, SubjectError
from .lines import match_index, split_lines
from .tokenizer import scan_trailer, split_arguments
from .wrap import wrap_line

if TYPE_CHECKING:
    from .document import Document
    from .models import AttributeRecord

Fragment = Union[str, list[str]]
Resolver = Callable[[list[str]], Union[int, None]]
Anchor = Union[int, str, re.Pattern[str], Resolver]
StopPredicate = Callable[[str], bool]


def categorize(fragment: str, indent: str) -> Iterator[Fragment]:
    """Yield the content edits for one matched comment line.

    A bare marker yields a blank logical line followed by a fresh one. A line
    with no indentation beyond the marker yields a string fragment that joins
    the current logical line. An indented line yields a verbatim logical line
    followed by a fresh one.

    Args:
        fragment: Text following the marker and its single optional space.
        indent: Leading whitespace of `fragment`.

    Examples:
        list(categorize("", ""))  # [[""], []]
        list(categorize("text ", ""))  # ["text"]
        list(categorize("  code", "  "))  # [["  code"], []]
    """
    if fragment == indent:
        yield [""]
        yield []
    elif not indent:
        yield fragment.rstrip()
    else:
        yield [fragment.rstrip()]
        yield []


def scan_comment_line(line: str) -> list[Fragment] | None:
    """Return the content edits for `line`, or None if it is not a comment line."""
    match = COMMENT_LINE_PATTERN.match(line)
    if match is None:
        return None
    return list(categorize(match.group("fragment"), match.group("indent")))


class CommentContent:
    """Logical lines of comment text, each a list of fragments.

    Fragments of one logical line reflow together when rendered. An empty
    logical line is open for continuation; a logical line holding only ``""``
    is a paragraph break.

    Examples:
        content = CommentContent()
        content.push("some line")
        content.push("fragments")
        content.push(["a", "whole", "new line"])
        content.lines  # [["some line", "fragments"], ["a", "whole", "new line"]]
    """

    def __init__(self, lines: list[list[str]] | None = None):
        self.lines: list[list[str]] = lines if lines is not None else []

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CommentContent):
            return self.lines == other.lines
        if isinstance(other, list):
            return self.lines == other
        return NotImplemented

    def __iter__(self) -> Iterator[list[str]]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __repr__(self) -> str:
        return f"CommentContent({self.lines!r})"

    def push(self, fragment: Fragment) -> CommentContent:
        """Add a fragment to the last logical line, or a list as a new line.

        A list replaces the last logical line when that line is empty.
        """
        if isinstance(fragment, list):
            if self.lines and not self.lines[-1]:
                self.lines[-1] = fragment
            else:
                self.lines.append(fragment)
        else:
            if not self.lines:
                self.lines.append([])
            self.lines[-1].append(fragment)
        return self

    def unshift(self, fragment: Fragment) -> CommentContent:
        """Add a fragment to the first logical line, or a list as a new line.

        A list replaces the first logical line when that line is empty.
        """
        if isinstance(fragment, list):
            if self.lines and not self.lines[0]:
                self.lines[0] = fragment
            else:
                self.lines.insert(0, fragment)
        else:
            if not self.lines:
                self.lines.append([])
            self.lines[0].insert(0, fragment)
        return self

    def append(self, line: str) -> bool:
        """Categorize a raw comment line and push it.

        Returns:
            bool: False, leaving content unchanged, when `line` is not a comment.
        """
        fragments = scan_comment_line(line)
        if fragments is None:
            return False
        for fragment in fragments:
            self.push(fragment)
        return True

    def prepend(self, line: str) -> bool:
        """Categorize a raw comment line and unshift it.

        Returns:
            bool: False, leaving content unchanged, when `line` is not a comment.
        """
        fragments = scan_comment_line(line)
        if fragments is None:
            return False
        for fragment in fragments:
            self.unshift(fragment)
        return True

    def trim(self) -> CommentContent:
        """Drop leading and trailing logical lines that are empty or whitespace."""
        while self.lines and not "".join(self.lines[0]).strip():
            self.lines.pop(0)
        while self.lines and not "".join(self.lines[-1]).strip():
            self.lines.pop()
        return self

    def is_empty(self) -> bool:
        """Return True when the content renders to nothing.

        Paragraph breaks and whitespace-only lines alone count as empty.
        """
        return not self.render()

    def render(
        self, fragment_sep: str = " ", line_sep: str | None = "\n", strip: bool = True
    ) -> str | list[str]:
        """Join fragments and logical lines into text.

        Args:
            fragment_sep: Separator placed between fragments of a logical line.
            line_sep: Separator placed between logical lines. When None, the
                rendered lines are returned as a list.
            strip: Drop blank rendered lines from the start and end.

        Returns:
            str | list[str]: The rendered text, or its lines.

        Examples:
            CommentContent([["a", "b"], ["c"]]).render(".", ":")  # "a.b:c"
        """
        rendered = [fragment_sep.join(line) for line in self.lines]
        if strip:
            while rendered and not rendered[0].strip():
                rendered.pop(0)
            while rendered and not rendered[-1].strip():
                rendered.pop()
        return rendered if line_sep is None else line_sep.join(rendered)

    def wrap(
        self,
        cols: int = DEFAULT_WRAP_COLS,
        tabsize: int | None = DEFAULT_TABSIZE,
        line_sep: str | None = "\n",
        fragment_sep: str = " ",
        strip: bool = True,
    ) -> str | list[str]:
        """Render and reflow to `cols` columns, keeping paragraph breaks."""
        wrapped = wrap_line(self.render(fragment_sep, "\n", strip), cols, tabsize)
        return wrapped if line_sep is None else line_sep.join(wrapped)


def parse_upward(
    lines: list[str],
    n: int,
    skip_anchor_line: bool = True,
    stop: StopPredicate | None = None,
) -> CommentContent:
    """Collect the comment block that ends above line `n`.

    Blank lines between the start point and the block are passed over. The
    block ends at the first line that is not a comment or for which `stop`
    returns True; that line is excluded.

    Args:
        lines: Document lines.
        n: Anchor line index.
        skip_anchor_line: Start above the anchor rather than on it.
        stop: Optional predicate ending the block at a raw line.

    Returns:
        CommentContent: Content in document order.
    """
    index = n - 1 if skip_anchor_line else n
    while index >= 0 and not lines[index].strip():
        index -= 1

    content = CommentContent()
    while index >= 0:
        line = lines[index]
        if stop is not None and stop(line):
            break
        if not content.prepend(line):
            break
        index -= 1
    return content


def parse_downward(
    lines: list[str],
    n: int,
    skip_anchor_line: bool = True,
    stop: StopPredicate | None = None,
) -> CommentContent:
    """Collect the comment block that starts at (or just below) line `n`.

    The block ends at the first line that is not a comment or for which `stop`
    returns True; that line is excluded.
    """
    index = n + 1 if skip_anchor_line else n

    content = CommentContent()
    while 0 <= index < len(lines):
        line = lines[index]
        if stop is not None and stop(line):
            break
        if not content.append(line):
            break
        index += 1
    return content


class Comment:
    """A comment anchored to a source line and resolved on demand.

    The anchor is an integer line index (negative values count from the end),
    a pattern matched against each line (the first match wins), or a callable
    receiving the lines and returning an index. Resolution sets `line_number`,
    `subject` (the anchored line) and `content` (the comment block above it),
    replacing any previous values.

    Examples:
        comment = Comment(-1)
        comment.resolve("# documents\\n# the last line\\nsubject")
        comment.subject  # "subject"
        str(comment)  # "documents the last line"
    """

    def __init__(
        self, anchor: Anchor | None = None, document: Document | None = None, strict: bool = True
    ):
        self.anchor = anchor
        self.document = document
        self.strict = strict
        self.line_number: int | None = None
        self.content = CommentContent()
        self._subject: str | None = None

    @property
    def subject(self) -> str | None:
        return self._subject

    @subject.setter
    def subject(self, value: str | None) -> None:
        self._subject = value

    @property
    def trailer(self) -> str | None:
        """Trailing comment on the subject line, if any."""
        if self._subject is None:
            return None
        return scan_trailer(self._subject)

    def resolve(self, lines: str | list[str] | None = None) -> Comment:
        """Resolve the anchor against `lines` and parse content.

        Without `lines`, resolves the owning document instead (a no-op when it
        is already resolved or when there is no document). Only an error the
        document recorded for this comment is raised; failures of other
        comments stay in `Document.errors`.

        Args:
            lines: Document text or its lines.

        Returns:
            Comment: self.

        Raises:
            AnchorRangeError: If the anchor resolves outside the lines.
            InvalidAnchorError: If a pattern or resolver anchor finds no line
                and the comment is strict.
            SubjectError: If the anchored line does not fit the comment.
        """
        if lines is None:
            if self.document is not None:
                self.document.resolve(raise_errors=False)
                for comment, error in self.document.errors:
                    if comment is self:
                        raise error
            return self

        if isinstance(lines, str):
            lines = split_lines(lines)

        n = self._locate(lines)
        if n is None:
            return self

        self.line_number = n
        self.subject = lines[n]
        self.content = self._parse_content(lines, n)
        return self

    def adopt(self, record: AttributeRecord) -> Comment:
        """Take the value, position, and content of a scanned declaration."""
        self.line_number = record.line_number
        self.subject = record.value
        self.content = record.comment
        return self

    def render(
        self, fragment_sep: str = " ", line_sep: str | None = "\n", strip: bool = True
    ) -> str | list[str]:
        self.resolve()
        return self.content.render(fragment_sep, line_sep, strip)

    def wrap(
        self,
        cols: int = DEFAULT_WRAP_COLS,
        tabsize: int | None = DEFAULT_TABSIZE,
        line_sep: str | None = "\n",
        fragment_sep: str = " ",
        strip: bool = True,
    ) -> str | list[str]:
        self.resolve()
        return self.content.wrap(cols, tabsize, line_sep, fragment_sep, strip)

    def is_empty(self) -> bool:
        return self.content.is_empty()

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(anchor={self.anchor!r}, line_number={self.line_number!r}, "
            f"subject={self._subject!r})"
        )

    def _parse_content(self, lines: list[str], n: int) -> CommentContent:
        return parse_upward(lines, n)

    def _locate(self, lines: list[str]) -> int | None:
        anchor = self.anchor
        if anchor is None:
            return None

        if isinstance(anchor, int) and not isinstance(anchor, bool):
            n: int | None = anchor
        elif isinstance(anchor, (str, re.Pattern)):
            n = match_index(lines, re.compile(anchor))
        elif callable(anchor):
            n = anchor(lines)
        else:
            raise InvalidAnchorError(anchor)

        if n is None:
            if self.strict:
                raise InvalidAnchorError(anchor)
            return None

        if n < 0:
            n += len(lines)
        if not 0 <= n < len(lines):
            raise AnchorRangeError(n, len(lines))
        return n


class SectionComment(Comment):
    """A comment documenting what follows it.

    Content is the comment block starting just below the anchored line.
    """

    def _parse_content(self, lines: list[str], n: int) -> CommentContent:
        return parse_downward(lines, n)


class SubjectComment(Comment):
    """A comment whose string form is its subject, or ``""``."""

    def __str__(self) -> str:
        self.resolve()
        return self.subject or ""


class TrailerComment(Comment):
    """A comment whose string form is the trailer of its subject, or ``""``."""

    def __str__(self) -> str:
        self.resolve()
        return self.trailer or ""


class MethodComment(Comment):
    """A comment documenting a ``def name(args)`` line.

    Setting the subject parses the method name and arguments.

    Examples:
        method = MethodComment()
        method.subject = "def method_name(a, b='default', &c) # trailing comment"
        method.method_name  # "method_name"
        method.arguments  # ["a", "b='default'", "&c"]
        method.trailer  # "trailing comment"
    """

    def __init__(
        self, anchor: Anchor | None = None, document: Document | None = None, strict: bool = True
    ):
        super().__init__(anchor, document, strict)
        self.method_name: str | None = None
        self.arguments: list[str] = []

    @Comment.subject.setter
    def subject(self, value: str | None) -> None:
        if value is None:
            self.method_name = None
            self.arguments = []
            self._subject = None
            return

        match = METHOD_DEF_PATTERN.match(value)
        if match is None:
            raise SubjectError(f"not a method definition: {value}")

        self.method_name = match.group("name")
        self.arguments, _ = split_arguments(match.group("signature"))
        self._subject = value


class ArgumentsComment(MethodComment):
    """A method comment whose string form lists arguments for a command line.

    Block arguments (``&x``) are dropped, splats (``*x``) become ``X...``,
    defaults keep their value (``A=default``), and other names are upper-cased.

    Examples:
        arguments = ArgumentsComment()
        arguments.subject = "def method(a, b='default', *c, &d)"
        str(arguments)  # "A B='default' C..."
    """

    def __str__(self) -> str:
        self.resolve()
        return " ".join(
            formatted
            for formatted in (_format_argument(argument) for argument in self.arguments)
            if formatted is not None
        )


def _format_argument(argument: str) -> str | None:
    if argument.startswith("&"):
        return None
    if argument.startswith("*"):
        return f"{argument[1:].upper()}..."
    name, separator, default = argument.partition("=")
    if separator:
        return f"{name.upper()}={default}"
    return argument.upper()


def method_pattern(method_name: str) -> re.Pattern[str]:
    """Compile a pattern matching the definition line of `method_name`.

    Examples:
        method_pattern("method").search("def method(with, args, &block)")  # match
        method_pattern("method").search("def some_other_method")  # None
    """
    return re.compile(rf"^\s*def\s+{re.escape(method_name)}(\W|$)")
