"""Documents: registered comments and attributes resolved in one pass."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .attributes import parse
from .comment import (
    Anchor,
    Comment,
    CommentContent,
    MethodComment,
    SubjectComment,
    method_pattern,
    parse_downward,
)
from .constants import (
    BLANK_OR_COMMENT_PATTERN,
    DEFAULT_KEY_PATTERN,
    DEFAULT_TABSIZE,
    DEFAULT_WRAP_COLS,
    SHEBANG_PATTERN,
)
from .exceptions import (
    AnchorRangeError,
    InvalidAnchorError,
    LazyCommentsError,
    SubjectError,
    UnsupportedInputError,
)
from .filesystem import read_source
from .lines import split_lines
from .models import Cursor

logger = logging.getLogger(__name__)

SourceReader = Callable[[Path], str]


class Document:
    """Comments and constant attributes for one source text.

    Comments are registered by anchor, possibly before any text exists, and
    attributes are collected from ``Scope::key value`` declarations. Nothing is
    scanned until `resolve` runs; it scans once and latches `resolved`.

    Attributes:
        source_file: Absolute path read when `resolve` is given no text.
        default_scope: Scope name that stands in for declarations without one.
        key_pattern: Regular expression alternation of accepted attribute keys.
        comments: Registered comments, in registration order.
        attributes: Attribute comments keyed by scope name, then key.
        resolved: Whether a scan has happened since creation or the last reset.
        errors: Comments that failed to resolve during the last scan, with
            their errors.

    Examples:
        doc = Document(default_scope="DefaultScope")
        doc.resolve("# KeyWithScope::key value a\\n# ::key value b\\n")
        doc["KeyWithScope"]["key"].subject  # "value a"
        doc["DefaultScope"]["key"].subject  # "value b"
    """

    def __init__(
        self,
        source_file: str | os.PathLike[str] | None = None,
        default_scope: str | None = None,
        key_pattern: str = DEFAULT_KEY_PATTERN,
        reader: SourceReader = read_source,
    ):
        self.source_file = source_file
        self.default_scope = default_scope
        self.key_pattern = key_pattern
        self.reader = reader
        self.comments: list[Comment] = []
        self.attributes: dict[str, dict[str, Any]] = {}
        self.resolved = False
        self.errors: list[tuple[Comment, LazyCommentsError]] = []
        self._scanned: set[tuple[str, str]] = set()

    @property
    def source_file(self) -> Path | None:
        return self._source_file

    @source_file.setter
    def source_file(self, value: str | os.PathLike[str] | None) -> None:
        if value is None:
            self._source_file = None
        else:
            self._source_file = Path(os.path.abspath(Path(value).expanduser()))

    def __getitem__(self, scope_name: str) -> dict[str, Any]:
        """Return the attribute map for `scope_name`, creating it when missing.

        The empty scope name refers to `default_scope` when one is set.
        """
        return self.attributes.setdefault(self._scope_key(scope_name), {})

    def _scope_key(self, scope_name: str) -> str:
        if not scope_name and self.default_scope:
            return self.default_scope
        return scope_name

    def register(self, anchor: Anchor, comment_class: type[Comment] = Comment) -> Comment:
        """Register a comment for the line identified by `anchor`.

        Returns an already registered comment of the same class and anchor when
        there is one.

        Args:
            anchor: Line index, pattern, or resolver callable.
            comment_class: `Comment` subclass to instantiate.

        Returns:
            Comment: The registered comment, owned by this document.
        """
        for comment in self.comments:
            if type(comment) is comment_class and comment.anchor == anchor:
                return comment

        comment = comment_class(anchor, self)
        self.comments.append(comment)
        return comment

    def register_method(
        self, method_name: str, comment_class: type[Comment] = MethodComment
    ) -> Comment:
        """Register a comment for the first definition of `method_name`."""
        return self.register(method_pattern(method_name), comment_class)

    def register_following(
        self, line_number: int, comment_class: type[Comment] = Comment
    ) -> Comment:
        """Register the first code line at or after `line_number`.

        Blank and comment lines are passed over, so the comment documents the
        next definition below a registration point. A missing line leaves the
        comment unresolved instead of raising.
        """

        def following(lines: list[str]) -> int | None:
            index = line_number
            while index < len(lines) and BLANK_OR_COMMENT_PATTERN.match(lines[index]):
                index += 1
            return index if index < len(lines) else None

        comment = comment_class(following, self, strict=False)
        self.comments.append(comment)
        return comment

    def reset(self) -> Document:
        """Clear registered comments and the resolved latch."""
        self.comments.clear()
        self.errors.clear()
        self.resolved = False
        return self

    def resolve(
        self, text: str | Cursor | None = None, force: bool = False, raise_errors: bool = True
    ) -> bool:
        """Scan text for attributes and resolve every registered comment.

        Does nothing when already resolved unless `force` is set. Without
        `text`, the contents of `source_file` are read. A comment whose anchor
        or subject fails does not stop the others from resolving; once the
        scan is done, the first failure is raised unless `raise_errors` is
        off. Anchors created by `register_following` that find no line are
        left unresolved without failing.

        A forced rescan drops attribute slots that an earlier scan created
        and the new text no longer declares. Slots assigned before a scan
        are kept, holding whatever they last adopted.

        Args:
            text: Source text, or a cursor into it.
            force: Re-scan even if already resolved.
            raise_errors: Raise the first recorded failure after the scan.

        Returns:
            bool: True when a scan happened.

        Raises:
            UnsupportedInputError: If `text` is not a string or `Cursor`, or no
                text is given and there is no `source_file`.
            SourceReadError: If `source_file` cannot be read.
            AnchorRangeError: If a registered anchor falls outside the text.
            InvalidAnchorError: If a strict pattern or resolver anchor finds no line.
            SubjectError: If an anchored line does not fit its comment.
        """
        if self.resolved and not force:
            logger.debug("Document %s already resolved", self.source_file or "<text>")
            return False

        if text is None:
            if self.source_file is None:
                raise UnsupportedInputError(None)
            text = self.reader(self.source_file)

        cursor = Cursor.coerce(text)
        lines = split_lines(cursor.text)
        logger.debug(
            "Resolving document %s (%d lines, force=%s)",
            self.source_file or "<text>",
            len(lines),
            force,
        )

        previous = self._scanned
        self._scanned = set()
        for record in parse(cursor, self.key_pattern):
            slot = (self._scope_key(record.scope_name), record.key)
            attributes = self[record.scope_name]
            comment = attributes.get(record.key)
            if comment is None:
                comment = SubjectComment(document=self)
                attributes[record.key] = comment
                self._scanned.add(slot)
            elif slot in previous:
                self._scanned.add(slot)
            if isinstance(comment, Comment):
                comment.adopt(record)

        for scope_name, key in previous - self._scanned:
            logger.debug("Dropping stale attribute %s::%s", scope_name, key)
            self.attributes.get(scope_name, {}).pop(key, None)

        self.errors = []
        for comment in self.comments:
            try:
                comment.resolve(lines)
            except (AnchorRangeError, InvalidAnchorError, SubjectError) as error:
                logger.warning("Could not resolve %r: %s", comment, error)
                self.errors.append((comment, error))

        self.resolved = True

        if self.errors and raise_errors:
            raise self.errors[0][1]
        return True

    def summarize(self, fn: Callable[[Any], Any] | None = None) -> dict[str, dict[str, Any]]:
        """Return the non-empty attribute maps, optionally mapping each value.

        Examples:
            doc.summarize(lambda comment: comment.subject)
            # {"Const::Name": {"key": "value"}}
        """
        summary: dict[str, dict[str, Any]] = {}
        for scope_name, attributes in self.attributes.items():
            if not attributes:
                continue
            summary[scope_name] = {
                key: (fn(comment) if fn is not None else comment)
                for key, comment in attributes.items()
            }
        return summary


def usage(
    text: str, cols: int = DEFAULT_WRAP_COLS, tabsize: int | None = DEFAULT_TABSIZE
) -> str:
    """Return the first comment block of `text`, wrapped to `cols`.

    A leading ``#!`` line is passed over.

    Examples:
        usage("#!/usr/bin/env python\\n# Usage: tool FILE\\n\\ncode\\n")  # "Usage: tool FILE"
    """
    lines = split_lines(text)
    start = 1 if SHEBANG_PATTERN.match(lines[0]) else 0
    content: CommentContent = parse_downward(lines, start, skip_anchor_line=False)
    return content.wrap(cols, tabsize).strip()
