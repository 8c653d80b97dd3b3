"""Data models for lazy-comments."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from .exceptions import UnsupportedInputError

if TYPE_CHECKING:
    from .comment import CommentContent


class ScannerState(Enum):
    """Attribute scanner states.

    Attributes:
        SCANNING: Looking for declarations.
        IN_SKIP_REGION: Between a skip-start and its resume sentinel.
    """

    SCANNING = auto()
    IN_SKIP_REGION = auto()


@dataclass
class ScanContext:
    """Encapsulate scanner state while walking raw text.

    Attributes:
        state: Current scanner state.
        skip_started_at: Zero-based line of the active skip-start sentinel.
        declarations: Number of declarations emitted so far.
    """

    state: ScannerState = ScannerState.SCANNING
    skip_started_at: int | None = None
    declarations: int = 0


@dataclass
class Cursor:
    """A position within source text, advanced by the scanners.

    Attributes:
        text: The full text being scanned.
        pos: Zero-based character offset of the next unread character.
    """

    text: str
    pos: int = 0

    @classmethod
    def coerce(cls, source: object) -> Cursor:
        """Return `source` as a cursor, wrapping plain strings.

        Raises:
            UnsupportedInputError: If `source` is neither a `str` nor a `Cursor`.
        """
        if isinstance(source, Cursor):
            return source
        if isinstance(source, str):
            return cls(source)
        raise UnsupportedInputError(source)

    @property
    def rest(self) -> str:
        return self.text[self.pos :]

    def at_end(self) -> bool:
        return self.pos >= len(self.text)


@dataclass
class Declaration:
    """A ``Scope::key value`` declaration found by the attribute scanner.

    Attributes:
        scope_name: Dotted scope name; empty when the declaration names none.
        key: Attribute key.
        value: Remainder of the declaration line, stripped.
        line_number: Zero-based line of the declaration.
    """

    scope_name: str
    key: str
    value: str
    line_number: int


@dataclass
class AttributeRecord:
    """A declaration paired with the comment block that follows it.

    Attributes:
        scope_name: Dotted scope name; empty when the declaration names none.
        key: Attribute key.
        value: Declared value.
        line_number: Zero-based line of the declaration.
        comment: Content parsed downward from the declaration.
    """

    scope_name: str
    key: str
    value: str
    line_number: int
    comment: CommentContent = field(repr=False)
