"""
lazy-comments: lazily resolved documentation from source comments.

Extracts ``Scope::key value`` attribute declarations and line-anchored
comments from source text. Nothing is scanned until a document is resolved.

CLI Usage:
    lazy-comments attributes tool.py

Library Usage:
    from pathlib import Path
    from lazy_comments import Document

    doc = Document()
    comment = doc.register(r"def main")
    doc.resolve(Path("tool.py").read_text())
    comment.subject, str(comment)
"""

__version__ = "0.1.0"

from .attributes import parse, scan, scan_declarations
from .comment import (
    ArgumentsComment,
    Comment,
    CommentContent,
    MethodComment,
    SectionComment,
    SubjectComment,
    TrailerComment,
    method_pattern,
    parse_downward,
    parse_upward,
)
from .document import Document, usage
from .exceptions import (
    AnchorRangeError,
    InvalidAnchorError,
    LazyCommentsError,
    SourceReadError,
    SubjectError,
    UnsupportedInputError,
)
from .lines import line_of, split_lines
from .models import AttributeRecord, Cursor, Declaration
from .registry import DocumentRegistry
from .tokenizer import scan_trailer, skip_quoted, split_arguments
from .wrap import wrap_line

__all__ = [
    # Core functionality
    "Document",
    "parse",
    "scan",
    "scan_declarations",
    "usage",
    # Comments
    "Comment",
    "CommentContent",
    "SectionComment",
    "SubjectComment",
    "TrailerComment",
    "MethodComment",
    "ArgumentsComment",
    "parse_upward",
    "parse_downward",
    "method_pattern",
    # Data models
    "AttributeRecord",
    "Cursor",
    "Declaration",
    # Utilities
    "DocumentRegistry",
    "line_of",
    "split_lines",
    "scan_trailer",
    "skip_quoted",
    "split_arguments",
    "wrap_line",
    # Exceptions
    "AnchorRangeError",
    "InvalidAnchorError",
    "LazyCommentsError",
    "SourceReadError",
    "SubjectError",
    "UnsupportedInputError",
    # Version
    "__version__",
]
