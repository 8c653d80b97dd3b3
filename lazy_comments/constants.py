"""Patterns and sentinels used across the lazy-comments package."""

from __future__ import annotations

import re

from .config import DocConfig

DEFAULT_CONFIG = DocConfig()

DEFAULT_KEY_PATTERN = DEFAULT_CONFIG.key_pattern
DEFAULT_WRAP_COLS = DEFAULT_CONFIG.wrap_cols
DEFAULT_TABSIZE = DEFAULT_CONFIG.tabsize

# Scope names are dotted (``::``) sequences of segments starting with an
# uppercase ASCII letter.
SCOPE_NAME = r"[A-Z][A-Za-z]*(?:::[A-Z][A-Za-z]*)*"

# Any attribute start or end marker, anywhere on a line.
ATTRIBUTE_PATTERN = re.compile(rf"(?P<scope>{SCOPE_NAME})?::(?P<key>[a-z_]+)(?P<end>-?)")

# A legitimate declaration leader: a comment marker, optionally followed by a
# scope name that runs to the end of the leader.
LEADER_PATTERN = re.compile(rf"#.*?(?P<scope>{SCOPE_NAME})?$")

# A single comment line. `indent` is whatever follows the one optional space
# after the marker.
COMMENT_LINE_PATTERN = re.compile(r"^[ \t]*#[ \t]?(?P<fragment>(?P<indent>[ \t]*).*?)\r?$")

# Skip regions: ``:::-`` stops scanning, ``:::+`` resumes it.
SKIP_START = ":::-"
SKIP_RESUME = ":::+"

METHOD_DEF_PATTERN = re.compile(r"^\s*def\s+(?P<name>\w+)(?P<signature>.*)$")
SHEBANG_PATTERN = re.compile(r"^#!")

# Lines passed over when locating the code that follows a registration point.
BLANK_OR_COMMENT_PATTERN = re.compile(r"^\s*(#.*)?$")
