import pytest

from lazy_comments.attributes import ends_block, parse, scan, scan_declarations
from lazy_comments.exceptions import UnsupportedInputError
from lazy_comments.models import Cursor


def test_scan_documentation():
    text = """
# Name::Space::key value
# ::alt alt_value
# 
# Ignored::Attribute::not_matched value
# :::-
# Ignored::key value
# :::+
# Another::key another value

Ignored::key value
"""
    assert list(scan(text, "key|alt")) == [
        ("Name::Space", "key", "value"),
        ("", "alt", "alt_value"),
        ("Another", "key", "another value"),
    ]


def test_scan_only_finds_the_specified_key():
    text = """
# Name::Space::key1 value1
# Name::Space::key value2
# Name::Space::key value3
# ::key
# Name::Space::key1 value4
"""
    assert list(scan(text, "key")) == [
        ("Name::Space", "key", "value2"),
        ("Name::Space", "key", "value3"),
        ("", "key", ""),
    ]


def test_scan_prefers_the_full_key_in_an_alternation():
    assert list(scan("# Name::key2 value\n", "key|key2")) == [("Name", "key2", "value")]


def test_scan_skips_areas_flagged_as_off():
    text = """
# Name::Space::key value1
# Name::Space:::-
# Name::Space::key value2
# Name::Space:::+
# Name::Space::key value3
"""
    assert list(scan(text, "key")) == [
        ("Name::Space", "key", "value1"),
        ("Name::Space", "key", "value3"),
    ]


def test_scan_skips_rest_of_text_without_resume_sentinel():
    text = "# A::key one\n# :::-\n# B::key two\n"
    assert list(scan(text)) == [("A", "key", "one")]


def test_scan_does_not_yield_end_markers():
    text = "# ::one\n# comment\n# ::one-\n# ::two value\n"
    assert list(scan(text)) == [("", "one", ""), ("", "two", "value")]


def test_scan_retries_after_rejected_leader_on_same_line():
    text = "x = a::b # Const::key value\n"
    assert list(scan(text)) == [("Const", "key", "value")]


def test_scan_ignores_declarations_outside_comments():
    assert list(scan("Const::key value\nputs Const::key\n")) == []


def test_scan_handles_crlf_line_endings():
    text = "# A::key one\r\n# B::key two\r\n"
    assert list(scan(text)) == [("A", "key", "one"), ("B", "key", "two")]


def test_scan_declarations_reports_line_numbers():
    text = "\n# A::key one\n\n# B::key two\n"
    assert [declaration.line_number for declaration in scan_declarations(text)] == [1, 3]


def test_scan_advances_a_cursor():
    cursor = Cursor("# A::key one\n# B::key two\n")
    assert len(list(scan(cursor))) == 2
    assert cursor.at_end()


def test_scan_rejects_unsupported_input():
    with pytest.raises(UnsupportedInputError):
        list(scan(42))


@pytest.mark.parametrize(
    "line, expected",
    [
        ("# Name::key value", True),
        ("# ::key", True),
        ("# Name::key-", True),
        ("# :::-", True),
        ("# :::+", True),
        ("# plain comment", False),
        ("# Name: not a declaration", False),
    ],
)
def test_ends_block(line, expected):
    assert ends_block(line) is expected


def test_parse_reads_comment_below_declaration():
    text = "# Const::Name::key subject for key\n# comment for key\n"
    records = list(parse(text))
    assert len(records) == 1
    record = records[0]
    assert (record.scope_name, record.key, record.value, record.line_number) == (
        "Const::Name",
        "key",
        "subject for key",
        0,
    )
    assert record.comment.render() == "comment for key"


def test_parse_end_to_end():
    text = "# Name::Space::key value\n# trailer comment\n\n# Another::key2 value2\n"
    records = list(parse(text, "key|key2"))
    assert [(r.scope_name, r.key, r.value) for r in records] == [
        ("Name::Space", "key", "value"),
        ("Another", "key2", "value2"),
    ]
    assert records[0].comment.render() == "trailer comment"
    assert records[1].comment.render() == ""


def test_parse_stops_at_new_declaration_or_end_marker():
    text = """
    # ::one
    # comment1 spanning
    # multiple lines
    # ::two
    # comment2 spanning
    # multiple lines
    # ::two-
    # ignored
    """
    records = list(parse(text))
    assert [record.key for record in records] == ["one", "two"]
    assert records[0].comment == [["comment1 spanning", "multiple lines"]]
    assert records[1].comment == [["comment2 spanning", "multiple lines"]]


def test_parse_stops_at_skip_sentinel():
    text = "# A::key value\n# comment\n# :::-\n# B::key hidden\n# :::+\n"
    records = list(parse(text))
    assert len(records) == 1
    assert records[0].comment == [["comment"]]


def test_parse_keeps_indented_comment_lines():
    text = """
# Name::Space::key value
#
# This is the comment content.  A content
# string can span multiple lines...
#
#   code.is_allowed
#   much.as_in RDoc
#
# and stops at the next non-comment
# line, the next constant attribute,
# or an end key
# Name::Space::key-
#
# ignored
"""
    (record,) = list(parse(text))
    assert record.comment.render() == "\n".join(
        [
            "This is the comment content.  A content string can span multiple lines...",
            "",
            "  code.is_allowed",
            "  much.as_in RDoc",
            "",
            "and stops at the next non-comment line, the next constant attribute, or an end key",
        ]
    )
