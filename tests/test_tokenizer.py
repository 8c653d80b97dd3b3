import pytest

from lazy_comments.exceptions import UnsupportedInputError
from lazy_comments.models import Cursor
from lazy_comments.tokenizer import scan_trailer, skip_quoted, split_arguments


def test_skip_quoted_stops_after_closing_quote():
    assert skip_quoted("'ab' rest", 1, "'") == 4


def test_skip_quoted_passes_escaped_quotes():
    text = r"'a\'b' rest"
    assert skip_quoted(text, 1, "'") == 6


def test_skip_quoted_consumes_unterminated_strings():
    assert skip_quoted("'never closed", 1, "'") == len("'never closed")


def test_split_arguments_documentation():
    assert split_arguments("(a, b='default', *c, &d)") == (["a", "b='default'", "*c", "&d"], None)
    assert split_arguments("a, b # note") == (["a", "b"], "note")
    assert split_arguments("a=[1,2,'three'], b={:one=>1}") == (
        ["a=[1,2,'three']", "b={:one=>1}"],
        None,
    )


@pytest.mark.parametrize(
    "signature, expected",
    [
        ("", []),
        ("   ", []),
        ("()", []),
        ("a", ["a"]),
        ("a,b,&c", ["a", "b", "&c"]),
        ("(a,b,&c)", ["a", "b", "&c"]),
        ("  a ,b,  &c  ", ["a", "b", "&c"]),
        ("  (  a ,b,  &c  )  ", ["a", "b", "&c"]),
        ("a=\"str\", b='str', c=(2+2)", ['a="str"', "b='str'", "c=(2+2)"]),
        (r"a='str, with \'scapes # yo', b=((1+1) + 1)", [r"a='str, with \'scapes # yo'", "b=((1+1) + 1)"]),
        (
            "a=[1,2,'three'], b={:one => 1, :two => 'str'}",
            ["a=[1,2,'three']", "b={:one => 1, :two => 'str'}"],
        ),
    ],
)
def test_split_arguments(signature, expected):
    arguments, trailer = split_arguments(signature)
    assert arguments == expected
    assert trailer is None


def test_split_arguments_returns_comment_as_trailer():
    assert split_arguments("# commet, with, comma") == ([], "commet, with, comma")
    assert split_arguments("a # commet, with, comma") == (["a"], "commet, with, comma")
    assert split_arguments("a,b,&c # commet, with, comma") == (["a", "b", "&c"], "commet, with, comma")


def test_split_arguments_reads_trailer_after_closing_paren():
    assert split_arguments("(a, b) # note") == (["a", "b"], "note")


def test_split_arguments_keeps_empty_final_argument_after_comma():
    assert split_arguments("a, ") == (["a", ""], None)


def test_split_arguments_degrades_on_unbalanced_input():
    assert split_arguments("a, [b, c") == (["a", "[b, c"], None)
    assert split_arguments("a, 'b, c") == (["a", "'b, c"], None)


def test_split_arguments_leaves_cursor_on_terminator():
    cursor = Cursor("a, b # trailing comment")
    arguments, _ = split_arguments(cursor)
    assert arguments == ["a", "b"]
    assert cursor.rest == "# trailing comment"


def test_split_arguments_rejects_unsupported_input():
    with pytest.raises(UnsupportedInputError):
        split_arguments(42)


def test_scan_trailer_documentation():
    assert scan_trailer("str with # trailer") == "trailer"
    assert scan_trailer("'# in str' # trailer") == "trailer"
    assert scan_trailer("str with without trailer") is None


def test_scan_trailer_does_not_recognize_percent_literals():
    assert scan_trailer("%Q{# in str} # trailer") == "in str} # trailer"


def test_scan_trailer_returns_none_without_a_trailer():
    assert scan_trailer("") is None
    assert scan_trailer("simply a string") is None


def test_scan_trailer_returns_stripped_trailer():
    assert scan_trailer("str with # trailer comment") == "trailer comment"
    assert scan_trailer("str with #   trailer comment   ") == "trailer comment"


def test_scan_trailer_overlooks_comments_in_strings():
    assert scan_trailer(""" '#str' "#{str}" # trailer comment""") == "trailer comment"


def test_scan_trailer_starts_at_cursor_position():
    cursor = Cursor("# skipped 'x' # trailer", pos=2)
    assert scan_trailer(cursor) == "trailer"
