from lazy_comments.attributes import (
    _try_enter_skip_region,
    _try_leave_skip_region,
    declaration_pattern,
)
from lazy_comments.models import Cursor, ScanContext, ScannerState

SKIPPED = "# Name:::-\n# Ignored::key value\n# :::+\n# After::key value\n"


def test_try_enter_skip_region_sets_context_fields():
    ctx = ScanContext()
    cursor = Cursor(SKIPPED)
    match = declaration_pattern("key").match(cursor.text, 0)

    entered = _try_enter_skip_region(ctx, cursor, match)

    assert entered is True
    assert ctx.state is ScannerState.IN_SKIP_REGION
    assert ctx.skip_started_at == 0
    assert cursor.pos == match.end()


def test_try_enter_skip_region_ignores_declarations():
    ctx = ScanContext()
    cursor = Cursor("# Name::key value\n")
    match = declaration_pattern("key").match(cursor.text, 0)

    assert _try_enter_skip_region(ctx, cursor, match) is False
    assert ctx.state is ScannerState.SCANNING
    assert cursor.pos == 0


def test_try_enter_skip_region_ignored_when_already_skipping():
    ctx = ScanContext(state=ScannerState.IN_SKIP_REGION, skip_started_at=3)
    cursor = Cursor(SKIPPED)
    match = declaration_pattern("key").match(cursor.text, 0)

    assert _try_enter_skip_region(ctx, cursor, match) is False
    assert ctx.skip_started_at == 3


def test_try_leave_skip_region_moves_past_resume_sentinel():
    ctx = ScanContext(state=ScannerState.IN_SKIP_REGION, skip_started_at=0)
    cursor = Cursor(SKIPPED, pos=len("# Name:::-"))

    left = _try_leave_skip_region(ctx, cursor)

    assert left is True
    assert ctx.state is ScannerState.SCANNING
    assert ctx.skip_started_at is None
    assert cursor.text[: cursor.pos].endswith(":::+")


def test_try_leave_skip_region_runs_to_end_without_resume_sentinel():
    ctx = ScanContext(state=ScannerState.IN_SKIP_REGION, skip_started_at=0)
    cursor = Cursor("# :::-\n# Ignored::key value\n", pos=6)

    assert _try_leave_skip_region(ctx, cursor) is False
    assert ctx.state is ScannerState.IN_SKIP_REGION
    assert cursor.at_end()


def test_try_leave_skip_region_ignored_while_scanning():
    ctx = ScanContext()
    cursor = Cursor(SKIPPED)

    assert _try_leave_skip_region(ctx, cursor) is False
    assert cursor.pos == 0
