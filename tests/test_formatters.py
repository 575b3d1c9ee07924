"""Tests for status and selector row formatting."""

import pytest

from vibe_sessions.constants import (
    STATUS_COLORS,
    SYMBOL_LOADING,
    SYMBOL_ORPHANED,
    SYMBOL_STATUS,
    StatusStyleType,
)
from vibe_sessions.formatters import (
    format_change_counts,
    format_deletion_warning_items,
    format_detail_line,
    format_item_lines,
    format_legend,
    format_selector_rows,
    format_status_details,
    format_status_glyph,
    format_summary_line,
    get_status_style_type,
    visible_window,
)
from vibe_sessions.models import ItemState, Session, StatusReady, SummaryReady, WorktreeStatus
from vibe_sessions.selection import MultiSelectModel, SingleSelectModel


def plain(renderable):
    return renderable.plain


class TestStatusFormatting:
    @pytest.mark.parametrize(
        "status,style_type,symbol",
        [
            (None, StatusStyleType.LOADING, SYMBOL_LOADING),
            (WorktreeStatus(is_orphaned=True), StatusStyleType.ORPHANED, SYMBOL_ORPHANED),
            (WorktreeStatus(has_uncommitted=True, has_unpushed=True), StatusStyleType.DANGER, SYMBOL_STATUS),
            (WorktreeStatus(has_uncommitted=True), StatusStyleType.UNCOMMITTED, SYMBOL_STATUS),
            (WorktreeStatus(has_unpushed=True), StatusStyleType.UNPUSHED, SYMBOL_STATUS),
            (WorktreeStatus(), StatusStyleType.CLEAN, SYMBOL_STATUS),
        ],
    )
    def test_glyph(self, status, style_type, symbol):
        glyph = format_status_glyph(status)

        assert get_status_style_type(status) == style_type
        assert glyph.plain == symbol
        assert str(glyph.style) == STATUS_COLORS[style_type]

    def test_change_counts(self):
        status = WorktreeStatus(
            has_uncommitted=True, has_unpushed=True,
            untracked_files=2, lines_added=10, lines_deleted=3, commits_ahead=1,
        )
        assert plain(format_change_counts(status)) == "+12 -3 ↑1"

    def test_change_counts_skip_zero_parts(self):
        status = WorktreeStatus(has_unpushed=True, commits_ahead=4)
        assert plain(format_change_counts(status)) == "↑4"

    def test_change_counts_clean(self):
        assert plain(format_change_counts(WorktreeStatus())) == "Clean"

    def test_details(self, dirty_status):
        assert format_status_details(dirty_status) == "2 modified, 1 untracked"
        assert format_status_details(WorktreeStatus(commits_ahead=2, has_unpushed=True)) == "2 unpushed commit(s)"
        assert format_status_details(WorktreeStatus()) == "Clean - safe to delete"
        assert format_status_details(WorktreeStatus.orphaned()) == "Orphaned - directory missing"

    def test_legend_mentions_every_state(self):
        legend = plain(format_legend())
        for label in ("clean", "uncommitted", "unpushed", "both", "orphaned"):
            assert label in legend


class TestRowFormatting:
    @pytest.fixture
    def item(self):
        return ItemState(Session(path="/wt/a", branch_name="claude/a", prefix="claude/"))

    def test_loading_row(self, item):
        lines = [plain(line) for line in format_item_lines(item, "⠋")]

        assert len(lines) == 2
        assert lines[0] == f"  {SYMBOL_LOADING} claude/a"
        assert lines[1].strip() == "⠋ Loading..."

    def test_orphaned_row_shows_no_counters(self, item):
        item.record_status(WorktreeStatus(is_orphaned=True, modified_files=5))
        assert plain(format_detail_line(item, "⠋")) == "Orphaned - directory missing"

    def test_cursor_and_checkbox(self, item):
        item.record_status(WorktreeStatus())
        header = plain(format_item_lines(item, "⠋", highlighted=True, checked=True)[0])
        assert header.startswith("> [✓] ")

        header = plain(format_item_lines(item, "⠋", checked=False)[0])
        assert header.startswith("  [ ] ")

    def test_summary_stages(self, item, dirty_status):
        assert format_summary_line(item, "⠋") is None

        item.record_status(dirty_status)
        item.queue_summary()
        assert plain(format_summary_line(item, "⠙")) == "⠙ Queued"

        item.start_summary()
        assert plain(format_summary_line(item, "⠙")) == "⠙ Summarizing..."

        item.finish_summary("refactor auth")
        assert plain(format_summary_line(item, "⠙")) == "refactor auth"
        assert len(format_item_lines(item, "⠙")) == 3

    def test_done_without_text_has_no_summary_line(self, item, dirty_status):
        item.record_status(dirty_status)
        item.queue_summary()
        item.finish_summary(None)

        assert format_summary_line(item, "⠋") is None


class TestVisibleWindow:
    def test_short_list_shows_everything(self):
        assert visible_window(0, 3, 6) == range(0, 3)

    def test_window_follows_cursor(self):
        assert visible_window(0, 20, 6) == range(0, 6)
        assert visible_window(10, 20, 6) == range(7, 13)
        assert visible_window(19, 20, 6) == range(14, 20)

    def test_cursor_always_visible(self):
        for cursor in range(20):
            assert cursor in visible_window(cursor, 20, 6)

    def test_empty(self):
        assert visible_window(None, 0, 6) == range(0)


class TestSelectorRows:
    def test_scroll_hints(self, sessions):
        model = SingleSelectModel.from_sessions(sessions)
        model.move_down()
        model.move_down()
        model.move_down()

        text = "\n".join(plain(line) for line in format_selector_rows(model, "⠋", 2).renderables)

        assert "↑ 2 more" in text
        assert "↓" not in text

    def test_multi_rows_have_checkboxes(self, sessions, clean_status):
        model = MultiSelectModel.from_sessions(sessions[:2])
        model.apply(StatusReady(0, clean_status))
        model.toggle_current()

        lines = [plain(line) for line in format_selector_rows(model, "⠋", 6).renderables]

        assert lines[0].startswith("> [✓] ")
        assert any(line.startswith("  [ ] ") for line in lines)

    def test_summary_rows(self, sessions, dirty_status):
        model = SingleSelectModel.from_sessions(sessions[:1])
        model.apply(StatusReady(0, dirty_status))
        model.apply(SummaryReady(0, "refactor auth"))

        lines = [plain(line) for line in format_selector_rows(model, "⠋", 6).renderables]
        assert [line.strip() for line in lines[1:]] == ["refactor auth", "+11 -3"]


class TestDeletionWarning:
    def test_items(self, dirty_status):
        session = Session(path="/wt/a", branch_name="claude/a")
        orphan = Session(path="/wt/b", branch_name="claude/b")
        unknown = Session(path="/wt/c", branch_name="claude/c")

        text = format_deletion_warning_items(
            [(session, dirty_status), (orphan, WorktreeStatus.orphaned()), (unknown, None)]
        )

        assert text.splitlines() == [
            "  • claude/a (2 modified, 1 untracked, 0 ahead)",
            "  • claude/b (orphaned - directory missing)",
            "  • claude/c (status unavailable)",
        ]
