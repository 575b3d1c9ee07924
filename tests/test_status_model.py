"""Tests for status snapshots, severity classification and summary lifecycle."""

import itertools

import pytest

from vibe_sessions.models import (
    ItemState,
    Session,
    StatusSeverity,
    SummaryStage,
    SummaryState,
    WorktreeStatus,
    classify_status,
)


class TestWorktreeStatus:
    """Test the derived predicates."""

    def test_defaults_are_clean(self):
        status = WorktreeStatus()

        assert status.has_local_changes() is False
        assert status.is_safe_to_delete() is True
        assert status.needs_summary() is False

    @pytest.mark.parametrize(
        "field",
        ["modified_files", "untracked_files", "lines_added", "lines_deleted"],
    )
    def test_any_counter_means_local_changes(self, field):
        status = WorktreeStatus(**{field: 1})
        assert status.has_local_changes() is True

    def test_commits_ahead_are_not_local_changes(self):
        status = WorktreeStatus(has_unpushed=True, commits_ahead=3)

        assert status.has_local_changes() is False
        # Unpushed commits are flagged separately by the caller
        assert status.is_safe_to_delete() is True

    def test_uncommitted_is_not_safe(self, dirty_status):
        assert dirty_status.is_safe_to_delete() is False
        assert dirty_status.needs_summary() is True

    def test_orphaned_is_not_safe_and_needs_no_summary(self):
        status = WorktreeStatus.orphaned()

        assert status.is_orphaned is True
        assert status.is_safe_to_delete() is False
        assert status.needs_summary() is False

    def test_orphaned_with_uncommitted_flag_needs_no_summary(self):
        status = WorktreeStatus(is_orphaned=True, has_uncommitted=True)
        assert status.needs_summary() is False

    def test_status_is_immutable(self):
        status = WorktreeStatus()
        with pytest.raises(AttributeError):
            status.modified_files = 3


class TestClassifyStatus:
    """Test the severity priority order."""

    def test_priority_order(self):
        assert classify_status(WorktreeStatus(has_uncommitted=True, has_unpushed=True)) is StatusSeverity.DANGER
        assert classify_status(WorktreeStatus(has_uncommitted=True)) is StatusSeverity.UNCOMMITTED
        assert classify_status(WorktreeStatus(has_unpushed=True)) is StatusSeverity.UNPUSHED
        assert classify_status(WorktreeStatus()) is StatusSeverity.CLEAN

    def test_orphaned_always_wins(self):
        for uncommitted, unpushed in itertools.product([False, True], repeat=2):
            status = WorktreeStatus(
                is_orphaned=True, has_uncommitted=uncommitted, has_unpushed=unpushed
            )
            assert classify_status(status) is StatusSeverity.ORPHANED

    def test_depends_only_on_flags(self):
        """Counters never change the classification."""
        a = WorktreeStatus(has_uncommitted=True, modified_files=1)
        b = WorktreeStatus(has_uncommitted=True, modified_files=99, lines_added=500)

        assert classify_status(a) is classify_status(b)
        assert classify_status(a) is classify_status(a)

    def test_rank_follows_severity(self):
        ranks = [severity.rank for severity in StatusSeverity]
        assert ranks == sorted(ranks)
        assert StatusSeverity.ORPHANED.rank == 0
        assert StatusSeverity.CLEAN.rank == len(StatusSeverity) - 1


class TestSummaryState:
    """Test the forward-only summary lifecycle."""

    def test_forward_transitions(self):
        state = SummaryState()
        state = state.advance(SummaryStage.QUEUED)
        state = state.advance(SummaryStage.SUMMARIZING)
        state = state.advance(SummaryStage.DONE, "refactor auth")

        assert state.is_done
        assert state.text == "refactor auth"

    def test_queued_can_skip_to_done(self):
        state = SummaryState(SummaryStage.QUEUED).advance(SummaryStage.DONE, "quick")
        assert state.stage is SummaryStage.DONE

    @pytest.mark.parametrize(
        "start,target",
        [
            (SummaryStage.SUMMARIZING, SummaryStage.QUEUED),
            (SummaryStage.DONE, SummaryStage.SUMMARIZING),
            (SummaryStage.DONE, SummaryStage.DONE),
            (SummaryStage.QUEUED, SummaryStage.NONE),
        ],
    )
    def test_no_regression(self, start, target):
        with pytest.raises(ValueError):
            SummaryState(start).advance(target)

    def test_text_only_kept_when_done(self):
        state = SummaryState().advance(SummaryStage.QUEUED, "ignored")
        assert state.text is None

    def test_pending_stages(self):
        assert not SummaryState(SummaryStage.NONE).is_pending
        assert SummaryState(SummaryStage.QUEUED).is_pending
        assert SummaryState(SummaryStage.SUMMARIZING).is_pending
        assert not SummaryState(SummaryStage.DONE).is_pending


class TestItemState:
    """Test per-row state transitions."""

    @pytest.fixture
    def item(self):
        return ItemState(Session(path="/wt/a", branch_name="claude/a", prefix="claude/"))

    def test_created_without_status(self, item):
        assert item.has_status is False
        assert item.summary.stage is SummaryStage.NONE

    def test_first_status_is_reported(self, item, clean_status, dirty_status):
        assert item.record_status(clean_status) is True
        assert item.record_status(dirty_status) is False
        assert item.status == dirty_status

    def test_summary_cannot_start_before_queue(self, item):
        assert item.start_summary() is False
        assert item.finish_summary("text") is False
        assert item.summary.stage is SummaryStage.NONE

    def test_summary_lifecycle(self, item):
        assert item.queue_summary() is True
        assert item.queue_summary() is False
        assert item.start_summary() is True
        assert item.finish_summary("done") is True
        assert item.finish_summary("again") is False
        assert item.summary.text == "done"

    def test_session_names(self, item):
        assert item.session.name == "claude/a"
        assert item.session.short_name == "a"
        assert item.session.matches("wt/a")
        assert not item.session.matches("zzz")
