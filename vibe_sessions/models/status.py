"""Worktree status snapshot and severity classification."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class WorktreeStatus:
    """Snapshot of one session worktree's repository state.

    When ``is_orphaned`` is set the worktree directory is gone and every
    counter is meaningless.
    """

    is_orphaned: bool = False
    has_uncommitted: bool = False
    has_unpushed: bool = False
    modified_files: int = 0
    untracked_files: int = 0
    lines_added: int = 0
    lines_deleted: int = 0
    commits_ahead: int = 0

    @classmethod
    def orphaned(cls) -> "WorktreeStatus":
        """Status for a worktree whose directory is missing."""
        return cls(is_orphaned=True)

    def has_local_changes(self) -> bool:
        """True if any file or line level change exists in the worktree."""
        return (
            self.modified_files > 0
            or self.untracked_files > 0
            or self.lines_added > 0
            or self.lines_deleted > 0
        )

    def is_safe_to_delete(self) -> bool:
        """True if removing the worktree loses no uncommitted work.

        Unpushed commits do not make a session unsafe here; callers flag them
        separately.
        """
        return not self.has_uncommitted and not self.is_orphaned

    def needs_summary(self) -> bool:
        """True if a summary of the uncommitted changes should be generated."""
        return self.has_uncommitted and not self.is_orphaned


class StatusSeverity(Enum):
    """Severity buckets, most severe first."""

    ORPHANED = "orphaned"
    DANGER = "danger"
    UNCOMMITTED = "uncommitted"
    UNPUSHED = "unpushed"
    CLEAN = "clean"

    @property
    def rank(self) -> int:
        """Position in the severity order, 0 being the most severe."""
        return _SEVERITY_ORDER.index(self)


_SEVERITY_ORDER = list(StatusSeverity)


def classify_status(status: WorktreeStatus) -> StatusSeverity:
    """Classify a status snapshot.

    Priority: orphaned, then uncommitted and unpushed together, then
    uncommitted only, then unpushed only, then clean.
    """
    if status.is_orphaned:
        return StatusSeverity.ORPHANED
    if status.has_uncommitted and status.has_unpushed:
        return StatusSeverity.DANGER
    if status.has_uncommitted:
        return StatusSeverity.UNCOMMITTED
    if status.has_unpushed:
        return StatusSeverity.UNPUSHED
    return StatusSeverity.CLEAN
