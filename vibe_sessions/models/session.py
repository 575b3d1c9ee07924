"""Session and per-row selector state models."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from vibe_sessions.models.status import WorktreeStatus


@dataclass(frozen=True)
class Session:
    """A session worktree found during enumeration."""

    path: str
    branch_name: str
    commit_sha: str = ""
    is_orphaned: bool = False  # Directory missing?
    prefix: str = ""

    @property
    def name(self) -> str:
        """Identifier of the session (its branch name)."""
        return self.branch_name

    @property
    def short_name(self) -> str:
        """Branch name without the session prefix."""
        if self.prefix and self.branch_name.startswith(self.prefix):
            return self.branch_name[len(self.prefix):]
        return self.branch_name

    def matches(self, text: str) -> bool:
        """Partial match against the path or branch name."""
        return text in self.path or text in self.branch_name

    def __str__(self) -> str:
        status = "orphaned" if self.is_orphaned else "active"
        return f"{self.branch_name} @ {self.path} [{status}]"


class SummaryStage(Enum):
    """Lifecycle stage of a session summary."""

    NONE = "none"
    QUEUED = "queued"
    SUMMARIZING = "summarizing"
    DONE = "done"

    @property
    def rank(self) -> int:
        return _STAGE_ORDER.index(self)


_STAGE_ORDER = list(SummaryStage)


@dataclass(frozen=True)
class SummaryState:
    """Summary stage plus the text carried once the stage is DONE."""

    stage: SummaryStage = SummaryStage.NONE
    text: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.stage in (SummaryStage.QUEUED, SummaryStage.SUMMARIZING)

    @property
    def is_done(self) -> bool:
        return self.stage is SummaryStage.DONE

    def can_advance_to(self, stage: SummaryStage) -> bool:
        """Transitions only move forward, and nothing leaves DONE."""
        return stage.rank > self.stage.rank

    def advance(self, stage: SummaryStage, text: Optional[str] = None) -> "SummaryState":
        """Return the state moved forward to ``stage``.

        Raises:
            ValueError: If the move would not go forward
        """
        if not self.can_advance_to(stage):
            raise ValueError(f"Cannot move summary from {self.stage.value} to {stage.value}")
        return replace(self, stage=stage, text=text if stage is SummaryStage.DONE else None)


@dataclass
class ItemState:
    """Mutable selector row: session identity, last known status and summary stage."""

    session: Session
    status: Optional[WorktreeStatus] = None
    summary: SummaryState = field(default_factory=SummaryState)

    @property
    def has_status(self) -> bool:
        return self.status is not None

    def record_status(self, status: WorktreeStatus) -> bool:
        """Store a status snapshot.

        Returns:
            True if this was the first status for the row
        """
        first = self.status is None
        self.status = status
        return first

    def queue_summary(self) -> bool:
        """NONE -> QUEUED. Returns True if the transition happened."""
        if self.summary.stage is not SummaryStage.NONE:
            return False
        self.summary = self.summary.advance(SummaryStage.QUEUED)
        return True

    def start_summary(self) -> bool:
        """QUEUED -> SUMMARIZING. Returns True if the transition happened."""
        if self.summary.stage is not SummaryStage.QUEUED:
            return False
        self.summary = self.summary.advance(SummaryStage.SUMMARIZING)
        return True

    def finish_summary(self, text: Optional[str]) -> bool:
        """QUEUED or SUMMARIZING -> DONE. Returns True if the transition happened."""
        if not self.summary.is_pending:
            return False
        self.summary = self.summary.advance(SummaryStage.DONE, text)
        return True
