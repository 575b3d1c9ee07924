"""Selection models driven by the interactive selector.

A model owns the ordered rows, the cursor and the pending counters for one
selection session. It is only ever touched by the selector thread; background
probes reach it through updates applied with ``apply``.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from vibe_sessions.constants import MULTI_SELECT_HINT, SINGLE_SELECT_HINT
from vibe_sessions.logging_config import get_logger
from vibe_sessions.models.session import ItemState, Session
from vibe_sessions.models.updates import StatusReady, SummaryReady, SummaryStarted, Update

logger = get_logger(__name__)


class SelectionOutcome:
    """Terminal result of a selection session."""

    indices: Tuple[int, ...] = ()


@dataclass(frozen=True)
class Confirmed(SelectionOutcome):
    """The user confirmed. ``indices`` is empty when there was nothing to pick."""

    indices: Tuple[int, ...] = ()


@dataclass(frozen=True)
class Cancelled(SelectionOutcome):
    """The user backed out."""


class SelectionModel:
    """Shared state and update handling for both selection modes."""

    HINT = SINGLE_SELECT_HINT
    supports_marking = False

    def __init__(self, items: Sequence[ItemState], expect_summaries: bool = True):
        self.items: List[ItemState] = list(items)
        self.expect_summaries = expect_summaries
        self.cursor: Optional[int] = 0 if self.items else None
        self.pending_status = sum(1 for item in self.items if not item.has_status)
        self.pending_summaries = sum(1 for item in self.items if item.summary.is_pending)

    @classmethod
    def from_sessions(cls, sessions: Sequence[Session], expect_summaries: bool = True) -> "SelectionModel":
        return cls([ItemState(session) for session in sessions], expect_summaries=expect_summaries)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def is_loading(self) -> bool:
        return self.pending_status > 0 or self.pending_summaries > 0

    def move_up(self) -> None:
        if self.cursor is None:
            return
        self.cursor = max(self.cursor - 1, 0)

    def move_down(self) -> None:
        if self.cursor is None:
            return
        self.cursor = min(self.cursor + 1, len(self.items) - 1)

    def is_checked(self, index: int) -> Optional[bool]:
        """Checkbox state for a row, None when the mode has no checkboxes."""
        return None

    def apply(self, update: Update) -> bool:
        """Apply one update.

        Updates for indices outside the list are dropped. Returns True if the
        model changed.
        """
        if not 0 <= update.index < len(self.items):
            logger.debug(f"Dropping update for unknown index {update.index}")
            return False

        item = self.items[update.index]
        if isinstance(update, StatusReady):
            return self._apply_status(item, update)
        if isinstance(update, SummaryStarted):
            changed = item.start_summary()
        elif isinstance(update, SummaryReady):
            changed = item.finish_summary(update.text)
            if changed:
                self.pending_summaries -= 1
        else:
            raise TypeError(f"Unknown update type: {type(update).__name__}")

        if not changed:
            logger.debug(
                f"Ignoring {type(update).__name__} for {item.session.name} "
                f"(summary is {item.summary.stage.value})"
            )
        return changed

    def apply_all(self, updates: Sequence[Update]) -> int:
        """Apply a batch of updates, returning how many changed the model."""
        return sum(1 for update in updates if self.apply(update))

    def _apply_status(self, item: ItemState, update: StatusReady) -> bool:
        first = item.record_status(update.status)
        if not first:
            logger.debug(f"Duplicate status for {item.session.name}, keeping latest snapshot")
            return True

        self.pending_status -= 1
        # Only the first snapshot decides whether a summary is coming
        if self.expect_summaries and update.status.needs_summary() and item.queue_summary():
            self.pending_summaries += 1
        return True

    def build_title(self) -> str:
        indicators = []
        if self.pending_status > 0:
            indicators.append(f"Loading: {self.pending_status}")
        if self.pending_summaries > 0:
            indicators.append(f"Summarizing: {self.pending_summaries}")

        if indicators:
            return f" {self.HINT} [{', '.join(indicators)}] "
        return f" {self.HINT} "

    def confirm(self) -> SelectionOutcome:
        """A plain model only tracks rows, so confirming picks nothing."""
        return Confirmed(())

    def cancel(self) -> SelectionOutcome:
        return Cancelled()


class SingleSelectModel(SelectionModel):
    """Exactly one highlighted row; Enter picks it."""

    def confirm(self) -> SelectionOutcome:
        if self.cursor is None:
            return Confirmed(())
        return Confirmed((self.cursor,))


class MultiSelectModel(SelectionModel):
    """Independent per-row checkboxes; Enter returns every checked row."""

    HINT = MULTI_SELECT_HINT
    supports_marking = True

    def __init__(self, items: Sequence[ItemState], expect_summaries: bool = True):
        super().__init__(items, expect_summaries)
        self.selected: List[bool] = [False] * len(self.items)

    def is_checked(self, index: int) -> Optional[bool]:
        return self.selected[index]

    def toggle_current(self) -> None:
        if self.cursor is None:
            return
        self.selected[self.cursor] = not self.selected[self.cursor]

    def select_all(self) -> None:
        self.selected = [True] * len(self.items)

    def deselect_all(self) -> None:
        self.selected = [False] * len(self.items)

    def selected_indices(self) -> Tuple[int, ...]:
        return tuple(i for i, checked in enumerate(self.selected) if checked)

    def confirm(self) -> SelectionOutcome:
        """Checked rows in ascending index order.

        Confirming with nothing checked is reported as a cancellation.
        """
        indices = self.selected_indices()
        if not indices:
            return Cancelled()
        return Confirmed(indices)
