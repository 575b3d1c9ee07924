"""Messages sent from background probes to the selector."""

from dataclasses import dataclass
from typing import Optional, Union

from vibe_sessions.models.status import WorktreeStatus


@dataclass(frozen=True)
class StatusReady:
    """The status probe for the session at ``index`` finished."""

    index: int
    status: WorktreeStatus


@dataclass(frozen=True)
class SummaryStarted:
    """The summary probe for the session at ``index`` started running."""

    index: int


@dataclass(frozen=True)
class SummaryReady:
    """The summary probe for the session at ``index`` finished.

    ``text`` is None when the probe produced nothing usable.
    """

    index: int
    text: Optional[str]


Update = Union[StatusReady, SummaryStarted, SummaryReady]
