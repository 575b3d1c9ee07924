"""Data models for vibe-sessions."""

from .status import WorktreeStatus, StatusSeverity, classify_status
from .session import Session, SummaryStage, SummaryState, ItemState
from .updates import Update, StatusReady, SummaryStarted, SummaryReady

__all__ = [
    "WorktreeStatus",
    "StatusSeverity",
    "classify_status",
    "Session",
    "SummaryStage",
    "SummaryState",
    "ItemState",
    "Update",
    "StatusReady",
    "SummaryStarted",
    "SummaryReady",
]
