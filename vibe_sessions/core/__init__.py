"""Core orchestration for vibe-sessions."""

from .session_keeper import SessionKeeper, is_at_risk

__all__ = ["SessionKeeper", "is_at_risk"]
