"""Git-related services for vibe-sessions."""

from .worktrees import WorktreeService

__all__ = [
    "WorktreeService",
]
