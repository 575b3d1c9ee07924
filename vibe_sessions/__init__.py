"""
vibe-sessions - Pick, inspect and clean up isolated git worktree sessions
"""

from .__version__ import __version__
from .core import SessionKeeper

__all__ = ["SessionKeeper", "__version__"]
