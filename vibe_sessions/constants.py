"""Shared constants for vibe-sessions."""

from typing import Dict, Tuple

# Spinner frames for rows still waiting on a probe
SPINNER_FRAMES: Tuple[str, ...] = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")

# Untracked files under this directory belong to the session tooling, not the user
IGNORED_UNTRACKED_PREFIX = ".claude/"

# Longest summary line kept from the summary command
SUMMARY_DISPLAY_WIDTH = 80


# Symbol constants
SYMBOL_STATUS = "●"
SYMBOL_ORPHANED = "✗"
SYMBOL_LOADING = "◌"
SYMBOL_CHECKED = "[✓] "
SYMBOL_UNCHECKED = "[ ] "
SYMBOL_CURSOR = "> "
SYMBOL_NO_CURSOR = "  "
SYMBOL_AHEAD = "↑"


class StatusStyleType:
    """Style types for session status glyphs."""

    ORPHANED = "orphaned"
    DANGER = "danger"  # Uncommitted and unpushed
    UNCOMMITTED = "uncommitted"
    UNPUSHED = "unpushed"
    CLEAN = "clean"
    LOADING = "loading"


# Glyph colors (Rich color names)
STATUS_COLORS: Dict[str, str] = {
    StatusStyleType.ORPHANED: "red",
    StatusStyleType.DANGER: "red",
    StatusStyleType.UNCOMMITTED: "yellow",
    StatusStyleType.UNPUSHED: "blue",
    StatusStyleType.CLEAN: "green",
    StatusStyleType.LOADING: "bright_black",
}

# Detail line colors
ADDED_COLOR = "rgb(80,160,80)"
DELETED_COLOR = "rgb(180,80,80)"
AHEAD_COLOR = "rgb(100,140,180)"
DIM_COLOR = "bright_black"
HIGHLIGHT_COLOR = "white"
SUMMARY_COLOR: str = "cyan"


LEGEND_ENTRIES = (
    (SYMBOL_STATUS, StatusStyleType.CLEAN, "clean"),
    (SYMBOL_STATUS, StatusStyleType.UNCOMMITTED, "uncommitted"),
    (SYMBOL_STATUS, StatusStyleType.UNPUSHED, "unpushed"),
    (SYMBOL_STATUS, StatusStyleType.DANGER, "both"),
    (SYMBOL_ORPHANED, StatusStyleType.ORPHANED, "orphaned"),
)


SINGLE_SELECT_HINT = "Select a session (↑/↓ navigate, Enter select, q quit)"
MULTI_SELECT_HINT = "Select worktrees (Space toggle, a all, n none, Enter confirm, q quit)"
