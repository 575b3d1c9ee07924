"""Status glyph and detail formatting utilities."""

from typing import Optional

from rich.text import Text

from vibe_sessions.constants import (
    ADDED_COLOR,
    AHEAD_COLOR,
    DELETED_COLOR,
    DIM_COLOR,
    HIGHLIGHT_COLOR,
    LEGEND_ENTRIES,
    STATUS_COLORS,
    SYMBOL_AHEAD,
    SYMBOL_LOADING,
    SYMBOL_ORPHANED,
    SYMBOL_STATUS,
    StatusStyleType,
)
from vibe_sessions.models.status import StatusSeverity, WorktreeStatus, classify_status

_SEVERITY_STYLES = {
    StatusSeverity.ORPHANED: StatusStyleType.ORPHANED,
    StatusSeverity.DANGER: StatusStyleType.DANGER,
    StatusSeverity.UNCOMMITTED: StatusStyleType.UNCOMMITTED,
    StatusSeverity.UNPUSHED: StatusStyleType.UNPUSHED,
    StatusSeverity.CLEAN: StatusStyleType.CLEAN,
}


def get_status_style_type(status: Optional[WorktreeStatus]) -> str:
    """
    Determine the style type for a session's status glyph.

    Args:
        status: Status snapshot, or None while the probe is still running

    Returns:
        StatusStyleType constant
    """
    if status is None:
        return StatusStyleType.LOADING
    return _SEVERITY_STYLES[classify_status(status)]


def format_status_glyph(status: Optional[WorktreeStatus]) -> Text:
    """Colored glyph for a status. A missing status gets the loading glyph, never an error glyph."""
    style_type = get_status_style_type(status)
    if style_type == StatusStyleType.LOADING:
        symbol = SYMBOL_LOADING
    elif style_type == StatusStyleType.ORPHANED:
        symbol = SYMBOL_ORPHANED
    else:
        symbol = SYMBOL_STATUS
    return Text(symbol, style=STATUS_COLORS[style_type])


def format_change_counts(status: WorktreeStatus, highlighted: bool = False) -> Text:
    """
    Format the compact change line used by the selector.

    Untracked files count as added lines. Shows "+added -deleted ↑ahead" with
    zero parts left out, or "Clean" when there is nothing to show.

    Args:
        status: Status snapshot (must not be orphaned)
        highlighted: Whether the row is under the cursor

    Returns:
        Rich Text for the change line
    """
    total_added = status.lines_added + status.untracked_files
    parts = []
    if total_added > 0:
        parts.append(Text(f"+{total_added}", style=ADDED_COLOR))
    if status.lines_deleted > 0:
        parts.append(Text(f"-{status.lines_deleted}", style=DELETED_COLOR))
    if status.commits_ahead > 0:
        parts.append(Text(f"{SYMBOL_AHEAD}{status.commits_ahead}", style=AHEAD_COLOR))

    if not parts:
        return Text("Clean", style=HIGHLIGHT_COLOR if highlighted else DIM_COLOR)
    return Text(" ").join(parts)


def format_status_details(status: WorktreeStatus) -> str:
    """
    Format the long status description used by the status listing.

    Returns:
        "Orphaned - directory missing", "Clean - safe to delete", or a comma
        separated list such as "2 modified, 1 untracked, 3 unpushed commit(s)"
    """
    if status.is_orphaned:
        return "Orphaned - directory missing"

    details = []
    if status.modified_files > 0:
        details.append(f"{status.modified_files} modified")
    if status.untracked_files > 0:
        details.append(f"{status.untracked_files} untracked")
    if status.commits_ahead > 0:
        details.append(f"{status.commits_ahead} unpushed commit(s)")

    if not details:
        return "Clean - safe to delete"
    return ", ".join(details)


def format_legend() -> Text:
    """Legend line explaining the status glyph colors."""
    legend = Text("Legend: ", style=DIM_COLOR)
    for symbol, style_type, label in LEGEND_ENTRIES:
        legend.append(symbol, style=STATUS_COLORS[style_type])
        legend.append(f" {label}  ", style=DIM_COLOR)
    legend.rstrip()
    return legend
