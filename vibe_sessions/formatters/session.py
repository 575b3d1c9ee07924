"""Selector row and session list formatting utilities."""

from typing import List, Optional, Sequence, Tuple

from rich.console import Group
from rich.text import Text

from vibe_sessions.constants import (
    DIM_COLOR,
    HIGHLIGHT_COLOR,
    STATUS_COLORS,
    SYMBOL_CHECKED,
    SYMBOL_CURSOR,
    SYMBOL_NO_CURSOR,
    SYMBOL_UNCHECKED,
    StatusStyleType,
)
from vibe_sessions.formatters.status import format_change_counts, format_status_glyph
from vibe_sessions.models.session import ItemState, Session, SummaryStage
from vibe_sessions.models.status import WorktreeStatus


def _row_indent(checked: Optional[bool]) -> str:
    # Cursor marker, optional checkbox, glyph and its trailing space
    width = len(SYMBOL_CURSOR) + 2
    if checked is not None:
        width += len(SYMBOL_CHECKED)
    return " " * width


def format_summary_line(item: ItemState, spinner: str, highlighted: bool = False) -> Optional[Text]:
    """
    Format the summary line for a row.

    Only rows whose status shows uncommitted work (and is not orphaned) get a
    summary line. Queued and running summaries show the spinner.

    Returns:
        Rich Text, or None when no summary line should be drawn
    """
    if item.status is None or not item.status.needs_summary():
        return None

    color = HIGHLIGHT_COLOR if highlighted else DIM_COLOR
    stage = item.summary.stage
    if stage is SummaryStage.QUEUED:
        return Text(f"{spinner} Queued", style=color)
    if stage is SummaryStage.SUMMARIZING:
        return Text(f"{spinner} Summarizing...", style=color)
    if stage is SummaryStage.DONE and item.summary.text:
        return Text(item.summary.text, style=color)
    return None


def format_detail_line(item: ItemState, spinner: str, highlighted: bool = False) -> Text:
    """Format the status detail line: loading spinner, orphan notice or change counts."""
    if item.status is None:
        return Text(f"{spinner} Loading...", style=HIGHLIGHT_COLOR if highlighted else DIM_COLOR)
    if item.status.is_orphaned:
        return Text("Orphaned - directory missing", style=STATUS_COLORS[StatusStyleType.ORPHANED])
    return format_change_counts(item.status, highlighted)


def format_item_lines(
    item: ItemState, spinner: str, highlighted: bool = False, checked: Optional[bool] = None
) -> List[Text]:
    """
    Format one selector row.

    Args:
        item: Row state
        spinner: Current spinner frame
        highlighted: Whether the cursor is on this row
        checked: Checkbox state, or None for modes without checkboxes

    Returns:
        Header line, optional summary line and detail line
    """
    header = Text(SYMBOL_CURSOR if highlighted else SYMBOL_NO_CURSOR, style="bold")
    if checked is not None:
        header.append(SYMBOL_CHECKED if checked else SYMBOL_UNCHECKED)
    header.append_text(format_status_glyph(item.status))
    header.append(" ")
    header.append(item.session.name, style="bold" if highlighted else "")

    indent = _row_indent(checked)
    lines = [header]
    summary = format_summary_line(item, spinner, highlighted)
    if summary is not None:
        lines.append(Text(indent) + summary)
    lines.append(Text(indent) + format_detail_line(item, spinner, highlighted))

    if highlighted:
        for line in lines:
            line.stylize("on grey23")
    return lines


def visible_window(cursor: Optional[int], total: int, size: int) -> range:
    """
    Pick the rows to draw so the cursor stays on screen.

    The window is centered on the cursor where possible and never runs past
    either end of the list.
    """
    if total <= size:
        return range(total)
    anchor = cursor or 0
    start = min(max(anchor - size // 2, 0), total - size)
    return range(start, start + size)


def format_selector_rows(model, spinner: str, max_visible: int) -> Group:
    """
    Render the visible part of a selection model.

    Args:
        model: SelectionModel to draw
        spinner: Current spinner frame
        max_visible: Maximum number of rows to draw

    Returns:
        Rich Group with the rows and scroll hints
    """
    window = visible_window(model.cursor, len(model.items), max_visible)
    lines: List[Text] = []
    if window.start > 0:
        lines.append(Text(f"  ↑ {window.start} more", style=DIM_COLOR))
    for index in window:
        lines.extend(
            format_item_lines(
                model.items[index],
                spinner,
                highlighted=index == model.cursor,
                checked=model.is_checked(index),
            )
        )
    hidden_below = len(model.items) - window.stop
    if hidden_below > 0:
        lines.append(Text(f"  ↓ {hidden_below} more", style=DIM_COLOR))
    return Group(*lines)


def format_deletion_warning_items(entries: Sequence[Tuple[Session, Optional[WorktreeStatus]]]) -> str:
    """
    Format sessions that would lose work for the deletion confirmation.

    Returns:
        One bullet per session, e.g.
        "  • claude/ab12 (2 modified, 1 untracked, 3 ahead)"
    """
    lines = []
    for session, status in entries:
        if status is None:
            detail = "status unavailable"
        elif status.is_orphaned:
            detail = "orphaned - directory missing"
        else:
            detail = (
                f"{status.modified_files} modified, "
                f"{status.untracked_files} untracked, "
                f"{status.commits_ahead} ahead"
            )
        lines.append(f"  • {session.name} ({detail})")
    return "\n".join(lines)
