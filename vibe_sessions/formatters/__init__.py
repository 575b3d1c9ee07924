"""Formatting utilities for vibe-sessions.

This package provides formatting functions for displaying session information,
organized into logical modules:
- status: Status glyphs, change counts and the legend
- session: Selector rows, the visible window and deletion warnings
"""

# Status formatters
from .status import (
    get_status_style_type,
    format_status_glyph,
    format_change_counts,
    format_status_details,
    format_legend,
)

# Session formatters
from .session import (
    format_summary_line,
    format_detail_line,
    format_item_lines,
    visible_window,
    format_selector_rows,
    format_deletion_warning_items,
)

__all__ = [
    # Status
    "get_status_style_type",
    "format_status_glyph",
    "format_change_counts",
    "format_status_details",
    "format_legend",
    # Session
    "format_summary_line",
    "format_detail_line",
    "format_item_lines",
    "visible_window",
    "format_selector_rows",
    "format_deletion_warning_items",
]
