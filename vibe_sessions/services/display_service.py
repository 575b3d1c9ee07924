"""Display service for the non-interactive session listing"""
from collections import Counter
from typing import Optional, Sequence

from rich.console import Console
from rich.text import Text

from vibe_sessions.constants import DIM_COLOR, SUMMARY_COLOR
from vibe_sessions.formatters import format_legend, format_status_details, format_status_glyph
from vibe_sessions.logging_config import get_logger
from vibe_sessions.models.session import ItemState
from vibe_sessions.models.status import StatusSeverity, classify_status

console = Console()
logger = get_logger(__name__)


class DisplayService:
    def __init__(self, verbose: bool = False, debug: bool = False, output: Optional[Console] = None):
        self.verbose = verbose
        self.debug_mode = debug
        self.console = output or console

    def format_session_entry(self, item: ItemState) -> Text:
        """Glyph and name, then path, optional summary and details on indented lines."""
        entry = format_status_glyph(item.status)
        entry.append(" ")
        entry.append(item.session.name, style="bold")
        entry.append(f"\n    {item.session.path}", style=DIM_COLOR)

        if item.status is None:
            entry.append("\n    Status unavailable", style=DIM_COLOR)
            return entry

        if item.summary.is_done and item.summary.text:
            entry.append(f"\n    {item.summary.text}", style=SUMMARY_COLOR)
        entry.append(f"\n    {format_status_details(item.status)}")
        if self.verbose and item.session.commit_sha:
            entry.append(f"\n    HEAD {item.session.commit_sha[:12]}", style=DIM_COLOR)
        return entry

    def display_sessions(self, items: Sequence[ItemState], show_summary: bool = True) -> None:
        """Print every session followed by the legend and a severity count."""
        logger.debug(f"Displaying {len(items)} sessions")
        for item in items:
            self.console.print(self.format_session_entry(item))
            self.console.print()

        if not show_summary:
            return

        self.console.print(format_legend())

        counts = Counter(classify_status(item.status) for item in items if item.status is not None)
        parts = [f"{counts[severity]} {severity.value}" for severity in StatusSeverity if counts[severity]]
        unknown = sum(1 for item in items if item.status is None)
        if unknown:
            parts.append(f"{unknown} unknown")
        self.console.print(f"\n{len(items)} sessions: {', '.join(parts)}")
