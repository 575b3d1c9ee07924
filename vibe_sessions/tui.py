"""Interactive session selector using Textual.

The selector is a small inline app. A tick timer drives it: every tick
advances the spinner, drains the update channel into the selection model and
redraws the rows. Key presses are handled between ticks.
"""

from typing import List, Optional, Sequence

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from .config import Config
from .constants import SPINNER_FRAMES
from .exceptions import TerminalSessionError
from .formatters import format_selector_rows
from .logging_config import get_logger
from .models.session import Session
from .selection.channel import UpdateChannel
from .selection.model import (
    Cancelled,
    Confirmed,
    MultiSelectModel,
    SelectionModel,
    SelectionOutcome,
    SingleSelectModel,
)

logger = get_logger(__name__)

# Actions only the multi-select mode understands
MARKING_ACTIONS = {"toggle", "select_all", "deselect_all"}


class SelectorApp(App[SelectionOutcome]):
    """Selector for one selection model, fed by background probe updates."""

    CSS = """
    Screen {
        background: $background;
    }

    #title {
        height: 1;
        text-style: bold;
        color: $accent;
    }

    #rows {
        height: auto;
    }
    """

    BINDINGS = [
        Binding("up,k", "cursor_up", "Up", show=False),
        Binding("down,j", "cursor_down", "Down", show=False),
        Binding("space", "toggle", "Toggle", show=False),
        Binding("a", "select_all", "All", show=False),
        Binding("n", "deselect_all", "None", show=False),
        Binding("enter", "confirm", "Confirm", show=False),
        Binding("escape,q", "cancel", "Quit", show=False),
        Binding("ctrl+c", "cancel", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        model: SelectionModel,
        channel: UpdateChannel,
        poll_interval: float = 0.05,
        max_visible_items: int = 6,
    ):
        super().__init__()
        self.model = model
        self.channel = channel
        self.poll_interval = poll_interval
        self.max_visible_items = max_visible_items
        self.frame = 0

    @property
    def spinner(self) -> str:
        return SPINNER_FRAMES[self.frame]

    def compose(self) -> ComposeResult:
        yield Static(id="title")
        yield Static(id="rows")

    def on_mount(self) -> None:
        self.drain_updates()
        self.refresh_view()
        self.set_interval(self.poll_interval, self._tick)

    def _tick(self) -> None:
        self.frame = (self.frame + 1) % len(SPINNER_FRAMES)
        self.drain_updates()
        self.refresh_view()

    def drain_updates(self) -> int:
        """Apply every update waiting in the channel. Never blocks."""
        updates = self.channel.drain()
        if not updates:
            return 0
        changed = self.model.apply_all(updates)
        logger.debug(f"Applied {changed}/{len(updates)} updates")
        return changed

    def refresh_view(self) -> None:
        self.query_one("#title", Static).update(Text(self.model.build_title()))
        self.query_one("#rows", Static).update(
            format_selector_rows(self.model, self.spinner, self.max_visible_items)
        )

    def check_action(self, action: str, parameters: tuple) -> Optional[bool]:
        if action in MARKING_ACTIONS and not self.model.supports_marking:
            return False
        return True

    def action_cursor_up(self) -> None:
        self.model.move_up()
        self.refresh_view()

    def action_cursor_down(self) -> None:
        self.model.move_down()
        self.refresh_view()

    def action_toggle(self) -> None:
        self.model.toggle_current()
        self.refresh_view()

    def action_select_all(self) -> None:
        self.model.select_all()
        self.refresh_view()

    def action_deselect_all(self) -> None:
        self.model.deselect_all()
        self.refresh_view()

    def action_confirm(self) -> None:
        self.exit(self.model.confirm())

    def action_cancel(self) -> None:
        self.exit(self.model.cancel())

    async def action_quit(self) -> None:
        """Any quit request is a cancellation."""
        self.action_cancel()

    async def action_help_quit(self) -> None:
        self.action_cancel()


def _run_selector(model: SelectionModel, channel: UpdateChannel, config: Config) -> SelectionOutcome:
    app = SelectorApp(
        model,
        channel,
        poll_interval=config.poll_interval,
        max_visible_items=config.max_visible_items,
    )
    try:
        outcome = app.run(inline=config.inline, mouse=False)
    except OSError as e:
        raise TerminalSessionError(str(e))

    if outcome is None:
        if app.return_code:
            raise TerminalSessionError("selector exited unexpectedly", app.return_code)
        return Cancelled()
    return outcome


def run_single_select(
    sessions: Sequence[Session], channel: UpdateChannel, config: Optional[Config] = None
) -> Optional[Session]:
    """Let the user pick one session.

    Returns:
        The chosen session, or None if the user cancelled or there was
        nothing to choose from

    Raises:
        TerminalSessionError: If the terminal could not be driven
    """
    if not sessions:
        return None
    config = config or Config()

    model = SingleSelectModel.from_sessions(sessions, expect_summaries=config.summaries)
    outcome = _run_selector(model, channel, config)
    if isinstance(outcome, Confirmed) and outcome.indices:
        return sessions[outcome.indices[0]]
    return None


def run_multi_select(
    sessions: Sequence[Session], channel: UpdateChannel, config: Optional[Config] = None
) -> Optional[List[Session]]:
    """Let the user check any number of sessions.

    Returns:
        Checked sessions in list order, or None if the user cancelled,
        confirmed with nothing checked, or there was nothing to choose from

    Raises:
        TerminalSessionError: If the terminal could not be driven
    """
    if not sessions:
        return None
    config = config or Config()

    model = MultiSelectModel.from_sessions(sessions, expect_summaries=config.summaries)
    outcome = _run_selector(model, channel, config)
    if isinstance(outcome, Confirmed) and outcome.indices:
        return [sessions[i] for i in outcome.indices]
    return None
