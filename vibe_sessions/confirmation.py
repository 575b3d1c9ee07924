"""Blocking yes/no confirmation shown before destructive actions."""

from typing import Optional

from rich.console import Console

from vibe_sessions.logging_config import get_logger

logger = get_logger(__name__)

YES_ANSWERS = ("y", "yes")


class ConfirmationGate:
    """Ask the operator to confirm on the console.

    Only an explicit yes proceeds. An empty answer, anything else, end of
    input and Ctrl+C all decline.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def confirm(self, prompt: str, details: Optional[str] = None) -> bool:
        """Print ``details`` (if any) and block on a ``[y/N]`` answer."""
        if details:
            self.console.print(details)

        try:
            response = self.console.input(f"\n{prompt} [y/N] ")
        except (EOFError, KeyboardInterrupt):
            self.console.print()
            logger.debug(f"Confirmation aborted: {prompt}")
            return False

        accepted = response.strip().lower() in YES_ANSWERS
        logger.debug(f"Confirmation {prompt!r} answered {response!r} -> {accepted}")
        return accepted
