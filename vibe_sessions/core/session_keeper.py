"""Core functionality for vibe-sessions"""

import time
from contextlib import nullcontext
from typing import List, Optional, Tuple, Union

from rich.console import Console

from vibe_sessions.config import Config
from vibe_sessions.confirmation import ConfirmationGate
from vibe_sessions.exceptions import GitOperationError, SessionNotFoundError
from vibe_sessions.formatters import format_deletion_warning_items
from vibe_sessions.logging_config import get_logger
from vibe_sessions.models.session import Session
from vibe_sessions.models.status import StatusSeverity, WorktreeStatus, classify_status
from vibe_sessions.selection.channel import UpdateChannel
from vibe_sessions.selection.model import SelectionModel
from vibe_sessions.services.display_service import DisplayService
from vibe_sessions.services.git import WorktreeService
from vibe_sessions.services.probe_service import ProbeService
from vibe_sessions.services.summary_service import SummaryService
from vibe_sessions.tui import run_multi_select, run_single_select
from vibe_sessions.utils.threading import get_optimal_worker_count

console = Console()
logger = get_logger(__name__)


def is_at_risk(status: Optional[WorktreeStatus]) -> bool:
    """True if deleting a session with this status could lose work.

    An unknown status counts as at risk.
    """
    if status is None:
        return True
    return status.is_orphaned or status.has_local_changes() or status.has_unpushed


class SessionKeeper:
    """Main class for picking, inspecting and removing session worktrees."""

    def __init__(self, repo_path: str, config: Union[Config, dict], tui_mode: bool = False):
        """Initialize SessionKeeper.

        Args:
            repo_path: Any path inside the git repository
            config: Configuration dict or Config object
            tui_mode: If True, suppresses Rich console output (for TUI mode)

        Raises:
            NotInRepositoryError: If repo_path is not inside a git repository
        """
        if isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config
        self.tui_mode = tui_mode
        self.verbose = self.config.verbose
        self.debug_mode = self.config.debug

        self.repo_path = WorktreeService.find_repo_root(repo_path)
        logger.debug(f"Using repository at {self.repo_path}")

        self.worktree_service = WorktreeService(
            self.repo_path,
            prefix=self.config.worktree_prefix,
            main_branch=self.config.main_branch,
        )
        self.summary_service = SummaryService(self.config, self.worktree_service)
        self.display_service = DisplayService(verbose=self.verbose, debug=self.debug_mode)
        self.confirmation = ConfirmationGate(console)

        self.stats = {"deleted": 0, "failed": 0}

    def _console_print(self, *args, **kwargs):
        """Print to console only when not in TUI mode."""
        if not self.tui_mode:
            console.print(*args, **kwargs)

    def list_sessions(self) -> List[Session]:
        return self.worktree_service.list_sessions()

    def find_session(self, name: str) -> Session:
        """Resolve a session by partial path or branch name.

        Raises:
            SessionNotFoundError: If nothing matches
        """
        session = self.worktree_service.find_session(name)
        if session is None:
            raise SessionNotFoundError(name)
        return session

    def probe_status(self, session: Session) -> WorktreeStatus:
        return self.worktree_service.get_worktree_status(session.path)

    def probe_summary(self, session: Session) -> Optional[str]:
        return self.summary_service.summarize(session.path)

    def create_probe_service(self, summaries: Optional[bool] = None) -> ProbeService:
        """Build a probe service sized from the configuration."""
        if summaries is None:
            summaries = self.config.summaries
        if summaries:
            self.summary_service.reset()
        return ProbeService(
            status_probe=self.probe_status,
            summary_probe=self.probe_summary if summaries else None,
            status_workers=get_optimal_worker_count(self.config.workers),
            summary_workers=self.config.summary_workers,
            on_shutdown=self.summary_service.terminate_running if summaries else None,
        )

    def start_probes(
        self, sessions: List[Session], summaries: Optional[bool] = None
    ) -> Tuple[UpdateChannel, ProbeService]:
        """Start background probes for ``sessions`` and return their update channel."""
        channel = UpdateChannel()
        probes = self.create_probe_service(summaries)
        probes.start(sessions, channel)
        return channel, probes

    def select_session(self, name: Optional[str] = None) -> Optional[Session]:
        """Pick one session, by name when given, otherwise interactively.

        Returns:
            The chosen session, or None when cancelled or there are no sessions

        Raises:
            SessionNotFoundError: If ``name`` matches no session
        """
        if name:
            return self.find_session(name)

        sessions = self.list_sessions()
        if not sessions:
            logger.info("No sessions to select from")
            return None

        channel, probes = self.start_probes(sessions)
        with probes:
            return run_single_select(sessions, channel, self.config)

    def choose_sessions(self) -> Optional[List[Session]]:
        """Let the user check sessions in the multi-select UI."""
        sessions = self.list_sessions()
        if not sessions:
            logger.info("No sessions to choose from")
            return None

        channel, probes = self.start_probes(sessions)
        with probes:
            return run_multi_select(sessions, channel, self.config)

    def review_deletion(self, sessions: List[Session]) -> List[Tuple[Session, Optional[WorktreeStatus]]]:
        """Probe each session again and return those that would lose work.

        The statuses shown in the selector may be stale by now, so every
        session is probed fresh.
        """
        at_risk = []
        for session in sessions:
            try:
                status = self.probe_status(session)
            except GitOperationError as e:
                logger.warning(f"Could not re-check {session.name} before deletion: {e}")
                status = None
            if is_at_risk(status):
                at_risk.append((session, status))
        return at_risk

    def confirm_deletion(self, at_risk: List[Tuple[Session, Optional[WorktreeStatus]]]) -> bool:
        """Warn about sessions with unsaved work and ask before going on."""
        self._console_print("\n[yellow]The following sessions have work that would be lost:[/yellow]")
        self._console_print(format_deletion_warning_items(at_risk))
        return self.confirmation.confirm("Delete anyway?")

    def delete_sessions(self, sessions: List[Session]) -> Tuple[List[str], List[Tuple[str, str]]]:
        """Remove sessions one at a time.

        A failure is reported and the remaining sessions are still removed.

        Returns:
            Tuple of (deleted_names, [(failed_name, error_message), ...])
        """
        deleted: List[str] = []
        failed: List[Tuple[str, str]] = []

        for session in sessions:
            if self.config.dry_run:
                self._console_print(f"Would remove {session.name} ({session.path})")
                continue

            success, error_msg = self.worktree_service.remove_session(session)
            if success:
                deleted.append(session.name)
                self.stats["deleted"] += 1
                self._console_print(f"[green]✓ Removed {session.name}[/green]")
            else:
                failed.append((session.name, error_msg or "Unknown error"))
                self.stats["failed"] += 1
                self._console_print(f"[red]✗ Failed to remove {session.name}: {error_msg}[/red]")

        if not self.config.dry_run:
            self._console_print(f"\n[green]Removed {len(deleted)} sessions[/green]")
            if failed:
                self._console_print(f"[red]Failed to remove {len(failed)} sessions[/red]")
        return deleted, failed

    def delete_sessions_interactive(self) -> bool:
        """Choose sessions in the selector, check them again and remove them.

        Returns:
            True if the chosen sessions were all handled without failure
        """
        chosen = self.choose_sessions()
        if not chosen:
            self._console_print("[yellow]No sessions selected[/yellow]")
            return False

        if self.config.dry_run:
            at_risk = self.review_deletion(chosen)
            if at_risk:
                self._console_print("\n[yellow]These sessions have work that would be lost:[/yellow]")
                self._console_print(format_deletion_warning_items(at_risk))
        elif not self.config.force:
            at_risk = self.review_deletion(chosen)
            if at_risk and not self.confirm_deletion(at_risk):
                self._console_print("[yellow]Deletion cancelled[/yellow]")
                return False

        self._console_print("")
        _, failed = self.delete_sessions(chosen)
        return not failed

    def collect(self, sessions: List[Session], summaries: Optional[bool] = None) -> SelectionModel:
        """Run every probe to completion and return the filled-in model.

        Used by the non-interactive commands; a spinner shows progress.
        """
        if summaries is None:
            summaries = self.config.summaries
        model = SelectionModel.from_sessions(sessions, expect_summaries=summaries)
        channel, probes = self.start_probes(sessions, summaries)

        progress = nullcontext() if self.tui_mode else console.status("Checking sessions...")
        with probes, progress as spinner:
            while not channel.exhausted:
                model.apply_all(channel.drain())
                if spinner is not None:
                    spinner.update(
                        f"Checking sessions... ({model.pending_status} loading, "
                        f"{model.pending_summaries} summarizing)"
                    )
                time.sleep(self.config.poll_interval)
            model.apply_all(channel.drain())

        logger.debug(
            f"Collected {len(sessions)} sessions "
            f"({model.pending_status} without status, {model.pending_summaries} without summary)"
        )
        return model

    def show_status(self) -> bool:
        """Print every session with its status, summary and the legend."""
        sessions = self.list_sessions()
        if not sessions:
            self._console_print("No sessions found")
            return False

        model = self.collect(sessions)
        self.display_service.display_sessions(model.items)
        return True

    def cleanup(self) -> bool:
        """Remove every session that is fully clean.

        Returns:
            True unless a removal failed
        """
        sessions = self.list_sessions()
        if not sessions:
            self._console_print("No sessions found")
            return False

        model = self.collect(sessions, summaries=False)
        clean = [
            item.session
            for item in model.items
            if item.status is not None and classify_status(item.status) is StatusSeverity.CLEAN
        ]
        skipped = len(sessions) - len(clean)

        if not clean:
            self._console_print(f"[green]Nothing to clean up[/green] ({skipped} sessions have work)")
            return True

        self._console_print(f"[yellow]Found {len(clean)} clean sessions[/yellow] ({skipped} kept)")
        if not self.config.dry_run and not self.config.force:
            names = "\n".join(f"  • {session.name}" for session in clean)
            if not self.confirmation.confirm("Remove these sessions?", names):
                self._console_print("[yellow]Cleanup cancelled[/yellow]")
                return False

        _, failed = self.delete_sessions(clean)
        return not failed
