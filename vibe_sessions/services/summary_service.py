"""Service generating one-line summaries of a session's uncommitted work"""

import subprocess
from threading import Lock
from typing import List, Optional, Set, Union, TYPE_CHECKING

from vibe_sessions.constants import SUMMARY_DISPLAY_WIDTH
from vibe_sessions.exceptions import GitOperationError
from vibe_sessions.logging_config import get_logger

if TYPE_CHECKING:
    from vibe_sessions.config import Config
    from vibe_sessions.services.git.worktrees import WorktreeService

logger = get_logger(__name__)


def first_summary_line(output: str, width: int = SUMMARY_DISPLAY_WIDTH) -> Optional[str]:
    """First non-empty line of the command output, cut to ``width`` characters."""
    for line in output.splitlines():
        line = line.strip()
        if line:
            if len(line) > width:
                return line[: width - 1].rstrip() + "…"
            return line
    return None


class SummaryService:
    """Runs the configured summary command over a worktree's pending changes.

    Running commands are tracked so ``terminate_running`` can stop them when
    nobody is waiting for their output any more.
    """

    def __init__(self, config: Union["Config", dict], worktree_service: "WorktreeService"):
        self.worktree_service = worktree_service
        self.command: List[str] = list(config.get("summary_command", []))
        self.timeout = config.get("summary_timeout", 60.0)
        self.max_chars = config.get("summary_max_chars", 20000)
        self._running: Set[subprocess.Popen] = set()
        self._lock = Lock()
        self._stopped = False

    @property
    def running_count(self) -> int:
        with self._lock:
            return len(self._running)

    def terminate_running(self) -> None:
        """Stop every running summary command and refuse to start new ones."""
        with self._lock:
            self._stopped = True
            running = list(self._running)
        for process in running:
            logger.debug(f"Terminating summary command (pid {process.pid})")
            process.terminate()

    def reset(self) -> None:
        """Allow summary commands to start again after ``terminate_running``."""
        with self._lock:
            self._stopped = False

    def summarize(self, worktree_path: str) -> Optional[str]:
        """Summarize the uncommitted changes in a worktree.

        Every failure (git, missing command, timeout, non-zero exit, empty
        output, termination) yields None.
        """
        if not self.command or self._stopped:
            return None

        try:
            digest = self.worktree_service.get_change_digest(worktree_path, self.max_chars)
        except GitOperationError as e:
            logger.warning(f"Could not collect changes for summary of {worktree_path}: {e}")
            return None

        if not digest.strip():
            logger.debug(f"No diff to summarize in {worktree_path}")
            return None

        try:
            process = subprocess.Popen(
                self.command,
                cwd=worktree_path,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError:
            logger.warning(f"Summary command not found: {self.command[0]}")
            return None

        with self._lock:
            self._running.add(process)
            stopped = self._stopped
        if stopped:
            process.terminate()

        try:
            stdout, stderr = process.communicate(digest, timeout=self.timeout)
        except subprocess.TimeoutExpired:
            process.kill()
            process.communicate()
            logger.warning(f"Summary command timed out after {self.timeout}s for {worktree_path}")
            return None
        finally:
            with self._lock:
                self._running.discard(process)

        if process.returncode != 0:
            if self._stopped:
                logger.debug(f"Summary command for {worktree_path} was terminated")
            else:
                logger.warning(
                    f"Summary command failed (exit {process.returncode}) for {worktree_path}: "
                    f"{(stderr or '').strip()}"
                )
            return None

        summary = first_summary_line(stdout)
        logger.debug(f"Summary for {worktree_path}: {summary!r}")
        return summary
