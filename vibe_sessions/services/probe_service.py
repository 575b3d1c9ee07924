"""Background status and summary probes feeding the update channel"""

from concurrent.futures import Future, ThreadPoolExecutor
from threading import Lock
from typing import Callable, Optional, Sequence

from vibe_sessions.logging_config import get_logger
from vibe_sessions.models.session import Session
from vibe_sessions.models.status import WorktreeStatus
from vibe_sessions.models.updates import StatusReady, SummaryReady, SummaryStarted
from vibe_sessions.selection.channel import UpdateChannel

logger = get_logger(__name__)

StatusProbe = Callable[[Session], WorktreeStatus]
SummaryProbe = Callable[[Session], Optional[str]]


class ProbeService:
    """
    Runs one status probe per session, followed by a summary probe for
    sessions with uncommitted work, and reports results as updates.

    Status probes and summary probes use separate pools so a handful of slow
    summaries never holds up the status of the remaining sessions. Probes
    only ever talk to the channel. Once every session's work has finished,
    been skipped or been cancelled, the channel is closed.
    """

    def __init__(
        self,
        status_probe: StatusProbe,
        summary_probe: Optional[SummaryProbe] = None,
        status_workers: int = 4,
        summary_workers: int = 2,
        on_shutdown: Optional[Callable[[], None]] = None,
    ):
        self.status_probe = status_probe
        self.summary_probe = summary_probe
        self.status_workers = status_workers
        self.summary_workers = summary_workers
        self.on_shutdown = on_shutdown
        self._status_executor: Optional[ThreadPoolExecutor] = None
        self._summary_executor: Optional[ThreadPoolExecutor] = None
        self._remaining = 0
        self._lock = Lock()

    @property
    def summaries_enabled(self) -> bool:
        return self.summary_probe is not None

    def start(self, sessions: Sequence[Session], channel: UpdateChannel) -> None:
        """Submit probes for every session. Returns immediately.

        The position of a session in ``sessions`` is the index used in every
        update sent for it.
        """
        if self._status_executor is not None:
            raise RuntimeError("Probes already started")

        self._remaining = len(sessions)
        if not sessions:
            channel.close()
            return

        logger.debug(
            f"Probing {len(sessions)} sessions with {self.status_workers} status workers "
            f"and {self.summary_workers} summary workers"
        )
        self._status_executor = ThreadPoolExecutor(
            max_workers=self.status_workers, thread_name_prefix="status-probe"
        )
        if self.summaries_enabled:
            self._summary_executor = ThreadPoolExecutor(
                max_workers=self.summary_workers, thread_name_prefix="summary-probe"
            )

        for index, session in enumerate(sessions):
            future = self._status_executor.submit(self._probe_status, index, session, channel)
            self._finish_if_cancelled(future, channel)

    def shutdown(self, wait: bool = False) -> None:
        """Cancel probes that have not started yet and stop running ones.

        Queued probes are cancelled and ``on_shutdown`` is called to stop any
        external work (summary commands) still running. Whatever a running
        probe sends afterwards is never read.
        """
        for executor in (self._status_executor, self._summary_executor):
            if executor is not None:
                executor.shutdown(wait=False, cancel_futures=True)
        if self.on_shutdown is not None:
            self.on_shutdown()
        if wait:
            for executor in (self._status_executor, self._summary_executor):
                if executor is not None:
                    executor.shutdown(wait=True)

    def __enter__(self) -> "ProbeService":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=False)

    def _finish_if_cancelled(self, future: Future, channel: UpdateChannel) -> None:
        future.add_done_callback(lambda f: self._unit_finished(channel) if f.cancelled() else None)

    def _unit_finished(self, channel: UpdateChannel) -> None:
        with self._lock:
            self._remaining -= 1
            done = self._remaining == 0
        if done:
            logger.debug("All probes finished, closing update channel")
            channel.close()

    def _probe_status(self, index: int, session: Session, channel: UpdateChannel) -> None:
        summary_scheduled = False
        try:
            try:
                status = self.status_probe(session)
            except Exception as e:
                # Row stays in the loading state
                logger.warning(f"Status probe failed for {session.name}: {e}")
                return

            channel.send(StatusReady(index, status))
            if self.summaries_enabled and status.needs_summary():
                summary_scheduled = self._schedule_summary(index, session, channel)
        finally:
            if not summary_scheduled:
                self._unit_finished(channel)

    def _schedule_summary(self, index: int, session: Session, channel: UpdateChannel) -> bool:
        try:
            future = self._summary_executor.submit(self._probe_summary, index, session, channel)
        except RuntimeError:
            logger.debug(f"Summary pool already shut down, skipping {session.name}")
            return False
        self._finish_if_cancelled(future, channel)
        return True

    def _probe_summary(self, index: int, session: Session, channel: UpdateChannel) -> None:
        try:
            channel.send(SummaryStarted(index))
            try:
                text = self.summary_probe(session)
            except Exception as e:
                logger.warning(f"Summary probe failed for {session.name}: {e}")
                text = None
            channel.send(SummaryReady(index, text))
        finally:
            self._unit_finished(channel)
