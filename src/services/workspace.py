"""Workspace coordination: which contest session is current, and event relaying."""

from pathlib import Path
from typing import Any, Callable, Optional

from loguru import logger

from domain.exceptions import InvalidConfigError, NoActiveWorkspaceError
from domain.models import Problem, RealtimeRank, SubmissionListItem, SubmissionStatus

from .contest import CONFIG_FILE_NAME, ContestSession
from .events import EventEmitter


class ContestWorkspaceManager:
    """
    Owns the current contest session.

    Opening or creating a workspace replaces the current session; the
    replaced session is closed, which cancels its in-flight judging.
    """

    def __init__(self, **session_dependencies: Any):
        """
        Initialize manager.

        Args:
            session_dependencies: Keyword arguments passed to every new
                ``ContestSession`` (api_client, orchestrator, cache)
        """
        self._session_dependencies = session_dependencies
        self._session: Optional[ContestSession] = None
        self.session_changed: EventEmitter[Optional[ContestSession]] = EventEmitter(
            "session_changed"
        )

    @property
    def session(self) -> Optional[ContestSession]:
        return self._session

    def require_session(self) -> ContestSession:
        if self._session is None:
            raise NoActiveWorkspaceError("No contest workspace is open")
        return self._session

    @staticmethod
    def find_config(path: Path) -> Optional[Path]:
        """Return the config file beside a document (or inside a folder), if present."""
        path = Path(path)
        folder = path if path.is_dir() else path.parent
        candidate = folder / CONFIG_FILE_NAME
        return candidate if candidate.is_file() else None

    async def open_workspace(self, folder: Path) -> ContestSession:
        """
        Make the workspace in ``folder`` current.

        Raises:
            InvalidConfigError: If ``folder`` holds no valid config
        """
        folder = Path(folder)
        if not (folder / CONFIG_FILE_NAME).is_file():
            raise InvalidConfigError(f"Contest config does not exist: {folder / CONFIG_FILE_NAME}")

        session = ContestSession.open(folder, **self._session_dependencies)
        await self._replace(session)
        return session

    async def create_workspace(self, contest_id: int, folder: Path) -> ContestSession:
        """Create a workspace for ``contest_id`` in ``folder`` (overwriting) and make it current."""
        session = ContestSession.create(folder, contest_id, **self._session_dependencies)
        await self._replace(session)
        return session

    async def _replace(self, session: Optional[ContestSession]) -> None:
        previous = self._session
        if previous is session:
            return
        self._session = session
        if previous is not None:
            await previous.close()
        logger.info(
            f"Current contest workspace: {session.folder if session is not None else 'none'}"
        )
        self.session_changed.emit(session)

    async def close(self) -> None:
        await self._replace(None)

    async def shutdown(self) -> None:
        """Close the current session and the judge client shared by all sessions."""
        await self.close()
        api_client = self._session_dependencies.get("api_client")
        if api_client is not None:
            await api_client.close()


class SessionEventRelay:
    """
    Re-exposes the events of whichever session is current.

    On every session change the relay drops its subscriptions to the old
    session, subscribes to the new one and re-fires the latest problems,
    submissions and rank (empty values when no session is open).
    """

    def __init__(self, manager: ContestWorkspaceManager):
        self.manager = manager
        self.problems_updated: EventEmitter[list[Problem]] = EventEmitter("relay.problems_updated")
        self.submission_status_changed: EventEmitter[SubmissionStatus] = EventEmitter(
            "relay.submission_status_changed"
        )
        self.submissions_updated: EventEmitter[list[SubmissionListItem]] = EventEmitter(
            "relay.submissions_updated"
        )
        self.rank_updated: EventEmitter[Optional[RealtimeRank]] = EventEmitter(
            "relay.rank_updated"
        )

        self._session: Optional[ContestSession] = None
        self._unsubscribers: list[Callable[[], None]] = []
        self._unsubscribe_manager = manager.session_changed.subscribe(self.rebind)
        self.rebind(manager.session)

    def rebind(self, session: Optional[ContestSession]) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self._session = session

        if session is not None:
            self._unsubscribers = [
                session.problems_updated.subscribe(self.problems_updated.emit),
                session.submission_status_changed.subscribe(self.submission_status_changed.emit),
                session.submissions_updated.subscribe(self.submissions_updated.emit),
                session.rank_updated.subscribe(self.rank_updated.emit),
            ]
        self.refire()

    def refire(self) -> None:
        if self._session is not None:
            self.problems_updated.emit(self._session.problems)
            self.submissions_updated.emit(self._session.cached_submissions)
            self.rank_updated.emit(self._session.cached_rank)
        else:
            self.problems_updated.emit([])
            self.submissions_updated.emit([])
            self.rank_updated.emit(None)

    async def refresh(self) -> None:
        """Fetch fresh problems, submissions and rank; observers hear the results through the session."""
        if self._session is None:
            return
        for name, refresh in (
            ("problems", self._session.get_problems),
            ("submissions", self._session.get_submissions),
            ("rank", self._session.get_realtime_rank),
        ):
            try:
                await refresh(no_cache=True)
            except Exception as e:
                logger.warning(f"Failed to refresh {name}: {e}")

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self._unsubscribe_manager()
