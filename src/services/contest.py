"""Contest session: one workspace's config, caches, judge calls and events."""

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

from loguru import logger

from domain.exceptions import (
    ContestSessionError,
    MissingCompilerError,
    ProblemNotFoundError,
    SubmissionError,
)
from domain.models import (
    Compiler,
    ContestConfig,
    ContestInfo,
    JudgeOutcome,
    Problem,
    ProblemExtra,
    RealtimeRank,
    SubmissionListItem,
    SubmissionStatus,
    detect_compiler,
)
from infrastructure.cache_redis import AsyncRedisCache, problem_cache_key
from infrastructure.config_store import ConfigStore, JsonConfigStore
from infrastructure.nowcoder_client import NowcoderApiClient

from .events import EventEmitter
from .submission import ProgressCallback, SubmissionOrchestrator

CONFIG_FILE_NAME = "nowcoderac.json"


class ContestSession:
    """
    State of one open contest workspace.

    The problem list (with lazily fetched details) lives in the persisted
    config; submissions, rank and contest info are cached in memory.
    Concurrent refreshes of the same cache slot share one in-flight request.
    """

    def __init__(
        self,
        folder: Path,
        config: ContestConfig,
        *,
        api_client: NowcoderApiClient,
        orchestrator: SubmissionOrchestrator,
        store: Optional[ConfigStore] = None,
        cache: Optional[AsyncRedisCache] = None,
    ):
        self.folder = Path(folder)
        self.config = config
        self.api_client = api_client
        self.orchestrator = orchestrator
        self.store = store or JsonConfigStore(self.folder / CONFIG_FILE_NAME)
        self.cache = cache

        self.problems_updated: EventEmitter[list[Problem]] = EventEmitter("problems_updated")
        self.submission_status_changed: EventEmitter[SubmissionStatus] = EventEmitter(
            "submission_status_changed"
        )
        self.submissions_updated: EventEmitter[list[SubmissionListItem]] = EventEmitter(
            "submissions_updated"
        )
        self.rank_updated: EventEmitter[Optional[RealtimeRank]] = EventEmitter("rank_updated")

        self._submissions: Optional[list[SubmissionListItem]] = None
        self._rank: Optional[RealtimeRank] = None
        self._contest_info: Optional[ContestInfo] = None
        self._inflight: dict[str, asyncio.Task] = {}
        self._judging: set[asyncio.Task] = set()
        self._closed = False

    @classmethod
    def open(cls, folder: Path, **dependencies: Any) -> "ContestSession":
        """
        Open an existing workspace.

        Raises:
            InvalidConfigError: If the config file is missing or has no contest id
        """
        folder = Path(folder).resolve()
        store = JsonConfigStore(folder / CONFIG_FILE_NAME)
        config = store.load()
        logger.info(f"Opened contest {config.contest_id} workspace at {folder}")
        return cls(folder, config, store=store, **dependencies)

    @classmethod
    def create(cls, folder: Path, contest_id: int, **dependencies: Any) -> "ContestSession":
        """Create (or overwrite) a workspace config for ``contest_id``."""
        folder = Path(folder).resolve()
        store = JsonConfigStore(folder / CONFIG_FILE_NAME)
        config = ContestConfig(contest_id=contest_id, problems=[])
        store.save(config)
        logger.info(f"Created contest {contest_id} workspace at {folder}")
        return cls(folder, config, store=store, **dependencies)

    @property
    def contest_id(self) -> int:
        return self.config.contest_id

    @property
    def problems(self) -> list[Problem]:
        return self.config.problems

    @property
    def cached_submissions(self) -> list[SubmissionListItem]:
        return self._submissions or []

    @property
    def cached_rank(self) -> Optional[RealtimeRank]:
        return self._rank

    @property
    def closed(self) -> bool:
        return self._closed

    def save_config(self) -> None:
        self.store.save(self.config)

    async def _single_flight(self, slot: str, factory: Callable[[], Awaitable[Any]]) -> Any:
        task = self._inflight.get(slot)
        if task is None or task.done():
            task = asyncio.ensure_future(factory())
            self._inflight[slot] = task
            task.add_done_callback(lambda t, s=slot: self._forget_inflight(s, t))
        else:
            logger.debug(f"Joining in-flight refresh of {slot}")
        return await asyncio.shield(task)

    def _forget_inflight(self, slot: str, task: asyncio.Task) -> None:
        if self._inflight.get(slot) is task:
            del self._inflight[slot]

    async def get_problems(self, no_cache: bool = False) -> list[Problem]:
        """Return the problem list, fetching it when empty or when ``no_cache`` is set."""
        if no_cache or not self.config.problems:
            return await self._single_flight("problems", self._refresh_problems)
        return self.config.problems

    async def _refresh_problems(self) -> list[Problem]:
        result = await self.api_client.get_problem_list(self.contest_id)
        if not result.success:
            raise ContestSessionError(f"Failed to get problem list: {result.error}")

        # keep details already fetched for problems that are still listed
        previous = {problem.index: problem.extra for problem in self.config.problems}
        self.config.problems = [
            Problem(info=info, extra=previous.get(info.index)) for info in result.data.problems
        ]
        self.save_config()
        self.problems_updated.emit(self.config.problems)
        return self.config.problems

    async def get_problem(self, index: str, no_cache: bool = False) -> Optional[Problem]:
        problems = await self.get_problems(no_cache)
        return next((p for p in problems if p.index == index), None)

    async def get_problem_extra(self, index: str, no_cache: bool = False) -> ProblemExtra:
        """
        Return a problem's details, fetching its page when not cached.

        Raises:
            ProblemNotFoundError: If the contest has no problem ``index``
            ContestSessionError: If the page cannot be fetched
        """
        problem = await self.get_problem(index)
        if problem is None:
            raise ProblemNotFoundError(index)
        if problem.extra is not None and not no_cache:
            return problem.extra

        return await self._single_flight(
            f"extra:{index}", lambda: self._refresh_problem_extra(problem, no_cache)
        )

    async def _refresh_problem_extra(self, problem: Problem, no_cache: bool) -> ProblemExtra:
        extra = None if no_cache else await self._cached_extra(problem.index)
        if extra is None:
            result = await self.api_client.get_problem_extra(self.contest_id, problem.index)
            if not result.success:
                raise ContestSessionError(
                    f"Failed to get details of problem {problem.index!r}: {result.error}"
                )
            extra = result.data
            await self._store_cached_extra(problem.index, extra)

        problem.extra = extra
        self.save_config()
        self.problems_updated.emit(self.config.problems)
        return extra

    async def _cached_extra(self, index: str) -> Optional[ProblemExtra]:
        if self.cache is None:
            return None
        try:
            data = await self.cache.get(problem_cache_key(self.contest_id, index))
        except Exception as e:
            logger.warning(f"Failed to read problem {index} from cache: {e}")
            return None
        if not isinstance(data, dict):
            return None
        logger.debug(f"Cache hit for problem {self.contest_id}/{index}")
        return ProblemExtra.from_dict(data)

    async def _store_cached_extra(self, index: str, extra: ProblemExtra) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.set(problem_cache_key(self.contest_id, index), extra.to_dict())
        except Exception as e:
            logger.warning(f"Failed to cache problem {index}: {e}")

    async def submit_solution(self, code: str, index: str, compiler: Compiler) -> int:
        """
        Submit ``code`` for problem ``index``.

        Returns:
            The submission id

        Raises:
            ProblemNotFoundError: If the contest has no problem ``index``
            SubmissionError: If the judge rejects the submission
        """
        extra = await self.get_problem_extra(index)
        if not extra.is_submittable:
            raise SubmissionError(f"Problem {index!r} page is missing submission ids")
        return await self.orchestrator.submit(extra, code, compiler)

    async def judge(
        self,
        submission_id: int,
        index: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> JudgeOutcome:
        """Wait for a verdict; cancelled when the session closes."""
        extra = await self.get_problem_extra(index)
        task = asyncio.ensure_future(
            self.orchestrator.wait_for_verdict(
                submission_id,
                extra,
                on_status=self.confirm_submission_status,
                on_progress=on_progress,
            )
        )
        self._judging.add(task)
        task.add_done_callback(self._judging.discard)
        return await task

    async def submit_and_judge(
        self,
        code: str,
        index: str,
        compiler: Optional[Compiler] = None,
        language_id: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> JudgeOutcome:
        """
        Submit, wait for the verdict and refresh submissions and rank.

        When ``compiler`` is omitted it is read from the marker comment at
        the top of ``code``.

        Raises:
            MissingCompilerError: If no compiler is given and none is detected
        """
        if compiler is None:
            compiler = detect_compiler(code, language_id)
            if compiler is None:
                raise MissingCompilerError(
                    "No compiler given and no 'Nowcoder Compiler:' marker found in the code"
                )

        submission_id = await self.submit_solution(code, index, compiler)
        outcome = await self.judge(submission_id, index, on_progress)

        for refresh in (self.get_submissions, self.get_realtime_rank):
            try:
                await refresh(no_cache=True)
            except ContestSessionError as e:
                logger.warning(f"Refresh after submission {submission_id} failed: {e}")

        return outcome

    def confirm_submission_status(self, status: SubmissionStatus) -> None:
        self.submission_status_changed.emit(status)

    async def get_submissions(self, no_cache: bool = False) -> list[SubmissionListItem]:
        if no_cache or self._submissions is None:
            return await self._single_flight("submissions", self._refresh_submissions)
        return self._submissions

    async def _refresh_submissions(self) -> list[SubmissionListItem]:
        result = await self.api_client.get_submissions(self.contest_id)
        if not result.success:
            raise ContestSessionError(f"Failed to get submissions: {result.error}")
        self._submissions = result.data.submissions
        self.submissions_updated.emit(self._submissions)
        return self._submissions

    async def get_realtime_rank(self, no_cache: bool = False) -> RealtimeRank:
        if no_cache or self._rank is None:
            return await self._single_flight("rank", self._refresh_rank)
        return self._rank

    async def _refresh_rank(self) -> RealtimeRank:
        result = await self.api_client.get_realtime_rank(self.contest_id)
        if not result.success:
            raise ContestSessionError(f"Failed to get realtime rank: {result.error}")
        self._rank = result.data
        self.rank_updated.emit(self._rank)
        return self._rank

    async def get_contest_info(self, no_cache: bool = False) -> Optional[ContestInfo]:
        """Contest timing, or ``None`` when the page carries none (not cached)."""
        if no_cache or self._contest_info is None:
            return await self._single_flight("contest_info", self._refresh_contest_info)
        return self._contest_info

    async def _refresh_contest_info(self) -> Optional[ContestInfo]:
        result = await self.api_client.get_contest_info(self.contest_id)
        if not result.success:
            logger.warning(f"Contest info not available yet, retry later: {result.error}")
            return None
        self._contest_info = result.data
        return result.data

    async def close(self) -> None:
        """Cancel in-flight judging and refreshes and drop all observers."""
        if self._closed:
            return
        self._closed = True

        pending = [task for task in (*self._judging, *self._inflight.values()) if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.info(f"Cancelled {len(pending)} pending task(s) of contest {self.contest_id}")

        for emitter in (
            self.problems_updated,
            self.submission_status_changed,
            self.submissions_updated,
            self.rank_updated,
        ):
            emitter.clear()
        logger.debug(f"Closed session for contest {self.contest_id}")
