"""Service for submitting solutions and waiting for their verdicts."""

import asyncio
from typing import Awaitable, Callable, Optional, Protocol

from loguru import logger

from domain.exceptions import SubmissionError
from domain.models import (
    ApiResult,
    Compiler,
    JudgeOutcome,
    ProblemExtra,
    SubmissionStatus,
    VerdictKind,
    classify_status,
)

DEFAULT_MAX_POLLS = 60
DEFAULT_POLL_INTERVAL = 1.0

StatusCallback = Callable[[SubmissionStatus], None]
ProgressCallback = Callable[[int, int], None]


class JudgeAPIClientProtocol(Protocol):
    """Judge operations the orchestrator depends on."""

    async def submit_solution(
        self, extra: ProblemExtra, code: str, compiler: Compiler
    ) -> ApiResult[int]:
        ...

    async def get_submission_status(
        self, submission_id: int, tag_id: str, sub_tag_id: str
    ) -> ApiResult[SubmissionStatus]:
        ...


class SubmissionOrchestrator:
    """
    Dispatches a submission and polls the judge until a verdict arrives.

    Polling is a bounded loop: each iteration sleeps ``poll_interval``
    seconds and then issues one status query. Queries for one submission
    never overlap. A failed query is logged and the loop continues; after
    ``max_polls`` iterations without a verdict a timeout outcome is returned
    without notifying observers.
    """

    def __init__(
        self,
        api_client: JudgeAPIClientProtocol,
        *,
        max_polls: int = DEFAULT_MAX_POLLS,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if max_polls < 1:
            raise ValueError("max_polls must be at least 1")
        self.api_client = api_client
        self.max_polls = max_polls
        self.poll_interval = poll_interval
        self._sleep = sleep

    async def submit(self, extra: ProblemExtra, code: str, compiler: Compiler) -> int:
        """
        Dispatch a solution once, without retry.

        Returns:
            The submission id assigned by the judge

        Raises:
            SubmissionError: If the judge rejects the submission request
        """
        logger.debug(f"Submitting question {extra.question_id} with {compiler.config.name}")
        result = await self.api_client.submit_solution(extra, code, compiler)
        if not result.success:
            raise SubmissionError(f"Submit failed: {result.error}")
        return result.data

    async def wait_for_verdict(
        self,
        submission_id: int,
        extra: ProblemExtra,
        on_status: Optional[StatusCallback] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> JudgeOutcome:
        """Poll the status endpoint until the verdict is final or the bound is reached."""
        for attempt in range(1, self.max_polls + 1):
            await self._sleep(self.poll_interval)
            if on_progress is not None:
                on_progress(attempt, self.max_polls)

            try:
                result = await self.api_client.get_submission_status(
                    submission_id, extra.tag_id, extra.sub_tag_id
                )
            except Exception as e:
                logger.warning(f"Status query {attempt} for submission {submission_id} raised: {e}")
                continue

            if not result.success:
                logger.warning(
                    f"Status query {attempt} for submission {submission_id} failed: {result.error}"
                )
                continue

            status = result.data
            kind = classify_status(status.status)
            if kind is None:
                logger.debug(f"Submission {submission_id} still judging ({attempt}/{self.max_polls})")
                continue

            logger.info(
                f"Submission {submission_id} judged after {attempt} poll(s): "
                f"{kind.value} ({status.judge_reply_desc})"
            )
            if on_status is not None:
                on_status(status)
            return JudgeOutcome(submission_id=submission_id, kind=kind, polls=attempt, status=status)

        logger.warning(f"Gave up waiting for submission {submission_id} after {self.max_polls} polls")
        return JudgeOutcome(
            submission_id=submission_id, kind=VerdictKind.TIMEOUT, polls=self.max_polls
        )

    async def submit_and_wait(
        self,
        extra: ProblemExtra,
        code: str,
        compiler: Compiler,
        on_status: Optional[StatusCallback] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> JudgeOutcome:
        submission_id = await self.submit(extra, code, compiler)
        return await self.wait_for_verdict(submission_id, extra, on_status, on_progress)
