"""API routes for contest timing and standings."""

import time

from litestar import Controller, get
from litestar.di import Provide
from litestar.status_codes import HTTP_200_OK
from loguru import logger

from api.dependencies import provide_contest_session
from api.schemas.contest import ContestInfoResponse, RankResponse
from services import ContestSession


class ContestController(Controller):
    """Controller for contest timing."""

    path = "/contest"
    dependencies = {"contest_session": Provide(provide_contest_session, sync_to_thread=False)}

    @get("/", status_code=HTTP_200_OK)
    async def get_contest_info(
        self, contest_session: ContestSession, refresh: bool = False
    ) -> ContestInfoResponse:
        """
        Get contest start/end times and the current countdown.

        Query parameters:
        - refresh: bypass the in-memory cache

        `available` is false when the contest page carries no timing data.
        """
        logger.debug(f"API request for contest info: contest_id={contest_session.contest_id}")
        info = await contest_session.get_contest_info(no_cache=refresh)
        if info is None:
            return ContestInfoResponse(contest_id=contest_session.contest_id, available=False)

        countdown = info.countdown(int(time.time() * 1000))
        return ContestInfoResponse(
            contest_id=contest_session.contest_id,
            available=True,
            start_time=info.start_time,
            end_time=info.end_time,
            phase=countdown.phase.value,
            countdown=countdown.format(),
            extra=info.extra,
        )


class RankController(Controller):
    """Controller for realtime standings."""

    path = "/rank"
    dependencies = {"contest_session": Provide(provide_contest_session, sync_to_thread=False)}

    @get("/", status_code=HTTP_200_OK)
    async def get_rank(self, contest_session: ContestSession, refresh: bool = False) -> RankResponse:
        rank = await contest_session.get_realtime_rank(no_cache=refresh)
        return RankResponse(
            contest_id=contest_session.contest_id,
            rows=rank.rows,
            problems=rank.problems,
            basic_info=rank.basic_info,
        )
