"""NowCoder judge API client."""

from typing import Any, Optional

from loguru import logger

from domain.models import (
    ApiResult,
    Compiler,
    ContestInfo,
    ContestProblemList,
    ProblemExtra,
    RealtimeRank,
    SubmissionList,
    SubmissionStatus,
)

from .parsers import (
    ContestPageParser,
    ContestPageParserProtocol,
    HTTPClientProtocol,
    ParsingError,
    ProblemPageParser,
    ProblemPageParserProtocol,
    URLParser,
)
from .parsers.url_parser import BASE_URL

CONTEST_INFO_NOT_FOUND = "Contest info not found on contest page"


def unwrap_envelope(payload: Any) -> Any:
    """
    Return ``data`` from a ``{code, msg, data}`` envelope.

    Raises:
        ParsingError: If the envelope reports an error or carries no data
    """
    if not isinstance(payload, dict):
        raise ParsingError(f"Unexpected response: {payload!r}")

    code = payload.get("code")
    if code != 0:
        raise ParsingError(f"Judge returned code {code}: {payload.get('msg') or payload!r}")

    data = payload.get("data")
    if data is None:
        raise ParsingError(f"Response carries no data: {payload!r}")
    return data


class NowcoderApiClient:
    """
    Client for the judge endpoints used by a contest workspace.

    Every operation returns an ``ApiResult``; transport errors, error
    envelopes and undecodable payloads become failed results whose error
    text includes the original message.
    """

    def __init__(
        self,
        http_client: HTTPClientProtocol,
        problem_parser: Optional[ProblemPageParserProtocol] = None,
        contest_parser: Optional[ContestPageParserProtocol] = None,
        base_url: str = BASE_URL,
    ):
        """
        Initialize API client.

        Args:
            http_client: Transport used for every request
            problem_parser: Parser for problem pages
            contest_parser: Parser for contest landing pages
            base_url: Judge site root
        """
        self.http_client = http_client
        self.problem_parser = problem_parser or ProblemPageParser()
        self.contest_parser = contest_parser or ContestPageParser()
        self.urls = URLParser(base_url)

    async def get_problem_list(self, contest_id: int) -> ApiResult[ContestProblemList]:
        url = self.urls.build_problem_list_url(contest_id)
        try:
            data = unwrap_envelope(await self.http_client.get_json(url))
            problem_list = ContestProblemList.from_dict(data)
            logger.info(f"Fetched {len(problem_list.problems)} problems for contest {contest_id}")
            return ApiResult.ok(problem_list)
        except Exception as e:
            logger.warning(f"Failed to fetch problem list for contest {contest_id}: {e}")
            return ApiResult.fail(f"Failed to fetch problem list: {e}")

    async def get_problem_extra(self, contest_id: int, index: str) -> ApiResult[ProblemExtra]:
        url = self.urls.build_problem_url(contest_id, index)
        try:
            html = await self.http_client.get_text(url)
            extra = self.problem_parser.parse(html)
            logger.info(f"Fetched problem page {contest_id}/{index}")
            return ApiResult.ok(extra)
        except Exception as e:
            logger.warning(f"Failed to fetch problem page {contest_id}/{index}: {e}")
            return ApiResult.fail(f"Failed to fetch problem {index}: {e}")

    async def submit_solution(
        self, extra: ProblemExtra, code: str, compiler: Compiler
    ) -> ApiResult[int]:
        """Submit ``code``; the payload of a successful result is the submission id."""
        config = compiler.config
        form = {
            "questionId": extra.question_id,
            "tagId": extra.tag_id,
            "subTagId": extra.sub_tag_id,
            "content": code,
            "language": config.id,
            "languageName": config.name,
            "doneQuestionId": extra.done_question_id,
        }
        try:
            data = unwrap_envelope(await self.http_client.post_form(self.urls.build_submit_url(), form))
            submission_id = int(data)
            logger.info(f"Submitted question {extra.question_id} as submission {submission_id}")
            return ApiResult.ok(submission_id)
        except Exception as e:
            logger.warning(f"Failed to submit question {extra.question_id}: {e}")
            return ApiResult.fail(f"Failed to submit solution: {e}")

    async def get_submission_status(
        self, submission_id: int, tag_id: str, sub_tag_id: str
    ) -> ApiResult[SubmissionStatus]:
        url = self.urls.build_status_url(submission_id, tag_id, sub_tag_id)
        try:
            payload = await self.http_client.get_json(url)
            # the status endpoint answers with a bare status object
            if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
                payload = unwrap_envelope(payload)
            if not isinstance(payload, dict):
                raise ParsingError(f"Unexpected status response: {payload!r}")
            status = SubmissionStatus.from_dict(payload)
            logger.debug(f"Submission {submission_id} status: {status.status}")
            return ApiResult.ok(status)
        except Exception as e:
            logger.warning(f"Failed to query status of submission {submission_id}: {e}")
            return ApiResult.fail(f"Failed to query submission status: {e}")

    async def get_submissions(self, contest_id: int) -> ApiResult[SubmissionList]:
        url = self.urls.build_submissions_url(contest_id)
        try:
            data = unwrap_envelope(await self.http_client.get_json(url))
            submissions = SubmissionList.from_dict(data)
            logger.info(f"Fetched {len(submissions.submissions)} submissions for contest {contest_id}")
            return ApiResult.ok(submissions)
        except Exception as e:
            logger.warning(f"Failed to fetch submissions for contest {contest_id}: {e}")
            return ApiResult.fail(f"Failed to fetch submissions: {e}")

    async def get_realtime_rank(self, contest_id: int) -> ApiResult[RealtimeRank]:
        url = self.urls.build_rank_url(contest_id)
        try:
            data = unwrap_envelope(await self.http_client.get_json(url))
            if not isinstance(data, dict):
                raise ParsingError(f"Unexpected rank payload: {data!r}")
            rank = RealtimeRank.from_dict(data)
            logger.info(f"Fetched {len(rank.rows)} rank rows for contest {contest_id}")
            return ApiResult.ok(rank)
        except Exception as e:
            logger.warning(f"Failed to fetch realtime rank for contest {contest_id}: {e}")
            return ApiResult.fail(f"Failed to fetch realtime rank: {e}")

    async def get_contest_info(self, contest_id: int) -> ApiResult[ContestInfo]:
        """Fetch contest timing; a page without the embedded blob is a failure."""
        url = self.urls.build_contest_url(contest_id)
        try:
            html = await self.http_client.get_text(url)
            contest_info = self.contest_parser.parse(html)
            if contest_info is None:
                return ApiResult.fail(CONTEST_INFO_NOT_FOUND)
            return ApiResult.ok(contest_info)
        except Exception as e:
            logger.warning(f"Failed to fetch contest page {contest_id}: {e}")
            return ApiResult.fail(f"Failed to fetch contest info: {e}")

    async def close(self) -> None:
        close = getattr(self.http_client, "close", None)
        if close is not None:
            await close()
