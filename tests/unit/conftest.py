"""Shared fixtures for session, workspace and API tests."""

import pytest
from unittest.mock import AsyncMock

from domain.models import (
    ApiResult,
    ContestProblemList,
    ProblemExample,
    ProblemExtra,
    ProblemInfo,
    RealtimeRank,
    SubmissionList,
    SubmissionListItem,
    SubmissionStatus,
)
from services.submission import SubmissionOrchestrator


@pytest.fixture
def problem_extra():
    return ProblemExtra(
        tag_id="20002",
        question_id="10001",
        sub_tag_id="30003",
        done_question_id="40004",
        content="## 题目描述\n\nAdd two numbers.  \n\n\n",
        examples=[ProblemExample(input="1 2", output="3", tips="1 + 2 = 3")],
    )


@pytest.fixture
def api_client(problem_extra):
    """Judge client mock answering every operation successfully."""
    client = AsyncMock()
    client.get_problem_list.return_value = ApiResult.ok(
        ContestProblemList(
            problems=[
                ProblemInfo(index="A", title="Sum", problem_id=1, accepted_count=3, submit_count=4),
                ProblemInfo(index="B", title="Max", problem_id=2),
            ]
        )
    )
    client.get_problem_extra.return_value = ApiResult.ok(problem_extra)
    client.submit_solution.return_value = ApiResult.ok(12345)
    client.get_submission_status.side_effect = [
        ApiResult.ok(SubmissionStatus(status=0)),
        ApiResult.ok(SubmissionStatus(status=0)),
        ApiResult.ok(SubmissionStatus(status=5, judge_reply_desc="Accepted")),
    ]
    client.get_submissions.return_value = ApiResult.ok(
        SubmissionList(
            submissions=[SubmissionListItem(submission_id=12345, index="A", status_message="答案正确")]
        )
    )
    client.get_realtime_rank.return_value = ApiResult.ok(
        RealtimeRank(rows=[{"userName": "me", "ranking": 1}], problems=[{"name": "A"}])
    )
    client.get_contest_info.return_value = ApiResult.fail("Contest info not found on contest page")
    return client


@pytest.fixture
def orchestrator(api_client):
    return SubmissionOrchestrator(api_client, sleep=AsyncMock())
