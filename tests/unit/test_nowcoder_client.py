"""Unit tests for the judge API client."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from domain.models import Compiler, ProblemExtra
from infrastructure.errors import HTTPClientError
from infrastructure.nowcoder_client import NowcoderApiClient

BASE = "https://ac.nowcoder.com"


@pytest.fixture
def http_client():
    return AsyncMock()


@pytest.fixture
def client(http_client):
    return NowcoderApiClient(http_client)


@pytest.fixture
def extra():
    return ProblemExtra(tag_id="20002", question_id="10001", sub_tag_id="30003", done_question_id="40004")


@pytest.mark.asyncio
async def test_problem_list_unwraps_envelope(client, http_client):
    http_client.get_json.return_value = {
        "code": 0,
        "msg": "OK",
        "data": {
            "data": [
                {"index": "A", "title": "Sum", "problemId": 1, "tagId": 2, "acceptedCount": 3, "submitCount": 4},
            ],
            "basicInfo": {"contestId": 7},
        },
    }

    result = await client.get_problem_list(7)

    assert result.success
    assert result.data.problems[0].title == "Sum"
    assert result.data.basic_info == {"contestId": 7}
    http_client.get_json.assert_awaited_once_with(f"{BASE}/acm/contest/problem-list?id=7")


@pytest.mark.asyncio
async def test_error_envelope_becomes_failure(client, http_client):
    http_client.get_json.return_value = {"code": 999, "msg": "请先登录"}

    result = await client.get_problem_list(7)

    assert not result.success
    assert result.data is None
    assert "请先登录" in result.error


@pytest.mark.asyncio
async def test_missing_payload_becomes_failure(client, http_client):
    http_client.get_json.return_value = {"code": 0, "msg": "OK"}

    result = await client.get_submissions(7)

    assert not result.success
    assert "no data" in result.error


@pytest.mark.asyncio
async def test_transport_error_becomes_failure(client, http_client):
    http_client.get_json.side_effect = HTTPClientError("Request failed: HTTP 500", status_code=500)

    result = await client.get_realtime_rank(7)

    assert not result.success
    assert "HTTP 500" in result.error


@pytest.mark.asyncio
async def test_submit_posts_form_and_returns_submission_id(client, http_client, extra):
    http_client.post_form.return_value = {"code": 0, "msg": "OK", "data": 12345}

    result = await client.submit_solution(extra, "print(1)", Compiler.PYTHON3)

    assert result.success
    assert result.data == 12345
    http_client.post_form.assert_awaited_once_with(
        f"{BASE}/nccommon/submit_cd",
        {
            "questionId": "10001",
            "tagId": "20002",
            "subTagId": "30003",
            "content": "print(1)",
            "language": "11",
            "languageName": "Python3",
            "doneQuestionId": "40004",
        },
    )


@pytest.mark.asyncio
async def test_status_accepts_bare_and_enveloped_payloads(client, http_client):
    http_client.get_json.side_effect = [
        {"status": 5, "judgeReplyDesc": "Accepted", "timeConsumption": 12, "memoryConsumption": 512},
        {"code": 0, "msg": "OK", "data": {"status": 0}},
        "garbage",
    ]

    bare = await client.get_submission_status(12345, "20002", "30003")
    enveloped = await client.get_submission_status(12345, "20002", "30003")
    broken = await client.get_submission_status(12345, "20002", "30003")

    assert bare.success and bare.data.status == 5
    assert bare.data.judge_reply_desc == "Accepted"
    assert enveloped.success and enveloped.data.is_pending
    assert not broken.success
    http_client.get_json.assert_any_await(
        f"{BASE}/nccommon/status?submissionId=12345&tagId=20002&subTagId=30003"
    )


@pytest.mark.asyncio
async def test_problem_page_is_parsed_by_injected_parser(http_client, extra):
    problem_parser = MagicMock()
    problem_parser.parse.return_value = extra
    http_client.get_text.return_value = "<html></html>"
    client = NowcoderApiClient(http_client, problem_parser=problem_parser)

    result = await client.get_problem_extra(7, "B")

    assert result.success
    assert result.data is extra
    http_client.get_text.assert_awaited_once_with(f"{BASE}/acm/contest/7/B")
    problem_parser.parse.assert_called_once_with("<html></html>")


@pytest.mark.asyncio
async def test_contest_page_without_info_is_failure(client, http_client):
    http_client.get_text.return_value = "<html><body>no info</body></html>"

    result = await client.get_contest_info(7)

    assert not result.success
    assert result.data is None
    assert "Contest info not found" in result.error


@pytest.mark.asyncio
async def test_rank_and_submissions_payloads(client, http_client):
    http_client.get_json.side_effect = [
        {
            "code": 0,
            "data": {
                "rankData": [{"userName": "tourist", "ranking": 1}],
                "problemData": [{"name": "A"}],
                "basicInfo": {"rankCount": 1},
            },
        },
        {
            "code": 0,
            "data": {
                "data": [{"submissionId": 1, "index": "A", "statusMessage": "答案正确"}],
                "isContestFinished": True,
            },
        },
    ]

    rank = await client.get_realtime_rank(7)
    submissions = await client.get_submissions(7)

    assert rank.data.rows[0]["userName"] == "tourist"
    assert rank.data.basic_info == {"rankCount": 1}
    assert submissions.data.submissions[0].status_message == "答案正确"
    assert submissions.data.is_contest_finished
