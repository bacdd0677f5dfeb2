"""Unit tests for submission polling."""

import pytest
from unittest.mock import AsyncMock, MagicMock, call

from domain.exceptions import SubmissionError
from domain.models import ApiResult, Compiler, ProblemExtra, SubmissionStatus, VerdictKind
from services.submission import SubmissionOrchestrator


def pending():
    return ApiResult.ok(SubmissionStatus(status=0))


@pytest.fixture
def extra():
    return ProblemExtra(tag_id="20002", question_id="10001", sub_tag_id="30003", done_question_id="40004")


@pytest.fixture
def api_client():
    return AsyncMock()


@pytest.fixture
def sleep():
    return AsyncMock()


@pytest.fixture
def orchestrator(api_client, sleep):
    return SubmissionOrchestrator(api_client, sleep=sleep)


@pytest.mark.asyncio
async def test_accepted_after_three_pending_polls(orchestrator, api_client, sleep, extra):
    accepted = SubmissionStatus(status=5, judge_reply_desc="Accepted")
    api_client.get_submission_status.side_effect = [pending(), pending(), pending(), ApiResult.ok(accepted)]
    on_status = MagicMock()

    outcome = await orchestrator.wait_for_verdict(12345, extra, on_status=on_status)

    assert outcome.kind is VerdictKind.ACCEPTED
    assert outcome.polls == 4
    assert api_client.get_submission_status.await_count == 4
    api_client.get_submission_status.assert_awaited_with(12345, "20002", "30003")
    assert sleep.await_count == 4
    sleep.assert_awaited_with(1.0)
    on_status.assert_called_once_with(accepted)


@pytest.mark.asyncio
async def test_gives_up_after_sixty_pending_polls(orchestrator, api_client, extra):
    api_client.get_submission_status.side_effect = [pending() for _ in range(60)]
    on_status = MagicMock()

    outcome = await orchestrator.wait_for_verdict(12345, extra, on_status=on_status)

    assert outcome.kind is VerdictKind.TIMEOUT
    assert outcome.polls == 60
    assert outcome.status is None
    assert api_client.get_submission_status.await_count == 60
    on_status.assert_not_called()
    assert "check the result" in outcome.message


@pytest.mark.asyncio
async def test_failed_queries_do_not_stop_polling(orchestrator, api_client, extra):
    wrong = SubmissionStatus(status=4, judge_reply_desc="Wrong Answer", desc="expected 3")
    api_client.get_submission_status.side_effect = [
        ApiResult.fail("network down"),
        RuntimeError("connection reset"),
        ApiResult.ok(wrong),
    ]

    outcome = await orchestrator.wait_for_verdict(12345, extra)

    assert outcome.kind is VerdictKind.REJECTED
    assert outcome.polls == 3
    assert outcome.message == "Wrong Answer\nexpected 3"


@pytest.mark.asyncio
async def test_compile_error_carries_compiler_output(orchestrator, api_client, extra):
    compile_error = SubmissionStatus(status=12, judge_reply_desc="编译错误", memo="a.cpp:1: error")
    api_client.get_submission_status.side_effect = [pending(), ApiResult.ok(compile_error)]
    on_status = MagicMock()

    outcome = await orchestrator.wait_for_verdict(12345, extra, on_status=on_status)

    assert outcome.kind is VerdictKind.COMPILE_ERROR
    assert outcome.polls == 2
    assert not outcome.accepted
    assert "a.cpp:1: error" in outcome.message
    assert outcome.message == "编译错误\na.cpp:1: error"
    on_status.assert_called_once_with(compile_error)


@pytest.mark.asyncio
async def test_progress_reported_each_poll(api_client, sleep, extra):
    orchestrator = SubmissionOrchestrator(api_client, max_polls=3, poll_interval=0.5, sleep=sleep)
    api_client.get_submission_status.side_effect = [pending(), pending(), pending()]
    on_progress = MagicMock()

    outcome = await orchestrator.wait_for_verdict(1, extra, on_progress=on_progress)

    assert outcome.kind is VerdictKind.TIMEOUT
    assert on_progress.call_args_list == [call(1, 3), call(2, 3), call(3, 3)]
    sleep.assert_awaited_with(0.5)


@pytest.mark.asyncio
async def test_submit_print_one_is_accepted_on_third_poll(orchestrator, api_client, extra):
    api_client.submit_solution.return_value = ApiResult.ok(12345)
    api_client.get_submission_status.side_effect = [
        pending(),
        pending(),
        ApiResult.ok(SubmissionStatus(status=5, judge_reply_desc="Accepted")),
    ]

    outcome = await orchestrator.submit_and_wait(extra, "print(1)", Compiler.PYTHON3)

    api_client.submit_solution.assert_awaited_once_with(extra, "print(1)", Compiler.PYTHON3)
    assert outcome.submission_id == 12345
    assert outcome.polls == 3
    assert outcome.accepted
    assert outcome.message == "Accepted"


@pytest.mark.asyncio
async def test_rejected_submit_is_not_retried(orchestrator, api_client, extra):
    api_client.submit_solution.return_value = ApiResult.fail("Failed to submit solution: 请先登录")

    with pytest.raises(SubmissionError, match="请先登录"):
        await orchestrator.submit_and_wait(extra, "print(1)", Compiler.PYTHON3)

    assert api_client.submit_solution.await_count == 1
    api_client.get_submission_status.assert_not_awaited()


def test_poll_bound_must_be_positive(api_client):
    with pytest.raises(ValueError):
        SubmissionOrchestrator(api_client, max_polls=0)
