"""Unit tests for contest page extraction."""

import pytest

from domain.models import ContestPhase, ContestInfo
from infrastructure.parsers import ContestPageParser


def page(script: str) -> str:
    return f"<html><head><script>{script}</script></head><body></body></html>"


@pytest.fixture
def parser():
    return ContestPageParser()


def test_extracts_times_and_extra_fields(parser):
    html = page(
        'window.pageInfo = {"startTime": 1700000000000, "endTime": 1700018000000, '
        '"contestName": "Weekly", "rule": {"type": "acm"}};'
    )

    info = parser.parse(html)

    assert info.start_time == 1700000000000
    assert info.end_time == 1700018000000
    assert info.extra == {"contestName": "Weekly", "rule": {"type": "acm"}}


@pytest.mark.parametrize(
    "html",
    [
        "<html><body><p>no script</p></body></html>",
        page("var other = 1;"),
        page("window.pageInfo = {startTime: 1, endTime: 2};"),
        page('window.pageInfo = {"startTime": 1};'),
        page('window.pageInfo = {"startTime": "soon", "endTime": 2};'),
    ],
)
def test_missing_or_malformed_info_returns_none(parser, html):
    assert parser.parse(html) is None


def test_countdown_phases():
    info = ContestInfo(start_time=1_000_000, end_time=2_000_000)

    before = info.countdown(500_000)
    running = info.countdown(1_001_000)
    after = info.countdown(3_000_000)

    assert before.phase is ContestPhase.NOT_STARTED
    assert before.format() == "-00:08:20"
    assert running.phase is ContestPhase.RUNNING
    assert running.format() == "00:16:39"
    assert after.phase is ContestPhase.ENDED
    assert after.format() == "00:00:00"
