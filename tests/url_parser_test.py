# tests/url_parser_test.py
import pytest
from infrastructure.parsers import URLParser, URLParsingError

@pytest.mark.parametrize(
    "value, expected_contest",
    [
        ("https://ac.nowcoder.com/acm/contest/114514", 114514),
        ("https://ac.nowcoder.com/acm/contest/95323/A", 95323),
        ("https://ac.nowcoder.com/acm/contest/95323/B1?from=list", 95323),
        ("  88888 ", 88888),
    ],
)
def test_parse_contest_id(value, expected_contest) -> None:
    assert URLParser.parse_contest_id(value) == expected_contest

@pytest.mark.parametrize(
    "value",
    ["not a url", "https://codeforces.com/contest/1234", "https://ac.nowcoder.com/acm/home"],
)
def test_parse_invalid_contest_reference(value) -> None:
    with pytest.raises(URLParsingError):
        URLParser.parse_contest_id(value)

def test_build_problem_url() -> None:
    url = URLParser().build_problem_url(1234, "A")
    assert url == "https://ac.nowcoder.com/acm/contest/1234/A"

def test_build_contest_url_with_custom_base() -> None:
    url = URLParser("http://localhost:8080/").build_contest_url(1234)
    assert url == "http://localhost:8080/acm/contest/1234"

def test_build_api_urls() -> None:
    parser = URLParser()

    assert parser.build_problem_list_url(7) == "https://ac.nowcoder.com/acm/contest/problem-list?id=7"
    assert parser.build_submit_url() == "https://ac.nowcoder.com/nccommon/submit_cd"
    assert parser.build_status_url(12345, "t1", "s1") == (
        "https://ac.nowcoder.com/nccommon/status?submissionId=12345&tagId=t1&subTagId=s1"
    )
    assert parser.build_submissions_url(7) == (
        "https://ac.nowcoder.com/acm-heavy/acm/contest/status-list"
        "?id=7&pageSize=50&onlyMyStatusFilter=true"
    )
    assert parser.build_rank_url(7) == (
        "https://ac.nowcoder.com/acm-heavy/acm/contest/real-time-rank-data"
        "?id=7&searchUserName=&limit=0"
    )
