"""Parser and builder for NowCoder contest URLs."""

import re
from urllib.parse import urlencode, urlparse

from loguru import logger

BASE_URL = "https://ac.nowcoder.com"


class URLParsingError(ValueError):
    """Invalid URL format or unable to parse URL."""

    pass


class URLParser:
    """Builds judge endpoint URLs and parses contest URLs."""

    # Contest pattern matches: acm/contest/12345 (optionally followed by /A)
    CONTEST_PATTERN = r"nowcoder\.com/acm/contest/(\d+)(?:/([A-Za-z]\d*))?"

    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url.rstrip("/")

    @classmethod
    def parse_contest_id(cls, value: str) -> int:
        """
        Parse a contest id from a bare number or a contest/problem URL.
        """
        logger.debug(f"Parsing contest reference: {value}")
        value = value.strip()
        if value.isdigit():
            return int(value)

        parsed = urlparse(value)
        if not parsed.scheme or not parsed.netloc:
            raise URLParsingError(f"Invalid URL format: {value}")

        match = re.search(cls.CONTEST_PATTERN, value)
        if match:
            contest_id = int(match.group(1))
            logger.info(f"Parsed URL to contest: {contest_id}")
            return contest_id

        raise URLParsingError(
            f"Unrecognized NowCoder contest URL format: {value}. "
            "Expected format: https://ac.nowcoder.com/acm/contest/<contest_id>"
        )

    def build_contest_url(self, contest_id: int) -> str:
        return f"{self.base_url}/acm/contest/{contest_id}"

    def build_problem_url(self, contest_id: int, index: str) -> str:
        return f"{self.base_url}/acm/contest/{contest_id}/{index}"

    def build_problem_list_url(self, contest_id: int) -> str:
        return f"{self.base_url}/acm/contest/problem-list?{urlencode({'id': contest_id})}"

    def build_submit_url(self) -> str:
        return f"{self.base_url}/nccommon/submit_cd"

    def build_status_url(self, submission_id: int, tag_id: str, sub_tag_id: str) -> str:
        query = urlencode({"submissionId": submission_id, "tagId": tag_id, "subTagId": sub_tag_id})
        return f"{self.base_url}/nccommon/status?{query}"

    def build_submissions_url(self, contest_id: int, page_size: int = 50) -> str:
        query = urlencode(
            {"id": contest_id, "pageSize": page_size, "onlyMyStatusFilter": "true"}
        )
        return f"{self.base_url}/acm-heavy/acm/contest/status-list?{query}"

    def build_rank_url(self, contest_id: int) -> str:
        query = urlencode({"id": contest_id, "searchUserName": "", "limit": 0})
        return f"{self.base_url}/acm-heavy/acm/contest/real-time-rank-data?{query}"
