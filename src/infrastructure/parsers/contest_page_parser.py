"""Parser for extracting contest timing data from contest landing pages."""

import json
import re
from typing import Optional

from bs4 import BeautifulSoup
from loguru import logger

from domain.models import ContestInfo

from .interfaces import ContestPageParserProtocol
from .problem_page_parser import find_page_info_script

PAGE_INFO_PATTERN = re.compile(r"window\.pageInfo\s*=\s*({.*?});", re.DOTALL)


class ContestPageParser(ContestPageParserProtocol):
    """Parser for the ``window.pageInfo`` blob embedded in contest pages."""

    def parse(self, html: str) -> Optional[ContestInfo]:
        """
        Parse contest page HTML.

        Returns None when the blob is absent or malformed; callers should
        treat contest info as unavailable and try again later.
        """
        try:
            soup = BeautifulSoup(html, "lxml")
            script = find_page_info_script(soup)
            if not script:
                logger.warning("Page info script not found on contest page")
                return None

            match = PAGE_INFO_PATTERN.search(script)
            if not match:
                logger.warning("Page info assignment not found in contest page script")
                return None

            page_info = json.loads(match.group(1))
            if not isinstance(page_info, dict):
                logger.warning("Contest page info is not an object")
                return None

            contest_info = ContestInfo.from_dict(page_info)
            logger.debug(
                f"Parsed contest info: start={contest_info.start_time} end={contest_info.end_time}"
            )
            return contest_info

        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Failed to parse contest page info: {e}")
            return None
