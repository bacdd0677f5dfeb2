"""Parser for extracting problem data from NowCoder problem pages."""

import re
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag
from loguru import logger

from domain.models import ProblemExample, ProblemExtra

from .interfaces import ProblemPageParserProtocol
from .markdown import MarkdownConverter

PAGE_INFO_MARKER = "window.pageInfo"

DESCRIPTION_HEADING = "## 题目描述"
INPUT_HEADING = "## 输入描述"
OUTPUT_HEADING = "## 输出描述"

# literal heading text on the judge's page
INPUT_TITLE = "输入描述:"
OUTPUT_TITLE = "输出描述:"


def find_page_info_script(soup: BeautifulSoup) -> Optional[str]:
    """Return the body of the script that assigns the page's global state."""
    for script in soup.find_all("script"):
        text = script.string or script.get_text()
        if text and PAGE_INFO_MARKER in text:
            return text
    return None


class ProblemPageParser(ProblemPageParserProtocol):
    """Parser for extracting submission ids, statement and examples from a problem page."""

    ID_FIELDS = {
        "question_id": "questionId",
        "tag_id": "tagId",
        "sub_tag_id": "subTagId",
        "done_question_id": "doneQuestionId",
    }

    def __init__(self, converter: Optional[MarkdownConverter] = None):
        """
        Initialize parser.

        Args:
            converter: Markdown converter used for statement and tips
        """
        self.converter = converter or MarkdownConverter()

    def parse(self, html: str) -> ProblemExtra:
        """
        Parse problem page HTML.

        Missing pieces degrade to empty strings or an empty example list.
        """
        soup = BeautifulSoup(html, "lxml")

        ids = self._extract_ids(soup)
        content = self._extract_content(soup)
        examples = self._extract_examples(soup)

        extra = ProblemExtra(content=content, examples=examples, **ids)
        if not extra.is_submittable:
            logger.warning(f"Problem page is missing submission ids: {ids}")

        logger.debug(f"Parsed problem page with {len(examples)} example(s)")
        return extra

    def _extract_ids(self, soup: BeautifulSoup) -> dict[str, str]:
        """Extract the four submission ids from the page-info script."""
        ids = {attr: "" for attr in self.ID_FIELDS}
        try:
            script = find_page_info_script(soup)
            if not script:
                logger.warning("Page info script not found on problem page")
                return ids

            for attr, name in self.ID_FIELDS.items():
                match = re.search(rf"(?<![\w$]){name}:\s*['\"]([^'\"]+)['\"]", script)
                if match:
                    ids[attr] = match.group(1)

            return ids
        except Exception as e:
            logger.warning(f"Failed to extract problem ids: {e}")
            return ids

    def _extract_content(self, soup: BeautifulSoup) -> str:
        """Build the Markdown statement: description, input and output sections."""
        description = self._convert_safely(soup.select_one(".subject-describe .subject-question"))
        input_desc = self._convert_safely(self._find_section_pre(soup, INPUT_TITLE))
        output_desc = self._convert_safely(self._find_section_pre(soup, OUTPUT_TITLE))

        content = f"{DESCRIPTION_HEADING}\n\n{description}\n\n"
        content += f"{INPUT_HEADING}\n\n{input_desc}\n\n"
        content += f"{OUTPUT_HEADING}\n\n{output_desc}\n\n"
        return content

    def _find_section_pre(self, soup: BeautifulSoup, title: str) -> Optional[Tag]:
        """Find the ``<pre>`` immediately following the ``h2`` whose text contains ``title``."""
        try:
            heading = next((h for h in soup.find_all("h2") if title in h.get_text()), None)
            if heading is None:
                logger.debug(f"Section heading {title!r} not found")
                return None

            following = heading.find_next_sibling()
            if following is not None and following.name == "pre":
                return following
            return None
        except Exception as e:
            logger.warning(f"Failed to locate section {title!r}: {e}")
            return None

    def _convert_safely(self, element: Optional[Tag]) -> str:
        try:
            return self.converter.convert(element)
        except Exception as e:
            logger.warning(f"Failed to convert statement section: {e}")
            return ""

    def _extract_examples(self, soup: BeautifulSoup) -> list[ProblemExample]:
        """Extract sample cases; cases without both input and output are dropped."""
        examples = []
        try:
            for block in soup.select(".question-oi"):
                modules = block.select(".question-oi-mod")

                input_text = self._module_text(modules, 0)
                output_text = self._module_text(modules, 1)
                if not input_text or not output_text:
                    continue

                tips = None
                tips_pre = self._module_pre(modules, 2)
                if tips_pre is not None:
                    tips = self._convert_safely(tips_pre) or None

                examples.append(ProblemExample(input=input_text, output=output_text, tips=tips))

            return examples
        except Exception as e:
            logger.warning(f"Failed to extract examples: {e}")
            return examples

    def _module_pre(self, modules: list[Tag], position: int) -> Optional[Tag]:
        if position >= len(modules):
            return None
        return modules[position].select_one(".question-oi-cont pre")

    def _module_text(self, modules: list[Tag], position: int) -> str:
        pre = self._module_pre(modules, position)
        return pre.get_text().strip() if pre is not None else ""
