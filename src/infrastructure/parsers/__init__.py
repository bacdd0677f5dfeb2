"""Parsers for extracting data from judge pages."""

from .contest_page_parser import ContestPageParser
from .interfaces import (
    ContestPageParserProtocol,
    HTTPClientProtocol,
    ParsingError,
    ProblemPageParserProtocol,
)
from .markdown import MarkdownConverter
from .problem_page_parser import ProblemPageParser
from .url_parser import URLParser, URLParsingError

__all__ = [
    "ContestPageParser",
    "ContestPageParserProtocol",
    "HTTPClientProtocol",
    "MarkdownConverter",
    "ParsingError",
    "ProblemPageParser",
    "ProblemPageParserProtocol",
    "URLParser",
    "URLParsingError",
]
