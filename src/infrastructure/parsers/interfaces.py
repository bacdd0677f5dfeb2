"""Protocol interfaces for parsers and transports."""

from typing import Any, Optional, Protocol

from domain.models import ContestInfo, ProblemExtra


class ParsingError(ValueError):
    """Error parsing HTML content."""

    pass


class ProblemPageParserProtocol(Protocol):
    """Protocol for parsing problem pages."""

    def parse(self, html: str) -> ProblemExtra:
        """Extract submission metadata, statement and examples."""
        ...


class ContestPageParserProtocol(Protocol):
    """Protocol for parsing contest landing pages."""

    def parse(self, html: str) -> Optional[ContestInfo]:
        """Extract contest timing metadata, or None when absent."""
        ...


class HTTPClientProtocol(Protocol):
    """Protocol for HTTP client."""

    async def get_text(self, url: str) -> str:
        """Get text content from URL."""
        ...

    async def get_json(self, url: str) -> Any:
        """Get decoded JSON from URL."""
        ...

    async def post_form(self, url: str, form: dict[str, Any]) -> Any:
        """POST form data and decode the JSON response."""
        ...
