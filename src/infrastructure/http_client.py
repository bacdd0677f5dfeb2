"""Async HTTP client for the judge site."""

from typing import Any, Optional

from curl_cffi.requests import AsyncSession
from loguru import logger

from .errors import HTTPClientError

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36 "
    "NowCoderAC/1.2.0"
)


class AsyncHTTPClient:
    """
    Thin wrapper around a curl_cffi session.

    The login token is sent as the ``t`` cookie on every request. All
    failures surface as ``HTTPClientError`` with the underlying message.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        timeout: float = 30,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        """
        Initialize client.

        Args:
            token: NowCoder login token (value of the ``t`` cookie)
            timeout: Request timeout in seconds
            user_agent: User-Agent header sent with each request
        """
        self.token = token
        self.timeout = timeout
        self.user_agent = user_agent
        self._session: Optional[AsyncSession] = None

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _get_session(self) -> AsyncSession:
        if self._session is None:
            self._session = AsyncSession(
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
        return self._session

    def _headers(self, extra: Optional[dict[str, str]] = None) -> dict[str, str]:
        headers = {}
        if self.token:
            headers["Cookie"] = f"t={self.token}"
        if extra:
            headers.update(extra)
        return headers

    async def _request(self, method: str, url: str, headers: dict[str, str], **kwargs: Any):
        logger.debug(f"{method} {url}")
        try:
            response = await self._get_session().request(
                method, url, headers=self._headers(headers), **kwargs
            )
        except Exception as e:
            logger.error(f"{method} request to {url} failed: {e}")
            raise HTTPClientError(f"Request failed: {e}", url=url) from e

        if response.status_code >= 400:
            logger.error(f"{method} request to {url} returned HTTP {response.status_code}")
            raise HTTPClientError(
                f"Request failed: HTTP {response.status_code}",
                url=url,
                status_code=response.status_code,
            )
        return response

    def _decode_json(self, response, url: str) -> Any:
        try:
            return response.json()
        except Exception as e:
            logger.error(f"Response from {url} is not valid JSON: {e}")
            raise HTTPClientError(f"Invalid JSON response: {e}", url=url) from e

    async def get_text(self, url: str) -> str:
        """Get HTML/text content from URL."""
        response = await self._request("GET", url, headers={"Accept": "text/html"})
        return response.text

    async def get_json(self, url: str) -> Any:
        """Get decoded JSON from URL."""
        response = await self._request("GET", url, headers={})
        return self._decode_json(response, url)

    async def post_json(self, url: str, payload: Any = None) -> Any:
        """POST a JSON body and decode the JSON response."""
        response = await self._request(
            "POST",
            url,
            headers={"Content-Type": "application/json; charset=UTF-8"},
            json=payload,
        )
        return self._decode_json(response, url)

    async def post_form(self, url: str, form: dict[str, Any]) -> Any:
        """POST a form-encoded body and decode the JSON response."""
        response = await self._request(
            "POST",
            url,
            headers={"Content-Type": "application/x-www-form-urlencoded; charset=UTF-8"},
            data={key: str(value) for key, value in form.items()},
        )
        return self._decode_json(response, url)

    async def close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None
            logger.debug("HTTP session closed")
