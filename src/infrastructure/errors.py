"""Infrastructure-level errors."""


class HTTPClientError(Exception):
    """Transport failure: network error, timeout, bad HTTP status or undecodable body."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)
