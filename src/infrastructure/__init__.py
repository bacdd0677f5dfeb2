"""Infrastructure layer: transport, judge client, persistence and parsers."""

from .cache_redis import AsyncRedisCache
from .config_store import ConfigStore, JsonConfigStore
from .errors import HTTPClientError
from .http_client import AsyncHTTPClient
from .nowcoder_client import NowcoderApiClient

__all__ = [
    "AsyncHTTPClient",
    "AsyncRedisCache",
    "ConfigStore",
    "HTTPClientError",
    "JsonConfigStore",
    "NowcoderApiClient",
]
