"""Redis cache for parsed problem pages."""

import json
from typing import Any, Optional

import redis.asyncio as redis
from loguru import logger

DEFAULT_TTL = 86400


class AsyncRedisCache:
    """JSON values in Redis with a fixed expiry."""

    def __init__(self, url: str = "redis://localhost:6379/0", ttl: int = DEFAULT_TTL):
        self.url = url
        self.ttl = ttl
        self._client: Optional[redis.Redis] = None

    async def connect(self) -> None:
        """Open the connection and verify it with a ping."""
        self._client = redis.from_url(self.url, decode_responses=True)
        await self._client.ping()
        logger.debug(f"Connected to Redis at {self.url}")

    def _require_client(self) -> redis.Redis:
        if self._client is None:
            raise RuntimeError("Redis cache is not connected")
        return self._client

    async def get(self, key: str) -> Optional[Any]:
        raw = await self._require_client().get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Discarding undecodable cache entry {key}")
            return None

    async def set(self, key: str, value: Any) -> None:
        await self._require_client().set(key, json.dumps(value, ensure_ascii=False), ex=self.ttl)

    async def flushdb(self) -> None:
        await self._require_client().flushdb()
        logger.info("Redis cache flushed")

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("Redis connection closed")


def problem_cache_key(contest_id: int, index: str) -> str:
    return f"nowcoder:problem:{contest_id}:{index}"
