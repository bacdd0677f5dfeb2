"""Environment-driven settings and logging setup."""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from domain.exceptions import InvalidConfigError
from .parsers.url_parser import BASE_URL


@dataclass(frozen=True)
class Settings:
    token: Optional[str] = None
    base_url: str = BASE_URL
    http_timeout: float = 30
    poll_interval: float = 1.0
    max_polls: int = 60
    workspace: Optional[Path] = None
    redis_url: Optional[str] = None
    redis_ttl: int = 86400
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment, reading ``.env`` first."""
        load_dotenv()

        workspace = os.getenv("NOWCODER_WORKSPACE")
        try:
            return cls(
                token=os.getenv("NOWCODER_TOKEN") or None,
                base_url=os.getenv("NOWCODER_BASE_URL", BASE_URL),
                http_timeout=float(os.getenv("NOWCODER_HTTP_TIMEOUT", "30")),
                poll_interval=float(os.getenv("NOWCODER_POLL_INTERVAL", "1.0")),
                max_polls=int(os.getenv("NOWCODER_MAX_POLLS", "60")),
                workspace=Path(workspace) if workspace else None,
                redis_url=os.getenv("REDIS_URL") or None,
                redis_ttl=int(os.getenv("REDIS_TTL", "86400")),
                log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            )
        except ValueError as e:
            raise InvalidConfigError(f"Invalid environment setting: {e}") from e


def configure_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)
