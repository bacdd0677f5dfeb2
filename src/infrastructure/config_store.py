"""Persistence of the per-workspace contest config document."""

import json
from pathlib import Path
from typing import Protocol

from loguru import logger

from domain.exceptions import InvalidConfigError
from domain.models import ContestConfig


class ConfigStore(Protocol):
    """Protocol for loading and saving a workspace's contest config."""

    def load(self) -> ContestConfig:
        ...

    def save(self, config: ContestConfig) -> None:
        ...


class JsonConfigStore:
    """Stores a ``ContestConfig`` as an indented JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> ContestConfig:
        """
        Read and validate the config file.

        Raises:
            InvalidConfigError: If the file is missing, unreadable or has no contest id
        """
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise InvalidConfigError(f"Cannot read config {self.path}: {e}") from e

        if not isinstance(data, dict) or "contestId" not in data:
            raise InvalidConfigError(f"Config {self.path} has no contestId")

        try:
            config = ContestConfig.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidConfigError(f"Config {self.path} is malformed: {e}") from e

        logger.debug(f"Loaded config for contest {config.contest_id} from {self.path}")
        return config

    def save(self, config: ContestConfig) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(config.to_dict(), indent=4, ensure_ascii=False), encoding="utf-8"
        )
        logger.debug(f"Saved config for contest {config.contest_id} to {self.path}")
