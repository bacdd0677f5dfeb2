"""Test-case files for the Competitive Programming Helper (cph) editor extension."""

import hashlib
import json
import time
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from domain.models import Problem

CPH_FOLDER = ".cph"
TIME_LIMIT_MS = 3000
MEMORY_LIMIT_MB = 1024


class CphService:
    """Reads and writes ``.prob`` files for source files in a workspace folder."""

    def __init__(self, folder: Path):
        self.folder = Path(folder)

    def prob_path(self, src_file_name: str) -> Path:
        """``.cph/.<file>_<md5 of the source path>.prob``"""
        src_path = str(self.folder / src_file_name)
        digest = hashlib.md5(src_path.encode("utf-8")).hexdigest()
        return self.folder / CPH_FOLDER / f".{src_file_name}_{digest}.prob"

    def read_existing(self, src_file_name: str) -> Optional[dict[str, Any]]:
        path = self.prob_path(src_file_name)
        if not path.is_file():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read prob file {path}: {e}")
            return None

    def create(self, src_file_name: str, problem: Problem) -> dict[str, Any]:
        """Build a prob document whose tests are the problem's examples."""
        src_path = str(self.folder / src_file_name)
        prob: dict[str, Any] = {
            "name": f"{problem.info.index}. {problem.info.title}",
            "url": src_path,
            "tests": [],
            "interactive": False,
            "timeLimit": TIME_LIMIT_MS,
            "memoryLimit": MEMORY_LIMIT_MB,
            "srcPath": src_path,
            "group": "local",
            "local": True,
        }
        if problem.extra is None:
            return prob

        timestamp = int(time.time() * 1000)
        prob["tests"] = [
            {"id": timestamp + idx, "input": example.input, "output": example.output}
            for idx, example in enumerate(problem.extra.examples)
        ]
        return prob

    def save(self, src_file_name: str, prob: dict[str, Any]) -> Path:
        path = self.prob_path(src_file_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(prob, ensure_ascii=False), encoding="utf-8")
        logger.debug(f"Saved prob file {path}")
        return path

    def ensure(self, src_file_name: str, problem: Problem) -> dict[str, Any]:
        """Return the existing prob for a source file, creating it when absent."""
        existing = self.read_existing(src_file_name)
        if existing is not None:
            return existing
        prob = self.create(src_file_name, problem)
        self.save(src_file_name, prob)
        return prob
