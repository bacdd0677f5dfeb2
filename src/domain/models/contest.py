"""Contest-level models: timing, rankings and the workspace config document."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .problem import Problem


class ContestPhase(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    ENDED = "ended"


@dataclass(frozen=True)
class Countdown:
    """Time left until the contest starts (or ends, once running)."""

    phase: ContestPhase
    remaining_ms: int

    def format(self) -> str:
        """Render as ``HH:MM:SS``, prefixed with ``-`` before the start."""
        if self.phase is ContestPhase.ENDED:
            return "00:00:00"
        total_seconds = self.remaining_ms // 1000
        hours, rest = divmod(total_seconds, 3600)
        minutes, seconds = divmod(rest, 60)
        prefix = "-" if self.phase is ContestPhase.NOT_STARTED else ""
        return f"{prefix}{hours:02d}:{minutes:02d}:{seconds:02d}"


@dataclass
class ContestInfo:
    """Timing metadata embedded in the contest landing page."""

    start_time: int
    end_time: int
    extra: dict[str, Any] = field(default_factory=dict)

    def countdown(self, now_ms: int) -> Countdown:
        if now_ms > self.end_time:
            return Countdown(ContestPhase.ENDED, 0)
        if now_ms < self.start_time:
            return Countdown(ContestPhase.NOT_STARTED, self.start_time - now_ms)
        return Countdown(ContestPhase.RUNNING, self.end_time - now_ms)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContestInfo:
        start_time = data["startTime"]
        end_time = data["endTime"]
        if not isinstance(start_time, (int, float)) or not isinstance(end_time, (int, float)):
            raise ValueError("startTime/endTime must be numeric")
        extra = {k: v for k, v in data.items() if k not in ("startTime", "endTime")}
        return cls(start_time=int(start_time), end_time=int(end_time), extra=extra)


@dataclass
class RealtimeRank:
    """Snapshot of contest standings."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    problems: list[dict[str, Any]] = field(default_factory=list)
    basic_info: dict[str, Any] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RealtimeRank:
        return cls(
            rows=list(data.get("rankData") or []),
            problems=list(data.get("problemData") or []),
            basic_info=data.get("basicInfo") or {},
            raw=data,
        )


@dataclass
class ContestConfig:
    """Per-workspace JSON document (``nowcoderac.json``)."""

    contest_id: int
    problems: list[Problem] = field(default_factory=list)

    def find_problem(self, index: str) -> Problem | None:
        return next((p for p in self.problems if p.info.index == index), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "contestId": self.contest_id,
            "problems": [problem.to_dict() for problem in self.problems],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContestConfig:
        return cls(
            contest_id=int(data["contestId"]),
            problems=[Problem.from_dict(p) for p in data.get("problems") or []],
        )
