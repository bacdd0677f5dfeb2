"""Submission and verdict models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any


class SubmissionStatusCode(IntEnum):
    """Judge status codes with special handling; any other non-zero code is terminal."""

    WAITING = 0
    WRONG_ANSWER = 4
    RIGHT_ANSWER = 5
    COMPILE_ERROR = 12


class VerdictKind(str, Enum):
    ACCEPTED = "accepted"
    COMPILE_ERROR = "compile_error"
    REJECTED = "rejected"
    TIMEOUT = "timeout"


def classify_status(status: int) -> VerdictKind | None:
    """Map a judge status code to a verdict kind, or ``None`` while pending."""
    if status == SubmissionStatusCode.WAITING:
        return None
    if status == SubmissionStatusCode.RIGHT_ANSWER:
        return VerdictKind.ACCEPTED
    if status == SubmissionStatusCode.COMPILE_ERROR:
        return VerdictKind.COMPILE_ERROR
    return VerdictKind.REJECTED


@dataclass
class SubmissionStatus:
    """Judge verdict for one submission as returned by the status endpoint."""

    status: int
    judge_reply_desc: str = ""
    desc: str = ""
    memo: str = ""
    time_consumption: int = 0
    memory_consumption: int = 0
    id: int = 0
    code: int = 0
    language: str | None = None
    right_case_num: int | None = None
    all_case_num: int | None = None
    right_hundred_rate: float = 0
    is_complete: bool | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == SubmissionStatusCode.WAITING

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SubmissionStatus:
        return cls(
            status=int(data["status"]),
            judge_reply_desc=data.get("judgeReplyDesc") or "",
            desc=data.get("desc") or "",
            memo=data.get("memo") or "",
            time_consumption=data.get("timeConsumption") or 0,
            memory_consumption=data.get("memoryConsumption") or 0,
            id=data.get("id") or 0,
            code=data.get("code") or 0,
            language=data.get("language"),
            right_case_num=data.get("rightCaseNum"),
            all_case_num=data.get("allCaseNum"),
            right_hundred_rate=data.get("rightHundredRate") or 0,
            is_complete=data.get("isComplete"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "judgeReplyDesc": self.judge_reply_desc,
            "desc": self.desc,
            "memo": self.memo,
            "timeConsumption": self.time_consumption,
            "memoryConsumption": self.memory_consumption,
            "id": self.id,
            "code": self.code,
            "language": self.language,
            "rightCaseNum": self.right_case_num,
            "allCaseNum": self.all_case_num,
            "rightHundredRate": self.right_hundred_rate,
            "isComplete": self.is_complete,
        }


@dataclass
class JudgeOutcome:
    """Final result of waiting for a submission's verdict."""

    submission_id: int
    kind: VerdictKind
    polls: int
    status: SubmissionStatus | None = None

    @property
    def accepted(self) -> bool:
        return self.kind is VerdictKind.ACCEPTED

    @property
    def message(self) -> str:
        if self.kind is VerdictKind.TIMEOUT or self.status is None:
            return (
                f"Timed out waiting for the verdict of submission {self.submission_id}, "
                "check the result on the NowCoder site"
            )
        if self.kind is VerdictKind.ACCEPTED:
            return self.status.judge_reply_desc
        message = "\n".join(part for part in (self.status.judge_reply_desc, self.status.desc) if part)
        if self.kind is VerdictKind.COMPILE_ERROR and self.status.memo:
            message = f"{message}\n{self.status.memo}" if message else self.status.memo
        return message


@dataclass
class SubmissionListItem:
    """Row of the contest status list."""

    submission_id: int
    index: str
    status_message: str
    problem_id: int = 0
    language: str = ""
    language_name: str = ""
    user_name: str = ""
    user_id: int = 0
    time: int | None = None
    memory: int | None = None
    length: int = 0
    submit_time: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SubmissionListItem:
        return cls(
            submission_id=data["submissionId"],
            index=data.get("index", ""),
            status_message=data.get("statusMessage", ""),
            problem_id=data.get("problemId", 0),
            language=data.get("language", ""),
            language_name=data.get("languageName", ""),
            user_name=data.get("userName", ""),
            user_id=data.get("userId", 0),
            time=data.get("time"),
            memory=data.get("memory"),
            length=data.get("length", 0),
            submit_time=data.get("submitTime", 0),
        )


@dataclass
class SubmissionList:
    """Payload of the status-list endpoint."""

    submissions: list[SubmissionListItem]
    is_contest_finished: bool = False
    basic_info: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SubmissionList:
        return cls(
            submissions=[SubmissionListItem.from_dict(item) for item in data.get("data") or []],
            is_contest_finished=bool(data.get("isContestFinished", False)),
            basic_info=data.get("basicInfo") or {},
        )
