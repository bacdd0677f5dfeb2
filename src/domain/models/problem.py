"""Problem models as exposed by the judge and persisted in workspace configs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ProblemExample:
    """One sample case from a problem page."""

    input: str
    output: str
    tips: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"input": self.input, "output": self.output, "tips": self.tips}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProblemExample:
        return cls(
            input=data.get("input", ""),
            output=data.get("output", ""),
            tips=data.get("tips"),
        )


@dataclass
class ProblemExtra:
    """Details extracted from a problem page, including the ids needed to submit."""

    tag_id: str = ""
    question_id: str = ""
    sub_tag_id: str = ""
    done_question_id: str = ""
    content: str = ""
    examples: list[ProblemExample] = field(default_factory=list)

    @property
    def is_submittable(self) -> bool:
        return all((self.tag_id, self.question_id, self.sub_tag_id, self.done_question_id))

    def to_dict(self) -> dict[str, Any]:
        return {
            "tagId": self.tag_id,
            "questionId": self.question_id,
            "subTagId": self.sub_tag_id,
            "doneQuestionId": self.done_question_id,
            "content": self.content,
            "examples": [example.to_dict() for example in self.examples],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProblemExtra:
        return cls(
            tag_id=str(data.get("tagId", "")),
            question_id=str(data.get("questionId", "")),
            sub_tag_id=str(data.get("subTagId", "")),
            done_question_id=str(data.get("doneQuestionId", "")),
            content=data.get("content", ""),
            examples=[ProblemExample.from_dict(e) for e in data.get("examples", [])],
        )


@dataclass
class ProblemInfo:
    """Row of the contest problem list."""

    index: str
    title: str
    problem_id: int = 0
    tag_id: int = 0
    score: int = 0
    accepted_count: int = 0
    submit_count: int = 0
    my_status: str = ""
    info: dict[str, Any] = field(default_factory=dict)

    @property
    def accepted_rate(self) -> float:
        """Accepted percentage, guarded against zero submissions."""
        return self.accepted_count / max(1, self.submit_count) * 100

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "acceptedCount": self.accepted_count,
            "submitCount": self.submit_count,
            "tagId": self.tag_id,
            "index": self.index,
            "myStatus": self.my_status,
            "problemId": self.problem_id,
            "title": self.title,
            "info": self.info,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProblemInfo:
        return cls(
            index=data["index"],
            title=data.get("title", ""),
            problem_id=data.get("problemId", 0),
            tag_id=data.get("tagId", 0),
            score=data.get("score", 0),
            accepted_count=data.get("acceptedCount", 0),
            submit_count=data.get("submitCount", 0),
            my_status=data.get("myStatus") or "",
            info=data.get("info") or {},
        )


@dataclass
class Problem:
    """A contest problem; ``extra`` is filled lazily from its page."""

    info: ProblemInfo
    extra: ProblemExtra | None = None

    @property
    def index(self) -> str:
        return self.info.index

    @property
    def has_details(self) -> bool:
        return self.extra is not None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"info": self.info.to_dict()}
        if self.extra is not None:
            data["extra"] = self.extra.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Problem:
        extra = data.get("extra")
        return cls(
            info=ProblemInfo.from_dict(data["info"]),
            extra=ProblemExtra.from_dict(extra) if extra else None,
        )


@dataclass
class ContestProblemList:
    """Payload of the problem-list endpoint."""

    problems: list[ProblemInfo]
    basic_info: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContestProblemList:
        return cls(
            problems=[ProblemInfo.from_dict(item) for item in data.get("data") or []],
            basic_info=data.get("basicInfo") or {},
        )
