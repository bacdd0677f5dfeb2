"""Domain models package."""

from .compiler import COMPILER_CONFIG, Compiler, CompilerConfig, detect_compiler
from .contest import ContestConfig, ContestInfo, ContestPhase, Countdown, RealtimeRank
from .problem import ContestProblemList, Problem, ProblemExample, ProblemExtra, ProblemInfo
from .result import ApiResult
from .submission import (
    JudgeOutcome,
    SubmissionList,
    SubmissionListItem,
    SubmissionStatus,
    SubmissionStatusCode,
    VerdictKind,
    classify_status,
)

__all__ = [
    "ApiResult",
    "COMPILER_CONFIG",
    "Compiler",
    "CompilerConfig",
    "ContestConfig",
    "ContestInfo",
    "ContestPhase",
    "ContestProblemList",
    "Countdown",
    "JudgeOutcome",
    "Problem",
    "ProblemExample",
    "ProblemExtra",
    "ProblemInfo",
    "RealtimeRank",
    "SubmissionList",
    "SubmissionListItem",
    "SubmissionStatus",
    "SubmissionStatusCode",
    "VerdictKind",
    "classify_status",
    "detect_compiler",
]
