"""Pydantic schemas for submission API endpoints."""

from pydantic import BaseModel


class SubmitRequest(BaseModel):
    """Request to submit a solution."""

    code: str
    compiler: str | None = None  # Detected from the code's marker comment when omitted
    language_id: str | None = None  # Editor language id narrowing marker detection


class JudgeOutcomeResponse(BaseModel):
    """Final verdict of a submission."""

    submission_id: int
    verdict: str  # accepted, compile_error, rejected or timeout
    accepted: bool
    polls: int
    message: str
    status: int | None = None
    time_consumption: int | None = None
    memory_consumption: int | None = None


class SubmissionResponse(BaseModel):
    """Row of the submission list."""

    submission_id: int
    index: str
    status_message: str
    language_name: str
    user_name: str
    time: int | None = None
    memory: int | None = None
    length: int
    submit_time: int

    class Config:
        from_attributes = True
