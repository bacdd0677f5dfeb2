"""Pydantic schemas for problem API endpoints."""

from pydantic import BaseModel


class ProblemSummaryResponse(BaseModel):
    """Row of the problem list."""

    index: str
    title: str
    problem_id: int
    score: int
    accepted_count: int
    submit_count: int
    accepted_rate: float
    my_status: str
    has_details: bool

    class Config:
        from_attributes = True


class ExampleResponse(BaseModel):
    input: str
    output: str
    tips: str | None = None

    class Config:
        from_attributes = True


class ProblemDetailResponse(ProblemSummaryResponse):
    """Problem with statement, examples and rendered Markdown document."""

    content: str
    examples: list[ExampleResponse]
    is_submittable: bool
    document: str  # Full Markdown document (title, statement, examples)


class CodeFileRequest(BaseModel):
    """Request to create a starter code file."""

    compiler: str  # Compiler display name or judge language id
    with_cph: bool = True


class CodeFileResponse(BaseModel):
    path: str
    prob_path: str | None = None
    document_path: str
