"""Pydantic schemas for workspace API endpoints."""

from pydantic import BaseModel


class CreateWorkspaceRequest(BaseModel):
    """Request to create a workspace for a contest."""

    contest: str  # Contest id or contest URL
    folder: str


class OpenWorkspaceRequest(BaseModel):
    """Request to open an existing workspace."""

    folder: str


class WorkspaceResponse(BaseModel):
    """Response describing the current workspace."""

    open: bool
    folder: str | None = None
    contest_id: int | None = None
    problem_count: int = 0

    class Config:
        from_attributes = True
