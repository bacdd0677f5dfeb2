"""Pydantic schemas for contest API endpoints."""

from typing import Any

from pydantic import BaseModel


class ContestInfoResponse(BaseModel):
    """Response containing contest timing."""

    contest_id: int
    available: bool
    start_time: int | None = None
    end_time: int | None = None
    phase: str | None = None  # not_started, running or ended
    countdown: str | None = None  # HH:MM:SS, "-" prefixed before the start
    extra: dict[str, Any] = {}


class RankResponse(BaseModel):
    """Response containing realtime standings."""

    contest_id: int
    rows: list[dict[str, Any]]
    problems: list[dict[str, Any]]
    basic_info: dict[str, Any]

    class Config:
        from_attributes = True
