"""Uniform success/failure envelope returned by judge API operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """
    Result of a judge API call.

    A successful result always carries its payload in ``data`` and no
    ``error``; a failed one carries a human-readable ``error`` and no
    ``data``. ``success`` is true exactly when ``data`` is present.
    """

    success: bool
    data: T | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if self.success:
            if self.data is None:
                raise ValueError("Successful result must carry data")
            if self.error is not None:
                raise ValueError("Successful result cannot carry an error")
        else:
            if self.error is None:
                raise ValueError("Failed result must carry an error")
            if self.data is not None:
                raise ValueError("Failed result cannot carry data")

    @classmethod
    def ok(cls, data: T) -> ApiResult[T]:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> ApiResult[T]:
        return cls(success=False, error=error)

    def __bool__(self) -> bool:
        return self.success
