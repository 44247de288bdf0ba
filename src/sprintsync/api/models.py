"""Pydantic models for the REST API."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from sprintsync.dispatcher import DispatchResult

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


class DispatchResponse(BaseModel):
    """Response model summarizing how a webhook delivery was handled."""

    event: str | None
    issue_key: str | None
    handled: bool
    actions: list[str] = Field(default_factory=list)
    start_date: str | None = None
    due_date: str | None = None
    dates_written: bool = False
    assignee_copied: str | None = None


def dispatch_result_to_response(result: DispatchResult) -> DispatchResponse:
    """Convert a DispatchResult to DispatchResponse."""
    return DispatchResponse(
        event=result.event,
        issue_key=result.issue_key,
        handled=result.handled,
        actions=list(result.actions),
        start_date=result.dates.start if result.dates else None,
        due_date=result.dates.end if result.dates else None,
        dates_written=result.dates_written,
        assignee_copied=result.assignee_copied,
    )


class HealthResponse(BaseModel):
    """Response model for the liveness probe."""

    status: str
