"""Data models for the Sprint Resolver."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class ResolutionStrategy(str, Enum):
    """How the sprint for an issue is chosen."""

    ISSUE = "issue"  # walk the issue's own sprint field
    BOARD = "board"  # active sprint of the project's first board


@dataclass(frozen=True)
class SprintDates:
    """Start and end dates to apply to an issue, as YYYY-MM-DD strings."""

    start: str
    end: str
    sprint_id: int | None = None


def to_calendar_date(value: str | None) -> str | None:
    """Reduce an ISO-8601 date or date-time string to its YYYY-MM-DD date.

    Returns None for empty or unparseable values.
    """
    if not value:
        return None
    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text).isoformat()
        return _parse_datetime(text)
    except ValueError:
        return None


def _parse_datetime(text: str) -> str:
    # Jira emits "2024-01-14T09:00:00.000Z" and "2024-01-14T09:00:00.000+0000"
    normalized = text.replace("Z", "+00:00")
    if len(normalized) > 5 and normalized[-5] in "+-" and normalized[-3] != ":":
        normalized = f"{normalized[:-2]}:{normalized[-2:]}"
    return datetime.fromisoformat(normalized).date().isoformat()
