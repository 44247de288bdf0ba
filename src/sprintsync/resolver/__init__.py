"""Sprint Resolver - Determines the sprint dates that apply to an issue."""

from sprintsync.resolver.models import ResolutionStrategy, SprintDates, to_calendar_date
from sprintsync.resolver.resolver import (
    BoardSprintResolver,
    IssueSprintResolver,
    SprintResolver,
    create_resolver,
    sprint_dates,
)

__all__ = [
    "BoardSprintResolver",
    "IssueSprintResolver",
    "ResolutionStrategy",
    "SprintDates",
    "SprintResolver",
    "create_resolver",
    "sprint_dates",
    "to_calendar_date",
]
