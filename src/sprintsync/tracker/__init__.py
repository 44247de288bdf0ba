"""Tracker Client - Talks to the Jira REST and Agile APIs."""

from sprintsync.tracker.client import TrackerClient
from sprintsync.tracker.exceptions import (
    TrackerError,
    TrackerRequestError,
    TrackerResponseError,
)
from sprintsync.tracker.models import Board, Issue, Sprint, SprintRef, SprintState

__all__ = [
    "Board",
    "Issue",
    "Sprint",
    "SprintRef",
    "SprintState",
    "TrackerClient",
    "TrackerError",
    "TrackerRequestError",
    "TrackerResponseError",
]
