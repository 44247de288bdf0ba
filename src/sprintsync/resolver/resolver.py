"""Sprint Resolver - Chooses the sprint whose dates apply to an issue."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from sprintsync.resolver.models import ResolutionStrategy, SprintDates, to_calendar_date
from sprintsync.tracker import SprintState

if TYPE_CHECKING:
    from sprintsync.tracker import Sprint, TrackerClient

logger = logging.getLogger("sprintsync.resolver")

# Target states, highest priority first
STATE_PRIORITY = (SprintState.ACTIVE, SprintState.FUTURE)


class SprintResolver(Protocol):
    """Interface shared by the resolution strategies."""

    def resolve(self, issue_key: str, project_key: str | None = None) -> SprintDates | None:
        """Return the dates to apply to an issue, or None if no sprint qualifies."""
        ...


def sprint_dates(sprint: Sprint) -> SprintDates | None:
    """Get usable calendar dates from a sprint, or None if either is missing."""
    start = to_calendar_date(sprint.start_date)
    end = to_calendar_date(sprint.end_date)
    if start and end:
        return SprintDates(start=start, end=end, sprint_id=sprint.id)
    return None


class IssueSprintResolver:
    """Resolves dates from the sprints recorded on the issue itself.

    Sprint states are tried in priority order (active, then future). For each
    state the issue's sprint field is scanned newest-first and the first sprint
    in that state with both dates wins.
    """

    def __init__(self, client: TrackerClient) -> None:
        """Initialize the resolver.

        Args:
            client: TrackerClient used for issue and sprint reads.
        """
        self.client = client

    def resolve(self, issue_key: str, project_key: str | None = None) -> SprintDates | None:
        """Resolve sprint dates for an issue.

        Args:
            issue_key: Issue key.
            project_key: Unused; accepted for interface compatibility.

        Returns:
            SprintDates of the winning sprint, or None.
        """
        issue = self.client.get_issue(issue_key, fields=[self.client.settings.sprint_field])
        if issue is None:
            logger.info("Could not read issue %s; no sprint dates", issue_key)
            return None
        if not issue.sprints:
            logger.info("No sprint assigned to issue %s", issue_key)
            return None

        # Sprint records fetched during this resolution, by id (None = fetch failed)
        fetched: dict[int, Sprint | None] = {}

        for target in STATE_PRIORITY:
            for ref in reversed(issue.sprints):
                if ref.id is None:
                    continue
                if ref.id not in fetched:
                    fetched[ref.id] = self.client.get_sprint(ref.id)
                sprint = fetched[ref.id]
                if sprint is None or sprint.state is not target:
                    continue

                dates = sprint_dates(sprint)
                if dates is None:
                    logger.debug("Sprint %d is %s but lacks dates", sprint.id, target.value)
                    continue

                logger.info(
                    "Resolved %s to %s sprint %d (%s -> %s)",
                    issue_key,
                    target.value,
                    sprint.id,
                    dates.start,
                    dates.end,
                )
                return dates

        logger.info("No active or future sprint with dates for issue %s", issue_key)
        return None


class BoardSprintResolver:
    """Resolves dates from the active sprint of the project's first board."""

    def __init__(self, client: TrackerClient) -> None:
        """Initialize the resolver.

        Args:
            client: TrackerClient used for board and sprint reads.
        """
        self.client = client

    def resolve(self, issue_key: str, project_key: str | None = None) -> SprintDates | None:
        """Resolve sprint dates for an issue via its project's board.

        Args:
            issue_key: Issue key.
            project_key: Project key from the webhook payload, if known.
                         Read from the issue when omitted.

        Returns:
            SprintDates of the board's current sprint, or None. Issues that
            belong to no sprint get None.
        """
        issue = self.client.get_issue(
            issue_key, fields=[self.client.settings.sprint_field, "project"]
        )
        if issue is None:
            logger.info("Could not read issue %s; no sprint dates", issue_key)
            return None
        if not issue.sprints:
            logger.info("No sprint assigned to issue %s", issue_key)
            return None

        project_key = project_key or issue.project_key
        if not project_key:
            logger.info("No project known for issue %s", issue_key)
            return None

        board = self.client.find_board(project_key)
        if board is None:
            return None

        active = self.client.list_sprints(board.id, "active")
        if not active:
            logger.info("No active sprint on board %d", board.id)
            return None

        sprint = self.client.get_sprint(active[0].id)
        if sprint is None:
            return None

        dates = sprint_dates(sprint)
        if dates is None:
            logger.info("Sprint %d does not have start/end dates", sprint.id)
            return None

        logger.info("Resolved %s to board %d sprint %d", issue_key, board.id, sprint.id)
        return dates


def create_resolver(
    client: TrackerClient, strategy: ResolutionStrategy | str = ResolutionStrategy.ISSUE
) -> SprintResolver:
    """Build the resolver for a strategy."""
    strategy = ResolutionStrategy(strategy)
    if strategy is ResolutionStrategy.BOARD:
        return BoardSprintResolver(client)
    return IssueSprintResolver(client)
