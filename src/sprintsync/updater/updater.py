"""FieldUpdater - Applies resolved sprint dates and parent assignees to issues."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sprintsync.updater.models import DateUpdate

if TYPE_CHECKING:
    from sprintsync.resolver import SprintDates
    from sprintsync.tracker import TrackerClient

logger = logging.getLogger("sprintsync.updater")

DUE_DATE_FIELD = "duedate"


class FieldUpdater:
    """Writes issue fields without tripping over per-project schema differences.

    The start-date custom field only exists on some issue types and projects,
    and writing a field that is not on the edit screen fails the whole update.
    The updater therefore asks the tracker which fields are writable before it
    builds the payload.
    """

    def __init__(self, client: TrackerClient, start_date_field: str | None = None) -> None:
        """Initialize the updater.

        Args:
            client: TrackerClient used for reads and writes.
            start_date_field: Custom field id holding the start date. Defaults
                to the client's configured start-date field.
        """
        self.client = client
        self.start_date_field = start_date_field or client.settings.start_date_field

    def writable_fields(self, issue_key: str) -> set[str]:
        """Return the field ids the tracker allows us to edit on this issue."""
        return self.client.get_editable_fields(issue_key)

    def build_date_fields(self, dates: SprintDates, writable: set[str]) -> dict[str, Any]:
        """Build the update payload for a pair of sprint dates.

        The due date is always written. The start-date field is included only
        when it is writable.
        """
        fields: dict[str, Any] = {DUE_DATE_FIELD: dates.end}
        if self.start_date_field in writable:
            fields[self.start_date_field] = dates.start
        else:
            logger.debug("%s not editable; writing due date only", self.start_date_field)
        return fields

    def apply_dates(self, issue_key: str, dates: SprintDates) -> DateUpdate:
        """Write sprint dates onto an issue with a single update call.

        Args:
            issue_key: Issue key.
            dates: Resolved sprint dates.

        Returns:
            DateUpdate describing the payload and whether it was accepted.
        """
        logger.info(
            "Setting %s dates to sprint: start=%s due=%s", issue_key, dates.start, dates.end
        )
        writable = self.writable_fields(issue_key)
        fields = self.build_date_fields(dates, writable)
        success = self.client.update_issue_fields(issue_key, fields)
        return DateUpdate(issue_key=issue_key, fields=fields, success=success)

    def copy_parent_assignee(self, subtask_key: str, parent_key: str) -> str | None:
        """Give a subtask the same assignee as its parent.

        Args:
            subtask_key: Key of the subtask to assign.
            parent_key: Key of the parent issue.

        Returns:
            The copied account id, or None if nothing was assigned.
        """
        parent = self.client.get_issue(parent_key, fields=["assignee"])
        if parent is None:
            logger.warning("Could not read parent %s of %s", parent_key, subtask_key)
            return None
        if not parent.assignee_account_id:
            logger.info("Parent %s has no assignee to copy", parent_key)
            return None

        if not self.client.set_assignee(subtask_key, parent.assignee_account_id):
            return None

        logger.info("Set assignee of subtask %s to match parent %s", subtask_key, parent_key)
        return parent.assignee_account_id
