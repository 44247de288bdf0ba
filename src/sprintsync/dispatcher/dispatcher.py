"""WebhookDispatcher - Routes tracker webhook events to the sync steps."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sprintsync.dispatcher.models import DispatchResult, EventType, WebhookEvent

if TYPE_CHECKING:
    from sprintsync.resolver import SprintResolver
    from sprintsync.updater import FieldUpdater

logger = logging.getLogger("sprintsync.dispatcher")


class WebhookDispatcher:
    """Runs the follow-up calls for one webhook delivery.

    - issue created: copy the parent's assignee onto a new subtask, then set
      the issue's dates from its sprint
    - issue updated: when the Sprint field changed, set the dates again
    - anything else: acknowledged without action
    """

    def __init__(self, resolver: SprintResolver, updater: FieldUpdater) -> None:
        """Initialize the dispatcher.

        Args:
            resolver: Strategy that picks the sprint dates for an issue.
            updater: FieldUpdater that writes dates and assignees.
        """
        self.resolver = resolver
        self.updater = updater

    def dispatch(self, event: WebhookEvent) -> DispatchResult:
        """Handle one webhook delivery.

        Args:
            event: The parsed webhook payload.

        Returns:
            DispatchResult describing what was done.
        """
        result = DispatchResult(event=event.webhook_event, issue_key=event.issue_key)
        event_type = event.event_type

        if event_type is None:
            logger.info("Ignoring webhook event %s", event.webhook_event)
            return result
        if not event.issue_key:
            logger.warning("Webhook event %s carried no issue key", event.webhook_event)
            return result

        if event_type is EventType.ISSUE_CREATED:
            self._handle_created(event, result)
        elif event_type is EventType.ISSUE_UPDATED:
            self._handle_updated(event, result)

        return result

    def _handle_created(self, event: WebhookEvent, result: DispatchResult) -> None:
        issue_key = event.issue_key or ""
        logger.info("Issue %s created", issue_key)
        result.handled = True
        result.trigger = f"Issue {issue_key} created"

        parent_key = event.parent_key
        if parent_key:
            copied = self.updater.copy_parent_assignee(issue_key, parent_key)
            if copied:
                result.assignee_copied = copied
                result.actions.append(f"Copied assignee from parent {parent_key}")
            else:
                result.actions.append(f"No assignee copied from parent {parent_key}")

        self._sync_dates(issue_key, event.project_key, result)

    def _handle_updated(self, event: WebhookEvent, result: DispatchResult) -> None:
        issue_key = event.issue_key or ""
        change = event.sprint_change()
        if change is None:
            logger.debug("Issue %s updated without a sprint change", issue_key)
            return

        # The changelog target is only logged; dates come from a fresh resolution
        logger.info("Sprint change on %s (to=%s); resolving dates", issue_key, change.to)
        result.handled = True
        result.trigger = f"Sprint changed on {issue_key}"
        self._sync_dates(issue_key, event.project_key, result)

    def _sync_dates(
        self, issue_key: str, project_key: str | None, result: DispatchResult
    ) -> None:
        dates = self.resolver.resolve(issue_key, project_key)
        if dates is None:
            logger.info("No sprint dates to apply to %s", issue_key)
            result.actions.append("No sprint dates found")
            return

        result.dates = dates
        update = self.updater.apply_dates(issue_key, dates)
        result.dates_written = update.success
        if not update.success:
            result.actions.append(f"Failed to set due date to {dates.end}")
            return

        if self.updater.start_date_field in update.fields:
            result.actions.append(f"Set start date to {dates.start} and due date to {dates.end}")
        else:
            result.actions.append(f"Set due date to {dates.end}")
