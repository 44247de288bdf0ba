"""Data models for the Webhook Dispatcher.

The webhook payload models are deliberately permissive: Jira sends far more
than we read, and absent parts simply mean "nothing to do".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sprintsync.notifier import Notification
from sprintsync.resolver import SprintDates

SPRINT_FIELD_NAME = "Sprint"


class EventType(str, Enum):
    """Webhook events this service acts on."""

    ISSUE_CREATED = "issue_created"
    ISSUE_UPDATED = "issue_updated"

    @classmethod
    def parse(cls, value: str | None) -> EventType | None:
        """Map a webhookEvent value ("jira:issue_created" or "issue_created")."""
        if not value:
            return None
        name = value.split(":", 1)[1] if value.startswith("jira:") else value
        try:
            return cls(name)
        except ValueError:
            return None


class _PayloadModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ProjectRef(_PayloadModel):
    key: str | None = None


class IssueTypeRef(_PayloadModel):
    name: str | None = None
    subtask: bool = False


class ParentRef(_PayloadModel):
    key: str | None = None


class UserRef(_PayloadModel):
    account_id: str | None = Field(default=None, alias="accountId")
    display_name: str | None = Field(default=None, alias="displayName")


class WebhookIssueFields(_PayloadModel):
    summary: str | None = None
    project: ProjectRef | None = None
    issuetype: IssueTypeRef | None = None
    parent: ParentRef | None = None
    assignee: UserRef | None = None


class WebhookIssue(_PayloadModel):
    id: Any = None
    key: str | None = None
    fields: WebhookIssueFields = Field(default_factory=WebhookIssueFields)


class ChangelogItem(_PayloadModel):
    field_name: str | None = Field(default=None, alias="field")
    from_value: Any = Field(default=None, alias="from")
    from_string: Any = Field(default=None, alias="fromString")
    to: Any = None
    to_string: Any = Field(default=None, alias="toString")


class Changelog(_PayloadModel):
    id: Any = None
    items: list[ChangelogItem] = Field(default_factory=list)


class WebhookEvent(_PayloadModel):
    """An inbound tracker webhook delivery."""

    webhook_event: str | None = Field(default=None, alias="webhookEvent")
    timestamp: int | None = None
    issue: WebhookIssue | None = None
    changelog: Changelog | None = None

    @property
    def event_type(self) -> EventType | None:
        return EventType.parse(self.webhook_event)

    @property
    def issue_key(self) -> str | None:
        return self.issue.key if self.issue else None

    @property
    def project_key(self) -> str | None:
        if self.issue and self.issue.fields.project:
            return self.issue.fields.project.key
        return None

    @property
    def parent_key(self) -> str | None:
        """Parent key when the issue is a subtask with a parent reference."""
        if not self.issue:
            return None
        fields = self.issue.fields
        if fields.issuetype and fields.issuetype.subtask and fields.parent:
            return fields.parent.key
        return None

    def sprint_change(self) -> ChangelogItem | None:
        """The changelog entry for the Sprint field, if any."""
        if not self.changelog:
            return None
        for item in self.changelog.items:
            if item.field_name == SPRINT_FIELD_NAME:
                return item
        return None


@dataclass
class DispatchResult:
    """What handling one webhook delivery did.

    Attributes:
        event: The raw webhookEvent value.
        issue_key: The issue the delivery was about.
        handled: Whether the event type and contents called for any action.
        trigger: Human-readable description of the tracker-side event.
        actions: Human-readable descriptions of the steps taken.
        dates: Sprint dates resolved for the issue, if any.
        dates_written: Whether the date update was accepted.
        assignee_copied: Account id copied from the parent, if any.
    """

    event: str | None
    issue_key: str | None = None
    handled: bool = False
    trigger: str = ""
    actions: list[str] = field(default_factory=list)
    dates: SprintDates | None = None
    dates_written: bool = False
    assignee_copied: str | None = None

    def to_notification(self) -> Notification | None:
        """Summary to send out, or None when nothing was handled."""
        if not self.handled or not self.issue_key:
            return None
        return Notification(
            issue_key=self.issue_key, trigger=self.trigger, actions=list(self.actions)
        )
