"""Webhook Dispatcher - Routes tracker events to the sync steps."""

from sprintsync.dispatcher.dispatcher import WebhookDispatcher
from sprintsync.dispatcher.models import (
    Changelog,
    ChangelogItem,
    DispatchResult,
    EventType,
    WebhookEvent,
    WebhookIssue,
    WebhookIssueFields,
)

__all__ = [
    "Changelog",
    "ChangelogItem",
    "DispatchResult",
    "EventType",
    "WebhookDispatcher",
    "WebhookEvent",
    "WebhookIssue",
    "WebhookIssueFields",
]
