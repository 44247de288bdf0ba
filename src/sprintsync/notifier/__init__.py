"""Notifier - Best-effort email and chat summaries of webhook handling."""

from sprintsync.notifier.channels import ChatWebhookChannel, EmailChannel, NotificationChannel
from sprintsync.notifier.exceptions import DeliveryError, NotificationError
from sprintsync.notifier.models import Notification
from sprintsync.notifier.notifier import Notifier

__all__ = [
    "ChatWebhookChannel",
    "DeliveryError",
    "EmailChannel",
    "Notification",
    "NotificationChannel",
    "NotificationError",
    "Notifier",
]
