"""Notifier - Fans a notification out to every configured channel."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sprintsync.notifier.channels import ChatWebhookChannel, EmailChannel, NotificationChannel
from sprintsync.notifier.exceptions import NotificationError

if TYPE_CHECKING:
    from sprintsync.config import NotifierSettings
    from sprintsync.notifier.models import Notification

logger = logging.getLogger("sprintsync.notifier")


class Notifier:
    """Best-effort delivery of webhook summaries.

    A failing channel is logged and skipped; it never affects the other
    channels, the tracker writes, or the webhook response.
    """

    def __init__(self, channels: list[NotificationChannel] | None = None) -> None:
        self.channels: list[NotificationChannel] = list(channels or [])

    @classmethod
    def from_settings(cls, settings: NotifierSettings, timeout: float = 10.0) -> Notifier:
        """Build a notifier with the channels the settings enable."""
        channels: list[NotificationChannel] = []
        if settings.email_enabled:
            channels.append(
                EmailChannel(
                    api_url=settings.email_api_url,
                    sender=settings.email_sender or "",
                    recipients=settings.email_recipients,
                    api_key=settings.email_api_key,
                    timeout=timeout,
                )
            )
        if settings.chat_enabled:
            channels.append(
                ChatWebhookChannel(webhook_url=settings.chat_webhook_url or "", timeout=timeout)
            )
        logger.info(
            "Notifier channels: %s", ", ".join(c.name for c in channels) or "none configured"
        )
        return cls(channels)

    def notify(self, notification: Notification) -> list[str]:
        """Send a notification on every channel.

        Args:
            notification: The summary to deliver.

        Returns:
            Names of the channels that delivered successfully.
        """
        delivered = []
        for channel in self.channels:
            try:
                channel.send(notification)
            except NotificationError as e:
                logger.error("Notification for %s not sent: %s", notification.issue_key, e)
                continue
            delivered.append(channel.name)
        return delivered

    def close(self) -> None:
        """Close every channel's HTTP client."""
        for channel in self.channels:
            channel.close()
