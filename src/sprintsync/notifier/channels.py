"""Delivery channels for notifications."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from sprintsync.logging import sanitize_for_log, truncate_output
from sprintsync.notifier.exceptions import DeliveryError

if TYPE_CHECKING:
    from sprintsync.notifier.models import Notification

logger = logging.getLogger("sprintsync.notifier")


class NotificationChannel(Protocol):
    """Interface for a delivery channel."""

    name: str

    def send(self, notification: Notification) -> None:
        """Deliver a notification. Raises DeliveryError on failure."""
        ...

    def close(self) -> None:
        """Release any held connections."""
        ...


class _HTTPChannel:
    """Shared HTTP plumbing for webhook-style channels."""

    name = "http"

    def __init__(self, timeout: float = 10.0) -> None:
        self.timeout = timeout
        self._client: httpx.Client | None = None

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    @property
    def client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(headers=self._headers(), timeout=self.timeout)
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _post(self, url: str, payload: dict[str, Any]) -> None:
        try:
            response = self.client.post(url, json=payload)
        except httpx.HTTPError as e:
            raise DeliveryError(f"{self.name} delivery failed: {e}") from e
        if not response.is_success:
            body = sanitize_for_log(truncate_output(response.text, 500))
            raise DeliveryError(
                f"{self.name} delivery failed: {response.status_code} - {body}"
            )


class EmailChannel(_HTTPChannel):
    """Sends notifications through an email API (SendGrid v3 mail/send shape)."""

    name = "email"

    def __init__(
        self,
        api_url: str,
        sender: str,
        recipients: list[str],
        api_key: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the email channel.

        Args:
            api_url: Mail-send endpoint
            sender: From address
            recipients: To addresses
            api_key: Bearer key for the email API
            timeout: Request timeout in seconds
        """
        super().__init__(timeout=timeout)
        self.api_url = api_url
        self.sender = sender
        self.recipients = list(recipients)
        self.api_key = api_key

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def build_payload(self, notification: Notification) -> dict[str, Any]:
        return {
            "personalizations": [{"to": [{"email": r} for r in self.recipients]}],
            "from": {"email": self.sender},
            "subject": notification.subject,
            "content": [{"type": "text/plain", "value": notification.to_text()}],
        }

    def send(self, notification: Notification) -> None:
        self._post(self.api_url, self.build_payload(notification))
        logger.info(
            "Emailed summary for %s to %d recipient(s)",
            notification.issue_key,
            len(self.recipients),
        )


class ChatWebhookChannel(_HTTPChannel):
    """Posts notifications to a chat incoming webhook (Slack-compatible)."""

    name = "chat"

    def __init__(self, webhook_url: str, timeout: float = 10.0) -> None:
        """Initialize the chat channel.

        Args:
            webhook_url: Incoming webhook URL
            timeout: Request timeout in seconds
        """
        super().__init__(timeout=timeout)
        self.webhook_url = webhook_url

    def build_payload(self, notification: Notification) -> dict[str, Any]:
        fields = [
            {"title": "Issue", "value": notification.issue_key, "short": True},
            {"title": "Trigger", "value": notification.trigger, "short": True},
        ]
        fields.extend(
            {"title": f"Action {i}", "value": action, "short": False}
            for i, action in enumerate(notification.actions, start=1)
        )
        return {
            "text": notification.subject,
            "attachments": [{"fallback": notification.to_text(), "fields": fields}],
        }

    def send(self, notification: Notification) -> None:
        self._post(self.webhook_url, self.build_payload(notification))
        logger.info("Posted chat summary for %s", notification.issue_key)
