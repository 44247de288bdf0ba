"""Unit tests for the Notifier and its channels."""

from unittest.mock import MagicMock

import httpx
import pytest
from conftest import mock_response

from sprintsync.config import NotifierSettings
from sprintsync.notifier import (
    ChatWebhookChannel,
    DeliveryError,
    EmailChannel,
    Notification,
    Notifier,
)


@pytest.fixture
def notification() -> Notification:
    return Notification(
        issue_key="PROJ-5",
        trigger="Issue PROJ-5 created",
        actions=["Set due date to 2024-01-14"],
    )


@pytest.mark.unit
class TestNotification:
    """Tests for Notification formatting."""

    def test_subject(self, notification: Notification) -> None:
        assert notification.subject == "[SprintSync] Issue PROJ-5 created"

    def test_text_lists_actions(self, notification: Notification) -> None:
        text = notification.to_text()

        assert "Trigger: Issue PROJ-5 created" in text
        assert "- Set due date to 2024-01-14" in text

    def test_text_without_actions(self) -> None:
        text = Notification(issue_key="PROJ-5", trigger="t").to_text()

        assert "Actions: none" in text


@pytest.mark.unit
class TestEmailChannel:
    """Tests for EmailChannel."""

    def test_payload_shape(self, notification: Notification) -> None:
        channel = EmailChannel(
            api_url="https://mail.example.com/send",
            sender="bot@example.com",
            recipients=["a@example.com", "b@example.com"],
        )

        payload = channel.build_payload(notification)

        assert payload["personalizations"] == [
            {"to": [{"email": "a@example.com"}, {"email": "b@example.com"}]}
        ]
        assert payload["from"] == {"email": "bot@example.com"}
        assert payload["subject"] == "[SprintSync] Issue PROJ-5 created"
        assert "PROJ-5" in payload["content"][0]["value"]

    def test_send_posts_to_api(self, notification: Notification) -> None:
        channel = EmailChannel(
            api_url="https://mail.example.com/send",
            sender="bot@example.com",
            recipients=["a@example.com"],
            api_key="key",
        )
        channel._client = MagicMock()
        channel._client.post.return_value = mock_response(202)

        channel.send(notification)

        url = channel._client.post.call_args.args[0]
        assert url == "https://mail.example.com/send"

    def test_api_key_sent_as_bearer(self) -> None:
        channel = EmailChannel(
            api_url="https://mail.example.com/send",
            sender="bot@example.com",
            recipients=["a@example.com"],
            api_key="key",
        )

        assert channel._headers()["Authorization"] == "Bearer key"

    def test_rejected_send_raises_delivery_error(self, notification: Notification) -> None:
        channel = EmailChannel(
            api_url="https://mail.example.com/send",
            sender="bot@example.com",
            recipients=["a@example.com"],
        )
        channel._client = MagicMock()
        channel._client.post.return_value = mock_response(401, text="unauthorized")

        with pytest.raises(DeliveryError) as exc_info:
            channel.send(notification)

        assert "401" in str(exc_info.value)


@pytest.mark.unit
class TestChatWebhookChannel:
    """Tests for ChatWebhookChannel."""

    def test_payload_has_text_and_fields(self, notification: Notification) -> None:
        channel = ChatWebhookChannel("https://hooks.example.com/abc")

        payload = channel.build_payload(notification)

        assert payload["text"] == "[SprintSync] Issue PROJ-5 created"
        fields = payload["attachments"][0]["fields"]
        assert {"title": "Issue", "value": "PROJ-5", "short": True} in fields
        assert fields[-1]["value"] == "Set due date to 2024-01-14"

    def test_transport_error_raises_delivery_error(self, notification: Notification) -> None:
        channel = ChatWebhookChannel("https://hooks.example.com/abc")
        channel._client = MagicMock()
        channel._client.post.side_effect = httpx.ConnectError("refused")

        with pytest.raises(DeliveryError):
            channel.send(notification)


@pytest.mark.unit
class TestNotifier:
    """Tests for Notifier fan-out."""

    def test_from_settings_without_channels(self) -> None:
        assert Notifier.from_settings(NotifierSettings()).channels == []

    def test_from_settings_enables_configured_channels(self) -> None:
        settings = NotifierSettings(
            email_recipients=["a@example.com"],
            email_sender="bot@example.com",
            chat_webhook_url="https://hooks.example.com/abc",
        )

        notifier = Notifier.from_settings(settings)

        assert [c.name for c in notifier.channels] == ["email", "chat"]

    def test_email_needs_sender_and_recipients(self) -> None:
        settings = NotifierSettings(email_recipients=["a@example.com"])

        assert Notifier.from_settings(settings).channels == []

    def test_failure_isolated_per_channel(self, notification: Notification) -> None:
        """One failing channel does not stop the others and is not raised."""
        failing = MagicMock()
        failing.name = "email"
        failing.send.side_effect = DeliveryError("down")
        working = MagicMock()
        working.name = "chat"

        delivered = Notifier([failing, working]).notify(notification)

        assert delivered == ["chat"]
        working.send.assert_called_once_with(notification)

    def test_close_closes_channels(self) -> None:
        channel = MagicMock()

        Notifier([channel]).close()

        channel.close.assert_called_once()
