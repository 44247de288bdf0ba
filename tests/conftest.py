"""Shared pytest fixtures and configuration."""

from typing import Any
from unittest.mock import MagicMock

import pytest

from sprintsync.config import NotifierSettings, Settings, TrackerSettings


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: calls a live Jira site (local only)")


def mock_response(status_code: int = 200, data: Any = None, text: str = "") -> MagicMock:
    """Create a mock httpx response."""
    response = MagicMock()
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    response.content = b"" if data is None else b"{}"
    response.json.return_value = data
    response.text = text
    return response


def sprint_payload(
    sprint_id: int,
    state: str,
    start: str | None = "2024-01-01T09:00:00.000Z",
    end: str | None = "2024-01-14T17:00:00.000Z",
) -> dict[str, Any]:
    """Build an Agile API sprint record."""
    data: dict[str, Any] = {"id": sprint_id, "name": f"Sprint {sprint_id}", "state": state}
    if start is not None:
        data["startDate"] = start
    if end is not None:
        data["endDate"] = end
    return data


def issue_payload(key: str = "PROJ-5", sprints: list[Any] | None = None, **fields: Any) -> dict:
    """Build a REST API issue record with the default sprint field."""
    body: dict[str, Any] = dict(fields)
    if sprints is not None:
        body["customfield_10020"] = sprints
    return {"id": "10005", "key": key, "fields": body}


@pytest.fixture
def tracker_settings() -> TrackerSettings:
    """Tracker settings pointing at a fake Jira site."""
    return TrackerSettings(
        base_url="https://example.atlassian.net",
        user="bot@example.com",
        token="test-token",
    )


@pytest.fixture
def settings(tracker_settings: TrackerSettings) -> Settings:
    """Full settings with no notification channels."""
    return Settings(tracker=tracker_settings, notifier=NotifierSettings())
