"""Integration tests for TrackerClient against a live Jira site.

These tests require:
- JIRA_BASE_URL environment variable (e.g., "https://yoursite.atlassian.net")
- JIRA_ACCESS_TOKEN environment variable (API token)
- JIRA_TEST_ISSUE environment variable (key of an issue in a scrum project)
- JIRA_USER_ID environment variable for Cloud API tokens (optional for PATs)

The tests only read; nothing is written to the site.

Run with: pytest tests/integration/tracker/ -m real
"""

import os

import pytest

from sprintsync.config import TrackerSettings
from sprintsync.resolver import BoardSprintResolver, IssueSprintResolver
from sprintsync.tracker import TrackerClient

# Skip all tests in this module if credentials not available
pytestmark = [
    pytest.mark.integration,
    pytest.mark.real,
    pytest.mark.skipif(
        not os.environ.get("JIRA_BASE_URL")
        or not os.environ.get("JIRA_ACCESS_TOKEN")
        or not os.environ.get("JIRA_TEST_ISSUE"),
        reason="JIRA_BASE_URL, JIRA_ACCESS_TOKEN, and JIRA_TEST_ISSUE required",
    ),
]


@pytest.fixture
def issue_key() -> str:
    """Get the test issue key from environment."""
    return os.environ["JIRA_TEST_ISSUE"]


@pytest.fixture
def client() -> TrackerClient:
    """Create a TrackerClient for the live site."""
    client = TrackerClient(
        TrackerSettings.from_dict(
            {
                "base_url": os.environ["JIRA_BASE_URL"],
                "token": os.environ["JIRA_ACCESS_TOKEN"],
                "user": os.environ.get("JIRA_USER_ID"),
                "sprint_field": os.environ.get("JIRA_SPRINT_FIELD"),
                "start_date_field": os.environ.get("JIRA_START_DATE_FIELD"),
            }
        )
    )
    yield client
    client.close()


class TestLiveReads:
    """Read-only calls against the live site."""

    def test_get_issue(self, client: TrackerClient, issue_key: str) -> None:
        issue = client.get_issue(issue_key)

        assert issue is not None
        assert issue.key == issue_key
        assert issue.project_key

    def test_missing_issue_returns_none(self, client: TrackerClient, issue_key: str) -> None:
        project = issue_key.split("-", 1)[0]

        assert client.get_issue(f"{project}-999999999") is None

    def test_editmeta_includes_duedate(self, client: TrackerClient, issue_key: str) -> None:
        assert "duedate" in client.get_editable_fields(issue_key)

    def test_board_for_project(self, client: TrackerClient, issue_key: str) -> None:
        board = client.find_board(issue_key.split("-", 1)[0])

        assert board is not None
        assert board.id > 0


class TestLiveResolution:
    """Both strategies produce calendar dates when a sprint is found."""

    @pytest.mark.parametrize("resolver_class", [IssueSprintResolver, BoardSprintResolver])
    def test_resolve(self, client: TrackerClient, issue_key: str, resolver_class: type) -> None:
        dates = resolver_class(client).resolve(issue_key)

        if dates is None:
            pytest.skip("Test issue has no active or future sprint with dates")
        assert len(dates.start) == 10
        assert len(dates.end) == 10
