"""TrackerClient - Reads and writes Jira issues, boards and sprints."""

from __future__ import annotations

import base64
import logging
from typing import TYPE_CHECKING, Any

import httpx

from sprintsync.logging import sanitize_for_log, truncate_output
from sprintsync.tracker.exceptions import (
    TrackerError,
    TrackerRequestError,
    TrackerResponseError,
)
from sprintsync.tracker.models import Board, Issue, Sprint

if TYPE_CHECKING:
    from sprintsync.config import TrackerSettings

logger = logging.getLogger("sprintsync.tracker")

AGILE_API = "/rest/agile/1.0"
ISSUE_API = "/rest/api/3"

# Raised by from_api() on 2xx bodies that are not the expected records
DECODE_ERRORS = (KeyError, TypeError, ValueError, AttributeError)


class TrackerClient:
    """Client for the Jira Cloud REST (v3) and Agile (1.0) APIs.

    Every public method degrades to an absence value (None, empty list, empty
    set or False) when the call fails. Failures are logged, never retried.
    """

    def __init__(self, settings: TrackerSettings) -> None:
        """Initialize Tracker Client.

        Args:
            settings: Tracker connection settings (base URL, credentials,
                      field ids, timeout)
        """
        self.settings = settings
        self.base_url = settings.base_url.rstrip("/")
        self._client: httpx.Client | None = None

    @property
    def auth_header(self) -> str:
        """Authorization header value: Basic for user+token, Bearer for a bare PAT."""
        if self.settings.user:
            raw = f"{self.settings.user}:{self.settings.token}".encode()
            return f"Basic {base64.b64encode(raw).decode('ascii')}"
        return f"Bearer {self.settings.token}"

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for the tracker API."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                headers={
                    "Authorization": self.auth_header,
                    "Accept": "application/json",
                },
                timeout=self.settings.timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Issue one request and decode the JSON body.

        Args:
            method: HTTP method
            path: API path relative to the base URL
            params: Query parameters
            json: JSON request body

        Returns:
            Decoded body, or None for empty (e.g. 204) responses

        Raises:
            TrackerRequestError: On transport failure, timeout or non-2xx status
            TrackerResponseError: If the body is not valid JSON
        """
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = self.client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            raise TrackerRequestError(f"{method} {path} failed: {e}") from e

        if not response.is_success:
            body = sanitize_for_log(truncate_output(response.text))
            raise TrackerRequestError(
                f"{method} {path} returned {response.status_code} - {body}",
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TrackerResponseError(f"{method} {path} returned invalid JSON") from e

    def find_board(self, project_key: str) -> Board | None:
        """Find the first board for a project.

        Args:
            project_key: Jira project key (e.g., "PROJ")

        Returns:
            The first board listed for the project, or None
        """
        try:
            data = self._request(
                "GET", f"{AGILE_API}/board", params={"projectKeyOrId": project_key}
            )
        except TrackerError as e:
            logger.error("Failed to fetch boards for project %s: %s", project_key, e)
            return None

        try:
            values = (data or {}).get("values") or []
            if not values:
                logger.info("No board found for project %s", project_key)
                return None

            # Multi-board projects: the first board listed wins
            board = Board.from_api(values[0])
        except DECODE_ERRORS as e:
            logger.error("Unreadable board list for project %s: %r", project_key, e)
            return None
        logger.debug("Using board %d (%s) for project %s", board.id, board.name, project_key)
        return board

    def list_sprints(self, board_id: int, state: str = "active") -> list[Sprint]:
        """List a board's sprints filtered by state.

        Args:
            board_id: Agile board ID
            state: Comma-separated state filter (e.g., "active", "active,future")

        Returns:
            Matching sprints, empty on failure
        """
        try:
            data = self._request(
                "GET", f"{AGILE_API}/board/{board_id}/sprint", params={"state": state}
            )
        except TrackerError as e:
            logger.error("Failed to list %s sprints for board %s: %s", state, board_id, e)
            return []

        try:
            values = (data or {}).get("values") or []
            sprints = [Sprint.from_api(v, self.settings.start_date_field) for v in values]
        except DECODE_ERRORS as e:
            logger.error("Unreadable sprint list for board %s: %r", board_id, e)
            return []
        logger.info("Found %d %s sprint(s) on board %s", len(sprints), state, board_id)
        return sprints

    def get_sprint(self, sprint_id: int) -> Sprint | None:
        """Get a sprint's full record.

        Args:
            sprint_id: Sprint ID

        Returns:
            The sprint, or None on failure
        """
        try:
            data = self._request("GET", f"{AGILE_API}/sprint/{sprint_id}")
        except TrackerError as e:
            logger.error("Failed to fetch sprint %s: %s", sprint_id, e)
            return None

        if not data:
            return None
        try:
            return Sprint.from_api(data, self.settings.start_date_field)
        except DECODE_ERRORS as e:
            logger.error("Unreadable record for sprint %s: %r", sprint_id, e)
            return None

    def get_issue(self, issue_key: str, fields: list[str] | None = None) -> Issue | None:
        """Read an issue.

        Args:
            issue_key: Issue key (e.g., "PROJ-5")
            fields: Field ids to fetch; all fields when omitted

        Returns:
            The issue, or None on failure
        """
        params = {"fields": ",".join(fields)} if fields else None
        try:
            data = self._request("GET", f"{ISSUE_API}/issue/{issue_key}", params=params)
        except TrackerError as e:
            logger.error("Failed to fetch issue %s: %s", issue_key, e)
            return None

        try:
            if not data or "key" not in data:
                return None
            return Issue.from_api(data, self.settings.sprint_field)
        except DECODE_ERRORS as e:
            logger.error("Unreadable record for issue %s: %r", issue_key, e)
            return None

    def get_editable_fields(self, issue_key: str) -> set[str]:
        """Get the ids of fields that are editable on an issue.

        Args:
            issue_key: Issue key

        Returns:
            Editable field ids; empty (with a warning) if the check fails
        """
        try:
            data = self._request("GET", f"{ISSUE_API}/issue/{issue_key}/editmeta")
        except TrackerError as e:
            logger.warning("Failed to fetch editmeta for %s: %s", issue_key, e)
            return set()

        try:
            return set((data or {}).get("fields") or {})
        except DECODE_ERRORS as e:
            logger.warning("Unreadable editmeta for %s: %r", issue_key, e)
            return set()

    def update_issue_fields(self, issue_key: str, fields: dict[str, Any]) -> bool:
        """Replace named fields on an issue.

        Args:
            issue_key: Issue key
            fields: Field id -> new value

        Returns:
            True if the tracker accepted the update
        """
        logger.info("Updating %s fields: %s", issue_key, fields)
        try:
            self._request("PUT", f"{ISSUE_API}/issue/{issue_key}", json={"fields": fields})
        except TrackerError as e:
            logger.error("Failed to update issue %s: %s", issue_key, e)
            return False
        logger.info("Updated %s", issue_key)
        return True

    def set_assignee(self, issue_key: str, account_id: str) -> bool:
        """Assign an issue to a user.

        Args:
            issue_key: Issue key
            account_id: Atlassian account ID of the assignee

        Returns:
            True if the assignment succeeded
        """
        try:
            self._request(
                "PUT", f"{ISSUE_API}/issue/{issue_key}/assignee", json={"accountId": account_id}
            )
        except TrackerError as e:
            logger.error("Failed to set assignee of %s: %s", issue_key, e)
            return False
        logger.info("Assigned %s to %s", issue_key, account_id)
        return True
