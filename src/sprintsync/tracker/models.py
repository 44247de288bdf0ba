"""Data models for the Tracker Client."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Jira Server renders sprint-field entries as strings like
# "com.atlassian.greenhopper.service.sprint.Sprint@1f2e[id=7,rapidViewId=3,state=ACTIVE,name=S1,...]"
_LEGACY_SPRINT_ATTR = re.compile(r"(\w+)=([^,\]]*)")


class SprintState(str, Enum):
    """Sprint lifecycle state."""

    ACTIVE = "active"
    FUTURE = "future"
    CLOSED = "closed"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Any) -> SprintState:
        """Map a tracker state string onto a SprintState, case-insensitively."""
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.OTHER


@dataclass
class Board:
    """An agile board over a project's issues."""

    id: int
    name: str = ""
    project_key: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Board:
        location = data.get("location") or {}
        return cls(
            id=int(data["id"]),
            name=data.get("name") or "",
            project_key=location.get("projectKey"),
        )


@dataclass
class Sprint:
    """A sprint record as returned by the Agile API.

    Attributes:
        id: Sprint ID.
        state: Lifecycle state.
        start_date: Canonical start date, or the configured start-date custom
            field when the canonical one is empty.
        end_date: Canonical end date, or the generic due date when empty.
        name: Display name.
    """

    id: int
    state: SprintState
    start_date: str | None = None
    end_date: str | None = None
    name: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any], start_date_field: str | None = None) -> Sprint:
        start_date = data.get("startDate")
        if not start_date and start_date_field:
            start_date = data.get(start_date_field)
        end_date = data.get("endDate") or data.get("duedate")

        return cls(
            id=int(data["id"]),
            state=SprintState.parse(data.get("state")),
            start_date=start_date or None,
            end_date=end_date or None,
            name=data.get("name") or "",
        )


@dataclass
class SprintRef:
    """A sprint reference from an issue's sprint-membership field."""

    id: int | None
    state: SprintState = SprintState.OTHER
    name: str = ""

    @classmethod
    def from_field(cls, value: Any) -> SprintRef:
        """Decode one entry of the sprint field (object, bare id, or legacy string)."""
        if isinstance(value, dict):
            return cls(
                id=_to_int(value.get("id")),
                state=SprintState.parse(value.get("state")),
                name=value.get("name") or "",
            )
        if isinstance(value, str) and "[" in value:
            attrs = dict(_LEGACY_SPRINT_ATTR.findall(value.split("[", 1)[1]))
            return cls(
                id=_to_int(attrs.get("id")),
                state=SprintState.parse(attrs.get("state")),
                name=attrs.get("name", ""),
            )
        return cls(id=_to_int(value))


@dataclass
class Issue:
    """The subset of a Jira issue this service reads."""

    key: str
    project_key: str | None = None
    is_subtask: bool = False
    parent_key: str | None = None
    assignee_account_id: str | None = None
    due_date: str | None = None
    sprints: list[SprintRef] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any], sprint_field: str | None = None) -> Issue:
        fields = data.get("fields") or {}
        project = fields.get("project") or {}
        issuetype = fields.get("issuetype") or {}
        parent = fields.get("parent") or {}
        assignee = fields.get("assignee") or {}

        raw_sprints = fields.get(sprint_field) if sprint_field else None
        if raw_sprints is None:
            raw_sprints = []
        elif not isinstance(raw_sprints, list):
            raw_sprints = [raw_sprints]

        return cls(
            key=data["key"],
            project_key=project.get("key"),
            is_subtask=bool(issuetype.get("subtask")),
            parent_key=parent.get("key"),
            assignee_account_id=assignee.get("accountId"),
            due_date=fields.get("duedate"),
            sprints=[SprintRef.from_field(s) for s in raw_sprints],
        )


def _to_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
