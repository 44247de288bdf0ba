"""Data models for the Field Updater."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class DateUpdate:
    """Outcome of writing sprint dates to an issue.

    Attributes:
        issue_key: The issue that was written.
        fields: The field payload that was sent.
        success: Whether the tracker accepted the write.
    """

    issue_key: str
    fields: dict[str, Any] = field(default_factory=dict)
    success: bool = False
