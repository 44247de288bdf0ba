"""Data models for the Notifier."""

from dataclasses import dataclass, field


@dataclass
class Notification:
    """A human-readable summary of what a webhook delivery triggered.

    Attributes:
        issue_key: The issue the webhook was about.
        trigger: What happened on the tracker side (e.g., "Issue PROJ-5 created").
        actions: What this service did in response.
    """

    issue_key: str
    trigger: str
    actions: list[str] = field(default_factory=list)

    @property
    def subject(self) -> str:
        return f"[SprintSync] {self.trigger}"

    def to_text(self) -> str:
        """Render as plain text: the trigger, then one line per action."""
        lines = [f"Trigger: {self.trigger}"]
        if self.actions:
            lines.append("Actions:")
            lines.extend(f"- {action}" for action in self.actions)
        else:
            lines.append("Actions: none")
        return "\n".join(lines)
