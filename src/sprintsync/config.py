"""Configuration loading for SprintSync.

Settings come from an optional YAML file, then environment variables override
individual values. The resulting ``Settings`` object is built once at startup
and handed to the components that need it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

VALID_STRATEGIES = ("issue", "board")

DEFAULT_SPRINT_FIELD = "customfield_10020"
DEFAULT_START_DATE_FIELD = "customfield_10015"
DEFAULT_EMAIL_API_URL = "https://api.sendgrid.com/v3/mail/send"


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class TrackerSettings:
    """Connection and field settings for the issue tracker."""

    base_url: str
    token: str
    user: str | None = None
    sprint_field: str = DEFAULT_SPRINT_FIELD
    start_date_field: str = DEFAULT_START_DATE_FIELD
    strategy: str = "issue"
    timeout: float = 10.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TrackerSettings:
        """Create tracker settings from a mapping.

        Raises:
            ConfigError: If required values are missing or invalid.
        """
        missing = [key for key in ("base_url", "token") if not data.get(key)]
        if missing:
            raise ConfigError(f"Missing required tracker settings: {', '.join(missing)}")

        strategy = str(data.get("strategy") or "issue").lower()
        if strategy not in VALID_STRATEGIES:
            raise ConfigError(
                f"Unknown resolution strategy '{strategy}'. "
                f"Valid: {', '.join(VALID_STRATEGIES)}"
            )

        try:
            timeout = float(data.get("timeout") or 10.0)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid tracker timeout: {data.get('timeout')!r}") from e
        if timeout <= 0:
            raise ConfigError("Tracker timeout must be positive")

        return cls(
            base_url=str(data["base_url"]).rstrip("/"),
            token=str(data["token"]),
            user=data.get("user") or None,
            sprint_field=data.get("sprint_field") or DEFAULT_SPRINT_FIELD,
            start_date_field=data.get("start_date_field") or DEFAULT_START_DATE_FIELD,
            strategy=strategy,
            timeout=timeout,
        )


@dataclass
class NotifierSettings:
    """Notification channel settings. Every channel is optional."""

    email_recipients: list[str] = field(default_factory=list)
    email_sender: str | None = None
    email_api_url: str = DEFAULT_EMAIL_API_URL
    email_api_key: str | None = None
    chat_webhook_url: str | None = None

    @property
    def email_enabled(self) -> bool:
        return bool(self.email_recipients and self.email_sender)

    @property
    def chat_enabled(self) -> bool:
        return bool(self.chat_webhook_url)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NotifierSettings:
        """Create notifier settings from a mapping."""
        recipients = data.get("email_recipients") or []
        if isinstance(recipients, str):
            recipients = _split_list(recipients)

        return cls(
            email_recipients=[str(r) for r in recipients],
            email_sender=data.get("email_sender") or None,
            email_api_url=data.get("email_api_url") or DEFAULT_EMAIL_API_URL,
            email_api_key=data.get("email_api_key") or None,
            chat_webhook_url=data.get("chat_webhook_url") or None,
        )


@dataclass
class ServerSettings:
    """Listening address and logging for the webhook server."""

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8080
    log_level: str = "INFO"
    log_dir: str = "logs"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ServerSettings:
        """Create server settings from a mapping.

        Raises:
            ConfigError: If the port is not an integer.
        """
        try:
            port = int(data.get("port") or 8080)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid port: {data.get('port')!r}") from e

        return cls(
            host=data.get("host") or "0.0.0.0",  # noqa: S104
            port=port,
            log_level=str(data.get("log_level") or "INFO").upper(),
            log_dir=data.get("log_dir") or "logs",
        )


@dataclass
class Settings:
    """Top-level SprintSync configuration."""

    tracker: TrackerSettings
    notifier: NotifierSettings = field(default_factory=NotifierSettings)
    server: ServerSettings = field(default_factory=ServerSettings)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create settings from a nested mapping with tracker/notifier/server sections.

        Raises:
            ConfigError: If the tracker section is missing or invalid.
        """
        if not isinstance(data.get("tracker"), dict):
            raise ConfigError("Missing required 'tracker' section")

        return cls(
            tracker=TrackerSettings.from_dict(data["tracker"]),
            notifier=NotifierSettings.from_dict(data.get("notifier") or {}),
            server=ServerSettings.from_dict(data.get("server") or {}),
        )


# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "JIRA_BASE_URL": ("tracker", "base_url"),
    "JIRA_USER_ID": ("tracker", "user"),
    "JIRA_ACCESS_TOKEN": ("tracker", "token"),
    "JIRA_SPRINT_FIELD": ("tracker", "sprint_field"),
    "JIRA_START_DATE_FIELD": ("tracker", "start_date_field"),
    "SPRINTSYNC_STRATEGY": ("tracker", "strategy"),
    "SPRINTSYNC_TIMEOUT": ("tracker", "timeout"),
    "NOTIFY_EMAIL_RECIPIENTS": ("notifier", "email_recipients"),
    "NOTIFY_EMAIL_SENDER": ("notifier", "email_sender"),
    "NOTIFY_EMAIL_API_URL": ("notifier", "email_api_url"),
    "NOTIFY_EMAIL_API_KEY": ("notifier", "email_api_key"),
    "NOTIFY_CHAT_WEBHOOK_URL": ("notifier", "chat_webhook_url"),
    "SPRINTSYNC_HOST": ("server", "host"),
    "PORT": ("server", "port"),
    "SPRINTSYNC_LOG_LEVEL": ("server", "log_level"),
    "SPRINTSYNC_LOG_DIR": ("server", "log_dir"),
}


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _read_yaml(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")
    return data


def load_settings(
    config_path: Path | str | None = None,
    environ: dict[str, str] | None = None,
) -> Settings:
    """Load settings from an optional YAML file plus environment overrides.

    Args:
        config_path: Path to a YAML config file. Falls back to the
                     SPRINTSYNC_CONFIG environment variable; may be omitted.
        environ: Environment mapping (defaults to os.environ).

    Returns:
        Parsed settings.

    Raises:
        ConfigError: If the file is unreadable or required values are missing.
    """
    env = os.environ if environ is None else environ

    if config_path is None:
        config_path = env.get("SPRINTSYNC_CONFIG") or None

    data: dict[str, Any] = {}
    if config_path is not None:
        data = _read_yaml(Path(config_path))

    sections: dict[str, dict[str, Any]] = {
        name: dict(data.get(name) or {}) for name in ("tracker", "notifier", "server")
    }
    for var, (section, key) in ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            sections[section][key] = value

    return Settings.from_dict(sections)
