"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends

from sprintsync.dispatcher import WebhookDispatcher
from sprintsync.notifier import Notifier
from sprintsync.resolver import create_resolver
from sprintsync.tracker import TrackerClient
from sprintsync.updater import FieldUpdater

if TYPE_CHECKING:
    from sprintsync.config import Settings

# Global instances (initialized on app startup)
_tracker_client: TrackerClient | None = None
_dispatcher: WebhookDispatcher | None = None
_notifier: Notifier | None = None


def init_services(settings: Settings) -> WebhookDispatcher:
    """Build the tracker client, dispatcher and notifier from settings."""
    global _tracker_client, _dispatcher, _notifier  # noqa: PLW0603
    _tracker_client = TrackerClient(settings.tracker)
    resolver = create_resolver(_tracker_client, settings.tracker.strategy)
    updater = FieldUpdater(_tracker_client, settings.tracker.start_date_field)
    _dispatcher = WebhookDispatcher(resolver=resolver, updater=updater)
    _notifier = Notifier.from_settings(settings.notifier, timeout=settings.tracker.timeout)
    return _dispatcher


def close_services() -> None:
    """Close HTTP clients and drop the global instances."""
    global _tracker_client, _dispatcher, _notifier  # noqa: PLW0603
    if _tracker_client is not None:
        _tracker_client.close()
    if _notifier is not None:
        _notifier.close()
    _tracker_client = None
    _dispatcher = None
    _notifier = None


def get_dispatcher() -> Generator[WebhookDispatcher, None, None]:
    """Dependency that provides the WebhookDispatcher instance."""
    if _dispatcher is None:
        raise RuntimeError("Dispatcher not initialized. Call init_services() first.")
    yield _dispatcher


def get_notifier() -> Generator[Notifier, None, None]:
    """Dependency that provides the Notifier instance."""
    if _notifier is None:
        raise RuntimeError("Notifier not initialized. Call init_services() first.")
    yield _notifier


# Type aliases for dependency injection
DispatcherDep = Annotated[WebhookDispatcher, Depends(get_dispatcher)]
NotifierDep = Annotated[Notifier, Depends(get_notifier)]
