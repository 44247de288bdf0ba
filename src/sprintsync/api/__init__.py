"""REST API for SprintSync."""

from sprintsync.api.app import app, create_app
from sprintsync.api.models import APIResponse, DispatchResponse, HealthResponse

__all__ = [
    "APIResponse",
    "DispatchResponse",
    "HealthResponse",
    "app",
    "create_app",
]
