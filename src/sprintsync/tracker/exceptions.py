"""Custom exceptions for the Tracker Client."""


class TrackerError(Exception):
    """Base exception for Tracker Client errors."""


class TrackerRequestError(TrackerError):
    """Tracker returned a non-success status or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TrackerResponseError(TrackerError):
    """Tracker response body could not be decoded."""
