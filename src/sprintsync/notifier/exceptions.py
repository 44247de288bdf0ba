"""Custom exceptions for the Notifier."""


class NotificationError(Exception):
    """Base exception for Notifier errors."""


class DeliveryError(NotificationError):
    """A channel failed to deliver a notification."""
