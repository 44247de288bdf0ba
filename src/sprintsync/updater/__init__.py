"""Field Updater - Writes sprint dates and assignees onto issues."""

from sprintsync.updater.models import DateUpdate
from sprintsync.updater.updater import DUE_DATE_FIELD, FieldUpdater

__all__ = [
    "DUE_DATE_FIELD",
    "DateUpdate",
    "FieldUpdater",
]
