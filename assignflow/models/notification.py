"""Notification records produced by assignment transitions."""

from datetime import datetime
from enum import Enum

from assignflow.models.base import CamelModel


class NotificationTopic(str, Enum):
    QUERY_ASSIGNED = "QUERY_ASSIGNED"
    ASSIGNMENT_UPDATED = "ASSIGNMENT_UPDATED"


class NotificationSeverity(str, Enum):
    INFO = "Info"
    WARNING = "Warning"
    CRITICAL = "Critical"


class Notification(CamelModel):
    """One inbox item for the counterpart persona."""

    id: str
    insight_type_id: str
    insight_topic: NotificationTopic
    message: str
    suggestions: str
    timestamp: datetime
    warehouse_name: str
    query_id: str | None = None
    is_read: bool = False
    severity: NotificationSeverity = NotificationSeverity.INFO
