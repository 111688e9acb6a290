"""Domain models."""

from assignflow.models.actor import Actor, Role
from assignflow.models.assignment import (
    Assignment,
    AssignmentStats,
    AssignmentStatus,
    CollaborationEntry,
    EntryType,
    Priority,
    QuerySnapshot,
    StatusChange,
)
from assignflow.models.notification import (
    Notification,
    NotificationSeverity,
    NotificationTopic,
)

__all__ = [
    "Actor",
    "Role",
    "Assignment",
    "AssignmentStats",
    "AssignmentStatus",
    "CollaborationEntry",
    "EntryType",
    "Priority",
    "QuerySnapshot",
    "StatusChange",
    "Notification",
    "NotificationSeverity",
    "NotificationTopic",
]
