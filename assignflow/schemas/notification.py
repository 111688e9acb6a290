"""Notification response schemas."""

from assignflow.models.base import CamelModel


class UnreadCount(CamelModel):
    """GET /v1/notifications/unread-count response."""

    unread: int
