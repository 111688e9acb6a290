"""In-memory notification inbox, most recent first."""

import threading
from datetime import datetime, timezone

from assignflow.errors import NotFoundError
from assignflow.models import Notification


def _as_utc(ts: datetime) -> datetime:
    return ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts


class NotificationInbox:
    """Notifications for the counterpart persona. Separate from the assignments."""

    def __init__(self):
        self._items: list[Notification] = []
        self._lock = threading.Lock()

    def add(self, notification: Notification) -> Notification:
        with self._lock:
            self._items.insert(0, notification)
        return notification.model_copy()

    def snapshot(self) -> list[Notification]:
        with self._lock:
            return [n.model_copy() for n in self._items]

    def filter(
        self,
        read: bool | None = None,
        search: str | None = None,
        since: datetime | None = None,
    ) -> list[Notification]:
        """
        Narrow the inbox the way the notifications page does.

        ``search`` matches message or warehouse name, case-insensitively. Naive
        timestamps on either side of ``since`` are taken as UTC.
        """
        needle = search.lower() if search else None
        out = []
        for n in self.snapshot():
            if read is not None and n.is_read != read:
                continue
            if needle and needle not in n.message.lower() and needle not in n.warehouse_name.lower():
                continue
            if since is not None and _as_utc(n.timestamp) < _as_utc(since):
                continue
            out.append(n)
        return out

    def unread_count(self) -> int:
        with self._lock:
            return sum(1 for n in self._items if not n.is_read)

    def mark_read(self, notification_id: str) -> Notification:
        with self._lock:
            for i, n in enumerate(self._items):
                if n.id == notification_id:
                    self._items[i] = n.model_copy(update={"is_read": True})
                    return self._items[i].model_copy()
        raise NotFoundError(f"Notification {notification_id} not found")

    def mark_all_read(self) -> None:
        with self._lock:
            self._items = [n.model_copy(update={"is_read": True}) for n in self._items]

    def clear_all(self) -> None:
        with self._lock:
            self._items.clear()
