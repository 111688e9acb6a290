"""Turns assignment transitions into notifications for the counterpart persona."""

import logging

from assignflow.engine.transitions import NOTIFYING_STATUSES
from assignflow.models import (
    Assignment,
    AssignmentStatus,
    Notification,
    NotificationSeverity,
    NotificationTopic,
    QuerySnapshot,
)
from assignflow.storage.notifications import NotificationInbox
from assignflow.utils.clock import Clock, IdGenerator, random_id, utc_now

logger = logging.getLogger(__name__)


class NotificationEmitter:
    """Emits QUERY_ASSIGNED on create and ASSIGNMENT_UPDATED on notifying statuses."""

    def __init__(
        self,
        inbox: NotificationInbox,
        clock: Clock = utc_now,
        new_id: IdGenerator = random_id,
        default_suggestion: str = "",
        review_suggestion: str = "",
        default_warehouse: str = "SYSTEM",
    ):
        self.inbox = inbox
        self._clock = clock
        self._new_id = new_id
        self._default_suggestion = default_suggestion
        self._review_suggestion = review_suggestion
        self._default_warehouse = default_warehouse

    def _emit(self, notification: Notification) -> Notification:
        logger.debug(
            "Emitting %s notification %s", notification.insight_topic.value, notification.id
        )
        return self.inbox.add(notification)

    def assignment_created(
        self, assignment: Assignment, query: QuerySnapshot
    ) -> Notification:
        topic = NotificationTopic.QUERY_ASSIGNED
        return self._emit(
            Notification(
                id=self._new_id("n"),
                insight_type_id=topic.value,
                insight_topic=topic,
                message=f"New query optimization task assigned by {assignment.assigned_by}.",
                suggestions=(
                    assignment.message
                    if assignment.message.strip()
                    else self._default_suggestion
                ),
                timestamp=self._clock(),
                warehouse_name=query.warehouse or self._default_warehouse,
                query_id=query.id,
                is_read=False,
                severity=NotificationSeverity.INFO,
            )
        )

    def status_changed(
        self, assignment: Assignment, new_status: AssignmentStatus
    ) -> Notification | None:
        """Notify when the assignment lands on a status the assigner must act on."""
        if new_status not in NOTIFYING_STATUSES:
            return None
        topic = NotificationTopic.ASSIGNMENT_UPDATED
        return self._emit(
            Notification(
                id=self._new_id("n-up"),
                insight_type_id=topic.value,
                insight_topic=topic,
                message=(
                    f"Optimization Task {assignment.short_id} is now "
                    f"{new_status.value.upper()}."
                ),
                suggestions=self._review_suggestion,
                timestamp=self._clock(),
                warehouse_name=assignment.warehouse,
                query_id=assignment.query_id,
                is_read=False,
                severity=NotificationSeverity.INFO,
            )
        )
