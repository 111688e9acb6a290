"""Assignment workflow - the call interface the view layer talks to."""

import logging
from collections.abc import Iterable
from enum import Enum

from assignflow.config import Settings, settings as default_settings
from assignflow.engine import collaboration, transitions
from assignflow.engine.notifier import NotificationEmitter
from assignflow.errors import AssignmentError, ValidationError
from assignflow.models import (
    Actor,
    Assignment,
    AssignmentStats,
    AssignmentStatus,
    Notification,
    Priority,
    QuerySnapshot,
)
from assignflow.storage.assignments import AssignmentStore
from assignflow.storage.notifications import NotificationInbox
from assignflow.utils.clock import Clock, IdGenerator, random_id, utc_now

logger = logging.getLogger(__name__)


def _coerce(enum_cls: type[Enum], value, field: str):
    """Accept an enum member or its literal value, e.g. 'In progress'."""
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Unknown {field} {value!r}; expected one of: {allowed}") from None


class AssignmentWorkflow:
    """
    Owns the assignment store and the notification inbox for one session.

    Every mutating call validates first, then applies the change and its
    history entries in one store update, then emits notifications. Rejected
    calls raise an AssignmentError subclass and leave both collections as
    they were.
    """

    def __init__(
        self,
        clock: Clock = utc_now,
        new_id: IdGenerator = random_id,
        config: Settings | None = None,
    ):
        self.config = config or default_settings
        self.clock = clock
        self.new_id = new_id
        self.store = AssignmentStore(
            clock=clock, new_id=new_id, default_warehouse=self.config.default_warehouse
        )
        self.inbox = NotificationInbox()
        self.notifier = NotificationEmitter(
            self.inbox,
            clock=clock,
            new_id=new_id,
            default_suggestion=self.config.default_assignment_suggestion,
            review_suggestion=self.config.update_review_suggestion,
            default_warehouse=self.config.default_warehouse,
        )

    def _rejected(self, action: str, actor: Actor, exc: AssignmentError) -> None:
        logger.warning(
            "Rejected %s by %s (%s): %s", action, actor.name, actor.role.value, exc.message
        )

    # -- assignments -------------------------------------------------------

    def create_assignment(
        self,
        query: QuerySnapshot,
        assignee: str,
        priority: Priority,
        message: str,
        actor: Actor,
    ) -> Assignment:
        """Hand ``query`` to ``assignee`` and notify them."""
        try:
            transitions.check_create(actor.role)
            priority = _coerce(Priority, priority, "priority")
            if not query.id or not query.id.strip():
                raise ValidationError("Query id is required")
            if not assignee or not assignee.strip():
                raise ValidationError("Please select or enter an engineer to assign the query to")
        except AssignmentError as exc:
            self._rejected("create", actor, exc)
            raise
        assignment = self.store.create(
            query=query,
            assignee=assignee.strip(),
            priority=priority,
            message=message or "",
            assigned_by=actor.name,
        )
        logger.info(
            "Assignment %s created by %s for %s (query %s, %s)",
            assignment.id,
            actor.name,
            assignment.assigned_to,
            assignment.query_id,
            priority.value,
        )
        self.notifier.assignment_created(assignment, query)
        return assignment

    def _change_status(
        self,
        assignment_id: str,
        status: AssignmentStatus,
        actor: Actor,
        comment: str | None,
        forced: bool,
    ) -> Assignment:
        action = "force_status" if forced else "set_status"
        try:
            status = _coerce(AssignmentStatus, status, "status")
        except AssignmentError as exc:
            self._rejected(action, actor, exc)
            raise

        def mutate(assignment: Assignment) -> None:
            if forced:
                transitions.check_force_status(actor.role)
            else:
                transitions.check_status_change(actor.role, assignment.status, status)
            collaboration.apply_status(
                assignment, status, actor.name, self.clock, self.new_id, comment
            )

        try:
            updated = self.store.update(assignment_id, mutate)
        except AssignmentError as exc:
            self._rejected(action, actor, exc)
            raise
        change = updated.last_system_entry().metadata
        logger.info(
            "Assignment %s status %s -> %s by %s%s",
            assignment_id,
            change.old_status.value,
            status.value,
            actor.name,
            " (override)" if forced else "",
        )
        self.notifier.status_changed(updated, status)
        return updated

    def set_status(
        self,
        assignment_id: str,
        status: AssignmentStatus,
        actor: Actor,
        comment: str | None = None,
    ) -> Assignment:
        """Move along the state machine; see engine.transitions for the table."""
        return self._change_status(assignment_id, status, actor, comment, forced=False)

    def force_status(
        self,
        assignment_id: str,
        status: AssignmentStatus,
        actor: Actor,
        comment: str | None = None,
    ) -> Assignment:
        """FinOps/Admin manual override. Any status, repeats included."""
        return self._change_status(assignment_id, status, actor, comment, forced=True)

    def set_priority(
        self, assignment_id: str, priority: Priority, actor: Actor
    ) -> Assignment:
        try:
            priority = _coerce(Priority, priority, "priority")
        except AssignmentError as exc:
            self._rejected("set_priority", actor, exc)
            raise

        def mutate(assignment: Assignment) -> None:
            transitions.check_priority_change(actor.role)
            collaboration.apply_priority(
                assignment, priority, actor.name, self.clock, self.new_id
            )

        try:
            updated = self.store.update(assignment_id, mutate)
        except AssignmentError as exc:
            self._rejected("set_priority", actor, exc)
            raise
        logger.info(
            "Assignment %s priority set to %s by %s", assignment_id, priority.value, actor.name
        )
        return updated

    def add_comment(self, assignment_id: str, actor: Actor, text: str) -> Assignment:
        def mutate(assignment: Assignment) -> None:
            collaboration.apply_comment(assignment, actor.name, text, self.clock, self.new_id)

        try:
            updated = self.store.update(assignment_id, mutate)
        except AssignmentError as exc:
            self._rejected("add_comment", actor, exc)
            raise
        logger.info("Comment added to assignment %s by %s", assignment_id, actor.name)
        return updated

    def resolve_assignment(self, assignment_id: str, actor: Actor) -> None:
        """Remove the assignment. Callers normally do this once it is Optimized."""

        def check(assignment: Assignment) -> None:
            transitions.check_resolve(
                actor.role,
                assignment.status,
                require_optimized=self.config.require_optimized_before_resolve,
            )

        try:
            removed = self.store.remove(assignment_id, check)
        except AssignmentError as exc:
            self._rejected("resolve", actor, exc)
            raise
        logger.info(
            "Assignment %s resolved by %s (status %s)",
            assignment_id,
            actor.name,
            removed.status.value,
        )

    def get_assignment(self, assignment_id: str) -> Assignment:
        return self.store.get(assignment_id)

    def next_statuses(self, assignment_id: str, actor: Actor) -> list[AssignmentStatus]:
        """Statuses ``actor`` could reach from here through set_status."""
        current = self.store.get(assignment_id).status
        return transitions.allowed_targets(current, actor.role)

    def list_assignments(self) -> list[Assignment]:
        return self.store.snapshot()

    def search_assignments(
        self,
        search: str | None = None,
        priorities: Iterable[Priority] = (),
        statuses: Iterable[AssignmentStatus] = (),
        assignees: Iterable[str] = (),
    ) -> list[Assignment]:
        """
        Filter like the Assigned Tasks page.

        ``search`` matches query id, message or assignee case-insensitively.
        Empty filter collections match everything.
        """
        needle = search.lower() if search else None
        priorities = set(priorities)
        statuses = set(statuses)
        assignees = set(assignees)

        result = []
        for a in self.store.snapshot():
            if needle and not (
                needle in a.query_id.lower()
                or needle in a.message.lower()
                or needle in a.assigned_to.lower()
            ):
                continue
            if priorities and a.priority not in priorities:
                continue
            if statuses and a.status not in statuses:
                continue
            if assignees and a.assigned_to not in assignees:
                continue
            result.append(a)
        return result

    def assignment_stats(self) -> AssignmentStats:
        assignments = self.store.snapshot()
        return AssignmentStats(
            total=len(assignments),
            pending=sum(1 for a in assignments if a.status.is_pending),
            high=sum(1 for a in assignments if a.priority == Priority.HIGH),
        )

    # -- notifications -----------------------------------------------------

    def list_notifications(self) -> list[Notification]:
        return self.inbox.snapshot()

    def unread_count(self) -> int:
        return self.inbox.unread_count()

    def mark_all_read(self) -> None:
        self.inbox.mark_all_read()

    def mark_read(self, notification_id: str) -> Notification:
        return self.inbox.mark_read(notification_id)

    def clear_all(self) -> None:
        self.inbox.clear_all()
