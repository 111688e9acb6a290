"""In-memory assignment store - the only owner of assignment records."""

import logging
import threading
from collections.abc import Callable

from assignflow.engine.collaboration import initiated_entry
from assignflow.errors import NotFoundError
from assignflow.models import Assignment, AssignmentStatus, Priority, QuerySnapshot
from assignflow.utils.clock import Clock, IdGenerator, random_id, utc_now

logger = logging.getLogger(__name__)


class AssignmentStore:
    """
    Authoritative collection of assignments, most recent first.

    Callers only ever see deep copies. Mutations go through ``update``, which
    works on a private copy under the record's lock and publishes it only if
    the mutation returns normally, so a rejected operation leaves no trace.
    """

    def __init__(
        self,
        clock: Clock = utc_now,
        new_id: IdGenerator = random_id,
        default_warehouse: str = "SYSTEM",
    ):
        self._clock = clock
        self._new_id = new_id
        self._default_warehouse = default_warehouse
        self._records: dict[str, Assignment] = {}
        self._order: list[str] = []
        self._record_locks: dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    def create(
        self,
        query: QuerySnapshot,
        assignee: str,
        priority: Priority,
        message: str,
        assigned_by: str,
    ) -> Assignment:
        """Build a new Assigned record seeded with its initiation entry."""
        now = self._clock()
        assignment = Assignment(
            id=self._new_id("aq"),
            query_id=query.id,
            query_text=query.query_text,
            assigned_by=assigned_by,
            assigned_to=assignee,
            priority=priority,
            status=AssignmentStatus.ASSIGNED,
            message=message,
            assigned_on=now,
            cost=query.cost_usd,
            tokens=query.cost_tokens,
            credits=query.cost_credits,
            warehouse=query.warehouse or self._default_warehouse,
            history=[initiated_entry(self._new_id, assigned_by, now)],
        )
        with self._lock:
            self._records[assignment.id] = assignment
            self._record_locks[assignment.id] = threading.Lock()
            self._order.insert(0, assignment.id)
        logger.debug("Stored assignment %s for query %s", assignment.id, query.id)
        return assignment.model_copy(deep=True)

    def get(self, assignment_id: str) -> Assignment:
        with self._lock:
            record = self._records.get(assignment_id)
            if record is None:
                raise NotFoundError(f"Assignment {assignment_id} not found")
            return record.model_copy(deep=True)

    def snapshot(self) -> list[Assignment]:
        """Snapshot in iteration order; changing it does not touch the store."""
        with self._lock:
            return [self._records[i].model_copy(deep=True) for i in self._order]

    def _record_lock(self, assignment_id: str) -> threading.Lock:
        with self._lock:
            lock = self._record_locks.get(assignment_id)
            if lock is None:
                raise NotFoundError(f"Assignment {assignment_id} not found")
            return lock

    def update(
        self, assignment_id: str, mutate: Callable[[Assignment], None]
    ) -> Assignment:
        """
        Apply ``mutate`` to a working copy and publish it atomically.

        ``mutate`` validates against and edits the copy it receives. If it
        raises, the stored record is left as it was.
        """
        with self._record_lock(assignment_id):
            with self._lock:
                record = self._records.get(assignment_id)
                if record is None:
                    # resolved while we waited for the record lock
                    raise NotFoundError(f"Assignment {assignment_id} not found")
                working = record.model_copy(deep=True)
            mutate(working)
            with self._lock:
                self._records[assignment_id] = working
            return working.model_copy(deep=True)

    def remove(
        self,
        assignment_id: str,
        check: Callable[[Assignment], None] | None = None,
    ) -> Assignment:
        """Delete the record. ``check`` may veto by raising, under the record lock."""
        with self._record_lock(assignment_id):
            with self._lock:
                record = self._records.get(assignment_id)
                if record is None:
                    raise NotFoundError(f"Assignment {assignment_id} not found")
                if check is not None:
                    check(record.model_copy(deep=True))
                del self._records[assignment_id]
                self._order.remove(assignment_id)
                del self._record_locks[assignment_id]
        logger.debug("Removed assignment %s", assignment_id)
        return record
