"""Assignment and collaboration log models."""

from datetime import datetime
from enum import Enum

from pydantic import ConfigDict, Field

from assignflow.models.base import CamelModel


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class AssignmentStatus(str, Enum):
    """
    Lifecycle status of an optimization task.

    Lifecycle Flow:
      ASSIGNED → IN_PROGRESS → OPTIMIZED
                             → CANNOT_BE_OPTIMIZED
                             → NEEDS_CLARIFICATION → IN_PROGRESS

    ASSIGNED is the only initial state. Resolving an assignment removes it
    from the store instead of moving it to another status.
    """

    ASSIGNED = "Assigned"
    IN_PROGRESS = "In progress"
    OPTIMIZED = "Optimized"
    CANNOT_BE_OPTIMIZED = "Cannot be optimized"
    NEEDS_CLARIFICATION = "Needs clarification"

    @property
    def is_pending(self) -> bool:
        """Still waiting on the engineer."""
        return self in (AssignmentStatus.ASSIGNED, AssignmentStatus.IN_PROGRESS)


class EntryType(str, Enum):
    SYSTEM = "system"
    COMMENT = "comment"


class StatusChange(CamelModel):
    """Metadata carried by a status system entry."""

    model_config = ConfigDict(frozen=True)

    old_status: AssignmentStatus
    new_status: AssignmentStatus


class CollaborationEntry(CamelModel):
    """One item of an assignment's append-only log. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: EntryType
    author: str
    timestamp: datetime
    content: str
    metadata: StatusChange | None = None


class QuerySnapshot(CamelModel):
    """Query as resolved by the caller at assignment time."""

    id: str
    query_text: str = ""
    warehouse: str | None = None
    cost_usd: float = Field(default=0, alias="costUSD")
    cost_tokens: float = 0
    cost_credits: float = 0


class Assignment(CamelModel):
    """
    A query optimization task handed from FinOps to a Data Engineer.

    Only ``priority``, ``status`` and ``history`` change after creation, and
    only through the AssignmentStore.
    """

    id: str
    query_id: str
    query_text: str
    assigned_by: str
    assigned_to: str
    priority: Priority
    status: AssignmentStatus = AssignmentStatus.ASSIGNED
    message: str = ""
    assigned_on: datetime
    cost: float = 0
    tokens: float = 0
    credits: float = 0
    warehouse: str
    history: list[CollaborationEntry] = Field(default_factory=list)

    @property
    def short_id(self) -> str:
        """Task label used in notifications, e.g. ``01F2A3B4``."""
        return self.query_id[:8].upper()

    def last_system_entry(self) -> CollaborationEntry | None:
        for entry in reversed(self.history):
            if entry.type == EntryType.SYSTEM:
                return entry
        return None


class AssignmentStats(CamelModel):
    """Counters shown on the Assigned Tasks page."""

    total: int
    pending: int
    high: int
