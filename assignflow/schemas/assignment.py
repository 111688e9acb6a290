"""Assignment request schemas."""

from pydantic import Field

from assignflow.models import AssignmentStatus, Priority, QuerySnapshot
from assignflow.models.base import CamelModel


class CreateAssignmentRequest(CamelModel):
    """POST /v1/assignments request."""

    query: QuerySnapshot
    assignee: str
    priority: Priority = Priority.MEDIUM
    message: str = ""


class StatusUpdateRequest(CamelModel):
    """POST /v1/assignments/{id}/status (and /status/override) request."""

    status: AssignmentStatus
    comment: str | None = None


class PriorityUpdateRequest(CamelModel):
    """POST /v1/assignments/{id}/priority request."""

    priority: Priority


class CommentRequest(CamelModel):
    """POST /v1/assignments/{id}/comments request."""

    text: str = Field(description="Comment body; blank text is rejected")
