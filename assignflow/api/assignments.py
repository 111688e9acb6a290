"""Assignment endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from assignflow.api.errors import http_error
from assignflow.auth.middleware import ActorDep
from assignflow.dependencies import WorkflowDep
from assignflow.errors import AssignmentError
from assignflow.models import Assignment, AssignmentStats, AssignmentStatus, Priority
from assignflow.schemas.assignment import (
    CommentRequest,
    CreateAssignmentRequest,
    PriorityUpdateRequest,
    StatusUpdateRequest,
)

router = APIRouter()


@router.post(
    "/assignments",
    response_model=Assignment,
    status_code=status.HTTP_201_CREATED,
)
async def create_assignment(
    body: CreateAssignmentRequest,
    actor: ActorDep,
    workflow: WorkflowDep,
):
    """
    Assign a query to a Data Engineer.
    Emits a QUERY_ASSIGNED notification.
    """
    try:
        return workflow.create_assignment(
            query=body.query,
            assignee=body.assignee,
            priority=body.priority,
            message=body.message,
            actor=actor,
        )
    except AssignmentError as exc:
        raise http_error(exc)


@router.get("/assignments", response_model=list[Assignment])
async def list_assignments(
    workflow: WorkflowDep,
    search: str | None = None,
    priority: Annotated[list[Priority] | None, Query()] = None,
    status_: Annotated[list[AssignmentStatus] | None, Query(alias="status")] = None,
    assignee: Annotated[list[str] | None, Query()] = None,
):
    """List assignments, most recent first, optionally filtered."""
    return workflow.search_assignments(
        search=search,
        priorities=priority or (),
        statuses=status_ or (),
        assignees=assignee or (),
    )


@router.get("/assignments/stats", response_model=AssignmentStats)
async def assignment_stats(workflow: WorkflowDep):
    """Total, pending and high-priority counts."""
    return workflow.assignment_stats()


@router.get("/assignments/{assignment_id}", response_model=Assignment)
async def get_assignment(assignment_id: str, workflow: WorkflowDep):
    try:
        return workflow.get_assignment(assignment_id)
    except AssignmentError as exc:
        raise http_error(exc)


@router.get(
    "/assignments/{assignment_id}/transitions", response_model=list[AssignmentStatus]
)
async def next_statuses(assignment_id: str, actor: ActorDep, workflow: WorkflowDep):
    """Statuses the calling actor may move this assignment to."""
    try:
        return workflow.next_statuses(assignment_id, actor)
    except AssignmentError as exc:
        raise http_error(exc)


@router.post("/assignments/{assignment_id}/status", response_model=Assignment)
async def update_status(
    assignment_id: str,
    body: StatusUpdateRequest,
    actor: ActorDep,
    workflow: WorkflowDep,
):
    """Move the assignment along the state machine, with an optional comment."""
    try:
        return workflow.set_status(assignment_id, body.status, actor, body.comment)
    except AssignmentError as exc:
        raise http_error(exc)


@router.post("/assignments/{assignment_id}/status/override", response_model=Assignment)
async def override_status(
    assignment_id: str,
    body: StatusUpdateRequest,
    actor: ActorDep,
    workflow: WorkflowDep,
):
    """FinOps/Admin manual status override."""
    try:
        return workflow.force_status(assignment_id, body.status, actor, body.comment)
    except AssignmentError as exc:
        raise http_error(exc)


@router.post("/assignments/{assignment_id}/priority", response_model=Assignment)
async def update_priority(
    assignment_id: str,
    body: PriorityUpdateRequest,
    actor: ActorDep,
    workflow: WorkflowDep,
):
    try:
        return workflow.set_priority(assignment_id, body.priority, actor)
    except AssignmentError as exc:
        raise http_error(exc)


@router.post("/assignments/{assignment_id}/comments", response_model=Assignment)
async def add_comment(
    assignment_id: str,
    body: CommentRequest,
    actor: ActorDep,
    workflow: WorkflowDep,
):
    try:
        return workflow.add_comment(assignment_id, actor, body.text)
    except AssignmentError as exc:
        raise http_error(exc)


@router.delete("/assignments/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def resolve_assignment(
    assignment_id: str,
    actor: ActorDep,
    workflow: WorkflowDep,
):
    """Resolve (remove) the assignment."""
    try:
        workflow.resolve_assignment(assignment_id, actor)
    except AssignmentError as exc:
        raise http_error(exc)
