"""Notification inbox endpoints."""

from datetime import datetime

from fastapi import APIRouter, status

from assignflow.api.errors import http_error
from assignflow.dependencies import WorkflowDep
from assignflow.errors import AssignmentError
from assignflow.models import Notification
from assignflow.schemas.notification import UnreadCount

router = APIRouter()


@router.get("/notifications", response_model=list[Notification])
async def list_notifications(
    workflow: WorkflowDep,
    read: bool | None = None,
    search: str | None = None,
    since: datetime | None = None,
):
    """Inbox, most recent first. Filters are optional."""
    return workflow.inbox.filter(read=read, search=search, since=since)


@router.get("/notifications/unread-count", response_model=UnreadCount)
async def unread_count(workflow: WorkflowDep):
    return UnreadCount(unread=workflow.unread_count())


@router.post("/notifications/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_all_read(workflow: WorkflowDep):
    workflow.mark_all_read()


@router.post("/notifications/{notification_id}/read", response_model=Notification)
async def mark_read(notification_id: str, workflow: WorkflowDep):
    try:
        return workflow.mark_read(notification_id)
    except AssignmentError as exc:
        raise http_error(exc)


@router.delete("/notifications", status_code=status.HTTP_204_NO_CONTENT)
async def clear_all(workflow: WorkflowDep):
    workflow.clear_all()
