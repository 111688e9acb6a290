"""Collaboration log - builds and appends history entries."""

from datetime import datetime

from assignflow.errors import ValidationError
from assignflow.models import (
    Assignment,
    AssignmentStatus,
    CollaborationEntry,
    EntryType,
    Priority,
    StatusChange,
)
from assignflow.utils.clock import Clock, IdGenerator

INITIATED_CONTENT = "Assignment initiated"


def _system_entry(
    new_id: IdGenerator,
    prefix: str,
    author: str,
    timestamp: datetime,
    content: str,
    metadata: StatusChange | None = None,
) -> CollaborationEntry:
    return CollaborationEntry(
        id=new_id(prefix),
        type=EntryType.SYSTEM,
        author=author,
        timestamp=timestamp,
        content=content,
        metadata=metadata,
    )


def initiated_entry(new_id: IdGenerator, author: str, timestamp: datetime) -> CollaborationEntry:
    return _system_entry(new_id, "coll-start", author, timestamp, INITIATED_CONTENT)


def status_entry(
    new_id: IdGenerator,
    author: str,
    timestamp: datetime,
    old_status: AssignmentStatus,
    new_status: AssignmentStatus,
) -> CollaborationEntry:
    return _system_entry(
        new_id,
        "coll",
        author,
        timestamp,
        f"Status updated to {new_status.value.upper()}",
        StatusChange(old_status=old_status, new_status=new_status),
    )


def priority_entry(
    new_id: IdGenerator, author: str, timestamp: datetime, priority: Priority
) -> CollaborationEntry:
    return _system_entry(
        new_id, "coll-prio", author, timestamp, f"Priority updated to {priority.value.upper()}"
    )


def comment_entry(
    new_id: IdGenerator, author: str, timestamp: datetime, text: str
) -> CollaborationEntry:
    if not text or not text.strip():
        raise ValidationError("Comment text is required")
    return CollaborationEntry(
        id=new_id("comm"),
        type=EntryType.COMMENT,
        author=author,
        timestamp=timestamp,
        content=text,
    )


def append(assignment: Assignment, *entries: CollaborationEntry) -> None:
    """Append entries in order. The log never shrinks or rewrites entries."""
    assignment.history.extend(entries)


def apply_status(
    assignment: Assignment,
    status: AssignmentStatus,
    author: str,
    clock: Clock,
    new_id: IdGenerator,
    comment: str | None = None,
) -> None:
    """
    Set the status and log it on a working copy of ``assignment``.

    A non-blank ``comment`` becomes a separate comment entry right after the
    system entry.
    """
    now = clock()
    entries = [status_entry(new_id, author, now, assignment.status, status)]
    if comment and comment.strip():
        entries.append(comment_entry(new_id, author, now, comment))
    assignment.status = status
    append(assignment, *entries)


def apply_priority(
    assignment: Assignment,
    priority: Priority,
    author: str,
    clock: Clock,
    new_id: IdGenerator,
) -> None:
    assignment.priority = priority
    append(assignment, priority_entry(new_id, author, clock(), priority))


def apply_comment(
    assignment: Assignment, author: str, text: str, clock: Clock, new_id: IdGenerator
) -> None:
    append(assignment, comment_entry(new_id, author, clock(), text))
