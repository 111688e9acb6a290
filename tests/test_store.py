"""Unit tests for the in-memory assignment store and collaboration log."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from assignflow.engine import collaboration
from assignflow.errors import NotFoundError, ValidationError
from assignflow.models import AssignmentStatus, EntryType, Priority, QuerySnapshot
from assignflow.storage.assignments import AssignmentStore
from assignflow.utils.clock import FixedClock, SequentialIds

NOW = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)


def _store():
    return AssignmentStore(clock=FixedClock(NOW), new_id=SequentialIds())


def _create(store, query_id="q-1", **kwargs):
    return store.create(
        query=QuerySnapshot(id=query_id, query_text="SELECT 1", **kwargs),
        assignee="eng1",
        priority=Priority.MEDIUM,
        message="please look",
        assigned_by="Fiona",
    )


def test_create_seeds_history():
    """New assignments start Assigned with one system entry."""
    a = _create(_store())
    assert a.id == "aq-1"
    assert a.status == AssignmentStatus.ASSIGNED
    assert a.assigned_on == NOW
    assert len(a.history) == 1
    entry = a.history[0]
    assert entry.type == EntryType.SYSTEM
    assert entry.content == "Assignment initiated"
    assert entry.author == "Fiona"
    assert entry.metadata is None


def test_create_snapshots_query_metrics():
    """Cost metrics and warehouse are copied from the query."""
    a = _create(
        _store(), warehouse="WH_XL", cost_usd=10.5, cost_tokens=300, cost_credits=3.5
    )
    assert (a.cost, a.tokens, a.credits, a.warehouse) == (10.5, 300, 3.5, "WH_XL")


def test_create_defaults_missing_warehouse():
    """A query without a warehouse snapshots as SYSTEM."""
    a = _create(_store())
    assert a.warehouse == "SYSTEM"
    assert a.cost == 0


def test_snapshot_is_most_recent_first():
    """Newest assignment is at the head."""
    store = _store()
    first = _create(store, "q-1")
    second = _create(store, "q-2")
    assert [a.id for a in store.snapshot()] == [second.id, first.id]
    assert len(store.snapshot()) == 2


def test_snapshot_isolated_from_store():
    """Mutating a returned snapshot leaves the store alone."""
    store = _store()
    a = _create(store)
    listed = store.snapshot()
    listed[0].status = AssignmentStatus.OPTIMIZED
    listed[0].history.clear()
    listed.clear()
    stored = store.get(a.id)
    assert stored.status == AssignmentStatus.ASSIGNED
    assert len(stored.history) == 1
    assert len(store.snapshot()) == 1


def test_update_publishes_mutation():
    """update applies status and history together."""
    store = _store()
    ids = SequentialIds(100)
    a = _create(store)

    def mutate(x):
        collaboration.apply_status(
            x, AssignmentStatus.IN_PROGRESS, "eng1", FixedClock(NOW), ids, "on it"
        )

    updated = store.update(a.id, mutate)
    assert updated.status == AssignmentStatus.IN_PROGRESS
    assert [e.type for e in updated.history] == [
        EntryType.SYSTEM,
        EntryType.SYSTEM,
        EntryType.COMMENT,
    ]
    assert store.get(a.id) == updated


def test_update_failure_leaves_record_untouched():
    """A mutation that raises halfway publishes nothing."""
    store = _store()
    a = _create(store)

    def mutate(x):
        x.status = AssignmentStatus.OPTIMIZED
        x.history.clear()
        raise ValidationError("nope")

    with pytest.raises(ValidationError):
        store.update(a.id, mutate)
    stored = store.get(a.id)
    assert stored.status == AssignmentStatus.ASSIGNED
    assert len(stored.history) == 1


def test_unknown_id_not_found():
    """get, update and remove signal NotFound for unknown ids."""
    store = _store()
    with pytest.raises(NotFoundError):
        store.get("missing")
    with pytest.raises(NotFoundError):
        store.update("missing", lambda a: None)
    with pytest.raises(NotFoundError):
        store.remove("missing")


def test_remove_deletes_record():
    """remove drops the record and its ordering slot."""
    store = _store()
    a = _create(store, "q-1")
    b = _create(store, "q-2")
    removed = store.remove(a.id)
    assert removed.id == a.id
    assert a.id not in [x.id for x in store.snapshot()]
    assert [x.id for x in store.snapshot()] == [b.id]
    with pytest.raises(NotFoundError):
        store.update(a.id, lambda x: None)


def test_remove_check_can_veto():
    """A raising check keeps the record."""
    store = _store()
    a = _create(store)

    def veto(x):
        raise ValidationError("keep it")

    with pytest.raises(ValidationError):
        store.remove(a.id, veto)
    assert store.get(a.id).id == a.id


def test_status_entry_content_and_metadata():
    """Status entries are uppercased and carry old/new status."""
    entry = collaboration.status_entry(
        SequentialIds(),
        "eng1",
        NOW,
        AssignmentStatus.IN_PROGRESS,
        AssignmentStatus.CANNOT_BE_OPTIMIZED,
    )
    assert entry.content == "Status updated to CANNOT BE OPTIMIZED"
    assert entry.metadata.old_status == AssignmentStatus.IN_PROGRESS
    assert entry.metadata.new_status == AssignmentStatus.CANNOT_BE_OPTIMIZED
    assert entry.model_dump(by_alias=True)["metadata"] == {
        "oldStatus": AssignmentStatus.IN_PROGRESS,
        "newStatus": AssignmentStatus.CANNOT_BE_OPTIMIZED,
    }


def test_priority_entry_content():
    """Priority entries are uppercased system entries without metadata."""
    entry = collaboration.priority_entry(SequentialIds(), "Fiona", NOW, Priority.HIGH)
    assert entry.type == EntryType.SYSTEM
    assert entry.content == "Priority updated to HIGH"
    assert entry.metadata is None


def test_blank_comment_rejected():
    """Comments need text."""
    with pytest.raises(ValidationError):
        collaboration.comment_entry(SequentialIds(), "eng1", NOW, "   ")


def test_entries_are_immutable():
    """History entries cannot be edited after creation."""
    entry = collaboration.comment_entry(SequentialIds(), "eng1", NOW, "hello")
    with pytest.raises(PydanticValidationError):
        entry.content = "edited"


def test_blank_status_comment_is_ignored():
    """A whitespace-only status comment adds no comment entry."""
    store = _store()
    a = _create(store)
    updated = store.update(
        a.id,
        lambda x: collaboration.apply_status(
            x, AssignmentStatus.IN_PROGRESS, "eng1", FixedClock(NOW), SequentialIds(50), "  "
        ),
    )
    assert len(updated.history) == 2
