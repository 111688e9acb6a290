"""Shared fixtures: a workflow with a deterministic clock and ids."""

from datetime import datetime, timezone

import pytest

from assignflow.config import Settings
from assignflow.models import Actor, QuerySnapshot, Role
from assignflow.services.workflow import AssignmentWorkflow
from assignflow.utils.clock import FixedClock, SequentialIds

START = datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def config():
    return Settings(_env_file=None)


@pytest.fixture
def workflow(config):
    return AssignmentWorkflow(
        clock=FixedClock(START, step_seconds=1),
        new_id=SequentialIds(),
        config=config,
    )


@pytest.fixture
def finops():
    return Actor(name="Fiona FinOps", role=Role.FINOPS)


@pytest.fixture
def admin():
    return Actor(name="Ada Admin", role=Role.ADMIN)


@pytest.fixture
def engineer():
    return Actor(name="eng1", role=Role.DATA_ENGINEER)


@pytest.fixture
def query():
    return QuerySnapshot(
        id="01f2a3b4c5d6e7f8",
        query_text="SELECT * FROM sales.orders WHERE order_date > '2024-01-01'",
        warehouse="COMPUTE_WH",
        cost_usd=412.5,
        cost_tokens=1200,
        cost_credits=137.5,
    )
