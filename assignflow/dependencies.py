"""Workflow instance shared by the request handlers."""

from typing import Annotated

from fastapi import Depends

from assignflow.services.workflow import AssignmentWorkflow

_workflow = AssignmentWorkflow()


def get_workflow() -> AssignmentWorkflow:
    """Dependency for the session's workflow. Override in tests."""
    return _workflow


WorkflowDep = Annotated[AssignmentWorkflow, Depends(get_workflow)]
