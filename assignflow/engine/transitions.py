"""Assignment status state machine and role gates."""

from assignflow.errors import ForbiddenError, InvalidTransitionError
from assignflow.models import AssignmentStatus, Role

ENGINEER_ROLES = frozenset({Role.DATA_ENGINEER})
ASSIGNER_ROLES = frozenset({Role.FINOPS, Role.ADMIN})

# (from, to) -> roles allowed to drive it through set_status
STATUS_TRANSITIONS: dict[tuple[AssignmentStatus, AssignmentStatus], frozenset[Role]] = {
    (AssignmentStatus.ASSIGNED, AssignmentStatus.IN_PROGRESS): ENGINEER_ROLES,
    (AssignmentStatus.NEEDS_CLARIFICATION, AssignmentStatus.IN_PROGRESS): ENGINEER_ROLES,
    (AssignmentStatus.IN_PROGRESS, AssignmentStatus.OPTIMIZED): ENGINEER_ROLES,
    (AssignmentStatus.IN_PROGRESS, AssignmentStatus.CANNOT_BE_OPTIMIZED): ENGINEER_ROLES,
    (AssignmentStatus.IN_PROGRESS, AssignmentStatus.NEEDS_CLARIFICATION): ENGINEER_ROLES,
}

# Landing on one of these tells the assigner to look at the task again.
NOTIFYING_STATUSES = frozenset(
    {AssignmentStatus.OPTIMIZED, AssignmentStatus.NEEDS_CLARIFICATION}
)


def allowed_targets(current: AssignmentStatus, role: Role) -> list[AssignmentStatus]:
    """Statuses ``role`` may move to from ``current`` via set_status."""
    return [
        to_status
        for (from_status, to_status), roles in STATUS_TRANSITIONS.items()
        if from_status == current and role in roles
    ]


def check_status_change(
    role: Role, current: AssignmentStatus, target: AssignmentStatus
) -> None:
    """
    Validate a regular status change.

    Raises InvalidTransitionError when the pair is not in the table (same-status
    repeats included), ForbiddenError when it is but ``role`` may not drive it.
    """
    roles = STATUS_TRANSITIONS.get((current, target))
    if roles is None:
        raise InvalidTransitionError(
            f"Invalid transition: {current.value} -> {target.value}"
        )
    if role not in roles:
        raise ForbiddenError(
            f"Role {role.value} may not move an assignment from "
            f"{current.value} to {target.value}"
        )


def _require_assigner(role: Role, action: str) -> None:
    if role not in ASSIGNER_ROLES:
        raise ForbiddenError(f"Role {role.value} may not {action}")


def check_force_status(role: Role) -> None:
    """Manual override: any status from any status, assigners only."""
    _require_assigner(role, "override assignment status")


def check_priority_change(role: Role) -> None:
    _require_assigner(role, "change assignment priority")


def check_create(role: Role) -> None:
    _require_assigner(role, "assign queries")


def check_resolve(
    role: Role, current: AssignmentStatus, require_optimized: bool = False
) -> None:
    """
    Gate for removing an assignment.

    The Optimized precondition is only enforced when ``require_optimized`` is set.
    """
    _require_assigner(role, "resolve assignments")
    if require_optimized and current != AssignmentStatus.OPTIMIZED:
        raise InvalidTransitionError(
            f"Only {AssignmentStatus.OPTIMIZED.value} assignments can be resolved, "
            f"this one is {current.value}"
        )
