"""Typed failures raised by the assignment workflow."""


class AssignmentError(Exception):
    """Base class for every rejected workflow operation."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AssignmentError):
    """Operation references an unknown assignment or notification id."""


class ForbiddenError(AssignmentError):
    """Actor's role may not perform the requested operation."""


class InvalidTransitionError(AssignmentError):
    """Status change is not reachable from the current state."""


class ValidationError(AssignmentError):
    """A required field is missing or blank."""
