"""Translate workflow failures into HTTP errors."""

from fastapi import HTTPException, status

from assignflow.errors import (
    AssignmentError,
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)

STATUS_BY_ERROR: dict[type[AssignmentError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    InvalidTransitionError: status.HTTP_409_CONFLICT,
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def http_error(exc: AssignmentError) -> HTTPException:
    """HTTPException carrying the failure message as detail."""
    code = STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=code, detail=exc.message)
