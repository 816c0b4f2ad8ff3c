"""Translate domain errors into HTTP responses for the dashboard frontend.

Every failure leaves the dashboard usable; a 401 carries the login path so
the frontend can redirect.
"""

from fastapi import HTTPException, status

from goatfarm.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DashboardError,
    NetworkError,
    NotAuthenticatedError,
    NotFoundError,
    PermissionDeniedError,
    SubmissionInProgressError,
    ValidationError,
)
from goatfarm.infrastructure.dependencies import LOGIN_PATH


def to_http_exception(exc: DashboardError) -> HTTPException:
    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=422,
            detail={"message": exc.message, "fields": exc.fields},
        )
    if isinstance(exc, (AuthorizationError, NotAuthenticatedError)):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": exc.message, "redirect": LOGIN_PATH},
        )
    if isinstance(exc, AuthenticationError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": exc.message},
        )
    if isinstance(exc, PermissionDeniedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=exc.message)
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, SubmissionInProgressError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, NetworkError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=exc.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
