"""Mapping of catalog errors to HTTP responses."""

from fastapi import HTTPException, status

from catalog_api.domain.exceptions import (
    CatalogError,
    ForbiddenError,
    InvalidQueryError,
    InvalidStateTransitionError,
    ProductNotFoundError,
    UnauthenticatedError,
    ValidationFailedError,
)

STATUS_CODES: dict[type[CatalogError], int] = {
    InvalidQueryError: status.HTTP_400_BAD_REQUEST,
    ValidationFailedError: status.HTTP_400_BAD_REQUEST,
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    ProductNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidStateTransitionError: status.HTTP_409_CONFLICT,
}


def status_code_for(error: CatalogError) -> int:
    """HTTP status for a catalog error; unknown subclasses map to 400."""
    for error_type, code in STATUS_CODES.items():
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def to_http_exception(error: CatalogError) -> HTTPException:
    """Convert a catalog error into an HTTPException with the standard detail body.

    Args:
        error: Raised catalog error.

    Returns:
        HTTPException ready to be raised from a route.
    """
    code = status_code_for(error)
    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    return HTTPException(
        status_code=code,
        detail={
            "error_code": error.error_code,
            "message": error.message,
            "details": [detail.to_dict() for detail in error.details],
        },
        headers=headers,
    )
