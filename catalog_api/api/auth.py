"""Authentication endpoints.

Exchanges a username/password pair for a signed bearer token.
"""

import structlog
from fastapi import APIRouter, status

from catalog_api.api.errors import to_http_exception
from catalog_api.api.schemas import ErrorResponse, LoginRequest, LoginResponse
from catalog_api.domain.exceptions import UnauthenticatedError
from catalog_api.infrastructure.security import get_token_service, get_user_directory

logger = structlog.get_logger()

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
    },
    summary="Login",
    description="Authenticate a user and return a JWT bearer token.",
)
async def login(request: LoginRequest) -> LoginResponse:
    """Authenticate and issue a token.

    Raises:
        HTTPException: 401 on unknown user or wrong password.
    """
    principal = get_user_directory().authenticate(request.username, request.password)
    if principal is None:
        logger.warning("Login failed", username=request.username)
        raise to_http_exception(
            UnauthenticatedError("Invalid username or password", error_code="INVALID_CREDENTIALS")
        )

    token = get_token_service().issue(principal)
    logger.info("Login succeeded", username=principal.username, role=principal.role.value)

    return LoginResponse(
        token=token,
        username=principal.username,
        role=principal.role.value,
    )
