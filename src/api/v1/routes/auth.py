"""Authentication routes."""

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentIdentity
from api.v1.dependencies import get_user_service
from api.v1.schemas.user import LoginRequest, TokenResponse, UserResponse
from core.rate_limit import AUTH_LIMIT, READ_LIMIT, limiter
from domain.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "",
    response_model=UserResponse,
    summary="Get the authenticated user",
    responses={401: {"description": "Missing or invalid token"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_authenticated_user(
    request: Request,
    identity: CurrentIdentity,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Return the user behind the token, without the password hash."""
    user = await service.get(identity.user_id)
    return UserResponse.model_validate(user)


@router.post(
    "",
    response_model=TokenResponse,
    summary="Log in",
    responses={401: {"description": "Invalid credentials"}},
)
@limiter.limit(AUTH_LIMIT)  # type: ignore[untyped-decorator]
async def login(
    request: Request,
    body: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Exchange email and password for a token."""
    token = await service.authenticate(body.email, body.password)
    return TokenResponse(token=token)
