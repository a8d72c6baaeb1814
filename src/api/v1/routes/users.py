"""User registration routes."""

from fastapi import APIRouter, Depends, Request, status

from api.v1.dependencies import get_user_service
from api.v1.schemas.user import TokenResponse, UserCreate
from core.rate_limit import AUTH_LIMIT, limiter
from domain.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
    responses={
        201: {"description": "User created, token issued"},
        409: {"description": "A user with this email already exists"},
    },
)
@limiter.limit(AUTH_LIMIT)  # type: ignore[untyped-decorator]
async def register_user(
    request: Request,
    body: UserCreate,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    """Register a user and return a token for the new account."""
    _, token = await service.register(
        name=body.name,
        email=body.email,
        password=body.password,
    )
    return TokenResponse(token=token)
