"""Authentication dependencies for FastAPI."""

from functools import lru_cache
from typing import Annotated

import structlog
from fastapi import Depends, Header

from core.exceptions import AuthenticationError
from infrastructure.auth.jwt_provider import JWTTokenService
from infrastructure.auth.provider import Identity

TOKEN_HEADER = "x-auth-token"


@lru_cache
def get_token_service() -> JWTTokenService:
    """Get the process-wide token service."""
    return JWTTokenService()


async def get_current_identity(
    x_auth_token: Annotated[str | None, Header(alias=TOKEN_HEADER)] = None,
    token_service: JWTTokenService = Depends(get_token_service),
) -> Identity:
    """
    Dependency that gates a route behind a valid ``x-auth-token``.

    Binds the resolved user id into the logging context.

    Raises:
        AuthenticationError: If no token is sent or the token does not verify
    """
    if not x_auth_token:
        raise AuthenticationError(message="No token, authorization denied.")

    try:
        identity = token_service.verify(x_auth_token)
    except AuthenticationError as exc:
        raise AuthenticationError(message="Invalid token.", error_code=exc.error_code) from exc

    structlog.contextvars.bind_contextvars(user_id=str(identity.user_id))
    return identity


# Type alias for convenience in route handlers
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
