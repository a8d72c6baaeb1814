"""JWT token service implementation.

Tokens are HS256-signed with a process-wide secret and carry the
identity nested under ``user``:

    {
        "user": {"id": "user-uuid"},
        "iat": 1234567890,
        "exp": 1234927890
    }

Older tokens put the identity claims at the top level; ``verify``
accepts both shapes and normalizes them into an ``Identity``.
"""

import logging
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from core.config import settings
from core.exceptions import InvalidTokenError, SigningError, TokenExpiredError
from infrastructure.auth.provider import Identity

logger = logging.getLogger(__name__)


def _identity_claims(payload: dict[str, Any]) -> dict[str, Any]:
    """Unwrap ``payload["user"]`` when present, else use the payload itself."""
    nested = payload.get("user")
    if isinstance(nested, dict):
        return nested
    return payload


class JWTTokenService:
    """Issues and verifies signed, time-limited identity tokens."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_seconds: int = settings.jwt_expire_seconds,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_seconds = expire_seconds

    @property
    def has_secret(self) -> bool:
        return bool(self._secret_key)

    def issue(self, identity: Identity) -> str:
        """
        Create a signed token for an identity.

        Args:
            identity: The principal to embed

        Returns:
            The encoded JWT string

        Raises:
            SigningError: If no secret is configured or signing fails
        """
        if not self._secret_key:
            raise SigningError("Token signing secret is not configured.")

        now = datetime.utcnow()
        payload: dict[str, Any] = {
            "user": {"id": str(identity.user_id)},
            "iat": now,
            "exp": now + timedelta(seconds=self._expire_seconds),
        }

        try:
            return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        except JWTError as exc:
            logger.error("Error signing token: %s", exc)
            raise SigningError() from exc

    def verify(self, token: str) -> Identity:
        """
        Verify a token's signature and expiry and resolve its identity.

        Args:
            token: The JWT to verify

        Returns:
            The normalized Identity

        Raises:
            TokenExpiredError: If the token has expired
            InvalidTokenError: If the token is malformed, signed with
                another key, or carries no usable user id
        """
        if not self._secret_key:
            raise InvalidTokenError()

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_aud": False},
            )
        except ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except JWTError as exc:
            raise InvalidTokenError() from exc

        claims = _identity_claims(payload)
        raw_id = claims.get("id") or claims.get("sub")
        if not raw_id:
            raise InvalidTokenError()

        try:
            return Identity(user_id=UUID(str(raw_id)))
        except ValueError as exc:
            raise InvalidTokenError() from exc
