"""Authentication provider protocols."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True)
class Identity:
    """The authenticated principal resolved from a verified token."""

    user_id: UUID


class ITokenService(Protocol):
    """Protocol for token issuers/verifiers."""

    def issue(self, identity: Identity) -> str:
        """
        Create a signed token for an identity.

        Raises:
            SigningError: If the token cannot be signed
        """
        ...

    def verify(self, token: str) -> Identity:
        """
        Verify a token and resolve its identity.

        Raises:
            TokenExpiredError: If the token's expiry has passed
            InvalidTokenError: If the signature or payload is invalid
        """
        ...


class IPasswordHasher(Protocol):
    """Protocol for password hashing."""

    def hash(self, plaintext: str) -> str:
        """Hash a plaintext password with a fresh salt."""
        ...

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Check a plaintext password against a stored hash. Never raises."""
        ...
