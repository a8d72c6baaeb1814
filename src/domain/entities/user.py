"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


def normalize_email(email: str) -> str:
    """Canonical form used for storage and uniqueness checks."""
    return email.strip().lower()


@dataclass
class User:
    """Domain entity for a registered user."""

    name: str
    email: str
    password_hash: str
    id: UUID = field(default_factory=uuid4)
    avatar_url: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        self.email = normalize_email(self.email)


@dataclass(frozen=True, slots=True)
class UserSummary:
    """Public subset of a user, embedded in profile reads."""

    id: UUID
    name: str
    avatar_url: str | None = None
