"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import EducationEntry, ExperienceEntry, Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities and their nested entries."""

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        ...

    async def get_all(self) -> list[Profile]:
        """Get every profile."""
        ...

    async def upsert(self, profile: Profile) -> Profile:
        """Insert the profile or overwrite its scalar fields."""
        ...

    async def delete_for_user(self, user_id: UUID) -> bool:
        """Delete the user's profile with all nested entries."""
        ...

    async def add_experience(self, profile_id: UUID, entry: ExperienceEntry) -> None:
        """Append a single experience entry."""
        ...

    async def remove_experience(self, profile_id: UUID, entry_id: UUID) -> bool:
        """Remove one experience entry from the given profile."""
        ...

    async def add_education(self, profile_id: UUID, entry: EducationEntry) -> None:
        """Append a single education entry."""
        ...

    async def remove_education(self, profile_id: UUID, entry_id: UUID) -> bool:
        """Remove one education entry from the given profile."""
        ...
