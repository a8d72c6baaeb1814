"""Profile service layer with business logic."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import ProfileNotFoundError
from domain.entities.profile import EducationEntry, ExperienceEntry, Profile, ProfileFields
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class ProfileService:
    """Service layer for profiles and their experience/education entries.

    Profiles are keyed by their owner, so every mutation here is implicitly
    scoped to the caller's own profile.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_for_user(self, user_id: UUID) -> Profile:
        """Get the profile owned by ``user_id``."""
        async with self._uow_factory() as uow:
            return await self._require_profile(uow, user_id)

    async def list_all(self) -> list[Profile]:
        """Get every profile."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get_all()  # type: ignore[no-any-return]

    async def upsert(self, user_id: UUID, fields: ProfileFields) -> Profile:
        """Create the user's profile or set the provided fields on it."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user(user_id)
            if profile is None:
                profile = Profile(user_id=user_id, status=fields.status)
            fields.apply_to(profile)

            saved = await uow.profiles.upsert(profile)
            await uow.commit()
            return saved  # type: ignore[no-any-return]

    async def add_experience(self, user_id: UUID, entry: ExperienceEntry) -> Profile:
        """Add an experience entry at the head of the list."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)

            await uow.profiles.add_experience(profile.id, entry)
            await uow.commit()

            profile.experience = [entry, *profile.experience]
            return profile

    async def remove_experience(self, user_id: UUID, entry_id: UUID) -> Profile:
        """Remove an experience entry by id; unknown ids are a no-op."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)

            remaining = profile.experience_without(entry_id)
            if len(remaining) == len(profile.experience):
                return profile

            await uow.profiles.remove_experience(profile.id, entry_id)
            await uow.commit()

            profile.experience = remaining
            return profile

    async def add_education(self, user_id: UUID, entry: EducationEntry) -> Profile:
        """Add an education entry at the head of the list."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)

            await uow.profiles.add_education(profile.id, entry)
            await uow.commit()

            profile.education = [entry, *profile.education]
            return profile

    async def remove_education(self, user_id: UUID, entry_id: UUID) -> Profile:
        """Remove an education entry by id; unknown ids are a no-op."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)

            remaining = profile.education_without(entry_id)
            if len(remaining) == len(profile.education):
                return profile

            await uow.profiles.remove_education(profile.id, entry_id)
            await uow.commit()

            profile.education = remaining
            return profile

    async def delete_account(self, user_id: UUID) -> None:
        """Delete the user's posts, profile and user record together."""
        async with self._uow_factory() as uow:
            removed_posts = await uow.posts.delete_all_for_user(user_id)
            await uow.profiles.delete_for_user(user_id)
            await uow.users.delete(user_id)
            await uow.commit()

        logger.info("account_deleted", user_id=str(user_id), removed_posts=removed_posts)

    async def _require_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        profile = await uow.profiles.get_by_user(user_id)
        if not profile:
            raise ProfileNotFoundError(str(user_id))
        return profile
