"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import EducationEntry, ExperienceEntry, Profile
from domain.entities.user import UserSummary
from infrastructure.database.models import EducationModel, ExperienceModel, ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository.

    Nested entries live in their own tables, so adding or removing one is a
    single INSERT/DELETE rather than a rewrite of the whole profile.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        model = await self._get_model(user_id)
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Profile]:
        """Get every profile, oldest first."""
        stmt = (
            select(ProfileModel)
            .order_by(ProfileModel.created_at)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def upsert(self, profile: Profile) -> Profile:
        """Insert the profile or overwrite its scalar fields."""
        model = await self._get_model(profile.user_id)
        if model is None:
            model = ProfileModel(
                id=profile.id,
                user_id=profile.user_id,
                created_at=profile.created_at,
            )
            self._session.add(model)

        model.company = profile.company
        model.website = profile.website
        model.location = profile.location
        model.bio = profile.bio
        model.status = profile.status
        model.githubusername = profile.githubusername
        model.skills = list(profile.skills)
        model.social = dict(profile.social)
        model.updated_at = profile.updated_at

        await self._session.flush()
        refreshed = await self._get_model(profile.user_id)
        return self._to_entity(refreshed or model)

    async def delete_for_user(self, user_id: UUID) -> bool:
        """Delete the user's profile; entries go with it via cascade."""
        model = await self._get_model(user_id)
        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def add_experience(self, profile_id: UUID, entry: ExperienceEntry) -> None:
        """Insert one experience row."""
        self._session.add(
            ExperienceModel(
                id=entry.id,
                profile_id=profile_id,
                title=entry.title,
                company=entry.company,
                location=entry.location,
                from_date=entry.from_date,
                to_date=entry.to_date,
                current=entry.current,
                description=entry.description,
                created_at=entry.created_at,
            )
        )
        await self._session.flush()

    async def remove_experience(self, profile_id: UUID, entry_id: UUID) -> bool:
        """Delete one experience row scoped to the profile."""
        stmt = delete(ExperienceModel).where(
            ExperienceModel.id == entry_id,
            ExperienceModel.profile_id == profile_id,
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def add_education(self, profile_id: UUID, entry: EducationEntry) -> None:
        """Insert one education row."""
        self._session.add(
            EducationModel(
                id=entry.id,
                profile_id=profile_id,
                school=entry.school,
                degree=entry.degree,
                fieldofstudy=entry.fieldofstudy,
                from_date=entry.from_date,
                to_date=entry.to_date,
                current=entry.current,
                description=entry.description,
                created_at=entry.created_at,
            )
        )
        await self._session.flush()

    async def remove_education(self, profile_id: UUID, entry_id: UUID) -> bool:
        """Delete one education row scoped to the profile."""
        stmt = delete(EducationModel).where(
            EducationModel.id == entry_id,
            EducationModel.profile_id == profile_id,
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def _get_model(self, user_id: UUID) -> ProfileModel | None:
        # populate_existing refreshes collections already held by the session
        stmt = (
            select(ProfileModel)
            .where(ProfileModel.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            company=model.company,
            website=model.website,
            location=model.location,
            bio=model.bio,
            status=model.status,
            githubusername=model.githubusername,
            skills=list(model.skills or []),
            social=dict(model.social or {}),
            experience=[
                ExperienceEntry(
                    id=exp.id,
                    title=exp.title,
                    company=exp.company,
                    location=exp.location,
                    from_date=exp.from_date,
                    to_date=exp.to_date,
                    current=exp.current,
                    description=exp.description,
                    created_at=exp.created_at,
                )
                for exp in model.experience
            ],
            education=[
                EducationEntry(
                    id=edu.id,
                    school=edu.school,
                    degree=edu.degree,
                    fieldofstudy=edu.fieldofstudy,
                    from_date=edu.from_date,
                    to_date=edu.to_date,
                    current=edu.current,
                    description=edu.description,
                    created_at=edu.created_at,
                )
                for edu in model.education
            ],
            user=(
                UserSummary(
                    id=model.user.id,
                    name=model.user.name,
                    avatar_url=model.user.avatar_url,
                )
                if model.user
                else None
            ),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
