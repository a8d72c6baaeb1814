"""Unit tests for ProfileService."""

from datetime import date
from uuid import UUID, uuid4

import pytest

from core.exceptions import ProfileNotFoundError
from domain.entities.profile import (
    EducationEntry,
    ExperienceEntry,
    Profile,
    ProfileFields,
)
from domain.services.profile_service import ProfileService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> ProfileService:
    return ProfileService(lambda: uow)


def _experience(title: str) -> ExperienceEntry:
    return ExperienceEntry(title=title, company="Acme", from_date=date(2020, 1, 1))


def _education(school: str) -> EducationEntry:
    return EducationEntry(school=school, fieldofstudy="CS", from_date=date(2015, 9, 1))


# --- get_for_user ---


class TestGetForUser:
    @pytest.mark.asyncio
    async def test_returns_profile(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        profile = Profile(user_id=user_id, status="Developer")
        uow.profiles.get_by_user.return_value = profile

        result = await service.get_for_user(user_id)

        assert result is profile

    @pytest.mark.asyncio
    async def test_missing_profile(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get_by_user.return_value = None

        with pytest.raises(ProfileNotFoundError) as exc_info:
            await service.get_for_user(user_id)

        assert exc_info.value.status_code == 404


# --- upsert ---


class TestUpsert:
    @pytest.mark.asyncio
    async def test_creates_profile_with_parsed_skills(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get_by_user.return_value = None
        uow.profiles.upsert.side_effect = lambda profile: profile

        result = await service.upsert(
            user_id, ProfileFields(status="Developer", skills="a, b ,c")
        )

        assert result.user_id == user_id
        assert result.status == "Developer"
        assert result.skills == ["a", "b", "c"]
        assert uow.committed

    @pytest.mark.asyncio
    async def test_update_keeps_omitted_fields(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        existing = Profile(
            user_id=user_id,
            status="Junior",
            company="Acme",
            bio="Hello",
            skills=["python"],
            experience=[_experience("Dev")],
        )
        uow.profiles.get_by_user.return_value = existing
        uow.profiles.upsert.side_effect = lambda profile: profile

        result = await service.upsert(
            user_id,
            ProfileFields(status="Senior", skills=["go"], location="Berlin"),
        )

        assert result.id == existing.id
        assert result.status == "Senior"
        assert result.skills == ["go"]
        assert result.company == "Acme"
        assert result.bio == "Hello"
        assert result.location == "Berlin"
        assert len(result.experience) == 1

    @pytest.mark.asyncio
    async def test_update_replaces_social(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        existing = Profile(
            user_id=user_id,
            status="Developer",
            social={"twitter": "https://twitter.com/old"},
        )
        uow.profiles.get_by_user.return_value = existing
        uow.profiles.upsert.side_effect = lambda profile: profile

        result = await service.upsert(
            user_id,
            ProfileFields(
                status="Developer",
                skills="python",
                social={"youtube": "https://youtube.com/me"},
            ),
        )

        assert result.social == {"youtube": "https://youtube.com/me"}


# --- experience ---


class TestExperience:
    @pytest.mark.asyncio
    async def test_add_prepends_entry(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        old = _experience("Old")
        profile = Profile(user_id=user_id, status="Developer", experience=[old])
        uow.profiles.get_by_user.return_value = profile
        new = _experience("New")

        result = await service.add_experience(user_id, new)

        assert [e.title for e in result.experience] == ["New", "Old"]
        uow.profiles.add_experience.assert_called_once_with(profile.id, new)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_add_without_profile(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get_by_user.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.add_experience(user_id, _experience("Dev"))

        uow.profiles.add_experience.assert_not_called()

    @pytest.mark.asyncio
    async def test_remove_keeps_order_of_the_rest(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        first, second, third = _experience("A"), _experience("B"), _experience("C")
        profile = Profile(
            user_id=user_id, status="Developer", experience=[first, second, third]
        )
        uow.profiles.get_by_user.return_value = profile

        result = await service.remove_experience(user_id, second.id)

        assert [e.title for e in result.experience] == ["A", "C"]
        uow.profiles.remove_experience.assert_called_once_with(profile.id, second.id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_remove_unknown_id_is_a_noop(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        entry = _experience("A")
        profile = Profile(user_id=user_id, status="Developer", experience=[entry])
        uow.profiles.get_by_user.return_value = profile

        result = await service.remove_experience(user_id, uuid4())

        assert result.experience == [entry]
        uow.profiles.remove_experience.assert_not_called()
        assert not uow.committed


# --- education ---


class TestEducation:
    @pytest.mark.asyncio
    async def test_add_prepends_entry(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        profile = Profile(user_id=user_id, status="Developer", education=[_education("Old U")])
        uow.profiles.get_by_user.return_value = profile

        result = await service.add_education(user_id, _education("New U"))

        assert [e.school for e in result.education] == ["New U", "Old U"]
        assert uow.committed

    @pytest.mark.asyncio
    async def test_remove(self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID):
        entry = _education("MIT")
        profile = Profile(user_id=user_id, status="Developer", education=[entry])
        uow.profiles.get_by_user.return_value = profile

        result = await service.remove_education(user_id, entry.id)

        assert result.education == []
        uow.profiles.remove_education.assert_called_once_with(profile.id, entry.id)

    @pytest.mark.asyncio
    async def test_remove_without_profile(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.profiles.get_by_user.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.remove_education(user_id, uuid4())


# --- delete_account ---


class TestDeleteAccount:
    @pytest.mark.asyncio
    async def test_removes_posts_profile_and_user_together(
        self, service: ProfileService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.posts.delete_all_for_user.return_value = 2

        await service.delete_account(user_id)

        uow.posts.delete_all_for_user.assert_called_once_with(user_id)
        uow.profiles.delete_for_user.assert_called_once_with(user_id)
        uow.users.delete.assert_called_once_with(user_id)
        assert uow.committed
