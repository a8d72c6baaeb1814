"""Profile domain entities."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID, uuid4

from domain.entities.user import UserSummary

SOCIAL_PLATFORMS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


def parse_skills(skills: str | Iterable[str]) -> list[str]:
    """Turn a comma-delimited string (or a list) into trimmed, ordered skills.

    Empty items are dropped: ``"a, b ,c,"`` -> ``["a", "b", "c"]``.
    """
    items = skills.split(",") if isinstance(skills, str) else skills
    return [item.strip() for item in items if item.strip()]


@dataclass
class ExperienceEntry:
    """A job held by the profile owner."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class EducationEntry:
    """A school attended by the profile owner."""

    school: str
    fieldofstudy: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    degree: str | None = None
    to_date: date | None = None
    current: bool = False
    description: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Profile:
    """Domain entity for a user's developer profile.

    ``experience`` and ``education`` are ordered newest first.
    """

    user_id: UUID
    status: str
    id: UUID = field(default_factory=uuid4)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    skills: list[str] = field(default_factory=list)
    social: dict[str, str] = field(default_factory=dict)
    experience: list[ExperienceEntry] = field(default_factory=list)
    education: list[EducationEntry] = field(default_factory=list)
    user: UserSummary | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def experience_without(self, entry_id: UUID) -> list[ExperienceEntry]:
        return [e for e in self.experience if e.id != entry_id]

    def education_without(self, entry_id: UUID) -> list[EducationEntry]:
        return [e for e in self.education if e.id != entry_id]


@dataclass
class ProfileFields:
    """Scalar fields accepted by a profile upsert.

    ``None`` means "not provided": the stored value is kept. ``social`` is
    always replaced as a whole.
    """

    status: str
    skills: str | list[str]
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    social: dict[str, str] = field(default_factory=dict)

    def apply_to(self, profile: Profile) -> None:
        """Set every provided field on the profile."""
        profile.status = self.status
        profile.skills = parse_skills(self.skills)
        for name in ("company", "website", "location", "bio", "githubusername"):
            value = getattr(self, name)
            if value:
                setattr(profile, name, value)
        profile.social = {
            platform: url
            for platform, url in self.social.items()
            if platform in SOCIAL_PLATFORMS and url
        }
        profile.updated_at = datetime.utcnow()
