"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from api.v1.schemas.user import UserSummaryResponse
from domain.entities.profile import (
    SOCIAL_PLATFORMS,
    EducationEntry,
    ExperienceEntry,
    ProfileFields,
    parse_skills,
)


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile."""

    status: str = Field(..., min_length=1, max_length=100)
    skills: str | list[str] = Field(
        ...,
        description="Comma-separated string or list of skills",
        examples=["Python, FastAPI, PostgreSQL"],
    )
    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=255)
    bio: str | None = None
    githubusername: str | None = Field(None, max_length=100)
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None

    @field_validator("skills")
    @classmethod
    def validate_skills(cls, v: str | list[str]) -> str | list[str]:
        if not parse_skills(v):
            raise ValueError("Skills are required.")
        return v

    def to_fields(self) -> ProfileFields:
        social = {
            platform: getattr(self, platform)
            for platform in SOCIAL_PLATFORMS
            if getattr(self, platform)
        }
        return ProfileFields(
            status=self.status,
            skills=self.skills,
            company=self.company,
            website=self.website,
            location=self.location,
            bio=self.bio,
            githubusername=self.githubusername,
            social=social,
        )


class ExperienceCreate(BaseModel):
    """Schema for adding an experience entry."""

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)
    from_date: date = Field(..., validation_alias=AliasChoices("from", "from_date"))
    to_date: date | None = Field(None, validation_alias=AliasChoices("to", "to_date"))
    current: bool = False
    description: str | None = None

    def to_entry(self) -> ExperienceEntry:
        return ExperienceEntry(
            title=self.title,
            company=self.company,
            location=self.location,
            from_date=self.from_date,
            to_date=None if self.current else self.to_date,
            current=self.current,
            description=self.description,
        )


class EducationCreate(BaseModel):
    """Schema for adding an education entry."""

    school: str = Field(..., min_length=1, max_length=255)
    degree: str | None = Field(None, max_length=255)
    fieldofstudy: str = Field(..., min_length=1, max_length=255)
    from_date: date = Field(..., validation_alias=AliasChoices("from", "from_date"))
    to_date: date | None = Field(None, validation_alias=AliasChoices("to", "to_date"))
    current: bool = False
    description: str | None = None

    def to_entry(self) -> EducationEntry:
        return EducationEntry(
            school=self.school,
            degree=self.degree,
            fieldofstudy=self.fieldofstudy,
            from_date=self.from_date,
            to_date=None if self.current else self.to_date,
            current=self.current,
            description=self.description,
        )


class ExperienceResponse(BaseModel):
    """Schema for an experience entry."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    company: str
    location: str | None = None
    from_date: date
    to_date: date | None = None
    current: bool
    description: str | None = None


class EducationResponse(BaseModel):
    """Schema for an education entry."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    school: str
    degree: str | None = None
    fieldofstudy: str
    from_date: date
    to_date: date | None = None
    current: bool
    description: str | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    user: UserSummaryResponse | None = None
    status: str
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    skills: list[str]
    social: dict[str, str]
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    created_at: datetime
    updated_at: datetime
