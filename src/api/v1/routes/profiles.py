"""Profile API routes."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentIdentity
from api.v1.dependencies import get_github_client, get_profile_service
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.profile import (
    EducationCreate,
    ExperienceCreate,
    ProfileResponse,
    ProfileUpsert,
)
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.profile_service import ProfileService
from infrastructure.github.client import GitHubClient

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get(
    "/me",
    response_model=ProfileResponse,
    summary="Get the caller's profile",
    responses={404: {"description": "No profile for this user"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    identity: CurrentIdentity,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the authenticated user's profile."""
    profile = await service.get_for_user(identity.user_id)
    return ProfileResponse.model_validate(profile)


@router.post(
    "",
    response_model=ProfileResponse,
    summary="Create or update the caller's profile",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    identity: CurrentIdentity,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Create the profile on first call; later calls set the provided fields."""
    profile = await service.upsert(identity.user_id, body.to_fields())
    return ProfileResponse.model_validate(profile)


@router.get(
    "",
    response_model=list[ProfileResponse],
    summary="List all profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> list[ProfileResponse]:
    """Get every developer profile."""
    profiles = await service.list_all()
    return [ProfileResponse.model_validate(profile) for profile in profiles]


@router.get(
    "/user/{user_id}",
    response_model=ProfileResponse,
    summary="Get a profile by user id",
    responses={404: {"description": "No profile for this user"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profile_by_user(
    request: Request,
    user_id: UUID,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the profile owned by ``user_id``."""
    profile = await service.get_for_user(user_id)
    return ProfileResponse.model_validate(profile)


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete the caller's account",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    identity: CurrentIdentity,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the caller's posts, profile and user account."""
    await service.delete_account(identity.user_id)
    return MessageResponse(message="User deleted.")


@router.put(
    "/experience",
    response_model=ProfileResponse,
    summary="Add an experience entry",
    responses={404: {"description": "No profile for this user"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    identity: CurrentIdentity,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Add an experience entry to the top of the caller's profile."""
    profile = await service.add_experience(identity.user_id, body.to_entry())
    return ProfileResponse.model_validate(profile)


@router.delete(
    "/experience/{exp_id}",
    response_model=ProfileResponse,
    summary="Remove an experience entry",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_experience(
    request: Request,
    exp_id: UUID,
    identity: CurrentIdentity,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an experience entry; unknown ids leave the profile unchanged."""
    profile = await service.remove_experience(identity.user_id, exp_id)
    return ProfileResponse.model_validate(profile)


@router.put(
    "/education",
    response_model=ProfileResponse,
    summary="Add an education entry",
    responses={404: {"description": "No profile for this user"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationCreate,
    identity: CurrentIdentity,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Add an education entry to the top of the caller's profile."""
    profile = await service.add_education(identity.user_id, body.to_entry())
    return ProfileResponse.model_validate(profile)


@router.delete(
    "/education/{edu_id}",
    response_model=ProfileResponse,
    summary="Remove an education entry",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_education(
    request: Request,
    edu_id: UUID,
    identity: CurrentIdentity,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Remove an education entry; unknown ids leave the profile unchanged."""
    profile = await service.remove_education(identity.user_id, edu_id)
    return ProfileResponse.model_validate(profile)


@router.get(
    "/github/{username}",
    summary="List a GitHub user's repositories",
    responses={404: {"description": "No Github profile found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_github_repositories(
    request: Request,
    username: str,
    client: GitHubClient = Depends(get_github_client),
) -> list[dict[str, Any]]:
    """Proxy the five oldest public repositories of a GitHub user."""
    return await client.get_repositories(username)
