"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from api.dependencies.auth import get_token_service
from domain.services.post_service import PostService
from domain.services.profile_service import ProfileService
from domain.services.user_service import UserService
from infrastructure.auth.password import BcryptPasswordHasher
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.github.client import GitHubClient


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_user_service() -> UserService:
    """Get User service instance."""
    return UserService(
        get_uow_factory(),
        password_hasher=BcryptPasswordHasher(),
        token_service=get_token_service(),
    )


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory())


@lru_cache
def get_post_service() -> PostService:
    """Get Post service instance."""
    return PostService(get_uow_factory())


@lru_cache
def get_github_client() -> GitHubClient:
    """Get GitHub client instance."""
    return GitHubClient()
