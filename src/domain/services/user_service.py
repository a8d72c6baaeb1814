"""User directory: registration, login and lookup."""

from collections.abc import Callable
from uuid import UUID

import structlog
from starlette.concurrency import run_in_threadpool

from core.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from domain.entities.user import User, normalize_email
from domain.repositories.unit_of_work import IUnitOfWork
from infrastructure.auth.provider import Identity, IPasswordHasher, ITokenService
from infrastructure.gravatar import gravatar_url

logger = structlog.get_logger()


class UserService:
    """Service layer for user accounts and credential checks."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        password_hasher: IPasswordHasher,
        token_service: ITokenService,
    ) -> None:
        self._uow_factory = uow_factory
        self._hasher = password_hasher
        self._tokens = token_service

    async def register(self, name: str, email: str, password: str) -> tuple[User, str]:
        """Create a user and return it with a freshly issued token.

        Raises:
            EmailAlreadyRegisteredError: If the normalized email is taken
        """
        email = normalize_email(email)
        # bcrypt is CPU-bound; keep it off the event loop
        password_hash = await run_in_threadpool(self._hasher.hash, password)

        async with self._uow_factory() as uow:
            existing = await uow.users.get_by_email(email)
            if existing:
                raise EmailAlreadyRegisteredError(email)

            user = User(
                name=name.strip(),
                email=email,
                password_hash=password_hash,
                avatar_url=gravatar_url(email),
            )
            created = await uow.users.create(user)
            await uow.commit()

        logger.info("user_registered", user_id=str(created.id))
        return created, self._tokens.issue(Identity(user_id=created.id))

    async def authenticate(self, email: str, password: str) -> str:
        """Check credentials and return a token.

        Unknown emails and wrong passwords fail identically.
        """
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(normalize_email(email))

        if not user or not await run_in_threadpool(
            self._hasher.verify, password, user.password_hash
        ):
            logger.info("login_failed")
            raise InvalidCredentialsError()

        return self._tokens.issue(Identity(user_id=user.id))

    async def get(self, user_id: UUID) -> User:
        """Get a user by ID."""
        async with self._uow_factory() as uow:
            user = await uow.users.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))
            return user
