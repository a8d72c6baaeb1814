"""Post service layer with business logic."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    PostNotFoundError,
    UserNotFoundError,
)
from domain.entities.post import Comment, Like, Post
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class PostService:
    """Service layer for posts, likes and comments.

    Each mutation loads the post, checks it exists (and, where the target
    belongs to someone, that the caller owns it), writes the single row that
    changed, and returns the post with the change applied.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def create(self, user_id: UUID, text: str) -> Post:
        """Create a post, copying the author's current name and avatar."""
        async with self._uow_factory() as uow:
            author = await self._require_user(uow, user_id)

            post = Post(
                user_id=author.id,
                text=text,
                name=author.name,
                avatar_url=author.avatar_url,
            )
            created = await uow.posts.create(post)
            await uow.commit()
            return created  # type: ignore[no-any-return]

    async def list_all(self) -> list[Post]:
        """Get every post, newest first."""
        async with self._uow_factory() as uow:
            return await uow.posts.get_all()  # type: ignore[no-any-return]

    async def get(self, post_id: UUID) -> Post:
        """Get a single post."""
        async with self._uow_factory() as uow:
            return await self._require_post(uow, post_id)

    async def delete(self, post_id: UUID, user_id: UUID) -> None:
        """Delete a post. Only its owner may do so."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if not post.is_owned_by(user_id):
                raise AuthorizationError()

            await uow.posts.delete(post_id)
            await uow.commit()

        logger.info("post_deleted", post_id=str(post_id))

    async def like(self, post_id: UUID, user_id: UUID) -> Post:
        """Like a post. Liking an already-liked post changes nothing."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if post.is_liked_by(user_id):
                return post

            like = Like(user_id=user_id)
            if await uow.posts.add_like(post_id, like):
                await uow.commit()
                post.likes = [like, *post.likes]
            return post

    async def unlike(self, post_id: UUID, user_id: UUID) -> Post:
        """Remove the caller's like. A post not liked by the caller is unchanged."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            if not post.is_liked_by(user_id):
                return post

            await uow.posts.remove_like(post_id, user_id)
            await uow.commit()

            post.likes = post.likes_without(user_id)
            return post

    async def add_comment(self, post_id: UUID, user_id: UUID, text: str) -> Post:
        """Comment on a post with the commenter's current name and avatar."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)
            author = await self._require_user(uow, user_id)

            comment = Comment(
                user_id=author.id,
                text=text,
                name=author.name,
                avatar_url=author.avatar_url,
            )
            await uow.posts.add_comment(post_id, comment)
            await uow.commit()

            post.comments = [comment, *post.comments]
            return post

    async def remove_comment(self, post_id: UUID, comment_id: UUID, user_id: UUID) -> Post:
        """Remove one of the caller's own comments."""
        async with self._uow_factory() as uow:
            post = await self._require_post(uow, post_id)

            comment = post.find_comment(comment_id)
            if not comment:
                raise CommentNotFoundError(str(comment_id))
            if comment.user_id != user_id:
                raise AuthorizationError()

            await uow.posts.remove_comment(post_id, comment_id, user_id)
            await uow.commit()

            post.comments = post.comments_without(comment_id, user_id)
            return post

    async def _require_post(self, uow: IUnitOfWork, post_id: UUID) -> Post:
        post = await uow.posts.get(post_id)
        if not post:
            raise PostNotFoundError(str(post_id))
        return post

    async def _require_user(self, uow: IUnitOfWork, user_id: UUID) -> User:
        user = await uow.users.get(user_id)
        if not user:
            raise UserNotFoundError(str(user_id))
        return user
