"""SQLAlchemy implementation of Post repository."""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.post import Comment, Like, Post
from infrastructure.database.models import CommentModel, PostLikeModel, PostModel


class SQLAlchemyPostRepository:
    """SQLAlchemy implementation of IPostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Post | None:
        """Get a post with likes and comments."""
        stmt = (
            select(PostModel)
            .where(PostModel.id == id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Post]:
        """Get every post, newest first."""
        stmt = (
            select(PostModel)
            .order_by(PostModel.date.desc())
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        model = PostModel(
            id=post.id,
            user_id=post.user_id,
            text=post.text,
            name=post.name,
            avatar_url=post.avatar_url,
            date=post.date,
        )
        self._session.add(model)
        await self._session.flush()
        created = await self.get(post.id)
        return created or post

    async def delete(self, id: UUID) -> bool:
        """Delete a post; likes and comments cascade."""
        stmt = (
            select(PostModel)
            .where(PostModel.id == id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every post authored by the user."""
        stmt = (
            select(PostModel)
            .where(PostModel.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        models = list(result.scalars())
        for model in models:
            await self._session.delete(model)
        await self._session.flush()
        return len(models)

    async def add_like(self, post_id: UUID, like: Like) -> bool:
        """Insert a like unless the user already has one on this post."""
        stmt = select(PostLikeModel.id).where(
            PostLikeModel.post_id == post_id,
            PostLikeModel.user_id == like.user_id,
        )
        result = await self._session.execute(stmt)
        if result.scalar_one_or_none():
            return False

        self._session.add(
            PostLikeModel(
                id=like.id,
                post_id=post_id,
                user_id=like.user_id,
                created_at=like.created_at,
            )
        )
        try:
            await self._session.flush()
        except IntegrityError:
            # Lost a race against the same user's concurrent like
            await self._session.rollback()
            return False
        return True

    async def remove_like(self, post_id: UUID, user_id: UUID) -> bool:
        """Delete the user's like on the post."""
        stmt = delete(PostLikeModel).where(
            PostLikeModel.post_id == post_id,
            PostLikeModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    async def add_comment(self, post_id: UUID, comment: Comment) -> None:
        """Insert one comment row."""
        self._session.add(
            CommentModel(
                id=comment.id,
                post_id=post_id,
                user_id=comment.user_id,
                text=comment.text,
                name=comment.name,
                avatar_url=comment.avatar_url,
                date=comment.date,
            )
        )
        await self._session.flush()

    async def remove_comment(self, post_id: UUID, comment_id: UUID, user_id: UUID) -> bool:
        """Delete the comment only when both id and author match."""
        stmt = delete(CommentModel).where(
            CommentModel.id == comment_id,
            CommentModel.post_id == post_id,
            CommentModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)

    def _to_entity(self, model: PostModel) -> Post:
        """Convert ORM model to domain entity."""
        return Post(
            id=model.id,
            user_id=model.user_id,
            text=model.text,
            name=model.name,
            avatar_url=model.avatar_url,
            date=model.date,
            likes=[
                Like(id=like.id, user_id=like.user_id, created_at=like.created_at)
                for like in model.likes
            ],
            comments=[
                Comment(
                    id=comment.id,
                    user_id=comment.user_id,
                    text=comment.text,
                    name=comment.name,
                    avatar_url=comment.avatar_url,
                    date=comment.date,
                )
                for comment in model.comments
            ],
        )
