"""Post repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.post import Comment, Like, Post


class IPostRepository(Protocol):
    """Repository interface for Post entities, likes and comments."""

    async def get(self, id: UUID) -> Post | None:
        """Get a post with its likes and comments."""
        ...

    async def get_all(self) -> list[Post]:
        """Get every post, newest first."""
        ...

    async def create(self, post: Post) -> Post:
        """Create a new post."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a post with its likes and comments."""
        ...

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every post authored by a user and return the count."""
        ...

    async def add_like(self, post_id: UUID, like: Like) -> bool:
        """Insert a like. Returns False if the user already liked the post."""
        ...

    async def remove_like(self, post_id: UUID, user_id: UUID) -> bool:
        """Remove the user's like from the post."""
        ...

    async def add_comment(self, post_id: UUID, comment: Comment) -> None:
        """Insert a single comment."""
        ...

    async def remove_comment(self, post_id: UUID, comment_id: UUID, user_id: UUID) -> bool:
        """Remove the comment only if it belongs to ``user_id``."""
        ...
