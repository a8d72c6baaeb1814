"""Post domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Like:
    """A single user's like on a post."""

    user_id: UUID
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Comment:
    """A comment on a post.

    ``name`` and ``avatar_url`` are copied from the commenter at write time.
    """

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar_url: str | None = None
    date: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Post:
    """Domain entity for a Post.

    ``likes`` holds at most one entry per user. ``comments`` is newest first.
    """

    user_id: UUID
    text: str
    name: str
    id: UUID = field(default_factory=uuid4)
    avatar_url: str | None = None
    date: datetime = field(default_factory=datetime.utcnow)
    likes: list[Like] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.user_id == user_id

    def is_liked_by(self, user_id: UUID) -> bool:
        return any(like.user_id == user_id for like in self.likes)

    def likes_without(self, user_id: UUID) -> list[Like]:
        """Every like except the ones by ``user_id``."""
        return [like for like in self.likes if like.user_id != user_id]

    def find_comment(self, comment_id: UUID) -> Comment | None:
        return next((c for c in self.comments if c.id == comment_id), None)

    def comments_without(self, comment_id: UUID, user_id: UUID) -> list[Comment]:
        """Every comment except the one matching both id and author."""
        return [
            c for c in self.comments if not (c.id == comment_id and c.user_id == user_id)
        ]
