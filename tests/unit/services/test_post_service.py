"""Unit tests for PostService."""

from uuid import UUID, uuid4

import pytest

from core.exceptions import (
    AuthorizationError,
    CommentNotFoundError,
    PostNotFoundError,
    UserNotFoundError,
)
from domain.entities.post import Comment, Like, Post
from domain.entities.user import User
from domain.services.post_service import PostService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow: FakeUnitOfWork) -> PostService:
    return PostService(lambda: uow)


def _user(user_id: UUID, name: str = "Alice") -> User:
    return User(
        id=user_id,
        name=name,
        email=f"{name.lower()}@x.com",
        password_hash="hashed",
        avatar_url=f"https://avatars.test/{name.lower()}",
    )


def _post(owner_id: UUID, **kwargs) -> Post:
    return Post(user_id=owner_id, text="hi", name="Alice", **kwargs)


# --- create ---


class TestCreate:
    @pytest.mark.asyncio
    async def test_copies_author_name_and_avatar(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.users.get.return_value = _user(user_id)
        uow.posts.create.side_effect = lambda post: post

        result = await service.create(user_id, "hi")

        assert result.user_id == user_id
        assert result.text == "hi"
        assert result.name == "Alice"
        assert result.avatar_url == "https://avatars.test/alice"
        assert result.likes == []
        assert result.comments == []
        assert uow.committed

    @pytest.mark.asyncio
    async def test_unknown_author(self, service: PostService, uow: FakeUnitOfWork, user_id: UUID):
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.create(user_id, "hi")

        uow.posts.create.assert_not_called()


# --- get / list ---


class TestRead:
    @pytest.mark.asyncio
    async def test_get_missing_post(self, service: PostService, uow: FakeUnitOfWork):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError) as exc_info:
            await service.get(uuid4())

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_list_all(self, service: PostService, uow: FakeUnitOfWork, user_id: UUID):
        posts = [_post(user_id), _post(user_id)]
        uow.posts.get_all.return_value = posts

        result = await service.list_all()

        assert result == posts


# --- delete ---


class TestDelete:
    @pytest.mark.asyncio
    async def test_owner_deletes(self, service: PostService, uow: FakeUnitOfWork, user_id: UUID):
        post = _post(user_id)
        uow.posts.get.return_value = post

        await service.delete(post.id, user_id)

        uow.posts.delete.assert_called_once_with(post.id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_non_owner_is_forbidden(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_user_id: UUID
    ):
        post = _post(user_id)
        uow.posts.get.return_value = post

        with pytest.raises(AuthorizationError) as exc_info:
            await service.delete(post.id, other_user_id)

        assert exc_info.value.status_code == 403
        uow.posts.delete.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_missing_post(self, service: PostService, uow: FakeUnitOfWork, user_id: UUID):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.delete(uuid4(), user_id)


# --- like / unlike ---


class TestLike:
    @pytest.mark.asyncio
    async def test_adds_like_at_head(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_user_id: UUID
    ):
        post = _post(user_id, likes=[Like(user_id=other_user_id)])
        uow.posts.get.return_value = post
        uow.posts.add_like.return_value = True

        result = await service.like(post.id, user_id)

        assert [like.user_id for like in result.likes] == [user_id, other_user_id]
        assert uow.committed

    @pytest.mark.asyncio
    async def test_second_like_changes_nothing(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ):
        post = _post(user_id, likes=[Like(user_id=user_id)])
        uow.posts.get.return_value = post

        result = await service.like(post.id, user_id)

        assert len(result.likes) == 1
        uow.posts.add_like.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_concurrent_duplicate_like_is_not_added(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ):
        post = _post(user_id)
        uow.posts.get.return_value = post
        uow.posts.add_like.return_value = False

        result = await service.like(post.id, user_id)

        assert result.likes == []
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_unlike_removes_only_callers_like(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_user_id: UUID
    ):
        post = _post(user_id, likes=[Like(user_id=user_id), Like(user_id=other_user_id)])
        uow.posts.get.return_value = post

        result = await service.unlike(post.id, user_id)

        assert [like.user_id for like in result.likes] == [other_user_id]
        uow.posts.remove_like.assert_called_once_with(post.id, user_id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_unlike_when_not_liked_is_a_noop(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_user_id: UUID
    ):
        post = _post(user_id, likes=[Like(user_id=other_user_id)])
        uow.posts.get.return_value = post

        result = await service.unlike(post.id, user_id)

        assert len(result.likes) == 1
        uow.posts.remove_like.assert_not_called()

    @pytest.mark.asyncio
    async def test_like_missing_post(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID
    ):
        uow.posts.get.return_value = None

        with pytest.raises(PostNotFoundError):
            await service.like(uuid4(), user_id)


# --- comments ---


class TestComments:
    @pytest.mark.asyncio
    async def test_add_comment_prepends_with_author_details(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_user_id: UUID
    ):
        older = Comment(user_id=user_id, text="first", name="Alice")
        post = _post(user_id, comments=[older])
        uow.posts.get.return_value = post
        uow.users.get.return_value = _user(other_user_id, name="Bob")

        result = await service.add_comment(post.id, other_user_id, "nice")

        assert [c.text for c in result.comments] == ["nice", "first"]
        assert result.comments[0].name == "Bob"
        assert result.comments[0].user_id == other_user_id
        uow.posts.add_comment.assert_called_once()
        assert uow.committed

    @pytest.mark.asyncio
    async def test_author_removes_own_comment(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_user_id: UUID
    ):
        mine = Comment(user_id=other_user_id, text="mine", name="Bob")
        theirs = Comment(user_id=user_id, text="theirs", name="Alice")
        post = _post(user_id, comments=[mine, theirs])
        uow.posts.get.return_value = post

        result = await service.remove_comment(post.id, mine.id, other_user_id)

        assert [c.text for c in result.comments] == ["theirs"]
        uow.posts.remove_comment.assert_called_once_with(post.id, mine.id, other_user_id)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_other_users_comment_is_forbidden(
        self, service: PostService, uow: FakeUnitOfWork, user_id: UUID, other_user_id: UUID
    ):
        comment = Comment(user_id=other_user_id, text="not yours", name="Bob")
        post = _post(user_id, comments=[comment])
        uow.posts.get.return_value = post

        # Even the post owner cannot remove someone else's comment
        with pytest.raises(AuthorizationError):
            await service.remove_comment(post.id, comment.id, user_id)

        uow.posts.remove_comment.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_comment(self, service: PostService, uow: FakeUnitOfWork, user_id: UUID):
        post = _post(user_id)
        uow.posts.get.return_value = post

        with pytest.raises(CommentNotFoundError) as exc_info:
            await service.remove_comment(post.id, uuid4(), user_id)

        assert exc_info.value.status_code == 404
