"""Post API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentIdentity
from api.v1.dependencies import get_post_service
from api.v1.schemas.common import MessageResponse
from api.v1.schemas.post import CommentCreate, PostCreate, PostResponse
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def create_post(
    request: Request,
    body: PostCreate,
    identity: CurrentIdentity,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Create a post as the authenticated user."""
    post = await service.create(identity.user_id, body.text)
    return PostResponse.model_validate(post)


@router.get(
    "",
    response_model=list[PostResponse],
    summary="List posts",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_posts(
    request: Request,
    identity: CurrentIdentity,
    service: PostService = Depends(get_post_service),
) -> list[PostResponse]:
    """Get all posts, newest first."""
    posts = await service.list_all()
    return [PostResponse.model_validate(post) for post in posts]


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Get a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_post(
    request: Request,
    post_id: UUID,
    identity: CurrentIdentity,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Get a single post with its likes and comments."""
    post = await service.get(post_id)
    return PostResponse.model_validate(post)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete a post",
    responses={
        403: {"description": "Caller does not own the post"},
        404: {"description": "Post not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_post(
    request: Request,
    post_id: UUID,
    identity: CurrentIdentity,
    service: PostService = Depends(get_post_service),
) -> MessageResponse:
    """Delete one of the caller's own posts."""
    await service.delete(post_id, identity.user_id)
    return MessageResponse(message="Post removed.")


@router.put(
    "/{post_id}/like",
    response_model=PostResponse,
    summary="Like a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def like_post(
    request: Request,
    post_id: UUID,
    identity: CurrentIdentity,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Like a post. Idempotent per user."""
    post = await service.like(post_id, identity.user_id)
    return PostResponse.model_validate(post)


@router.put(
    "/{post_id}/unlike",
    response_model=PostResponse,
    summary="Remove a like",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def unlike_post(
    request: Request,
    post_id: UUID,
    identity: CurrentIdentity,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Remove the caller's like from a post."""
    post = await service.unlike(post_id, identity.user_id)
    return PostResponse.model_validate(post)


@router.post(
    "/{post_id}/comments",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
    responses={404: {"description": "Post not found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_comment(
    request: Request,
    post_id: UUID,
    body: CommentCreate,
    identity: CurrentIdentity,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Add a comment as the authenticated user."""
    post = await service.add_comment(post_id, identity.user_id, body.text)
    return PostResponse.model_validate(post)


@router.delete(
    "/{post_id}/comments/{comment_id}",
    response_model=PostResponse,
    summary="Delete a comment",
    responses={
        403: {"description": "Caller did not write the comment"},
        404: {"description": "Post or comment not found"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_comment(
    request: Request,
    post_id: UUID,
    comment_id: UUID,
    identity: CurrentIdentity,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Delete one of the caller's own comments."""
    post = await service.remove_comment(post_id, comment_id, identity.user_id)
    return PostResponse.model_validate(post)
