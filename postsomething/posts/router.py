"""Post API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Path, Response, status

from postsomething.auth.dependencies import CurrentIdentity
from postsomething.core.exceptions import AppError, to_http_exception
from postsomething.core.ids import BIGINT_MAX
from postsomething.core.query import by_id, is_missing

from .dependencies import PostRepositoryDep
from .repository import PostNotFoundError
from .schemas import PostRequest, PostResponse


router = APIRouter(prefix="/posts", tags=["posts"])

PostId = Annotated[int, Path(ge=0, le=BIGINT_MAX)]


@router.get(
    "",
    response_model=list[PostResponse],
    summary="List posts",
)
async def list_posts(post_repository: PostRepositoryDep) -> list[PostResponse]:
    posts = await post_repository.get_list()
    return [PostResponse.from_post(post) for post in posts]


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Get post",
    responses={404: {"description": "Post not found"}},
)
async def get_post(post_id: PostId, post_repository: PostRepositoryDep) -> PostResponse:
    post = await post_repository.find(by_id(post_id))
    if is_missing(post):
        raise to_http_exception(PostNotFoundError())
    return PostResponse.from_post(post)


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create post",
    responses={
        401: {"description": "Not authenticated"},
        409: {"description": "No free post id"},
    },
)
async def create_post(
    data: PostRequest,
    post_repository: PostRepositoryDep,
    identity: CurrentIdentity,
) -> PostResponse:
    """Create a post authored by the current user."""
    try:
        post = await post_repository.create_post(data, identity.user_id)
    except AppError as e:
        raise to_http_exception(e) from e

    return PostResponse.from_post(post)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete post",
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "Post not found"},
    },
)
async def delete_post(
    post_id: PostId,
    post_repository: PostRepositoryDep,
    _identity: CurrentIdentity,
) -> Response:
    """Delete a post. Its comments are left in place."""
    post = await post_repository.find(by_id(post_id))
    if is_missing(post):
        raise to_http_exception(PostNotFoundError())

    await post_repository.delete(post)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
