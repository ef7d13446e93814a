"""Comment API endpoints.

Comments are created and listed under their post and fetched or deleted
by their own id.
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, HTTPException, Path, Response, status

from postsomething.auth.dependencies import CurrentIdentity
from postsomething.core.exceptions import AppError, to_http_exception
from postsomething.core.ids import BIGINT_MAX

from .dependencies import CommentsServiceDep
from .schemas import CommentRequest, CommentResponse


logger = structlog.get_logger(__name__)


router = APIRouter(tags=["comments"])

PostId = Annotated[int, Path(ge=0, le=BIGINT_MAX)]
CommentId = Annotated[int, Path(ge=0, le=BIGINT_MAX)]


@router.get(
    "/posts/{post_id}/comments",
    response_model=list[CommentResponse],
    summary="List comments of a post",
)
async def list_post_comments(
    post_id: PostId,
    comments_service: CommentsServiceDep,
) -> list[CommentResponse]:
    comments = await comments_service.get_comments_from_post(post_id)
    return [CommentResponse.from_comment(c) for c in comments]


@router.get(
    "/comments/{comment_id}",
    response_model=CommentResponse,
    summary="Get comment",
    responses={404: {"description": "Comment not found"}},
)
async def get_comment(
    comment_id: CommentId,
    comments_service: CommentsServiceDep,
) -> CommentResponse:
    comment = await comments_service.get_comment(comment_id)
    if comment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found",
        )
    return CommentResponse.from_comment(comment)


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create comment",
    responses={
        400: {"description": "Parent comment not found"},
        401: {"description": "Not authenticated"},
        404: {"description": "Post or author not found"},
        409: {"description": "Parent comment on another post, or no free id"},
    },
)
async def create_comment(
    post_id: PostId,
    data: CommentRequest,
    comments_service: CommentsServiceDep,
    identity: CurrentIdentity,
) -> CommentResponse:
    """Create a comment, or a reply when ``parent_id`` is set."""
    try:
        comment = await comments_service.create_comment_from_post(
            post_id, data, identity.user_id, data.parent_id
        )
    except AppError as e:
        raise to_http_exception(e) from e

    return CommentResponse.from_comment(comment)


@router.delete(
    "/comments/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete comment",
    responses={
        400: {"description": "Comment does not exist"},
        401: {"description": "Not authenticated"},
    },
)
async def delete_comment(
    comment_id: CommentId,
    comments_service: CommentsServiceDep,
    identity: CurrentIdentity,
) -> Response:
    try:
        await comments_service.delete(comment_id)
    except AppError as e:
        raise to_http_exception(e) from e

    logger.info(
        "comment_delete_requested", comment_id=comment_id, user_id=identity.user_id
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
