"""FastAPI dependencies for comments."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from .service import CommentsService


async def get_comments_service(request: Request) -> CommentsService:
    """Get comments service from app state.

    Args:
        request: FastAPI request

    Returns:
        CommentsService instance
    """
    app_state = request.app.state
    if not getattr(app_state, "comments_service", None):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Comment service not available",
        )
    return app_state.comments_service


CommentsServiceDep = Annotated[CommentsService, Depends(get_comments_service)]
