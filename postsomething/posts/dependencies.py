"""FastAPI dependencies for posts."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from .repository import PostRepository


async def get_post_repository(request: Request) -> PostRepository:
    """Get post repository from app state.

    Raises:
        HTTPException(503): If the repository was not initialized
    """
    app_state = request.app.state
    if not getattr(app_state, "post_repository", None):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Post service not available",
        )
    return app_state.post_repository


PostRepositoryDep = Annotated[PostRepository, Depends(get_post_repository)]
