"""
Search and recency endpoints.

Both scan every published post of the requested language; results are
unranked and unpaginated.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from postkv.api.dependencies import Language, VisibilityParam, get_post_service
from postkv.core.config import settings
from postkv.core.exceptions import MalformedQueryError
from postkv.schemas.common import APIResponse
from postkv.schemas.post import Post
from postkv.services.post_service import PostService

router = APIRouter()


@router.get("/search", response_model=APIResponse[list[Post]], response_model_exclude_none=True)
async def search_posts(
    service: Annotated[PostService, Depends(get_post_service)],
    language: Language,
    visibility: VisibilityParam,
    q: Annotated[str | None, Query(description="Search query")] = None,
) -> APIResponse[list[Post]]:
    """
    Search posts by title, content and tags.

    Args:
        service: Post service
        language: Language code
        visibility: Storage slot
        q: Case-insensitive substring to look for

    Returns:
        Envelope with matching posts in catalog/index order
    """
    if not q:
        raise MalformedQueryError('Query parameter "q" is required')
    return APIResponse(data=await service.search(q, visibility, language))


@router.get("/recent", response_model=APIResponse[list[Post]], response_model_exclude_none=True)
async def recent_posts(
    service: Annotated[PostService, Depends(get_post_service)],
    language: Language,
    visibility: VisibilityParam,
    limit: Annotated[
        int,
        Query(ge=1, description="Maximum number of posts"),
    ] = settings.DEFAULT_RECENT_LIMIT,
) -> APIResponse[list[Post]]:
    """Get the newest posts of a language, newest first."""
    return APIResponse(data=await service.recent(limit, visibility, language))
