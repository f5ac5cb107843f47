"""
Post endpoints.

Serves single posts and category listings as JSON envelopes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from postkv.api.dependencies import Language, VisibilityParam, get_post_service
from postkv.core.logging import get_logger
from postkv.schemas.common import APIResponse
from postkv.schemas.post import Post
from postkv.services.post_service import PostService

logger = get_logger(__name__)
router = APIRouter()


@router.get(
    "/{category}/{slug}",
    response_model=APIResponse[Post],
    response_model_exclude_none=True,
)
async def get_post(
    category: str,
    slug: str,
    service: Annotated[PostService, Depends(get_post_service)],
    language: Language,
    visibility: VisibilityParam,
) -> APIResponse[Post]:
    """
    Get a post with metadata and content.

    Args:
        category: Category name
        slug: Post slug
        service: Post service
        language: Language code (?lang=, default en)
        visibility: Storage slot (?status=draft for drafts)

    Returns:
        Envelope with the post
    """
    post = await service.get_post(language, category, slug, visibility)
    return APIResponse(data=post)


@router.get(
    "/{category}",
    response_model=APIResponse[list[Post]],
    response_model_exclude_none=True,
)
async def list_category_posts(
    category: str,
    service: Annotated[PostService, Depends(get_post_service)],
    language: Language,
    visibility: VisibilityParam,
) -> APIResponse[list[Post]]:
    """
    List all posts of a category in publish order.

    Returns:
        Envelope with the posts found in the requested slot
    """
    posts = await service.list_category(language, category, visibility)
    return APIResponse(data=posts)
