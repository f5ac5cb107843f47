"""Metadata-only post endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from postkv.api.dependencies import Language, VisibilityParam, get_post_service
from postkv.schemas.common import APIResponse
from postkv.schemas.post import PostMetadata
from postkv.services.post_service import PostService
from postkv.utils.keyspace import build_logical_key

router = APIRouter()


@router.get(
    "/{category}/{slug}",
    response_model=APIResponse[PostMetadata],
    response_model_exclude_none=True,
)
async def get_post_metadata(
    category: str,
    slug: str,
    service: Annotated[PostService, Depends(get_post_service)],
    language: Language,
    visibility: VisibilityParam,
) -> APIResponse[PostMetadata]:
    """
    Get a post's metadata without its content.

    Reads only the metadata key, so this is cheaper than the full post
    for listing pages that render titles and excerpts.
    """
    key = build_logical_key(language, category, slug)
    return APIResponse(data=await service.get_post_metadata(key, visibility))
