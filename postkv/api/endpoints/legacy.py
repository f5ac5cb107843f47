"""
Legacy endpoints kept for older clients.

These predate the JSON envelope: raw markdown for a post, and bare JSON
arrays for slugs and category names.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from postkv.api.dependencies import Language, VisibilityParam, get_category_service, get_post_service
from postkv.core.config import settings
from postkv.core.exceptions import NotFoundError
from postkv.services.category_service import CategoryService
from postkv.services.post_service import PostService
from postkv.utils.keyspace import build_logical_key

router = APIRouter()


@router.get("/posts/{category}/{slug}", response_class=PlainTextResponse)
async def get_raw_markdown(
    category: str,
    slug: str,
    service: Annotated[PostService, Depends(get_post_service)],
    language: Language,
    visibility: VisibilityParam,
) -> PlainTextResponse:
    """Get the raw markdown of a post as text/markdown."""
    key = build_logical_key(language, category, slug)
    try:
        content = await service.get_markdown(key, visibility)
    except NotFoundError:
        return PlainTextResponse("Not found", status_code=404)

    return PlainTextResponse(
        content,
        media_type="text/markdown",
        headers={"Cache-Control": settings.CACHE_CONTROL},
    )


@router.get("/posts/{category}", response_model=list[str])
async def get_category_slugs(
    category: str,
    service: Annotated[PostService, Depends(get_post_service)],
    language: Language,
) -> list[str]:
    """Get the bare slug index of a category."""
    return await service.index.get_category_slugs(language, category)


@router.get("/categories", response_model=list[str])
async def get_category_names(
    service: Annotated[CategoryService, Depends(get_category_service)],
    language: Language,
) -> list[str]:
    """Get bare category names of a language."""
    return await service.list_category_names(language)
