"""
FastAPI dependency injection functions.

Provides the store-backed services and the shared query parameters
(language, visibility) used by every read route.
"""

from typing import Annotated

from fastapi import Depends, Query, Response

from postkv.core.config import settings
from postkv.schemas.post import Visibility
from postkv.services.category_service import CategoryService
from postkv.services.index_service import IndexService
from postkv.services.post_service import PostService
from postkv.storage.base import KeyValueStore
from postkv.storage.session import get_store


async def get_language(
    lang: Annotated[str | None, Query(description="Language code")] = None,
) -> str:
    """Language from ?lang=, falling back to the configured default."""
    return lang or settings.DEFAULT_LANGUAGE


async def get_visibility(
    status: Annotated[
        str | None, Query(description="'draft' to read drafts, published otherwise")
    ] = None,
) -> Visibility:
    """Storage slot from ?status=; only an explicit 'draft' reads drafts."""
    return Visibility.from_param(status, default=Visibility.PUBLISHED)


async def set_cache_headers(response: Response) -> None:
    """Mark successful API responses as cacheable."""
    response.headers["Cache-Control"] = settings.CACHE_CONTROL


async def get_post_service(
    store: Annotated[KeyValueStore, Depends(get_store)],
) -> PostService:
    return PostService(store)


async def get_category_service(
    store: Annotated[KeyValueStore, Depends(get_store)],
) -> CategoryService:
    return CategoryService(store)


async def get_index_service(
    store: Annotated[KeyValueStore, Depends(get_store)],
) -> IndexService:
    return IndexService(store)


Language = Annotated[str, Depends(get_language)]
VisibilityParam = Annotated[Visibility, Depends(get_visibility)]
