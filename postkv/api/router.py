"""
API main routers.

``api_router`` aggregates the JSON envelope routes mounted under the
API prefix; ``root_router`` carries the sync endpoint and the legacy
routes served from the site root.
"""

from fastapi import APIRouter, Depends

from postkv.api.dependencies import set_cache_headers
from postkv.api.endpoints import categories, legacy, metadata, posts, search, sync

# Successful API responses are cacheable
api_router = APIRouter(dependencies=[Depends(set_cache_headers)])

api_router.include_router(
    posts.router,
    prefix="/posts",
    tags=["Posts"],
)

api_router.include_router(
    categories.router,
    prefix="/categories",
    tags=["Categories"],
)

api_router.include_router(
    metadata.router,
    prefix="/metadata",
    tags=["Metadata"],
)

api_router.include_router(
    search.router,
    tags=["Search"],
)

root_router = APIRouter()

root_router.include_router(
    sync.router,
    tags=["Sync"],
)

root_router.include_router(
    legacy.router,
    tags=["Legacy"],
)
