"""
Content sync endpoint.

Receives posts pushed by the sync tooling and hands them to the index
service.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from postkv.api.dependencies import get_index_service
from postkv.core.logging import get_logger
from postkv.schemas.common import APIResponse, SyncResult
from postkv.schemas.post import SyncPayload
from postkv.services.index_service import IndexService

logger = get_logger(__name__)
router = APIRouter()


@router.post("/sync", response_model=APIResponse[SyncResult], response_model_exclude_none=True)
async def sync_content(
    payload: SyncPayload,
    service: Annotated[IndexService, Depends(get_index_service)],
) -> APIResponse[SyncResult]:
    """
    Store a post and update indexes.

    Body: ``{"key": "en/tech/my-post", "content": "...", "metadata": {...},
    "status": "published"}``. Metadata is optional and extracted from the
    front matter when absent; status defaults to draft.

    Args:
        payload: Sync request body
        service: Index service

    Returns:
        Envelope with the sync result
    """
    result = await service.sync(payload)
    logger.info(f"Synced {result.key} ({result.status}, indexed={result.indexed})")
    return APIResponse(data=result)
