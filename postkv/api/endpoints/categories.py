"""Category endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from postkv.api.dependencies import Language, get_category_service
from postkv.schemas.common import APIResponse
from postkv.schemas.post import CategoryInfo
from postkv.services.category_service import CategoryService

router = APIRouter()


@router.get("", response_model=APIResponse[list[CategoryInfo]], response_model_exclude_none=True)
async def list_categories(
    service: Annotated[CategoryService, Depends(get_category_service)],
    language: Language,
) -> APIResponse[list[CategoryInfo]]:
    """List the categories of a language with post counts and slugs."""
    return APIResponse(data=await service.list_categories(language))


@router.get(
    "/{category}",
    response_model=APIResponse[CategoryInfo],
    response_model_exclude_none=True,
)
async def get_category(
    category: str,
    service: Annotated[CategoryService, Depends(get_category_service)],
    language: Language,
) -> APIResponse[CategoryInfo]:
    """Get one category's post count and slugs."""
    return APIResponse(data=await service.get_category_info(language, category))
