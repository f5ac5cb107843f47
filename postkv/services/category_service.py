"""
Category service for catalog queries.

Summarizes the published category indexes of a language.
"""

from postkv.core.exceptions import NotFoundError
from postkv.core.logging import get_logger
from postkv.schemas.post import CategoryInfo
from postkv.services.index_service import IndexService
from postkv.storage.base import KeyValueStore
from postkv.utils.keyspace import split_category_path

logger = get_logger(__name__)


class CategoryService:
    """Service for category catalog operations."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self.index = IndexService(store)

    async def find_category_info(self, language: str, category: str) -> CategoryInfo | None:
        """
        Summarize one category.

        Returns:
            CategoryInfo, or None if the category has no indexed posts
        """
        slugs = await self.index.get_category_slugs(language, category)
        if not slugs:
            return None
        return CategoryInfo(name=category, post_count=len(slugs), posts=slugs)

    async def get_category_info(self, language: str, category: str) -> CategoryInfo:
        """
        Get a category summary.

        Args:
            language: Language code
            category: Category name

        Returns:
            Category name, post count and slugs

        Raises:
            NotFoundError: If the category index is absent or empty
        """
        info = await self.find_category_info(language, category)
        if info is None:
            raise NotFoundError("Category", f"{language}/{category}")
        return info

    async def list_categories(self, language: str) -> list[CategoryInfo]:
        """
        List categories of a language with their posts.

        Catalog entries whose index is empty are left out.
        """
        categories = []
        for category in await self.list_category_names(language):
            info = await self.find_category_info(language, category)
            if info is not None:
                categories.append(info)
        return categories

    async def list_category_names(self, language: str) -> list[str]:
        """List bare category names of a language in catalog order."""
        names = []
        for path in await self.index.get_categories():
            path_language, category = split_category_path(path)
            if path_language == language:
                names.append(category)
        return names
