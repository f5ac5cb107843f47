"""Services package for indexing and query logic."""

from postkv.services.category_service import CategoryService
from postkv.services.index_service import IndexService
from postkv.services.post_service import PostService

__all__ = [
    "CategoryService",
    "IndexService",
    "PostService",
]
