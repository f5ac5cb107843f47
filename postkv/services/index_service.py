"""
Index service for the sync write path.

Persists post content and metadata, then keeps the per-category slug
index and the global category catalog up to date for published posts.
"""

import asyncio
import json
import weakref
from typing import Any

from pydantic import ValidationError

from postkv.core.config import settings
from postkv.core.exceptions import (
    InvalidContentError,
    MalformedQueryError,
    StoreUnavailableError,
)
from postkv.core.logging import get_logger
from postkv.schemas.common import SyncResult
from postkv.schemas.post import PostMetadata, SyncPayload, Visibility
from postkv.storage.base import KeyValueStore
from postkv.utils.file_helpers import extract_metadata, is_calendar_date
from postkv.utils.keyspace import (
    CATALOG_KEY,
    category_index_key,
    content_key,
    metadata_key,
    parse_logical_key,
)

logger = get_logger(__name__)

# Serializes read-modify-write per index key within this process.
# Separate processes writing the same category can still lose an entry.
_index_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()


def _lock_for(key: str) -> asyncio.Lock:
    lock = _index_locks.get(key)
    if lock is None:
        lock = asyncio.Lock()
        _index_locks[key] = lock
    return lock


class IndexService:
    """
    Service for writing posts and maintaining index keys.

    Indexes are append-only: entries are added when a post is first
    published and never removed.
    """

    def __init__(self, store: KeyValueStore) -> None:
        """
        Initialize index service.

        Args:
            store: Key-value store holding posts and indexes
        """
        self.store = store

    async def sync(self, payload: SyncPayload) -> SyncResult:
        """
        Handle a sync request.

        Args:
            payload: Sync request body

        Returns:
            Sync acknowledgement

        Raises:
            MalformedQueryError: If key or content is missing
            InvalidContentError: If no valid metadata can be resolved
        """
        if not payload.key or not payload.content:
            raise MalformedQueryError("Missing key or content")

        visibility = Visibility.from_param(payload.status, default=Visibility.DRAFT)
        indexed = await self.store_markdown(
            key=payload.key,
            content=payload.content,
            metadata=payload.metadata,
            visibility=visibility,
        )

        return SyncResult(
            message="Content synced successfully",
            key=payload.key,
            status=visibility.value,
            indexed=indexed,
        )

    def resolve_metadata(
        self,
        content: str,
        metadata: PostMetadata | dict[str, Any] | None = None,
    ) -> PostMetadata:
        """
        Pick the metadata to store for a post.

        Explicit metadata wins; otherwise it is extracted from the
        post's front matter.

        Args:
            content: Raw markdown post
            metadata: Explicit metadata, if supplied by the caller

        Returns:
            Validated metadata

        Raises:
            InvalidContentError: If neither source yields valid metadata
        """
        if metadata is None:
            extracted = extract_metadata(content)
            if extracted is None:
                raise InvalidContentError()
            return extracted

        if isinstance(metadata, PostMetadata):
            resolved = metadata
        else:
            try:
                resolved = PostMetadata.model_validate(metadata)
            except ValidationError as e:
                raise InvalidContentError(
                    "Invalid metadata: missing required fields",
                    details={"errors": [err["loc"][-1] for err in e.errors() if err["loc"]]},
                ) from e

        if settings.STRICT_DATE_VALIDATION and not is_calendar_date(resolved.date):
            raise InvalidContentError(
                "Invalid metadata: date must be YYYY-MM-DD",
                details={"date": resolved.date},
            )
        return resolved

    async def store_markdown(
        self,
        key: str,
        content: str,
        metadata: PostMetadata | dict[str, Any] | None = None,
        visibility: Visibility = Visibility.DRAFT,
    ) -> bool:
        """
        Store a post and update indexes.

        Metadata is resolved before the first store call, so an invalid
        post leaves the store untouched. Later failures are not rolled
        back.

        Args:
            key: Logical key (language/category/slug)
            content: Raw markdown post
            metadata: Explicit metadata, extracted from content when None
            visibility: Storage slot to write

        Returns:
            True if category indexes were updated

        Raises:
            InvalidContentError: If metadata is missing or invalid
            StoreUnavailableError: If a store call fails
        """
        resolved = self.resolve_metadata(content, metadata)
        visibility = Visibility(visibility)

        logger.info(f"Storing {visibility.value} post: {key}")

        await self.store.put(content_key(visibility, key), content)
        await self.store.put(metadata_key(visibility, key), resolved.to_json())

        if visibility is not Visibility.PUBLISHED:
            return False

        logical_key = parse_logical_key(key)
        if logical_key is None:
            logger.info(f"Key {key} is not language/category/slug; skipping indexes")
            return False

        await self._append_if_absent(
            category_index_key(logical_key.language, logical_key.category),
            logical_key.slug,
        )
        await self._append_if_absent(CATALOG_KEY, logical_key.category_path)
        return True

    async def get_category_slugs(self, language: str, category: str) -> list[str]:
        """Get all published slugs of a category in publish order."""
        return await self._read_list(category_index_key(language, category))

    async def get_categories(self) -> list[str]:
        """Get all language/category entries in first-publish order."""
        return await self._read_list(CATALOG_KEY)

    async def _read_list(self, key: str) -> list[str]:
        raw = await self.store.get(key)
        if raw is None:
            return []
        try:
            entries = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreUnavailableError(f"Corrupt index at {key}", {"key": key}) from e
        if not isinstance(entries, list):
            raise StoreUnavailableError(f"Corrupt index at {key}", {"key": key})
        return [str(entry) for entry in entries]

    async def _append_if_absent(self, key: str, entry: str) -> bool:
        lock = _lock_for(key)
        async with lock:
            entries = await self._read_list(key)
            if entry in entries:
                return False
            entries.append(entry)
            await self.store.put(key, json.dumps(entries, separators=(",", ":")))
            logger.debug(f"Appended {entry} to {key}")
            return True
