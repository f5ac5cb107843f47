"""
Post service for read queries.

Serves point lookups, category listings, substring search and recency
listings straight from the key-value store. Listings walk the
published indexes and look each slug up in the requested slot.
"""

from collections.abc import AsyncIterator
from datetime import UTC, datetime

from pydantic import ValidationError

from postkv.core.exceptions import MalformedQueryError, NotFoundError, StoreUnavailableError
from postkv.core.logging import get_logger
from postkv.schemas.post import Post, PostMetadata, Visibility
from postkv.services.index_service import IndexService
from postkv.storage.base import KeyValueStore
from postkv.utils.keyspace import (
    KEY_SEPARATOR,
    build_logical_key,
    content_key,
    metadata_key,
    split_category_path,
)

logger = get_logger(__name__)


def parse_post_date(value: str) -> datetime | None:
    """
    Parse a metadata date for recency ordering.

    Accepts ISO 8601 dates with or without a time part. Naive values
    are taken as UTC.

    Args:
        value: Date string from post metadata

    Returns:
        Aware datetime, or None if the value is not a parseable date
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _recency_key(post: Post) -> float:
    # Unparseable dates rank below every real date.
    parsed = parse_post_date(post.metadata.date)
    return parsed.timestamp() if parsed else float("-inf")


class PostService:
    """
    Service for post queries.

    Search and recent listings scan every published post of a language
    on each call. That is fine for blog-sized corpora and keeps the
    store free of secondary indexes.
    """

    def __init__(self, store: KeyValueStore) -> None:
        """
        Initialize post service.

        Args:
            store: Key-value store holding posts and indexes
        """
        self.store = store
        self.index = IndexService(store)

    async def get_markdown(
        self, key: str, visibility: Visibility = Visibility.PUBLISHED
    ) -> str:
        """
        Get raw markdown by logical key.

        Raises:
            NotFoundError: If no content is stored under the key
        """
        content = await self.store.get(content_key(visibility, key))
        if content is None:
            raise NotFoundError("Post", key)
        return content

    async def get_post_metadata(
        self, key: str, visibility: Visibility = Visibility.PUBLISHED
    ) -> PostMetadata:
        """
        Get only the metadata of a post.

        Raises:
            NotFoundError: If no metadata is stored under the key
            StoreUnavailableError: If the stored record is not valid metadata
        """
        storage_key = metadata_key(visibility, key)
        raw = await self.store.get(storage_key)
        if raw is None:
            raise NotFoundError("Post metadata", key)
        try:
            return PostMetadata.model_validate_json(raw)
        except ValidationError as e:
            raise StoreUnavailableError(
                f"Corrupt metadata at {storage_key}", {"key": storage_key}
            ) from e

    async def find_post(
        self, key: str, visibility: Visibility = Visibility.PUBLISHED
    ) -> Post | None:
        """
        Look up content and metadata for a logical key.

        Returns:
            Post, or None if the content or the metadata is absent, or the
            stored metadata is not a valid record
        """
        content = await self.store.get(content_key(visibility, key))
        raw_metadata = await self.store.get(metadata_key(visibility, key))
        if content is None or raw_metadata is None:
            return None

        try:
            metadata = PostMetadata.model_validate_json(raw_metadata)
        except ValidationError as e:
            logger.warning(
                f"Skipping {visibility.value} post {key}: "
                f"invalid metadata ({e.error_count()} errors)"
            )
            return None

        return Post(
            slug=key.rsplit(KEY_SEPARATOR, 1)[-1],
            metadata=metadata,
            content=content,
        )

    async def get_post_by_key(
        self, key: str, visibility: Visibility = Visibility.PUBLISHED
    ) -> Post:
        """
        Get a post by its full logical key.

        Works for any stored key, including ones that are not
        language/category/slug and therefore never indexed.

        Raises:
            NotFoundError: If the post doesn't exist in this slot
        """
        post = await self.find_post(key, visibility)
        if post is None:
            raise NotFoundError("Post", key)
        return post

    async def get_post(
        self,
        language: str,
        category: str,
        slug: str,
        visibility: Visibility = Visibility.PUBLISHED,
    ) -> Post:
        """
        Get a post by language, category and slug.

        Args:
            language: Language code
            category: Category name
            slug: Post slug
            visibility: Storage slot to read

        Returns:
            Post with metadata and content

        Raises:
            NotFoundError: If the post doesn't exist in this slot
        """
        return await self.get_post_by_key(build_logical_key(language, category, slug), visibility)

    async def list_category(
        self,
        language: str,
        category: str,
        visibility: Visibility = Visibility.PUBLISHED,
    ) -> list[Post]:
        """
        List posts of a category in publish order.

        Indexed slugs whose post is missing from the requested slot are
        skipped.
        """
        slugs = await self.index.get_category_slugs(language, category)
        posts = []
        for slug in slugs:
            post = await self.find_post(build_logical_key(language, category, slug), visibility)
            if post is not None:
                posts.append(post)
        return posts

    async def iter_language_posts(
        self,
        language: str,
        visibility: Visibility = Visibility.PUBLISHED,
    ) -> AsyncIterator[Post]:
        """Yield every indexed post of a language, catalog order then index order."""
        for path in await self.index.get_categories():
            path_language, category = split_category_path(path)
            if path_language != language:
                continue
            for post in await self.list_category(language, category, visibility):
                yield post

    async def search(
        self,
        query: str,
        visibility: Visibility = Visibility.PUBLISHED,
        language: str = "en",
    ) -> list[Post]:
        """
        Case-insensitive substring search over title, content and tags.

        Args:
            query: Search text
            visibility: Storage slot to read
            language: Language code

        Returns:
            Matching posts in scan order (no ranking)

        Raises:
            MalformedQueryError: If the query is empty
        """
        if not query:
            raise MalformedQueryError('Query parameter "q" is required')

        needle = query.lower()
        results = []
        async for post in self.iter_language_posts(language, visibility):
            if (
                needle in post.metadata.title.lower()
                or needle in post.content.lower()
                or any(needle in tag.lower() for tag in post.metadata.tags or [])
            ):
                results.append(post)

        logger.info(f"Search '{query}' ({language}/{visibility.value}): {len(results)} results")
        return results

    async def recent(
        self,
        limit: int = 10,
        visibility: Visibility = Visibility.PUBLISHED,
        language: str = "en",
    ) -> list[Post]:
        """
        Get the newest posts of a language.

        Posts are ordered by metadata date, newest first. Posts with an
        unparseable date come last; equal dates keep scan order.

        Raises:
            MalformedQueryError: If limit is not positive
        """
        if limit < 1:
            raise MalformedQueryError("Query parameter \"limit\" must be a positive integer")

        posts = [post async for post in self.iter_language_posts(language, visibility)]
        posts.sort(key=_recency_key, reverse=True)
        return posts[:limit]
