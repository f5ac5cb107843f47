"""Unit tests for post queries."""

from datetime import UTC, datetime

import pytest
import pytest_asyncio

from postkv.core.exceptions import MalformedQueryError, NotFoundError, StoreUnavailableError
from postkv.schemas.post import Visibility
from postkv.services.post_service import parse_post_date


async def publish(index_service, key, content, visibility=Visibility.PUBLISHED):
    await index_service.store_markdown(key, content, visibility=visibility)


class TestParsePostDate:
    """Tests for parse_post_date function."""

    def test_date_only_is_utc_midnight(self):
        assert parse_post_date("2025-01-15") == datetime(2025, 1, 15, tzinfo=UTC)

    def test_datetime_with_offset(self):
        parsed = parse_post_date("2025-01-15T10:00:00+02:00")
        assert parsed == datetime(2025, 1, 15, 8, 0, tzinfo=UTC)

    def test_unparseable(self):
        assert parse_post_date("someday") is None


class TestGetPost:
    """Tests for point lookups."""

    @pytest.mark.asyncio
    async def test_round_trip(self, index_service, post_service, make_post):
        """Test a published post reads back with content and metadata."""
        content = make_post(title="Hello")
        await publish(index_service, "en/tech/hello", content)

        post = await post_service.get_post("en", "tech", "hello")
        assert post.slug == "hello"
        assert post.content == content
        assert post.metadata.title == "Hello"

    @pytest.mark.asyncio
    async def test_draft_isolation(self, index_service, post_service, make_post):
        """Test drafts are only visible in the draft slot."""
        await publish(index_service, "en/tech/wip", make_post(), Visibility.DRAFT)

        with pytest.raises(NotFoundError):
            await post_service.get_post("en", "tech", "wip")
        post = await post_service.get_post("en", "tech", "wip", Visibility.DRAFT)
        assert post.slug == "wip"

    @pytest.mark.asyncio
    async def test_not_found(self, post_service):
        with pytest.raises(NotFoundError) as exc_info:
            await post_service.get_post("en", "tech", "missing")
        assert exc_info.value.message == "Post not found"

    @pytest.mark.asyncio
    async def test_markdown_and_metadata(self, index_service, post_service, make_post):
        """Test content and metadata can be read separately."""
        content = make_post(title="Split")
        await publish(index_service, "en/tech/split", content)

        assert await post_service.get_markdown("en/tech/split") == content
        metadata = await post_service.get_post_metadata("en/tech/split")
        assert metadata.title == "Split"

        with pytest.raises(NotFoundError, match="Post metadata not found"):
            await post_service.get_post_metadata("en/tech/other")

    @pytest.mark.asyncio
    async def test_unindexed_key_reachable(self, index_service, post_service, make_post):
        """Test a two-segment key can still be read by its full key."""
        await publish(index_service, "tech/loose", make_post())

        post = await post_service.get_post_by_key("tech/loose")
        assert post.slug == "loose"

    @pytest.mark.asyncio
    async def test_content_without_metadata(self, store, post_service):
        """Test a post missing its metadata key is not found."""
        await store.put("published:en/tech/half", "body")
        assert await post_service.find_post("en/tech/half") is None


class TestListCategory:
    """Tests for category listings."""

    @pytest.mark.asyncio
    async def test_publish_order(self, index_service, post_service, make_post):
        for slug in ("first", "second"):
            await publish(index_service, f"en/tech/{slug}", make_post())

        posts = await post_service.list_category("en", "tech")
        assert [p.slug for p in posts] == ["first", "second"]

    @pytest.mark.asyncio
    async def test_missing_posts_skipped(self, store, index_service, post_service, make_post):
        """Test slugs without a post in the requested slot are left out."""
        await publish(index_service, "en/tech/real", make_post())
        await store.put("index:en/tech", '["ghost","real"]')

        posts = await post_service.list_category("en", "tech")
        assert [p.slug for p in posts] == ["real"]
        assert await post_service.list_category("en", "tech", Visibility.DRAFT) == []

    @pytest.mark.asyncio
    async def test_unknown_category_empty(self, post_service):
        assert await post_service.list_category("en", "nothing") == []


class TestInvalidStoredMetadata:
    """Tests for metadata records that don't validate, e.g. written by older deployments."""

    @pytest_asyncio.fixture
    async def legacy_store(self, store, index_service, make_post):
        await publish(index_service, "en/tech/good", make_post(title="Python Good"))
        await store.put("published:en/tech/legacy", "Python legacy body")
        await store.put(
            "metadata:published:en/tech/legacy", '{"title":"Legacy","date":"2024-01-01"}'
        )
        await store.put("index:en/tech", '["good","legacy"]')
        return store

    @pytest.mark.asyncio
    async def test_listings_skip_record(self, legacy_store, post_service):
        """Test listing, search and recent leave the record out."""
        assert [p.slug for p in await post_service.list_category("en", "tech")] == ["good"]
        assert [p.slug for p in await post_service.search("python")] == ["good"]
        assert [p.slug for p in await post_service.recent()] == ["good"]

    @pytest.mark.asyncio
    async def test_point_lookup_not_found(self, legacy_store, post_service):
        assert await post_service.find_post("en/tech/legacy") is None
        with pytest.raises(NotFoundError):
            await post_service.get_post("en", "tech", "legacy")

    @pytest.mark.asyncio
    async def test_metadata_lookup_reports_corruption(self, legacy_store, post_service):
        with pytest.raises(StoreUnavailableError) as exc_info:
            await post_service.get_post_metadata("en/tech/legacy")
        assert exc_info.value.message == (
            "Store unavailable: Corrupt metadata at metadata:published:en/tech/legacy"
        )


class TestSearch:
    """Tests for substring search."""

    @pytest.mark.asyncio
    async def test_matches_title_content_and_tags(self, index_service, post_service, make_post):
        """Test the query matches any of title, content or tags."""
        await publish(index_service, "en/tech/a", make_post(title="Python Tips"))
        await publish(
            index_service, "en/tech/b", make_post(title="Other", body="Learn PYTHON today")
        )
        await publish(
            index_service, "en/life/c", make_post(title="Snakes", tags="python, reptiles")
        )
        await publish(index_service, "en/life/d", make_post(title="Unrelated"))

        results = await post_service.search("python")
        assert [p.slug for p in results] == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_language_and_slot_scoped(self, index_service, post_service, make_post):
        """Test results only come from the requested language and slot."""
        await publish(index_service, "es/tech/a", make_post(title="Python en espanol"))
        await publish(index_service, "en/tech/b", make_post(title="Python"), Visibility.DRAFT)

        assert await post_service.search("python") == []
        assert [p.slug for p in await post_service.search("python", language="es")] == ["a"]

    @pytest.mark.asyncio
    async def test_empty_query_rejected(self, post_service):
        with pytest.raises(MalformedQueryError, match='"q" is required'):
            await post_service.search("")

    @pytest.mark.asyncio
    async def test_whitespace_query_is_searched(self, index_service, post_service, make_post):
        """Test a whitespace-only query is matched literally."""
        await publish(index_service, "en/tech/a", make_post(title="Two  Spaces"))
        await publish(index_service, "en/tech/b", make_post(title="One Space"))

        results = await post_service.search("  ")
        assert [p.slug for p in results] == ["a"]


class TestRecent:
    """Tests for recency listings."""

    @pytest.mark.asyncio
    async def test_newest_first(self, index_service, post_service, make_post):
        """Test posts are ordered by date and the limit applies."""
        for slug, date in (("jan", "2025-01-01"), ("mar", "2025-03-01"), ("feb", "2025-02-01")):
            await publish(index_service, f"en/tech/{slug}", make_post(date=date))

        recent = await post_service.recent(limit=2)
        assert [p.slug for p in recent] == ["mar", "feb"]

    @pytest.mark.asyncio
    async def test_unparseable_dates_last(self, index_service, post_service, make_post):
        await publish(index_service, "en/tech/vague", make_post(date="someday"))
        await publish(index_service, "en/tech/old", make_post(date="2020-01-01"))

        recent = await post_service.recent()
        assert [p.slug for p in recent] == ["old", "vague"]

    @pytest.mark.asyncio
    async def test_equal_dates_keep_scan_order(self, index_service, post_service, make_post):
        for slug in ("one", "two", "three"):
            await publish(index_service, f"en/tech/{slug}", make_post(date="2025-01-01"))

        recent = await post_service.recent()
        assert [p.slug for p in recent] == ["one", "two", "three"]

    @pytest.mark.asyncio
    async def test_limit_must_be_positive(self, post_service):
        with pytest.raises(MalformedQueryError):
            await post_service.recent(limit=0)
