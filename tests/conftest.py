"""
Pytest configuration and shared fixtures.

Provides an in-memory key-value store, services bound to it, a sample
post factory, and an HTTP test client wired to the same store.
"""

from collections.abc import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from postkv.main import app
from postkv.services.category_service import CategoryService
from postkv.services.index_service import IndexService
from postkv.services.post_service import PostService
from postkv.storage.memory import InMemoryStore
from postkv.storage.session import get_store


def render_post(
    title: str = "Test Post",
    date: str = "2025-01-15",
    author: str = "Test Author",
    category: str = "tech",
    status: str = "published",
    body: str = "# Heading\n\nBody text.",
    **extra: str,
) -> str:
    """Render a markdown post with a front matter header."""
    lines = [
        "---",
        f"title: {title}",
        f"date: {date}",
        f"author: {author}",
        f"status: {status}",
        f"category: {category}",
    ]
    lines.extend(f"{key}: {value}" for key, value in extra.items())
    lines.append("---")
    return "\n".join(lines) + "\n" + body


@pytest.fixture
def make_post() -> Callable[..., str]:
    """Factory for markdown posts with front matter."""
    return render_post


@pytest.fixture
def store() -> InMemoryStore:
    """Fresh in-memory store for each test."""
    return InMemoryStore()


@pytest.fixture
def index_service(store: InMemoryStore) -> IndexService:
    return IndexService(store)


@pytest.fixture
def post_service(store: InMemoryStore) -> PostService:
    return PostService(store)


@pytest.fixture
def category_service(store: InMemoryStore) -> CategoryService:
    return CategoryService(store)


@pytest_asyncio.fixture(scope="function")
async def async_client(store: InMemoryStore) -> AsyncGenerator[AsyncClient]:
    """
    Provide async HTTP test client with store override.

    Overrides the store dependency with the test store so requests
    and direct service calls see the same data.
    """

    async def override_get_store():
        return store

    app.dependency_overrides[get_store] = override_get_store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()
