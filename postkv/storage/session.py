"""
Key-value store lifecycle and dependency injection.

Provides the process-wide store instance and the FastAPI dependency
that hands it to route handlers.
"""

from postkv.core.config import settings
from postkv.core.logging import get_logger
from postkv.storage.base import KeyValueStore
from postkv.storage.memory import InMemoryStore
from postkv.storage.redis_store import RedisStore

logger = get_logger(__name__)

_store: KeyValueStore | None = None


def create_store(backend: str | None = None) -> KeyValueStore:
    """
    Build a store for the configured backend.

    Args:
        backend: "redis" or "memory", defaults to settings.STORE_BACKEND

    Returns:
        New store instance
    """
    backend = backend or settings.STORE_BACKEND
    if backend == "memory":
        return InMemoryStore()
    if backend == "redis":
        return RedisStore()
    raise ValueError(f"Unknown store backend: {backend}")


async def get_store() -> KeyValueStore:
    """
    Dependency function returning the shared store.

    The store is created lazily so handlers work even when the
    application lifespan has not run (e.g. some test clients).

    Example:
        @router.get("/items")
        async def get_items(store: KeyValueStore = Depends(get_store)):
            return await store.get("items")
    """
    global _store
    if _store is None:
        _store = create_store()
    return _store


async def init_store() -> KeyValueStore:
    """
    Create the store and verify connectivity.

    Called during application startup. An unhealthy store is logged
    but does not stop startup; requests will surface the failure.
    """
    store = await get_store()
    health = await store.health_check()
    if health["status"] == "healthy":
        logger.info(f"Key-value store ready ({store.backend})")
    else:
        logger.warning(f"Key-value store unhealthy ({store.backend}): {health.get('error')}")
    return store


async def close_store() -> None:
    """Close the shared store. Called during application shutdown."""
    global _store
    if _store is None:
        return
    try:
        await _store.close()
    except Exception as e:
        logger.error(f"Error closing key-value store: {e}")
        raise
    finally:
        _store = None
