"""Key-value store package."""

from postkv.storage.base import KeyValueStore
from postkv.storage.memory import InMemoryStore
from postkv.storage.redis_store import RedisStore
from postkv.storage.session import close_store, create_store, get_store, init_store

__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "RedisStore",
    "close_store",
    "create_store",
    "get_store",
    "init_store",
]
