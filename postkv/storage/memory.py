"""In-process key-value store for tests and local development."""

from postkv.storage.base import KeyValueStore


class InMemoryStore(KeyValueStore):
    """Dictionary-backed store. State lives only as long as the instance."""

    backend = "memory"

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def put(self, key: str, value: str) -> None:
        self._data[key] = value

    def keys(self) -> list[str]:
        """Return all stored keys in insertion order."""
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)
