"""
Key-value store contract.

The indexing core treats the store as an opaque durable mapping from
string key to string value. Single-key replace is atomic; nothing spans
more than one key.
"""

from abc import ABC, abstractmethod
from typing import Any


class KeyValueStore(ABC):
    """
    Abstract async key-value store.

    Implementations must raise StoreUnavailableError when the backend
    cannot be reached, and return None for absent keys.
    """

    backend: str = "abstract"

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """
        Read a value.

        Args:
            key: Storage key

        Returns:
            Stored string or None if the key is absent
        """

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """
        Replace the value stored at key.

        Args:
            key: Storage key
            value: String value to store
        """

    async def health_check(self) -> dict[str, Any]:
        """Report backend health."""
        return {"status": "healthy", "backend": self.backend}

    async def close(self) -> None:
        """Release backend resources."""
