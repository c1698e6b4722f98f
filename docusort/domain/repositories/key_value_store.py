"""Key/value store interface (Abstract Base Class)."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class KeyValueStore(ABC):
    """Durable store of JSON-compatible values under string keys.

    Implementations raise :class:`RepositoryError` when the backing storage
    is unreachable or holds data that cannot be decoded.
    """

    def open(self) -> None:
        """Prepare the backing storage; default is a no-op."""

    def close(self) -> None:
        """Flush and release the backing storage; default is a no-op."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the value stored under ``key`` or ``None``."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove ``key``; return True if something was removed."""
