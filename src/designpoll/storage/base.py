"""Base blob store interface.

Blob stores hold uploaded design images: narrow interface
`store(key, data) -> locator`, `delete(key)`.
They must not touch the record store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BlobStore(ABC):
    """Abstract base class for design image storage."""

    @abstractmethod
    def store(self, key: str, data: bytes) -> str:
        """Store bytes under key.

        Args:
            key: Storage key, e.g. "designs/1700000000000_logo.png".
            data: Raw image bytes.

        Returns:
            Locator the UI can fetch the image from.
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Release the object under key.

        Raises:
            FileNotFoundError: If no object exists under key.
        """
        pass

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return True if an object exists under key."""
        pass
