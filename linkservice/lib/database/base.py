"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from typing import Optional

from .models import InsertOutcome


class LinkStoreBase(ABC):
    """Abstract base class for the persistent code to URL table.

    Implementations guarantee that ``code`` and ``url`` are each unique and
    that every primitive below is atomic. Failures other than a classified
    uniqueness violation are raised as ``StoreError``.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open connections to the backing store."""
        pass

    @abstractmethod
    async def ensure_schema(self) -> None:
        """Create the links table if it does not exist."""
        pass

    @abstractmethod
    async def get_by_code(self, code: str) -> Optional[str]:
        """Get the URL stored for a short code.

        Args:
            code: The short code to lookup

        Returns:
            The URL if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_url(self, url: str) -> Optional[str]:
        """Get the short code stored for a URL.

        Args:
            url: The URL to lookup

        Returns:
            The short code if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert(self, code: str, url: str) -> InsertOutcome:
        """Insert a mapping iff both code and url are unused.

        Args:
            code: The short code to store
            url: The URL to store

        Returns:
            INSERTED on success, CODE_TAKEN or URL_TAKEN naming the
            violated uniqueness constraint
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close store connections."""
        pass
