"""In-process implementation for the link store."""

import asyncio
import logging
from typing import Dict, Optional

from .base import LinkStoreBase
from .models import InsertOutcome, Link


class MemoryLinkStore(LinkStoreBase):
    """Link store held in process memory.

    Enforces the same uniqueness constraints as the links table. Data lives
    only as long as the process, so it suits tests and single-process
    development.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._by_code: Dict[str, Link] = {}
        self._by_url: Dict[str, Link] = {}
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        self.logger.info("Using in-memory link store")

    async def ensure_schema(self) -> None:
        pass

    async def get_by_code(self, code: str) -> Optional[str]:
        async with self._lock:
            link = self._by_code.get(code)
        return link.url if link else None

    async def get_by_url(self, url: str) -> Optional[str]:
        async with self._lock:
            link = self._by_url.get(url)
        return link.code if link else None

    async def insert(self, code: str, url: str) -> InsertOutcome:
        """Insert a mapping iff both code and url are unused."""
        async with self._lock:
            # Primary key is checked first
            if code in self._by_code:
                return InsertOutcome.CODE_TAKEN
            if url in self._by_url:
                return InsertOutcome.URL_TAKEN

            link = Link(code=code, url=url)
            self._by_code[code] = link
            self._by_url[url] = link

        self.logger.debug(f"Inserted link: {code} -> {url}")
        return InsertOutcome.INSERTED

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass

    def __len__(self) -> int:
        return len(self._by_code)
