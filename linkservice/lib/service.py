"""Business logic service for the link service."""

import logging
from typing import Dict, Optional

from .codegen import CodeGenerator
from .database.base import LinkStoreBase
from .database.models import InsertOutcome
from .errors import InvalidInputError, NotFoundError, RequestProcessingError, StoreError
from .common.validators import is_valid_url, is_valid_code


class LinkService:
    """Allocates short codes for URLs and resolves them back.

    Holds no mapping state of its own: uniqueness of codes and URLs is
    enforced by the store, so any number of service instances may share
    one store concurrently.
    """

    def __init__(
        self,
        store: LinkStoreBase,
        generator: Optional[CodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize link service.

        Args:
            store: Store holding the links table
            generator: Optional short code generator
            logger: Optional logger
        """
        self.store = store
        self.generator = generator or CodeGenerator()
        self.logger = logger or logging.getLogger(__name__)

    async def create(self, url: str) -> str:
        """Return the short code for a URL, allocating one if needed.

        Repeated calls with the same URL return the same code, including
        calls that race each other on different service instances.

        Args:
            url: The URL to shorten

        Returns:
            The short code mapped to ``url``

        Raises:
            InvalidInputError: If the URL is malformed
            RequestProcessingError: If the store fails
        """
        is_valid, error = is_valid_url(url)
        if not is_valid:
            raise InvalidInputError(f"Invalid URL: {error}")

        try:
            code = await self.store.get_by_url(url)
            if code is not None:
                self.logger.debug(f"Found existing link: {code} -> {url}")
                return code

            code = await self._allocate(url)
        except StoreError as e:
            self.logger.error(f"Create failed for {url}: {e} ({e.__cause__!r})")
            raise RequestProcessingError() from e

        self.logger.info(f"Created link: {code} -> {url}")
        return code

    async def resolve(self, code: str) -> str:
        """Get the URL for a short code.

        Args:
            code: The short code to lookup

        Returns:
            The URL mapped to ``code``

        Raises:
            InvalidInputError: If the code is malformed
            NotFoundError: If no URL is mapped to the code
            RequestProcessingError: If the store fails
        """
        is_valid, error = is_valid_code(code)
        if not is_valid:
            raise InvalidInputError(f"Invalid short code: {error}")

        try:
            url = await self.store.get_by_code(code)
        except StoreError as e:
            self.logger.error(f"Resolve failed for {code}: {e} ({e.__cause__!r})")
            raise RequestProcessingError() from e

        if url is None:
            self.logger.warning(f"Short code not found: {code}")
            raise NotFoundError(f"Short code '{code}' not found")

        self.logger.debug(f"Resolved link: {code} -> {url}")
        return url

    async def _allocate(self, url: str) -> str:
        """Insert ``url`` under a fresh random code.

        Code collisions are retried without bound; with 63**10 possible
        codes a repeat is vanishingly rare. A URL collision means another
        writer stored the same URL after our lookup, so its code is returned.
        """
        attempts = 0
        while True:
            attempts += 1
            code = self.generator.generate()
            outcome = await self.store.insert(code, url)

            if outcome is InsertOutcome.INSERTED:
                if attempts > 1:
                    self.logger.debug(f"Allocated code after {attempts} attempts: {code}")
                return code

            if outcome is InsertOutcome.CODE_TAKEN:
                self.logger.debug(f"Code collision on {code}, generating another")
                continue

            # InsertOutcome.URL_TAKEN
            winner = await self.store.get_by_url(url)
            if winner is None:
                raise StoreError(f"URL reported as taken but not found: {url}")
            self.logger.info(f"Concurrent create for {url} resolved to existing code {winner}")
            return winner

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.store.health_check()

        return {
            "database": db_healthy,
            "overall": db_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.store.close()
