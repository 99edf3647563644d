"""Integration tests against a live PostgreSQL database.

Set LINKSERVICE_TEST_DATABASE_URL to a disposable database to run them.
"""

import asyncio
import os
import uuid

import pytest
from httpx import ASGITransport, AsyncClient

from linkservice.config import Config
from linkservice.lib.common.logging_config import setup_logging
from linkservice.lib.common.validators import CODE_PATTERN
from linkservice.lib.database.models import InsertOutcome
from linkservice.lib.database.postgres import PostgresLinkStore
from linkservice.lib.errors import InvalidInputError, NotFoundError
from linkservice.lib.service import LinkService
from linkservice.web_app import create_app

DATABASE_URL = os.environ.get("LINKSERVICE_TEST_DATABASE_URL")

pytestmark = pytest.mark.skipif(
    not DATABASE_URL,
    reason="LINKSERVICE_TEST_DATABASE_URL not set",
)


def unique_url(path: str = "") -> str:
    return f"https://{uuid.uuid4().hex}.example.com/{path}"


@pytest.fixture
async def pg_store():
    logger = setup_logging(level="DEBUG")
    store = PostgresLinkStore(dsn=DATABASE_URL, connect_retries=1, logger=logger)
    await store.connect()
    await store.ensure_schema()
    yield store
    await store.close()


@pytest.mark.asyncio
class TestIntegration:
    """End-to-end integration tests."""

    async def test_full_link_lifecycle(self, pg_store):
        """Test shorten, lookup and redirect through the HTTP surface."""
        service = LinkService(store=pg_store, logger=pg_store.logger)
        config = Config(database_url=DATABASE_URL, base_url="http://testserver")
        app = create_app(store_instance=pg_store, service_instance=service, config=config)
        url = unique_url("lifecycle")

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
            # 1. Create short link
            create_response = await client.post("/api/links", json={"url": url})
            assert create_response.status_code == 200
            code = create_response.json()["code"]
            assert CODE_PATTERN.fullmatch(code)

            # 2. Same URL gives the same code
            again = await client.post("/api/links", json={"url": url})
            assert again.json()["code"] == code

            # 3. Lookup
            lookup = await client.get(f"/api/links/{code}")
            assert lookup.json() == {"code": code, "url": url}

            # 4. Redirect
            redirect = await client.get(f"/{code}", follow_redirects=False)
            assert redirect.status_code == 302
            assert redirect.headers["location"] == url

            # 5. Health
            health = await client.get("/api/health")
            assert health.json()["database"] == "healthy"

    async def test_known_urls(self, pg_store):
        service = LinkService(store=pg_store, logger=pg_store.logger)
        urls = [unique_url(), unique_url("filename.txt"), unique_url("a/b?c=d")]

        codes = [await service.create(url) for url in urls]

        assert len(set(codes)) == len(urls)
        for code, url in zip(codes, urls):
            assert await service.resolve(code) == url

    async def test_invalid_input(self, pg_store):
        service = LinkService(store=pg_store, logger=pg_store.logger)

        with pytest.raises(InvalidInputError):
            await service.create("this is not a URL")
        with pytest.raises(InvalidInputError):
            await service.resolve("@5gfh35^Gdfh&EWR")

    async def test_unassigned_code(self, pg_store):
        service = LinkService(store=pg_store, logger=pg_store.logger)

        code = uuid.uuid4().hex[:10]
        assert await pg_store.get_by_code(code) is None

        with pytest.raises(NotFoundError):
            await service.resolve(code)

    async def test_constraint_classification(self, pg_store):
        url = unique_url("constraints")
        code = uuid.uuid4().hex[:10]

        assert await pg_store.insert(code, url) is InsertOutcome.INSERTED
        assert await pg_store.insert(code, unique_url()) is InsertOutcome.CODE_TAKEN
        assert await pg_store.insert(uuid.uuid4().hex[:10], url) is InsertOutcome.URL_TAKEN

    async def test_concurrent_services_agree(self, pg_store):
        """Test two services sharing one table converge on one code per URL."""
        first = LinkService(store=pg_store, logger=pg_store.logger)
        second = LinkService(store=pg_store, logger=pg_store.logger)
        url = unique_url("race")

        codes = await asyncio.gather(*(
            (first if i % 2 else second).create(url) for i in range(20)
        ))

        assert len(set(codes)) == 1
        assert await pg_store.get_by_url(url) == codes[0]
