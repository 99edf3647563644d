"""Pytest configuration and fixtures."""

import random
from contextlib import asynccontextmanager
from typing import List, Optional

import pytest

from linkservice.lib.codegen import CodeGenerator
from linkservice.lib.common.logging_config import setup_logging
from linkservice.lib.database.memory import MemoryLinkStore
from linkservice.lib.database.models import InsertOutcome
from linkservice.lib.errors import StoreError
from linkservice.lib.service import LinkService


class ScriptedGenerator(CodeGenerator):
    """Code generator that hands out a fixed sequence of codes."""

    def __init__(self, codes: List[str]):
        super().__init__()
        self.codes = list(codes)

    def generate(self) -> str:
        return self.codes.pop(0)


class RecordingStore(MemoryLinkStore):
    """Memory store that records every insert attempt."""

    def __init__(self):
        super().__init__()
        self.insert_calls = []

    async def insert(self, code: str, url: str) -> InsertOutcome:
        outcome = await super().insert(code, url)
        self.insert_calls.append((code, url, outcome))
        return outcome


class RacingStore(RecordingStore):
    """Simulates a concurrent writer storing the same URL between lookup and insert."""

    def __init__(self, winner_code: str):
        super().__init__()
        self.winner_code = winner_code
        self.raced = False

    async def insert(self, code: str, url: str) -> InsertOutcome:
        if not self.raced:
            self.raced = True
            await MemoryLinkStore.insert(self, self.winner_code, url)
        return await super().insert(code, url)


class FailingStore(MemoryLinkStore):
    """Memory store whose selected operations raise StoreError."""

    def __init__(self, fail_on: tuple = ("get_by_code", "get_by_url", "insert")):
        super().__init__()
        self.fail_on = fail_on

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.fail_on:
            raise StoreError(f"{operation} failed") from ConnectionRefusedError("db at 10.0.0.5:5432 refused connection")

    async def get_by_code(self, code: str) -> Optional[str]:
        self._maybe_fail("get_by_code")
        return await super().get_by_code(code)

    async def get_by_url(self, url: str) -> Optional[str]:
        self._maybe_fail("get_by_url")
        return await super().get_by_url(url)

    async def insert(self, code: str, url: str) -> InsertOutcome:
        self._maybe_fail("insert")
        return await super().insert(code, url)

    async def health_check(self) -> bool:
        return False


class FakeConnection:
    """Stand-in for an asyncpg connection."""

    def __init__(self, value=None, error: Optional[BaseException] = None, fail_times: Optional[int] = None):
        self.value = value
        self.error = error
        self.fail_times = fail_times
        self.calls = []

    def _maybe_raise(self):
        if self.error is None:
            return
        if self.fail_times is None or len(self.calls) <= self.fail_times:
            raise self.error

    async def execute(self, query, *args):
        self.calls.append((query, args))
        self._maybe_raise()
        return "INSERT 0 1"

    async def fetchval(self, query, *args):
        self.calls.append((query, args))
        self._maybe_raise()
        return self.value


def attach_connection(store, conn: FakeConnection) -> None:
    """Route a PostgresLinkStore's connections to ``conn``."""

    @asynccontextmanager
    async def _get_connection():
        yield conn

    store._get_connection = _get_connection


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store():
    """Create an empty in-memory store."""
    return MemoryLinkStore()


@pytest.fixture
def code_generator():
    """Create a seeded code generator."""
    return CodeGenerator(rng=random.Random(1234))


@pytest.fixture
def service(store, code_generator, logger) -> LinkService:
    """Create service instance."""
    return LinkService(
        store=store,
        generator=code_generator,
        logger=logger,
    )


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
