"""Database layer for the link service."""

from .base import LinkStoreBase
from .memory import MemoryLinkStore
from .models import InsertOutcome, Link
from .postgres import PostgresLinkStore

__all__ = [
    "LinkStoreBase",
    "MemoryLinkStore",
    "PostgresLinkStore",
    "InsertOutcome",
    "Link",
]
