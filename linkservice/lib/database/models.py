"""Data models for the link service."""

import enum
from dataclasses import dataclass


@dataclass(frozen=True)
class Link:
    """Represents a code to URL mapping in the database."""

    code: str
    url: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "code": self.code,
            "url": self.url,
        }


class InsertOutcome(enum.Enum):
    """Result of a conditional insert."""

    INSERTED = "inserted"
    # Primary key violation: the generated code is already in use
    CODE_TAKEN = "code_taken"
    # Unique violation on url: another writer stored this URL first
    URL_TAKEN = "url_taken"
