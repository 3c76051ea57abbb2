"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for the key-value store.
This allows us to:
1. Keep state in a durable JSON file in production
2. Use in-memory storage for testing
3. Inject the store into every service instead of sharing a global

The interface is intentionally tiny - the store holds four JSON documents
and knows nothing about what is inside them. Validation and defaulting are
the reader's job.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class RecordKeys(BaseModel):
    """
    The four record keys in use.

    The default prefix "app" gives appSettings, appStats,
    appTransactions and appCurrency.
    """
    model_config = ConfigDict(frozen=True)

    settings: str = "appSettings"
    stats: str = "appStats"
    transactions: str = "appTransactions"
    currency: str = "appCurrency"

    @classmethod
    def with_prefix(cls, prefix: str) -> "RecordKeys":
        return cls(
            settings=f"{prefix}Settings",
            stats=f"{prefix}Stats",
            transactions=f"{prefix}Transactions",
            currency=f"{prefix}Currency",
        )

    def all_keys(self) -> list[str]:
        return [self.settings, self.stats, self.transactions, self.currency]


def encode_document(key: str, document: Any) -> str:
    """
    Serialize a document to JSON text.

    Raises:
        StorageError: If the document is not JSON-serializable
    """
    try:
        return json.dumps(document, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise StorageError(f"Record {key!r} is not JSON-serializable: {e}")


class KeyValueStore(ABC):
    """
    Abstract interface for the persistent key-value store.

    Any storage implementation must implement these methods.
    Values are JSON documents (dict, list, str, number, bool or None).
    """

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """
        Read a document.

        Args:
            key: Record key

        Returns:
            The stored document, or None if the key is absent
        """
        pass

    @abstractmethod
    def set_many(self, documents: Mapping[str, Any]) -> None:
        """
        Write several documents in a single commit.

        Either every document is written or none is.

        Raises:
            StorageError: If a document cannot be serialized or persisted
        """
        pass

    @abstractmethod
    def remove_many(self, keys: Iterable[str]) -> None:
        """
        Remove several keys in a single commit. Absent keys are ignored.

        Raises:
            StorageError: If the change cannot be persisted
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List all stored keys."""
        pass

    def set(self, key: str, document: Any) -> None:
        """Write one document."""
        self.set_many({key: document})

    def remove(self, key: str) -> None:
        """Remove one key."""
        self.remove_many([key])

    def __contains__(self, key: str) -> bool:
        return key in self.keys()
