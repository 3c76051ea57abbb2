"""
Storage Services Package

Provides the abstract key-value interface and its implementations.
The JSON file store is the production backend; the in-memory store is
a drop-in replacement for tests.
"""

from nova_spend.services.storage.interface import (
    KeyValueStore,
    RecordKeys,
    StorageError,
    encode_document,
)
from nova_spend.services.storage.json_file import JsonFileStore
from nova_spend.services.storage.memory import InMemoryStore

__all__ = [
    # Interface
    "KeyValueStore",
    "RecordKeys",
    "encode_document",
    # Exceptions
    "StorageError",
    # Implementations
    "InMemoryStore",
    "JsonFileStore",
]
