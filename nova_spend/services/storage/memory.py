"""In-memory storage implementation, mainly for tests."""

import json
from typing import Any, Iterable, Mapping, Optional

from nova_spend.services.storage.interface import KeyValueStore, encode_document


class InMemoryStore(KeyValueStore):
    """
    Dict-backed store.

    Documents are kept as JSON text, so callers always get a fresh copy
    and non-serializable values fail exactly as they would on disk.
    """

    def __init__(self, initial: Optional[Mapping[str, Any]] = None):
        self._records: dict[str, str] = {}
        if initial:
            self.set_many(initial)

    def get(self, key: str) -> Optional[Any]:
        text = self._records.get(key)
        return None if text is None else json.loads(text)

    def set_many(self, documents: Mapping[str, Any]) -> None:
        encoded = {key: encode_document(key, doc) for key, doc in documents.items()}
        self._records.update(encoded)

    def remove_many(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._records.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._records.keys())
