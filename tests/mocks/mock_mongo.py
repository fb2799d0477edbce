"""Mock MongoDB client for testing."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock


def _matches(document: dict[str, Any], filter_: dict[str, Any]) -> bool:
    for key, condition in filter_.items():
        value = document.get(key)
        if isinstance(condition, dict) and "$in" in condition:
            if value not in condition["$in"]:
                return False
        elif value != condition:
            return False
    return True


class MockMongoCollection:
    """In-memory MongoDB collection.

    Supports equality and $in filters (a missing field matches None),
    $set updates, upserting replaces and sorted async cursors.
    """

    def __init__(self) -> None:
        self._documents: list[dict[str, Any]] = []
        self.indexes: list[tuple[Any, dict[str, Any]]] = []

    @property
    def documents(self) -> list[dict[str, Any]]:
        return self._documents

    async def insert_one(self, document: dict[str, Any]) -> MagicMock:
        self._documents.append(dict(document))
        result = MagicMock()
        result.inserted_id = len(self._documents) - 1
        return result

    async def replace_one(
        self,
        filter_: dict[str, Any],
        replacement: dict[str, Any],
        upsert: bool = False,
    ) -> MagicMock:
        result = MagicMock()
        for index, doc in enumerate(self._documents):
            if _matches(doc, filter_):
                self._documents[index] = dict(replacement)
                result.matched_count = 1
                result.modified_count = 1
                return result
        if upsert:
            self._documents.append(dict(replacement))
        result.matched_count = 0
        result.modified_count = 0
        return result

    async def update_one(
        self,
        filter_: dict[str, Any],
        update: dict[str, Any],
    ) -> MagicMock:
        result = MagicMock()
        for doc in self._documents:
            if _matches(doc, filter_):
                doc.update(update.get("$set", {}))
                result.matched_count = 1
                result.modified_count = 1
                return result
        result.matched_count = 0
        result.modified_count = 0
        return result

    async def find_one(self, filter_: dict[str, Any]) -> dict[str, Any] | None:
        for doc in self._documents:
            if _matches(doc, filter_):
                return dict(doc)
        return None

    async def count_documents(self, filter_: dict[str, Any]) -> int:
        return sum(1 for doc in self._documents if _matches(doc, filter_))

    async def create_index(self, keys: Any, **kwargs: Any) -> str:
        self.indexes.append((keys, kwargs))
        return str(keys)

    def find(self, filter_: dict[str, Any] | None = None) -> "MockCursor":
        docs = [dict(d) for d in self._documents if _matches(d, filter_ or {})]
        return MockCursor(docs)


class MockCursor:
    """Mock MongoDB cursor."""

    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self._documents = documents

    def sort(self, key: str, direction: int = 1) -> "MockCursor":
        self._documents.sort(key=lambda d: d.get(key) or 0, reverse=direction < 0)
        return self

    def limit(self, n: int) -> "MockCursor":
        self._documents = self._documents[:n]
        return self

    def __aiter__(self) -> "MockCursor":
        self._index = 0
        return self

    async def __anext__(self) -> dict[str, Any]:
        if self._index >= len(self._documents):
            raise StopAsyncIteration
        doc = self._documents[self._index]
        self._index += 1
        return doc


class MockMongoClient:
    """Stand-in for examcraft.infra.mongo.MongoClient."""

    def __init__(self) -> None:
        self.flashcards = MockMongoCollection()
        self.topics = MockMongoCollection()
        self.connect = AsyncMock()
        self.disconnect = AsyncMock()
        self.create_indexes = AsyncMock()
