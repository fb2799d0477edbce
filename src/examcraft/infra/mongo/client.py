"""MongoDB client for examcraft.

This module provides an async MongoDB client wrapper using Motor.
"""

from typing import TYPE_CHECKING, Any

from examcraft.config import MongoSettings
from examcraft.logging import get_logger

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

__all__ = [
    "MongoClient",
]

logger = get_logger(__name__)


class MongoClient:
    """Async MongoDB client wrapper.

    Provides a connection manager and collection accessors
    for the examcraft MongoDB database.

    Example:
        async with MongoClient(settings) as client:
            await client.flashcards.find_one({"flashcard_id": card_id})
    """

    def __init__(self, settings: MongoSettings) -> None:
        """Initialize client with settings.

        Args:
            settings: MongoDB connection settings
        """
        self._settings = settings
        self._client = None
        self._db = None

    async def connect(self) -> None:
        """Initialize connection to MongoDB."""
        if self._client is not None:
            return
        from motor.motor_asyncio import AsyncIOMotorClient

        uri = self._settings.uri.get_secret_value()
        self._client = AsyncIOMotorClient(uri)
        self._db = self._client[self._settings.database]

        # Verify connection
        await self._client.admin.command("ping")
        logger.info("connected_to_mongodb", database=self._settings.database)

    async def disconnect(self) -> None:
        """Close connection to MongoDB."""
        if self._client:
            self._client.close()
            self._client = None
            self._db = None
            logger.info("disconnected_from_mongodb")

    @property
    def db(self) -> "AsyncIOMotorDatabase[dict[str, Any]]":
        """Get database instance.

        Raises:
            RuntimeError: If not connected
        """
        if self._db is None:
            raise RuntimeError("MongoClient not connected. Call connect() first.")
        return self._db

    def _collection(self, name: str) -> "AsyncIOMotorCollection[dict[str, Any]]":
        """Get collection with optional prefix."""
        return self.db[f"{self._settings.collection_prefix}{name}"]

    @property
    def flashcards(self) -> "AsyncIOMotorCollection[dict[str, Any]]":
        """Get flashcards collection."""
        return self._collection("flashcards")

    @property
    def topics(self) -> "AsyncIOMotorCollection[dict[str, Any]]":
        """Get topics collection."""
        return self._collection("topics")

    async def create_indexes(self) -> None:
        """Create indexes backing the study-session reads."""
        await self.flashcards.create_index("flashcard_id", unique=True)
        await self.flashcards.create_index([("user_id", 1), ("topic_id", 1)])
        await self.flashcards.create_index([("user_id", 1), ("mastery_status", 1)])

        await self.topics.create_index("topic_id", unique=True)

        logger.info("created_mongodb_indexes")

    async def __aenter__(self) -> "MongoClient":
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.disconnect()
