"""MongoDB repositories for examcraft.

This module provides the MongoDB implementation of the flashcard
storage interface.
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Self

from pymongo.errors import PyMongoError

from examcraft.config import MongoSettings
from examcraft.exceptions import RepositoryError
from examcraft.infra.mongo.client import MongoClient
from examcraft.interfaces.storage import FlashcardRepositoryInterface
from examcraft.logging import get_logger
from examcraft.models.flashcard import FlashcardDTO, MasteryStatus
from examcraft.models.topic import GENERAL_TOPIC_ID, TopicDTO

__all__ = [
    "MongoFlashcardRepository",
]

logger = get_logger(__name__)


@contextmanager
def _storage_errors(operation: str, **context: Any) -> Iterator[None]:
    """Translate driver failures into RepositoryError."""
    try:
        yield
    except PyMongoError as e:
        logger.error("mongodb_operation_failed", operation=operation, error=str(e), **context)
        raise RepositoryError(f"{operation} failed: {e}") from e


class MongoFlashcardRepository(FlashcardRepositoryInterface):
    """MongoDB implementation of FlashcardRepositoryInterface.

    Flashcards and topics live in separate collections; topic relations
    are embedded into returned cards with one extra lookup per read.
    Mastery updates are plain $set writes (last write wins).
    """

    config_class = MongoSettings

    def __init__(self, client: MongoClient) -> None:
        """Initialize repository with MongoDB client.

        Args:
            client: Connected MongoClient instance
        """
        self._client = client
        self._owns_client = False

    @classmethod
    async def from_config(cls, config: MongoSettings) -> Self:
        """Factory method for ExamCraft instantiation.

        Creates a MongoClient, connects, creates indexes, and returns repository.

        Args:
            config: MongoDB settings

        Returns:
            Connected MongoFlashcardRepository instance
        """
        client = MongoClient(config)
        await client.connect()
        await client.create_indexes()

        instance = cls(client)
        instance._owns_client = True
        return instance

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for custom config dict.

        Args:
            config: Dictionary with MongoDB settings

        Returns:
            Connected MongoFlashcardRepository instance
        """
        settings = MongoSettings(**config)
        return await cls.from_config(settings)

    async def close(self) -> None:
        """Close owned resources."""
        if self._owns_client and self._client:
            await self._client.disconnect()

    # Study reads
    async def fetch_cards_by_user_and_topic(
        self,
        user_id: str,
        topic_id: str,
    ) -> list[FlashcardDTO]:
        """Get every card a learner owns in a topic."""
        query = {"user_id": user_id, "topic_id": self._topic_condition(topic_id)}
        with _storage_errors("fetch_cards_by_user_and_topic", user_id=user_id):
            cursor = self._client.flashcards.find(query).sort("created_on", 1)
            docs = [doc async for doc in cursor]
            return await self._with_topics(docs)

    async def fetch_cards_by_user_and_mastery(
        self,
        user_id: str,
        mastery_status: MasteryStatus,
    ) -> list[FlashcardDTO]:
        """Get every card a learner owns with the given mastery status."""
        query = {"user_id": user_id, "mastery_status": MasteryStatus(mastery_status).value}
        with _storage_errors("fetch_cards_by_user_and_mastery", user_id=user_id):
            cursor = self._client.flashcards.find(query).sort("created_on", 1)
            docs = [doc async for doc in cursor]
            return await self._with_topics(docs)

    async def update_card_mastery(
        self,
        flashcard_id: str,
        status: MasteryStatus,
        consecutive_correct: int,
    ) -> bool:
        """Write back a card's mastery state."""
        with _storage_errors("update_card_mastery", flashcard_id=flashcard_id):
            result = await self._client.flashcards.update_one(
                {"flashcard_id": flashcard_id},
                {
                    "$set": {
                        "mastery_status": MasteryStatus(status).value,
                        "consecutive_correct": consecutive_correct,
                        "updated_on": int(time.time()),
                    },
                },
            )
        return result.matched_count > 0

    # Card operations
    async def get_flashcard(self, flashcard_id: str) -> FlashcardDTO | None:
        """Get a card by ID."""
        with _storage_errors("get_flashcard", flashcard_id=flashcard_id):
            doc = await self._client.flashcards.find_one({"flashcard_id": flashcard_id})
            if not doc:
                return None
            cards = await self._with_topics([doc])
        return cards[0]

    async def save_flashcard(self, flashcard: FlashcardDTO) -> str:
        """Save or replace a card."""
        doc = self._flashcard_to_doc(flashcard)
        with _storage_errors("save_flashcard", flashcard_id=flashcard.flashcard_id):
            await self._client.flashcards.replace_one(
                {"flashcard_id": flashcard.flashcard_id},
                doc,
                upsert=True,
            )
        return flashcard.flashcard_id

    # Topic operations
    async def save_topic(self, topic: TopicDTO) -> str:
        """Save or replace a topic."""
        doc = self._topic_to_doc(topic)
        with _storage_errors("save_topic", topic_id=topic.topic_id):
            await self._client.topics.replace_one(
                {"topic_id": topic.topic_id},
                doc,
                upsert=True,
            )
        return topic.topic_id

    async def get_topic(self, topic_id: str) -> TopicDTO | None:
        """Get a topic by ID."""
        with _storage_errors("get_topic", topic_id=topic_id):
            doc = await self._client.topics.find_one({"topic_id": topic_id})
        return self._doc_to_topic(doc) if doc else None

    # Helpers
    @staticmethod
    def _topic_condition(topic_id: str) -> Any:
        """Match condition for a topic; "general" also matches missing topics."""
        if topic_id == GENERAL_TOPIC_ID:
            return {"$in": [None, GENERAL_TOPIC_ID]}
        return topic_id

    async def _with_topics(self, docs: list[dict[str, Any]]) -> list[FlashcardDTO]:
        """Convert documents to cards, embedding their topic relations."""
        topic_ids = sorted({doc["topic_id"] for doc in docs if doc.get("topic_id")})
        topics: dict[str, TopicDTO] = {}
        if topic_ids:
            cursor = self._client.topics.find({"topic_id": {"$in": topic_ids}})
            async for topic_doc in cursor:
                topic = self._doc_to_topic(topic_doc)
                topics[topic.topic_id] = topic

        return [
            self._doc_to_flashcard(doc, topics.get(doc.get("topic_id") or ""))
            for doc in docs
        ]

    # Document conversion helpers
    @staticmethod
    def _flashcard_to_doc(flashcard: FlashcardDTO) -> dict[str, Any]:
        return {
            "flashcard_id": flashcard.flashcard_id,
            "user_id": flashcard.user_id,
            "question": flashcard.question,
            "answer": flashcard.answer,
            "topic_id": flashcard.topic_id,
            "source_question_id": flashcard.source_question_id,
            "tags": flashcard.tags,
            "mastery_status": flashcard.mastery_status.value,
            "consecutive_correct": flashcard.consecutive_correct,
            "created_on": flashcard.created_on,
            "updated_on": flashcard.updated_on,
            "schema_version": flashcard.schema_version,
        }

    @staticmethod
    def _doc_to_flashcard(doc: dict[str, Any], topic: TopicDTO | None) -> FlashcardDTO:
        return FlashcardDTO(
            flashcard_id=doc["flashcard_id"],
            user_id=doc["user_id"],
            question=doc["question"],
            answer=doc["answer"],
            topic_id=doc.get("topic_id"),
            topic=topic,
            source_question_id=doc.get("source_question_id"),
            tags=doc.get("tags", []),
            mastery_status=MasteryStatus(doc.get("mastery_status") or MasteryStatus.LEARNING),
            consecutive_correct=doc.get("consecutive_correct", 0),
            created_on=doc.get("created_on", 0),
            updated_on=doc.get("updated_on", 0),
            schema_version=doc.get("schema_version", 1),
        )

    @staticmethod
    def _topic_to_doc(topic: TopicDTO) -> dict[str, Any]:
        return {
            "topic_id": topic.topic_id,
            "name": topic.name,
            "description": topic.description,
            "schema_version": topic.schema_version,
        }

    @staticmethod
    def _doc_to_topic(doc: dict[str, Any]) -> TopicDTO:
        return TopicDTO(
            topic_id=doc["topic_id"],
            name=doc["name"],
            description=doc.get("description"),
            schema_version=doc.get("schema_version", 1),
        )
