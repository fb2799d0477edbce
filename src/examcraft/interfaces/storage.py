"""Storage interface for examcraft.

This module defines the Protocol for the persisted-storage collaborator
that holds flashcards and topics.
"""

from typing import ClassVar, Protocol, runtime_checkable

from examcraft.models.flashcard import FlashcardDTO, MasteryStatus
from examcraft.models.topic import TopicDTO

__all__ = [
    "FlashcardRepositoryInterface",
]


@runtime_checkable
class FlashcardRepositoryInterface(Protocol):
    """Contract for flashcard persistence.

    Implementations raise RepositoryError for any transport or storage
    failure. Mastery writes are last-write-wins; no version token is
    checked.
    """

    config_class: ClassVar[type | None] = None

    # Study reads
    async def fetch_cards_by_user_and_topic(
        self,
        user_id: str,
        topic_id: str,
    ) -> list[FlashcardDTO]:
        """Get every card a learner owns in a topic.

        Cards without a topic match only topic_id "general".

        Args:
            user_id: Owning learner
            topic_id: Topic to match

        Returns:
            List of cards, topic relation embedded where known
        """
        ...

    async def fetch_cards_by_user_and_mastery(
        self,
        user_id: str,
        mastery_status: MasteryStatus,
    ) -> list[FlashcardDTO]:
        """Get every card a learner owns with the given mastery status.

        Args:
            user_id: Owning learner
            mastery_status: Status to match

        Returns:
            List of cards across all topics
        """
        ...

    async def update_card_mastery(
        self,
        flashcard_id: str,
        status: MasteryStatus,
        consecutive_correct: int,
    ) -> bool:
        """Write back a card's mastery state.

        Args:
            flashcard_id: Card to update
            status: New mastery status
            consecutive_correct: New streak value

        Returns:
            True if a card was updated, False otherwise
        """
        ...

    # Card operations
    async def get_flashcard(self, flashcard_id: str) -> FlashcardDTO | None:
        """Get a card by ID.

        Args:
            flashcard_id: Card ID to retrieve

        Returns:
            FlashcardDTO if found, None otherwise
        """
        ...

    async def save_flashcard(self, flashcard: FlashcardDTO) -> str:
        """Save or replace a card.

        Args:
            flashcard: Card to save

        Returns:
            Flashcard ID
        """
        ...

    # Topic operations
    async def save_topic(self, topic: TopicDTO) -> str:
        """Save or replace a topic.

        Args:
            topic: Topic to save

        Returns:
            Topic ID
        """
        ...

    async def get_topic(self, topic_id: str) -> TopicDTO | None:
        """Get a topic by ID.

        Args:
            topic_id: Topic ID to retrieve

        Returns:
            TopicDTO if found, None otherwise
        """
        ...
