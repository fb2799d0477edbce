"""Performance recording service for examcraft.

This module wires MasteryTracker to storage: load the card, compute the
transition, write the new pair back.
"""

from examcraft.exceptions import FlashcardNotFound, InvalidInput, RepositoryError
from examcraft.interfaces.storage import FlashcardRepositoryInterface
from examcraft.logging import get_logger
from examcraft.models.flashcard import Performance
from examcraft.models.session import PerformanceResult
from examcraft.services.mastery_tracker import mastery_message, next_mastery, parse_performance

__all__ = [
    "ProgressService",
]

logger = get_logger(__name__)


class ProgressService:
    """Records "know"/"dont_know" signals against flashcards.

    The write-back is last-write-wins: two gradings of the same card from
    two open sessions can overwrite each other.

    Example:
        service = ProgressService(repository)
        result = await service.record_performance(flashcard_id, "know")
        session = session.apply_update(flashcard_id, result.update)
    """

    def __init__(self, repository: FlashcardRepositoryInterface) -> None:
        """Initialize service with dependencies.

        Args:
            repository: Flashcard storage
        """
        self._repository = repository

    async def record_performance(
        self,
        flashcard_id: str,
        performance: str | Performance,
    ) -> PerformanceResult:
        """Apply one performance signal to a flashcard and persist it.

        Args:
            flashcard_id: Card being graded
            performance: "know" or "dont_know"

        Returns:
            PerformanceResult with the new state and an encouragement message

        Raises:
            InvalidInput: If flashcard_id is missing or performance is invalid
            FlashcardNotFound: If the card does not exist
            RepositoryError: If the read or the write-back fails
        """
        if not flashcard_id:
            raise InvalidInput("Flashcard ID and performance are required")
        signal = parse_performance(performance)

        card = await self._repository.get_flashcard(flashcard_id)
        if card is None:
            raise FlashcardNotFound(flashcard_id)

        update = next_mastery(signal, card.mastery_status, card.consecutive_correct)

        updated = await self._repository.update_card_mastery(
            flashcard_id,
            update.mastery_status,
            update.consecutive_correct,
        )
        if not updated:
            logger.error("mastery_update_failed", flashcard_id=flashcard_id)
            raise RepositoryError(f"Failed to update flashcard {flashcard_id}")

        logger.info(
            "mastery_updated",
            flashcard_id=flashcard_id,
            performance=signal.value,
            old_status=card.mastery_status.value,
            new_status=update.mastery_status.value,
            consecutive_correct=update.consecutive_correct,
        )

        return PerformanceResult(
            flashcard_id=flashcard_id,
            performance=signal,
            mastery_status=update.mastery_status,
            consecutive_correct=update.consecutive_correct,
            message=mastery_message(signal, update.mastery_status),
        )
