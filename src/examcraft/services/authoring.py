"""Flashcard authoring service for examcraft.

This module creates flashcards, either typed in by the learner or
generated by an LLM, and files them under an existing or new topic.
"""

import time
from collections.abc import Callable

from examcraft.exceptions import ExamCraftError, GenerationError, InvalidInput
from examcraft.interfaces.llm import LLMInterface
from examcraft.interfaces.storage import FlashcardRepositoryInterface
from examcraft.logging import get_logger
from examcraft.models.flashcard import FlashcardDTO
from examcraft.models.generation import FlashcardGenerationRequest, GenerationResult
from examcraft.models.topic import GENERAL_TOPIC_ID, TopicDTO
from examcraft.utils.ids import generate_flashcard_id, generate_topic_id, slugify

__all__ = [
    "FlashcardAuthoringService",
]

logger = get_logger(__name__)


class FlashcardAuthoringService:
    """Service for creating flashcards.

    New cards always start in learning with a zero streak.

    Example:
        service = FlashcardAuthoringService(repository, llm)
        card = await service.create_flashcard(user_id, "Q?", "A", custom_topic="Biology")
        result = await service.generate_flashcards(request)
    """

    def __init__(
        self,
        repository: FlashcardRepositoryInterface,
        llm: LLMInterface | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize service with dependencies.

        Args:
            repository: Flashcard storage
            llm: LLM used for generation (optional; generation fails without it)
            clock: Epoch-seconds clock for timestamps
        """
        self._repository = repository
        self._llm = llm
        self._clock = clock

    async def create_flashcard(
        self,
        user_id: str,
        question: str,
        answer: str,
        topic_id: str | None = None,
        custom_topic: str | None = None,
    ) -> FlashcardDTO:
        """Create one flashcard by hand.

        Args:
            user_id: Owning learner
            question: Prompt side
            answer: Answer side
            topic_id: Existing topic to file the card under
            custom_topic: Name of a new topic, used when topic_id is absent

        Returns:
            The saved FlashcardDTO

        Raises:
            InvalidInput: If required fields or both topic options are missing
            RepositoryError: If the topic or card cannot be saved
        """
        if not user_id or not question.strip() or not answer.strip():
            raise InvalidInput(
                "Missing required fields: user_id, question, and answer are required"
            )
        if not topic_id and not custom_topic:
            raise InvalidInput("Either topic_id or custom_topic must be provided")

        topic = await self._resolve_topic(topic_id, custom_topic)

        tags = ["manual-created", slugify(custom_topic) if custom_topic else GENERAL_TOPIC_ID]
        card = self._new_card(
            user_id=user_id,
            question=question.strip(),
            answer=answer.strip(),
            topic=topic,
            topic_id=topic.topic_id if topic else topic_id,
            tags=tags,
        )
        await self._repository.save_flashcard(card)

        logger.info(
            "flashcard_created",
            flashcard_id=card.flashcard_id,
            user_id=user_id,
            topic_id=card.topic_id,
        )
        return card

    async def generate_flashcards(self, request: FlashcardGenerationRequest) -> GenerationResult:
        """Generate flashcards with the LLM and persist them.

        Cards that fail to save are reported in the result's errors;
        the rest of the batch is still saved.

        Args:
            request: Generation parameters

        Returns:
            GenerationResult summarizing the batch

        Raises:
            GenerationError: If no LLM is configured or it yields no cards
            RepositoryError: If a new custom topic cannot be saved
        """
        if self._llm is None:
            raise GenerationError("No LLM provider configured")

        generated = await self._llm.generate_flashcards(request)
        if not generated:
            raise GenerationError("No valid flashcards generated by AI")

        topic = await self._resolve_topic(request.topic_id, request.custom_topic)
        topic_id = topic.topic_id if topic else request.topic_id

        created: list[FlashcardDTO] = []
        errors: list[str] = []
        for index, item in enumerate(generated, start=1):
            card = self._new_card(
                user_id=request.user_id,
                question=item.question,
                answer=item.answer,
                topic=topic,
                topic_id=topic_id,
                tags=[
                    "ai-generated",
                    slugify(request.topic_name),
                    f"difficulty-{item.difficulty or request.difficulty}",
                ],
            )
            try:
                await self._repository.save_flashcard(card)
            except ExamCraftError as e:
                logger.warning("generated_flashcard_save_failed", index=index, error=str(e))
                errors.append(f"Failed to create flashcard {index}: {e}")
                continue
            created.append(card)

        logger.info(
            "flashcards_generated",
            user_id=request.user_id,
            topic_id=topic_id,
            generated=len(created),
            requested=request.num_flashcards,
        )

        return GenerationResult(
            flashcards=created,
            topic_id=topic_id,
            topic_name=request.topic_name,
            generated_count=len(created),
            requested_count=request.num_flashcards,
            errors=errors,
        )

    async def _resolve_topic(
        self,
        topic_id: str | None,
        custom_topic: str | None,
    ) -> TopicDTO | None:
        """Look up an existing topic or create a custom one.

        Priority:
        1. Existing topic_id (relation embedded if storage knows it)
        2. New topic named custom_topic
        3. None (card files under "general")
        """
        if topic_id:
            return await self._repository.get_topic(topic_id)
        if custom_topic:
            topic = TopicDTO(
                topic_id=generate_topic_id(),
                name=custom_topic.strip(),
                description=f"Custom topic: {custom_topic.strip()}",
            )
            await self._repository.save_topic(topic)
            logger.info("topic_created", topic_id=topic.topic_id, name=topic.name)
            return topic
        return None

    def _new_card(
        self,
        *,
        user_id: str,
        question: str,
        answer: str,
        topic: TopicDTO | None,
        topic_id: str | None,
        tags: list[str],
    ) -> FlashcardDTO:
        now = int(self._clock())
        return FlashcardDTO(
            flashcard_id=generate_flashcard_id(),
            user_id=user_id,
            question=question,
            answer=answer,
            topic_id=topic_id,
            topic=topic,
            tags=[tag for tag in tags if tag],
            created_on=now,
            updated_on=now,
        )
