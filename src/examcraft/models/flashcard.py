"""Flashcard models for examcraft.

These models represent a learner's flashcards and the mastery state
that study sessions move them through.
"""

from enum import StrEnum

from pydantic import BaseModel, Field

from examcraft.models.topic import GENERAL_TOPIC_ID, TopicDTO

__all__ = [
    "FlashcardDTO",
    "MasteryFilter",
    "MasteryStatus",
    "MasteryUpdate",
    "Performance",
]


class MasteryStatus(StrEnum):
    """Three-state progress marker of a flashcard."""

    LEARNING = "learning"
    UNDER_REVIEW = "under_review"
    MASTERED = "mastered"


class Performance(StrEnum):
    """Self-reported result of one graded study interaction."""

    KNOW = "know"
    DONT_KNOW = "dont_know"


class MasteryFilter(StrEnum):
    """Card selection filter for a study session.

    Mirrors MasteryStatus plus ALL, which disables mastery filtering.
    """

    LEARNING = "learning"
    UNDER_REVIEW = "under_review"
    MASTERED = "mastered"
    ALL = "all"

    @property
    def mastery_status(self) -> MasteryStatus | None:
        """Status this filter selects, or None for ALL."""
        if self is MasteryFilter.ALL:
            return None
        return MasteryStatus(self.value)


class MasteryUpdate(BaseModel, frozen=True):
    """Next mastery state computed for one flashcard.

    Attributes:
        mastery_status: Status after the interaction
        consecutive_correct: Streak after the interaction
    """

    mastery_status: MasteryStatus
    consecutive_correct: int = Field(ge=0)


class FlashcardDTO(BaseModel, frozen=True):
    """Learner-owned flashcard.

    Question and answer are fixed once created; only the
    (mastery_status, consecutive_correct) pair changes over time.

    Attributes:
        flashcard_id: Unique flashcard ID
        user_id: Owning learner
        question: Prompt side of the card
        answer: Answer side of the card
        topic_id: Grouping key, None means "general"
        topic: Embedded topic relation when resolved by storage
        source_question_id: Quiz question the card was derived from, if any
        tags: Free-form tags
        mastery_status: Current mastery status
        consecutive_correct: Uninterrupted "know" streak
        created_on: Creation timestamp in epoch seconds
        updated_on: Last mastery update in epoch seconds
        schema_version: Schema version for forward compatibility
    """

    flashcard_id: str = Field(description="Unique flashcard ID")
    user_id: str
    question: str
    answer: str
    topic_id: str | None = Field(default=None)
    topic: TopicDTO | None = Field(default=None)
    source_question_id: str | None = Field(default=None)
    tags: list[str] = Field(default_factory=list)
    mastery_status: MasteryStatus = Field(default=MasteryStatus.LEARNING)
    consecutive_correct: int = Field(default=0, ge=0)
    created_on: int = Field(default=0, description="Epoch seconds")
    updated_on: int = Field(default=0, description="Epoch seconds")
    schema_version: int = Field(default=1)

    @property
    def effective_topic_id(self) -> str:
        """Topic ID with the "general" sentinel substituted for None."""
        return self.topic_id or GENERAL_TOPIC_ID

    def with_mastery(self, update: MasteryUpdate) -> "FlashcardDTO":
        """Return a copy of this card carrying the given mastery state."""
        return self.model_copy(
            update={
                "mastery_status": update.mastery_status,
                "consecutive_correct": update.consecutive_correct,
            }
        )
