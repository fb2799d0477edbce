"""Study session models for examcraft.

Sessions are ephemeral: they are built on every "start studying" action
and never persisted or resumed.
"""

from pydantic import BaseModel, Field, computed_field

from examcraft.models.flashcard import (
    FlashcardDTO,
    MasteryFilter,
    MasteryStatus,
    MasteryUpdate,
    Performance,
)

__all__ = [
    "PerformanceResult",
    "StudySessionDTO",
]


class StudySessionDTO(BaseModel, frozen=True):
    """Working set of flashcards for one study sitting.

    Attributes:
        session_id: Client-side correlation token (timestamp + user ID)
        user_id: Learner the session was built for
        topic_id: Topic being studied
        topic_name: Display name of the topic
        mastery_status: Effective filter used (ALL after fallback)
        requested_filter: Filter the caller asked for
        cards: Shuffled card snapshots taken at build time
        fallback_used: Whether the unfiltered fallback read supplied the cards
    """

    session_id: str
    user_id: str
    topic_id: str
    topic_name: str
    mastery_status: MasteryFilter
    requested_filter: MasteryFilter
    cards: list[FlashcardDTO] = Field(default_factory=list)
    fallback_used: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_cards(self) -> int:
        return len(self.cards)

    def apply_update(self, flashcard_id: str, update: MasteryUpdate) -> "StudySessionDTO":
        """Reflect a mastery update in the session without re-fetching.

        The caller may apply this optimistically before the write-back
        completes. Unknown flashcard IDs leave the session unchanged.

        Args:
            flashcard_id: Card that was graded
            update: New mastery state for the card

        Returns:
            New StudySessionDTO with the card replaced
        """
        if not any(card.flashcard_id == flashcard_id for card in self.cards):
            return self
        cards = [
            card.with_mastery(update) if card.flashcard_id == flashcard_id else card
            for card in self.cards
        ]
        return self.model_copy(update={"cards": cards})


class PerformanceResult(BaseModel, frozen=True):
    """Outcome of recording one performance signal.

    Attributes:
        flashcard_id: Card that was graded
        performance: Signal that was recorded
        mastery_status: New mastery status
        consecutive_correct: New streak value
        message: Human-readable encouragement
    """

    flashcard_id: str
    performance: Performance
    mastery_status: MasteryStatus
    consecutive_correct: int = Field(ge=0)
    message: str

    @property
    def update(self) -> MasteryUpdate:
        return MasteryUpdate(
            mastery_status=self.mastery_status,
            consecutive_correct=self.consecutive_correct,
        )
