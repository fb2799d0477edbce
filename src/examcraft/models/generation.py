"""AI flashcard generation models for examcraft."""

from pydantic import BaseModel, Field

from examcraft.models.flashcard import FlashcardDTO

__all__ = [
    "DIFFICULTY_LABELS",
    "FlashcardGenerationRequest",
    "GeneratedFlashcard",
    "GenerationResult",
]

DIFFICULTY_LABELS: dict[int, str] = {
    1: "Beginner",
    2: "Easy",
    3: "Medium",
    4: "Hard",
    5: "Expert",
}


class FlashcardGenerationRequest(BaseModel, frozen=True):
    """Request to generate flashcards with an LLM.

    Attributes:
        user_id: Learner who will own the cards
        topic_name: Subject the cards are about
        topic_id: Existing topic to file the cards under
        custom_topic: Name of a new topic to create when topic_id is absent
        num_flashcards: Number of cards to ask for (1-50)
        difficulty: Target difficulty (1-5)
        content_source: Optional source text to base the cards on
        additional_instructions: Optional extra prompt instructions
    """

    user_id: str = Field(min_length=1)
    topic_name: str = Field(min_length=1)
    topic_id: str | None = None
    custom_topic: str | None = None
    num_flashcards: int = Field(ge=1, le=50)
    difficulty: int = Field(default=3, ge=1, le=5)
    content_source: str | None = None
    additional_instructions: str | None = None

    @property
    def difficulty_label(self) -> str:
        return DIFFICULTY_LABELS.get(self.difficulty, "Medium")


class GeneratedFlashcard(BaseModel, frozen=True):
    """Single flashcard as returned by the LLM."""

    question: str
    answer: str
    difficulty: int = Field(default=3, ge=1, le=5)
    explanation: str | None = None


class GenerationResult(BaseModel, frozen=True):
    """Outcome of a generation batch.

    Per-card persistence failures are collected in errors and do not
    abort the batch.
    """

    flashcards: list[FlashcardDTO] = Field(default_factory=list)
    topic_id: str | None = None
    topic_name: str
    generated_count: int = 0
    requested_count: int
    errors: list[str] = Field(default_factory=list)

    @property
    def message(self) -> str:
        return (
            f"Successfully generated {self.generated_count} out of "
            f"{self.requested_count} flashcards"
        )
