"""Exception hierarchy for examcraft.

Domain failures (InvalidInput, NoCardsAvailable, FlashcardNotFound) are
kept distinct from storage failures (RepositoryError) so callers can tell
"show an empty state" apart from "ask the user to retry".
"""

__all__ = [
    "ExamCraftError",
    "FlashcardNotFound",
    "GenerationError",
    "InvalidInput",
    "NoCardsAvailable",
    "RepositoryError",
]


class ExamCraftError(Exception):
    """Base class for all examcraft errors."""


class InvalidInput(ExamCraftError, ValueError):
    """Malformed performance signal, filter, or missing identifier."""


class NoCardsAvailable(ExamCraftError):
    """The requested topic has no flashcards at all for this learner."""

    def __init__(self, user_id: str, topic_id: str, mastery_filter: str) -> None:
        self.user_id = user_id
        self.topic_id = topic_id
        self.mastery_filter = mastery_filter
        status_text = "any" if mastery_filter == "all" else mastery_filter
        super().__init__(f"No {status_text} flashcards found for this topic")


class FlashcardNotFound(ExamCraftError):
    """The flashcard being graded does not exist."""

    def __init__(self, flashcard_id: str) -> None:
        self.flashcard_id = flashcard_id
        super().__init__(f"Flashcard not found: {flashcard_id}")


class RepositoryError(ExamCraftError):
    """Opaque failure of the storage collaborator.

    Passed through unchanged by the core and never retried.
    """


class GenerationError(ExamCraftError):
    """LLM flashcard generation failed or produced no usable cards."""
