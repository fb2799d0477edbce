"""LLM interface for examcraft.

This module defines the Protocol for AI flashcard generation.
"""

from typing import ClassVar, Protocol, runtime_checkable

from examcraft.models.generation import FlashcardGenerationRequest, GeneratedFlashcard

__all__ = [
    "LLMInterface",
]


@runtime_checkable
class LLMInterface(Protocol):
    """Contract for LLM interactions."""

    config_class: ClassVar[type | None] = None

    async def generate_flashcards(
        self,
        request: FlashcardGenerationRequest,
    ) -> list[GeneratedFlashcard]:
        """Generate flashcards for a topic.

        Args:
            request: Topic, count, difficulty and optional source material

        Returns:
            At most request.num_flashcards cards, each with question and answer

        Raises:
            GenerationError: If the call fails or yields no usable cards
        """
        ...
