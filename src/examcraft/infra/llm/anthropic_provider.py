"""Anthropic LLM provider for examcraft.

This module provides the Anthropic implementation of the LLM interface.
"""

from typing import Any, Self

from anthropic import AnthropicError, AsyncAnthropic

from examcraft.config import LLMSettings
from examcraft.exceptions import GenerationError
from examcraft.interfaces.llm import LLMInterface
from examcraft.infra.llm.prompts import SYSTEM_PROMPT, build_flashcard_prompt, parse_flashcards
from examcraft.logging import get_logger
from examcraft.models.generation import FlashcardGenerationRequest, GeneratedFlashcard

__all__ = [
    "AnthropicProvider",
]

logger = get_logger(__name__)

DEFAULT_ANTHROPIC_MODEL = "claude-sonnet-4-20250514"


class AnthropicProvider(LLMInterface):
    """Anthropic implementation of the LLM interface.

    Uses the Messages API; the JSON-only instruction goes in the
    system prompt since there is no response_format switch.
    """

    config_class = LLMSettings

    def __init__(self, settings: LLMSettings) -> None:
        """Initialize Anthropic provider.

        Args:
            settings: LLM configuration settings
        """
        self._settings = settings
        api_key = settings.api_key.get_secret_value() if settings.api_key else None
        self._client = AsyncAnthropic(api_key=api_key)
        model = settings.model
        self._model = model if model.startswith("claude") else DEFAULT_ANTHROPIC_MODEL

    @classmethod
    async def from_config(cls, config: LLMSettings) -> Self:
        """Factory method for ExamCraft instantiation.

        Args:
            config: LLM settings

        Returns:
            AnthropicProvider instance
        """
        return cls(config)

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for custom config dict.

        Args:
            config: Dictionary with LLM settings

        Returns:
            AnthropicProvider instance
        """
        settings = LLMSettings(**config)
        return cls(settings)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()

    async def generate_flashcards(
        self,
        request: FlashcardGenerationRequest,
    ) -> list[GeneratedFlashcard]:
        """Generate flashcards via the Messages API."""
        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=self._settings.max_tokens,
                temperature=min(self._settings.temperature, 1.0),
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": build_flashcard_prompt(request)}],
            )
        except AnthropicError as e:
            logger.warning("flashcard_generation_failed", provider="anthropic", error=str(e))
            raise GenerationError(f"Failed to generate flashcards: {e}") from e

        content = "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )
        return parse_flashcards(content, request)
