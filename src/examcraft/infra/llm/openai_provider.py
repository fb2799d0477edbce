"""OpenAI-compatible LLM provider for examcraft.

This module provides flashcard generation over the OpenAI chat
completions API. Setting base_url points it at any compatible
endpoint, such as OpenRouter.
"""

from typing import Any, Self

from openai import AsyncOpenAI, OpenAIError

from examcraft.config import OPENROUTER_BASE_URL, LLMSettings
from examcraft.exceptions import GenerationError
from examcraft.interfaces.llm import LLMInterface
from examcraft.infra.llm.prompts import SYSTEM_PROMPT, build_flashcard_prompt, parse_flashcards
from examcraft.logging import get_logger
from examcraft.models.generation import FlashcardGenerationRequest, GeneratedFlashcard

__all__ = [
    "OpenAIProvider",
]

logger = get_logger(__name__)


class OpenAIProvider(LLMInterface):
    """OpenAI implementation of the LLM interface."""

    config_class = LLMSettings

    def __init__(self, settings: LLMSettings) -> None:
        """Initialize OpenAI provider.

        Args:
            settings: LLM configuration settings
        """
        self._settings = settings
        api_key = settings.api_key.get_secret_value() if settings.api_key else None
        headers: dict[str, str] = {}
        if settings.base_url and settings.base_url.startswith(OPENROUTER_BASE_URL):
            headers["X-Title"] = settings.app_title
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=settings.base_url,
            default_headers=headers or None,
        )
        self._model = settings.model

    @classmethod
    async def from_config(cls, config: LLMSettings) -> Self:
        """Factory method for ExamCraft instantiation.

        Args:
            config: LLM settings

        Returns:
            OpenAIProvider instance
        """
        return cls(config)

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for custom config dict.

        Args:
            config: Dictionary with LLM settings

        Returns:
            OpenAIProvider instance
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
        """Generate flashcards via chat completions."""
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_flashcard_prompt(request)},
                ],
                temperature=self._settings.temperature,
                max_tokens=self._settings.max_tokens,
                top_p=0.9,
            )
        except OpenAIError as e:
            logger.warning("flashcard_generation_failed", provider="openai", error=str(e))
            raise GenerationError(f"Failed to generate flashcards: {e}") from e

        if not response.choices:
            raise GenerationError("Invalid response format from LLM API")
        content = response.choices[0].message.content or ""
        return parse_flashcards(content, request)
