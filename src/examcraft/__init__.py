"""examcraft - Flashcard mastery tracking and adaptive study sessions.

This package provides tools for:
- Tracking per-card mastery from know/dont_know answers
- Building shuffled study sessions with an empty-filter fallback
- Creating flashcards by hand or generating them with an LLM
- Serving all of the above over a FastAPI HTTP API

Example usage:
    from examcraft import ExamCraft, MongoFlashcardRepository, OpenAIProvider

    # Simple usage - config loaded from .env automatically
    async with ExamCraft(
        storage_class=MongoFlashcardRepository,
        llm_class=OpenAIProvider,
    ) as ec:
        session = await ec.build_session("user-1", "biology", "learning")
        result = await ec.record_performance(session.cards[0].flashcard_id, "know")
"""

__version__ = "0.1.0"

from examcraft.exceptions import (
    ExamCraftError,
    FlashcardNotFound,
    GenerationError,
    InvalidInput,
    NoCardsAvailable,
    RepositoryError,
)
from examcraft.infra.llm.anthropic_provider import AnthropicProvider
from examcraft.infra.llm.openai_provider import OpenAIProvider
from examcraft.infra.mongo.repositories import MongoFlashcardRepository
from examcraft.interfaces.llm import LLMInterface
from examcraft.interfaces.storage import FlashcardRepositoryInterface
from examcraft.models.flashcard import FlashcardDTO, MasteryFilter, MasteryStatus, Performance
from examcraft.models.session import PerformanceResult, StudySessionDTO
from examcraft.orchestrator import ExamCraft

__all__ = [  # noqa: RUF022
    # Orchestrator
    "ExamCraft",
    # Implementations
    "MongoFlashcardRepository",
    "OpenAIProvider",
    "AnthropicProvider",
    # Interfaces
    "FlashcardRepositoryInterface",
    "LLMInterface",
    # Models
    "FlashcardDTO",
    "MasteryFilter",
    "MasteryStatus",
    "Performance",
    "PerformanceResult",
    "StudySessionDTO",
    # Errors
    "ExamCraftError",
    "FlashcardNotFound",
    "GenerationError",
    "InvalidInput",
    "NoCardsAvailable",
    "RepositoryError",
]
