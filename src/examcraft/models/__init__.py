"""Public DTO models for examcraft.

This module exports all public data transfer objects.
"""

from examcraft.models.flashcard import (
    FlashcardDTO,
    MasteryFilter,
    MasteryStatus,
    MasteryUpdate,
    Performance,
)
from examcraft.models.generation import (
    FlashcardGenerationRequest,
    GeneratedFlashcard,
    GenerationResult,
)
from examcraft.models.session import PerformanceResult, StudySessionDTO
from examcraft.models.topic import GENERAL_TOPIC_ID, GENERAL_TOPIC_NAME, TopicDTO

__all__ = [
    "GENERAL_TOPIC_ID",
    "GENERAL_TOPIC_NAME",
    "FlashcardDTO",
    "FlashcardGenerationRequest",
    "GeneratedFlashcard",
    "GenerationResult",
    "MasteryFilter",
    "MasteryStatus",
    "MasteryUpdate",
    "Performance",
    "PerformanceResult",
    "StudySessionDTO",
    "TopicDTO",
]
