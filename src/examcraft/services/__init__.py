"""Service layer for examcraft.

This module exports the main service entry points.
"""

from examcraft.services.authoring import FlashcardAuthoringService
from examcraft.services.mastery_tracker import (
    MASTERY_PROMOTION_THRESHOLD,
    mastery_message,
    next_mastery,
    parse_performance,
)
from examcraft.services.progress_service import ProgressService
from examcraft.services.study_session import (
    StudySessionBuilder,
    fallback_message,
    parse_mastery_filter,
)

__all__ = [
    "MASTERY_PROMOTION_THRESHOLD",
    "FlashcardAuthoringService",
    "ProgressService",
    "StudySessionBuilder",
    "fallback_message",
    "mastery_message",
    "next_mastery",
    "parse_mastery_filter",
    "parse_performance",
]
