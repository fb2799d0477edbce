"""Utility functions for examcraft.

This module contains internal utility functions.
"""

from examcraft.utils.ids import (
    generate_flashcard_id,
    generate_session_id,
    generate_topic_id,
    slugify,
)

__all__ = [
    "generate_flashcard_id",
    "generate_session_id",
    "generate_topic_id",
    "slugify",
]
