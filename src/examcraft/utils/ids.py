"""Identifier utilities for examcraft.

Session IDs are client-side correlation tokens only; they are never
looked up by value, so timestamp + user ID is enough uniqueness.
"""

import re
import time
import uuid
from collections.abc import Callable

__all__ = [
    "generate_flashcard_id",
    "generate_session_id",
    "generate_topic_id",
    "slugify",
]

_WHITESPACE = re.compile(r"\s+")


def generate_session_id(user_id: str, clock: Callable[[], float] = time.time) -> str:
    """Generate a study session token.

    Args:
        user_id: Learner the session belongs to
        clock: Source of the current time in epoch seconds

    Returns:
        Token of the form ``session_<epoch-ms>_<user_id>``
    """
    return f"session_{int(clock() * 1000)}_{user_id}"


def generate_flashcard_id() -> str:
    """Generate a random flashcard ID."""
    return uuid.uuid4().hex


def generate_topic_id() -> str:
    """Generate a random topic ID."""
    return uuid.uuid4().hex


def slugify(text: str) -> str:
    """Lowercase text and join whitespace-separated words with dashes."""
    return _WHITESPACE.sub("-", text.strip().lower())
