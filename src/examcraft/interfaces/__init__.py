"""Interface contracts for examcraft.

This module exports all Protocol-based interfaces for dependency injection.
"""

from examcraft.interfaces.llm import LLMInterface
from examcraft.interfaces.storage import FlashcardRepositoryInterface

__all__ = [
    "FlashcardRepositoryInterface",
    "LLMInterface",
]
