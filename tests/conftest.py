"""Shared test fixtures for examcraft.

This module provides pytest fixtures used across all tests.
"""

import random
from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from examcraft.models.flashcard import FlashcardDTO
from examcraft.models.generation import FlashcardGenerationRequest, GeneratedFlashcard
from examcraft.models.topic import TopicDTO
from tests.mocks.flashcards import FIXED_NOW, make_card


# Mock fixtures
@pytest.fixture
def mock_repository() -> AsyncMock:
    """Create mock flashcard repository."""
    repository = AsyncMock()
    repository.fetch_cards_by_user_and_topic.return_value = []
    repository.fetch_cards_by_user_and_mastery.return_value = []
    repository.update_card_mastery.return_value = True
    repository.get_flashcard.return_value = None
    repository.save_flashcard.return_value = "test-flashcard-id"
    repository.save_topic.return_value = "test-topic-id"
    repository.get_topic.return_value = None
    return repository


@pytest.fixture
def mock_llm() -> AsyncMock:
    """Create mock LLM interface."""
    llm = AsyncMock()
    llm.generate_flashcards.return_value = [
        GeneratedFlashcard(question="What is ATP?", answer="The cell's energy currency"),
        GeneratedFlashcard(
            question="Where is ATP made?",
            answer="Mostly in the mitochondria",
            difficulty=4,
        ),
    ]
    return llm


@pytest.fixture
def fixed_clock() -> Callable[[], float]:
    """Clock frozen at 2024-01-01T00:00:00Z."""
    return lambda: FIXED_NOW


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(42)


# Sample data fixtures
@pytest.fixture
def sample_topic() -> TopicDTO:
    """Create sample TopicDTO."""
    return TopicDTO(topic_id="topic-bio", name="Biology", description="Custom topic: Biology")


@pytest.fixture
def sample_flashcard(sample_topic: TopicDTO) -> FlashcardDTO:
    """Create sample FlashcardDTO in learning."""
    return make_card("card-1", topic=sample_topic)


@pytest.fixture
def learning_cards(sample_topic: TopicDTO) -> list[FlashcardDTO]:
    """Five learning cards in the Biology topic."""
    return [make_card(f"card-{i}", topic=sample_topic) for i in range(1, 6)]


@pytest.fixture
def generation_request() -> FlashcardGenerationRequest:
    """Create sample generation request."""
    return FlashcardGenerationRequest(
        user_id="user-1",
        topic_name="Cell Biology",
        topic_id="topic-bio",
        num_flashcards=2,
        difficulty=3,
    )
