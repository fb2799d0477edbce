"""Unit tests for study session construction."""

import random
from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from examcraft.exceptions import InvalidInput, NoCardsAvailable, RepositoryError
from examcraft.models.flashcard import FlashcardDTO, MasteryFilter, MasteryStatus, MasteryUpdate
from examcraft.models.topic import TopicDTO
from examcraft.services.study_session import (
    StudySessionBuilder,
    fallback_message,
    parse_mastery_filter,
)
from tests.mocks.flashcards import make_card


def _ids(cards: list[FlashcardDTO]) -> list[str]:
    return sorted(card.flashcard_id for card in cards)


class TestParseMasteryFilter:
    """Tests for parse_mastery_filter."""

    def test_none_uses_default(self) -> None:
        assert parse_mastery_filter(None) is MasteryFilter.LEARNING
        assert parse_mastery_filter(None, MasteryFilter.ALL) is MasteryFilter.ALL

    def test_empty_string_uses_default(self) -> None:
        assert parse_mastery_filter("") is MasteryFilter.LEARNING

    def test_known_values(self) -> None:
        assert parse_mastery_filter("mastered") is MasteryFilter.MASTERED
        assert parse_mastery_filter("all") is MasteryFilter.ALL

    def test_unknown_value(self) -> None:
        with pytest.raises(InvalidInput):
            parse_mastery_filter("forgotten")


class TestStudySessionBuilder:
    """Tests for StudySessionBuilder."""

    @pytest.fixture
    def builder(
        self,
        mock_repository: AsyncMock,
        seeded_rng: random.Random,
        fixed_clock: Callable[[], float],
    ) -> StudySessionBuilder:
        return StudySessionBuilder(mock_repository, rng=seeded_rng, clock=fixed_clock)

    @pytest.mark.asyncio
    async def test_filtered_session(
        self,
        builder: StudySessionBuilder,
        mock_repository: AsyncMock,
        learning_cards: list[FlashcardDTO],
    ) -> None:
        mock_repository.fetch_cards_by_user_and_mastery.return_value = list(learning_cards)

        session = await builder.build_session("user-1", "topic-bio", "learning")

        assert session.fallback_used is False
        assert session.mastery_status is MasteryFilter.LEARNING
        assert session.requested_filter is MasteryFilter.LEARNING
        assert session.total_cards == 5
        assert _ids(session.cards) == _ids(learning_cards)
        mock_repository.fetch_cards_by_user_and_mastery.assert_awaited_once_with(
            "user-1", MasteryStatus.LEARNING
        )
        mock_repository.fetch_cards_by_user_and_topic.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fallback_to_all_cards_in_topic(
        self,
        builder: StudySessionBuilder,
        mock_repository: AsyncMock,
        learning_cards: list[FlashcardDTO],
    ) -> None:
        mock_repository.fetch_cards_by_user_and_mastery.return_value = []
        mock_repository.fetch_cards_by_user_and_topic.return_value = list(learning_cards)

        session = await builder.build_session("user-1", "topic-bio", "mastered")

        assert session.fallback_used is True
        assert session.mastery_status is MasteryFilter.ALL
        assert session.requested_filter is MasteryFilter.MASTERED
        assert session.total_cards == 5
        assert _ids(session.cards) == _ids(learning_cards)
        mock_repository.fetch_cards_by_user_and_topic.assert_awaited_once_with(
            "user-1", "topic-bio"
        )

    @pytest.mark.asyncio
    async def test_no_cards_in_topic(
        self,
        builder: StudySessionBuilder,
        mock_repository: AsyncMock,
    ) -> None:
        with pytest.raises(NoCardsAvailable) as exc_info:
            await builder.build_session("user-1", "topic-empty", "learning")

        assert exc_info.value.topic_id == "topic-empty"
        assert exc_info.value.mastery_filter == "learning"
        assert str(exc_info.value) == "No learning flashcards found for this topic"

    @pytest.mark.asyncio
    async def test_no_cards_with_all_filter(
        self,
        builder: StudySessionBuilder,
        mock_repository: AsyncMock,
    ) -> None:
        with pytest.raises(NoCardsAvailable, match="No any flashcards found"):
            await builder.build_session("user-1", "topic-empty", "all")

        mock_repository.fetch_cards_by_user_and_mastery.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_all_filter_never_falls_back(
        self,
        builder: StudySessionBuilder,
        mock_repository: AsyncMock,
        learning_cards: list[FlashcardDTO],
    ) -> None:
        mock_repository.fetch_cards_by_user_and_topic.return_value = list(learning_cards)

        session = await builder.build_session("user-1", "topic-bio", MasteryFilter.ALL)

        assert session.fallback_used is False
        assert session.mastery_status is MasteryFilter.ALL
        assert fallback_message(session) is None
        mock_repository.fetch_cards_by_user_and_topic.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_primary_read_is_narrowed_to_topic(
        self,
        builder: StudySessionBuilder,
        mock_repository: AsyncMock,
    ) -> None:
        other_topic = [make_card("other-1", topic_id="topic-chem")]
        in_topic = [make_card("bio-1", mastery_status=MasteryStatus.UNDER_REVIEW)]
        mock_repository.fetch_cards_by_user_and_mastery.return_value = other_topic
        mock_repository.fetch_cards_by_user_and_topic.return_value = in_topic

        session = await builder.build_session("user-1", "topic-bio", "learning")

        assert session.fallback_used is True
        assert _ids(session.cards) == ["bio-1"]

    @pytest.mark.asyncio
    async def test_fallback_is_monotone(
        self,
        builder: StudySessionBuilder,
        mock_repository: AsyncMock,
    ) -> None:
        cards = [
            make_card("a", mastery_status=MasteryStatus.LEARNING),
            make_card("b", mastery_status=MasteryStatus.MASTERED),
        ]
        mock_repository.fetch_cards_by_user_and_mastery.return_value = []
        mock_repository.fetch_cards_by_user_and_topic.return_value = list(cards)

        for requested in ("learning", "under_review", "mastered"):
            session = await builder.build_session("user-1", "topic-bio", requested)
            assert session.total_cards >= 1
            assert session.fallback_used is True

    @pytest.mark.asyncio
    async def test_default_filter_is_learning(
        self,
        builder: StudySessionBuilder,
        mock_repository: AsyncMock,
        learning_cards: list[FlashcardDTO],
    ) -> None:
        mock_repository.fetch_cards_by_user_and_mastery.return_value = list(learning_cards)

        session = await builder.build_session("user-1", "topic-bio")

        assert session.requested_filter is MasteryFilter.LEARNING
        assert session.fallback_used is False

    @pytest.mark.asyncio
    async def test_general_topic_matches_cards_without_topic(
        self,
        builder: StudySessionBuilder,
        mock_repository: AsyncMock,
    ) -> None:
        mock_repository.fetch_cards_by_user_and_mastery.return_value = [
            make_card("loose", topic_id=None),
            make_card("filed", topic_id="topic-bio"),
        ]

        session = await builder.build_session("user-1", "general", "learning")

        assert _ids(session.cards) == ["loose"]
        assert session.topic_name == "General"

    @pytest.mark.asyncio
    async def test_topic_name_from_embedded_topic(
        self,
        builder: StudySessionBuilder,
        mock_repository: AsyncMock,
        learning_cards: list[FlashcardDTO],
    ) -> None:
        mock_repository.fetch_cards_by_user_and_mastery.return_value = list(learning_cards)

        session = await builder.build_session("user-1", "topic-bio")

        assert session.topic_name == "Biology"

    @pytest.mark.asyncio
    async def test_session_id_format(
        self,
        builder: StudySessionBuilder,
        mock_repository: AsyncMock,
        learning_cards: list[FlashcardDTO],
    ) -> None:
        mock_repository.fetch_cards_by_user_and_mastery.return_value = list(learning_cards)

        session = await builder.build_session("user-1", "topic-bio")

        assert session.session_id == "session_1704067200000_user-1"
        assert session.user_id == "user-1"
        assert session.topic_id == "topic-bio"

    @pytest.mark.asyncio
    async def test_same_cards_across_builds(self, mock_repository: AsyncMock) -> None:
        cards = [make_card(f"card-{i}") for i in range(10)]
        mock_repository.fetch_cards_by_user_and_mastery.side_effect = lambda *_: list(cards)
        first = await StudySessionBuilder(mock_repository, rng=random.Random(1)).build_session(
            "user-1", "topic-bio"
        )
        second = await StudySessionBuilder(mock_repository, rng=random.Random(2)).build_session(
            "user-1", "topic-bio"
        )

        assert _ids(first.cards) == _ids(second.cards)

    @pytest.mark.asyncio
    async def test_repository_error_on_primary_read(
        self,
        builder: StudySessionBuilder,
        mock_repository: AsyncMock,
    ) -> None:
        mock_repository.fetch_cards_by_user_and_mastery.side_effect = RepositoryError("down")

        with pytest.raises(RepositoryError):
            await builder.build_session("user-1", "topic-bio", "learning")

        mock_repository.fetch_cards_by_user_and_topic.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_repository_error_on_fallback_read(
        self,
        builder: StudySessionBuilder,
        mock_repository: AsyncMock,
    ) -> None:
        mock_repository.fetch_cards_by_user_and_topic.side_effect = RepositoryError("down")

        with pytest.raises(RepositoryError):
            await builder.build_session("user-1", "topic-bio", "mastered")

    @pytest.mark.asyncio
    async def test_never_writes(
        self,
        builder: StudySessionBuilder,
        mock_repository: AsyncMock,
        learning_cards: list[FlashcardDTO],
    ) -> None:
        mock_repository.fetch_cards_by_user_and_mastery.return_value = list(learning_cards)

        await builder.build_session("user-1", "topic-bio")

        mock_repository.update_card_mastery.assert_not_awaited()
        mock_repository.save_flashcard.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("user_id", "topic_id"), [("", "topic-bio"), ("user-1", "")])
    async def test_missing_identifiers(
        self,
        builder: StudySessionBuilder,
        mock_repository: AsyncMock,
        user_id: str,
        topic_id: str,
    ) -> None:
        with pytest.raises(InvalidInput):
            await builder.build_session(user_id, topic_id)

        mock_repository.fetch_cards_by_user_and_mastery.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_filter(
        self,
        builder: StudySessionBuilder,
        mock_repository: AsyncMock,
    ) -> None:
        with pytest.raises(InvalidInput):
            await builder.build_session("user-1", "topic-bio", "forgotten")

        mock_repository.fetch_cards_by_user_and_mastery.assert_not_awaited()


class TestFallbackMessage:
    """Tests for fallback_message and session updates."""

    @pytest.mark.asyncio
    async def test_message_names_requested_filter(
        self,
        mock_repository: AsyncMock,
        learning_cards: list[FlashcardDTO],
    ) -> None:
        mock_repository.fetch_cards_by_user_and_topic.return_value = list(learning_cards)
        builder = StudySessionBuilder(mock_repository)

        session = await builder.build_session("user-1", "topic-bio", "under_review")

        assert fallback_message(session) == (
            "No under_review cards found. Showing all cards for this topic."
        )

    @pytest.mark.asyncio
    async def test_apply_update_replaces_card(
        self,
        mock_repository: AsyncMock,
        sample_topic: TopicDTO,
    ) -> None:
        mock_repository.fetch_cards_by_user_and_mastery.return_value = [
            make_card("card-1", topic=sample_topic),
            make_card("card-2", topic=sample_topic),
        ]
        session = await StudySessionBuilder(mock_repository).build_session("user-1", "topic-bio")
        update = MasteryUpdate(mastery_status=MasteryStatus.UNDER_REVIEW, consecutive_correct=1)

        updated = session.apply_update("card-1", update)

        by_id = {card.flashcard_id: card for card in updated.cards}
        assert by_id["card-1"].mastery_status is MasteryStatus.UNDER_REVIEW
        assert by_id["card-1"].consecutive_correct == 1
        assert by_id["card-2"].mastery_status is MasteryStatus.LEARNING
        assert session.apply_update("missing", update) is session
