"""Study session construction for examcraft.

This module selects the working set of flashcards for a study session.
When the requested mastery filter matches nothing in the topic, it falls
back to every card in the topic, so a learner never gets an empty session
while any card exists.
"""

import random
import time
from collections.abc import Callable

from examcraft.exceptions import InvalidInput, NoCardsAvailable
from examcraft.interfaces.storage import FlashcardRepositoryInterface
from examcraft.logging import get_logger
from examcraft.models.flashcard import FlashcardDTO, MasteryFilter
from examcraft.models.session import StudySessionDTO
from examcraft.models.topic import GENERAL_TOPIC_NAME
from examcraft.utils.ids import generate_session_id

__all__ = [
    "StudySessionBuilder",
    "fallback_message",
    "parse_mastery_filter",
]

logger = get_logger(__name__)


def parse_mastery_filter(
    value: str | MasteryFilter | None,
    default: MasteryFilter = MasteryFilter.LEARNING,
) -> MasteryFilter:
    """Coerce a requested mastery filter, applying the default for None.

    Raises:
        InvalidInput: If value is not a known filter
    """
    if value is None or value == "":
        return default
    try:
        return MasteryFilter(value)
    except ValueError:
        raise InvalidInput(
            f"Invalid mastery_status {value!r}. "
            "Must be one of learning, under_review, mastered, all"
        ) from None


def fallback_message(session: StudySessionDTO) -> str | None:
    """Explain a fallback to the learner, or None if none happened."""
    if not session.fallback_used:
        return None
    return (
        f"No {session.requested_filter.value} cards found. "
        "Showing all cards for this topic."
    )


class StudySessionBuilder:
    """Builds shuffled study sessions with an empty-filter fallback.

    Selection policy:
    - ALL: every card in the topic, no fallback
    - Any other filter: cards in the topic with that mastery status;
      if none, every card in the topic (effective filter becomes ALL)
    - Nothing in the topic at all: NoCardsAvailable

    The fallback read is issued only after the primary read came back
    empty, so the two reads are strictly sequential. The builder never
    writes; repository errors propagate unchanged.

    Example:
        builder = StudySessionBuilder(repository)
        session = await builder.build_session(user_id, topic_id, "mastered")
        if session.fallback_used:
            print(fallback_message(session))
    """

    def __init__(
        self,
        repository: FlashcardRepositoryInterface,
        default_filter: MasteryFilter = MasteryFilter.LEARNING,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize builder with dependencies.

        Args:
            repository: Flashcard storage to read candidates from
            default_filter: Filter used when the caller passes none
            rng: Random source for shuffling (default: fresh Random)
            clock: Epoch-seconds clock used for session IDs
        """
        self._repository = repository
        self._default_filter = default_filter
        self._rng = rng or random.Random()
        self._clock = clock

    async def build_session(
        self,
        user_id: str,
        topic_id: str,
        mastery_filter: str | MasteryFilter | None = None,
    ) -> StudySessionDTO:
        """Build a study session for one learner and topic.

        Args:
            user_id: Learner to build the session for
            topic_id: Topic to study ("general" for cards without a topic)
            mastery_filter: Requested filter; None uses the default

        Returns:
            StudySessionDTO with shuffled cards

        Raises:
            InvalidInput: If an identifier is missing or the filter is unknown
            NoCardsAvailable: If the topic has no cards for this learner
        """
        if not user_id or not topic_id:
            raise InvalidInput("User ID and Topic ID are required")
        requested = parse_mastery_filter(mastery_filter, self._default_filter)

        if requested is MasteryFilter.ALL:
            cards = await self._fetch_topic_cards(user_id, topic_id)
            effective = MasteryFilter.ALL
            fallback_used = False
        else:
            cards = await self._fetch_filtered_cards(user_id, topic_id, requested)
            effective = requested
            fallback_used = False

            if not cards:
                logger.info(
                    "study_session_fallback",
                    user_id=user_id,
                    topic_id=topic_id,
                    requested_filter=requested.value,
                )
                cards = await self._fetch_topic_cards(user_id, topic_id)
                effective = MasteryFilter.ALL
                fallback_used = True

        if not cards:
            logger.warning(
                "study_session_empty",
                user_id=user_id,
                topic_id=topic_id,
                requested_filter=requested.value,
            )
            raise NoCardsAvailable(user_id, topic_id, requested.value)

        self._rng.shuffle(cards)

        session = StudySessionDTO(
            session_id=generate_session_id(user_id, self._clock),
            user_id=user_id,
            topic_id=topic_id,
            topic_name=self._resolve_topic_name(cards),
            mastery_status=effective,
            requested_filter=requested,
            cards=cards,
            fallback_used=fallback_used,
        )

        logger.info(
            "study_session_built",
            session_id=session.session_id,
            topic_id=topic_id,
            mastery_status=effective.value,
            total_cards=session.total_cards,
            fallback_used=fallback_used,
        )
        return session

    async def _fetch_filtered_cards(
        self,
        user_id: str,
        topic_id: str,
        mastery_filter: MasteryFilter,
    ) -> list[FlashcardDTO]:
        """Primary read: cards with the requested status, narrowed to the topic."""
        status = mastery_filter.mastery_status
        assert status is not None
        cards = await self._repository.fetch_cards_by_user_and_mastery(user_id, status)
        return [card for card in cards if card.effective_topic_id == topic_id]

    async def _fetch_topic_cards(self, user_id: str, topic_id: str) -> list[FlashcardDTO]:
        """Every card the learner owns in the topic, regardless of status."""
        cards = await self._repository.fetch_cards_by_user_and_topic(user_id, topic_id)
        return [card for card in cards if card.effective_topic_id == topic_id]

    @staticmethod
    def _resolve_topic_name(cards: list[FlashcardDTO]) -> str:
        """Take the topic name from the first card's embedded relation."""
        first = cards[0]
        if first.topic is not None and first.topic.name:
            return first.topic.name
        return GENERAL_TOPIC_NAME
