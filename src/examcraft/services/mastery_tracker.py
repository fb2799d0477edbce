"""Mastery tracking for examcraft.

A pure transition function moving one flashcard between
learning, under_review and mastered:

    learning --know--> under_review --know (streak >= 2)--> mastered
        ^                   |                                  |
        +---- dont_know ----+------------ dont_know -----------+

A "know" always extends the streak; a "dont_know" always resets it to 0
and demotes the card to learning. Promotion out of under_review needs
MASTERY_PROMOTION_THRESHOLD uninterrupted "know" signals. Sitting
boundaries are not tracked, so a streak may span several sessions.
"""

from examcraft.exceptions import InvalidInput
from examcraft.models.flashcard import MasteryStatus, MasteryUpdate, Performance

__all__ = [
    "MASTERY_PROMOTION_THRESHOLD",
    "mastery_message",
    "next_mastery",
    "parse_performance",
]

MASTERY_PROMOTION_THRESHOLD = 2


def parse_performance(value: str | Performance) -> Performance:
    """Coerce a raw performance signal.

    Raises:
        InvalidInput: If value is not "know" or "dont_know"
    """
    try:
        return Performance(value)
    except ValueError:
        raise InvalidInput(
            f"Invalid performance value {value!r}. Must be 'know' or 'dont_know'"
        ) from None


def _parse_status(value: str | MasteryStatus) -> MasteryStatus:
    try:
        return MasteryStatus(value)
    except ValueError:
        raise InvalidInput(f"Invalid mastery status {value!r}") from None


def _update(status: MasteryStatus, streak: int) -> MasteryUpdate:
    return MasteryUpdate(mastery_status=status, consecutive_correct=streak)


def next_mastery(
    performance: str | Performance,
    current_status: str | MasteryStatus,
    consecutive_correct: int,
) -> MasteryUpdate:
    """Compute the next mastery state of a flashcard.

    Args:
        performance: "know" or "dont_know"
        current_status: Card's current mastery status
        consecutive_correct: Card's current streak (>= 0)

    Returns:
        MasteryUpdate with the new status and streak

    Raises:
        InvalidInput: On an unknown performance/status or negative streak
    """
    signal = parse_performance(performance)
    status = _parse_status(current_status)
    if consecutive_correct < 0:
        raise InvalidInput(f"consecutive_correct must be >= 0, got {consecutive_correct}")

    streak = consecutive_correct + 1

    match (status, signal):
        case (MasteryStatus.LEARNING, Performance.KNOW):
            return _update(MasteryStatus.UNDER_REVIEW, streak)
        case (MasteryStatus.UNDER_REVIEW, Performance.KNOW) if (
            streak < MASTERY_PROMOTION_THRESHOLD
        ):
            return _update(MasteryStatus.UNDER_REVIEW, streak)
        case (MasteryStatus.UNDER_REVIEW, Performance.KNOW):
            return _update(MasteryStatus.MASTERED, streak)
        case (MasteryStatus.MASTERED, Performance.KNOW):
            return _update(MasteryStatus.MASTERED, streak)
        case (MasteryStatus.LEARNING, Performance.DONT_KNOW):
            return _update(MasteryStatus.LEARNING, 0)
        case (MasteryStatus.UNDER_REVIEW, Performance.DONT_KNOW):
            return _update(MasteryStatus.LEARNING, 0)
        case (MasteryStatus.MASTERED, Performance.DONT_KNOW):
            return _update(MasteryStatus.LEARNING, 0)

    raise AssertionError(f"unhandled transition: {status}, {signal}")  # pragma: no cover


def mastery_message(performance: str | Performance, new_status: str | MasteryStatus) -> str:
    """Encouragement shown after a performance signal is recorded.

    Presentational only; not part of the transition contract.
    """
    signal = parse_performance(performance)
    status = _parse_status(new_status)

    if signal is Performance.KNOW:
        if status is MasteryStatus.UNDER_REVIEW:
            return "Great! This card is now under review. Get it right once more to master it!"
        if status is MasteryStatus.MASTERED:
            return "Excellent! You've mastered this card! 🎉"
        return "Good job! Keep practicing to improve your mastery."

    if status is MasteryStatus.LEARNING:
        return "No worries! This card is back in learning mode. Keep practicing!"
    return "Don't worry! Practice makes perfect."
