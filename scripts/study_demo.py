import asyncio
import sys

from examcraft import ExamCraft, MongoFlashcardRepository, NoCardsAvailable

USER_ID = "demo-user"


# Simple usage - config loaded from .env automatically
async def main() -> None:
    async with ExamCraft(storage_class=MongoFlashcardRepository) as ec:
        card = await ec.create_flashcard(
            USER_ID,
            "What does the mitochondrion produce?",
            "ATP",
            custom_topic="Cell Biology",
        )
        topic_id = card.topic_id or "general"

        try:
            session = await ec.build_session(USER_ID, topic_id, "mastered")
        except NoCardsAvailable as e:
            print(e)
            sys.exit(1)

        print(session.session_id, session.total_cards, "fallback:", session.fallback_used)
        for signal in ("know", "know", "dont_know", "know"):
            result = await ec.record_performance(card.flashcard_id, signal)
            print(signal, result.mastery_status, result.consecutive_correct, result.message)


if __name__ == "__main__":
    asyncio.run(main())
