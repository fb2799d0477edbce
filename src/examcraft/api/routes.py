"""Flashcard routes for the examcraft HTTP API.

Domain errors map to status codes here: invalid input is 400, missing
cards or flashcards are 404, storage failures are 500 and LLM failures
are 502.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from examcraft.api.deps import get_examcraft
from examcraft.api.schemas import (
    CreateFlashcardRequest,
    CreateFlashcardResponse,
    GenerateFlashcardsRequest,
    GenerateFlashcardsResponse,
    StudySessionPayload,
    StudySessionRequest,
    StudySessionResponse,
    UpdateProgressRequest,
    UpdateProgressResponse,
)
from examcraft.exceptions import (
    FlashcardNotFound,
    GenerationError,
    InvalidInput,
    NoCardsAvailable,
    RepositoryError,
)
from examcraft.logging import get_logger
from examcraft.models.generation import FlashcardGenerationRequest
from examcraft.orchestrator import ExamCraft
from examcraft.services.study_session import fallback_message

__all__ = ["router"]

logger = get_logger(__name__)

router = APIRouter(prefix="/api/flashcards", tags=["flashcards"])

ExamCraftDep = Annotated[ExamCraft, Depends(get_examcraft)]


@router.post("/study-session", response_model=StudySessionResponse)
async def start_study_session(
    req: StudySessionRequest,
    examcraft: ExamCraftDep,
) -> StudySessionResponse:
    try:
        session = await examcraft.build_session(req.user_id, req.topic_id, req.mastery_status)
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except NoCardsAvailable as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except RepositoryError as e:
        logger.error("study_session_request_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to start study session",
        ) from e

    return StudySessionResponse(
        fallback=session.fallback_used,
        message=fallback_message(session),
        session=StudySessionPayload(
            session_id=session.session_id,
            topic_id=session.topic_id,
            topic_name=session.topic_name,
            total_cards=session.total_cards,
            mastery_status=session.mastery_status,
            cards=session.cards,
            fallback_used=session.fallback_used,
        ),
    )


@router.post("/update-progress", response_model=UpdateProgressResponse)
async def update_progress(
    req: UpdateProgressRequest,
    examcraft: ExamCraftDep,
) -> UpdateProgressResponse:
    try:
        result = await examcraft.record_performance(req.flashcard_id, req.performance)
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except FlashcardNotFound as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Flashcard not found",
        ) from e
    except RepositoryError as e:
        logger.error("update_progress_request_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update progress",
        ) from e

    return UpdateProgressResponse(
        flashcard_id=result.flashcard_id,
        performance=result.performance,
        mastery_status=result.mastery_status,
        consecutive_correct=result.consecutive_correct,
        message=result.message,
    )


@router.post("/create", response_model=CreateFlashcardResponse)
async def create_flashcard(
    req: CreateFlashcardRequest,
    examcraft: ExamCraftDep,
) -> CreateFlashcardResponse:
    try:
        card = await examcraft.create_flashcard(
            req.user_id,
            req.question,
            req.answer,
            topic_id=req.topic_id,
            custom_topic=req.custom_topic,
        )
    except InvalidInput as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except RepositoryError as e:
        logger.error("create_flashcard_request_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create flashcard",
        ) from e

    return CreateFlashcardResponse(flashcard=card, topic_id=card.topic_id)


@router.post("/generate/ai", response_model=GenerateFlashcardsResponse)
async def generate_flashcards(
    req: GenerateFlashcardsRequest,
    examcraft: ExamCraftDep,
) -> GenerateFlashcardsResponse:
    if not req.user_id or not req.topic_name.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields: user_id, topic_name",
        )
    if not 1 <= req.num_flashcards <= 50:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Number of flashcards must be between 1 and 50",
        )
    if not 1 <= req.difficulty <= 5:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Difficulty must be between 1 and 5",
        )

    request = FlashcardGenerationRequest(
        user_id=req.user_id,
        topic_name=req.topic_name.strip(),
        topic_id=req.topic_id,
        custom_topic=req.custom_topic,
        num_flashcards=req.num_flashcards,
        difficulty=req.difficulty,
        content_source=req.content_source,
        additional_instructions=req.additional_instructions,
    )
    try:
        result = await examcraft.generate_flashcards(request)
    except GenerationError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e
    except RepositoryError as e:
        logger.error("generate_flashcards_request_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate flashcards",
        ) from e

    return GenerateFlashcardsResponse(
        flashcards=result.flashcards,
        topic_id=result.topic_id,
        topic_name=result.topic_name,
        generated_count=result.generated_count,
        requested_count=result.requested_count,
        errors=result.errors,
        message=result.message,
    )
