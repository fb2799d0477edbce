"""Request and response bodies for the examcraft HTTP API.

Required identifiers default to empty strings so that missing values
reach the service layer and come back as 400s rather than 422s.
"""

from pydantic import BaseModel, Field

from examcraft.models.flashcard import FlashcardDTO, MasteryFilter, MasteryStatus, Performance

__all__ = [
    "CreateFlashcardRequest",
    "CreateFlashcardResponse",
    "GenerateFlashcardsRequest",
    "GenerateFlashcardsResponse",
    "HealthResponse",
    "StudySessionPayload",
    "StudySessionRequest",
    "StudySessionResponse",
    "UpdateProgressRequest",
    "UpdateProgressResponse",
]


class StudySessionRequest(BaseModel):
    user_id: str = ""
    topic_id: str = ""
    mastery_status: str | None = None


class StudySessionPayload(BaseModel):
    session_id: str
    topic_id: str
    topic_name: str
    total_cards: int
    mastery_status: MasteryFilter
    cards: list[FlashcardDTO]
    fallback_used: bool


class StudySessionResponse(BaseModel):
    success: bool = True
    fallback: bool = False
    message: str | None = None
    session: StudySessionPayload


class UpdateProgressRequest(BaseModel):
    flashcard_id: str = ""
    performance: str = ""


class UpdateProgressResponse(BaseModel):
    success: bool = True
    flashcard_id: str
    performance: Performance
    mastery_status: MasteryStatus
    consecutive_correct: int
    message: str
    invalidate_cache: bool = True


class CreateFlashcardRequest(BaseModel):
    user_id: str = ""
    question: str = ""
    answer: str = ""
    topic_id: str | None = None
    custom_topic: str | None = None


class CreateFlashcardResponse(BaseModel):
    success: bool = True
    flashcard: FlashcardDTO
    topic_id: str | None
    message: str = "Flashcard created successfully"


class GenerateFlashcardsRequest(BaseModel):
    """Body of an AI generation request.

    Range checks happen when this is converted into a
    FlashcardGenerationRequest, so out-of-range values map to 400.
    """

    user_id: str = ""
    topic_name: str = ""
    topic_id: str | None = None
    custom_topic: str | None = None
    num_flashcards: int = 10
    difficulty: int = 3
    content_source: str | None = None
    additional_instructions: str | None = None


class GenerateFlashcardsResponse(BaseModel):
    success: bool = True
    flashcards: list[FlashcardDTO] = Field(default_factory=list)
    topic_id: str | None = None
    topic_name: str
    generated_count: int
    requested_count: int
    errors: list[str] = Field(default_factory=list)
    message: str


class HealthResponse(BaseModel):
    status: str = "ok"
    app: str
    version: str
