"""ExamCraft orchestrator for high-level study operations.

This module provides the main entry point for the examcraft package,
wiring storage, the optional LLM, and the study services together.
"""

import random
from typing import Any

from examcraft.config import ExamCraftConfig
from examcraft.exceptions import GenerationError
from examcraft.interfaces.llm import LLMInterface
from examcraft.interfaces.storage import FlashcardRepositoryInterface
from examcraft.logging import get_logger
from examcraft.models.flashcard import FlashcardDTO, MasteryFilter, Performance
from examcraft.models.generation import FlashcardGenerationRequest, GenerationResult
from examcraft.models.session import PerformanceResult, StudySessionDTO
from examcraft.services.authoring import FlashcardAuthoringService
from examcraft.services.progress_service import ProgressService
from examcraft.services.study_session import StudySessionBuilder

__all__ = ["ExamCraft"]

logger = get_logger(__name__)


class ExamCraft:
    """Main orchestrator for examcraft study sessions.

    Accepts implementation classes. Config is loaded from .env automatically.
    For custom implementations, set config_class = None and pass custom_config dict.

    Example:
        async with ExamCraft(
            storage_class=MongoFlashcardRepository,
            llm_class=OpenAIProvider,
        ) as ec:
            session = await ec.build_session(user_id, topic_id)
            result = await ec.record_performance(card_id, "know")
    """

    def __init__(
        self,
        storage_class: type[FlashcardRepositoryInterface],
        llm_class: type[LLMInterface] | None = None,
        *,
        storage_custom_config: dict[str, Any] | None = None,
        llm_custom_config: dict[str, Any] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize ExamCraft with implementation classes.

        Args:
            storage_class: Storage implementation class
            llm_class: LLM implementation class (generation disabled if None)
            storage_custom_config: Custom config dict if storage_class.config_class is None
            llm_custom_config: Custom config dict if llm_class.config_class is None
            rng: Random source for session shuffling
        """
        self._config = ExamCraftConfig()  # Loads from .env

        self._storage_class = storage_class
        self._llm_class = llm_class

        self._storage_custom_config = storage_custom_config
        self._llm_custom_config = llm_custom_config
        self._rng = rng

        # Instances (created on connect)
        self._storage: FlashcardRepositoryInterface | None = None
        self._llm: LLMInterface | None = None

        # Services (wired on connect)
        self._session_builder: StudySessionBuilder | None = None
        self._progress_service: ProgressService | None = None
        self._authoring_service: FlashcardAuthoringService | None = None

        self._connected = False

    @property
    def config(self) -> ExamCraftConfig:
        """Loaded configuration."""
        return self._config

    @property
    def llm_enabled(self) -> bool:
        """Whether an LLM provider is connected."""
        return self._llm is not None

    async def _instantiate_class(
        self,
        cls: type,
        custom_config: dict[str, Any] | None,
    ) -> Any:
        """Instantiate an implementation class.

        If cls.config_class is set, instantiate config (loads from .env).
        If cls.config_class is None, use custom_config dict.
        """
        config_class = getattr(cls, "config_class", None)

        if config_class is None:
            if custom_config is None:
                raise ValueError(
                    f"{cls.__name__} has config_class=None but no custom_config provided"
                )
            return await cls.from_dict(custom_config)
        if custom_config is not None:
            return await cls.from_config(config_class(**custom_config))
        return await cls.from_config(config_class())

    async def _connect(self) -> None:
        """Initialize connections and services."""
        if self._connected:
            return

        self._storage = await self._instantiate_class(
            self._storage_class, self._storage_custom_config
        )
        if self._llm_class is not None:
            self._llm = await self._instantiate_class(self._llm_class, self._llm_custom_config)

        self._session_builder = StudySessionBuilder(
            self._storage,
            default_filter=self._config.study.default_mastery_filter,
            rng=self._rng,
        )
        self._progress_service = ProgressService(self._storage)
        self._authoring_service = FlashcardAuthoringService(self._storage, self._llm)

        self._connected = True
        logger.info("examcraft_connected", llm_enabled=self.llm_enabled)

    async def _disconnect(self) -> None:
        """Close all connections."""
        if self._storage and hasattr(self._storage, "close"):
            await self._storage.close()
        if self._llm and hasattr(self._llm, "close"):
            await self._llm.close()

        self._connected = False
        logger.info("examcraft_disconnected")

    async def __aenter__(self) -> "ExamCraft":
        """Async context manager entry - connects automatically."""
        await self._connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit - disconnects automatically."""
        await self._disconnect()

    def _ensure_connected(self) -> None:
        if not self._connected:
            raise RuntimeError("ExamCraft not connected. Use 'async with ExamCraft(...) as ec:'")

    # === STUDY WORKFLOW ===

    async def build_session(
        self,
        user_id: str,
        topic_id: str,
        mastery_filter: str | MasteryFilter | None = None,
    ) -> StudySessionDTO:
        """Build a shuffled study session for a learner and topic."""
        self._ensure_connected()
        assert self._session_builder is not None
        return await self._session_builder.build_session(user_id, topic_id, mastery_filter)

    async def record_performance(
        self,
        flashcard_id: str,
        performance: str | Performance,
    ) -> PerformanceResult:
        """Record a know/dont_know answer and persist the new mastery state."""
        self._ensure_connected()
        assert self._progress_service is not None
        return await self._progress_service.record_performance(flashcard_id, performance)

    # === AUTHORING ===

    async def create_flashcard(
        self,
        user_id: str,
        question: str,
        answer: str,
        topic_id: str | None = None,
        custom_topic: str | None = None,
    ) -> FlashcardDTO:
        """Create one flashcard by hand."""
        self._ensure_connected()
        assert self._authoring_service is not None
        return await self._authoring_service.create_flashcard(
            user_id,
            question,
            answer,
            topic_id=topic_id,
            custom_topic=custom_topic,
        )

    async def generate_flashcards(self, request: FlashcardGenerationRequest) -> GenerationResult:
        """Generate and save a batch of flashcards with the LLM.

        Raises:
            RuntimeError: If not connected
            GenerationError: If no LLM is configured or generation fails
        """
        self._ensure_connected()
        if self._llm is None:
            raise GenerationError("AI generation is not configured")
        assert self._authoring_service is not None
        return await self._authoring_service.generate_flashcards(request)
