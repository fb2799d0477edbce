"""FastAPI application for examcraft.

Run with:
    python -m examcraft.api.app
or:
    uvicorn examcraft.api.app:app
"""

import time
import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from examcraft import __version__
from examcraft.api.routes import router as flashcards_router
from examcraft.api.schemas import HealthResponse
from examcraft.config import ApiSettings, ExamCraftConfig
from examcraft.infra.llm import PROVIDERS
from examcraft.infra.mongo.repositories import MongoFlashcardRepository
from examcraft.logging import (
    bind_request_context,
    clear_request_context,
    configure_from_settings,
    get_logger,
)
from examcraft.orchestrator import ExamCraft

__all__ = ["app", "create_app"]

logger = get_logger(__name__)


def _build_examcraft(config: ExamCraftConfig) -> ExamCraft:
    """Pick implementation classes from configuration."""
    llm_class = None
    if config.llm_enabled:
        llm_class = PROVIDERS.get(config.llm.provider)
        if llm_class is None:
            raise ValueError(f"Unknown LLM provider: {config.llm.provider}")
    else:
        logger.warning("llm_not_configured", detail="AI generation disabled")
    return ExamCraft(storage_class=MongoFlashcardRepository, llm_class=llm_class)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    if getattr(app.state, "examcraft", None) is not None:
        # Injected by the caller, who owns its lifecycle
        yield
        return

    async with _build_examcraft(ExamCraftConfig()) as examcraft:
        app.state.examcraft = examcraft
        try:
            yield
        finally:
            app.state.examcraft = None


def create_app(
    settings: ApiSettings | None = None,
    examcraft: ExamCraft | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: HTTP settings (default: loaded from environment)
        examcraft: Connected orchestrator to serve; built on startup if None
    """
    settings = settings or ApiSettings()
    configure_from_settings(settings.log_level, settings.log_json)

    app = FastAPI(title=settings.title, version=__version__, lifespan=lifespan)
    app.state.examcraft = examcraft

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        bind_request_context(
            request_id=uuid.uuid4().hex,
            method=request.method,
            path=request.url.path,
        )
        started = time.perf_counter()
        try:
            response = await call_next(request)
            logger.info(
                "http_request",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            return response
        finally:
            clear_request_context()

    app.include_router(flashcards_router)

    @app.get("/api/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(app=settings.title, version=__version__)

    return app


app = create_app()


if __name__ == "__main__":
    api_settings = ApiSettings()
    uvicorn.run(
        "examcraft.api.app:app",
        host=api_settings.host,
        port=api_settings.port,
    )
