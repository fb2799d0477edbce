"""FastAPI dependencies for the examcraft HTTP API."""

from fastapi import HTTPException, Request, status

from examcraft.orchestrator import ExamCraft

__all__ = ["get_examcraft"]


def get_examcraft(request: Request) -> ExamCraft:
    """Resolve the orchestrator connected during application startup."""
    examcraft = getattr(request.app.state, "examcraft", None)
    if examcraft is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not ready",
        )
    return examcraft
