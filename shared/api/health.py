"""Health check API endpoints."""
from fastapi import APIRouter

from config import get_settings
from lexio import dependencies

router = APIRouter(tags=["health"])

SERVICE_NAME = "Lexio Vocabulary Tutor"
SERVICE_VERSION = "1.0.0"


@router.get("/")
def read_root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION
    }


@router.get("/config/model")
def get_model_config():
    """Return the configured LLM model and exercise limits."""
    settings = get_settings()
    return {
        "model_id": settings.llm_model,
        "max_questions_per_exercise": settings.max_questions_per_exercise,
        "chat_max_messages": settings.chat_max_messages,
    }


@router.get("/health/exercises")
def exercise_store_health():
    """Counts of exercises held in memory."""
    try:
        stats = dependencies.get_orchestrator().registry.get_stats()
        return {"status": "ok", **stats}
    except Exception as e:
        return {"status": "error", "error": str(e)}
