"""
Lexio Backend - FastAPI Application

Entry point for the vocabulary tutoring API: the chat assistant, the direct
exercise endpoints and health checks.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import get_settings, validate_required_settings
from shared.api import health
from lexio.api import chat, exercises

# Validate configuration on startup
validate_required_settings()

settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("lexio")

# Initialize FastAPI app
app = FastAPI(
    title="Lexio Backend",
    description="German vocabulary tutor driven by an LLM tool-calling loop",
    version=health.SERVICE_VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(chat.router)
app.include_router(exercises.router)

logger.info(f"Lexio backend configured (model={settings.llm_model}, environment={settings.environment})")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.environment == "development"
    )
