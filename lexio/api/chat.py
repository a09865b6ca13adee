"""Chat API endpoints."""
import logging

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from lexio import dependencies
from lexio.models.schemas import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["chat"])

CHAT_ERROR_MESSAGE = "I'm sorry, I encountered an error processing your message. Please try again."


@router.post("", response_model=ChatResponse)
def chat(request: ChatRequest):
    """Send a message to the assistant and get its reply."""
    logger.info(f"Received chat message: {request.message}")
    try:
        assistant = dependencies.get_assistant()
        reply = assistant.chat(request.message, conversation_id=request.session_id)
    except Exception as e:
        logger.exception("Error processing chat message")
        return ChatResponse(message=CHAT_ERROR_MESSAGE, success=False, error=str(e))

    preview = reply if len(reply) <= 200 else reply[:200] + "..."
    logger.info(f"Assistant response: {preview}")
    return ChatResponse(message=reply, success=True)


@router.get("/health", response_class=PlainTextResponse)
def chat_health():
    """Liveness check for the chat endpoint."""
    return "Agent Lexio is running!"
