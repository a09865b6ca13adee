"""Pydantic API request/response schemas."""
from pydantic import BaseModel, Field, field_validator
from typing import Optional

from lexio.models.cefr import CefrLevel


class ChatRequest(BaseModel):
    """A user message for the assistant."""
    message: str = Field(min_length=1)
    session_id: Optional[str] = None

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message cannot be empty")
        return value


class ChatResponse(BaseModel):
    """Assistant reply; success=False carries a fallback message and the error."""
    message: str
    success: bool
    error: Optional[str] = None


class SetLevelRequest(BaseModel):
    """Free-text CEFR level; unrecognized values become A1."""
    level: str
    session_id: Optional[str] = None


class LevelResponse(BaseModel):
    level: CefrLevel
    session_id: Optional[str] = None


class StartExerciseRequest(BaseModel):
    """Request to start an exercise on a topic."""
    topic: str = Field(min_length=1)
    number_of_questions: int = 5
    proceed_despite_warning: bool = False
    session_id: Optional[str] = None


class ConfirmExerciseRequest(BaseModel):
    """Request to start an exercise on a topic after a difficulty warning."""
    topic: str = Field(min_length=1)
    number_of_questions: int = 5
    session_id: Optional[str] = None


class AnswerRequest(BaseModel):
    answer: str
