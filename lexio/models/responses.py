"""
Exercise Result Models

Structured results returned by the orchestrator to the dialogue layer and the
REST API. Starting an exercise yields one of two tagged variants.
"""

from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field

from lexio.models.cefr import CefrLevel


class ExerciseStarted(BaseModel):
    """A new exercise was generated and registered."""

    kind: Literal["started"] = "started"
    exercise_id: str
    question_number: int = 1
    total_questions: int
    sentence_with_blank: str


class TopicWarning(BaseModel):
    """The topic is above the user's level; nothing was generated yet."""

    kind: Literal["warning"] = "warning"
    pending_id: str
    topic: str
    topic_level: CefrLevel
    user_level: CefrLevel
    warning: str
    suggested_simpler_topic: Optional[str] = None
    proceed_anyway: bool = False


StartExerciseResult = Annotated[Union[ExerciseStarted, TopicWarning], Field(discriminator="kind")]


class AnswerResult(BaseModel):
    """Feedback for a submitted answer and the next question, if any."""

    correct: bool
    user_answer: Optional[str] = None
    correct_word: Optional[str] = None
    explanation: Optional[str] = None
    exercise_complete: bool
    next_question_number: Optional[int] = None
    next_sentence: Optional[str] = None


class HintResult(BaseModel):
    """English translation of the current sentence."""

    translation: str
    current_sentence: Optional[str] = None


class SkipResult(BaseModel):
    """The skipped question's answer and the next question, if any."""

    correct_word: Optional[str] = None
    correct_sentence: Optional[str] = None
    exercise_complete: bool
    next_question_number: Optional[int] = None
    next_sentence: Optional[str] = None
