"""
Exercise Session Models

State machine for a fill-in-the-blank exercise: the fixed question list, the
learner's cursor through it and one attempt record per question.
"""

from datetime import datetime
from typing import Any, Optional
import math
import threading
import uuid

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic.alias_generators import to_camel

from lexio.models.cefr import CefrLevel


BLANK_MARKER = "___"


def new_short_id() -> str:
    """Opaque 8-character id used for exercises and pending tickets."""
    return uuid.uuid4().hex[:8]


class Question(BaseModel):
    """A single fill-in-the-blank question. Decodes the LLM's camelCase keys."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    sentence_with_blank: str = Field(description="German sentence with ___ for the missing word")
    complete_sentence: str = Field(description="Full German sentence with the word")
    target_word: str = Field(description="The German word that fills the blank")
    english_word: str = Field(description="English translation of the target word")
    english_translation: str = Field(description="English translation of the sentence")


class AttemptRecord(BaseModel):
    """Scratch record of what happened on one question."""

    submitted_answer: Optional[str] = None
    correct: bool = False
    skipped: bool = False
    hint_used: bool = False
    answered: bool = False


class MissedWord(BaseModel):
    """A word the learner answered wrongly or skipped."""

    target_word: str
    english_word: str
    complete_sentence: str


class ExerciseSummary(BaseModel):
    """Aggregated results of an exercise."""

    total_questions: int = 0
    correct_count: int = 0
    skipped_count: int = 0
    hints_used_count: int = 0
    accuracy_percentage: float = 0.0
    missed_words: list[MissedWord] = Field(default_factory=list)


class TopicAssessment(BaseModel):
    """CEFR difficulty estimate for a free-text vocabulary topic."""

    topic: str
    assessed_level: CefrLevel
    reasoning: str = ""
    suggested_simpler_topic: Optional[str] = None


class PendingExercise(BaseModel):
    """An exercise held back after a difficulty warning, awaiting confirmation."""

    topic: str
    question_count: int
    topic_level: CefrLevel
    created_at: datetime = Field(default_factory=datetime.utcnow)


class ExerciseSession(BaseModel):
    """
    An in-progress exercise.

    States: in progress while current_index < len(questions), complete once
    current_index == len(questions). The cursor only moves forward and saturates
    at len(questions). Construct with a non-empty question list.
    """

    id: str = Field(default_factory=new_short_id)
    topics: list[str] = Field(default_factory=list)
    questions: list[Question]
    attempts: list[AttemptRecord] = Field(default_factory=list)
    current_index: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    _lock: Any = PrivateAttr(default_factory=threading.Lock)

    def model_post_init(self, __context: Any) -> None:
        if len(self.attempts) != len(self.questions):
            self.attempts = [AttemptRecord() for _ in self.questions]

    @property
    def lock(self) -> Any:
        """Per-session lock; hold it across read-score-advance sequences."""
        return self._lock

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def is_complete(self) -> bool:
        return self.current_index >= len(self.questions)

    @property
    def question_number(self) -> int:
        """1-based number of the current question."""
        return self.current_index + 1

    def current_question(self) -> Optional[Question]:
        if self.is_complete:
            return None
        return self.questions[self.current_index]

    def _current_attempt(self) -> Optional[AttemptRecord]:
        if self.is_complete:
            return None
        return self.attempts[self.current_index]

    def record_answer(self, answer: str, correct: bool) -> None:
        attempt = self._current_attempt()
        if attempt is None:
            return
        attempt.submitted_answer = answer
        attempt.correct = correct
        attempt.answered = True

    def record_skip(self) -> None:
        attempt = self._current_attempt()
        if attempt is None:
            return
        attempt.skipped = True
        attempt.answered = True

    def mark_hint_used(self) -> None:
        attempt = self._current_attempt()
        if attempt is None:
            return
        attempt.hint_used = True

    def move_to_next(self) -> None:
        if not self.is_complete:
            self.current_index += 1

    def summary(self) -> ExerciseSummary:
        correct = skipped = hints = 0
        missed: list[MissedWord] = []

        for question, attempt in zip(self.questions, self.attempts):
            if attempt.correct:
                correct += 1
            if attempt.skipped:
                skipped += 1
            if attempt.hint_used:
                hints += 1
            if attempt.answered and not attempt.correct:
                missed.append(MissedWord(
                    target_word=question.target_word,
                    english_word=question.english_word,
                    complete_sentence=question.complete_sentence,
                ))

        total = len(self.questions)
        accuracy = 0.0 if total == 0 else _round_half_up(correct * 100.0 / total)

        return ExerciseSummary(
            total_questions=total,
            correct_count=correct,
            skipped_count=skipped,
            hints_used_count=hints,
            accuracy_percentage=accuracy,
            missed_words=missed,
        )


def _round_half_up(value: float, digits: int = 1) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def create_exercise_session(
    topic: str,
    questions: list[Question],
    exercise_id: Optional[str] = None,
) -> ExerciseSession:
    """Create a new exercise session for a topic."""
    session = ExerciseSession(topics=[topic], questions=list(questions))
    if exercise_id:
        session.id = exercise_id
    return session
