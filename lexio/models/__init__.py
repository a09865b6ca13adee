"""Lexio models."""
from lexio.models.cefr import CefrLevel
from lexio.models.exercise import (
    Question,
    AttemptRecord,
    MissedWord,
    ExerciseSummary,
    ExerciseSession,
    PendingExercise,
    TopicAssessment,
    create_exercise_session,
)
from lexio.models.responses import ExerciseStarted, TopicWarning, AnswerResult, HintResult, SkipResult
