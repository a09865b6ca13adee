"""
Exercise Orchestrator

Façade used by the chat tools and the REST API. Decides warn-vs-generate for
a requested topic, builds exercises, and drives answer/hint/skip/summary on
registered exercises. No public operation raises: unknown or finished
exercises produce recoverable result variants.
"""

import json
import logging
from typing import Optional, Union

from lexio.models.cefr import CefrLevel
from lexio.models.exercise import (
    ExerciseSession,
    ExerciseSummary,
    PendingExercise,
    create_exercise_session,
)
from lexio.models.responses import (
    AnswerResult,
    ExerciseStarted,
    HintResult,
    SkipResult,
    TopicWarning,
)
from lexio.services.proficiency_store import ProficiencyStore
from lexio.services.question_generator import QuestionGenerator
from lexio.services.session_registry import SessionRegistry
from lexio.services.topic_assessor import TopicDifficultyAssessor
from lexio.utils.answer_utils import answers_match

logger = logging.getLogger("lexio.orchestrator")

MIN_QUESTIONS = 1
DEFAULT_QUESTION_COUNT = 5
DEFAULT_MAX_QUESTIONS = 10

EXERCISE_NOT_FOUND_MESSAGE = "Exercise not found. Please start a new exercise."
EXERCISE_COMPLETE_MESSAGE = (
    "This exercise is already complete. Ask for a summary or start a new exercise."
)


def clamp_question_count(count: Optional[int], max_questions: int = DEFAULT_MAX_QUESTIONS) -> int:
    if count is None:
        count = DEFAULT_QUESTION_COUNT
    return min(max(int(count), MIN_QUESTIONS), max_questions)


def build_warning_message(
    topic: str,
    topic_level: CefrLevel,
    user_level: CefrLevel,
    simpler_topic: Optional[str] = None,
) -> str:
    suggestion = f" (suggested: {simpler_topic})" if simpler_topic else ""
    return (
        f"The topic '{topic}' is typically at {topic_level} level, but your current level is {user_level}. "
        "This might be challenging! Would you like to:\n"
        "1. Continue anyway (I'll adjust the vocabulary to be more accessible)\n"
        f"2. Try a simpler topic{suggestion}"
    )


class ExerciseOrchestrator:
    """Composes assessment, proficiency, generation and session state."""

    def __init__(
        self,
        assessor: TopicDifficultyAssessor,
        generator: QuestionGenerator,
        proficiency_store: Optional[ProficiencyStore] = None,
        registry: Optional[SessionRegistry] = None,
        max_questions: int = DEFAULT_MAX_QUESTIONS,
    ):
        self.assessor = assessor
        self.generator = generator
        self.proficiency = proficiency_store or ProficiencyStore()
        self.registry = registry or SessionRegistry()
        self.max_questions = max_questions

    # ─── Proficiency ──────────────────────────────────────────────────

    def set_level(self, level: Optional[str], session_id: Optional[str] = None) -> CefrLevel:
        cefr_level = CefrLevel.parse(level)
        self.proficiency.set(session_id, cefr_level)
        return cefr_level

    def get_level(self, session_id: Optional[str] = None) -> CefrLevel:
        return self.proficiency.get(session_id)

    # ─── Starting exercises ───────────────────────────────────────────

    def assess_and_maybe_warn(
        self,
        topic: str,
        count: Optional[int],
        proceed_despite_warning: bool = False,
        session_id: Optional[str] = None,
    ) -> Union[ExerciseStarted, TopicWarning]:
        question_count = clamp_question_count(count, self.max_questions)

        assessment = self.assessor.assess(topic)
        topic_level = assessment.assessed_level
        user_level = self.proficiency.get(session_id)

        logger.info(json.dumps({
            "step": "TOPIC_GATE",
            "topic": topic,
            "topic_level": topic_level.value,
            "user_level": user_level.value,
            "proceed_despite_warning": proceed_despite_warning,
        }))

        if not proceed_despite_warning and user_level.is_lower_than(topic_level):
            pending_id = self.registry.add_pending(PendingExercise(
                topic=topic,
                question_count=question_count,
                topic_level=topic_level,
            ))
            return TopicWarning(
                pending_id=pending_id,
                topic=topic,
                topic_level=topic_level,
                user_level=user_level,
                warning=build_warning_message(
                    topic, topic_level, user_level, assessment.suggested_simpler_topic
                ),
                suggested_simpler_topic=assessment.suggested_simpler_topic,
            )

        return self._create_exercise(topic, question_count, user_level)

    def confirm(self, topic: str, count: Optional[int], session_id: Optional[str] = None) -> ExerciseStarted:
        """Start an exercise on a topic the user chose despite a warning. No gate, no ticket lookup."""
        logger.info(f"User confirmed difficult topic: {topic}")
        question_count = clamp_question_count(count, self.max_questions)
        return self._create_exercise(topic, question_count, self.proficiency.get(session_id))

    def _create_exercise(self, topic: str, question_count: int, level: CefrLevel) -> ExerciseStarted:
        questions = self.generator.generate(topic, level, question_count)
        session = create_exercise_session(topic, questions)
        self.registry.add_exercise(session)

        logger.info(json.dumps({
            "step": "EXERCISE_CREATED",
            "exercise_id": session.id,
            "topic": topic,
            "level": level.value,
            "questions": session.total_questions,
        }))

        return ExerciseStarted(
            exercise_id=session.id,
            question_number=1,
            total_questions=session.total_questions,
            sentence_with_blank=session.questions[0].sentence_with_blank,
        )

    # ─── Running exercises ────────────────────────────────────────────

    def submit_answer(self, exercise_id: str, answer: Optional[str]) -> AnswerResult:
        session = self.registry.get_exercise(exercise_id)
        if session is None:
            return AnswerResult(
                correct=False,
                user_answer=answer,
                explanation=EXERCISE_NOT_FOUND_MESSAGE,
                exercise_complete=True,
            )

        with session.lock:
            question = session.current_question()
            if question is None:
                return AnswerResult(
                    correct=False,
                    user_answer=answer,
                    explanation=EXERCISE_COMPLETE_MESSAGE,
                    exercise_complete=True,
                )

            is_correct = answers_match(answer, question.target_word)
            session.record_answer(answer, is_correct)
            session.move_to_next()
            result = self._advance_fields(session)

        logger.info(json.dumps({
            "step": "ANSWER",
            "exercise_id": exercise_id,
            "correct": is_correct,
            "exercise_complete": result["exercise_complete"],
        }))

        explanation = None
        if not is_correct:
            explanation = f"The correct word was '{question.target_word}' ({question.english_word})."

        return AnswerResult(
            correct=is_correct,
            user_answer=answer,
            correct_word=question.target_word,
            explanation=explanation,
            **result,
        )

    def request_hint(self, exercise_id: str) -> HintResult:
        session = self.registry.get_exercise(exercise_id)
        if session is None:
            return HintResult(translation=EXERCISE_NOT_FOUND_MESSAGE)

        with session.lock:
            question = session.current_question()
            if question is None:
                return HintResult(translation=EXERCISE_COMPLETE_MESSAGE)
            session.mark_hint_used()

        logger.info(f"Translation hint used for exercise {exercise_id}")
        return HintResult(
            translation=question.english_translation,
            current_sentence=question.sentence_with_blank,
        )

    def skip(self, exercise_id: str) -> SkipResult:
        session = self.registry.get_exercise(exercise_id)
        if session is None:
            return SkipResult(exercise_complete=True)

        with session.lock:
            question = session.current_question()
            if question is None:
                return SkipResult(exercise_complete=True)
            session.record_skip()
            session.move_to_next()
            result = self._advance_fields(session)

        logger.info(f"Skipped question in exercise {exercise_id}")
        return SkipResult(
            correct_word=question.target_word,
            correct_sentence=question.complete_sentence,
            **result,
        )

    def summarize(self, exercise_id: str) -> ExerciseSummary:
        session = self.registry.get_exercise(exercise_id)
        if session is None:
            return ExerciseSummary()
        with session.lock:
            return session.summary()

    @staticmethod
    def _advance_fields(session: ExerciseSession) -> dict:
        """Completion flag and next-question fields after the cursor moved."""
        next_question = session.current_question()
        if next_question is None:
            return {"exercise_complete": True, "next_question_number": None, "next_sentence": None}
        return {
            "exercise_complete": False,
            "next_question_number": session.question_number,
            "next_sentence": next_question.sentence_with_blank,
        }
