"""Lexio services."""
from lexio.services.proficiency_store import ProficiencyStore
from lexio.services.session_registry import SessionRegistry
from lexio.services.topic_assessor import TopicDifficultyAssessor
from lexio.services.question_generator import QuestionGenerator
from lexio.services.exercise_orchestrator import ExerciseOrchestrator
