"""Pytest configuration and shared fixtures."""
import os

os.environ.setdefault("OPENAI_API_KEY", "test-key-fake")

import pytest
from unittest.mock import MagicMock

from lexio.models.cefr import CefrLevel
from lexio.models.exercise import Question, TopicAssessment, create_exercise_session
from lexio.services.exercise_orchestrator import ExerciseOrchestrator
from lexio.services.proficiency_store import ProficiencyStore
from lexio.services.session_registry import SessionRegistry


def make_question(word: str = "Tisch", english: str = "table") -> Question:
    return Question(
        sentence_with_blank="Der ___ ist groß.",
        complete_sentence=f"Der {word} ist groß.",
        target_word=word,
        english_word=english,
        english_translation="The ___ is big.",
    )


@pytest.fixture
def sample_questions():
    """Three distinct questions."""
    return [
        make_question("Tisch", "table"),
        make_question("Stuhl", "chair"),
        make_question("Lampe", "lamp"),
    ]


@pytest.fixture
def sample_session(sample_questions):
    session = create_exercise_session("furniture", sample_questions)
    session.id = "ex-test1"
    return session


@pytest.fixture
def mock_assessor():
    """Assessor that rates every topic A1 unless a test changes it."""
    assessor = MagicMock()
    assessor.assess.side_effect = lambda topic: TopicAssessment(
        topic=topic, assessed_level=CefrLevel.A1, reasoning="basic"
    )
    return assessor


@pytest.fixture
def mock_generator():
    """Generator that returns exactly `count` distinct questions."""
    generator = MagicMock()
    generator.generate.side_effect = lambda topic, level, count: [
        make_question(f"Wort{i}", f"word{i}") for i in range(count)
    ]
    return generator


@pytest.fixture
def orchestrator(mock_assessor, mock_generator):
    return ExerciseOrchestrator(
        assessor=mock_assessor,
        generator=mock_generator,
        proficiency_store=ProficiencyStore(),
        registry=SessionRegistry(),
    )


@pytest.fixture
def mock_llm_service():
    """LLMService stand-in; set .call.return_value / .chat.side_effect per test."""
    llm = MagicMock()
    llm.call.return_value = {"output_text": "", "reasoning": None}
    return llm
