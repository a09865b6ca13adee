"""
Process-wide service instances.

The orchestrator owns all exercise and proficiency state, so one instance is
shared by the REST API and the chat assistant for the process lifetime.
"""

from typing import Optional

from config import get_settings
from shared.services.llm_service import LLMService
from shared.utils.exceptions import ServiceNotConfiguredException
from lexio.agents.assistant import LexioAssistant
from lexio.agents.tools import ExerciseTools
from lexio.services.exercise_orchestrator import ExerciseOrchestrator
from lexio.services.question_generator import QuestionGenerator
from lexio.services.topic_assessor import TopicDifficultyAssessor


_llm_service: Optional[LLMService] = None
_orchestrator: Optional[ExerciseOrchestrator] = None
_assistant: Optional[LexioAssistant] = None


def get_llm_service() -> LLMService:
    global _llm_service
    if _llm_service is None:
        settings = get_settings()
        if not settings.openai_api_key:
            raise ServiceNotConfiguredException("OPENAI_API_KEY is not set")
        _llm_service = LLMService(
            api_key=settings.openai_api_key,
            model_id=settings.llm_model,
            max_retries=settings.llm_max_retries,
            timeout=settings.llm_timeout,
            temperature=settings.llm_temperature,
        )
    return _llm_service


def get_orchestrator() -> ExerciseOrchestrator:
    global _orchestrator
    if _orchestrator is None:
        llm_service = get_llm_service()
        _orchestrator = ExerciseOrchestrator(
            assessor=TopicDifficultyAssessor(llm_service),
            generator=QuestionGenerator(llm_service),
            max_questions=get_settings().max_questions_per_exercise,
        )
    return _orchestrator


def get_assistant() -> LexioAssistant:
    global _assistant
    if _assistant is None:
        settings = get_settings()
        tools = ExerciseTools(get_orchestrator(), default_question_count=settings.default_question_count)
        _assistant = LexioAssistant(
            llm_service=get_llm_service(),
            tools=tools,
            max_messages=settings.chat_max_messages,
            max_tool_rounds=settings.max_tool_rounds,
        )
    return _assistant


def reset_dependencies():
    """Drop all shared instances and their state (useful for testing)."""
    global _llm_service, _orchestrator, _assistant
    _llm_service = None
    _orchestrator = None
    _assistant = None
