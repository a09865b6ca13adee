"""Exercise and proficiency API endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends

from lexio import dependencies
from lexio.models.exercise import ExerciseSummary
from lexio.models.responses import (
    AnswerResult,
    ExerciseStarted,
    HintResult,
    SkipResult,
    StartExerciseResult,
)
from lexio.models.schemas import (
    AnswerRequest,
    ConfirmExerciseRequest,
    LevelResponse,
    SetLevelRequest,
    StartExerciseRequest,
)
from lexio.services.exercise_orchestrator import ExerciseOrchestrator
from shared.utils.exceptions import LexioException

router = APIRouter(prefix="/api", tags=["exercises"])


def get_orchestrator() -> ExerciseOrchestrator:
    """Shared orchestrator; a missing LLM configuration becomes a 503."""
    try:
        return dependencies.get_orchestrator()
    except LexioException as e:
        raise e.to_http_exception()


@router.get("/level", response_model=LevelResponse)
def get_level(session_id: Optional[str] = None, orchestrator: ExerciseOrchestrator = Depends(get_orchestrator)):
    """Get the current CEFR level (A1 if never set)."""
    return LevelResponse(level=orchestrator.get_level(session_id), session_id=session_id)


@router.put("/level", response_model=LevelResponse)
def set_level(request: SetLevelRequest, orchestrator: ExerciseOrchestrator = Depends(get_orchestrator)):
    """Set the CEFR level. Unrecognized values are stored as A1."""
    level = orchestrator.set_level(request.level, request.session_id)
    return LevelResponse(level=level, session_id=request.session_id)


@router.post("/exercises", response_model=StartExerciseResult)
def start_exercise(request: StartExerciseRequest, orchestrator: ExerciseOrchestrator = Depends(get_orchestrator)):
    """Start an exercise, or get a difficulty warning if the topic is above the user's level."""
    return orchestrator.assess_and_maybe_warn(
        request.topic,
        request.number_of_questions,
        request.proceed_despite_warning,
        session_id=request.session_id,
    )


@router.post("/exercises/confirm", response_model=ExerciseStarted)
def confirm_exercise(request: ConfirmExerciseRequest, orchestrator: ExerciseOrchestrator = Depends(get_orchestrator)):
    """Start an exercise on a topic the user chose to keep after a warning."""
    return orchestrator.confirm(request.topic, request.number_of_questions, session_id=request.session_id)


@router.post("/exercises/{exercise_id}/answer", response_model=AnswerResult)
def submit_answer(
    exercise_id: str,
    request: AnswerRequest,
    orchestrator: ExerciseOrchestrator = Depends(get_orchestrator),
):
    """Check an answer for the current question and advance."""
    return orchestrator.submit_answer(exercise_id, request.answer)


@router.post("/exercises/{exercise_id}/hint", response_model=HintResult)
def request_hint(exercise_id: str, orchestrator: ExerciseOrchestrator = Depends(get_orchestrator)):
    """Get the English translation of the current sentence."""
    return orchestrator.request_hint(exercise_id)


@router.post("/exercises/{exercise_id}/skip", response_model=SkipResult)
def skip_question(exercise_id: str, orchestrator: ExerciseOrchestrator = Depends(get_orchestrator)):
    """Skip the current question and reveal its answer."""
    return orchestrator.skip(exercise_id)


@router.get("/exercises/{exercise_id}/summary", response_model=ExerciseSummary)
def get_summary(exercise_id: str, orchestrator: ExerciseOrchestrator = Depends(get_orchestrator)):
    """Get accuracy, hint usage and missed words for an exercise."""
    return orchestrator.summarize(exercise_id)
