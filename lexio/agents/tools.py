"""
Exercise Tools

OpenAI function-calling definitions for the orchestrator operations and the
dispatcher that executes a tool call and serializes its result for the model.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel

from lexio.exceptions import ToolExecutionError
from lexio.services.exercise_orchestrator import ExerciseOrchestrator

logger = logging.getLogger("lexio.tools")


def _function(name: str, description: str, properties: Dict[str, Any], required: List[str]) -> Dict[str, Any]:
    return {
        "type": "function",
        "function": {
            "name": name,
            "description": description,
            "parameters": {
                "type": "object",
                "properties": properties,
                "required": required,
            },
        },
    }


_EXERCISE_ID = {"type": "string", "description": "The exercise ID from when the exercise was started"}

TOOL_DEFINITIONS: List[Dict[str, Any]] = [
    _function(
        "set_user_level",
        "Sets the user's German proficiency level. Call this when the user tells you their level. "
        "Valid levels are: A1, A2, B1, B2, C1, C2 (CEFR scale). A1 is beginner, C2 is native-like proficiency.",
        {"level": {"type": "string", "description": "The CEFR level: A1, A2, B1, B2, C1, or C2"}},
        ["level"],
    ),
    _function(
        "get_user_level",
        "Gets the user's current German proficiency level. "
        "Call this when the user asks about their level or you need to check it.",
        {},
        [],
    ),
    _function(
        "generate_vocabulary_exercise",
        "Assesses a vocabulary topic and generates exercises if appropriate. "
        "Call this when the user wants to practice vocabulary on a specific topic. "
        "If the topic is above the user's level, returns a warning with options. "
        "If the topic is appropriate or the user confirms, generates the exercise.",
        {
            "topic": {
                "type": "string",
                "description": "The vocabulary topic to practice, e.g., 'legal terms', 'cooking', 'sports'. Can be any topic.",
            },
            "number_of_questions": {
                "type": "integer",
                "description": "Number of sentences to generate. Default to 5 if user doesn't specify. Maximum is 10.",
            },
            "proceed_despite_warning": {
                "type": "boolean",
                "description": "Set to true if the user has already been warned about difficulty and wants to proceed anyway",
            },
        },
        ["topic"],
    ),
    _function(
        "confirm_difficult_topic",
        "Confirms that the user wants to proceed with a difficult topic after being warned. "
        "Call this when the user says they want to continue despite the topic being above their level.",
        {
            "topic": {"type": "string", "description": "The topic that was previously assessed as difficult"},
            "number_of_questions": {"type": "integer", "description": "Number of questions for the exercise"},
        },
        ["topic"],
    ),
    _function(
        "submit_answer",
        "Submits the user's answer for the current question and returns feedback. "
        "Call this when the user provides their guess for the missing word. Returns whether the answer "
        "was correct, the correct word if wrong, and the next question if the exercise isn't complete yet.",
        {
            "exercise_id": _EXERCISE_ID,
            "answer": {"type": "string", "description": "The user's answer - the German word they think fills the blank"},
        },
        ["exercise_id", "answer"],
    ),
    _function(
        "request_translation",
        "Provides the English translation of the current sentence as a hint. Call this when the user asks "
        "for help, a translation, or says they don't know the word. "
        "This marks the question as 'hint used' for progress tracking.",
        {"exercise_id": _EXERCISE_ID},
        ["exercise_id"],
    ),
    _function(
        "skip_question",
        "Skips the current question and moves to the next one. Call this when the user wants to skip, "
        "give up, or says they can't answer. Returns the correct answer for the skipped question and the next question.",
        {"exercise_id": _EXERCISE_ID},
        ["exercise_id"],
    ),
    _function(
        "get_exercise_summary",
        "Gets a summary of the exercise with statistics and results. Call this when the exercise is "
        "finished or when the user asks for their results. Returns accuracy, hints used, and the words that were missed.",
        {"exercise_id": _EXERCISE_ID},
        ["exercise_id"],
    ),
]


class ExerciseTools:
    """Executes tool calls against an ExerciseOrchestrator on behalf of one conversation."""

    def __init__(self, orchestrator: ExerciseOrchestrator, default_question_count: int = 5):
        self.orchestrator = orchestrator
        self.default_question_count = default_question_count
        self._handlers: Dict[str, Callable[[Dict[str, Any], Optional[str]], Any]] = {
            "set_user_level": self._set_user_level,
            "get_user_level": self._get_user_level,
            "generate_vocabulary_exercise": self._generate_exercise,
            "confirm_difficult_topic": self._confirm_difficult_topic,
            "submit_answer": self._submit_answer,
            "request_translation": self._request_translation,
            "skip_question": self._skip_question,
            "get_exercise_summary": self._get_exercise_summary,
        }

    @property
    def definitions(self) -> List[Dict[str, Any]]:
        return TOOL_DEFINITIONS

    def dispatch(self, name: str, arguments: Optional[str], session_id: Optional[str] = None) -> str:
        """Run a tool call and return its JSON result. Errors are reported to the model, not raised."""
        try:
            result = self.execute(name, arguments, session_id)
        except ToolExecutionError as e:
            logger.warning(e.message)
            return json.dumps({"error": e.message})

        if isinstance(result, BaseModel):
            return result.model_dump_json()
        return json.dumps(result, ensure_ascii=False)

    def execute(self, name: str, arguments: Optional[str], session_id: Optional[str] = None) -> Any:
        handler = self._handlers.get(name)
        if handler is None:
            raise ToolExecutionError(name, "unknown tool")

        args = _decode_arguments(name, arguments)
        logger.info(json.dumps({"step": "TOOL_CALL", "tool": name, "args": args}))
        return handler(args, session_id)

    # ─── Handlers ─────────────────────────────────────────────────────

    def _set_user_level(self, args: Dict[str, Any], session_id: Optional[str]) -> Dict[str, str]:
        level = self.orchestrator.set_level(args.get("level"), session_id)
        return {"message": f"Your German level has been set to {level}."}

    def _get_user_level(self, args: Dict[str, Any], session_id: Optional[str]) -> Dict[str, str]:
        level = self.orchestrator.get_level(session_id)
        return {"message": f"Your current German level is set to {level}."}

    def _generate_exercise(self, args: Dict[str, Any], session_id: Optional[str]) -> BaseModel:
        return self.orchestrator.assess_and_maybe_warn(
            _require(args, "generate_vocabulary_exercise", "topic"),
            _int_arg(args, "number_of_questions", self.default_question_count),
            _bool_arg(args, "proceed_despite_warning", False),
            session_id=session_id,
        )

    def _confirm_difficult_topic(self, args: Dict[str, Any], session_id: Optional[str]) -> BaseModel:
        return self.orchestrator.confirm(
            _require(args, "confirm_difficult_topic", "topic"),
            _int_arg(args, "number_of_questions", self.default_question_count),
            session_id=session_id,
        )

    def _submit_answer(self, args: Dict[str, Any], session_id: Optional[str]) -> BaseModel:
        return self.orchestrator.submit_answer(
            _require(args, "submit_answer", "exercise_id"),
            str(args.get("answer") or ""),
        )

    def _request_translation(self, args: Dict[str, Any], session_id: Optional[str]) -> BaseModel:
        return self.orchestrator.request_hint(_require(args, "request_translation", "exercise_id"))

    def _skip_question(self, args: Dict[str, Any], session_id: Optional[str]) -> BaseModel:
        return self.orchestrator.skip(_require(args, "skip_question", "exercise_id"))

    def _get_exercise_summary(self, args: Dict[str, Any], session_id: Optional[str]) -> BaseModel:
        return self.orchestrator.summarize(_require(args, "get_exercise_summary", "exercise_id"))


def _decode_arguments(name: str, arguments: Optional[str]) -> Dict[str, Any]:
    if not arguments:
        return {}
    try:
        decoded = json.loads(arguments)
    except json.JSONDecodeError as e:
        raise ToolExecutionError(name, f"arguments are not valid JSON ({e.msg})") from e
    if not isinstance(decoded, dict):
        raise ToolExecutionError(name, "arguments must be a JSON object")
    return decoded


def _require(args: Dict[str, Any], tool_name: str, key: str) -> str:
    value = args.get(key)
    if value is None or str(value).strip() == "":
        raise ToolExecutionError(tool_name, f"missing required argument '{key}'")
    return str(value)


def _int_arg(args: Dict[str, Any], key: str, default: int) -> int:
    value = args.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _bool_arg(args: Dict[str, Any], key: str, default: bool) -> bool:
    value = args.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text == "true":
            return True
        if text == "false":
            return False
    return default
