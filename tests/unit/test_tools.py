"""Unit tests for lexio/agents/tools.py: tool definitions and dispatch."""

import json

import pytest

from lexio.agents.tools import TOOL_DEFINITIONS, ExerciseTools
from lexio.exceptions import ToolExecutionError
from lexio.models.cefr import CefrLevel
from lexio.models.exercise import TopicAssessment


@pytest.fixture
def tools(orchestrator):
    return ExerciseTools(orchestrator)


def _call(tools, name, session_id="conv-1", **args):
    return json.loads(tools.dispatch(name, json.dumps(args), session_id))


class TestDefinitions:
    def test_all_tools_declared(self):
        names = [d["function"]["name"] for d in TOOL_DEFINITIONS]
        assert names == [
            "set_user_level",
            "get_user_level",
            "generate_vocabulary_exercise",
            "confirm_difficult_topic",
            "submit_answer",
            "request_translation",
            "skip_question",
            "get_exercise_summary",
        ]

    def test_definitions_are_openai_functions(self):
        for definition in TOOL_DEFINITIONS:
            assert definition["type"] == "function"
            params = definition["function"]["parameters"]
            assert params["type"] == "object"
            assert set(params["required"]) <= set(params["properties"])

    def test_every_definition_has_a_handler(self, tools):
        for definition in tools.definitions:
            assert definition["function"]["name"] in tools._handlers


class TestLevelTools:
    def test_set_then_get(self, tools, orchestrator):
        assert _call(tools, "set_user_level", level="b1") == {
            "message": "Your German level has been set to B1."
        }
        assert orchestrator.get_level("conv-1") is CefrLevel.B1
        assert _call(tools, "get_user_level") == {
            "message": "Your current German level is set to B1."
        }

    def test_levels_are_per_conversation(self, tools):
        _call(tools, "set_user_level", session_id="a", level="C2")
        assert _call(tools, "get_user_level", session_id="b")["message"].endswith("A1.")

    def test_invalid_level_falls_back_to_a1(self, tools):
        assert _call(tools, "set_user_level", level="native")["message"].endswith("A1.")


class TestExerciseTools:
    def test_generate_exercise(self, tools, mock_generator):
        result = _call(tools, "generate_vocabulary_exercise", topic="food", number_of_questions=2)

        assert result["kind"] == "started"
        assert result["total_questions"] == 2
        assert result["question_number"] == 1
        mock_generator.generate.assert_called_once_with("food", CefrLevel.A1, 2)

    def test_generate_uses_default_count(self, tools, mock_generator):
        _call(tools, "generate_vocabulary_exercise", topic="food")
        mock_generator.generate.assert_called_once_with("food", CefrLevel.A1, 5)

    def test_non_numeric_count_uses_default(self, tools, mock_generator):
        _call(tools, "generate_vocabulary_exercise", topic="food", number_of_questions="lots")
        mock_generator.generate.assert_called_once_with("food", CefrLevel.A1, 5)

    def test_generate_warns_then_confirm(self, tools, mock_assessor):
        mock_assessor.assess.side_effect = lambda topic: TopicAssessment(
            topic=topic, assessed_level=CefrLevel.C1
        )
        warning = _call(tools, "generate_vocabulary_exercise", topic="law", number_of_questions=3)
        assert warning["kind"] == "warning"
        assert warning["topic_level"] == "C1"
        assert warning["user_level"] == "A1"

        started = _call(tools, "confirm_difficult_topic", topic="law", number_of_questions=3)
        assert started["kind"] == "started"
        assert started["total_questions"] == 3

    @pytest.mark.parametrize("flag", ["false", " FALSE ", "maybe", 1, None])
    def test_string_or_odd_proceed_flag_still_warns(self, tools, mock_assessor, mock_generator, flag):
        mock_assessor.assess.side_effect = lambda topic: TopicAssessment(
            topic=topic, assessed_level=CefrLevel.C1
        )
        result = _call(
            tools, "generate_vocabulary_exercise",
            topic="quantum physics", number_of_questions=5, proceed_despite_warning=flag,
        )
        assert result["kind"] == "warning"
        mock_generator.generate.assert_not_called()

    @pytest.mark.parametrize("flag", [True, "true", "True "])
    def test_true_proceed_flag_skips_warning(self, tools, mock_assessor, flag):
        mock_assessor.assess.side_effect = lambda topic: TopicAssessment(
            topic=topic, assessed_level=CefrLevel.C1
        )
        result = _call(
            tools, "generate_vocabulary_exercise",
            topic="quantum physics", number_of_questions=5, proceed_despite_warning=flag,
        )
        assert result["kind"] == "started"

    def test_full_exercise_round(self, tools):
        started = _call(tools, "generate_vocabulary_exercise", topic="food", number_of_questions=2)
        eid = started["exercise_id"]

        hint = _call(tools, "request_translation", exercise_id=eid)
        assert hint["translation"] == "The ___ is big."

        answer = _call(tools, "submit_answer", exercise_id=eid, answer="Wort0")
        assert answer["correct"] is True
        assert answer["next_question_number"] == 2

        skipped = _call(tools, "skip_question", exercise_id=eid)
        assert skipped["correct_word"] == "Wort1"
        assert skipped["exercise_complete"] is True

        summary = _call(tools, "get_exercise_summary", exercise_id=eid)
        assert summary["correct_count"] == 1
        assert summary["skipped_count"] == 1
        assert summary["hints_used_count"] == 1
        assert summary["accuracy_percentage"] == 50.0
        assert summary["missed_words"][0]["target_word"] == "Wort1"

    def test_unknown_exercise_is_not_an_error(self, tools):
        result = _call(tools, "submit_answer", exercise_id="missing", answer="x")
        assert result["exercise_complete"] is True
        assert "not found" in result["explanation"]


class TestDispatchErrors:
    def test_unknown_tool(self, tools):
        result = json.loads(tools.dispatch("delete_everything", "{}"))
        assert result == {"error": "[tools] Tool 'delete_everything' failed: unknown tool"}

    def test_invalid_json_arguments(self, tools):
        result = json.loads(tools.dispatch("submit_answer", "{not json"))
        assert "not valid JSON" in result["error"]

    def test_non_object_arguments(self, tools):
        result = json.loads(tools.dispatch("submit_answer", "[1, 2]"))
        assert "must be a JSON object" in result["error"]

    def test_missing_required_argument(self, tools):
        result = json.loads(tools.dispatch("skip_question", "{}"))
        assert result["error"].endswith("missing required argument 'exercise_id'")

    def test_execute_raises(self, tools):
        with pytest.raises(ToolExecutionError) as exc_info:
            tools.execute("generate_vocabulary_exercise", json.dumps({"topic": "  "}))
        assert exc_info.value.tool_name == "generate_vocabulary_exercise"

    def test_empty_arguments_are_allowed(self, tools):
        assert "A1" in json.loads(tools.dispatch("get_user_level", None))["message"]
        assert "A1" in json.loads(tools.dispatch("get_user_level", ""))["message"]
