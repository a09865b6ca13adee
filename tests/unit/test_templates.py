"""Unit tests for lexio/prompts: template rendering and prompt helpers."""

import pytest

from lexio.exceptions import PromptTemplateError
from lexio.prompts.assistant_prompts import LEXIO_SYSTEM_TEMPLATE
from lexio.prompts.templates import (
    ASSESS_TOPIC_SYSTEM_TEMPLATE,
    CEFR_RUBRIC,
    PromptTemplate,
    format_dict_for_prompt,
    format_list_for_prompt,
)


class TestPromptTemplate:
    def test_extracts_variables(self):
        template = PromptTemplate("Practice {topic} at {level}", name="t")
        assert template.required_vars == {"topic", "level"}

    def test_escaped_braces_are_not_variables(self):
        template = PromptTemplate('{{"level": "A1"}} for {topic}')
        assert template.required_vars == {"topic"}
        assert template.render(topic="food") == '{"level": "A1"} for food'

    def test_missing_variables_raise_sorted(self):
        template = PromptTemplate("{topic} {count} {level}", name="gen")
        with pytest.raises(PromptTemplateError) as exc_info:
            template.render(topic="food")
        assert exc_info.value.missing_vars == ["count", "level"]
        assert exc_info.value.template_name == "gen"

    def test_defaults_and_override(self):
        template = PromptTemplate("Hi {name}", defaults={"name": "Lexio"})
        assert template.render() == "Hi Lexio"
        assert template.render(name="Max") == "Hi Max"

    def test_template_is_stripped(self):
        assert PromptTemplate("\n  hello  \n").render() == "hello"


class TestFormatters:
    def test_list(self):
        assert format_list_for_prompt(["a", "b"]) == "- a\n- b"
        assert format_list_for_prompt(["a"], bullet="*") == "* a"

    def test_empty_list(self):
        assert format_list_for_prompt([]) == "None"

    def test_dict(self):
        assert format_dict_for_prompt({"A1": "basic"}) == "- A1: basic"
        assert format_dict_for_prompt({}) == "None"


class TestShippedTemplates:
    def test_assessment_rubric_lists_every_level(self):
        rendered = ASSESS_TOPIC_SYSTEM_TEMPLATE.render(rubric=format_dict_for_prompt(CEFR_RUBRIC))
        for level in ("A1", "A2", "B1", "B2", "C1", "C2"):
            assert f"- {level}: " in rendered
        assert '{"level": "A1", "reasoning": "brief explanation"' in rendered

    def test_assistant_prompt(self):
        rendered = LEXIO_SYSTEM_TEMPLATE.render(default_count=5, max_count=10)
        assert rendered.startswith("You are Lexio")
        assert "confirm_difficult_topic" in rendered
        assert "default to 5 sentences, at most 10" in rendered
