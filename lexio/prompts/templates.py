"""
Prompt Template System

Reusable prompt templates with variable interpolation and validation, plus the
templates for topic assessment and question generation.
"""

from typing import Any, Optional
from string import Formatter

from lexio.exceptions import PromptTemplateError


class PromptTemplate:
    """Reusable template for generating prompts with {variable} placeholders."""

    def __init__(
        self,
        template: str,
        name: Optional[str] = None,
        defaults: Optional[dict[str, Any]] = None,
    ):
        self.template = template.strip()
        self.name = name or "unnamed"
        self.defaults = defaults or {}
        self.required_vars = self._extract_variables()

    def _extract_variables(self) -> set[str]:
        formatter = Formatter()
        variables = set()
        for _, field_name, _, _ in formatter.parse(self.template):
            if field_name is not None:
                base_name = field_name.split(".")[0].split("[")[0]
                if base_name:
                    variables.add(base_name)
        return variables

    def render(self, **kwargs: Any) -> str:
        values = {**self.defaults, **kwargs}
        missing = self.required_vars - set(values.keys())
        if missing:
            raise PromptTemplateError(template_name=self.name, missing_vars=sorted(missing))
        try:
            return self.template.format(**values)
        except KeyError as e:
            raise PromptTemplateError(template_name=self.name, missing_vars=[str(e)]) from e

    def __repr__(self) -> str:
        return f"PromptTemplate(name='{self.name}', vars={self.required_vars})"


# CEFR rubric used when grading topics

CEFR_RUBRIC = {
    "A1": "Basic words (greetings, numbers, colors, family, food basics)",
    "A2": "Everyday topics (shopping, travel basics, hobbies, daily routine)",
    "B1": "Intermediate topics (work, health, education, media)",
    "B2": "Advanced topics (politics, science, business, abstract concepts)",
    "C1": "Professional topics (law, medicine, technology, academic)",
    "C2": "Specialized/rare vocabulary (philosophy, literature, technical jargon)",
}


# Topic Assessment Templates

ASSESS_TOPIC_SYSTEM_TEMPLATE = PromptTemplate(
    """You are an expert German language educator specializing in vocabulary assessment.
Your task is to assess the CEFR difficulty level of vocabulary topics.

CEFR Levels:
{rubric}

Respond with ONLY a JSON object in this exact format:
{{"level": "A1", "reasoning": "brief explanation", "simplerTopic": "suggested easier topic or null"}}""",
    name="assess_topic_system",
)

ASSESS_TOPIC_TEMPLATE = PromptTemplate(
    "Assess the CEFR level for German vocabulary about: {topic}",
    name="assess_topic",
)


# Question Generation Templates

GENERATE_QUESTIONS_SYSTEM_TEMPLATE = PromptTemplate(
    """You are an expert German language teacher creating vocabulary exercises.
Generate fill-in-the-blank sentences for German learners.

Rules:
1. Create natural, contextual sentences in German
2. The blank should replace a key vocabulary word
3. Provide the English translation of the sentence
4. Match the difficulty to the specified CEFR level
5. Use vocabulary appropriate for the given topic

Respond with ONLY a JSON array of objects, each with:
- sentenceWithBlank: German sentence with {blank} for the missing word
- completeSentence: Full German sentence with the word
- targetWord: The German word that fills the blank
- englishWord: English translation of the target word
- englishTranslation: Full English translation of the sentence

Example:
[{{"sentenceWithBlank": "Ich trinke gern {blank}.", "completeSentence": "Ich trinke gern Kaffee.", "targetWord": "Kaffee", "englishWord": "coffee", "englishTranslation": "I like to drink {blank}."}}]""",
    name="generate_questions_system",
    defaults={"blank": "___"},
)

GENERATE_QUESTIONS_TEMPLATE = PromptTemplate(
    "Generate {count} German vocabulary sentences about '{topic}' at {level} level.",
    name="generate_questions",
)


# Helper Functions

def format_list_for_prompt(items: list[str], bullet: str = "-") -> str:
    if not items:
        return "None"
    return "\n".join(f"{bullet} {item}" for item in items)


def format_dict_for_prompt(data: dict[str, Any], bullet: str = "-") -> str:
    if not data:
        return "None"
    return format_list_for_prompt([f"{key}: {value}" for key, value in data.items()], bullet)
