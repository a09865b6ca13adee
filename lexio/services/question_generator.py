"""Fill-in-the-blank question generation via the LLM, with an offline fallback."""

import json
import logging
import time
from typing import List, Union

from shared.services.llm_service import LLMService
from lexio.models.cefr import CefrLevel
from lexio.models.exercise import Question
from lexio.prompts.templates import GENERATE_QUESTIONS_SYSTEM_TEMPLATE, GENERATE_QUESTIONS_TEMPLATE
from lexio.utils.schema_utils import LLMOutputError, parse_llm_json

logger = logging.getLogger("lexio.question_generator")


FALLBACK_QUESTIONS: List[Question] = [
    Question(
        sentence_with_blank="Guten ___, wie geht es Ihnen?",
        complete_sentence="Guten Tag, wie geht es Ihnen?",
        target_word="Tag",
        english_word="day",
        english_translation="Good ___, how are you?",
    ),
    Question(
        sentence_with_blank="Ich ___ Deutsch.",
        complete_sentence="Ich lerne Deutsch.",
        target_word="lerne",
        english_word="learn",
        english_translation="I ___ German.",
    ),
    Question(
        sentence_with_blank="Das ___ ist sehr schön heute.",
        complete_sentence="Das Wetter ist sehr schön heute.",
        target_word="Wetter",
        english_word="weather",
        english_translation="The ___ is very nice today.",
    ),
]


def fallback_questions(count: int) -> List[Question]:
    """The offline batch, truncated to min(count, batch size). Never padded."""
    return list(FALLBACK_QUESTIONS[:max(count, 0)])


class QuestionGenerator:
    """Generates a batch of questions for a topic, level and count. Never raises."""

    def __init__(self, llm_service: LLMService):
        self.llm = llm_service
        self._system_prompt = GENERATE_QUESTIONS_SYSTEM_TEMPLATE.render()

    def generate(self, topic: str, level: Union[CefrLevel, str], count: int) -> List[Question]:
        level = CefrLevel.parse(level)
        logger.info(f"Generating {count} questions for topic '{topic}' at level {level}")
        start_time = time.time()
        try:
            result = self.llm.call(
                prompt=GENERATE_QUESTIONS_TEMPLATE.render(topic=topic, level=level.value, count=count),
                system_prompt=self._system_prompt,
                json_mode=False,
            )
            logger.debug(f"Generated questions response: {result.get('output_text')}")
            questions = parse_llm_json(result.get("output_text"), List[Question], source="question_generator")
            if not questions:
                raise LLMOutputError("question_generator", "no questions returned")
        except Exception:
            logger.exception(f"Error generating questions for topic: {topic}")
            return fallback_questions(count)

        questions = questions[:count]
        logger.info(json.dumps({
            "step": "QUESTION_GENERATION",
            "topic": topic,
            "level": level.value,
            "requested": count,
            "generated": len(questions),
            "duration_ms": int((time.time() - start_time) * 1000),
        }))
        return questions
