"""Topic difficulty assessment via the LLM, with a safe fallback."""

import json
import logging
import time
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from shared.services.llm_service import LLMService
from lexio.models.cefr import CefrLevel
from lexio.models.exercise import TopicAssessment
from lexio.prompts.templates import (
    ASSESS_TOPIC_SYSTEM_TEMPLATE,
    ASSESS_TOPIC_TEMPLATE,
    CEFR_RUBRIC,
    format_dict_for_prompt,
)
from lexio.utils.schema_utils import parse_llm_json

logger = logging.getLogger("lexio.topic_assessor")

FALLBACK_LEVEL = CefrLevel.A2
FALLBACK_REASONING = "Could not assess topic"


class _AssessmentPayload(BaseModel):
    """Shape of the LLM's assessment reply."""

    model_config = ConfigDict(populate_by_name=True)

    level: Any = "A1"
    reasoning: Optional[str] = ""
    simpler_topic: Optional[str] = Field(default=None, alias="simplerTopic")


class TopicDifficultyAssessor:
    """
    Assigns a CEFR level to an arbitrary vocabulary topic.

    Never raises: any LLM, extraction or validation failure yields an A2
    assessment, a middle estimate that neither hides hard topics nor over-warns.
    """

    def __init__(self, llm_service: LLMService):
        self.llm = llm_service
        self._system_prompt = ASSESS_TOPIC_SYSTEM_TEMPLATE.render(
            rubric=format_dict_for_prompt(CEFR_RUBRIC)
        )

    def assess(self, topic: str) -> TopicAssessment:
        logger.info(f"Assessing topic difficulty: {topic}")
        start_time = time.time()
        try:
            result = self.llm.call(
                prompt=ASSESS_TOPIC_TEMPLATE.render(topic=topic),
                system_prompt=self._system_prompt,
                json_mode=True,
            )
            logger.debug(f"Topic assessment response: {result.get('output_text')}")
            payload = parse_llm_json(result.get("output_text"), _AssessmentPayload, source="topic_assessor")
        except Exception:
            logger.exception(f"Error assessing topic: {topic}")
            return fallback_assessment(topic)

        assessment = TopicAssessment(
            topic=topic,
            assessed_level=CefrLevel.parse(payload.level),
            reasoning=payload.reasoning or "",
            suggested_simpler_topic=_clean_suggestion(payload.simpler_topic),
        )
        logger.info(json.dumps({
            "step": "TOPIC_ASSESSMENT",
            "topic": topic,
            "level": assessment.assessed_level.value,
            "has_suggestion": assessment.suggested_simpler_topic is not None,
            "duration_ms": int((time.time() - start_time) * 1000),
        }))
        return assessment


def fallback_assessment(topic: str) -> TopicAssessment:
    return TopicAssessment(
        topic=topic,
        assessed_level=FALLBACK_LEVEL,
        reasoning=FALLBACK_REASONING,
        suggested_simpler_topic=None,
    )


def _clean_suggestion(value: Optional[str]) -> Optional[str]:
    # Models sometimes write the literal string "null"
    if value is None:
        return None
    value = value.strip()
    if not value or value.lower() == "null":
        return None
    return value
