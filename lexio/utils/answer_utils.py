"""Answer normalization for fill-in-the-blank scoring."""

import re
from typing import Optional


_LEADING_ARTICLE = re.compile(r"^(der|die|das|ein|eine|einen|einem|einer)\s+")


def normalize_answer(answer: Optional[str]) -> str:
    """
    Normalize a learner answer or target word for comparison.

    Trims, lowercases and drops one leading German article token, so
    "Der Tisch" and "tisch" compare equal. Articles are only stripped at the
    front and only when followed by whitespace ("derbyshire" stays intact).
    """
    if answer is None:
        return ""
    normalized = answer.strip().lower()
    return _LEADING_ARTICLE.sub("", normalized, count=1)


def answers_match(answer: Optional[str], target: Optional[str]) -> bool:
    return normalize_answer(answer) == normalize_answer(target)
