"""
CEFR Level Model

Ordinal proficiency scale shared by user profiles and topic assessments.
"""

from enum import Enum
from typing import Any


class CefrLevel(str, Enum):
    """Common European Framework of Reference levels, A1 (beginner) to C2 (native-like)."""

    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def is_lower_than(self, other: "CefrLevel") -> bool:
        return self.rank < other.rank

    @classmethod
    def parse(cls, value: Any) -> "CefrLevel":
        """Parse free text into a level; anything unrecognized is A1."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.A1
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.A1

    def __str__(self) -> str:
        return self.value


_RANKS = {level: rank for rank, level in enumerate(CefrLevel, start=1)}

DEFAULT_LEVEL = CefrLevel.A1
