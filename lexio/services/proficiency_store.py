"""In-memory store of each session's CEFR proficiency level."""

import logging
import threading
from typing import Dict, Optional

from lexio.models.cefr import CefrLevel, DEFAULT_LEVEL

logger = logging.getLogger("lexio.proficiency")

DEFAULT_SESSION = "default"


class ProficiencyStore:
    """Thread-safe map from session id to CEFR level; unset sessions are A1."""

    def __init__(self, default_level: CefrLevel = DEFAULT_LEVEL):
        self._levels: Dict[str, CefrLevel] = {}
        self._lock = threading.Lock()
        self._default_level = default_level

    def get(self, session_id: Optional[str] = None) -> CefrLevel:
        with self._lock:
            return self._levels.get(session_id or DEFAULT_SESSION, self._default_level)

    def set(self, session_id: Optional[str], level: CefrLevel) -> None:
        key = session_id or DEFAULT_SESSION
        with self._lock:
            self._levels[key] = level
        logger.info(f"User level set to {level} for session {key}")

    def __len__(self) -> int:
        with self._lock:
            return len(self._levels)
