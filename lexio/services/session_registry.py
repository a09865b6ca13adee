"""
Exercise Session Registry

In-memory storage for active exercises and pending (warned, unconfirmed)
exercises. Each map has its own lock; operations touch one key at a time.
Entries live for the process lifetime.
"""

from typing import Dict, Optional
import threading

from lexio.models.exercise import ExerciseSession, PendingExercise, new_short_id


class SessionRegistry:
    """Thread-safe store of ExerciseSession and PendingExercise instances."""

    def __init__(self):
        self._exercises: Dict[str, ExerciseSession] = {}
        self._pending: Dict[str, PendingExercise] = {}
        self._exercises_lock = threading.Lock()
        self._pending_lock = threading.Lock()

    # Active exercises

    def add_exercise(self, session: ExerciseSession) -> str:
        with self._exercises_lock:
            self._exercises[session.id] = session
        return session.id

    def get_exercise(self, exercise_id: Optional[str]) -> Optional[ExerciseSession]:
        if not exercise_id:
            return None
        with self._exercises_lock:
            return self._exercises.get(exercise_id)

    # Pending exercises

    def add_pending(self, pending: PendingExercise, pending_id: Optional[str] = None) -> str:
        key = pending_id or new_short_id()
        with self._pending_lock:
            self._pending[key] = pending
        return key

    def get_pending(self, pending_id: Optional[str]) -> Optional[PendingExercise]:
        if not pending_id:
            return None
        with self._pending_lock:
            return self._pending.get(pending_id)

    def get_stats(self) -> Dict[str, int]:
        with self._exercises_lock:
            exercise_count = len(self._exercises)
            complete_count = sum(1 for s in self._exercises.values() if s.is_complete)
        with self._pending_lock:
            pending_count = len(self._pending)
        return {
            "exercise_count": exercise_count,
            "complete_count": complete_count,
            "pending_count": pending_count,
        }
