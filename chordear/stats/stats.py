from __future__ import annotations

"""In-memory session stats: attempts, correct answers and miss tallies."""

from dataclasses import dataclass, field
from typing import Dict, Iterable


@dataclass
class SessionStats:
    correct: int = 0
    attempts: int = 0
    exercises: int = 0
    missed: Dict[str, int] = field(default_factory=dict)
    pending_misses: Dict[str, int] = field(default_factory=dict)

    def record_evaluation(self, attempted: int, correct: int, misses: Iterable[str]) -> None:
        """Add one evaluation's counts; misses wait in pending until finalized."""
        self.attempts += int(attempted)
        self.correct += int(correct)
        for label in misses:
            self.pending_misses[label] = self.pending_misses.get(label, 0) + 1

    def finalize_misses(self) -> Dict[str, int]:
        """Move pending misses into the session tally and return what moved."""
        moved = self.pending_misses
        for label, count in moved.items():
            self.missed[label] = self.missed.get(label, 0) + count
        self.pending_misses = {}
        return moved

    def reset(self) -> None:
        self.correct = 0
        self.attempts = 0
        self.exercises = 0
        self.missed = {}
        self.pending_misses = {}


def format_summary(stats: SessionStats, top: int = 10) -> str:
    """Return a one-line human-readable summary of stats."""
    line = f"Session: {stats.correct} correct / {stats.attempts} attempts | Exercises: {stats.exercises}"
    entries = sorted(
        ((lab, c) for lab, c in stats.missed.items() if c > 0),
        key=lambda kv: kv[1],
        reverse=True,
    )
    if not entries:
        return line + " | Misses: —"
    return line + " | Misses: " + ", ".join(f"{lab}×{c}" for lab, c in entries[:top])
