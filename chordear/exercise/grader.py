from __future__ import annotations

"""Answer grading for chord-identification exercises.

A complete guess is correct when it names the chord exactly (root, chord and
inversion) or, for rotationally symmetric chords such as the augmented
triad or the diminished seventh, when it produces the same pitch-class set.
Incomplete guesses are left unanswered and never count as attempts.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Set

from ..theory.catalog import ChordCatalog
from ..theory.chord import ChordKey, ChordSpec, Guess
from ..theory.voicing import is_symmetric_pitch_class_set, pitch_classes, voice_chord


class Verdict(str, Enum):
    UNANSWERED = "unanswered"
    CORRECT = "correct"
    WRONG = "wrong"


@dataclass
class Evaluation:
    verdicts: List[Verdict] = field(default_factory=list)
    attempted: int = 0
    correct: int = 0
    unanswered: int = 0
    misses: List[str] = field(default_factory=list)

    @property
    def all_correct(self) -> bool:
        return bool(self.verdicts) and all(v is Verdict.CORRECT for v in self.verdicts)

    def status_text(self) -> str:
        if self.attempted == 0:
            return "No answers filled in yet."
        if self.unanswered > 0:
            return (
                f"You scored {self.correct}/{self.attempted} on filled answers. "
                f"{self.unanswered} unanswered."
            )
        return f"You scored {self.correct}/{self.attempted}."


class Grader:
    def __init__(self, catalog: ChordCatalog) -> None:
        self.catalog = catalog

    def pitch_class_set(self, root: str, key: ChordKey, inversion) -> Optional[Set[int]]:
        """Pitch classes of a voiced chord, or None if root/chord do not resolve."""
        chord = self.catalog.find_chord(key)
        semi = self.catalog.semitone_for(root)
        if chord is None or semi is None:
            return None
        return pitch_classes(voice_chord(semi, chord.intervals, inversion))

    def grade_slot(self, spec: ChordSpec, guess: Optional[Guess]) -> Verdict:
        if guess is None or guess.chord is None or not guess.is_complete():
            return Verdict.UNANSWERED
        try:
            inv = int(str(guess.inversion).strip())
        except ValueError:
            return Verdict.WRONG

        spec_semi = self.catalog.semitone_for(spec.root)
        guess_semi = self.catalog.semitone_for(guess.root)
        if (
            guess_semi is not None
            and guess_semi == spec_semi
            and guess.chord == spec.key
            and inv == spec.inversion
        ):
            return Verdict.CORRECT

        spec_pcs = self.pitch_class_set(spec.root, spec.key, spec.inversion)
        guess_pcs = self.pitch_class_set(guess.root, guess.chord, inv)
        if spec_pcs is None or guess_pcs is None:
            return Verdict.WRONG
        if (
            len(spec_pcs) == len(guess_pcs)
            and is_symmetric_pitch_class_set(spec_pcs)
            and spec_pcs == guess_pcs
        ):
            return Verdict.CORRECT
        return Verdict.WRONG

    def evaluate(self, sequence: Sequence[ChordSpec], guesses: Sequence[Optional[Guess]]) -> Evaluation:
        """Grade every slot; missing guesses count as unanswered."""
        result = Evaluation()
        for i, spec in enumerate(sequence):
            guess = guesses[i] if i < len(guesses) else None
            verdict = self.grade_slot(spec, guess)
            result.verdicts.append(verdict)
            if verdict is Verdict.UNANSWERED:
                result.unanswered += 1
                continue
            result.attempted += 1
            if verdict is Verdict.CORRECT:
                result.correct += 1
            else:
                result.misses.append(self.catalog.format_chord_label(spec))
        return result
