from __future__ import annotations

"""Session: owns the current exercise, its guesses and the session stats.

Front-end agnostic. Every user action (start, next, guess, evaluate, hear,
arp, play all, reset) is one method; refusals come back as a `Notice`
instead of an exception so the caller just shows the message.
"""

import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from ..audio.scheduler import (
    ArpeggioOptions,
    AudioScheduler,
    ChordHandle,
    Direction,
    PlaybackOptions,
)
from ..audio.synthesis import Tone
from ..config.config import DEFAULT_BPM, DEFAULT_CHORDS, clamp_bpm, clamp_chord_count
from ..exercise.generator import (
    ConfigNotLoadedError,
    Exercise,
    ExerciseGenerator,
    NothingEnabledError,
)
from ..exercise.grader import Evaluation, Grader, Verdict
from ..exercise.pool import TemplatePool
from ..stats.stats import SessionStats, format_summary
from ..theory.catalog import ChordCatalog
from ..theory.chord import ChordSpec, Guess
from ..theory.voicing import voice_chord
from .explain import trace as xtrace

HEAR_DURATION_S = 1.0
DEFAULT_GAIN = 0.27
AUDITION_BOOST = 0.03  # single chords and arpeggios sit a little above the progression
PROGRESSION_LEAD_S = 0.12
BEATS_PER_CHORD = 2


@dataclass(frozen=True)
class Notice:
    """A user-facing refusal or hint; nothing in the session changed."""

    message: str


@dataclass
class SessionSettings:
    chords: int = DEFAULT_CHORDS
    bpm: float = float(DEFAULT_BPM)
    auto_play: bool = True
    gain: float = DEFAULT_GAIN

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "SessionSettings":
        ex = cfg.get("exercise", {})
        audio = cfg.get("audio", {})
        return cls(
            chords=clamp_chord_count(ex.get("chords", DEFAULT_CHORDS)),
            bpm=clamp_bpm(ex.get("bpm", DEFAULT_BPM)),
            auto_play=bool(ex.get("auto_play", True)),
            gain=float(audio.get("gain", DEFAULT_GAIN)),
        )


class Session:
    def __init__(
        self,
        catalog: Optional[ChordCatalog],
        scheduler: Optional[AudioScheduler] = None,
        settings: Optional[SessionSettings] = None,
        rng: Optional[random.Random] = None,
        root_text: str = "",
    ) -> None:
        self.catalog = catalog
        self.scheduler = scheduler
        self.settings = settings or SessionSettings()
        self.pool: Optional[TemplatePool] = TemplatePool(catalog, root_text) if catalog else None
        self.generator = ExerciseGenerator(self.pool, rng)
        self.grader: Optional[Grader] = Grader(catalog) if catalog else None
        self.stats = SessionStats()
        self.exercise: Optional[Exercise] = None
        self.guesses: List[Guess] = []
        self.verdicts: List[Optional[Verdict]] = []
        self.can_advance = False

    # --- Exercise transitions ---
    def start_exercise(self, n: Optional[int] = None) -> Union[Exercise, Notice]:
        """Finalize pending misses, then replace the exercise with a new one."""
        moved = self.stats.finalize_misses()
        if moved:
            xtrace("misses_finalized", moved)
        count = clamp_chord_count(self.settings.chords if n is None else n)
        try:
            exercise = self.generator.generate(count)
        except (ConfigNotLoadedError, NothingEnabledError) as e:
            return Notice(str(e))

        self.exercise = exercise
        self.guesses = [Guess() for _ in exercise.sequence]
        self.verdicts = [None] * len(exercise.sequence)
        self.stats.exercises += 1
        self.can_advance = False
        xtrace(
            "exercise_started",
            {
                "reference": self.describe(exercise.reference),
                "sequence": [self.describe(s) for s in exercise.sequence],
            },
        )
        if self.settings.auto_play:
            self.play_all()
        return exercise

    def next_exercise(self, n: Optional[int] = None) -> Union[Exercise, Notice]:
        if self.exercise is None:
            return Notice("Start an exercise first.")
        if not self.can_advance:
            return Notice("Get every chord right before moving on.")
        return self.start_exercise(n)

    # --- Answers ---
    def set_guess(self, index: int, root: str = "", chord_text: str = "", inversion: str = "") -> Guess:
        """Record the answer for slot ``index`` (0-based) and clear its verdict."""
        if self.exercise is None:
            raise IndexError("No exercise in progress")
        if not 0 <= index < len(self.guesses):
            raise IndexError(f"Slot {index + 1} does not exist (1..{len(self.guesses)})")
        chord = self.pool.resolve_chord_text(chord_text) if self.pool else None
        guess = Guess(root=(root or "").strip(), chord=chord, inversion=str(inversion or "").strip())
        self.guesses[index] = guess
        self.verdicts[index] = None
        return guess

    def evaluate(self) -> Union[Evaluation, Notice]:
        if self.exercise is None or self.grader is None:
            return Notice("Start an exercise first.")
        result = self.grader.evaluate(self.exercise.sequence, self.guesses)
        self.stats.record_evaluation(result.attempted, result.correct, result.misses)
        self.verdicts = list(result.verdicts)
        self.can_advance = result.all_correct
        xtrace(
            "evaluated",
            {
                "verdicts": [v.value for v in result.verdicts],
                "attempted": result.attempted,
                "correct": result.correct,
            },
        )
        return result

    def reset_stats(self) -> None:
        self.stats.reset()

    def summary(self) -> str:
        return format_summary(self.stats)

    # --- Labels ---
    def describe(self, spec: ChordSpec) -> str:
        if self.catalog is None:
            return f"{spec.root} {spec.key} inv{spec.inversion}"
        return self.catalog.format_chord_label(spec)

    # --- Playback ---
    def set_tone(self, tone: Union[str, Tone]) -> None:
        if self.scheduler is not None:
            self.scheduler.tone = Tone(tone)

    def set_bpm(self, bpm: Any) -> float:
        self.settings.bpm = clamp_bpm(bpm)
        return self.settings.bpm

    @property
    def audition_gain(self) -> float:
        return self.settings.gain + AUDITION_BOOST

    @property
    def chord_seconds(self) -> float:
        return BEATS_PER_CHORD * 60.0 / clamp_bpm(self.settings.bpm)

    def voice_spec(self, spec: ChordSpec) -> Optional[List[int]]:
        """MIDI notes for a spec, or None when its chord/root cannot be resolved."""
        if self.catalog is None:
            return None
        chord = self.catalog.find_chord(spec.key)
        semi = self.catalog.semitone_for(spec.root)
        if chord is None or semi is None:
            return None
        return voice_chord(semi, chord.intervals, spec.inversion or 0)

    def hear(self, spec: ChordSpec) -> Optional[ChordHandle]:
        notes = self.voice_spec(spec)
        if notes is None or self.scheduler is None:
            return None
        xtrace("playback", {"kind": "chord", "notes": notes})
        return self.scheduler.play_chord(notes, HEAR_DURATION_S, PlaybackOptions(peak_gain=self.audition_gain))

    def arpeggiate(self, spec: ChordSpec, direction: Direction = Direction.UP) -> bool:
        notes = self.voice_spec(spec)
        if notes is None or self.scheduler is None:
            return False
        xtrace("playback", {"kind": "arpeggio", "notes": notes, "direction": Direction(direction).value})
        self.scheduler.play_arpeggio(
            notes,
            self.chord_seconds,
            ArpeggioOptions(gain=self.audition_gain, direction=Direction(direction)),
        )
        return True

    def play_all(self) -> List[ChordHandle]:
        """Reference then every chord, back to back, two beats each."""
        if self.exercise is None or self.scheduler is None:
            return []
        dur = self.chord_seconds
        t = self.scheduler.current_time + PROGRESSION_LEAD_S
        handles: List[ChordHandle] = []
        for spec in (self.exercise.reference, *self.exercise.sequence):
            notes = self.voice_spec(spec)
            if notes is None:
                continue
            handles.append(
                self.scheduler.play_chord(notes, dur, PlaybackOptions(start_time=t, peak_gain=self.settings.gain))
            )
            t += dur
        xtrace("playback", {"kind": "progression", "chords": len(handles), "chord_seconds": dur})
        return handles
