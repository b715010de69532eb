from __future__ import annotations

"""Audio scheduling: place rendered chords on a sample clock.

The Mixer is the audio clock. A device callback (see `audio.device`) pulls
blocks from it; playback calls only add voices at a future start time and
return immediately.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from .synthesis import Tone, render_chord

DEFAULT_LOOKAHEAD_S = 0.06
MIN_ARP_STEP_S = 0.06
ARP_NOTE_FILL = 0.95


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"


@dataclass
class PlaybackOptions:
    start_time: Optional[float] = None  # None -> now + lookahead
    peak_gain: float = 0.27


@dataclass
class ArpeggioOptions:
    start_time: Optional[float] = None
    gain: float = 0.27
    direction: Direction = Direction.UP


@dataclass(eq=False)
class Voice:
    """One chord's oscillators behind a single gain stage."""

    start_frame: int
    samples: np.ndarray
    pitches: List[int] = field(default_factory=list)

    @property
    def end_frame(self) -> int:
        return self.start_frame + len(self.samples)


class Mixer:
    def __init__(self, sample_rate: int = 44100) -> None:
        self.sample_rate = int(sample_rate)
        self._frame = 0
        self._voices: List[Voice] = []
        self._lock = threading.Lock()

    @property
    def current_time(self) -> float:
        return self._frame / self.sample_rate

    @property
    def voices(self) -> List[Voice]:
        with self._lock:
            return list(self._voices)

    def add(self, voice: Voice) -> None:
        with self._lock:
            self._voices.append(voice)

    def remove(self, voice: Voice) -> bool:
        with self._lock:
            try:
                self._voices.remove(voice)
            except ValueError:
                return False
            return True

    def render(self, frames: int) -> np.ndarray:
        """Mix the next ``frames`` samples and advance the clock."""
        out = np.zeros(frames, dtype=np.float32)
        with self._lock:
            lo = self._frame
            hi = lo + frames
            keep: List[Voice] = []
            for v in self._voices:
                if v.end_frame <= lo:
                    continue
                a = max(lo, v.start_frame)
                b = min(hi, v.end_frame)
                if a < b:
                    out[a - lo:b - lo] += v.samples[a - v.start_frame:b - v.start_frame]
                if v.end_frame > hi:
                    keep.append(v)
            self._voices = keep
            self._frame = hi
        return out


class ChordHandle:
    """Cancels one scheduled chord."""

    def __init__(self, mixer: Mixer, voice: Voice) -> None:
        self._mixer = mixer
        self.voice = voice

    @property
    def start_time(self) -> float:
        return self.voice.start_frame / self._mixer.sample_rate

    def stop(self) -> None:
        # Best effort; stopping twice or after the chord ended is fine.
        try:
            self._mixer.remove(self.voice)
        except Exception:
            pass


class AudioScheduler:
    """Schedules block chords and arpeggios on a Mixer clock."""

    def __init__(self, mixer: Mixer, tone: Tone = Tone.TRIANGLE, lookahead: float = DEFAULT_LOOKAHEAD_S) -> None:
        self.mixer = mixer
        self.tone = Tone(tone)
        self.lookahead = float(lookahead)

    @property
    def current_time(self) -> float:
        return self.mixer.current_time

    def _start(self, start_time: Optional[float]) -> float:
        if start_time:
            return float(start_time)
        return self.mixer.current_time + self.lookahead

    def play_chord(
        self,
        pitches: Sequence[int],
        duration: float = 1.0,
        options: Optional[PlaybackOptions] = None,
    ) -> ChordHandle:
        opts = options or PlaybackOptions()
        start = self._start(opts.start_time)
        samples = render_chord(pitches, duration, opts.peak_gain, self.tone, self.mixer.sample_rate)
        voice = Voice(
            start_frame=int(round(start * self.mixer.sample_rate)),
            samples=samples,
            pitches=[int(p) for p in pitches],
        )
        self.mixer.add(voice)
        return ChordHandle(self.mixer, voice)

    def play_arpeggio(
        self,
        pitches: Sequence[int],
        total_duration: float = 1.0,
        options: Optional[ArpeggioOptions] = None,
    ) -> None:
        opts = options or ArpeggioOptions()
        start = self._start(opts.start_time)
        notes = sorted(pitches)
        if Direction(opts.direction) is Direction.DOWN:
            notes.reverse()
        step = max(MIN_ARP_STEP_S, total_duration / max(len(notes), 1))
        for i, m in enumerate(notes):
            self.play_chord(
                [m],
                step * ARP_NOTE_FILL,
                PlaybackOptions(start_time=start + i * step, peak_gain=opts.gain),
            )
