from __future__ import annotations

"""Oscillator synthesis with numpy.

Renders block chords into mono float32 buffers: one oscillator per note for
the plain waveforms, two (fundamental + second harmonic) for the rich
"piano" tone, all sharing a single gain envelope.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np

DECAY_LEAD_S = 0.05  # decay starts this long before the nominal end


class Tone(str, Enum):
    SINE = "sine"
    SQUARE = "square"
    SAWTOOTH = "sawtooth"
    TRIANGLE = "triangle"
    PIANO = "piano"

    @property
    def is_rich(self) -> bool:
        return self is Tone.PIANO


@dataclass(frozen=True)
class ToneProfile:
    attack: float   # seconds to reach peak
    release: float  # time constant of the exponential decay
    tail: float     # oscillators keep running this long past the duration


STANDARD_PROFILE = ToneProfile(attack=0.02, release=0.2, tail=0.05)
RICH_PROFILE = ToneProfile(attack=0.008, release=0.12, tail=0.02)
RICH_PEAK_BOOST = 0.05
RICH_PEAK_CEILING = 0.35


def profile_for(tone: Tone) -> ToneProfile:
    return RICH_PROFILE if tone.is_rich else STANDARD_PROFILE


def peak_for(tone: Tone, gain: float) -> float:
    if tone.is_rich:
        return min(RICH_PEAK_CEILING, gain + RICH_PEAK_BOOST)
    return gain


def midi_to_hz(m: float) -> float:
    return 440.0 * 2.0 ** ((m - 69) / 12.0)


def oscillator(waveform: Tone, freq: float, n_samples: int, sample_rate: int) -> np.ndarray:
    """Unit-amplitude periodic waveform starting at phase 0."""
    t = np.arange(n_samples, dtype=np.float64) / sample_rate
    phase = freq * t
    if waveform is Tone.SINE:
        return np.sin(2 * np.pi * phase)
    frac = phase - np.floor(phase + 0.5)  # -0.5..0.5
    if waveform is Tone.SAWTOOTH:
        return 2.0 * frac
    if waveform is Tone.SQUARE:
        return np.where(np.sin(2 * np.pi * phase) >= 0, 1.0, -1.0)
    if waveform is Tone.TRIANGLE:
        return 1.0 - 4.0 * np.abs(frac)
    raise ValueError(f"Unsupported waveform: {waveform}")


def envelope(n_samples: int, sample_rate: int, duration: float, peak: float, attack: float, release: float) -> np.ndarray:
    """Gain curve: linear ramp to ``peak`` over ``attack``, hold, then
    exponential approach to 0 from ``duration - 0.05`` with time constant
    ``release``."""
    t = np.arange(n_samples, dtype=np.float64) / sample_rate
    attack = max(attack, 1.0 / sample_rate)
    ramp = np.minimum(t / attack, 1.0) * peak
    decay_start = max(0.0, duration - DECAY_LEAD_S)
    level_at_decay = min(decay_start / attack, 1.0) * peak
    decayed = level_at_decay * np.exp(-(t - decay_start) / max(release, 1e-6))
    return np.where(t < decay_start, ramp, decayed)


def render_chord(
    pitches: Sequence[float],
    duration: float,
    peak_gain: float,
    tone: Tone,
    sample_rate: int,
) -> np.ndarray:
    """Render a block chord including its release tail.

    Returns:
        float32 array of ``(duration + tail) * sample_rate`` samples.
    """
    prof = profile_for(tone)
    n = max(1, int(round((duration + prof.tail) * sample_rate)))
    mix = np.zeros(n, dtype=np.float64)
    for m in pitches:
        f = midi_to_hz(m)
        if tone.is_rich:
            mix += oscillator(Tone.TRIANGLE, f, n, sample_rate)
            mix += oscillator(Tone.SINE, f * 2, n, sample_rate)
        else:
            mix += oscillator(tone, f, n, sample_rate)
    env = envelope(n, sample_rate, duration, peak_for(tone, peak_gain), prof.attack, prof.release)
    return (mix * env).astype(np.float32)
