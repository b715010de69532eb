"""Oscillator synthesis, scheduling and the output device."""

from .synthesis import Tone  # noqa: F401
from .scheduler import (  # noqa: F401
    ArpeggioOptions,
    AudioScheduler,
    ChordHandle,
    Direction,
    Mixer,
    PlaybackOptions,
)
