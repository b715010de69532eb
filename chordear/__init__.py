"""chordear package initialization.

Chord-identification ear training: voicing, exercise generation, grading and
oscillator playback. The terminal front end lives in `chordear.main`.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
