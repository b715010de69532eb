# chordear/theory/voicing.py
from __future__ import annotations

"""Chord voicing: turn (root pitch class, intervals, inversion) into MIDI notes.

Every voicing is recentered into one register band around middle C, then
inverted by cyclically lifting the lowest note an octave.
"""

import math
from typing import Iterable, List, Sequence, Set

ANCHOR_MIDI = 60  # C4
TARGET_MIDI = 60
REGISTER_SLACK = 6


def base_midi_for_pc(pc: int) -> int:
    """MIDI note with pitch class ``pc`` at or above the anchor, within one octave."""
    return ANCHOR_MIDI + ((pc - (ANCHOR_MIDI % 12)) + 12) % 12


def _inversion_count(inversion) -> int:
    try:
        inv = math.floor(float(inversion or 0))
    except (TypeError, ValueError):
        return 0
    return max(0, int(inv))


def voice_chord(root_pc: int, intervals: Sequence[int], inversion: int = 0) -> List[int]:
    """Return the ascending MIDI notes for a chord.

    Args:
        root_pc: Root pitch class 0..11.
        intervals: Semitone offsets from the root (order irrelevant).
        inversion: Number of times the lowest note is raised an octave.
            Floored and clamped at 0; values past ``len(intervals) - 1``
            keep rotating.

    Returns:
        Sorted list with one MIDI note per interval.
    """
    base_root = base_midi_for_pc(root_pc)
    notes = [base_root + iv for iv in sorted(intervals)]
    if not notes:
        return notes

    while notes[0] > TARGET_MIDI + REGISTER_SLACK:
        notes = [n - 12 for n in notes]
    while notes[0] < TARGET_MIDI - REGISTER_SLACK:
        notes = [n + 12 for n in notes]

    for _ in range(_inversion_count(inversion)):
        notes[0] += 12
        notes.sort()
    return notes


def pitch_classes(notes: Iterable[int]) -> Set[int]:
    return {n % 12 for n in notes}


def is_symmetric_pitch_class_set(pcs: Iterable[int]) -> bool:
    """True when ≥3 distinct pitch classes are evenly spaced around the octave.

    {0, 4, 8} (augmented) and {0, 3, 6, 9} (diminished seventh) qualify,
    {0, 4, 7} does not.
    """
    uniq = sorted({int(p) % 12 for p in pcs})
    if len(uniq) < 3:
        return False
    gaps = [b - a for a, b in zip(uniq, uniq[1:])]
    gaps.append(uniq[0] + 12 - uniq[-1])
    return all(g == gaps[0] for g in gaps)
