# chordear/theory/notes.py
from __future__ import annotations

"""Note-name helpers: name→pitch-class table and free-text root parsing."""

import re
from typing import Dict, Iterable, List, Mapping, Optional

PITCH_CLASS_NAMES_SHARP = ["C","C#","D","D#","E","F","F#","G","G#","A","A#","B"]
NAME_TO_PC: Dict[str, int] = {
    "C":0,"B#":0, "C#":1,"Db":1, "D":2,"D#":3,"Eb":3, "E":4,"Fb":4,
    "F":5,"E#":5, "F#":6,"Gb":6, "G":7,"G#":8,"Ab":8, "A":9,"A#":10,"Bb":10, "B":11,"Cb":11
}

_TOKEN_SPLIT = re.compile(r"[,\s]+")
_NOT_NOTE_CHAR = re.compile(r"[^A-Ga-g#b]")


def clean_note_token(token: str) -> str:
    """Strip everything except note letters/accidentals; capitalise the letter.

    'eb,' -> 'Eb', ' f#3 ' -> 'F#'. Only a leading lowercase letter is
    uppercased, so a trailing 'b' keeps meaning flat.
    """
    cleaned = _NOT_NOTE_CHAR.sub("", token)
    if cleaned and cleaned[0] in "abcdefg":
        cleaned = cleaned[0].upper() + cleaned[1:]
    return cleaned


def parse_root_list(
    text: Optional[str],
    name_to_pc: Mapping[str, int],
    fallback: Iterable[str],
) -> List[str]:
    """Parse a comma/whitespace separated root list into known note names.

    Unknown names are dropped, duplicates removed keeping first-seen order.
    Empty or fully unparseable text yields ``fallback``.
    """
    txt = (text or "").strip()
    if not txt:
        return list(fallback)
    valid: List[str] = []
    for raw in _TOKEN_SPLIT.split(txt):
        if not raw:
            continue
        name = clean_note_token(raw)
        if name in name_to_pc and name not in valid:
            valid.append(name)
    return valid if valid else list(fallback)


def pc_for_name(name: str, name_to_pc: Mapping[str, int] = NAME_TO_PC) -> Optional[int]:
    """Return the pitch class for ``name`` or None when it is not in the table."""
    pc = name_to_pc.get(name)
    if pc is None:
        return None
    return int(pc) % 12
