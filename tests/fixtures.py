"""Small in-memory chord catalog shared by the tests."""

from copy import deepcopy

from chordear.theory.catalog import ChordCatalog
from chordear.theory.notes import NAME_TO_PC

CATALOG_DATA = {
    "roots": ["C", "D", "E", "F", "G", "A", "Bb"],
    "note_to_semitone": dict(NAME_TO_PC),
    "sections": [
        {
            "id": "triads",
            "label": "Triads",
            "chords": [
                {"id": "maj", "label": "Major", "symbol": "", "intervals": [0, 4, 7]},
                {"id": "min", "label": "Minor", "symbol": "m", "intervals": [0, 3, 7]},
                {"id": "aug", "label": "Augmented", "symbol": "aug", "intervals": [0, 4, 8]},
            ],
            "inversions": [
                {"id": 0, "label": "Root position", "short": "R"},
                {"id": 1, "label": "1st inversion", "short": "1"},
                {"id": 2, "label": "2nd inversion", "short": "2"},
            ],
        },
        {
            "id": "sevenths",
            "label": "Seventh chords",
            "enabled": False,
            "chords": [
                {"id": "dom7", "label": "Dominant seventh", "symbol": "7", "intervals": [0, 4, 7, 10]},
                {"id": "dim7", "label": "Diminished seventh", "symbol": "dim7", "intervals": [0, 3, 6, 9]},
            ],
            "inversions": [
                {"id": 0, "label": "Root position", "short": "R"},
                {"id": 1, "label": "1st inversion", "short": "1"},
                {"id": 2, "label": "2nd inversion", "short": "2"},
                {"id": 3, "label": "3rd inversion", "short": "3"},
            ],
        },
    ],
}


def catalog_data() -> dict:
    return deepcopy(CATALOG_DATA)


def make_catalog() -> ChordCatalog:
    return ChordCatalog.from_dict(catalog_data())
