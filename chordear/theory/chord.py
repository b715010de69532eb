from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ChordKey:
    """Composite (section, chord) key used to look up a template."""

    section_id: str
    chord_id: str

    @staticmethod
    def parse(text: str) -> Optional["ChordKey"]:
        """Parse 'section:chord' (or 'section/chord'); empty text gives None.

        Text without a separator yields a key with an empty section id, which
        never resolves in a catalog.
        """
        t = (text or "").strip()
        if not t:
            return None
        for sep in (":", "/"):
            if sep in t:
                sec, chord = t.split(sep, 1)
                return ChordKey(sec.strip(), chord.strip())
        return ChordKey("", t)

    def __str__(self) -> str:
        return f"{self.section_id}:{self.chord_id}"


@dataclass(frozen=True)
class ChordSpec:
    """One concrete sonority: root name, template and inversion."""

    root: str          # note name from the catalog table, e.g. "Eb"
    section_id: str
    chord_id: str
    inversion: int = 0

    @property
    def key(self) -> ChordKey:
        return ChordKey(self.section_id, self.chord_id)


@dataclass
class Guess:
    """A user's (possibly partial) answer for one exercise slot."""

    root: str = ""
    chord: Optional[ChordKey] = None
    inversion: str = ""

    def is_complete(self) -> bool:
        return bool(self.root) and self.chord is not None and str(self.inversion).strip() != ""

    @staticmethod
    def from_spec(spec: ChordSpec) -> "Guess":
        return Guess(root=spec.root, chord=spec.key, inversion=str(spec.inversion))
