from __future__ import annotations

"""Chord catalog: sections of chord templates and inversion definitions.

The catalog is read-only once loaded. It is built from a plain mapping (the
parsed YAML/JSON document); see `chordear.config.config.load_catalog`.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .chord import ChordKey, ChordSpec
from .notes import NAME_TO_PC


class CatalogError(ValueError):
    """Raised when a chord catalog document is malformed."""


@dataclass(frozen=True)
class ChordDef:
    id: str
    label: str
    symbol: str
    intervals: Tuple[int, ...]
    default_enabled: bool = True

    @classmethod
    def from_json(cls, data: Mapping[str, Any], section_id: str) -> "ChordDef":
        try:
            chord_id = str(data["id"])
            intervals = tuple(int(iv) for iv in data["intervals"])
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogError(f"Invalid chord entry in section '{section_id}': {data!r}") from e
        if 0 not in intervals:
            raise CatalogError(f"Chord '{section_id}:{chord_id}' must contain interval 0 (root)")
        if len(set(intervals)) != len(intervals):
            raise CatalogError(f"Chord '{section_id}:{chord_id}' has duplicate intervals {list(intervals)}")
        if any(iv < 0 for iv in intervals):
            raise CatalogError(f"Chord '{section_id}:{chord_id}' has negative intervals {list(intervals)}")
        return cls(
            id=chord_id,
            label=str(data.get("label", chord_id)),
            symbol=str(data.get("symbol") or ""),
            intervals=intervals,
            default_enabled=_flag(data, "default_enabled", "defaultEnabled"),
        )


@dataclass(frozen=True)
class InversionDef:
    id: int
    label: str
    short: str
    default_enabled: bool = True

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "InversionDef":
        try:
            inv_id = int(data["id"])
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogError(f"Invalid inversion entry: {data!r}") from e
        if inv_id < 0:
            raise CatalogError(f"Inversion id must be non-negative: {inv_id}")
        short = str(data.get("short") or inv_id)
        return cls(
            id=inv_id,
            label=str(data.get("label") or data.get("short") or f"Inversion {inv_id}"),
            short=short,
            default_enabled=_flag(data, "default_enabled", "defaultEnabled"),
        )


@dataclass(frozen=True)
class Section:
    id: str
    label: str
    description: str = ""
    enabled: bool = True
    chords: Tuple[ChordDef, ...] = ()
    inversions: Tuple[InversionDef, ...] = ()

    def find_chord(self, chord_id: str) -> Optional[ChordDef]:
        for c in self.chords:
            if c.id == chord_id:
                return c
        return None


@dataclass
class ChordCatalog:
    """Sections, default roots and the name→semitone table."""

    sections: List[Section]
    roots: List[str]
    note_to_semitone: Dict[str, int] = field(default_factory=lambda: dict(NAME_TO_PC))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChordCatalog":
        if not isinstance(data, Mapping):
            raise CatalogError("Chord catalog must be a mapping")
        raw_sections = data.get("sections")
        if not isinstance(raw_sections, list) or not raw_sections:
            raise CatalogError("Chord catalog has no 'sections'")

        table = data.get("note_to_semitone", data.get("noteToSemitone"))
        note_to_semitone = {str(k): int(v) for k, v in (table or NAME_TO_PC).items()}

        sections: List[Section] = []
        seen_ids = set()
        for raw in raw_sections:
            try:
                sec_id = str(raw["id"])
            except (KeyError, TypeError) as e:
                raise CatalogError(f"Section without id: {raw!r}") from e
            if sec_id in seen_ids:
                raise CatalogError(f"Duplicate section id: {sec_id}")
            seen_ids.add(sec_id)
            chords = tuple(ChordDef.from_json(c, sec_id) for c in raw.get("chords") or [])
            inversions = tuple(InversionDef.from_json(i) for i in raw.get("inversions") or [])
            sections.append(
                Section(
                    id=sec_id,
                    label=str(raw.get("label", sec_id)),
                    description=str(raw.get("description") or ""),
                    enabled=raw.get("enabled") is not False,
                    chords=chords,
                    inversions=inversions,
                )
            )

        roots = [str(r) for r in (data.get("roots") or [])]
        unknown = [r for r in roots if r not in note_to_semitone]
        if unknown:
            raise CatalogError(f"Default roots missing from note table: {unknown}")
        return cls(sections=sections, roots=roots, note_to_semitone=note_to_semitone)

    # --- Lookups ---
    def find_section(self, section_id: str) -> Optional[Section]:
        for s in self.sections:
            if s.id == section_id:
                return s
        return None

    def find_chord(self, key: ChordKey) -> Optional[ChordDef]:
        sec = self.find_section(key.section_id)
        if sec is None:
            return None
        return sec.find_chord(key.chord_id)

    def semitone_for(self, name: str) -> Optional[int]:
        semi = self.note_to_semitone.get(name)
        return None if semi is None else int(semi) % 12

    @property
    def inversion_defs(self) -> List[InversionDef]:
        """Inversion definitions merged across sections (first id wins), by id."""
        merged: Dict[int, InversionDef] = {}
        for sec in self.sections:
            for inv in sec.inversions:
                merged.setdefault(inv.id, inv)
        return [merged[k] for k in sorted(merged)]

    def inversion_label(self, inv_id: int) -> str:
        for inv in self.inversion_defs:
            if inv.id == inv_id:
                return inv.label
        return f"Inversion {inv_id}"

    def chord_display(self, chord: ChordDef) -> str:
        return f"{chord.label} ({chord.symbol})" if chord.symbol else chord.label

    def format_chord_label(self, spec: ChordSpec) -> str:
        """Short human label used for miss tallies, e.g. 'Caug [Root position]'."""
        chord = self.find_chord(spec.key)
        symbol = chord.symbol if chord else ""
        root = spec.root or "?"
        if symbol:
            core = f"{root}{symbol}"
        else:
            core = f"{root} ({chord.label if chord else 'Chord'})"
        return f"{core} [{self.inversion_label(spec.inversion)}]"


def _flag(data: Mapping[str, Any], *names: str) -> bool:
    for n in names:
        if n in data:
            return data[n] is not False
    return True
