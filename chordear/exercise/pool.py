from __future__ import annotations

"""Template pool: which chord templates and roots are eligible right now.

The enabled flags mirror the section/chord/inversion checkboxes of a front
end; they start from the catalog defaults and are flipped by the caller.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

from ..theory.catalog import ChordCatalog, InversionDef
from ..theory.chord import ChordKey
from ..theory.notes import parse_root_list


@dataclass(frozen=True)
class ChordTemplate:
    section_id: str
    chord_id: str
    label: str
    symbol: str
    intervals: Tuple[int, ...]
    inversions: Tuple[int, ...] = ()

    @property
    def key(self) -> ChordKey:
        return ChordKey(self.section_id, self.chord_id)


@dataclass
class EnabledState:
    sections: Dict[str, bool] = field(default_factory=dict)
    chords: Set[ChordKey] = field(default_factory=set)
    inversions: Dict[str, Set[int]] = field(default_factory=dict)

    @classmethod
    def from_catalog(cls, catalog: ChordCatalog) -> "EnabledState":
        state = cls()
        for sec in catalog.sections:
            state.sections[sec.id] = sec.enabled
            for ch in sec.chords:
                if ch.default_enabled:
                    state.chords.add(ChordKey(sec.id, ch.id))
            state.inversions[sec.id] = {inv.id for inv in sec.inversions if inv.default_enabled}
        return state


class TemplatePool:
    """Exposes enabled templates and roots for exercise generation."""

    def __init__(self, catalog: ChordCatalog, root_text: str = "") -> None:
        self.catalog = catalog
        self.state = EnabledState.from_catalog(catalog)
        self.root_text = root_text

    # --- Flag mutation (front-end boundary) ---
    def set_root_text(self, text: str) -> None:
        self.root_text = text or ""

    def set_section_enabled(self, section_id: str, on: bool) -> None:
        """Master toggle: also sets every chord and inversion flag of the section."""
        sec = self.catalog.find_section(section_id)
        if sec is None:
            raise KeyError(f"Unknown section id: {section_id}")
        self.state.sections[section_id] = bool(on)
        for ch in sec.chords:
            key = ChordKey(section_id, ch.id)
            if on:
                self.state.chords.add(key)
            else:
                self.state.chords.discard(key)
        self.state.inversions[section_id] = {inv.id for inv in sec.inversions} if on else set()

    def set_chord_enabled(self, key: ChordKey, on: bool) -> None:
        if self.catalog.find_chord(key) is None:
            raise KeyError(f"Unknown chord: {key}")
        if on:
            self.state.chords.add(key)
        else:
            self.state.chords.discard(key)

    def set_inversion_enabled(self, section_id: str, inv_id: int, on: bool) -> None:
        sec = self.catalog.find_section(section_id)
        if sec is None:
            raise KeyError(f"Unknown section id: {section_id}")
        if all(inv.id != inv_id for inv in sec.inversions):
            raise KeyError(f"Section '{section_id}' has no inversion {inv_id}")
        invs = self.state.inversions.setdefault(section_id, set())
        if on:
            invs.add(int(inv_id))
        else:
            invs.discard(int(inv_id))

    # --- Queries ---
    def section_enabled(self, section_id: str) -> bool:
        return self.state.sections.get(section_id, False)

    def enabled_inversions(self, section_id: str) -> List[int]:
        """Enabled inversion ids of a section, in catalog order."""
        sec = self.catalog.find_section(section_id)
        if sec is None:
            return []
        on = self.state.inversions.get(section_id, set())
        return [inv.id for inv in sec.inversions if inv.id in on]

    def enabled_templates(self) -> List[ChordTemplate]:
        enabled: List[ChordTemplate] = []
        for sec in self.catalog.sections:
            if not self.section_enabled(sec.id):
                continue
            inversions = tuple(self.enabled_inversions(sec.id))
            for ch in sec.chords:
                if ChordKey(sec.id, ch.id) not in self.state.chords:
                    continue
                enabled.append(
                    ChordTemplate(
                        section_id=sec.id,
                        chord_id=ch.id,
                        label=ch.label,
                        symbol=ch.symbol,
                        intervals=ch.intervals,
                        inversions=inversions,
                    )
                )
        return enabled

    def enabled_roots(self) -> List[str]:
        return parse_root_list(self.root_text, self.catalog.note_to_semitone, self.catalog.roots)

    # --- Answer options ---
    def chord_choices(self) -> List[Tuple[str, List[Tuple[ChordKey, str]]]]:
        """Enabled chords grouped by section label, as (key, display) pairs."""
        by_section: Dict[str, List[ChordTemplate]] = {}
        for t in self.enabled_templates():
            by_section.setdefault(t.section_id, []).append(t)
        groups: List[Tuple[str, List[Tuple[ChordKey, str]]]] = []
        for sec in self.catalog.sections:
            tmpls = by_section.get(sec.id)
            if not tmpls:
                continue
            options = [(t.key, _display(t)) for t in tmpls]
            groups.append((sec.label, options))
        return groups

    def inversion_choices(self, section_id: str) -> List[InversionDef]:
        sec = self.catalog.find_section(section_id)
        if sec is None:
            return []
        on = self.state.inversions.get(section_id, set())
        return [inv for inv in sec.inversions if inv.id in on]

    def resolve_chord_text(self, text: str) -> ChordKey | None:
        """Map user text to a chord key.

        Accepts 'section:chord', a bare chord id or a chord symbol when it is
        unique among enabled templates. Anything else is returned as an
        unresolvable key so grading marks it wrong.
        """
        key = ChordKey.parse(text)
        if key is None or key.section_id:
            return key
        wanted = key.chord_id
        matches = [t.key for t in self.enabled_templates() if wanted in (t.chord_id, t.symbol) and wanted]
        unique = list(dict.fromkeys(matches))
        if len(unique) == 1:
            return unique[0]
        return key


def _display(t: ChordTemplate) -> str:
    return f"{t.label} ({t.symbol})" if t.symbol else t.label
