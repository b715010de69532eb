from __future__ import annotations

"""Exercise generation: a reference chord plus N chords to identify."""

import random
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, TypeVar

from ..theory.chord import ChordSpec
from .pool import ChordTemplate, TemplatePool

T = TypeVar("T")


class ConfigNotLoadedError(RuntimeError):
    """Generation was requested before a chord catalog was available."""


class NothingEnabledError(ValueError):
    """No roots or no chord templates are enabled."""


@dataclass(frozen=True)
class Exercise:
    reference: ChordSpec
    sequence: Tuple[ChordSpec, ...]

    def __len__(self) -> int:
        return len(self.sequence)


class ExerciseGenerator:
    """Draws chords uniformly at random from a TemplatePool."""

    def __init__(self, pool: Optional[TemplatePool], rng: Optional[random.Random] = None) -> None:
        self.pool = pool
        self.rng = rng or random.Random()

    def _pick(self, items: Sequence[T]) -> T:
        return items[self.rng.randrange(len(items))]

    def _draw(self, roots: Sequence[str], templates: Sequence[ChordTemplate]) -> ChordSpec:
        root = self._pick(roots)
        tmpl = self._pick(templates)
        inv = self._pick(tmpl.inversions) if tmpl.inversions else 0
        return ChordSpec(root=root, section_id=tmpl.section_id, chord_id=tmpl.chord_id, inversion=int(inv))

    def generate(self, n: int) -> Exercise:
        """Build a fresh exercise of ``n`` chords (caller clamps n to 1..16).

        Raises:
            ConfigNotLoadedError: no catalog/pool is attached.
            NothingEnabledError: no valid roots or no enabled chord types.
        """
        if self.pool is None:
            raise ConfigNotLoadedError("Config not loaded yet.")
        roots = self.pool.enabled_roots()
        templates = self.pool.enabled_templates()
        if not roots:
            raise NothingEnabledError("No valid roots selected.")
        if not templates:
            raise NothingEnabledError("Enable at least one chord type.")
        if n < 1:
            raise ValueError(f"Exercise needs at least one chord, got {n}")

        reference = self._draw(roots, templates)
        sequence = tuple(self._draw(roots, templates) for _ in range(n))
        return Exercise(reference=reference, sequence=sequence)
