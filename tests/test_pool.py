import unittest

from chordear.exercise.pool import TemplatePool
from chordear.theory.chord import ChordKey

from tests.fixtures import make_catalog


class TemplatePoolTests(unittest.TestCase):
    def setUp(self) -> None:
        self.pool = TemplatePool(make_catalog())

    def _keys(self):
        return [str(t.key) for t in self.pool.enabled_templates()]

    def test_defaults_follow_catalog(self) -> None:
        self.assertEqual(self._keys(), ["triads:maj", "triads:min", "triads:aug"])
        self.assertEqual(self.pool.enabled_templates()[0].inversions, (0, 1, 2))
        self.assertFalse(self.pool.section_enabled("sevenths"))

    def test_section_toggle_cascades(self) -> None:
        self.pool.set_section_enabled("sevenths", True)
        self.assertIn("sevenths:dim7", self._keys())
        self.assertEqual(self.pool.enabled_inversions("sevenths"), [0, 1, 2, 3])

        self.pool.set_section_enabled("triads", False)
        self.assertEqual(self._keys(), ["sevenths:dom7", "sevenths:dim7"])
        self.assertEqual(self.pool.enabled_inversions("triads"), [])

        self.pool.set_section_enabled("triads", True)
        self.assertEqual(len(self._keys()), 5)

    def test_unknown_section_raises(self) -> None:
        with self.assertRaises(KeyError):
            self.pool.set_section_enabled("ninths", True)
        with self.assertRaises(KeyError):
            self.pool.set_inversion_enabled("triads", 9, True)

    def test_chord_toggle(self) -> None:
        self.pool.set_chord_enabled(ChordKey("triads", "aug"), False)
        self.assertEqual(self._keys(), ["triads:maj", "triads:min"])
        with self.assertRaises(KeyError):
            self.pool.set_chord_enabled(ChordKey("triads", "sus4"), True)

    def test_chords_in_disabled_section_are_not_eligible(self) -> None:
        self.pool.set_chord_enabled(ChordKey("sevenths", "dom7"), True)
        self.assertNotIn("sevenths:dom7", self._keys())

    def test_inversion_toggle_keeps_catalog_order(self) -> None:
        self.pool.set_inversion_enabled("triads", 0, False)
        self.pool.set_inversion_enabled("triads", 0, True)
        self.assertEqual(self.pool.enabled_inversions("triads"), [0, 1, 2])
        self.pool.set_inversion_enabled("triads", 1, False)
        self.assertEqual(self.pool.enabled_templates()[0].inversions, (0, 2))

    def test_template_without_inversions_still_eligible(self) -> None:
        for inv in (0, 1, 2):
            self.pool.set_inversion_enabled("triads", inv, False)
        templates = self.pool.enabled_templates()
        self.assertEqual(len(templates), 3)
        self.assertEqual(templates[0].inversions, ())

    def test_roots(self) -> None:
        self.assertEqual(self.pool.enabled_roots(), ["C", "D", "E", "F", "G", "A", "Bb"])
        self.pool.set_root_text("eb, f#  gb")
        self.assertEqual(self.pool.enabled_roots(), ["Eb", "F#", "Gb"])
        self.pool.set_root_text("???")
        self.assertEqual(self.pool.enabled_roots(), ["C", "D", "E", "F", "G", "A", "Bb"])

    def test_answer_choices(self) -> None:
        groups = self.pool.chord_choices()
        self.assertEqual(len(groups), 1)
        label, options = groups[0]
        self.assertEqual(label, "Triads")
        self.assertEqual(options[0], (ChordKey("triads", "maj"), "Major"))
        self.assertEqual(options[2], (ChordKey("triads", "aug"), "Augmented (aug)"))
        self.assertEqual([inv.id for inv in self.pool.inversion_choices("triads")], [0, 1, 2])
        self.assertEqual(self.pool.inversion_choices("nope"), [])

    def test_resolve_chord_text(self) -> None:
        self.assertEqual(self.pool.resolve_chord_text("triads:min"), ChordKey("triads", "min"))
        self.assertEqual(self.pool.resolve_chord_text("aug"), ChordKey("triads", "aug"))
        self.assertEqual(self.pool.resolve_chord_text("m"), ChordKey("triads", "min"))
        self.assertIsNone(self.pool.resolve_chord_text(""))
        # unknown text stays unresolvable
        self.assertEqual(self.pool.resolve_chord_text("sus4"), ChordKey("", "sus4"))


if __name__ == "__main__":
    unittest.main()
