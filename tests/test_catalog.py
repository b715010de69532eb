import unittest

from chordear.theory.catalog import CatalogError, ChordCatalog
from chordear.theory.chord import ChordKey, ChordSpec, Guess
from chordear.theory.notes import clean_note_token, parse_root_list, pc_for_name

from tests.fixtures import catalog_data, make_catalog


class ChordKeyTests(unittest.TestCase):
    def test_parse_colon_and_slash(self) -> None:
        self.assertEqual(ChordKey.parse("triads:aug"), ChordKey("triads", "aug"))
        self.assertEqual(ChordKey.parse(" sevenths/dim7 "), ChordKey("sevenths", "dim7"))

    def test_parse_without_separator_has_empty_section(self) -> None:
        self.assertEqual(ChordKey.parse("aug"), ChordKey("", "aug"))

    def test_parse_empty_is_none(self) -> None:
        self.assertIsNone(ChordKey.parse(""))
        self.assertIsNone(ChordKey.parse("   "))

    def test_str(self) -> None:
        self.assertEqual(str(ChordKey("triads", "min")), "triads:min")

    def test_guess_completeness(self) -> None:
        self.assertFalse(Guess().is_complete())
        self.assertFalse(Guess(root="C", chord=ChordKey("triads", "maj")).is_complete())
        self.assertTrue(Guess(root="C", chord=ChordKey("triads", "maj"), inversion="0").is_complete())
        spec = ChordSpec("Eb", "triads", "min", 2)
        self.assertEqual(Guess.from_spec(spec), Guess(root="Eb", chord=ChordKey("triads", "min"), inversion="2"))


class NoteParsingTests(unittest.TestCase):
    def test_clean_note_token(self) -> None:
        self.assertEqual(clean_note_token("eb,"), "Eb")
        self.assertEqual(clean_note_token(" f#3 "), "F#")
        self.assertEqual(clean_note_token("bb"), "Bb")
        self.assertEqual(clean_note_token("Q"), "")

    def test_parse_root_list_keeps_order_and_drops_unknown(self) -> None:
        fallback = ["C", "G"]
        roots = parse_root_list("c, eb f#x  Q", {"C": 0, "Eb": 3, "F#": 6}, fallback)
        self.assertEqual(roots, ["C", "Eb", "F#"])

    def test_parse_root_list_dedupes(self) -> None:
        self.assertEqual(parse_root_list("C c C", {"C": 0}, ["G"]), ["C"])

    def test_parse_root_list_fallback(self) -> None:
        table = {"C": 0, "G": 7}
        self.assertEqual(parse_root_list("", table, ["C", "G"]), ["C", "G"])
        self.assertEqual(parse_root_list("zzz, 42", table, ["C", "G"]), ["C", "G"])

    def test_pc_for_name(self) -> None:
        self.assertEqual(pc_for_name("Db"), 1)
        self.assertEqual(pc_for_name("Cb"), 11)
        self.assertIsNone(pc_for_name("H"))


class CatalogLoadTests(unittest.TestCase):
    def test_fixture_loads(self) -> None:
        cat = make_catalog()
        self.assertEqual([s.id for s in cat.sections], ["triads", "sevenths"])
        self.assertTrue(cat.sections[0].enabled)
        self.assertFalse(cat.sections[1].enabled)
        self.assertEqual(cat.find_chord(ChordKey("triads", "aug")).intervals, (0, 4, 8))
        self.assertIsNone(cat.find_chord(ChordKey("triads", "dim7")))
        self.assertIsNone(cat.find_chord(ChordKey("nope", "maj")))

    def test_semitone_lookup(self) -> None:
        cat = make_catalog()
        self.assertEqual(cat.semitone_for("Bb"), 10)
        self.assertEqual(cat.semitone_for("A#"), 10)
        self.assertIsNone(cat.semitone_for("H"))

    def test_chord_without_root_interval_rejected(self) -> None:
        data = catalog_data()
        data["sections"][0]["chords"][0]["intervals"] = [4, 7]
        with self.assertRaises(CatalogError):
            ChordCatalog.from_dict(data)

    def test_duplicate_intervals_rejected(self) -> None:
        data = catalog_data()
        data["sections"][0]["chords"][0]["intervals"] = [0, 4, 4]
        with self.assertRaises(CatalogError):
            ChordCatalog.from_dict(data)

    def test_duplicate_section_rejected(self) -> None:
        data = catalog_data()
        data["sections"][1]["id"] = "triads"
        with self.assertRaises(CatalogError):
            ChordCatalog.from_dict(data)

    def test_missing_sections_rejected(self) -> None:
        with self.assertRaises(CatalogError):
            ChordCatalog.from_dict({"roots": ["C"]})
        with self.assertRaises(CatalogError):
            ChordCatalog.from_dict([])

    def test_unknown_default_root_rejected(self) -> None:
        data = catalog_data()
        data["roots"] = ["C", "H"]
        with self.assertRaises(CatalogError):
            ChordCatalog.from_dict(data)

    def test_camel_case_keys_accepted(self) -> None:
        data = catalog_data()
        data["noteToSemitone"] = data.pop("note_to_semitone")
        data["sections"][1]["inversions"][3]["defaultEnabled"] = False
        cat = ChordCatalog.from_dict(data)
        self.assertEqual(cat.semitone_for("Eb"), 3)
        self.assertFalse(cat.sections[1].inversions[3].default_enabled)
        self.assertTrue(cat.sections[1].inversions[2].default_enabled)


class LabelTests(unittest.TestCase):
    def setUp(self) -> None:
        self.cat = make_catalog()

    def test_inversion_defs_merged_by_id(self) -> None:
        ids = [inv.id for inv in self.cat.inversion_defs]
        self.assertEqual(ids, [0, 1, 2, 3])
        self.assertEqual(self.cat.inversion_label(3), "3rd inversion")
        self.assertEqual(self.cat.inversion_label(7), "Inversion 7")

    def test_label_with_symbol(self) -> None:
        spec = ChordSpec("C", "triads", "aug", 0)
        self.assertEqual(self.cat.format_chord_label(spec), "Caug [Root position]")

    def test_label_without_symbol_uses_chord_name(self) -> None:
        spec = ChordSpec("F", "triads", "maj", 1)
        self.assertEqual(self.cat.format_chord_label(spec), "F (Major) [1st inversion]")

    def test_chord_display(self) -> None:
        sec = self.cat.find_section("triads")
        self.assertEqual(self.cat.chord_display(sec.find_chord("min")), "Minor (m)")
        self.assertEqual(self.cat.chord_display(sec.find_chord("maj")), "Major")


if __name__ == "__main__":
    unittest.main()
