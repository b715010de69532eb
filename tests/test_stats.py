import unittest

from chordear.stats.stats import SessionStats, format_summary


class SessionStatsTests(unittest.TestCase):
    def test_misses_wait_until_finalized(self) -> None:
        st = SessionStats()
        st.record_evaluation(3, 1, ["Caug [Root position]", "D (Major) [1st inversion]"])
        self.assertEqual((st.attempts, st.correct), (3, 1))
        self.assertEqual(st.missed, {})

        moved = st.finalize_misses()
        self.assertEqual(moved, {"Caug [Root position]": 1, "D (Major) [1st inversion]": 1})
        self.assertEqual(st.pending_misses, {})
        self.assertEqual(st.missed["Caug [Root position]"], 1)

    def test_re_evaluation_accumulates(self) -> None:
        st = SessionStats()
        st.record_evaluation(1, 0, ["Caug [Root position]"])
        st.record_evaluation(1, 0, ["Caug [Root position]"])
        st.finalize_misses()
        self.assertEqual(st.missed, {"Caug [Root position]": 2})
        self.assertEqual(st.attempts, 2)

    def test_finalize_twice_moves_nothing(self) -> None:
        st = SessionStats()
        st.record_evaluation(1, 0, ["X"])
        st.finalize_misses()
        self.assertEqual(st.finalize_misses(), {})
        self.assertEqual(st.missed, {"X": 1})

    def test_reset(self) -> None:
        st = SessionStats(correct=2, attempts=3, exercises=1, missed={"X": 1}, pending_misses={"Y": 1})
        st.reset()
        self.assertEqual(st, SessionStats())


class FormatSummaryTests(unittest.TestCase):
    def test_no_misses(self) -> None:
        st = SessionStats(correct=3, attempts=4, exercises=2)
        self.assertEqual(format_summary(st), "Session: 3 correct / 4 attempts | Exercises: 2 | Misses: —")

    def test_misses_sorted_by_count(self) -> None:
        st = SessionStats(correct=0, attempts=5, exercises=1, missed={"A": 1, "B": 3, "C": 2})
        self.assertEqual(
            format_summary(st),
            "Session: 0 correct / 5 attempts | Exercises: 1 | Misses: B×3, C×2, A×1",
        )

    def test_top_limit(self) -> None:
        st = SessionStats(missed={f"L{i}": i + 1 for i in range(12)})
        text = format_summary(st)
        self.assertIn("L11×12", text)
        self.assertNotIn("L0×1", text)
        self.assertNotIn("L1×2", text)
        self.assertEqual(text.count("×"), 10)


if __name__ == "__main__":
    unittest.main()
