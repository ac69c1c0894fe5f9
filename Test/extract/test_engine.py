import logging
import math
import unittest

from regextractor.extract import (
    ExtractionEngine,
    ExtractionError,
    LineFilter,
    compile_patterns,
    extract_data,
    extract_from_sources,
)

ABA = b"a=1\nb=2\na=3\n"

TRAIN_LOG = b"""\
2024-01-01 INFO step=1 loss=0.90 lr=0.1
2024-01-01 DEBUG grad_norm=12.5
2024-01-01 INFO step=2 loss=0.70 lr=0.1
2024-01-01 WARN step=3 loss=nan
2024-01-01 INFO step=4 loss=0.40 lr=0.05
"""


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


class TestScenarios(unittest.TestCase):
    def test_gap_keeps_row(self):
        t = extract_from_sources(ABA, [("a", r"a=(\d+)")])
        self.assertEqual(t.n_rows, 3)
        col = t.column("a")
        self.assertEqual(col[0], 1.0)
        self.assertTrue(math.isnan(col[1]))
        self.assertEqual(col[2], 3.0)
        self.assertEqual(list(t.aligned_pairs("a")), [(0.0, 1.0), (2.0, 3.0)])

    def test_include_filters_before_row_allocation(self):
        t = extract_from_sources(ABA, [("a", r"a=(\d+)")], includes=[r"^a="])
        self.assertEqual(t.n_rows, 2)
        self.assertEqual(t.column("a").tolist(), [1.0, 3.0])
        self.assertEqual(list(t.aligned_pairs("a")), [(0.0, 1.0), (1.0, 3.0)])

    def test_base_column(self):
        t = extract_from_sources(
            b"t=10 a=5\nt=20 a=7\n",
            [("a", r"a=(\d+)"), ("t", r"t=(\d+)")],
            base_column_name="t",
        )
        self.assertEqual(t.base_column, "t")
        self.assertEqual(list(t.aligned_pairs("a")), [(10.0, 5.0), (20.0, 7.0)])

    def test_invalid_pattern_omitted(self):
        t = extract_from_sources(
            ABA, [("a", r"a=(\d+)"), ("broken", "(unclosed"), ("b", r"b=(\d+)")]
        )
        self.assertEqual(t.column_names, ["a", "b"])
        self.assertNotIn("broken", t)
        self.assertEqual(list(t.aligned_pairs("b")), [(1.0, 2.0)])


class TestProperties(unittest.TestCase):
    def setUp(self):
        self.pairs = [
            ("step", r"step=(\d+)"),
            ("loss", r"loss=(\S+)"),
            ("lr", r"lr=(\S+)"),
        ]

    def test_columns_equal_accepted_line_count(self):
        flt = LineFilter.from_sources([], [r"DEBUG"])
        t = extract_data(TRAIN_LOG, compile_patterns(self.pairs), line_filter=flt)
        self.assertEqual(t.n_rows, 4)
        for name in t.column_names:
            self.assertEqual(len(t.column(name)), 4)

    def test_rejected_line_creates_no_row(self):
        t_all = extract_from_sources(TRAIN_LOG, self.pairs)
        t_flt = extract_from_sources(TRAIN_LOG, self.pairs, excludes=[r"DEBUG"])
        self.assertEqual(t_all.n_rows, 5)
        self.assertEqual(t_flt.n_rows, 4)

    def test_no_nan_pairs_and_row_index_x(self):
        t = extract_from_sources(TRAIN_LOG, self.pairs)
        pairs = list(t.aligned_pairs("loss"))
        # "loss=nan" is not a float literal, the DEBUG line has no loss
        self.assertEqual(pairs, [(0.0, 0.9), (2.0, 0.7), (4.0, 0.4)])
        for x, y in pairs:
            self.assertFalse(math.isnan(x) or math.isnan(y))

    def test_base_step(self):
        t = extract_from_sources(TRAIN_LOG, self.pairs, base_column_name="step")
        self.assertEqual(list(t.aligned_pairs("lr")), [(1.0, 0.1), (2.0, 0.1), (4.0, 0.05)])

    def test_idempotent(self):
        a = extract_from_sources(TRAIN_LOG, self.pairs, base_column_name="step")
        b = extract_from_sources(TRAIN_LOG, self.pairs, base_column_name="step")
        for name in a.column_names:
            self.assertEqual(list(a.aligned_pairs(name)), list(b.aligned_pairs(name)))

    def test_unknown_base_left_unset(self):
        t = extract_from_sources(TRAIN_LOG, self.pairs, base_column_name="epoch")
        self.assertIsNone(t.base_column)

    def test_crlf_and_invalid_utf8(self):
        content = b"a=1\r\n\xff\xfe a=2\r\n"
        t = extract_from_sources(content, [("a", r"a=(\d+)$")])
        self.assertEqual(t.column("a").tolist(), [1.0, 2.0])

    def test_str_content(self):
        t = extract_from_sources("a=1\na=2", [("a", r"a=(\d+)")])
        self.assertEqual(t.column("a").tolist(), [1.0, 2.0])


class TestCaptureModes(unittest.TestCase):
    CONTENT = b"temp 21.5\nhumidity 40\ntemp 22.0\n"

    def test_group_mode(self):
        t = extract_from_sources(self.CONTENT, [("temp", r"temp (\S+)")])
        self.assertEqual(list(t.aligned_pairs("temp")), [(0.0, 21.5), (2.0, 22.0)])

    def test_whole_match_mode(self):
        t = extract_from_sources(
            self.CONTENT, [("num", r"\d+(?:\.\d+)?")], use_regex_group=False
        )
        self.assertEqual(t.column("num").tolist(), [21.5, 40.0, 22.0])

    def test_group_mode_ignores_groupless_pattern(self):
        t = extract_from_sources(self.CONTENT, [("num", r"\d+(?:\.\d+)?")])
        self.assertEqual(t.n_rows, 3)
        self.assertEqual(list(t.aligned_pairs("num")), [])

    def test_engine_toggle(self):
        eng = ExtractionEngine(use_regex_group=False)
        t = eng.extract(self.CONTENT, compile_patterns([("n", r"\d+\.\d+")]))
        self.assertEqual(list(t.aligned_pairs("n")), [(0.0, 21.5), (2.0, 22.0)])


class TestFailures(unittest.TestCase):
    def test_empty_patterns(self):
        with self.assertRaises(ExtractionError):
            extract_data(ABA, [])

    def test_all_patterns_invalid(self):
        with self.assertRaises(ExtractionError):
            extract_from_sources(ABA, [("x", "(unclosed"), ("", r"a=(\d+)")])

    def test_non_text_content(self):
        with self.assertRaises(ExtractionError):
            extract_data(object(), compile_patterns([("a", r"a=(\d+)")]))

    def test_empty_content_is_not_a_failure(self):
        t = extract_from_sources(b"", [("a", r"a=(\d+)")])
        self.assertEqual(t.n_rows, 0)
        self.assertEqual(list(t.aligned_pairs("a")), [])


class TestStepLogging(unittest.TestCase):
    def test_start_finish_with_summary(self):
        logger = logging.getLogger("test.engine.steps")
        logger.setLevel(logging.DEBUG)
        lh = ListHandler()
        logger.addHandler(lh)
        try:
            eng = ExtractionEngine(verbose=1, logger=logger)
            eng.extract(ABA, compile_patterns([("a", r"a=(\d+)")]))
        finally:
            logger.removeHandler(lh)

        messages = [r.getMessage() for r in lh.records]
        self.assertIn("step.start", messages)
        self.assertIn("step.finish", messages)
        self.assertIn("extract.counts", messages)
        fin = [r for r in lh.records if r.getMessage() == "step.finish"][0]
        self.assertEqual(fin.step, "extract")
        self.assertEqual(fin.summary["rows"], 3)
        counts = [r for r in lh.records if r.getMessage() == "extract.counts"][0]
        self.assertEqual(counts.lines, 3)
        self.assertEqual(counts.accepted, 3)

    def test_run_level_failures_skip_step_events(self):
        logger = logging.getLogger("test.engine.errors")
        logger.setLevel(logging.DEBUG)
        lh = ListHandler()
        logger.addHandler(lh)
        try:
            with self.assertRaises(ExtractionError):
                ExtractionEngine(logger=logger).extract(ABA, [])
            with self.assertRaises(ExtractionError):
                ExtractionEngine(logger=logger).extract(
                    12345, compile_patterns([("a", r"a=(\d+)")])
                )
        finally:
            logger.removeHandler(lh)
        self.assertEqual(lh.records, [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
