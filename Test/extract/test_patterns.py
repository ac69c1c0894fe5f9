import re
import unittest

from regextractor.extract.patterns import NamedRegex, compile_patterns


class TestNamedRegexConstruction(unittest.TestCase):
    def test_valid_source(self):
        nr = NamedRegex.from_source("loss", r"loss=(\S+)")
        self.assertIsNotNone(nr)
        self.assertEqual(nr.name, "loss")
        self.assertEqual(nr.source, r"loss=(\S+)")

    def test_invalid_source_yields_none(self):
        self.assertIsNone(NamedRegex.from_source("bad", "(unclosed"))
        self.assertIsNone(NamedRegex.from_source("bad", "[a-"))

    def test_empty_name_yields_none(self):
        self.assertIsNone(NamedRegex.from_source("", r"a=(\d+)"))

    def test_flags_forwarded(self):
        nr = NamedRegex.from_source("a", r"A=(\d+)", flags=re.IGNORECASE)
        self.assertEqual(nr.try_extract("a=4"), 4.0)


class TestTryExtract(unittest.TestCase):
    def test_first_group_parsed(self):
        nr = NamedRegex.from_source("a", r"a=(\d+)")
        self.assertEqual(nr.try_extract("x a=12 y"), 12.0)

    def test_no_match(self):
        nr = NamedRegex.from_source("a", r"a=(\d+)")
        self.assertIsNone(nr.try_extract("b=2"))

    def test_zero_groups_never_yields(self):
        nr = NamedRegex.from_source("n", r"\d+")
        self.assertIsNone(nr.try_extract("42"))

    def test_non_numeric_capture_is_none(self):
        nr = NamedRegex.from_source("v", r"v=(\w+)")
        self.assertIsNone(nr.try_extract("v=abc"))
        self.assertIsNone(nr.try_extract("v=nan"))
        self.assertIsNone(nr.try_extract("v=inf"))

    def test_float_forms(self):
        nr = NamedRegex.from_source("v", r"v=(\S+)")
        self.assertEqual(nr.try_extract("v=-3.5"), -3.5)
        self.assertEqual(nr.try_extract("v=.5"), 0.5)
        self.assertEqual(nr.try_extract("v=5."), 5.0)
        self.assertEqual(nr.try_extract("v=1e-3"), 0.001)
        self.assertEqual(nr.try_extract("v=+2.0E+2"), 200.0)
        self.assertIsNone(nr.try_extract("v=1,5"))
        self.assertIsNone(nr.try_extract("v=1_000"))
        self.assertIsNone(nr.try_extract("v=1e999"))

    def test_unmatched_optional_group(self):
        nr = NamedRegex.from_source("v", r"v(?:=(\d+))?")
        self.assertIsNone(nr.try_extract("v"))
        self.assertEqual(nr.try_extract("v=3"), 3.0)

    def test_named_value_group(self):
        nr = NamedRegex.from_source(
            "t", r"(?P<unit>ms|s) (?P<val>\d+)", value_group="val"
        )
        self.assertEqual(nr.try_extract("took ms 40"), 40.0)

    def test_value_group_out_of_range(self):
        nr = NamedRegex.from_source("a", r"a=(\d+)", value_group=2)
        self.assertIsNone(nr.try_extract("a=1"))

    def test_whole_match_mode(self):
        nr = NamedRegex.from_source("n", r"-?\d+\.\d+")
        self.assertEqual(nr.try_extract("temp -1.25 C", use_group=False), -1.25)
        grouped = NamedRegex.from_source("a", r"a=(\d+)")
        # the whole match "a=1" is not a number
        self.assertIsNone(grouped.try_extract("a=1", use_group=False))


class TestCompilePatterns(unittest.TestCase):
    def test_invalid_entries_dropped(self):
        active = compile_patterns(
            [("a", r"a=(\d+)"), ("bad", "(unclosed"), ("", "x")]
        )
        self.assertEqual([p.name for p in active], ["a"])

    def test_duplicate_names_first_wins(self):
        active = compile_patterns([("a", r"a=(\d+)"), ("a", r"b=(\d+)")])
        self.assertEqual(len(active), 1)
        self.assertEqual(active[0].source, r"a=(\d+)")


if __name__ == "__main__":
    unittest.main(verbosity=2)
