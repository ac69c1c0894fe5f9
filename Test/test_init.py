# Test/test_init.py
import unittest


class TestRegextractorImport(unittest.TestCase):
    def test_lazy_names(self):
        """Top-level names resolve lazily to their defining modules."""
        from regextractor import DataTable, ExtractionEngine, extract_data

        self.assertTrue(callable(extract_data))
        self.assertEqual(ExtractionEngine.__module__, "regextractor.extract.engine")
        self.assertEqual(DataTable.__module__, "regextractor.extract.table")

    def test_dir_and_unknown(self):
        import regextractor

        self.assertIn("ExtractorSession", dir(regextractor))
        self.assertTrue(regextractor.__version__)
        with self.assertRaises(AttributeError):
            regextractor.NoSuchThing


if __name__ == "__main__":
    unittest.main()
