import unittest

from regextractor.extract.exceptions import ExtractionError
from regextractor.extract.normalize import decode_content, iter_lines


class TestDecodeContent(unittest.TestCase):
    def test_utf8_bytes(self):
        self.assertEqual(decode_content("t=1 µs".encode("utf-8")), "t=1 µs")

    def test_invalid_bytes_replaced(self):
        text = decode_content(b"a=1\xff\xfe\nb=2")
        self.assertIn("a=1", text)
        self.assertIn("�", text)
        self.assertTrue(text.endswith("b=2"))

    def test_bom_dropped(self):
        self.assertEqual(decode_content(b"\xef\xbb\xbfa=1"), "a=1")

    def test_str_and_bytearray(self):
        self.assertEqual(decode_content("x"), "x")
        self.assertEqual(decode_content(bytearray(b"x")), "x")
        self.assertEqual(decode_content(memoryview(b"x")), "x")

    def test_other_types_rejected(self):
        with self.assertRaises(ExtractionError):
            decode_content(12345)
        with self.assertRaises(ExtractionError):
            decode_content(None)


class TestIterLines(unittest.TestCase):
    def test_trailing_newline_no_extra_line(self):
        self.assertEqual(list(iter_lines("a\nb\n")), ["a", "b"])

    def test_crlf_stripped(self):
        self.assertEqual(list(iter_lines("a\r\nb\r\n")), ["a", "b"])

    def test_blank_lines_kept(self):
        self.assertEqual(list(iter_lines("a\n\nb")), ["a", "", "b"])

    def test_empty(self):
        self.assertEqual(list(iter_lines("")), [])

    def test_only_one_cr_stripped(self):
        self.assertEqual(list(iter_lines("a\r\r\n")), ["a\r"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
