import math
import unittest

from utilkit.lib import strings
from utilkit.lib.traits import ScalarKind


class TestStrings(unittest.TestCase):
    def test_ends_with(self):
        self.assertTrue(strings.ends_with("hello", "hello"))
        self.assertTrue(strings.ends_with("hello", "ello"))
        self.assertTrue(strings.ends_with("hello", "o"))
        self.assertFalse(strings.ends_with("hello", ""))
        self.assertFalse(strings.ends_with("hello", "ell"))
        self.assertTrue(strings.ends_with("a", "a"))
        self.assertFalse(strings.ends_with("", ""))
        self.assertFalse(strings.ends_with("", "blah"))

    def test_starts_with(self):
        self.assertTrue(strings.starts_with("hello", "hello"))
        self.assertFalse(strings.starts_with("hello", "helloWorld"))
        self.assertTrue(strings.starts_with("hello", "he"))
        self.assertFalse(strings.starts_with("hello", ""))
        self.assertFalse(strings.starts_with("hello", "ello"))
        self.assertFalse(strings.starts_with("", ""))

    def test_case_conversion(self):
        for text in ("HELLO", "hello", "HeLlO"):
            self.assertEqual(strings.to_lower(text), "hello")
            self.assertEqual(strings.to_upper(text), "HELLO")

        # Only ASCII letters change
        self.assertEqual(strings.to_upper("straße 1!"), "STRAßE 1!")
        self.assertEqual(strings.to_lower("ÀB"), "Àb")

    def test_trim(self):
        self.assertEqual(strings.ltrim(" \t\nhello "), "hello ")
        self.assertEqual(strings.rtrim(" hello\v\f\r "), " hello")
        self.assertEqual(strings.trim("\t hello \n"), "hello")
        self.assertEqual(strings.trim(""), "")
        self.assertEqual(strings.trim(" \t\n "), "")

        # Non-ASCII whitespace is not part of the trim set
        self.assertEqual(strings.trim("\u00a0hi"), "\u00a0hi")

    def test_split(self):
        self.assertEqual(strings.split("This is a sentence."), ["This", "is", "a", "sentence."])
        self.assertEqual(strings.split("  This   is another sentence.  "), ["This", "is", "another", "sentence."])
        self.assertEqual(strings.split("Hey, there, buddy, !", ", "), ["Hey", "there", "buddy", "!"])
        self.assertEqual(strings.split(""), [])
        self.assertEqual(strings.split(".............", "."), [])
        self.assertEqual(strings.split(".Hello", "."), ["Hello"])
        self.assertEqual(strings.split("Hello.", "."), ["Hello"])
        self.assertEqual(strings.split(".Hello.", "."), ["Hello"])
        self.assertEqual(strings.split("a b", ""), ["a b"])

    def test_split_every(self):
        self.assertEqual(strings.split_every("hello", 0), [])
        self.assertEqual(strings.split_every("hello", 1), ["h", "e", "l", "l", "o"])
        self.assertEqual(strings.split_every("hello", 2), ["he", "ll", "o"])
        self.assertEqual(strings.split_every("hello", 3), ["hel", "lo"])
        self.assertEqual(strings.split_every("hello", 4), ["hell", "o"])
        self.assertEqual(strings.split_every("hello", 5), ["hello"])
        self.assertEqual(strings.split_every("hello", 10), ["hello"])
        self.assertEqual(strings.split_every("", 3), [""])

        with self.assertRaises(ValueError):
            strings.split_every("hello", -1)

    def test_build(self):
        self.assertEqual(strings.build(", ", ["a", "b", "c"]), "a, b, c")
        self.assertEqual(strings.build("-", ["solo"]), "solo")
        self.assertEqual(strings.build("-", []), "")
        self.assertEqual(strings.build("", iter(["x", "y"])), "xy")


class TestConversions(unittest.TestCase):
    def test_bool(self):
        for text in ("true", " TRUE ", "1", "True\n"):
            self.assertIs(strings.from_string(text, ScalarKind.BOOL), True)
        for text in ("false", "0", " False"):
            self.assertIs(strings.from_string(text, ScalarKind.BOOL), False)
        self.assertIsNone(strings.from_string("yes", ScalarKind.BOOL))

        self.assertEqual(strings.to_string(True, ScalarKind.BOOL), "true")
        self.assertEqual(strings.to_string(False, ScalarKind.BOOL), "false")
        self.assertIsNone(strings.to_string(1, ScalarKind.BOOL))

    def test_char(self):
        self.assertEqual(strings.from_string("xyz", ScalarKind.CHAR), "x")
        self.assertEqual(strings.from_string(" ", ScalarKind.CHAR), " ")
        self.assertIsNone(strings.from_string("", ScalarKind.CHAR))
        self.assertEqual(strings.to_string("q", ScalarKind.CHAR), "q")
        self.assertIsNone(strings.to_string("qq", ScalarKind.CHAR))

    def test_integers(self):
        self.assertEqual(strings.from_string("42", ScalarKind.INT32), 42)
        self.assertEqual(strings.from_string("  -17xyz", ScalarKind.INT16), -17)
        self.assertEqual(strings.from_string("+7", ScalarKind.UINT16), 7)
        self.assertEqual(strings.from_string("255", ScalarKind.UCHAR), 255)
        self.assertEqual(strings.from_string("18446744073709551615", ScalarKind.UINT64), (1 << 64) - 1)

        self.assertIsNone(strings.from_string("256", ScalarKind.UCHAR))
        self.assertIsNone(strings.from_string("32768", ScalarKind.INT16))
        self.assertIsNone(strings.from_string("-1", ScalarKind.UINT32))
        self.assertIsNone(strings.from_string("abc", ScalarKind.INT64))
        self.assertIsNone(strings.from_string("", ScalarKind.INT32))
        self.assertIsNone(strings.from_string("\u0663", ScalarKind.INT32))  # Arabic-Indic three
        self.assertEqual(strings.from_string("7\u0663", ScalarKind.INT32), 7)

        self.assertEqual(strings.to_string(-32768, ScalarKind.INT16), "-32768")
        self.assertEqual(strings.to_string((1 << 64) - 1, ScalarKind.UINT64), "18446744073709551615")
        self.assertIsNone(strings.to_string(70000, ScalarKind.UINT16))
        self.assertIsNone(strings.to_string(1.5, ScalarKind.INT32))
        self.assertIsNone(strings.to_string(True, ScalarKind.INT32))

    def test_floats(self):
        self.assertEqual(strings.from_string("2.5", ScalarKind.DOUBLE), 2.5)
        self.assertEqual(strings.from_string(" -1e3 units", ScalarKind.DOUBLE), -1000.0)
        self.assertEqual(strings.from_string(".25", ScalarKind.FLOAT), 0.25)
        self.assertTrue(math.isinf(strings.from_string("inf", ScalarKind.DOUBLE)))
        self.assertTrue(math.isnan(strings.from_string("nan", ScalarKind.FLOAT)))

        # Single precision rounding
        self.assertNotEqual(strings.from_string("0.1", ScalarKind.FLOAT), 0.1)
        self.assertAlmostEqual(strings.from_string("0.1", ScalarKind.FLOAT), 0.1, places=6)

        self.assertIsNone(strings.from_string("1e39", ScalarKind.FLOAT))
        self.assertIsNone(strings.from_string("1e400", ScalarKind.DOUBLE))
        self.assertIsNone(strings.from_string("x1.0", ScalarKind.DOUBLE))
        self.assertIsNone(strings.from_string("\u0661.5", ScalarKind.DOUBLE))

        self.assertEqual(strings.to_string(1.5, ScalarKind.FLOAT), "1.500000")
        self.assertEqual(strings.to_string(2, ScalarKind.DOUBLE), "2.000000000000000")
        self.assertIsNone(strings.to_string(1e39, ScalarKind.FLOAT))

    def test_string(self):
        self.assertEqual(strings.from_string(" as is ", ScalarKind.STRING), " as is ")
        self.assertEqual(strings.to_string("as is", ScalarKind.STRING), "as is")
        self.assertIsNone(strings.to_string(5, ScalarKind.STRING))

    def test_parse_int(self):
        self.assertEqual(strings.parse_int(" 123 "), 123)
        self.assertEqual(strings.parse_int("ff", 16), 255)
        self.assertEqual(strings.parse_int("0x1F", 0), 31)
        self.assertEqual(strings.parse_int("-2147483648"), -(1 << 31))

        self.assertIsNone(strings.parse_int("2147483648"))
        self.assertIsNone(strings.parse_int("12abc"))
        self.assertIsNone(strings.parse_int(""))
        self.assertEqual(strings.parse_int("4294967295", kind=ScalarKind.UINT32), 0xFFFFFFFF)

        self.assertIsNone(strings.parse_int("\u0663"))

        with self.assertRaises(ValueError):
            strings.parse_int("1", kind=ScalarKind.DOUBLE)
        for base in (1, -2, 37, True):
            with self.assertRaises(ValueError):
                strings.parse_int("5", base=base)


if __name__ == "__main__":
    unittest.main()
