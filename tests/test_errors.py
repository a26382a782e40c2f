import os
import tempfile
import unittest

from utilkit.lib.config import Config
from utilkit.lib.errors import (
    BoundsPolicy,
    ContractError,
    OutOfRangeError,
    as_index,
    check_index,
    resolve_policy,
)
from utilkit.lib.logger import Logger


class TestErrors(unittest.TestCase):
    def setUp(self):
        Config.load(os.path.join(tempfile.gettempdir(), "definitely_not_here.cfg"))
        Logger.setup(Logger.DEBUG)
        Logger._logger.handlers.clear()  # Silence std logs

    def test_out_of_range_error(self):
        err = OutOfRangeError(5, 3)
        self.assertIsInstance(err, IndexError)
        self.assertEqual((err.index, err.limit), (5, 3))
        self.assertEqual(str(err), "Index 5 out of range [0, 3)")
        self.assertEqual(str(OutOfRangeError(9, 8, "Bit")), "Bit 9 out of range [0, 8)")

    def test_contract_error_is_value_error(self):
        self.assertTrue(issubclass(ContractError, ValueError))

    def test_resolve_policy(self):
        self.assertIs(resolve_policy(None), BoundsPolicy.STRICT)
        self.assertIs(resolve_policy("Legacy"), BoundsPolicy.LEGACY)
        self.assertIs(resolve_policy(BoundsPolicy.LEGACY), BoundsPolicy.LEGACY)

        Config.set("bounds", "policy", "legacy")
        self.assertIs(resolve_policy(None), BoundsPolicy.LEGACY)

        with self.assertRaises(ContractError):
            resolve_policy("lenient")

    def test_check_index_strict(self):
        self.assertTrue(check_index(0, 1, BoundsPolicy.STRICT, "here"))
        with self.assertRaises(OutOfRangeError):
            check_index(1, 1, BoundsPolicy.STRICT, "here")

    def test_check_index_legacy(self):
        with self.assertLogs(Logger._logger.name, level="DEBUG") as cm:
            self.assertFalse(check_index(-2, 4, BoundsPolicy.LEGACY, "Thing.op"))

        self.assertIn("[abort] Thing.op: Index -2 out of range [0, 4)", cm.output[0])
        self.assertIn("Stack context", cm.output[1])

    def test_stack_depth_zero_skips_stack(self):
        Config.set("bounds", "stack_depth", 0)
        with self.assertLogs(Logger._logger.name, level="DEBUG") as cm:
            check_index(7, 4, BoundsPolicy.LEGACY, "Thing.op")

        self.assertEqual(len(cm.output), 1)

    def test_as_index(self):
        self.assertEqual(as_index(3), 3)
        for bad in (1.0, "1", None, False):
            with self.assertRaises(ContractError):
                as_index(bad)


if __name__ == "__main__":
    unittest.main()
