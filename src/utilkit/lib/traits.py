"""
Scalar kinds understood by utilkit.

`ScalarKind` is a closed enumeration of the primitive value types the string
conversions and bit operations work with. Each member knows its width, its
signedness, and the range of values it can represent.
"""

import math
import sys
from enum import Enum

UNSIGNED_WIDTHS = (8, 16, 32, 64)

FLT_MAX = 3.4028234663852886e38


class ScalarKind(Enum):
    """A primitive value type: (label, width in bits, signed)."""

    BOOL = ("bool", 8, False)
    CHAR = ("char", 8, True)
    INT16 = ("int16", 16, True)
    INT32 = ("int32", 32, True)
    INT64 = ("int64", 64, True)
    UCHAR = ("uchar", 8, False)
    UINT16 = ("uint16", 16, False)
    UINT32 = ("uint32", 32, False)
    UINT64 = ("uint64", 64, False)
    FLOAT = ("float", 32, True)
    DOUBLE = ("double", 64, True)
    STRING = ("string", None, False)

    def __init__(self, label: str, bits: int | None, signed: bool):
        self.label = label
        self.bits = bits
        self.signed = signed

    @classmethod
    def from_label(cls, label: str) -> "ScalarKind":
        """
        Look up a kind by its label, e.g. "uint32".

        Raises:
            ValueError: If no kind has that label.
        """

        for kind in cls:
            if kind.label == label.lower():
                return kind

        raise ValueError(f"Unknown scalar kind '{label}'.")

    @classmethod
    def unsigned(cls, bits: int) -> "ScalarKind":
        """
        Return the unsigned integer kind that is `bits` wide.

        Raises:
            ValueError: If `bits` is not 8, 16, 32 or 64.
        """

        kinds = {8: cls.UCHAR, 16: cls.UINT16, 32: cls.UINT32, 64: cls.UINT64}

        if isinstance(bits, bool) or not isinstance(bits, int) or bits not in kinds:
            raise ValueError(f"Word width must be one of {UNSIGNED_WIDTHS}, got {bits!r}.")

        return kinds[bits]

    @property
    def is_integral(self) -> bool:
        return self in _INTEGRAL

    @property
    def is_unsigned(self) -> bool:
        return self.is_integral and not self.signed

    @property
    def is_floating(self) -> bool:
        return self in (ScalarKind.FLOAT, ScalarKind.DOUBLE)

    @property
    def min_value(self) -> int | None:
        if not self.is_integral:
            return None
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int | None:
        if not self.is_integral:
            return None
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def fits(self, value: object) -> bool:
        """Return True if `value` is representable as this kind."""

        if self is ScalarKind.BOOL:
            return isinstance(value, bool)
        if self is ScalarKind.STRING:
            return isinstance(value, str)
        if self is ScalarKind.CHAR:
            return isinstance(value, str) and len(value) == 1 and ord(value) < 256

        # bool is an int subclass but never a number here
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False

        if self.is_integral:
            return isinstance(value, int) and self.min_value <= value <= self.max_value

        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            return True

        limit = FLT_MAX if self is ScalarKind.FLOAT else sys.float_info.max
        return abs(value) <= limit


_INTEGRAL = frozenset(
    {
        ScalarKind.INT16,
        ScalarKind.INT32,
        ScalarKind.INT64,
        ScalarKind.UCHAR,
        ScalarKind.UINT16,
        ScalarKind.UINT32,
        ScalarKind.UINT64,
    }
)
