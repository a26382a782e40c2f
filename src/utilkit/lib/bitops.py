"""
Bit manipulation helpers for fixed-width unsigned words.

A word is a Python `int` in [0, 2**width), where width is 8, 16, 32 or 64 and
defaults to the `[bitops] width` setting. Bits are indexed from 0 at the least
significant end. The functions are pure and return new words; `BitWord` wraps
a word for callers that want to modify it in place.

The scans here are the portable O(n) versions. Hot paths should prefer
`int.bit_count()` and `int.bit_length()`.
"""

from collections.abc import Iterable

from utilkit.lib.config import Config
from utilkit.lib.errors import (
    BoundsPolicy,
    ContractError,
    as_index,
    check_index,
    resolve_policy,
)
from utilkit.lib.traits import ScalarKind


def _width(width: int | None) -> int:
    """Resolve and validate a word width."""

    if width is None:
        width = Config.get("bitops", "width", 64)

    try:
        ScalarKind.unsigned(width)
    except ValueError as err:
        raise ContractError(str(err)) from None

    return width


def _word(word: object, width: int) -> int:
    """Validate that `word` is an unsigned integer that fits in `width` bits."""

    word = as_index(word, "Word")

    if word < 0:
        raise ContractError(f"Word must be unsigned, got {word}.")
    if word >> width:
        raise ContractError(f"Word {word:#x} does not fit in {width} bits.")

    return word


def _bit(bit: object, width: int, policy: BoundsPolicy, op: str) -> int | None:
    """Return `bit` as an int if it is a valid position, or None to skip it (LEGACY only)."""

    bit = as_index(bit, "Bit")
    if not check_index(bit, width, policy, f"bitops.{op}", "Bit"):
        return None

    return bit


def count(word: int, width: int | None = None) -> int:
    """
    Count the number of bits set in a word.

    Clears the lowest set bit until none are left, so it runs once per set bit.

    Args:
        word (int): An unsigned word.
        width (int, optional): Word width in bits.

    Returns:
        int: The number of bits set.
    """

    word = _word(word, _width(width))

    total = 0
    while word:
        word &= word - 1
        total += 1

    return total


def set_bit(bit: int, word: int, width: int | None = None, policy: BoundsPolicy | str | None = None) -> int:
    """
    Set a bit in a word.

    Args:
        bit (int): The bit to set, indexed from 0.
        word (int): The word to modify.
        width (int, optional): Word width in bits.
        policy (BoundsPolicy | str, optional): Out-of-range policy.

    Returns:
        int: The word with `bit` set. Unchanged if `bit` is out of range under LEGACY.
    """

    width = _width(width)
    word = _word(word, width)

    bit = _bit(bit, width, resolve_policy(policy), "set_bit")
    if bit is None:
        return word

    return word | (1 << bit)


def clear_bit(bit: int, word: int, width: int | None = None, policy: BoundsPolicy | str | None = None) -> int:
    """
    Clear a bit in a word.

    Args:
        bit (int): The bit to clear, indexed from 0.
        word (int): The word to modify.
        width (int, optional): Word width in bits.
        policy (BoundsPolicy | str, optional): Out-of-range policy.

    Returns:
        int: The word with `bit` cleared. Unchanged if `bit` is out of range under LEGACY.
    """

    width = _width(width)
    word = _word(word, width)

    bit = _bit(bit, width, resolve_policy(policy), "clear_bit")
    if bit is None:
        return word

    return word ^ (word & (1 << bit))


def clear_bits(mask: int, word: int, width: int | None = None) -> int:
    """
    Clear every bit of `word` that is set in `mask`.

    Returns:
        int: The word with the masked bits cleared.
    """

    width = _width(width)
    return _word(word, width) & ~_word(mask, width)


def get_bit(bit: int, width: int | None = None, policy: BoundsPolicy | str | None = None) -> int:
    """
    Return a mask with only `bit` set.

    Args:
        bit (int): The desired bit, indexed from 0.
        width (int, optional): Word width in bits.
        policy (BoundsPolicy | str, optional): Out-of-range policy.

    Returns:
        int: 1 << bit. Under LEGACY an out-of-range bit returns the all-ones word instead.

    Raises:
        OutOfRangeError: If `bit` is out of range under STRICT.
    """

    width = _width(width)

    bit = _bit(bit, width, resolve_policy(policy), "get_bit")
    if bit is None:
        return (1 << width) - 1

    return 1 << bit


def lsb(word: int, width: int | None = None) -> int:
    """
    Get the index of the least significant bit set.

    Returns:
        int: The LSB, or -1 if no bits are set.
    """

    width = _width(width)
    word = _word(word, width)

    mask, bit = 1, 0
    while bit < width:
        if mask & word:
            return bit
        mask <<= 1
        bit += 1

    return -1


def msb(word: int, width: int | None = None) -> int:
    """
    Get the index of the most significant bit set.

    Returns:
        int: The MSB, or -1 if no bits are set.
    """

    width = _width(width)
    word = _word(word, width)

    bit = width - 1
    mask = 1 << bit
    while mask:
        if mask & word:
            return bit
        mask >>= 1
        bit -= 1

    return -1


def get_1bits(word: int, width: int | None = None) -> list[int]:
    """
    Return the indexes of all bits set in a word, lowest first.

    Returns:
        list[int]: The set bit indexes; empty for a zero word.
    """

    width = _width(width)
    word = _word(word, width)

    indexes = []
    while word:
        index = lsb(word, width)
        indexes.append(index)
        word = clear_bit(index, word, width, BoundsPolicy.STRICT)

    return indexes


def build_word(*indexes: int, width: int | None = None, policy: BoundsPolicy | str | None = None) -> int:
    """
    Create a word with the given bits set.

    Duplicate indexes are harmless. With no indexes the result is 0.

    Args:
        *indexes (int): Bits to set.
        width (int, optional): Word width in bits.
        policy (BoundsPolicy | str, optional): Out-of-range policy. Under LEGACY
            out-of-range indexes are skipped.

    Returns:
        int: The resulting word.
    """

    width = _width(width)
    policy = resolve_policy(policy)

    word = 0
    for index in indexes:
        index = _bit(index, width, policy, "build_word")
        if index is not None:
            word |= 1 << index

    return word


class BitWord:
    """
    A mutable fixed-width word for in-place bit manipulation.

    Example:
        flags = BitWord(width=16)
        flags.set(3)
        flags.set(9)
        flags.indices()  # [3, 9]

    A BitWord equals an int or another BitWord of the same width holding the
    same value. Being mutable, it is not hashable.
    """

    def __init__(self, value: int = 0, width: int | None = None, policy: BoundsPolicy | str | None = None):
        self.width = _width(width)
        self.policy = resolve_policy(policy)
        self._value = _word(value, self.width)

    @classmethod
    def from_indexes(cls, indexes: Iterable[int], width: int | None = None, policy: BoundsPolicy | str | None = None) -> "BitWord":
        """Build a word with the given bits set."""

        word = cls(0, width, policy)
        word.value = build_word(*indexes, width=word.width, policy=word.policy)
        return word

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, value: int) -> None:
        self._value = _word(value, self.width)

    def set(self, bit: int) -> None:
        self._value = set_bit(bit, self._value, self.width, self.policy)

    def clear(self, bit: int) -> None:
        self._value = clear_bit(bit, self._value, self.width, self.policy)

    def clear_bits(self, mask: int) -> None:
        self._value = clear_bits(mask, self._value, self.width)

    def test(self, bit: int) -> bool:
        """Return True if `bit` is set."""

        bit = _bit(bit, self.width, self.policy, "test")
        return bit is not None and bool((self._value >> bit) & 1)

    def count(self) -> int:
        return count(self._value, self.width)

    def lsb(self) -> int:
        return lsb(self._value, self.width)

    def msb(self) -> int:
        return msb(self._value, self.width)

    def indices(self) -> list[int]:
        return get_1bits(self._value, self.width)

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BitWord):
            return self._value == other._value and self.width == other.width
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __repr__(self) -> str:
        digits = self.width // 4
        return f"BitWord(0x{self._value:0{digits}x}, width={self.width})"
