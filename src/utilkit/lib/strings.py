"""
String helpers: trimming, ASCII case conversion, splitting, joining, and
typed conversion to and from text.

Conversions report failure by returning None rather than raising, so callers
can try a parse and fall back without exception handling.
"""

import re
import string
import struct
from collections.abc import Iterable

from utilkit.lib.traits import ScalarKind

WHITESPACE = "\t\n\v\f\r "

_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)

_INT_PREFIX = re.compile(r"[\t\n\v\f\r ]*([+-]?\d+)", re.ASCII)
_FLOAT_PREFIX = re.compile(
    r"[\t\n\v\f\r ]*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE | re.ASCII,
)

# Digits after the decimal point when formatting floats
FLOAT_DIGITS = {ScalarKind.FLOAT: 6, ScalarKind.DOUBLE: 15}


def ltrim(text: str) -> str:
    """Remove leading whitespace."""

    return text.lstrip(WHITESPACE)


def rtrim(text: str) -> str:
    """Remove trailing whitespace."""

    return text.rstrip(WHITESPACE)


def trim(text: str) -> str:
    """Remove leading and trailing whitespace."""

    return text.strip(WHITESPACE)


def to_lower(text: str) -> str:
    """Lower-case ASCII letters, leaving everything else alone."""

    return text.translate(_LOWER)


def to_upper(text: str) -> str:
    """Upper-case ASCII letters, leaving everything else alone."""

    return text.translate(_UPPER)


def starts_with(text: str, prefix: str) -> bool:
    """Return True if `text` begins with a non-empty `prefix`."""

    return bool(prefix) and text.startswith(prefix)


def ends_with(text: str, suffix: str) -> bool:
    """Return True if `text` ends with a non-empty `suffix`."""

    return bool(suffix) and text.endswith(suffix)


def split(text: str, delimiter: str = " ") -> list[str]:
    """
    Split a string into the tokens between delimiters.

    Empty tokens are dropped, so runs of delimiters and delimiters at either
    end produce nothing. An empty delimiter returns the whole string as the
    only token.

    Args:
        text (str): The string to split.
        delimiter (str): Separator between tokens.

    Returns:
        list[str]: The non-empty tokens, in order.
    """

    if not delimiter:
        return [text]

    return [token for token in text.split(delimiter) if token]


def split_every(text: str, size: int) -> list[str]:
    """
    Split a string into chunks of `size` characters.

    The last chunk holds whatever is left over. A size of 0 produces no
    chunks; an empty string produces a single empty chunk.
    """

    if size < 0:
        raise ValueError(f"Chunk size must not be negative, got {size}.")
    if size == 0:
        return []

    chunks = [text[start : start + size] for start in range(0, len(text), size)]
    return chunks or [""]


def build(separator: str, tokens: Iterable[str]) -> str:
    """Join tokens with `separator` between each pair."""

    return separator.join(tokens)


def _to_float32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _parse_float(text: str, kind: ScalarKind) -> float | None:
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return None

    token = match.group(1)
    value = float(token)

    # A finite literal that only became infinite by overflowing
    if value in (float("inf"), float("-inf")) and "inf" not in token.lower():
        return None
    if not kind.fits(value):
        return None

    return _to_float32(value) if kind is ScalarKind.FLOAT else value


def from_string(text: str, kind: ScalarKind) -> object | None:
    """
    Parse a value of the given kind from text.

    Args:
        text (str): The text to parse.
        kind (ScalarKind): The kind of value to produce.

    Returns:
        The parsed value, or None if the text does not hold a valid value of
        that kind. Integers and floats are read from the start of the text and
        anything after them is ignored.
    """

    if kind is ScalarKind.STRING:
        return text

    if kind is ScalarKind.BOOL:
        token = trim(to_lower(text))
        if token in ("true", "1"):
            return True
        if token in ("false", "0"):
            return False
        return None

    if kind is ScalarKind.CHAR:
        return text[0] if text else None

    if kind.is_floating:
        return _parse_float(text, kind)

    match = _INT_PREFIX.match(text)
    if not match:
        return None

    value = int(match.group(1))
    return value if kind.fits(value) else None


def to_string(value: object, kind: ScalarKind) -> str | None:
    """
    Format a value of the given kind as text.

    Args:
        value: The value to format.
        kind (ScalarKind): The kind `value` should be treated as.

    Returns:
        str | None: The text, or None if `value` is not representable as `kind`.
    """

    if not kind.fits(value):
        return None

    if kind is ScalarKind.BOOL:
        return "true" if value else "false"

    if kind.is_floating:
        value = float(value)
        if kind is ScalarKind.FLOAT:
            value = _to_float32(value)
        return f"{value:.{FLOAT_DIGITS[kind]}f}"

    return str(value)


def parse_int(text: str, base: int = 10, kind: ScalarKind = ScalarKind.INT32) -> int | None:
    """
    Convert text to an integer of the given kind.

    Args:
        text (str): The text to convert. Surrounding whitespace is ignored.
        base (int): Numeric base, or 0 to honour 0x/0o/0b prefixes.
        kind (ScalarKind): Integer kind whose range the result must fit.

    Returns:
        int | None: The value, or None if the text is not a number in `base`
        or the number is out of range.

    Raises:
        ValueError: If `kind` is not an integer kind or `base` is not 0 or 2-36.
    """

    if not kind.is_integral:
        raise ValueError(f"{kind.label} is not an integer kind.")
    if isinstance(base, bool) or not isinstance(base, int) or not (base == 0 or 2 <= base <= 36):
        raise ValueError(f"Base must be 0 or between 2 and 36, got {base!r}.")

    # int() would also accept non-ASCII digits
    if not text.isascii():
        return None

    try:
        value = int(trim(text), base)
    except ValueError:
        return None

    return value if kind.fits(value) else None
