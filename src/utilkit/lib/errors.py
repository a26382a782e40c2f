"""
Out-of-range and contract errors shared by the utilkit containers and bit helpers.

An index or bit position outside its valid domain is handled according to a
`BoundsPolicy`. Under `STRICT` it raises `OutOfRangeError` on the spot. Under
`LEGACY` it is reported with a warning and the captured call stack, and the
caller picks a best-effort result. Every other misuse raises `ContractError`,
whatever the policy.
"""

import operator
import traceback

from utilkit.lib.config import BoundsPolicy, Config
from utilkit.lib.logger import Logger

__all__ = [
    "BoundsPolicy",
    "ContractError",
    "OutOfRangeError",
    "as_index",
    "check_index",
    "resolve_policy",
]


class OutOfRangeError(IndexError):
    """Raised when an index or bit position falls outside [0, limit)."""

    def __init__(self, index: int, limit: int, what: str = "Index"):
        self.index = index
        self.limit = limit
        super().__init__(f"{what} {index} out of range [0, {limit})")


class ContractError(ValueError):
    """Raised when a caller breaks a precondition that is not an index range."""

    pass


def resolve_policy(policy: BoundsPolicy | str | None) -> BoundsPolicy:
    """
    Turn an optional policy argument into a `BoundsPolicy`.

    Args:
        policy (BoundsPolicy | str | None): Explicit policy, its name, or None
            to use the `[bounds] policy` setting.

    Returns:
        BoundsPolicy: The policy to apply.
    """

    if policy is None:
        return Config.get("bounds", "policy", BoundsPolicy.STRICT)
    if isinstance(policy, BoundsPolicy):
        return policy

    try:
        return BoundsPolicy(str(policy).lower())
    except ValueError:
        raise ContractError(f"Unknown bounds policy '{policy}'.") from None


def _report(error: OutOfRangeError, where: str) -> None:
    """Warn about an out-of-range access along with the stack that made it."""

    Logger.warning(f"[abort] {where}: {error}")

    depth = Config.get("bounds", "stack_depth", 8)
    if depth > 0:
        # Drop this frame and check_index()
        stack = traceback.format_stack()[:-2][-depth:]
        Logger.debug("Stack context:\n" + "".join(stack).rstrip())


def check_index(
    index: int,
    limit: int,
    policy: BoundsPolicy,
    where: str,
    what: str = "Index",
) -> bool:
    """
    Validate that `index` lies within [0, limit).

    Args:
        index (int): The index to check.
        limit (int): Exclusive upper bound.
        policy (BoundsPolicy): What to do when the check fails.
        where (str): Name of the calling operation, for the diagnostic.
        what (str): Noun used in the error message.

    Returns:
        bool: True if the index is valid, False if it is not and the policy is LEGACY.

    Raises:
        OutOfRangeError: If the index is invalid and the policy is STRICT.
    """

    if 0 <= index < limit:
        return True

    error = OutOfRangeError(index, limit, what)
    if policy is BoundsPolicy.STRICT:
        raise error

    _report(error, where)
    return False


def as_index(value: object, what: str = "Index") -> int:
    """
    Convert an index-like value to int, refusing floats, strings and bools.

    Raises:
        ContractError: If the value is not an integer.
    """

    if isinstance(value, bool):
        raise ContractError(f"{what} must be an integer, not bool.")

    try:
        return operator.index(value)
    except TypeError:
        raise ContractError(f"{what} must be an integer, not {type(value).__name__}.") from None
