"""Checked fixed-point integer arithmetic for reward accrual.

Amounts are unsigned integers in an asset's base units.  Reward-per-share
values carry an extra ``SCALE`` factor so that small reward rates spread over
a large staked supply do not truncate to zero.

Numeric contract
----------------
- ``SCALE = 10**18``.
- Every intermediate value must stay within ``[0, UINT256_MAX]``.
- Division floors, which always rounds in the pool's favour: the sum of
  what participants are owed never exceeds what was funded.

Leaving the unsigned 256-bit range is a defect, not a recoverable condition.
``ArithmeticInvariantError`` is raised and must not be caught by callers.
"""

from __future__ import annotations

SCALE: int = 10**18
UINT256_MAX: int = 2**256 - 1


class ArithmeticInvariantError(ArithmeticError):
    """Raised when a checked operation leaves the unsigned 256-bit range."""


def _checked(value: int, op: str) -> int:
    if value < 0 or value > UINT256_MAX:
        raise ArithmeticInvariantError(
            f"Fixed-point {op} out of range: result={value}"
        )
    return value


def add(a: int, b: int) -> int:
    return _checked(a + b, "add")


def sub(a: int, b: int) -> int:
    return _checked(a - b, "sub")


def mul(a: int, b: int) -> int:
    return _checked(a * b, "mul")


def div(a: int, b: int) -> int:
    """Floor division.  Division by zero is an invariant violation."""
    if b == 0:
        raise ArithmeticInvariantError(f"Fixed-point div by zero: {a} / 0")
    return _checked(_checked(a, "div") // _checked(b, "div"), "div")


def mul_div(a: int, b: int, denominator: int) -> int:
    """Return ``a * b // denominator`` with every step range-checked."""
    return div(mul(a, b), denominator)


def expand_decimals(n: int, decimals: int = 18) -> int:
    """Convert a whole-token amount to base units, e.g. ``100`` -> ``100e18``."""
    return mul(n, 10**decimals)
