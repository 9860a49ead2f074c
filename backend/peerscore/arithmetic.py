from __future__ import annotations

from peerscore.errors import DivisionByZero, NarrowingOverflow

UINT8_MAX = 2**8 - 1
UINT16_MAX = 2**16 - 1
UINT256_MAX = 2**256 - 1


def _require_uint256(value: int) -> int:
    if value < 0 or value > UINT256_MAX:
        raise NarrowingOverflow(f"{value} is outside the unsigned 256-bit range")
    return value


def checked_add(a: int, b: int) -> int:
    return _require_uint256(a + b)


def checked_sub(a: int, b: int) -> int:
    if b > a:
        raise NarrowingOverflow(f"{a} - {b} underflows")
    return a - b


def checked_mul(a: int, b: int) -> int:
    return _require_uint256(a * b)


def checked_div(a: int, b: int) -> int:
    """Unsigned floor division; operands are never negative here."""
    if b == 0:
        raise DivisionByZero(f"{a} / 0")
    return a // b


def narrow_uint16(value: int) -> int:
    if value < 0 or value > UINT16_MAX:
        raise NarrowingOverflow(f"{value} does not fit in 16 bits")
    return value


def narrow_uint8(value: int, *, policy: str = "reject") -> int:
    """Narrow a signed intermediate to an unsigned byte.

    ``wrap`` keeps the low eight bits and ``clamp`` pins the value to the
    0-100 score scale. ``reject`` raises only when the value does not fit
    in 8 bits, so 101-255 pass through unchanged.
    """
    if policy == "wrap":
        return value % (UINT8_MAX + 1)
    if policy == "clamp":
        return max(0, min(100, value))
    if value < 0 or value > UINT8_MAX:
        raise NarrowingOverflow(f"normalized score {value} does not fit in 8 bits")
    return value


def isqrt(x: int) -> int:
    """Babylonian integer square root, floor of sqrt(x)."""
    if x < 0:
        raise NarrowingOverflow(f"square root of negative value {x}")
    y = x
    z = (x + 1) // 2
    while z < y:
        y = z
        z = (x // z + z) // 2
    return y
