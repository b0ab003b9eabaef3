from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import TypeAlias


DecimalLike: TypeAlias = Decimal | str | int | float


def as_decimal(value: DecimalLike) -> Decimal:
    """Convert supported scalar types into Decimal.

    Floats are converted via `str` so that `0.1` becomes `Decimal("0.1")` and not
    the binary approximation of it.

    Args:
        value: Input value as Decimal, string, int or float.

    Returns:
        Value converted to Decimal.
    """

    if isinstance(value, Decimal):
        return value

    return Decimal(str(value))


def round_half_up(value: DecimalLike) -> int:
    """Round $value to the nearest integer, halves away from zero.

    Args:
        value: Decimal-like scalar.

    Returns:
        Rounded value as `int`.

    Examples:
        >>> round_half_up("1.5")
        2
        >>> round_half_up("-1.5")
        -2
        >>> round_half_up(1.01)
        1
    """
    return int(as_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
