from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_FLOOR
from typing import Sequence

from suite_money.utils.decimal_tools import DecimalLike, as_decimal

# Ratio sums up to 1 + tolerance are accepted, so [1/3, 1/3, 1/3] written as floats still passes
RATIO_SUM_TOLERANCE = Decimal("1e-9")


def split_evenly(total: int, parties: int) -> list[int]:
    """Split $total minor units into $parties integer parts that differ by at most 1.

    Leading parts receive the extra units. A negative $total is split as the mirror image of its
    absolute value, so `split_evenly(-t, n) == [-p for p in split_evenly(t, n)]`.

    Args:
        total: Amount in minor units.
        parties: Number of parts, must be a positive int.

    Returns:
        List of $parties ints whose sum is exactly $total.

    Raises:
        ValueError: If $parties is not a positive int.

    Examples:
        >>> split_evenly(100, 3)
        [34, 33, 33]
        >>> split_evenly(2, 3)
        [1, 1, 0]
    """
    # Raise: parties must be a positive integer
    if isinstance(parties, bool) or not isinstance(parties, int) or parties <= 0:
        raise ValueError(f"Cannot call `split_evenly` because $parties ({parties!r}) is not a positive integer")

    sign = -1 if total < 0 else 1
    base, remainder = divmod(abs(total), parties)

    parts = [base + 1] * remainder + [base] * (parties - remainder)
    return [sign * part for part in parts]


def allocate_by_ratios(total: int, ratios: Sequence[DecimalLike]) -> list[int]:
    """Allocate $total minor units proportionally to $ratios without losing any unit.

    Uses the largest-remainder method: every part first gets the floor of
    `total * ratio / sum(ratios)`, then the units still missing are handed out one at a time to the
    parts with the largest fractional remainder (ties go to the earlier ratio). Ratios summing to
    less than 1 are read as proportions, so `[0.1, 0.3]` splits 1:3 and a zero ratio gets nothing.

    Ratios are converted to Decimal through `str`, so `0.3` means exactly 3/10.

    Args:
        total: Amount in minor units. Negative totals are allocated as the mirror image of their
            absolute value.
        ratios: Non-negative ratios, not all zero, summing to at most 1.

    Returns:
        One int per ratio, in the same order, summing exactly to $total.

    Raises:
        ValueError: If $ratios is empty, contains a negative or non-numeric value, sums to zero or
            sums to more than 1.

    Examples:
        >>> allocate_by_ratios(5, [0.3, 0.7])
        [2, 3]
        >>> allocate_by_ratios(100, [0.333, 0.333, 0.333])
        [34, 33, 33]
        >>> allocate_by_ratios(100, [0.1, 0.3])
        [25, 75]
    """
    # Raise: at least one ratio is needed
    if len(ratios) == 0:
        raise ValueError("Cannot call `allocate_by_ratios` because $ratios is empty")

    try:
        decimal_ratios = [as_decimal(ratio) for ratio in ratios]
    except (ValueError, TypeError, InvalidOperation) as e:
        raise ValueError(f"Cannot call `allocate_by_ratios` because $ratios ({list(ratios)}) contains a value that cannot be converted to Decimal") from e

    # Raise: ratios must be non-negative
    if any(not ratio.is_finite() or ratio < 0 for ratio in decimal_ratios):
        raise ValueError(f"Cannot call `allocate_by_ratios` because $ratios ({list(ratios)}) contains a negative or non-finite value")

    ratio_sum = sum(decimal_ratios, Decimal(0))

    # Raise: the ratios cannot hand out more than the whole amount
    if ratio_sum > 1 + RATIO_SUM_TOLERANCE:
        raise ValueError(f"Cannot call `allocate_by_ratios` because sum of $ratios ({ratio_sum}) is greater than 1")

    # Raise: all-zero ratios give no way to place the units
    if ratio_sum == 0:
        raise ValueError("Cannot call `allocate_by_ratios` because all $ratios are zero")

    sign = -1 if total < 0 else 1
    magnitude = abs(total)

    # Shares are taken relative to the ratio sum, so they add up to exactly $magnitude
    shares = [magnitude * ratio / ratio_sum for ratio in decimal_ratios]
    parts = [int(share.to_integral_value(rounding=ROUND_FLOOR)) for share in shares]
    remainders = [share - part for share, part in zip(shares, parts)]

    # Largest remainder first, earlier index wins ties (sorted is stable)
    order = sorted(range(len(parts)), key=lambda index: remainders[index], reverse=True)

    # Each remainder is below 1, so the shortfall is smaller than the number of parts
    shortfall = magnitude - sum(parts)
    for index in order[:shortfall]:
        parts[index] += 1

    return [sign * part for part in parts]
