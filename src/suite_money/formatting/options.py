from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


# Marks an option that was not given, as opposed to one given as None/False
UNSET = _Unset.UNSET


@dataclass(frozen=True)
class FormatOptions:
    """Options accepted by `Money.format`.

    Attributes:
        display_free: For a zero amount, True returns "free" and a string returns that string.
            False/None formats zero normally.
        with_currency: Append the currency code after the amount.
        no_cents: Drop the minor units (truncating toward zero).
        symbol: True uses the currency symbol ("¤" if it has none), a non-empty string is used
            verbatim, and ""/None/False omit the symbol. UNSET behaves like True.
        separator: Decimal mark override, "" included. UNSET/None use locale, then currency, then ".".
        delimiter: Thousands separator override. ""/None/False disable grouping. UNSET uses locale,
            then currency, then ",".
        html: Wrap the currency code added by $with_currency in `<span class="currency">`.
    """

    display_free: bool | str | None = None
    with_currency: bool = False
    no_cents: bool = False
    symbol: bool | str | None | _Unset = UNSET
    separator: str | None | _Unset = UNSET
    delimiter: str | bool | None | _Unset = UNSET
    html: bool = False

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> FormatOptions:
        """Build options from a plain mapping, e.g. the keyword arguments of `Money.format`.

        Raises:
            ValueError: If $options contains an unknown option name.
        """
        known = {option.name for option in fields(cls)}
        unknown = sorted(set(options) - known)

        # Raise: every option name must be known
        if unknown:
            raise ValueError(f"Cannot build `FormatOptions` because options {unknown} are unknown. Known options are {sorted(known)}")

        return cls(**options)
