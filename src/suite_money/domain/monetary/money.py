from __future__ import annotations

import warnings
from decimal import Decimal, getcontext, InvalidOperation
from typing import Any, Sequence

from suite_money.config import get_default_context
from suite_money.domain.monetary.currency import Currency
from suite_money.domain.monetary.errors import CurrencyMismatchError
from suite_money.formatting.formatter import MoneyFormatter
from suite_money.formatting.options import FormatOptions
from suite_money.platform.bank.protocol import ExchangeBank
from suite_money.utils.allocation import allocate_by_ratios, split_evenly
from suite_money.utils.decimal_tools import DecimalLike, as_decimal, round_half_up

# Set high precision for financial calculations
getcontext().prec = 28

# Positional flags accepted by `format` in the old calling style, e.g. `format("no_cents")`
_DEPRECATED_FORMAT_FLAGS = ("display_free", "with_currency", "no_cents", "html")


class Money:
    """Represents a monetary amount as an integer number of minor units ("cents") of a currency.

    The amount is always an `int`, so no minor unit is ever created or lost by arithmetic.
    Two Money values are equal when both cents and currency are equal; the attached bank does not
    take part in equality or hashing.

    Note the two constructors treat non-integer input differently:

    - `Money(1.50, "USD")` rounds the number itself to whole minor units -> 2 cents.
    - `Money.new_with_dollars(1.50, "USD")` scales major units by `subunit_to_unit` -> 150 cents.
    """

    __slots__ = ("_cents", "_currency", "_bank")

    def __init__(self, amount: DecimalLike = 0, currency: Currency | str | None = None, bank: ExchangeBank | None = None):
        """Initialize Money with an amount in minor units.

        Args:
            amount: Minor units. An `int` is used as is; any other number is rounded to the nearest
                integer, halves away from zero.
            currency: Currency or currency code. None uses the default currency.
            bank: Exchange bank used by `exchange_to`. None uses the default bank.

        Raises:
            ValueError: If $amount cannot be converted to a number.
            UnknownCurrencyError: If $currency is not a known currency.
        """
        context = get_default_context()

        if isinstance(amount, int) and not isinstance(amount, bool):
            cents = amount
        else:
            # Raise: $amount must be convertible to Decimal
            try:
                cents = round_half_up(amount)
            except (ValueError, TypeError, InvalidOperation) as e:
                raise ValueError(f"Cannot init `Money` because $amount ({amount!r}) cannot be converted to Decimal") from e

        self._cents: int = cents
        self._currency: Currency = context.default_currency if currency is None else context.registry.wrap(currency)
        self._bank: ExchangeBank = context.bank if bank is None else bank

    # region Constructors

    @classmethod
    def new_with_dollars(cls, amount: DecimalLike, currency: Currency | str | None = None, bank: ExchangeBank | None = None) -> Money:
        """Create Money from an amount in major units (dollars, euros, dinars...).

        Args:
            amount: Major units; scaled by the currency's `subunit_to_unit` and rounded half-up.
            currency: Currency or code. None uses the default currency.
            bank: Exchange bank. None uses the default bank.

        Examples:
            >>> Money.new_with_dollars(1, "TND").cents
            1000
            >>> Money.new_with_dollars(100.37).cents
            10037
        """
        context = get_default_context()
        resolved = context.default_currency if currency is None else context.registry.wrap(currency)

        try:
            cents = round_half_up(as_decimal(amount) * resolved.subunit_to_unit)
        except (ValueError, TypeError, InvalidOperation) as e:
            raise ValueError(f"Cannot call `new_with_dollars` because $amount ({amount!r}) cannot be converted to Decimal") from e

        return cls(cents, resolved, bank)

    from_major = new_with_dollars

    @classmethod
    def empty(cls, currency: Currency | str | None = None, bank: ExchangeBank | None = None) -> Money:
        """Zero amount in $currency."""
        return cls(0, currency, bank)

    zero = empty

    @classmethod
    def us_dollar(cls, cents: DecimalLike) -> Money:
        return cls(cents, "USD")

    @classmethod
    def ca_dollar(cls, cents: DecimalLike) -> Money:
        return cls(cents, "CAD")

    @classmethod
    def euro(cls, cents: DecimalLike) -> Money:
        return cls(cents, "EUR")

    @staticmethod
    def add_rate(from_currency: Currency | str, to_currency: Currency | str, rate: DecimalLike) -> None:
        """Store a conversion rate in the default bank.

        Raises:
            TypeError: If the default bank has no `add_rate` method.
        """
        bank = get_default_context().bank
        if not hasattr(bank, "add_rate"):
            raise TypeError(f"Cannot call `add_rate` because the default bank ({bank!r}) does not store rates")
        bank.add_rate(from_currency, to_currency, rate)

    # endregion

    # region Accessors

    @property
    def cents(self) -> int:
        """Amount in minor units."""
        return self._cents

    @property
    def currency(self) -> Currency:
        return self._currency

    @property
    def bank(self) -> ExchangeBank:
        return self._bank

    @property
    def currency_as_string(self) -> str:
        """Code of the currency, e.g. "USD"."""
        return self._currency.code

    @property
    def dollars(self) -> Decimal:
        """Amount in major units as an exact Decimal (e.g. Decimal("100.37") for 10037 USD cents)."""
        return Decimal(self._cents) / Decimal(self._currency.subunit_to_unit)

    @property
    def symbol(self) -> str:
        """Currency symbol, or "¤" if the currency has none."""
        return MoneyFormatter.symbol_for(self._currency)

    @property
    def separator(self) -> str:
        """Decimal mark for the current locale, falling back to the currency and then to "."."""
        return MoneyFormatter().resolve_separator(self._currency)

    @property
    def delimiter(self) -> str:
        """Thousands separator for the current locale, falling back to the currency and then to ","."""
        return MoneyFormatter().resolve_delimiter(self._currency)

    def is_zero(self) -> bool:
        return self._cents == 0

    def is_positive(self) -> bool:
        return self._cents > 0

    def is_negative(self) -> bool:
        return self._cents < 0

    # endregion

    # region Conversion

    def exchange_to(self, currency: Currency | str) -> Money:
        """Convert to $currency through the attached bank.

        The bank is called exactly once and its result is returned unchanged; self is not modified.

        Raises:
            UnknownCurrencyError: If $currency is not a known currency.
            UnknownRateError: If the bank has no rate for the pair.
        """
        target = get_default_context().registry.wrap(currency)
        return self._bank.convert(self, target)

    def with_currency(self, currency: Currency | str) -> Money:
        """Re-denominate: same cents, different currency. No conversion takes place."""
        return self.__class__(self._cents, get_default_context().registry.wrap(currency), self._bank)

    # endregion

    # region Splitting

    def split(self, parties: int) -> list[Money]:
        """Split into $parties amounts that differ by at most one minor unit.

        Earlier parties receive the extra units, e.g. 100 cents split 3 ways -> 34, 33, 33.

        Raises:
            ValueError: If $parties is not a positive integer.
        """
        return [self.__class__(part, self._currency, self._bank) for part in split_evenly(self._cents, parties)]

    def allocate(self, ratios: Sequence[DecimalLike]) -> list[Money]:
        """Allocate proportionally to $ratios, keeping every minor unit.

        Raises:
            ValueError: If $ratios is empty, negative, all zero or sums to more than 1.
        """
        return [self.__class__(part, self._currency, self._bank) for part in allocate_by_ratios(self._cents, ratios)]

    # endregion

    # region Formatting

    def format(self, *flags: str, options: FormatOptions | None = None, **kwargs: Any) -> str:
        """Format with symbol, grouping and locale-aware separators.

        Options are given as keywords (`format(with_currency=True, no_cents=True)`) or as a
        `FormatOptions`. Positional flags (`format("no_cents")`) are the deprecated spelling.

        Raises:
            ValueError: If an unknown option or flag is given, or $options is combined with keywords.
        """
        if flags:
            warnings.warn("Positional format flags are deprecated, pass them as keyword arguments", DeprecationWarning, stacklevel=2)
            for flag in flags:
                # Raise: unknown flag
                if flag not in _DEPRECATED_FORMAT_FLAGS:
                    raise ValueError(f"Cannot call `format` because flag '{flag}' is unknown. Known flags are {list(_DEPRECATED_FORMAT_FLAGS)}")
                kwargs.setdefault(flag, True)

        if options is not None and kwargs:
            raise ValueError("Cannot call `format` with both $options and keyword options")

        return MoneyFormatter().format(self, options or FormatOptions.from_mapping(kwargs))

    def __str__(self) -> str:
        """Bare numeric form, e.g. '10.00', '-237.43', '1.000' (BHD), '1000' (CLP)."""
        return MoneyFormatter().to_plain_string(self)

    def __repr__(self) -> str:
        """Return string like 'Money(1000, USD)'."""
        return f"{self.__class__.__name__}({self._cents}, {self._currency.code})"

    def __float__(self) -> float:
        return float(self.dollars)

    # endregion

    def _check_same_currency(self, other: Money, operation: str) -> None:
        """Raise CurrencyMismatchError if $other has a different currency."""
        if self._currency != other.currency:
            raise CurrencyMismatchError(operation, self._currency.code, other.currency.code)

    # Comparison operators (same currency required)
    def __eq__(self, other) -> bool:
        """Check equality with another Money object."""
        if not isinstance(other, Money):
            return False
        return self._cents == other.cents and self._currency == other.currency

    def __hash__(self) -> int:
        """Hash based on cents and currency code."""
        return hash((self._cents, self._currency.code))

    def __lt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, "<")
        return self._cents < other.cents

    def __le__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, "<=")
        return self._cents <= other.cents

    def __gt__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, ">")
        return self._cents > other.cents

    def __ge__(self, other) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, ">=")
        return self._cents >= other.cents

    # Arithmetic operations
    def __add__(self, other):
        """Add two Money objects of the same currency."""
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, "+")
        return self.__class__(self._cents + other.cents, self._currency, self._bank)

    def __sub__(self, other):
        """Subtract two Money objects of the same currency."""
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, "-")
        return self.__class__(self._cents - other.cents, self._currency, self._bank)

    def __mul__(self, other):
        """Multiply Money by number (returns Money rounded half-up to minor units)."""
        if isinstance(other, (Money, bool)):
            return NotImplemented  # Money * Money doesn't make sense
        try:
            return self.__class__(round_half_up(self._cents * as_decimal(other)), self._currency, self._bank)
        except (ValueError, TypeError, InvalidOperation):
            return NotImplemented

    def __rmul__(self, other):
        """Right multiplication: number * Money."""
        return self.__mul__(other)

    def __truediv__(self, other):
        """Divide Money by number (returns Money) or Money by Money (returns Decimal)."""
        if isinstance(other, Money):
            self._check_same_currency(other, "/")
            if other.cents == 0:
                raise ZeroDivisionError("Cannot divide by zero Money")
            return Decimal(self._cents) / Decimal(other.cents)

        try:
            divisor = as_decimal(other)
        except (ValueError, TypeError, InvalidOperation):
            return NotImplemented
        if divisor == 0:
            raise ZeroDivisionError("Cannot divide Money by zero")
        return self.__class__(round_half_up(self._cents / divisor), self._currency, self._bank)

    def __neg__(self):
        return self.__class__(-self._cents, self._currency, self._bank)

    def __pos__(self):
        return self.__class__(self._cents, self._currency, self._bank)

    def __abs__(self):
        return self.__class__(abs(self._cents), self._currency, self._bank)


def to_money(value: DecimalLike, currency: Currency | str | None = None, bank: ExchangeBank | None = None) -> Money:
    """Convert a number in major units into Money, e.g. `to_money(1)` -> 100 USD cents.

    Strings may carry a trailing currency code: `to_money("12.50 EUR")`.

    Raises:
        ValueError: If $value cannot be parsed, or names a currency different from $currency.
    """
    if isinstance(value, Money):
        return value if currency is None else value.exchange_to(currency)

    if isinstance(value, str):
        parts = value.split()
        # Raise: at most "amount code"
        if not parts or len(parts) > 2:
            raise ValueError(f"Cannot call `to_money` because $value ('{value}') must be in format 'amount [currency_code]'")
        if len(parts) == 2:
            registry = get_default_context().registry
            parsed_currency = registry.wrap(parts[1])
            if currency is not None and registry.wrap(currency) != parsed_currency:
                raise ValueError(f"Cannot call `to_money` because $value ('{value}') is not in $currency ({currency})")
            currency = parsed_currency
        value = parts[0]

    return Money.new_with_dollars(value, currency, bank)
