from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from threading import Lock
from typing import Callable, ClassVar, TYPE_CHECKING

from suite_money.domain.monetary.currency import Currency
from suite_money.domain.monetary.errors import UnknownRateError
from suite_money.utils.decimal_tools import DecimalLike, as_decimal, round_half_up

if TYPE_CHECKING:
    from suite_money.domain.monetary.money import Money

logger = logging.getLogger(__name__)

RoundingFunction = Callable[[Decimal], int]


class VariableExchange:
    """Exchange bank backed by an in-memory table of directional rates.

    A rate stored for EUR -> USD says how many USD one EUR buys. Rates are directional: storing
    EUR -> USD does not imply USD -> EUR.

    One shared instance is available through `VariableExchange.instance()`; it is the default
    bank for every Money created without an explicit bank. Independent instances can be created
    freely, which is what tests should do.

    Thread Safety:
        Reads and writes of the rate table are guarded by a lock, so `add_rate` and `convert`
        may be called concurrently from multiple threads.

    Examples:
        >>> bank = VariableExchange()
        >>> bank.add_rate("EUR", "USD", "1.10")
        >>> bank.convert(Money(10_00, "EUR", bank), USD)
        Money(1100, USD)
    """

    _instance: ClassVar[VariableExchange | None] = None
    _instance_lock: ClassVar[Lock] = Lock()

    def __init__(self, rounding: RoundingFunction | None = None):
        """Create an empty exchange bank.

        Args:
            rounding: Optional function turning the exact converted amount (in target minor
                units) into an `int`. Defaults to rounding half away from zero.
        """
        self._rates: dict[tuple[str, str], Decimal] = {}
        self._lock = Lock()
        self._rounding = rounding or round_half_up

    @classmethod
    def instance(cls) -> VariableExchange:
        """Return the process-wide shared bank, creating it on first access."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
                logger.debug("Created shared VariableExchange instance")
            return cls._instance

    # region Rates

    def add_rate(self, from_currency: Currency | str, to_currency: Currency | str, rate: DecimalLike) -> None:
        """Store (or overwrite) the rate for converting $from_currency into $to_currency.

        Args:
            from_currency: Source currency or its code.
            to_currency: Target currency or its code.
            rate: Units of $to_currency per one unit of $from_currency.

        Raises:
            ValueError: If $rate is not a positive number.
        """
        try:
            decimal_rate = as_decimal(rate)
        except (ValueError, TypeError, InvalidOperation) as e:
            raise ValueError(f"Cannot call `add_rate` because $rate ({rate}) cannot be converted to Decimal") from e

        # Raise: rate must be positive and finite
        if not decimal_rate.is_finite() or decimal_rate <= 0:
            raise ValueError(f"Cannot call `add_rate` because $rate ({rate}) is not a positive number")

        key = (self._code_of(from_currency), self._code_of(to_currency))
        with self._lock:
            self._rates[key] = decimal_rate

        logger.debug(f"Stored rate {key[0]} -> {key[1]} = {decimal_rate}")

    set_rate = add_rate

    def get_rate(self, from_currency: Currency | str, to_currency: Currency | str) -> Decimal | None:
        """Return the stored rate for $from_currency -> $to_currency, or None if there is none."""
        key = (self._code_of(from_currency), self._code_of(to_currency))
        with self._lock:
            return self._rates.get(key)

    @property
    def rates(self) -> dict[tuple[str, str], Decimal]:
        """Snapshot copy of all stored rates keyed by (from_code, to_code)."""
        with self._lock:
            return dict(self._rates)

    # endregion

    # region Conversion

    def convert(self, money: Money, to_currency: Currency, rounding: RoundingFunction | None = None) -> Money:
        """Convert $money into $to_currency using the stored rate.

        The exact result `cents * rate * to_subunit_to_unit / from_subunit_to_unit` is rounded to an
        integer number of target minor units. Converting into the same currency returns an equal
        copy without consulting the rate table.

        Args:
            money: Amount to convert.
            to_currency: Target currency.
            rounding: Optional per-call override of the rounding function.

        Returns:
            New Money in $to_currency that keeps the bank of $money.

        Raises:
            UnknownRateError: If no rate is stored for the currency pair.
        """
        from_currency = money.currency

        if from_currency == to_currency:
            return type(money)(money.cents, to_currency, money.bank)

        rate = self.get_rate(from_currency, to_currency)
        if rate is None:
            raise UnknownRateError(from_currency.code, to_currency.code)

        exact = Decimal(money.cents) * rate * to_currency.subunit_to_unit / from_currency.subunit_to_unit
        new_cents = (rounding or self._rounding)(exact)

        logger.debug(f"Converted {money.cents} {from_currency.code} -> {new_cents} {to_currency.code} at rate {rate}")
        return type(money)(int(new_cents), to_currency, money.bank)

    exchange_with = convert

    # endregion

    @staticmethod
    def _code_of(currency: Currency | str) -> str:
        if isinstance(currency, Currency):
            return currency.code
        return str(currency).upper().strip()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(rates={len(self._rates)})"
