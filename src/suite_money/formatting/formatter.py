from __future__ import annotations

from typing import TYPE_CHECKING

from suite_money.config import MoneyContext, get_default_context
from suite_money.domain.monetary.currency import Currency
from suite_money.formatting.options import FormatOptions, UNSET

if TYPE_CHECKING:
    from suite_money.domain.monetary.money import Money

# Global fallbacks, used when neither the call, the locale nor the currency provides a value
DEFAULT_SEPARATOR = "."
DEFAULT_DELIMITER = ","
NO_SYMBOL = "¤"
FREE_TEXT = "free"


class MoneyFormatter:
    """Turns Money into display strings.

    Separator and delimiter are resolved in this order:

    1. explicit option given to `format`
    2. locale override from the context's `LocaleOverrides` (for the context's current locale)
    3. the currency's own `decimal_mark` / `thousands_separator`
    4. the global defaults "." and ","

    Args:
        context: Context supplying locale and overrides. None means the process-wide default
            context, looked up at each call so later `set_default_context` calls are honoured.
    """

    def __init__(self, context: MoneyContext | None = None):
        self._context = context

    @property
    def context(self) -> MoneyContext:
        return self._context if self._context is not None else get_default_context()

    # region Option resolution

    @staticmethod
    def symbol_for(currency: Currency) -> str:
        """Currency symbol, or "¤" when the currency reports no symbol."""
        return currency.symbol or NO_SYMBOL

    def resolve_symbol(self, currency: Currency, options: FormatOptions) -> str:
        value = options.symbol
        if value is UNSET or value is True:
            return self.symbol_for(currency)
        if not value:
            return ""
        return str(value)

    def resolve_separator(self, currency: Currency, options: FormatOptions | None = None) -> str:
        if options is not None and options.separator is not UNSET and options.separator is not None:
            return options.separator

        override = self.context.lookup_override(currency, "separator")
        if override is not None:
            return override

        return currency.decimal_mark or DEFAULT_SEPARATOR

    def resolve_delimiter(self, currency: Currency, options: FormatOptions | None = None) -> str:
        if options is not None and options.delimiter is not UNSET and options.delimiter is not True:
            # None/False switch grouping off
            return options.delimiter or ""

        override = self.context.lookup_override(currency, "delimiter")
        if override is not None:
            return override

        if currency.thousands_separator is not None:
            return currency.thousands_separator
        return DEFAULT_DELIMITER

    # endregion

    # region Rendering

    @staticmethod
    def render_number(cents: int, currency: Currency, separator: str, delimiter: str = "", no_cents: bool = False) -> str:
        """Render $cents as a number in major units, without any symbol.

        Args:
            cents: Amount in minor units.
            currency: Currency defining $subunit_to_unit and decimal places.
            separator: Decimal mark placed before the minor units.
            delimiter: Thousands separator for the major units; "" disables grouping.
            no_cents: Drop the minor units, truncating toward zero.

        Examples:
            >>> MoneyFormatter.render_number(100_000_000_012, USD, ".", ",")
            '1,000,000,000.12'
            >>> MoneyFormatter.render_number(1000, MGA, ".")
            '200.0'
        """
        units, subunits = divmod(abs(cents), currency.subunit_to_unit)

        body = f"{units:,}".replace(",", delimiter) if delimiter else str(units)

        places = currency.decimal_places
        if not no_cents and places > 0:
            # For non power-of-ten subunits this is the exact decimal value of the remainder (1/5 -> 2)
            fraction = subunits * 10**places // currency.subunit_to_unit
            body = f"{body}{separator}{fraction:0{places}d}"

        is_negative = cents < 0 and not (no_cents and units == 0)
        return f"-{body}" if is_negative else body

    def to_plain_string(self, money: Money) -> str:
        """Bare numeric form: no symbol, no grouping, locale-aware decimal mark ("10.00", "1000")."""
        return self.render_number(money.cents, money.currency, self.resolve_separator(money.currency))

    def format(self, money: Money, options: FormatOptions | None = None) -> str:
        """Format $money with symbol, grouping and the optional decorations in $options.

        Examples:
            >>> MoneyFormatter().format(Money(1000_00, "GBP"))
            '£1,000.00'
            >>> MoneyFormatter().format(Money(1000, "NOK"))
            '10.00 kr'
            >>> MoneyFormatter().format(Money(570, "CAD"), FormatOptions(no_cents=True, with_currency=True))
            '$5 CAD'
        """
        options = options or FormatOptions()
        currency = money.currency

        if money.cents == 0 and options.display_free:
            return options.display_free if isinstance(options.display_free, str) else FREE_TEXT

        number = self.render_number(
            money.cents,
            currency,
            separator=self.resolve_separator(currency, options),
            delimiter=self.resolve_delimiter(currency, options),
            no_cents=options.no_cents,
        )
        sign, number = ("-", number[1:]) if number.startswith("-") else ("", number)

        symbol = self.resolve_symbol(currency, options)
        if not symbol:
            formatted = f"{sign}{number}"
        elif currency.symbol_first:
            formatted = f"{sign}{symbol}{number}"
        else:
            formatted = f"{sign}{number} {symbol}"

        if options.with_currency:
            code = f'<span class="currency">{currency.code}</span>' if options.html else currency.code
            formatted = f"{formatted} {code}"

        return formatted

    # endregion
