from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from bidict import bidict

from suite_money.domain.monetary.currency import Currency
from suite_money.domain.monetary.errors import UnknownCurrencyError

logger = logging.getLogger(__name__)


# region Static currency table

# Keys not listed fall back to the Currency defaults ("." decimal mark, "," thousands separator,
# symbol first, 100 subunits).
CURRENCY_TABLE: tuple[dict[str, Any], ...] = (
    # Dollars
    {"code": "USD", "name": "United States Dollar", "symbol": "$", "iso_numeric": 840},
    {"code": "CAD", "name": "Canadian Dollar", "symbol": "$", "iso_numeric": 124},
    {"code": "AUD", "name": "Australian Dollar", "symbol": "$", "iso_numeric": 36},
    {"code": "NZD", "name": "New Zealand Dollar", "symbol": "$", "iso_numeric": 554},
    {"code": "ZWD", "name": "Zimbabwean Dollar", "symbol": "$", "iso_numeric": 716},
    # Pounds
    {"code": "GBP", "name": "British Pound", "symbol": "£", "iso_numeric": 826},
    # Yen / Yuan
    {"code": "JPY", "name": "Japanese Yen", "symbol": "¥", "iso_numeric": 392},
    {"code": "YEN", "name": "Japanese Yen", "symbol": "¥"},
    {"code": "CNY", "name": "Chinese Renminbi Yuan", "symbol": "¥", "subunit_to_unit": 10, "iso_numeric": 156},
    # Euro
    {"code": "EUR", "name": "Euro", "symbol": "€", "iso_numeric": 978},
    # Rupees
    {"code": "INR", "name": "Indian Rupee", "symbol": "₨", "iso_numeric": 356},
    {"code": "NPR", "name": "Nepalese Rupee", "symbol": "₨", "iso_numeric": 524},
    {"code": "SCR", "name": "Seychellois Rupee", "symbol": "₨", "iso_numeric": 690},
    {"code": "LKR", "name": "Sri Lankan Rupee", "symbol": "₨", "iso_numeric": 144},
    # Real
    {"code": "BRL", "name": "Brazilian Real", "symbol": "R$ ", "decimal_mark": ",", "thousands_separator": ".", "iso_numeric": 986},
    # Nordic crowns
    {"code": "SEK", "name": "Swedish Krona", "symbol": "kr", "iso_numeric": 752},
    {"code": "NOK", "name": "Norwegian Krone", "symbol": "kr", "symbol_first": False, "iso_numeric": 578},
    {"code": "DKK", "name": "Danish Krone", "symbol": "kr", "decimal_mark": ",", "thousands_separator": ".", "symbol_first": False, "iso_numeric": 208},
    # Other
    {"code": "CHF", "name": "Swiss Franc", "symbol": "Fr", "iso_numeric": 756},
    {"code": "GHC", "name": "Ghanaian Cedi", "symbol": "₵", "iso_numeric": 288},
    # Three decimal places
    {"code": "BHD", "name": "Bahraini Dinar", "symbol": "ب.د", "subunit_to_unit": 1000, "iso_numeric": 48},
    {"code": "KWD", "name": "Kuwaiti Dinar", "symbol": "د.ك", "subunit_to_unit": 1000, "iso_numeric": 414},
    {"code": "TND", "name": "Tunisian Dinar", "symbol": "د.ت", "subunit_to_unit": 1000, "iso_numeric": 788},
    # No minor units
    {"code": "CLP", "name": "Chilean Peso", "symbol": "$", "subunit_to_unit": 1, "decimal_mark": ",", "thousands_separator": ".", "iso_numeric": 152},
    # Non-decimal minor units
    {"code": "MGA", "name": "Malagasy Ariary", "symbol": "Ar", "subunit_to_unit": 5, "iso_numeric": 969},
    {"code": "MRO", "name": "Mauritanian Ouguiya", "symbol": "UM", "subunit_to_unit": 5, "iso_numeric": 478},
)

# endregion


class CurrencyRegistry:
    """Lookup from currency code to Currency.

    Codes are case-insensitive: lookups strip whitespace and upper-case the code before searching.
    ISO numeric codes are indexed in a bi-directional map, so both directions are O(1).
    """

    def __init__(self):
        self._currencies: dict[str, Currency] = {}
        self._iso_numeric_by_code: bidict[str, int] = bidict()

    @classmethod
    def with_defaults(cls) -> CurrencyRegistry:
        """Create a registry pre-populated from `CURRENCY_TABLE`."""
        registry = cls()
        for currency in _DEFAULT_CURRENCIES.values():
            registry.register(currency)
        return registry

    def register(self, currency: Currency, overwrite: bool = False) -> None:
        """Register a currency.

        Args:
            currency (Currency): The currency to register.
            overwrite (bool): Whether to replace an already registered currency with the same code.

        Raises:
            ValueError: If currency already exists and $overwrite is False.
            TypeError: If $currency is not Currency instance.
        """
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency}")

        if currency.code in self._currencies and not overwrite:
            raise ValueError(f"Currency with code '{currency.code}' already exists in registry. Use overwrite=True to replace it.")

        self._currencies[currency.code] = currency
        self._iso_numeric_by_code.pop(currency.code, None)
        if currency.iso_numeric is not None:
            # forceput drops a stale code that used the same number
            self._iso_numeric_by_code.forceput(currency.code, currency.iso_numeric)

        logger.debug(f"Registered currency {currency.code} ({currency.name})")

    def find(self, code: str) -> Currency:
        """Get currency by code.

        Args:
            code (str): Currency code to look up, any case.

        Returns:
            Currency: The registered currency.

        Raises:
            UnknownCurrencyError: If the code is not registered.
            TypeError: If $code is not a string.
        """
        if not isinstance(code, str):
            raise TypeError(f"$code must be a string, but provided value is: {code}")

        normalized = code.upper().strip()
        currency = self._currencies.get(normalized)
        if currency is None:
            raise UnknownCurrencyError(normalized, self.codes)

        return currency

    def find_by_iso_numeric(self, number: int) -> Currency:
        """Get currency by its ISO 4217 numeric code (e.g. 840 for USD).

        Raises:
            UnknownCurrencyError: If no registered currency has that numeric code.
        """
        code = self._iso_numeric_by_code.inv.get(int(number))
        if code is None:
            raise UnknownCurrencyError(str(number), self.codes)

        return self._currencies[code]

    def wrap(self, identifier: Currency | str | Any) -> Currency:
        """Normalize a currency-like value into a registered Currency.

        A Currency is returned unchanged. A string is looked up case-insensitively. Enum members
        with a string value use that value; any other value is converted with `str()` first.

        Raises:
            UnknownCurrencyError: If the resolved code is not registered.
        """
        if isinstance(identifier, Currency):
            return identifier

        if identifier is None:
            raise UnknownCurrencyError("None", self.codes)

        if isinstance(identifier, Enum) and isinstance(identifier.value, str):
            identifier = identifier.value
        elif not isinstance(identifier, str):
            identifier = str(identifier)

        return self.find(identifier)

    @property
    def codes(self) -> list[str]:
        """Registered currency codes in registration order."""
        return list(self._currencies.keys())

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.upper().strip() in self._currencies

    def __len__(self) -> int:
        return len(self._currencies)


# Shared instances registered by `with_defaults`, so the constants below are identical to lookups
_DEFAULT_CURRENCIES = {entry["code"]: Currency(**entry) for entry in CURRENCY_TABLE}

USD = _DEFAULT_CURRENCIES["USD"]
CAD = _DEFAULT_CURRENCIES["CAD"]
EUR = _DEFAULT_CURRENCIES["EUR"]
GBP = _DEFAULT_CURRENCIES["GBP"]
JPY = _DEFAULT_CURRENCIES["JPY"]
