from __future__ import annotations

import logging
from typing import Literal, Mapping, Protocol

from babel import Locale, UnknownLocaleError
from babel.numbers import get_decimal_symbol, get_group_symbol

logger = logging.getLogger(__name__)

OverrideField = Literal["separator", "delimiter"]

OVERRIDE_FIELDS: tuple[str, ...] = ("separator", "delimiter")


# region Interface


class LocaleOverrides(Protocol):
    """Source of locale-specific number formatting overrides.

    Returning None means "no override", and the caller falls back to the currency's own value and
    then to the global default.
    """

    def lookup_override(self, locale: str, currency_code: str, field: OverrideField) -> str | None:
        """Look up the $field override ("separator" or "delimiter") for $locale and $currency_code."""
        ...


# endregion


def _check_field(field: str) -> None:
    # Raise: only separator and delimiter can be overridden
    if field not in OVERRIDE_FIELDS:
        raise ValueError(f"$field must be one of {OVERRIDE_FIELDS}, but provided value is: '{field}'")


class MappingLocaleOverrides:
    """In-memory override store, the equivalent of an i18n number-format table.

    Examples:
        >>> overrides = MappingLocaleOverrides(
        ...     number_formats={"de": {"separator": ",", "delimiter": "."}},
        ...     currency_formats={("de", "CHF"): {"delimiter": "'"}},
        ... )
        >>> overrides.lookup_override("de", "USD", "delimiter")
        '.'
        >>> overrides.lookup_override("de", "CHF", "delimiter")
        "'"
        >>> overrides.lookup_override("fr", "USD", "delimiter") is None
        True
    """

    def __init__(
        self,
        number_formats: Mapping[str, Mapping[str, str]] | None = None,
        currency_formats: Mapping[tuple[str, str], Mapping[str, str]] | None = None,
    ):
        """
        Args:
            number_formats: Per-locale values used for every currency.
            currency_formats: Per (locale, currency code) values, checked before $number_formats.
        """
        self._number_formats = {str(locale): dict(values) for locale, values in (number_formats or {}).items()}
        self._currency_formats = {(str(locale), code.upper()): dict(values) for (locale, code), values in (currency_formats or {}).items()}

        for values in [*self._number_formats.values(), *self._currency_formats.values()]:
            for field in values:
                _check_field(field)

    def lookup_override(self, locale: str, currency_code: str, field: OverrideField) -> str | None:
        _check_field(field)

        currency_values = self._currency_formats.get((str(locale), currency_code.upper()), {})
        if field in currency_values:
            return currency_values[field]

        return self._number_formats.get(str(locale), {}).get(field)


class BabelLocaleOverrides:
    """Overrides taken from the Unicode CLDR number symbols shipped with Babel.

    The decimal symbol is used as separator and the group symbol as delimiter. Locales Babel does not
    know produce no override.
    """

    def lookup_override(self, locale: str, currency_code: str, field: OverrideField) -> str | None:
        _check_field(field)

        try:
            parsed = Locale.parse(locale.replace("-", "_"))
        except (UnknownLocaleError, ValueError) as e:
            logger.debug(f"No CLDR data for locale '{locale}': {e}")
            return None

        if field == "separator":
            return get_decimal_symbol(parsed)
        return get_group_symbol(parsed)
