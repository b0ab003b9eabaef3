from __future__ import annotations

import pytest

from suite_money.config import get_default_context, set_default_context
from suite_money.domain.monetary.money import Money
from suite_money.formatting.locale_overrides import BabelLocaleOverrides, MappingLocaleOverrides
from tests.helpers.helper_context import install_number_formats


DEFAULTS = {"delimiter": ",", "separator": "."}
OTHERS = {"delimiter": ".", "separator": ","}


@pytest.mark.parametrize("field", ["delimiter", "separator"])
def test_without_locale_uses_currency_values(field: str) -> None:
    assert getattr(Money.empty("USD"), field) == DEFAULTS[field]
    assert getattr(Money.empty("EUR"), field) == DEFAULTS[field]
    assert getattr(Money.empty("BRL"), field) == OTHERS[field]


@pytest.mark.parametrize("field", ["delimiter", "separator"])
def test_looks_up_value_for_current_locale(field: str) -> None:
    formats = {"en": {field: DEFAULTS[field]}, "de": {field: OTHERS[field]}}

    install_number_formats("en", formats)
    assert getattr(Money.empty("USD"), field) == DEFAULTS[field]

    install_number_formats("de", formats)
    assert getattr(Money.empty("USD"), field) == OTHERS[field]


@pytest.mark.parametrize("field", ["delimiter", "separator"])
def test_falls_back_to_default_behaviour_for_missing_translations(field: str) -> None:
    formats = {"en": {field: DEFAULTS[field]}, "de": {field: OTHERS[field]}}

    install_number_formats("de", formats)
    assert getattr(Money.empty("USD"), field) == OTHERS[field]

    install_number_formats("fr", formats)
    assert getattr(Money.empty("USD"), field) == DEFAULTS[field]
    assert getattr(Money.empty("BRL"), field) == OTHERS[field]


def test_currency_specific_entries_win() -> None:
    overrides = MappingLocaleOverrides(
        number_formats={"de": {"delimiter": "."}},
        currency_formats={("de", "chf"): {"delimiter": "'"}},
    )
    assert overrides.lookup_override("de", "USD", "delimiter") == "."
    assert overrides.lookup_override("de", "CHF", "delimiter") == "'"
    assert overrides.lookup_override("de", "CHF", "separator") is None
    assert overrides.lookup_override("fr", "USD", "delimiter") is None


def test_unknown_field_is_rejected() -> None:
    with pytest.raises(ValueError):
        MappingLocaleOverrides(number_formats={"de": {"symbol": "€"}})
    with pytest.raises(ValueError):
        MappingLocaleOverrides().lookup_override("de", "USD", "symbol")


def test_babel_overrides_use_cldr_symbols() -> None:
    overrides = BabelLocaleOverrides()
    assert overrides.lookup_override("de_DE", "EUR", "separator") == ","
    assert overrides.lookup_override("de_DE", "EUR", "delimiter") == "."
    assert overrides.lookup_override("en-US", "USD", "separator") == "."
    assert overrides.lookup_override("xx", "USD", "separator") is None


def test_babel_overrides_in_context() -> None:
    set_default_context(get_default_context().replace(locale="de_DE", locale_overrides=BabelLocaleOverrides()))
    assert Money.new_with_dollars(1234.5, "EUR").format() == "€1.234,50"
