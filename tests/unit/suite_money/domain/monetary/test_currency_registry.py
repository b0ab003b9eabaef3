from __future__ import annotations

from enum import Enum

import pytest

from suite_money.domain.monetary.currency import Currency
from suite_money.domain.monetary.currency_registry import CurrencyRegistry, EUR, USD
from suite_money.domain.monetary.errors import UnknownCurrencyError


class CurrencyCode(Enum):
    EUR = "eur"


@pytest.fixture
def registry() -> CurrencyRegistry:
    return CurrencyRegistry.with_defaults()


def test_find_is_case_insensitive(registry: CurrencyRegistry) -> None:
    assert registry.find("usd") is registry.find("USD")
    assert registry.find(" Eur ") == EUR


def test_constants_are_the_registered_instances(registry: CurrencyRegistry) -> None:
    assert registry.find("USD") is USD


def test_unknown_code_raises(registry: CurrencyRegistry) -> None:
    with pytest.raises(UnknownCurrencyError) as exc_info:
        registry.find("XXX")
    assert exc_info.value.code == "XXX"
    assert "USD" in exc_info.value.available


def test_unknown_currency_error_is_a_value_error(registry: CurrencyRegistry) -> None:
    with pytest.raises(ValueError):
        registry.wrap("NOPE")


def test_wrap_returns_currency_unchanged(registry: CurrencyRegistry) -> None:
    custom = Currency("XTS", "Testing Code")
    assert registry.wrap(custom) is custom


def test_wrap_accepts_codes_and_code_like_values(registry: CurrencyRegistry) -> None:
    assert registry.wrap("eur") is EUR
    assert registry.wrap(CurrencyCode.EUR) is EUR


def test_wrap_none_raises(registry: CurrencyRegistry) -> None:
    with pytest.raises(UnknownCurrencyError):
        registry.wrap(None)


def test_subunit_table(registry: CurrencyRegistry) -> None:
    assert registry.find("USD").subunit_to_unit == 100
    assert registry.find("TND").subunit_to_unit == 1000
    assert registry.find("CLP").subunit_to_unit == 1
    assert registry.find("MGA").subunit_to_unit == 5
    assert registry.find("CNY").subunit_to_unit == 10


def test_register_refuses_duplicates_unless_overwrite(registry: CurrencyRegistry) -> None:
    replacement = Currency("USD", "Dollar", "US$", iso_numeric=840)
    with pytest.raises(ValueError):
        registry.register(replacement)

    registry.register(replacement, overwrite=True)
    assert registry.find("USD").symbol == "US$"
    assert registry.find_by_iso_numeric(840) is replacement


def test_register_rejects_non_currency(registry: CurrencyRegistry) -> None:
    with pytest.raises(TypeError):
        registry.register("USD")


def test_find_by_iso_numeric(registry: CurrencyRegistry) -> None:
    assert registry.find_by_iso_numeric(840) is USD
    assert registry.find_by_iso_numeric(978) is EUR
    with pytest.raises(UnknownCurrencyError):
        registry.find_by_iso_numeric(1)


def test_empty_registry() -> None:
    registry = CurrencyRegistry()
    assert len(registry) == 0
    assert "USD" not in registry

    registry.register(Currency("XTS", "Testing Code", iso_numeric=963))
    assert "xts" in registry
    assert registry.codes == ["XTS"]
