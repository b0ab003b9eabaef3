from __future__ import annotations

import threading

import pytest

from suite_money.config import MoneyContext, get_default_context, reset_default_context, set_default_context
from suite_money.domain.monetary.currency_registry import CurrencyRegistry, EUR
from suite_money.domain.monetary.errors import UnknownCurrencyError
from suite_money.domain.monetary.money import Money
from suite_money.platform.bank.variable_exchange import VariableExchange


def test_default_context() -> None:
    context = get_default_context()
    assert context is get_default_context()
    assert context.default_currency.code == "USD"
    assert context.bank is VariableExchange.instance()
    assert context.locale is None


def test_default_currency_is_configurable() -> None:
    previous = set_default_context(get_default_context().replace(default_currency="eur"))

    assert Money(100).currency is EUR
    assert Money.new_with_dollars(1).currency is EUR
    assert previous.default_currency.code == "USD"


def test_default_bank_is_configurable() -> None:
    bank = VariableExchange()
    set_default_context(get_default_context().replace(bank=bank))

    Money.add_rate("EUR", "USD", 2)

    assert Money(1).bank is bank
    assert bank.get_rate("EUR", "USD") == 2
    assert VariableExchange.instance().get_rate("EUR", "USD") is None


def test_unknown_default_currency_raises() -> None:
    with pytest.raises(UnknownCurrencyError):
        MoneyContext(default_currency="XXX")


def test_custom_registry() -> None:
    registry = CurrencyRegistry.with_defaults()
    context = MoneyContext(registry=registry, default_currency="GBP")
    assert context.default_currency is registry.find("GBP")


def test_set_default_context_requires_context() -> None:
    with pytest.raises(TypeError):
        set_default_context("USD")


def test_set_default_context_returns_each_previous_context_once() -> None:
    initial = get_default_context()
    contexts = [initial.replace(default_currency=code) for code in ("EUR", "GBP", "JPY", "CAD", "CHF", "AUD", "NOK", "SEK")]
    previous_contexts = []
    previous_lock = threading.Lock()

    def worker(context: MoneyContext) -> None:
        previous = set_default_context(context)
        with previous_lock:
            previous_contexts.append(previous)

    threads = [threading.Thread(target=worker, args=(context,)) for context in contexts]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    # Installs form one chain: every context is replaced exactly once, except the last one installed
    assert len({id(context) for context in previous_contexts}) == len(contexts)
    assert initial in previous_contexts
    assert get_default_context() not in previous_contexts


def test_reset_default_context() -> None:
    set_default_context(get_default_context().replace(default_currency="EUR"))
    reset_default_context()
    assert get_default_context().default_currency.code == "USD"


def test_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("SUITE_MONEY_DEFAULT_CURRENCY", "eur")
    monkeypatch.setenv("SUITE_MONEY_LOCALE", "de")

    context = MoneyContext.from_env(dotenv_path=str(tmp_path / "missing.env"))

    assert context.default_currency is EUR
    assert context.locale == "de"


def test_from_env_reads_dotenv_file(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    # setenv + delenv registers both variables for restore, so values loaded from the file are undone too
    for name in ("SUITE_MONEY_DEFAULT_CURRENCY", "SUITE_MONEY_LOCALE"):
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    env_file = tmp_path / ".env"
    env_file.write_text("SUITE_MONEY_DEFAULT_CURRENCY=GBP\n")

    context = MoneyContext.from_env(dotenv_path=str(env_file), locale="fr")

    assert context.default_currency.code == "GBP"
    assert context.locale == "fr"


def test_from_env_finds_dotenv_in_working_directory(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in ("SUITE_MONEY_DEFAULT_CURRENCY", "SUITE_MONEY_LOCALE"):
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)
    (tmp_path / ".env").write_text("SUITE_MONEY_DEFAULT_CURRENCY=GBP\nSUITE_MONEY_LOCALE=en\n")
    monkeypatch.chdir(tmp_path)

    context = MoneyContext.from_env()

    assert context.default_currency.code == "GBP"
    assert context.locale == "en"
