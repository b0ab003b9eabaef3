__version__ = "0.1.0"

from suite_money.config import MoneyContext, get_default_context, set_default_context
from suite_money.domain.monetary.currency import Currency
from suite_money.domain.monetary.errors import CurrencyMismatchError, UnknownCurrencyError, UnknownRateError
from suite_money.domain.monetary.money import Money, to_money
from suite_money.platform.bank.variable_exchange import VariableExchange

__all__ = [
    "Currency",
    "CurrencyMismatchError",
    "Money",
    "MoneyContext",
    "UnknownCurrencyError",
    "UnknownRateError",
    "VariableExchange",
    "get_default_context",
    "set_default_context",
    "to_money",
]
