from __future__ import annotations

from typing import Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from suite_money.domain.monetary.currency import Currency
    from suite_money.domain.monetary.money import Money


# region Interface


@runtime_checkable
class ExchangeBank(Protocol):
    """Domain interface for anything that can convert Money between currencies.

    `VariableExchange` is the rate-table implementation. Other sources of rates (for example a
    client that fetches them over the network) implement this same method instead of subclassing.
    """

    def convert(self, money: Money, to_currency: Currency) -> Money:
        """Converts $money into $to_currency.

        Args:
            money: The amount to convert. Must not be mutated.
            to_currency: Target currency, already resolved to a `Currency`.

        Returns:
            New Money denominated in $to_currency.
        """
        ...


# endregion
