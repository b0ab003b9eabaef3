from __future__ import annotations

from suite_money.domain.monetary.currency import Currency
from suite_money.domain.monetary.money import Money


class RecordingBank:
    """Bank double that returns a fixed result and remembers every `convert` call."""

    def __init__(self, result: Money):
        self.result = result
        self.calls: list[tuple[Money, Currency]] = []

    def convert(self, money: Money, to_currency: Currency) -> Money:
        self.calls.append((money, to_currency))
        return self.result
