from __future__ import annotations


class UnknownCurrencyError(ValueError):
    """Raised when a currency code is not present in the currency registry."""

    def __init__(self, code: str, available: list[str] | None = None):
        self.code = code
        self.available = available or []

        message = f"Currency with code '{code}' not found in registry"
        if self.available:
            message += f". Available currencies: {self.available}"

        super().__init__(message)


class CurrencyMismatchError(ValueError):
    """Raised when two Money values with different currencies are combined without conversion."""

    def __init__(self, operation: str, left_code: str, right_code: str):
        self.operation = operation
        self.left_code = left_code
        self.right_code = right_code
        super().__init__(f"Cannot call `{operation}` because currencies differ: {left_code} and {right_code}. Use `exchange_to` first")


class UnknownRateError(LookupError):
    """Raised when an exchange bank has no rate stored for the requested currency pair."""

    def __init__(self, from_code: str, to_code: str):
        self.from_code = from_code
        self.to_code = to_code
        super().__init__(f"No conversion rate known for '{from_code}' -> '{to_code}'")
