from __future__ import annotations


class Currency:
    """Represents a currency with code, subunit granularity and display metadata.

    Attributes:
        code (str): Currency code (e.g., "USD", "TND").
        name (str): Full currency name.
        symbol (str | None): Display symbol (e.g., "$", "kr"). None when the currency has no symbol.
        subunit_to_unit (int): Number of minor units in one major unit (100 for USD, 1000 for TND,
            1 for CLP, 5 for MGA).
        decimal_mark (str): Character placed between major and minor units.
        thousands_separator (str): Character grouping the major units by thousands.
        symbol_first (bool): True if the symbol precedes the amount, False if it follows it.
        iso_numeric (int | None): ISO 4217 numeric code, if the currency has one.
    """

    __slots__ = (
        "_code",
        "_name",
        "_symbol",
        "_subunit_to_unit",
        "_decimal_mark",
        "_thousands_separator",
        "_symbol_first",
        "_iso_numeric",
    )

    def __init__(
        self,
        code: str,
        name: str,
        symbol: str | None = None,
        subunit_to_unit: int = 100,
        decimal_mark: str = ".",
        thousands_separator: str = ",",
        symbol_first: bool = True,
        iso_numeric: int | None = None,
    ):
        """Initialize a Currency instance.

        Raises:
            ValueError: If parameters are invalid.
            TypeError: If $subunit_to_unit is not an int.
        """
        # Raise: code must be a non-empty string
        if not isinstance(code, str) or not code.strip():
            raise ValueError(f"$code must be a non-empty string, but provided value is: '{code}'")

        # Raise: name must be a non-empty string
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"$name must be a non-empty string, but provided value is: '{name}'")

        # Raise: subunit_to_unit must be a positive integer
        if isinstance(subunit_to_unit, bool) or not isinstance(subunit_to_unit, int):
            raise TypeError(f"$subunit_to_unit must be an int, but provided value is: {subunit_to_unit!r}")
        if subunit_to_unit < 1:
            raise ValueError(f"$subunit_to_unit must be >= 1, but provided value is: {subunit_to_unit}")

        # Raise: symbol is optional but must be a string when given
        if symbol is not None and not isinstance(symbol, str):
            raise TypeError(f"$symbol must be a string or None, but provided value is: {symbol!r}")

        self._code = code.upper().strip()
        self._name = name.strip()
        self._symbol = symbol
        self._subunit_to_unit = subunit_to_unit
        self._decimal_mark = decimal_mark
        self._thousands_separator = thousands_separator
        self._symbol_first = symbol_first
        self._iso_numeric = iso_numeric

    @property
    def code(self) -> str:
        """Get the currency code."""
        return self._code

    @property
    def name(self) -> str:
        """Get the currency name."""
        return self._name

    @property
    def symbol(self) -> str | None:
        """Get the currency symbol, or None when the currency has none."""
        return self._symbol

    @property
    def subunit_to_unit(self) -> int:
        """Get the number of minor units per major unit."""
        return self._subunit_to_unit

    @property
    def decimal_mark(self) -> str:
        return self._decimal_mark

    @property
    def thousands_separator(self) -> str:
        return self._thousands_separator

    # Short aliases used by the formatter
    separator = decimal_mark
    delimiter = thousands_separator

    @property
    def symbol_first(self) -> bool:
        return self._symbol_first

    @property
    def iso_numeric(self) -> int | None:
        return self._iso_numeric

    @property
    def decimal_places(self) -> int:
        """Number of digits needed to display the minor units.

        Returns 0 when $subunit_to_unit is 1, log10($subunit_to_unit) for powers of ten, and
        floor(log10($subunit_to_unit)) + 1 otherwise (e.g. 1 digit for MGA with 5 subunits).
        """
        if self._subunit_to_unit == 1:
            return 0

        digits = str(self._subunit_to_unit)
        if digits.rstrip("0") == "1":
            return len(digits) - 1

        return len(digits)

    def __eq__(self, other) -> bool:
        """Check equality with another Currency."""
        if not isinstance(other, Currency):
            return False
        return self.code == other.code

    def __hash__(self) -> int:
        """Hash based on currency code."""
        return hash(self.code)

    def __str__(self) -> str:
        """Return string representation."""
        return self.code

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return f"{self.__class__.__name__}('{self.code}', '{self.name}', {self.symbol!r}, {self.subunit_to_unit})"
