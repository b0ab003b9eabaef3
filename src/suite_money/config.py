"""Process-wide defaults used when Money is created without an explicit currency or bank.

The defaults live in one immutable `MoneyContext`. Code that needs different defaults builds its
own context with `MoneyContext.replace` and installs it with `set_default_context`, or simply
passes the currency and bank explicitly at each call.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace as dataclass_replace
from threading import Lock

from dotenv import find_dotenv, load_dotenv

from suite_money.domain.monetary.currency import Currency
from suite_money.domain.monetary.currency_registry import CurrencyRegistry
from suite_money.formatting.locale_overrides import LocaleOverrides
from suite_money.platform.bank.protocol import ExchangeBank
from suite_money.platform.bank.variable_exchange import VariableExchange

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY_CODE = "USD"

# Environment variables read by `MoneyContext.from_env`
ENV_DEFAULT_CURRENCY = "SUITE_MONEY_DEFAULT_CURRENCY"
ENV_LOCALE = "SUITE_MONEY_LOCALE"


@dataclass(frozen=True)
class MoneyContext:
    """Defaults and collaborators shared by Money values.

    Attributes:
        registry (CurrencyRegistry): Resolves currency codes into Currency objects.
        default_currency (Currency): Currency used when none is given.
        bank (ExchangeBank): Bank attached to Money created without an explicit bank.
        locale (str | None): Current locale for separator/delimiter overrides. None disables lookups.
        locale_overrides (LocaleOverrides | None): Source of locale-specific overrides.
    """

    registry: CurrencyRegistry = field(default_factory=CurrencyRegistry.with_defaults)
    default_currency: Currency | str | None = None
    bank: ExchangeBank = field(default_factory=VariableExchange.instance)
    locale: str | None = None
    locale_overrides: LocaleOverrides | None = None

    def __post_init__(self):
        # default_currency may be given as a code; resolve it through this context's registry
        currency = self.registry.wrap(DEFAULT_CURRENCY_CODE if self.default_currency is None else self.default_currency)
        object.__setattr__(self, "default_currency", currency)

    def replace(self, **changes) -> MoneyContext:
        """Return a copy of this context with $changes applied.

        A `default_currency` given as a code is resolved through the (possibly new) registry.
        """
        return dataclass_replace(self, **changes)

    def lookup_override(self, currency: Currency, field_name: str) -> str | None:
        """Locale override for $field_name, or None when no locale or provider is configured."""
        if self.locale is None or self.locale_overrides is None:
            return None
        return self.locale_overrides.lookup_override(self.locale, currency.code, field_name)

    @classmethod
    def from_env(cls, dotenv_path: str | None = None, **overrides) -> MoneyContext:
        """Build a context from environment variables, loading a `.env` file first.

        Reads `SUITE_MONEY_DEFAULT_CURRENCY` and `SUITE_MONEY_LOCALE`. Values already present in the
        environment win over the `.env` file.

        Args:
            dotenv_path: Explicit path of the `.env` file. None searches upward from the working directory.
            **overrides: Context fields that take precedence over the environment.
        """
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))

        context = cls(**{key: value for key, value in overrides.items() if key in ("registry", "bank", "locale_overrides")})

        changes = {}
        currency_code = os.environ.get(ENV_DEFAULT_CURRENCY)
        if currency_code:
            changes["default_currency"] = currency_code
        locale = os.environ.get(ENV_LOCALE)
        if locale:
            changes["locale"] = locale
        changes.update({key: value for key, value in overrides.items() if key in ("default_currency", "locale")})

        return context.replace(**changes)


# region Default context

_default_context: MoneyContext | None = None
_default_context_lock = Lock()


def get_default_context() -> MoneyContext:
    """Return the process-wide context, creating it on first access."""
    global _default_context
    with _default_context_lock:
        if _default_context is None:
            _default_context = MoneyContext()
        return _default_context


def set_default_context(context: MoneyContext) -> MoneyContext:
    """Install $context as the process-wide default and return the previous one.

    Raises:
        TypeError: If $context is not a MoneyContext.
    """
    global _default_context

    if not isinstance(context, MoneyContext):
        raise TypeError(f"$context must be a MoneyContext instance, but provided value is: {context}")

    with _default_context_lock:
        previous = _default_context if _default_context is not None else MoneyContext()
        _default_context = context

    logger.debug(f"Default context changed: currency={context.default_currency.code}, locale={context.locale}, bank={context.bank!r}")
    return previous


def reset_default_context() -> None:
    """Drop the process-wide context; the next access builds a fresh one."""
    global _default_context
    with _default_context_lock:
        _default_context = None


# endregion
