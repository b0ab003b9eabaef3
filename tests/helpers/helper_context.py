from __future__ import annotations

from suite_money.config import MoneyContext, get_default_context, set_default_context
from suite_money.formatting.locale_overrides import MappingLocaleOverrides


def install_number_formats(locale: str | None, number_formats: dict[str, dict[str, str]]) -> MoneyContext:
    """Install a default context with in-memory number formats and $locale as current locale.

    Returns:
        The previously installed context.
    """
    context = get_default_context().replace(
        locale=locale,
        locale_overrides=MappingLocaleOverrides(number_formats=number_formats),
    )
    return set_default_context(context)
