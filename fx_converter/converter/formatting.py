"""
Locale-aware money formatting.
"""

import logging
from typing import Final

from babel.core import UnknownLocaleError
from babel.numbers import UnknownCurrencyError, format_currency, validate_currency

from .settings import converter_settings

AMOUNT_PATTERN: Final[str] = "¤#,##0.00"
RATE_PATTERN: Final[str] = "¤#,##0.00####"

# ISO 4217 codes for "no currency" and testing
NON_MONETARY_CODES: Final[frozenset[str]] = frozenset({"XXX", "XTS"})

logger = logging.getLogger(__name__)


def format_money(
    amount: float,
    currency_code: str,
    locale: str | None = None,
    pattern: str = AMOUNT_PATTERN,
) -> str:
    """
    Format an amount in the given currency.

    Falls back to ``"<code> <amount>"`` with two decimals when the code is
    not a currency Babel can format, or when the amount has more digits
    than the decimal context can quantize.

    Args:
        amount: Value to format
        currency_code: ISO 4217 currency code
        locale: Babel locale identifier, defaults to the configured one
        pattern: Number pattern, ``AMOUNT_PATTERN`` or ``RATE_PATTERN``

    Returns:
        The formatted string
    """
    try:
        if currency_code in NON_MONETARY_CODES:
            raise UnknownCurrencyError(currency_code)
        validate_currency(currency_code)
        return format_currency(
            amount,
            currency_code,
            format=pattern,
            locale=locale or converter_settings.display_locale,
            currency_digits=False,
        )
    except (
        UnknownCurrencyError, UnknownLocaleError, ArithmeticError, ValueError
    ) as e:
        logger.debug(f"Falling back to plain formatting for {currency_code}: {e}")
        return f"{currency_code} {amount:.2f}"
