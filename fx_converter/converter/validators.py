"""
Validation helpers for the conversion form fields.
"""

import math


def parse_amount(v: str | None) -> float | None:
    """Parse the amount field, returning None when it is not a finite number."""
    if v is None or not v.strip():
        return None

    try:
        amount = float(v)
    except ValueError:
        return None

    return amount if math.isfinite(amount) else None


def is_form_valid(
    from_currency: str | None, to_currency: str | None, amount_text: str | None
) -> bool:
    """
    Check whether the form may be submitted.

    Args:
        from_currency: Selected source currency code
        to_currency: Selected target currency code
        amount_text: Raw text of the amount field

    Returns:
        True when both currencies are selected and the amount is a positive number
    """
    if not from_currency or not to_currency:
        return False

    amount = parse_amount(amount_text)
    return amount is not None and amount > 0
