"""
API-specific data models for the conversion form service.
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from ..converter.models import DisplayRegion


def normalize_currency_code(v: Any) -> Any:
    """Strip and upper-case currency codes, leaving other values to validation."""
    return v.strip().upper() if isinstance(v, str) else v


def amount_as_text(v: Any) -> Any:
    """Accept JSON numbers for the amount field by turning them into text."""
    if isinstance(v, int | float) and not isinstance(v, bool):
        return str(v)
    return v


CurrencyField = Annotated[
    str,
    BeforeValidator(normalize_currency_code),
    Field(
        pattern=r"^([A-Z]{3})?$",
        description="Currency code, or empty to clear the selection",
        examples=["USD", "EUR", ""],
    ),
]


class FormUpdate(BaseModel):
    """Model for editing form fields; omitted fields are left unchanged."""

    model_config = ConfigDict(populate_by_name=True)

    from_currency: Annotated[CurrencyField | None, Field(alias="from")] = None
    to_currency: Annotated[CurrencyField | None, Field(alias="to")] = None
    amount: Annotated[
        str | None,
        BeforeValidator(amount_as_text),
        Field(description="Raw amount text or a number", examples=["10", 10.5]),
    ] = None


class FormView(BaseModel):
    """Model for the current state of the form and its results area."""

    from_currency: Annotated[str, Field(serialization_alias="from")]
    to_currency: Annotated[str, Field(serialization_alias="to")]
    amount: Annotated[str, Field(description="Raw amount text")]
    can_submit: Annotated[bool, Field(description="Whether conversion is enabled")]
    loading: Annotated[bool, Field(description="Whether a request is in flight")]
    display: DisplayRegion


class ErrorResponse(BaseModel):
    """Model for error responses."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    error: Annotated[str, Field(description="Error code")]
    message: Annotated[str, Field(description="Human-readable error message")]
