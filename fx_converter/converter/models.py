"""
Data models for the currency conversion form.
"""

from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class CurrencyOption(BaseModel):
    """One entry of a currency selector."""

    model_config = ConfigDict(frozen=True)

    code: Annotated[str, Field(description="Currency code, empty for placeholder")]
    label: Annotated[str, Field(description="Text shown to the user")]


PLACEHOLDER_OPTION = CurrencyOption(code="", label="Select Currency")


class ConversionRequest(BaseModel):
    """Model for a single conversion attempt."""

    model_config = ConfigDict(frozen=True)

    from_currency: Annotated[str, Field(min_length=1, description="Source currency")]
    to_currency: Annotated[str, Field(min_length=1, description="Target currency")]
    amount: Annotated[
        float, Field(gt=0, allow_inf_nan=False, description="Amount to convert")
    ]


class ConversionResult(BaseModel):
    """Model for a rendered conversion outcome."""

    model_config = ConfigDict(frozen=True)

    amount: Annotated[float, Field(description="Original amount")]
    from_currency: Annotated[str, Field(description="Source currency code")]
    to_currency: Annotated[str, Field(description="Target currency code")]
    converted_amount: Annotated[float, Field(description="Converted amount")]
    rate: Annotated[float, Field(description="Target units per source unit")]


class LastConversion(BaseModel):
    """Most recent successful network conversion."""

    model_config = ConfigDict(frozen=True)

    request: ConversionRequest
    rate: float


class DisplayKind(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    RESULT = "result"


class DisplayRegion(BaseModel):
    """Content of the results area: a status, an error or a result."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    kind: DisplayKind = DisplayKind.IDLE
    message: str | None = None
    headline: str | None = None
    details: str | None = None
    rate_line: str | None = None

    def as_text(self) -> str:
        """Render the region as plain text lines."""
        match self.kind:
            case DisplayKind.LOADING:
                return self.message or ""
            case DisplayKind.ERROR:
                return f"Error: {self.message}"
            case DisplayKind.RESULT:
                return "\n".join(
                    line
                    for line in (self.headline, self.details, self.rate_line)
                    if line
                )
            case _:
                return ""
