"""
Conversion form controller: state, validation gate and conversion commands.
"""

import asyncio
import logging
from typing import Final

from ..rates_client.service import ExchangeRateClient
from .formatting import RATE_PATTERN, format_money
from .models import (
    PLACEHOLDER_OPTION,
    ConversionRequest,
    ConversionResult,
    CurrencyOption,
    DisplayKind,
    DisplayRegion,
    LastConversion,
)
from .settings import converter_settings
from .validators import is_form_valid, parse_amount

MESSAGE_LOADING_CURRENCIES: Final[str] = "Loading currencies..."
MESSAGE_CONVERTING: Final[str] = "Converting..."
ERROR_CATALOG_LOAD: Final[str] = "Failed to load currencies. Please refresh the page."
ERROR_CONVERSION: Final[str] = "Failed to convert currency. Please try again."
ERROR_INVALID_INPUT: Final[str] = "Please fill in all fields with valid values."

logger = logging.getLogger(__name__)


class CurrencySelector:
    """A currency drop-down: its options and the selected code."""

    def __init__(self) -> None:
        self.options: list[CurrencyOption] = [PLACEHOLDER_OPTION]
        self.value = ""

    def populate(self, catalog: dict[str, str]) -> None:
        """Replace the options with the catalog sorted by code."""
        self.options = [PLACEHOLDER_OPTION] + [
            CurrencyOption(code=code, label=f"{code} - {name}")
            for code, name in sorted(catalog.items())
        ]
        self.value = ""

    def select(self, code: str) -> None:
        """Select ``code``, or clear the selection if it has no option."""
        self.value = code if any(o.code == code for o in self.options) else ""


class ConversionController:
    """Mediates between form input, the exchange-rate service and the display."""

    def __init__(self, client: ExchangeRateClient, locale: str | None = None) -> None:
        """Initialize the controller with an empty catalog."""
        self.client = client
        self.locale = locale or converter_settings.display_locale
        self.catalog: dict[str, str] = {}
        self.from_selector = CurrencySelector()
        self.to_selector = CurrencySelector()
        self.amount_text = ""
        self.can_submit = False
        self.loading = False
        self.display = DisplayRegion()
        self.last_conversion: LastConversion | None = None
        self._pending: set[asyncio.Task] = set()

    @property
    def from_currency(self) -> str:
        return self.from_selector.value

    @property
    def to_currency(self) -> str:
        return self.to_selector.value

    async def load_catalog(self) -> None:
        """
        Fetch the currency list and populate both selectors.

        Failures are logged and shown as an error; the selectors are left
        holding only the placeholder option.
        """
        self.show_loading(MESSAGE_LOADING_CURRENCIES)
        try:
            currencies = await self.client.list_currencies()
        except Exception as e:
            logger.error(f"Error loading currencies: {e}")
            self.catalog = {}
            self.from_selector.populate({})
            self.to_selector.populate({})
            self.hide_loading()
            self.show_error(ERROR_CATALOG_LOAD)
            self.validate()
            return

        self.catalog = dict(currencies)
        self.from_selector.populate(self.catalog)
        self.to_selector.populate(self.catalog)
        self._set_default_currencies()
        self.hide_loading()
        logger.info(f"Loaded {len(self.catalog)} currencies")

    def _set_default_currencies(self) -> None:
        if converter_settings.default_from_currency in self.catalog:
            self.from_selector.select(converter_settings.default_from_currency)
        if converter_settings.default_to_currency in self.catalog:
            self.to_selector.select(converter_settings.default_to_currency)
        self.validate()

    def validate(self) -> bool:
        """Enable or disable submission from the current field values."""
        self.can_submit = is_form_valid(
            self.from_currency, self.to_currency, self.amount_text
        )
        return self.can_submit

    def select_from_currency(self, code: str) -> None:
        self.from_selector.select(code)
        self.validate()

    def select_to_currency(self, code: str) -> None:
        self.to_selector.select(code)
        self.validate()

    def set_amount(self, text: str) -> None:
        self.amount_text = text
        self.validate()

    def build_request(self) -> ConversionRequest | None:
        """Build a request from the form fields, or None if they are invalid."""
        amount = parse_amount(self.amount_text)
        if not self.from_currency or not self.to_currency or not amount or amount <= 0:
            return None

        return ConversionRequest(
            from_currency=self.from_currency,
            to_currency=self.to_currency,
            amount=amount,
        )

    async def submit(self) -> ConversionResult | None:
        """Convert using the current form fields."""
        if (request := self.build_request()) is None:
            self.show_error(ERROR_INVALID_INPUT)
            return None

        return await self.convert(request)

    async def convert(self, request: ConversionRequest) -> ConversionResult | None:
        """
        Convert and render a request.

        Identity conversions are answered locally with a rate of 1. Any
        service failure is logged and shown as an error, leaving the last
        successful conversion untouched.

        Args:
            request: The conversion to perform

        Returns:
            ConversionResult: The rendered result, or None on failure
        """
        if request.from_currency == request.to_currency:
            result = ConversionResult(
                amount=request.amount,
                from_currency=request.from_currency,
                to_currency=request.to_currency,
                converted_amount=request.amount,
                rate=1.0,
            )
            self.render(result)
            self.validate()
            return result

        try:
            self.show_loading(MESSAGE_CONVERTING)
            self.can_submit = False

            converted_amount = await self.client.convert(
                request.amount, request.from_currency, request.to_currency
            )
            rate = converted_amount / request.amount

            result = ConversionResult(
                amount=request.amount,
                from_currency=request.from_currency,
                to_currency=request.to_currency,
                converted_amount=converted_amount,
                rate=rate,
            )
            self.last_conversion = LastConversion(request=request, rate=rate)
            self.render(result)
            return result
        except Exception as e:
            logger.error(f"Conversion error: {e}")
            self.show_error(ERROR_CONVERSION)
            return None
        finally:
            self.hide_loading()
            self.validate()

    def swap(self) -> asyncio.Task | None:
        """
        Exchange the selected currencies.

        When a conversion has already succeeded and an amount is present, a
        conversion in the new direction is scheduled without waiting for it.

        Returns:
            The scheduled conversion task, if any
        """
        from_value, to_value = self.from_currency, self.to_currency
        if not from_value or not to_value:
            return None

        self.from_selector.value = to_value
        self.to_selector.value = from_value
        self.validate()

        if self.last_conversion is None or not self.amount_text:
            return None

        task = asyncio.create_task(self.submit())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def wait_pending(self) -> None:
        """Wait for scheduled conversions to finish."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    def render(self, result: ConversionResult) -> None:
        """Show a conversion result in the display region."""
        to_name = self.catalog.get(result.to_currency, result.to_currency)
        formatted_amount = format_money(
            result.converted_amount, result.to_currency, self.locale
        )
        formatted_rate = format_money(
            result.rate, result.to_currency, self.locale, pattern=RATE_PATTERN
        )

        self.display = DisplayRegion(
            kind=DisplayKind.RESULT,
            headline=formatted_amount,
            details=(
                f"{_plain_number(result.amount)} {result.from_currency}"
                f" = {formatted_amount}"
            ),
            rate_line=f"1 {result.from_currency} = {formatted_rate} ({to_name})",
        )

    def show_loading(self, message: str = "Loading...") -> None:
        self.loading = True
        self.display = DisplayRegion(kind=DisplayKind.LOADING, message=message)

    def hide_loading(self) -> None:
        self.loading = False
        if self.display.kind == DisplayKind.LOADING:
            self.display = DisplayRegion()

    def show_error(self, message: str) -> None:
        self.display = DisplayRegion(kind=DisplayKind.ERROR, message=message)


def _plain_number(value: float) -> str:
    return str(int(value)) if value.is_integer() else str(value)
