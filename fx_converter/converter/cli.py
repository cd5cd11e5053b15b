"""
One-shot console conversion: fill the form, submit and print the result.
"""

import logging

from ..rates_client.service import ExchangeRateClient
from .controller import ConversionController

logger = logging.getLogger(__name__)


async def run_conversion(
    controller: ConversionController, amount: str, from_currency: str, to_currency: str
) -> str:
    """Drive the controller through a single conversion and return the display text."""
    await controller.load_catalog()
    if not controller.catalog:
        return controller.display.as_text()

    controller.select_from_currency(from_currency.upper())
    controller.select_to_currency(to_currency.upper())
    controller.set_amount(amount)

    await controller.submit()
    return controller.display.as_text()


async def main(args: list[str]) -> None:
    """Main entry point for the console converter."""
    if len(args) != 3:
        raise SystemExit("Usage: python run.py convert AMOUNT FROM TO")

    amount, from_currency, to_currency = args
    controller = ConversionController(ExchangeRateClient())
    print(await run_conversion(controller, amount, from_currency, to_currency))
