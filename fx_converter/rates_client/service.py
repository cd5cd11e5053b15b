"""
Client for the Frankfurter exchange-rate REST API.
"""

import asyncio
import logging
from typing import Any

import aiohttp

from .settings import rates_client_settings

logger = logging.getLogger(__name__)


class RatesServiceError(Exception):
    """Raised when the exchange-rate service cannot answer a request."""


class ExchangeRateClient:
    """Thin async client for the currency list and conversion endpoints."""

    def __init__(
        self, base_url: str | None = None, timeout: float | None = None
    ) -> None:
        """Initialize the client."""
        self.base_url = (base_url or rates_client_settings.rates_api_url).rstrip("/")
        self.timeout = timeout or rates_client_settings.request_timeout

    async def list_currencies(self) -> dict[str, str]:
        """
        Fetch the supported currencies.

        Returns:
            Mapping of currency code to display name

        Raises:
            RatesServiceError: On transport failure, non-success status or
                an unexpected response body
        """
        data = await self._get_json("/currencies")

        if not isinstance(data, dict) or not all(
            isinstance(code, str) and isinstance(name, str)
            for code, name in data.items()
        ):
            raise RatesServiceError("Unexpected currency list payload")

        logger.info(f"Fetched {len(data)} currencies from exchange-rate service")
        return data

    async def convert(
        self, amount: float, from_currency: str, to_currency: str
    ) -> float:
        """
        Convert an amount between two currencies.

        The service scales its answer by ``amount``, so the value returned is
        the converted amount, not the per-unit rate.

        Args:
            amount: Amount in the source currency
            from_currency: Source currency code
            to_currency: Target currency code

        Returns:
            The converted amount in the target currency

        Raises:
            RatesServiceError: On transport failure, non-success status or
                when the body has no rate for ``to_currency``
        """
        data = await self._get_json(
            "/latest",
            params={"amount": str(amount), "from": from_currency, "to": to_currency},
        )

        try:
            converted_amount = float(data["rates"][to_currency])
        except (KeyError, TypeError, ValueError) as e:
            raise RatesServiceError(
                f"No rate for {to_currency} in conversion response"
            ) from e

        logger.debug(
            f"Converted {amount} {from_currency} to {converted_amount} {to_currency}"
        )
        return converted_amount

    async def _get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        """Issue a GET request and decode the JSON body."""
        url = f"{self.base_url}{path}"

        try:
            async with (
                aiohttp.ClientSession() as session,
                session.get(
                    url,
                    params=params,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response,
            ):
                response.raise_for_status()
                return await response.json()
        except aiohttp.ClientResponseError as e:
            raise RatesServiceError(f"HTTP error! status: {e.status}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise RatesServiceError(f"Request to {url} failed: {e}") from e
