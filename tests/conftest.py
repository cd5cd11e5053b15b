"""
Test configuration for the currency converter tests.
"""

import asyncio
import sys
from pathlib import Path

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

# Add project root to path before importing our modules
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Import our modules after path setup
from fx_converter.converter.controller import ConversionController  # noqa: E402
from fx_converter.rates_client.service import RatesServiceError  # noqa: E402


class FakeRatesClient:
    """In-memory stand-in for ExchangeRateClient that records requests."""

    def __init__(
        self,
        currencies: dict[str, str] | None = None,
        conversions: dict[tuple[str, str], float] | None = None,
        fail_currencies: bool = False,
    ):
        self.currencies = currencies or {}
        self.conversions = conversions or {}
        self.fail_currencies = fail_currencies
        self.requests: list[tuple[float, str, str]] = []

    async def list_currencies(self) -> dict[str, str]:
        if self.fail_currencies:
            raise RatesServiceError("HTTP error! status: 503")
        return dict(self.currencies)

    async def convert(
        self, amount: float, from_currency: str, to_currency: str
    ) -> float:
        self.requests.append((amount, from_currency, to_currency))
        try:
            return self.conversions[(from_currency, to_currency)]
        except KeyError:
            raise RatesServiceError("HTTP error! status: 404") from None


class GatedRatesClient(FakeRatesClient):
    """Fake client whose calls block until the test releases them."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.catalog_gate = asyncio.Event()
        self.conversion_gates: list[asyncio.Event] = []

    async def list_currencies(self) -> dict[str, str]:
        await self.catalog_gate.wait()
        return await super().list_currencies()

    async def convert(
        self, amount: float, from_currency: str, to_currency: str
    ) -> float:
        gate = asyncio.Event()
        self.conversion_gates.append(gate)
        await gate.wait()
        return await super().convert(amount, from_currency, to_currency)

    async def wait_for_conversions(self, count: int) -> None:
        """Yield until ``count`` conversions are blocked on their gates."""
        while len(self.conversion_gates) < count:
            await asyncio.sleep(0)


@pytest.fixture
def sample_currencies():
    """Provide a small currency catalog."""
    return {
        "USD": "US Dollar",
        "EUR": "Euro",
        "GBP": "British Pound",
        "JPY": "Japanese Yen",
    }


@pytest.fixture
def fake_client_factory():
    """Provide the fake client class for tests that need a custom setup."""
    return FakeRatesClient


@pytest.fixture
def fake_client(sample_currencies):
    """Provide a fake client with USD/EUR conversions."""
    return FakeRatesClient(
        currencies=sample_currencies,
        conversions={
            ("USD", "EUR"): 92.15,
            ("EUR", "USD"): 10.85,
        },
    )


@pytest.fixture
def gated_client(sample_currencies):
    """Provide a gated fake client with its catalog call already released."""
    client = GatedRatesClient(
        currencies=sample_currencies,
        conversions={
            ("USD", "EUR"): 92.15,
            ("USD", "GBP"): 7.9,
        },
    )
    client.catalog_gate.set()
    return client


@pytest.fixture
def controller(fake_client):
    """Provide a controller wired to the fake client."""
    return ConversionController(fake_client, locale="en_US")


@pytest_asyncio.fixture
async def rates_server():
    """Run a local HTTP server mimicking the exchange-rate service."""

    async def currencies(_: web.Request) -> web.Response:
        return web.json_response({"EUR": "Euro", "USD": "US Dollar"})

    async def latest(request: web.Request) -> web.Response:
        query = request.query
        if query["from"] == "ZZZ":
            return web.json_response({"message": "not found"}, status=404)
        if query["to"] == "NOP":
            return web.json_response({"amount": 1.0, "rates": {}})
        return web.json_response(
            {
                "amount": float(query["amount"]),
                "base": query["from"],
                "rates": {query["to"]: 92.15},
            }
        )

    app = web.Application()
    app.router.add_get("/currencies", currencies)
    app.router.add_get("/latest", latest)

    server = TestServer(app)
    await server.start_server()
    try:
        yield server
    finally:
        await server.close()
