"""
Shared fixtures for the gateway tests.

Provides sample domain entities and a provider container whose
ports are MagicMocks constrained to the port ABCs.
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from folio_gateway.domain.portfolio.entities import Instrument, Quote, WeightedName
from folio_gateway.domain.portfolio.ports import (
    AccountProvider,
    ActivityProvider,
    FxProvider,
    HoldingsProvider,
    MarketDataProvider,
    PerformanceProvider,
    SettingsProvider,
)
from folio_gateway.interfaces.portfolio.dependencies import ProviderContainer
from folio_gateway.main import create_app


@pytest.fixture
def instrument() -> Instrument:
    return Instrument(
        id="AAPL",
        symbol="AAPL",
        currency="USD",
        name="Apple Inc.",
        asset_class="EQUITY",
        asset_subclass="STOCK",
        countries=(WeightedName(name="United States", weight=Decimal("1")),),
        sectors=(WeightedName(name="Technology", weight=Decimal("1")),),
    )


@pytest.fixture
def quote() -> Quote:
    return Quote(
        id="AAPL_2024-03-01",
        symbol="AAPL",
        timestamp=datetime(2024, 3, 1, 21, 0, tzinfo=timezone.utc),
        open=Decimal("179.55"),
        high=Decimal("180.53"),
        low=Decimal("177.38"),
        close=Decimal("179.66"),
        adjclose=Decimal("179.66"),
        volume=Decimal("73488000"),
        currency="USD",
        data_source="YAHOO",
    )


@pytest.fixture
def providers() -> ProviderContainer:
    """Mock providers constrained to the port ABCs: base currency EUR, no data."""
    container = ProviderContainer(
        accounts=MagicMock(spec=AccountProvider),
        holdings=MagicMock(spec=HoldingsProvider),
        fx=MagicMock(spec=FxProvider),
        settings=MagicMock(spec=SettingsProvider),
        market_data=MagicMock(spec=MarketDataProvider),
        performance=MagicMock(spec=PerformanceProvider),
        activities=MagicMock(spec=ActivityProvider),
    )
    container.settings.get_base_currency.return_value = "EUR"
    container.accounts.get_all_accounts.return_value = []
    container.holdings.get_holdings.return_value = []
    return container


@pytest.fixture
def client(providers: ProviderContainer) -> TestClient:
    """TestClient over an app wired to the mock providers."""
    return TestClient(create_app(providers=providers), raise_server_exceptions=False)
