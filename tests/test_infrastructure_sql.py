"""
Tests for the SQL provider adapters.

Runs every adapter against an in-memory SQLite store built with
create_schema. No external database needed.
"""

import json
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from folio_gateway.domain.portfolio.entities import MonetaryPair, WeightedName
from folio_gateway.domain.portfolio.errors import ProviderError, SymbolNotFoundError
from folio_gateway.infrastructure.portfolio.account_repository import (
    AccountRepositoryAdapter,
)
from folio_gateway.infrastructure.portfolio.activity_repository import (
    ActivityRepositoryAdapter,
)
from folio_gateway.infrastructure.portfolio.exchange_rate_repository import (
    ExchangeRateRepositoryAdapter,
)
from folio_gateway.infrastructure.portfolio.holdings_repository import (
    HoldingsRepositoryAdapter,
)
from folio_gateway.infrastructure.portfolio.market_data_repository import (
    MarketDataRepositoryAdapter,
)
from folio_gateway.infrastructure.portfolio.performance_repository import (
    PerformanceRepositoryAdapter,
)
from folio_gateway.infrastructure.portfolio.schema import create_schema
from folio_gateway.infrastructure.portfolio.settings_repository import (
    SettingsRepositoryAdapter,
)
from folio_gateway.interfaces.portfolio.dependencies import build_sql_providers
from folio_gateway.main import create_app


def _memory_engine():
    return create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
def engine():
    engine = _memory_engine()
    create_schema(engine)
    yield engine
    engine.dispose()


def _insert(engine, table: str, rows: list[dict]) -> None:
    columns = list(rows[0])
    sql = text(
        f"INSERT INTO {table} ({', '.join(columns)}) "
        f"VALUES ({', '.join(':' + c for c in columns)})"
    )
    with engine.begin() as conn:
        conn.execute(sql, rows)


class TestAccountRepository:
    def test_ordered_by_name(self, engine) -> None:
        _insert(
            engine,
            "accounts",
            [
                {"id": "A2", "name": "Zeta", "account_type": "SECURITIES",
                 "currency": "USD", "is_active": 1},
                {"id": "A1", "name": "Alpha", "account_type": "CASH",
                 "currency": "EUR", "is_active": 0},
            ],
        )

        accounts = AccountRepositoryAdapter(engine).get_all_accounts()

        assert [a.id for a in accounts] == ["A1", "A2"]
        assert accounts[0].is_active is False
        assert accounts[1].currency == "USD"

    def test_empty(self, engine) -> None:
        assert AccountRepositoryAdapter(engine).get_all_accounts() == []


class TestSettingsRepository:
    def test_base_currency(self, engine) -> None:
        _insert(engine, "app_settings", [{"setting_key": "base_currency", "setting_value": "EUR"}])
        assert SettingsRepositoryAdapter(engine).get_base_currency() == "EUR"

    def test_missing_setting(self, engine) -> None:
        assert SettingsRepositoryAdapter(engine).get_base_currency() is None

    def test_blank_setting(self, engine) -> None:
        _insert(engine, "app_settings", [{"setting_key": "base_currency", "setting_value": "  "}])
        assert SettingsRepositoryAdapter(engine).get_base_currency() is None


class TestExchangeRateRepository:
    def test_latest_per_pair_and_source(self, engine) -> None:
        _insert(
            engine,
            "exchange_rates",
            [
                {"id": "1", "from_currency": "USD", "to_currency": "EUR", "rate": "0.90",
                 "source": "ECB", "timestamp": "2024-02-29T16:00:00Z"},
                {"id": "2", "from_currency": "USD", "to_currency": "EUR", "rate": "0.92",
                 "source": "ECB", "timestamp": "2024-03-01T16:00:00Z"},
                {"id": "3", "from_currency": "USD", "to_currency": "EUR", "rate": "0.91",
                 "source": "YAHOO", "timestamp": "2024-03-01T12:00:00Z"},
            ],
        )

        rates = ExchangeRateRepositoryAdapter(engine).get_latest_exchange_rates()

        assert [(r.source, r.rate) for r in rates] == [
            ("ECB", Decimal("0.92")),
            ("YAHOO", Decimal("0.91")),
        ]
        assert rates[0].timestamp == datetime(2024, 3, 1, 16, 0, tzinfo=timezone.utc)


QUOTE_ROW = {
    "symbol": "AAPL",
    "open": "179.55",
    "high": "180.53",
    "low": "177.38",
    "adjclose": "179.66",
    "volume": "73488000",
    "currency": "USD",
    "data_source": "YAHOO",
}


class TestMarketDataRepository:
    @pytest.fixture(autouse=True)
    def seed(self, engine) -> None:
        _insert(
            engine,
            "assets",
            [
                {"id": "AAPL", "symbol": "AAPL", "name": "Apple Inc.", "currency": "USD",
                 "exchange": "NMS", "quote_type": "EQUITY"},
                {"id": "AAPLW", "symbol": "AAPLW", "name": "Apple Warrant", "currency": "USD",
                 "exchange": "NMS", "quote_type": "WARRANT"},
                {"id": "MAPP", "symbol": "MAPP", "name": "Mapping Corp", "currency": "USD",
                 "exchange": "NYQ", "quote_type": "EQUITY"},
                {"id": "PCT", "symbol": "PCT", "name": "100% Growth", "currency": "USD",
                 "exchange": "NYQ", "quote_type": "EQUITY"},
            ],
        )
        _insert(
            engine,
            "quotes",
            [
                {**QUOTE_ROW, "id": "AAPL_2024-02-29", "timestamp": "2024-02-29T21:00:00Z",
                 "close": "177.10"},
                {**QUOTE_ROW, "id": "AAPL_2024-03-01", "timestamp": "2024-03-01T21:00:00Z",
                 "close": "179.66"},
            ],
        )

    def test_search_ranks_exact_then_prefix(self, engine) -> None:
        results = MarketDataRepositoryAdapter(engine).search_symbol("aapl")
        assert [r.symbol for r in results] == ["AAPL", "AAPLW"]
        assert results[0].short_name == "Apple Inc."

    def test_search_matches_names(self, engine) -> None:
        results = MarketDataRepositoryAdapter(engine).search_symbol("app")
        assert [r.symbol for r in results] == ["AAPL", "AAPLW", "MAPP"]

    def test_search_escapes_wildcards(self, engine) -> None:
        results = MarketDataRepositoryAdapter(engine).search_symbol("%")
        assert [r.symbol for r in results] == ["PCT"]

    def test_blank_search(self, engine) -> None:
        assert MarketDataRepositoryAdapter(engine).search_symbol("   ") == []

    def test_latest_quote(self, engine) -> None:
        quote = MarketDataRepositoryAdapter(engine).get_latest_quote("AAPL")
        assert quote.id == "AAPL_2024-03-01"
        assert quote.close == Decimal("179.66")

    def test_unknown_symbol(self, engine) -> None:
        with pytest.raises(SymbolNotFoundError):
            MarketDataRepositoryAdapter(engine).get_latest_quote("ZZZZ")

    def test_history_oldest_first(self, engine) -> None:
        quotes = MarketDataRepositoryAdapter(engine).get_historical_quotes("AAPL")
        assert [q.id for q in quotes] == ["AAPL_2024-02-29", "AAPL_2024-03-01"]


class TestActivityRepository:
    @pytest.fixture(autouse=True)
    def seed(self, engine) -> None:
        _insert(
            engine,
            "activities",
            [
                {"id": "act-1", "account_id": "A1", "activity_type": "DEPOSIT",
                 "activity_date": "2024-01-02T09:30:00Z", "asset_id": None,
                 "quantity": None, "unit_price": None, "currency": "USD",
                 "fee": None, "amount": "5000"},
                {"id": "act-2", "account_id": "A1", "activity_type": "BUY",
                 "activity_date": "2024-01-05T15:00:00Z", "asset_id": "AAPL",
                 "quantity": "10", "unit_price": "185", "currency": "USD",
                 "fee": "1", "amount": None},
                {"id": "act-3", "account_id": "A2", "activity_type": "DEPOSIT",
                 "activity_date": "2024-01-03T10:00:00Z", "asset_id": None,
                 "quantity": None, "unit_price": None, "currency": "EUR",
                 "fee": None, "amount": "1000"},
            ],
        )

    def test_all_newest_first(self, engine) -> None:
        activities = ActivityRepositoryAdapter(engine).get_activities()
        assert [a.id for a in activities] == ["act-2", "act-3", "act-1"]

    def test_for_account(self, engine) -> None:
        activities = ActivityRepositoryAdapter(engine).get_activities_for_account("A1")
        assert [a.id for a in activities] == ["act-2", "act-1"]
        assert activities[0].quantity == Decimal("10")
        assert activities[1].quantity is None


HOLDING_ROW = {
    "account_id": "A1",
    "base_currency": "EUR",
    "holding_type": "SECURITY",
    "quantity": "10",
    "open_date": "2023-06-01T00:00:00Z",
    "local_currency": "USD",
    "fx_rate": "0.92",
    "market_value_local": "1250",
    "market_value_base": "1150",
    "weight": "0.5",
    "as_of_date": "2024-03-01",
}


class TestHoldingsRepository:
    @pytest.fixture(autouse=True)
    def seed(self, engine) -> None:
        _insert(
            engine,
            "assets",
            [
                {"id": "AAPL", "symbol": "AAPL", "name": "Apple Inc.", "currency": "USD",
                 "asset_class": "EQUITY", "asset_sub_class": "STOCK",
                 "countries": json.dumps([{"name": "United States", "weight": 1}]),
                 "sectors": None},
            ],
        )
        _insert(
            engine,
            "holding_valuations",
            [
                {**HOLDING_ROW, "id": "h-aapl", "asset_id": "AAPL", "position": 1,
                 "cost_basis_local": "1000", "cost_basis_base": "920"},
                {**HOLDING_ROW, "id": "h-cash", "asset_id": None, "position": 0,
                 "holding_type": "CASH",
                 "cost_basis_local": None, "cost_basis_base": None},
                {**HOLDING_ROW, "id": "h-aapl", "asset_id": "AAPL", "position": 1,
                 "base_currency": "USD",
                 "cost_basis_local": "1000", "cost_basis_base": "1000"},
            ],
        )

    def test_holdings_for_base_currency(self, engine) -> None:
        holdings = HoldingsRepositoryAdapter(engine).get_holdings("A1", "EUR")

        assert [h.id for h in holdings] == ["h-cash", "h-aapl"]
        cash, aapl = holdings
        assert cash.instrument is None
        assert cash.cost_basis is None
        assert aapl.market_value == MonetaryPair(local=Decimal("1250"), base=Decimal("1150"))
        assert aapl.cost_basis == MonetaryPair(local=Decimal("1000"), base=Decimal("920"))
        assert aapl.unrealized_gain is None
        assert aapl.as_of_date == date(2024, 3, 1)
        assert aapl.instrument.countries == (
            WeightedName(name="United States", weight=Decimal("1")),
        )
        assert aapl.instrument.sectors is None

    def test_unknown_account(self, engine) -> None:
        assert HoldingsRepositoryAdapter(engine).get_holdings("A9", "EUR") == []


VALUATION_ROW = {
    "account_currency": "USD",
    "base_currency": "EUR",
}


class TestPerformanceRepository:
    @pytest.fixture(autouse=True)
    def seed(self, engine) -> None:
        _insert(
            engine,
            "performance_metrics",
            [
                {"id": "A1", "currency": "EUR", "period_start_date": "2023-01-01",
                 "period_end_date": "2024-01-01", "cumulative_twr": "0.12",
                 "annualized_twr": "0.06", "gain_loss_amount": "1500",
                 "simple_return": "0.11", "annualized_simple_return": "0.055",
                 "volatility": "0.18", "max_drawdown": "-0.21"},
            ],
        )
        _insert(
            engine,
            "daily_account_valuation",
            [
                {**VALUATION_ROW, "account_id": "A1", "valuation_date": "2024-02-28",
                 "fx_rate_to_base": "1", "total_value": "9000", "net_contribution": "9000"},
                {**VALUATION_ROW, "account_id": "A1", "valuation_date": "2024-02-29",
                 "fx_rate_to_base": "1", "total_value": "10000", "net_contribution": "9000"},
                {**VALUATION_ROW, "account_id": "A1", "valuation_date": "2024-03-01",
                 "fx_rate_to_base": "1", "total_value": "10500", "net_contribution": "9200"},
                {**VALUATION_ROW, "account_id": "A2", "valuation_date": "2024-03-01",
                 "fx_rate_to_base": "0.5", "total_value": "5000", "net_contribution": "5000"},
            ],
        )

    def test_stored_metrics(self, engine) -> None:
        metrics = PerformanceRepositoryAdapter(engine).calculate_performance("A1")
        assert metrics.cumulative_twr == Decimal("0.12")
        assert metrics.max_drawdown == Decimal("-0.21")
        assert metrics.period_start_date == date(2023, 1, 1)

    def test_stored_metrics_with_matching_period(self, engine) -> None:
        metrics = PerformanceRepositoryAdapter(engine).calculate_performance(
            "A1", start_date=date(2023, 1, 1), end_date=date(2024, 1, 1)
        )
        assert metrics.id == "A1"

    def test_missing_metrics(self, engine) -> None:
        with pytest.raises(ProviderError, match="No performance data for A9"):
            PerformanceRepositoryAdapter(engine).calculate_performance("A9")

    def test_simple_performance(self, engine) -> None:
        a2, a1 = PerformanceRepositoryAdapter(engine).calculate_simple_performance(
            ["A2", "A1", "A3"]
        )

        assert a1.account_id == "A1"
        assert a1.total_value == Decimal("10500")
        assert a1.total_gain_loss_amount == Decimal("1300")
        assert float(a1.cumulative_return_percent) == pytest.approx(1300 / 9200)
        assert a1.day_gain_loss_amount == Decimal("300")
        assert float(a1.day_return_percent) == pytest.approx(0.03)
        assert float(a1.portfolio_weight) == pytest.approx(10500 / 13000)

        assert a2.account_id == "A2"
        assert a2.day_gain_loss_amount is None
        assert a2.day_return_percent is None
        assert a2.cumulative_return_percent == 0
        assert float(a2.portfolio_weight) == pytest.approx(2500 / 13000)

    def test_simple_performance_empty(self, engine) -> None:
        assert PerformanceRepositoryAdapter(engine).calculate_simple_performance([]) == []


def test_missing_table_becomes_provider_error() -> None:
    """Database failures surface as ProviderError, never as SQLAlchemy errors."""
    engine = _memory_engine()
    with pytest.raises(ProviderError, match="accounts store unavailable"):
        AccountRepositoryAdapter(engine).get_all_accounts()
    engine.dispose()


class TestMalformedRows:
    """A row that cannot be converted fails its own call as ProviderError."""

    def test_bad_holding_timestamp(self, engine) -> None:
        _insert(
            engine,
            "holding_valuations",
            [{**HOLDING_ROW, "id": "h-bad", "asset_id": None, "position": 0,
              "open_date": "garbage"}],
        )
        with pytest.raises(ProviderError, match="holdings store returned a malformed row"):
            HoldingsRepositoryAdapter(engine).get_holdings("A1", "EUR")

    def test_bad_instrument_weights(self, engine) -> None:
        _insert(
            engine,
            "assets",
            [{"id": "XYZ", "symbol": "XYZ", "currency": "USD",
              "countries": "not json"}],
        )
        _insert(
            engine,
            "holding_valuations",
            [{**HOLDING_ROW, "id": "h-xyz", "asset_id": "XYZ", "position": 0}],
        )
        with pytest.raises(ProviderError):
            HoldingsRepositoryAdapter(engine).get_holdings("A1", "EUR")

    def test_bad_rate(self, engine) -> None:
        _insert(
            engine,
            "exchange_rates",
            [{"id": "1", "from_currency": "USD", "to_currency": "EUR", "rate": "n/a",
              "source": "ECB", "timestamp": "2024-03-01T16:00:00Z"}],
        )
        with pytest.raises(ProviderError, match="exchange rates"):
            ExchangeRateRepositoryAdapter(engine).get_latest_exchange_rates()

    def test_all_accounts_holdings_skip_account_with_bad_row(self, engine) -> None:
        """One account's corrupt valuation must not hide the other accounts."""
        _insert(engine, "app_settings", [{"setting_key": "base_currency", "setting_value": "EUR"}])
        _insert(
            engine,
            "accounts",
            [
                {"id": "A1", "name": "Alpha", "account_type": "SECURITIES",
                 "currency": "USD", "is_active": 1},
                {"id": "A2", "name": "Beta", "account_type": "SECURITIES",
                 "currency": "USD", "is_active": 1},
            ],
        )
        _insert(
            engine,
            "holding_valuations",
            [
                {**HOLDING_ROW, "id": "h1", "asset_id": None, "position": 0},
                {**HOLDING_ROW, "id": "h2", "account_id": "A2", "asset_id": None,
                 "position": 0, "open_date": "garbage"},
            ],
        )
        client = TestClient(
            create_app(providers=build_sql_providers(engine)),
            raise_server_exceptions=False,
        )

        response = client.get("/api/portfolio/holdings")

        assert response.status_code == 200
        body = response.json()
        assert "error" not in body
        assert body["baseCurrency"] == "EUR"
        assert [h["id"] for h in body["holdings"]] == ["h1"]
