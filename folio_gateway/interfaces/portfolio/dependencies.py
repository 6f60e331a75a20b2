"""
Dependency injection for the portfolio bounded context.

The provider container holds one long-lived handle per provider
port. It is built once by the composition root, stored on the
application state, and turned into an AggregationService for each
request through FastAPI's dependency system.
"""

from dataclasses import dataclass

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from folio_gateway.application.portfolio.aggregation_service import (
    AggregationService,
)
from folio_gateway.domain.portfolio.ports import (
    AccountProvider,
    ActivityProvider,
    FxProvider,
    HoldingsProvider,
    MarketDataProvider,
    PerformanceProvider,
    SettingsProvider,
)
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
from folio_gateway.infrastructure.portfolio.settings_repository import (
    SettingsRepositoryAdapter,
)


@dataclass(frozen=True)
class ProviderContainer:
    """One handle per provider capability the gateway consumes."""

    accounts: AccountProvider
    holdings: HoldingsProvider
    fx: FxProvider
    settings: SettingsProvider
    market_data: MarketDataProvider
    performance: PerformanceProvider
    activities: ActivityProvider


def build_db_engine(database_url: str) -> Engine:
    """Build a SQLAlchemy engine for the shared portfolio store."""
    return create_engine(database_url, pool_pre_ping=True)


def build_sql_providers(engine: Engine) -> ProviderContainer:
    """Wire every provider port to its SQL adapter over one engine."""
    return ProviderContainer(
        accounts=AccountRepositoryAdapter(engine=engine),
        holdings=HoldingsRepositoryAdapter(engine=engine),
        fx=ExchangeRateRepositoryAdapter(engine=engine),
        settings=SettingsRepositoryAdapter(engine=engine),
        market_data=MarketDataRepositoryAdapter(engine=engine),
        performance=PerformanceRepositoryAdapter(engine=engine),
        activities=ActivityRepositoryAdapter(engine=engine),
    )


def get_aggregation_service(request: Request) -> AggregationService:
    """Build the AggregationService from the application's provider container."""
    providers: ProviderContainer = request.app.state.providers
    return AggregationService(
        account_provider=providers.accounts,
        holdings_provider=providers.holdings,
        fx_provider=providers.fx,
        settings_provider=providers.settings,
        market_data_provider=providers.market_data,
        performance_provider=providers.performance,
        activity_provider=providers.activities,
    )
