"""
Port interfaces (ABCs) for the portfolio bounded context.

Ports define the capabilities the gateway requires from the internal
portfolio services. Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.

Every method may raise a PortfolioDomainError subclass on failure.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from folio_gateway.domain.portfolio.entities import (
    Account,
    Activity,
    ExchangeRate,
    Holding,
    PerformanceMetrics,
    Quote,
    QuoteSummary,
    SimplePerformanceMetrics,
)


class AccountProvider(ABC):
    """Port for listing accounts."""

    @abstractmethod
    def get_all_accounts(self) -> list[Account]:
        """Return every account known to the portfolio."""
        raise NotImplementedError


class HoldingsProvider(ABC):
    """Port for the holdings valuation engine."""

    @abstractmethod
    def get_holdings(self, account_id: str, base_currency: str) -> list[Holding]:
        """Return the valued holdings of one account.

        Args:
            account_id: Account whose holdings are requested.
            base_currency: Currency the base side of every pair is expressed in.

        Returns:
            List of Holding for the account, in engine order.
        """
        raise NotImplementedError


class FxProvider(ABC):
    """Port for currency conversion rates."""

    @abstractmethod
    def get_latest_exchange_rates(self) -> list[ExchangeRate]:
        """Return the latest rate per currency pair per rate source."""
        raise NotImplementedError


class SettingsProvider(ABC):
    """Port for reading installation settings."""

    @abstractmethod
    def get_base_currency(self) -> Optional[str]:
        """Return the configured base currency, or None when unset."""
        raise NotImplementedError


class MarketDataProvider(ABC):
    """Port for symbol search and quote lookups."""

    @abstractmethod
    def search_symbol(self, query: str) -> list[QuoteSummary]:
        """Return symbols matching a free-text query."""
        raise NotImplementedError

    @abstractmethod
    def get_latest_quote(self, symbol: str) -> Quote:
        """Return the most recent quote for a symbol.

        Raises:
            SymbolNotFoundError: If no quote exists for the symbol.
        """
        raise NotImplementedError

    @abstractmethod
    def get_historical_quotes(self, symbol: str) -> list[Quote]:
        """Return the quote history of a symbol, ordered by the provider."""
        raise NotImplementedError


class PerformanceProvider(ABC):
    """Port for the performance/returns engine."""

    @abstractmethod
    def calculate_performance(
        self,
        subject_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> PerformanceMetrics:
        """Return performance metrics for one subject.

        Args:
            subject_id: Identifier of the subject, e.g. an account id.
            start_date: Period start. None means the provider's default.
            end_date: Period end. None means the provider's default.
        """
        raise NotImplementedError

    @abstractmethod
    def calculate_simple_performance(
        self, account_ids: list[str]
    ) -> list[SimplePerformanceMetrics]:
        """Return simple performance for many accounts in one batch."""
        raise NotImplementedError


class ActivityProvider(ABC):
    """Port for the activity ledger."""

    @abstractmethod
    def get_activities(self) -> list[Activity]:
        """Return every activity across all accounts."""
        raise NotImplementedError

    @abstractmethod
    def get_activities_for_account(self, account_id: str) -> list[Activity]:
        """Return the activities of a single account."""
        raise NotImplementedError
