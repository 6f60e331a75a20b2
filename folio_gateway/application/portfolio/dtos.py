"""
Data Transfer Objects for the portfolio application layer.

Queries carry request parameters into the aggregation service;
results carry provider data back to the interface layer.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from typing import Union

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


@dataclass(frozen=True)
class HoldingsQuery:
    """Input DTO for the holdings operation.

    Attributes:
        account_id: Restrict to one account. None means all accounts.
    """

    account_id: str | None = None


@dataclass(frozen=True)
class ActivitiesQuery:
    """Input DTO for the activities operation.

    Attributes:
        account_id: Restrict to one account. None means all accounts.
    """

    account_id: str | None = None


@dataclass(frozen=True)
class ErrorResult:
    """A failed operation, collapsed into one human-readable message."""

    error: str


@dataclass(frozen=True)
class HoldingsResult:
    """Holdings of one or all accounts, valued in the base currency."""

    holdings: list[Holding]
    base_currency: str


@dataclass(frozen=True)
class AccountsResult:
    accounts: list[Account]


@dataclass(frozen=True)
class ExchangeRatesResult:
    rates: list[ExchangeRate]


@dataclass(frozen=True)
class BaseCurrencyResult:
    base_currency: str


@dataclass(frozen=True)
class MarketSearchResult:
    results: list[QuoteSummary]


@dataclass(frozen=True)
class QuoteResult:
    quote: Quote


@dataclass(frozen=True)
class HistoricalQuotesResult:
    """Quote history for a symbol, in provider order."""

    symbol: str
    quotes: list[Quote]


@dataclass(frozen=True)
class AccountPerformanceResult:
    account_id: str
    performance: PerformanceMetrics


@dataclass(frozen=True)
class PerformanceSummaryResult:
    performances: list[SimplePerformanceMetrics]


@dataclass(frozen=True)
class ActivitiesResult:
    activities: list[Activity]


HoldingsOutcome = Union[HoldingsResult, ErrorResult]
AccountsOutcome = Union[AccountsResult, ErrorResult]
ExchangeRatesOutcome = Union[ExchangeRatesResult, ErrorResult]
BaseCurrencyOutcome = Union[BaseCurrencyResult, ErrorResult]
MarketSearchOutcome = Union[MarketSearchResult, ErrorResult]
QuoteOutcome = Union[QuoteResult, ErrorResult]
HistoricalQuotesOutcome = Union[HistoricalQuotesResult, ErrorResult]
AccountPerformanceOutcome = Union[AccountPerformanceResult, ErrorResult]
PerformanceSummaryOutcome = Union[PerformanceSummaryResult, ErrorResult]
ActivitiesOutcome = Union[ActivitiesResult, ErrorResult]
