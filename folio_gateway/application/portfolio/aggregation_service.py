"""
Aggregation service for the external portfolio API.

Answers each API query by calling exactly the providers it needs,
resolving the base currency once per request, and collapsing
provider failures into a single ErrorResult.

Side effects: None (read-only).
Failure cases: Domain errors raised by providers become ErrorResult.
    Partial failures during the all-accounts holdings fan-out are
    logged and skipped. Non-domain exceptions propagate.
"""

import logging

from folio_gateway.application.portfolio.collect import BestEffortCollector
from folio_gateway.application.portfolio.dtos import (
    AccountPerformanceOutcome,
    AccountPerformanceResult,
    AccountsOutcome,
    AccountsResult,
    ActivitiesOutcome,
    ActivitiesQuery,
    ActivitiesResult,
    BaseCurrencyOutcome,
    BaseCurrencyResult,
    ErrorResult,
    ExchangeRatesOutcome,
    ExchangeRatesResult,
    HistoricalQuotesOutcome,
    HistoricalQuotesResult,
    HoldingsOutcome,
    HoldingsQuery,
    HoldingsResult,
    MarketSearchOutcome,
    MarketSearchResult,
    PerformanceSummaryOutcome,
    PerformanceSummaryResult,
    QuoteOutcome,
    QuoteResult,
)
from folio_gateway.domain.portfolio.errors import (
    BaseCurrencyNotSetError,
    PortfolioDomainError,
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

logger = logging.getLogger(__name__)


class AggregationService:
    """Orchestrates provider ports into API results.

    Each public method returns either a result DTO or an ErrorResult,
    never a mix of data and per-item errors.
    """

    def __init__(
        self,
        account_provider: AccountProvider,
        holdings_provider: HoldingsProvider,
        fx_provider: FxProvider,
        settings_provider: SettingsProvider,
        market_data_provider: MarketDataProvider,
        performance_provider: PerformanceProvider,
        activity_provider: ActivityProvider,
        collector: BestEffortCollector | None = None,
    ) -> None:
        self._accounts = account_provider
        self._holdings = holdings_provider
        self._fx = fx_provider
        self._settings = settings_provider
        self._market_data = market_data_provider
        self._performance = performance_provider
        self._activities = activity_provider
        self._collector = collector or BestEffortCollector()

    # ── Holdings ─────────────────────────────────────────────────

    def get_holdings(self, query: HoldingsQuery) -> HoldingsOutcome:
        """Return holdings for one account or for all accounts.

        The base currency is resolved before any holdings call. With an
        account id, a provider failure is reported. Without one, each
        account is fetched in turn and failing accounts are skipped.

        Args:
            query: Optional account id restricting the result.

        Returns:
            HoldingsResult, or ErrorResult when the base currency is
            unset or a non-skippable call fails.
        """
        logger.info("Retrieving holdings: account_id=%s", query.account_id)

        try:
            base_currency = self._resolve_base_currency()
        except BaseCurrencyNotSetError as exc:
            return ErrorResult(error=exc.message)
        except PortfolioDomainError as exc:
            return ErrorResult(error=f"Failed to get base currency: {exc}")

        if query.account_id is not None:
            try:
                holdings = self._holdings.get_holdings(query.account_id, base_currency)
            except PortfolioDomainError as exc:
                return ErrorResult(
                    error=f"Failed to get holdings for account {query.account_id}: {exc}"
                )
            return HoldingsResult(holdings=holdings, base_currency=base_currency)

        try:
            accounts = self._accounts.get_all_accounts()
        except PortfolioDomainError as exc:
            return ErrorResult(error=f"Failed to get accounts: {exc}")

        collected = self._collector.collect(
            [account.id for account in accounts],
            lambda account_id: self._holdings.get_holdings(account_id, base_currency),
            describe=lambda account_id: f"holdings for account {account_id}",
        )
        if collected.skipped:
            logger.warning(
                "Holdings omitted for %d of %d accounts",
                len(collected.skipped),
                len(accounts),
            )
        return HoldingsResult(holdings=collected.items, base_currency=base_currency)

    def _resolve_base_currency(self) -> str:
        base_currency = self._settings.get_base_currency()
        if not base_currency:
            raise BaseCurrencyNotSetError()
        return base_currency

    # ── Accounts, FX, settings ───────────────────────────────────

    def get_accounts(self) -> AccountsOutcome:
        """Return all accounts."""
        logger.info("Retrieving accounts")
        try:
            accounts = self._accounts.get_all_accounts()
        except PortfolioDomainError as exc:
            return ErrorResult(error=f"Failed to get accounts: {exc}")
        return AccountsResult(accounts=accounts)

    def get_exchange_rates(self) -> ExchangeRatesOutcome:
        """Return the latest rate per currency pair."""
        logger.info("Retrieving exchange rates")
        try:
            rates = self._fx.get_latest_exchange_rates()
        except PortfolioDomainError as exc:
            return ErrorResult(error=f"Failed to get exchange rates: {exc}")
        return ExchangeRatesResult(rates=rates)

    def get_base_currency(self) -> BaseCurrencyOutcome:
        """Return the configured base currency.

        An unset base currency is a normal outcome, reported as
        ErrorResult("Base currency not set").
        """
        logger.info("Retrieving base currency")
        try:
            base_currency = self._resolve_base_currency()
        except BaseCurrencyNotSetError as exc:
            return ErrorResult(error=exc.message)
        except PortfolioDomainError as exc:
            return ErrorResult(error=f"Failed to get base currency: {exc}")
        return BaseCurrencyResult(base_currency=base_currency)

    # ── Market data ──────────────────────────────────────────────

    def search_market_data(self, query: str) -> MarketSearchOutcome:
        """Return quote summaries matching a search string."""
        logger.info("Searching market data: query=%s", query)
        try:
            results = self._market_data.search_symbol(query)
        except PortfolioDomainError as exc:
            return ErrorResult(error=f"Failed to search market data: {exc}")
        return MarketSearchResult(results=results)

    def get_quote(self, symbol: str) -> QuoteOutcome:
        """Return the latest quote for a symbol."""
        logger.info("Retrieving quote: symbol=%s", symbol)
        try:
            quote = self._market_data.get_latest_quote(symbol)
        except PortfolioDomainError as exc:
            return ErrorResult(error=f"Failed to get quote for {symbol}: {exc}")
        return QuoteResult(quote=quote)

    def get_historical_quotes(self, symbol: str) -> HistoricalQuotesOutcome:
        """Return the quote history for a symbol, as ordered by the provider."""
        logger.info("Retrieving historical quotes: symbol=%s", symbol)
        try:
            quotes = self._market_data.get_historical_quotes(symbol)
        except PortfolioDomainError as exc:
            return ErrorResult(
                error=f"Failed to get historical quotes for {symbol}: {exc}"
            )
        return HistoricalQuotesResult(symbol=symbol, quotes=quotes)

    # ── Performance ──────────────────────────────────────────────

    def get_account_performance(self, account_id: str) -> AccountPerformanceOutcome:
        """Return performance for one account over the provider's default period."""
        logger.info("Calculating performance: account_id=%s", account_id)
        try:
            performance = self._performance.calculate_performance(account_id)
        except PortfolioDomainError as exc:
            return ErrorResult(
                error=f"Failed to get performance for account {account_id}: {exc}"
            )
        return AccountPerformanceResult(account_id=account_id, performance=performance)

    def get_performance_summary(self) -> PerformanceSummaryOutcome:
        """Return simple performance for every account.

        Delegates batching to the provider: one call covers all
        account ids, and its failure fails the whole summary.
        """
        logger.info("Calculating performance summary")
        try:
            accounts = self._accounts.get_all_accounts()
        except PortfolioDomainError as exc:
            return ErrorResult(error=f"Failed to get accounts: {exc}")

        account_ids = [account.id for account in accounts]
        try:
            performances = self._performance.calculate_simple_performance(account_ids)
        except PortfolioDomainError as exc:
            return ErrorResult(error=f"Failed to get performance summary: {exc}")
        return PerformanceSummaryResult(performances=performances)

    # ── Activities ───────────────────────────────────────────────

    def get_activities(self, query: ActivitiesQuery) -> ActivitiesOutcome:
        """Return all activities, or those of a single account."""
        logger.info("Retrieving activities: account_id=%s", query.account_id)
        try:
            if query.account_id is None:
                activities = self._activities.get_activities()
            else:
                activities = self._activities.get_activities_for_account(
                    query.account_id
                )
        except PortfolioDomainError as exc:
            return ErrorResult(error=f"Failed to get activities: {exc}")
        return ActivitiesResult(activities=activities)
