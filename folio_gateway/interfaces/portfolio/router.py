"""
FastAPI router for the portfolio bounded context.

All routes delegate to the AggregationService and project its result.
No business logic here. Every route answers HTTP 200: failures are
reported as an ``{"error": "..."}`` body.
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, Query

from folio_gateway.application.portfolio.aggregation_service import (
    AggregationService,
)
from folio_gateway.application.portfolio.dtos import (
    ActivitiesQuery,
    ErrorResult,
    HoldingsQuery,
)
from folio_gateway.interfaces.portfolio.dependencies import get_aggregation_service
from folio_gateway.interfaces.portfolio.projection import (
    project_account,
    project_activity,
    project_exchange_rate,
    project_holding,
    project_performance,
    project_quote,
    project_quote_summary,
    project_simple_performance,
)
from folio_gateway.interfaces.portfolio.schemas import (
    AccountPerformanceResponse,
    AccountsResponse,
    ActivitiesResponse,
    BaseCurrencyResponse,
    ErrorResponse,
    ExchangeRatesResponse,
    HistoricalQuotesResponse,
    HoldingsResponse,
    MarketSearchResponse,
    PerformanceSummaryResponse,
    QuoteResponse,
)

router = APIRouter(prefix="/api", tags=["portfolio"])


def _error(result: ErrorResult) -> ErrorResponse:
    return ErrorResponse(error=result.error)


@router.get(
    "/portfolio/holdings",
    response_model=Union[HoldingsResponse, ErrorResponse],
    summary="Portfolio holdings",
    description="Holdings of one account, or of all accounts when account_id is omitted.",
)
def get_holdings(
    account_id: Optional[str] = None,
    service: AggregationService = Depends(get_aggregation_service),
) -> Union[HoldingsResponse, ErrorResponse]:
    """Return holdings valued in the base currency."""
    result = service.get_holdings(HoldingsQuery(account_id=account_id))
    if isinstance(result, ErrorResult):
        return _error(result)
    return HoldingsResponse(
        holdings=[project_holding(h) for h in result.holdings],
        base_currency=result.base_currency,
    )


@router.get(
    "/portfolio/accounts",
    response_model=Union[AccountsResponse, ErrorResponse],
    summary="Portfolio accounts",
)
def get_accounts(
    service: AggregationService = Depends(get_aggregation_service),
) -> Union[AccountsResponse, ErrorResponse]:
    """Return all accounts."""
    result = service.get_accounts()
    if isinstance(result, ErrorResult):
        return _error(result)
    return AccountsResponse(accounts=[project_account(a) for a in result.accounts])


@router.get(
    "/exchange-rates",
    response_model=Union[ExchangeRatesResponse, ErrorResponse],
    summary="Latest exchange rates",
)
def get_exchange_rates(
    service: AggregationService = Depends(get_aggregation_service),
) -> Union[ExchangeRatesResponse, ErrorResponse]:
    """Return the latest rate per currency pair and source."""
    result = service.get_exchange_rates()
    if isinstance(result, ErrorResult):
        return _error(result)
    return ExchangeRatesResponse(
        exchange_rates=[project_exchange_rate(r) for r in result.rates]
    )


@router.get(
    "/settings/base-currency",
    response_model=Union[BaseCurrencyResponse, ErrorResponse],
    summary="Configured base currency",
)
def get_base_currency(
    service: AggregationService = Depends(get_aggregation_service),
) -> Union[BaseCurrencyResponse, ErrorResponse]:
    """Return the base currency, or an error when it is not set."""
    result = service.get_base_currency()
    if isinstance(result, ErrorResult):
        return _error(result)
    return BaseCurrencyResponse(base_currency=result.base_currency)


@router.get(
    "/market-data/search",
    response_model=Union[MarketSearchResponse, ErrorResponse],
    summary="Search symbols",
)
def search_market_data(
    q: str = Query(..., description="Symbol or name to search for"),
    service: AggregationService = Depends(get_aggregation_service),
) -> Union[MarketSearchResponse, ErrorResponse]:
    """Return quote summaries matching the query."""
    result = service.search_market_data(q)
    if isinstance(result, ErrorResult):
        return _error(result)
    return MarketSearchResponse(
        results=[project_quote_summary(s) for s in result.results]
    )


@router.get(
    "/market-data/quotes/{symbol}",
    response_model=Union[QuoteResponse, ErrorResponse],
    summary="Latest quote",
)
def get_quote(
    symbol: str,
    service: AggregationService = Depends(get_aggregation_service),
) -> Union[QuoteResponse, ErrorResponse]:
    """Return the latest quote for a symbol."""
    result = service.get_quote(symbol)
    if isinstance(result, ErrorResult):
        return _error(result)
    return QuoteResponse(quote=project_quote(result.quote))


@router.get(
    "/market-data/historical/{symbol}",
    response_model=Union[HistoricalQuotesResponse, ErrorResponse],
    summary="Quote history",
)
def get_historical_quotes(
    symbol: str,
    service: AggregationService = Depends(get_aggregation_service),
) -> Union[HistoricalQuotesResponse, ErrorResponse]:
    """Return the quote history for a symbol."""
    result = service.get_historical_quotes(symbol)
    if isinstance(result, ErrorResult):
        return _error(result)
    return HistoricalQuotesResponse(
        symbol=result.symbol,
        quotes=[project_quote(q) for q in result.quotes],
    )


# Must stay above /portfolio/performance/{account_id}.
@router.get(
    "/portfolio/performance/summary",
    response_model=Union[PerformanceSummaryResponse, ErrorResponse],
    summary="Performance summary of all accounts",
)
def get_performance_summary(
    service: AggregationService = Depends(get_aggregation_service),
) -> Union[PerformanceSummaryResponse, ErrorResponse]:
    """Return simple performance for every account."""
    result = service.get_performance_summary()
    if isinstance(result, ErrorResult):
        return _error(result)
    return PerformanceSummaryResponse(
        performances=[project_simple_performance(p) for p in result.performances]
    )


@router.get(
    "/portfolio/performance/{account_id}",
    response_model=Union[AccountPerformanceResponse, ErrorResponse],
    summary="Account performance",
)
def get_account_performance(
    account_id: str,
    service: AggregationService = Depends(get_aggregation_service),
) -> Union[AccountPerformanceResponse, ErrorResponse]:
    """Return performance metrics of one account."""
    result = service.get_account_performance(account_id)
    if isinstance(result, ErrorResult):
        return _error(result)
    return AccountPerformanceResponse(
        account_id=result.account_id,
        performance=project_performance(result.performance),
    )


@router.get(
    "/portfolio/activities",
    response_model=Union[ActivitiesResponse, ErrorResponse],
    summary="Activities",
    description="Activities of one account, or of all accounts when account_id is omitted.",
)
def get_activities(
    account_id: Optional[str] = None,
    service: AggregationService = Depends(get_aggregation_service),
) -> Union[ActivitiesResponse, ErrorResponse]:
    """Return ledger activities."""
    result = service.get_activities(ActivitiesQuery(account_id=account_id))
    if isinstance(result, ErrorResult):
        return _error(result)
    return ActivitiesResponse(
        activities=[project_activity(a) for a in result.activities]
    )
