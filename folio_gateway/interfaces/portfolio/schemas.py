"""
Pydantic schemas for the external portfolio API.

These schemas are the stable JSON contract exposed to consumers.
Field names are camelCase on the wire; optional fields are always
present and rendered as null when absent.
No business logic belongs here.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model: snake_case in Python, camelCase in JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Entity schemas ───────────────────────────────────────────────


class MoneyPairSchema(ApiModel):
    """An amount in local and base currency. Both keys are always set."""

    local: float
    base: float


class WeightedNameSchema(ApiModel):
    name: str
    weight: float


class InstrumentSchema(ApiModel):
    id: str
    symbol: str
    name: Optional[str]
    currency: str
    asset_class: Optional[str]
    asset_subclass: Optional[str]
    countries: Optional[list[WeightedNameSchema]]
    sectors: Optional[list[WeightedNameSchema]]


class HoldingSchema(ApiModel):
    """A valued holding. Gain and cost pairs are null when not computable."""

    id: str
    account_id: str
    holding_type: str
    instrument: Optional[InstrumentSchema]
    quantity: float
    open_date: Optional[datetime]
    local_currency: str
    base_currency: str
    fx_rate: Optional[float]
    market_value: MoneyPairSchema
    cost_basis: Optional[MoneyPairSchema]
    price: Optional[float]
    unrealized_gain: Optional[MoneyPairSchema]
    unrealized_gain_pct: Optional[float]
    realized_gain: Optional[MoneyPairSchema]
    realized_gain_pct: Optional[float]
    total_gain: Optional[MoneyPairSchema]
    total_gain_pct: Optional[float]
    day_change: Optional[MoneyPairSchema]
    day_change_pct: Optional[float]
    weight: float
    as_of_date: date


class AccountSchema(ApiModel):
    id: str
    name: str
    account_type: str
    currency: str
    is_active: bool


class ExchangeRateSchema(ApiModel):
    from_currency: str = Field(alias="from")
    to_currency: str = Field(alias="to")
    rate: float
    source: str
    timestamp: datetime


class QuoteSchema(ApiModel):
    id: str
    symbol: str
    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    adjclose: float
    volume: float
    currency: str
    data_source: str


class QuoteSummarySchema(ApiModel):
    symbol: str
    exchange: Optional[str]
    short_name: Optional[str]
    quote_type: Optional[str]


class PerformanceMetricsSchema(ApiModel):
    id: str
    currency: str
    period_start_date: Optional[date]
    period_end_date: Optional[date]
    cumulative_twr: float
    annualized_twr: float
    gain_loss_amount: float
    simple_return: float
    annualized_simple_return: float
    volatility: float
    max_drawdown: float


class SimplePerformanceSchema(ApiModel):
    account_id: str
    total_value: Optional[float]
    account_currency: Optional[str]
    base_currency: Optional[str]
    fx_rate_to_base: Optional[float]
    total_gain_loss_amount: Optional[float]
    cumulative_return_percent: Optional[float]
    day_gain_loss_amount: Optional[float]
    day_return_percent: Optional[float]
    portfolio_weight: Optional[float]


class ActivitySchema(ApiModel):
    id: str
    account_id: str
    activity_type: str
    activity_date: datetime = Field(alias="date")
    asset_id: Optional[str]
    quantity: Optional[float]
    unit_price: Optional[float]
    currency: str
    fee: Optional[float]
    amount: Optional[float]


# ── Response envelopes ───────────────────────────────────────────


class ErrorResponse(ApiModel):
    """Body returned by every endpoint when the operation failed."""

    error: str


class HealthResponse(ApiModel):
    status: str
    timestamp: datetime
    port: int


class RootResponse(ApiModel):
    message: str
    status: str
    port: int


class HoldingsResponse(ApiModel):
    holdings: list[HoldingSchema]
    base_currency: str


class AccountsResponse(ApiModel):
    accounts: list[AccountSchema]


class ExchangeRatesResponse(ApiModel):
    exchange_rates: list[ExchangeRateSchema]


class BaseCurrencyResponse(ApiModel):
    base_currency: str


class MarketSearchResponse(ApiModel):
    results: list[QuoteSummarySchema]


class QuoteResponse(ApiModel):
    quote: QuoteSchema


class HistoricalQuotesResponse(ApiModel):
    symbol: str
    quotes: list[QuoteSchema]


class AccountPerformanceResponse(ApiModel):
    account_id: str
    performance: PerformanceMetricsSchema


class PerformanceSummaryResponse(ApiModel):
    performances: list[SimplePerformanceSchema]


class ActivitiesResponse(ApiModel):
    activities: list[ActivitySchema]
