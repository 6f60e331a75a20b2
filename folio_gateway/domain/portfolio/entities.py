"""
Domain entities for the portfolio bounded context.

Entities are produced by the internal portfolio services and only
read and re-projected by the gateway. They contain no framework
imports and no IO operations.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Account:
    """An investment account registered in the portfolio."""

    id: str
    name: str
    account_type: str
    currency: str
    is_active: bool


@dataclass(frozen=True)
class MonetaryPair:
    """An amount in a holding's native currency and in the base currency.

    Both sides are required: a pair is either complete or absent.
    """

    local: Decimal
    base: Decimal


@dataclass(frozen=True)
class WeightedName:
    """A named exposure with its weight, e.g. a country or a sector."""

    name: str
    weight: Decimal


@dataclass(frozen=True)
class Instrument:
    """The security a holding refers to."""

    id: str
    symbol: str
    currency: str
    name: Optional[str] = None
    asset_class: Optional[str] = None
    asset_subclass: Optional[str] = None
    countries: Optional[tuple[WeightedName, ...]] = None
    sectors: Optional[tuple[WeightedName, ...]] = None


@dataclass(frozen=True)
class Holding:
    """A valued position in one account, as computed by the holdings engine.

    Gain and cost fields are None when they cannot be computed,
    for instance when no cost basis is on record.
    """

    id: str
    account_id: str
    holding_type: str
    quantity: Decimal
    local_currency: str
    base_currency: str
    market_value: MonetaryPair
    weight: Decimal
    as_of_date: date
    instrument: Optional[Instrument] = None
    open_date: Optional[datetime] = None
    fx_rate: Optional[Decimal] = None
    cost_basis: Optional[MonetaryPair] = None
    price: Optional[Decimal] = None
    unrealized_gain: Optional[MonetaryPair] = None
    unrealized_gain_pct: Optional[Decimal] = None
    realized_gain: Optional[MonetaryPair] = None
    realized_gain_pct: Optional[Decimal] = None
    total_gain: Optional[MonetaryPair] = None
    total_gain_pct: Optional[Decimal] = None
    day_change: Optional[MonetaryPair] = None
    day_change_pct: Optional[Decimal] = None


@dataclass(frozen=True)
class ExchangeRate:
    """Latest conversion rate for a currency pair from one rate source."""

    from_currency: str
    to_currency: str
    rate: Decimal
    source: str
    timestamp: datetime


@dataclass(frozen=True)
class Quote:
    """A single OHLCV market quote for a symbol."""

    id: str
    symbol: str
    timestamp: datetime
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    adjclose: Decimal
    volume: Decimal
    currency: str
    data_source: str


@dataclass(frozen=True)
class QuoteSummary:
    """A symbol search hit."""

    symbol: str
    exchange: Optional[str] = None
    short_name: Optional[str] = None
    quote_type: Optional[str] = None


@dataclass(frozen=True)
class PerformanceMetrics:
    """Return and risk figures for one subject over a period."""

    id: str
    currency: str
    cumulative_twr: Decimal
    annualized_twr: Decimal
    gain_loss_amount: Decimal
    simple_return: Decimal
    annualized_simple_return: Decimal
    volatility: Decimal
    max_drawdown: Decimal
    period_start_date: Optional[date] = None
    period_end_date: Optional[date] = None


@dataclass(frozen=True)
class SimplePerformanceMetrics:
    """Lightweight per-account summary used in multi-account overviews."""

    account_id: str
    total_value: Optional[Decimal] = None
    account_currency: Optional[str] = None
    base_currency: Optional[str] = None
    fx_rate_to_base: Optional[Decimal] = None
    total_gain_loss_amount: Optional[Decimal] = None
    cumulative_return_percent: Optional[Decimal] = None
    day_gain_loss_amount: Optional[Decimal] = None
    day_return_percent: Optional[Decimal] = None
    portfolio_weight: Optional[Decimal] = None


@dataclass(frozen=True)
class Activity:
    """A read-only ledger entry (buy, sell, dividend, deposit, ...)."""

    id: str
    account_id: str
    activity_type: str
    activity_date: datetime
    currency: str
    asset_id: Optional[str] = None
    quantity: Optional[Decimal] = None
    unit_price: Optional[Decimal] = None
    fee: Optional[Decimal] = None
    amount: Optional[Decimal] = None
