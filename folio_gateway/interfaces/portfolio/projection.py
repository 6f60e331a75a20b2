"""
JSON projection of portfolio domain entities.

Maps each domain entity onto its API schema. The mapping is pure:
no IO, no side effects, and the same entity always projects to
the same JSON.

Conventions:
    - Decimal amounts become JSON numbers.
    - Naive datetimes are taken as UTC so they render as RFC 3339.
    - Monetary pairs become ``{local, base}`` or null.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from folio_gateway.domain.portfolio.entities import (
    Account,
    Activity,
    ExchangeRate,
    Holding,
    Instrument,
    MonetaryPair,
    PerformanceMetrics,
    Quote,
    QuoteSummary,
    SimplePerformanceMetrics,
    WeightedName,
)
from folio_gateway.interfaces.portfolio.schemas import (
    AccountSchema,
    ActivitySchema,
    ExchangeRateSchema,
    HoldingSchema,
    InstrumentSchema,
    MoneyPairSchema,
    PerformanceMetricsSchema,
    QuoteSchema,
    QuoteSummarySchema,
    SimplePerformanceSchema,
    WeightedNameSchema,
)


def _number(value: Optional[Decimal]) -> Optional[float]:
    return None if value is None else float(value)


def _timestamp(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def project_money(pair: Optional[MonetaryPair]) -> Optional[MoneyPairSchema]:
    """Project a monetary pair, keeping absent pairs absent."""
    if pair is None:
        return None
    return MoneyPairSchema(local=float(pair.local), base=float(pair.base))


def _weighted(
    entries: Optional[tuple[WeightedName, ...]],
) -> Optional[list[WeightedNameSchema]]:
    if entries is None:
        return None
    return [WeightedNameSchema(name=e.name, weight=float(e.weight)) for e in entries]


def project_instrument(instrument: Optional[Instrument]) -> Optional[InstrumentSchema]:
    if instrument is None:
        return None
    return InstrumentSchema(
        id=instrument.id,
        symbol=instrument.symbol,
        name=instrument.name,
        currency=instrument.currency,
        asset_class=instrument.asset_class,
        asset_subclass=instrument.asset_subclass,
        countries=_weighted(instrument.countries),
        sectors=_weighted(instrument.sectors),
    )


def project_holding(holding: Holding) -> HoldingSchema:
    """Project a holding with its embedded instrument and monetary pairs."""
    return HoldingSchema(
        id=holding.id,
        account_id=holding.account_id,
        holding_type=holding.holding_type,
        instrument=project_instrument(holding.instrument),
        quantity=float(holding.quantity),
        open_date=_timestamp(holding.open_date),
        local_currency=holding.local_currency,
        base_currency=holding.base_currency,
        fx_rate=_number(holding.fx_rate),
        market_value=project_money(holding.market_value),
        cost_basis=project_money(holding.cost_basis),
        price=_number(holding.price),
        unrealized_gain=project_money(holding.unrealized_gain),
        unrealized_gain_pct=_number(holding.unrealized_gain_pct),
        realized_gain=project_money(holding.realized_gain),
        realized_gain_pct=_number(holding.realized_gain_pct),
        total_gain=project_money(holding.total_gain),
        total_gain_pct=_number(holding.total_gain_pct),
        day_change=project_money(holding.day_change),
        day_change_pct=_number(holding.day_change_pct),
        weight=float(holding.weight),
        as_of_date=holding.as_of_date,
    )


def project_account(account: Account) -> AccountSchema:
    return AccountSchema(
        id=account.id,
        name=account.name,
        account_type=account.account_type,
        currency=account.currency,
        is_active=account.is_active,
    )


def project_exchange_rate(rate: ExchangeRate) -> ExchangeRateSchema:
    return ExchangeRateSchema(
        from_currency=rate.from_currency,
        to_currency=rate.to_currency,
        rate=float(rate.rate),
        source=rate.source,
        timestamp=_timestamp(rate.timestamp),
    )


def project_quote(quote: Quote) -> QuoteSchema:
    return QuoteSchema(
        id=quote.id,
        symbol=quote.symbol,
        timestamp=_timestamp(quote.timestamp),
        open=float(quote.open),
        high=float(quote.high),
        low=float(quote.low),
        close=float(quote.close),
        adjclose=float(quote.adjclose),
        volume=float(quote.volume),
        currency=quote.currency,
        data_source=quote.data_source,
    )


def project_quote_summary(summary: QuoteSummary) -> QuoteSummarySchema:
    return QuoteSummarySchema(
        symbol=summary.symbol,
        exchange=summary.exchange,
        short_name=summary.short_name,
        quote_type=summary.quote_type,
    )


def project_performance(metrics: PerformanceMetrics) -> PerformanceMetricsSchema:
    return PerformanceMetricsSchema(
        id=metrics.id,
        currency=metrics.currency,
        period_start_date=metrics.period_start_date,
        period_end_date=metrics.period_end_date,
        cumulative_twr=float(metrics.cumulative_twr),
        annualized_twr=float(metrics.annualized_twr),
        gain_loss_amount=float(metrics.gain_loss_amount),
        simple_return=float(metrics.simple_return),
        annualized_simple_return=float(metrics.annualized_simple_return),
        volatility=float(metrics.volatility),
        max_drawdown=float(metrics.max_drawdown),
    )


def project_simple_performance(
    metrics: SimplePerformanceMetrics,
) -> SimplePerformanceSchema:
    return SimplePerformanceSchema(
        account_id=metrics.account_id,
        total_value=_number(metrics.total_value),
        account_currency=metrics.account_currency,
        base_currency=metrics.base_currency,
        fx_rate_to_base=_number(metrics.fx_rate_to_base),
        total_gain_loss_amount=_number(metrics.total_gain_loss_amount),
        cumulative_return_percent=_number(metrics.cumulative_return_percent),
        day_gain_loss_amount=_number(metrics.day_gain_loss_amount),
        day_return_percent=_number(metrics.day_return_percent),
        portfolio_weight=_number(metrics.portfolio_weight),
    )


def project_activity(activity: Activity) -> ActivitySchema:
    return ActivitySchema(
        id=activity.id,
        account_id=activity.account_id,
        activity_type=activity.activity_type,
        activity_date=_timestamp(activity.activity_date),
        asset_id=activity.asset_id,
        quantity=_number(activity.quantity),
        unit_price=_number(activity.unit_price),
        currency=activity.currency,
        fee=_number(activity.fee),
        amount=_number(activity.amount),
    )
