"""
Adapter: Performance repository.

Implements PerformanceProvider port.

Full metrics (TWR, volatility, drawdown) are computed by the
performance engine and stored in ``performance_metrics``. Simple
per-account performance is derived here from the two most recent
rows of ``daily_account_valuation``:

    total gain      = total value - net contribution
    cumulative ret. = total gain / net contribution
    day gain        = Δ total value - Δ net contribution
    day return      = day gain / previous total value
    weight          = account value in base / sum of values in base

Returns are ratios (0.05 means 5%).
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Engine

from folio_gateway.domain.portfolio.entities import (
    PerformanceMetrics,
    SimplePerformanceMetrics,
)
from folio_gateway.domain.portfolio.errors import ProviderError
from folio_gateway.domain.portfolio.ports import PerformanceProvider
from folio_gateway.infrastructure.portfolio.sql_support import (
    provider_errors,
    to_decimal,
    to_optional_date,
)

logger = logging.getLogger(__name__)


class PerformanceRepositoryAdapter(PerformanceProvider):
    """Reads and derives performance figures from the shared portfolio store."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def calculate_performance(
        self,
        subject_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> PerformanceMetrics:
        """Return stored metrics for a subject.

        Without dates the stored default period is used. With dates,
        the stored period must match them.

        Raises:
            ProviderError: If no metrics exist for the subject and period.
        """
        query = text(
            """
            SELECT *
            FROM performance_metrics
            WHERE id = :subject_id
              AND (:start_date IS NULL OR period_start_date = :start_date)
              AND (:end_date IS NULL OR period_end_date = :end_date)
            """
        )
        params = {
            "subject_id": subject_id,
            "start_date": start_date.isoformat() if start_date else None,
            "end_date": end_date.isoformat() if end_date else None,
        }
        with provider_errors("performance"), self._engine.connect() as conn:
            row = conn.execute(query, params).mappings().first()
            if row is None:
                raise ProviderError(
                    f"No performance data for {subject_id}", capability="performance"
                )
            return PerformanceMetrics(
                id=row["id"],
                currency=row["currency"],
                period_start_date=to_optional_date(row["period_start_date"]),
                period_end_date=to_optional_date(row["period_end_date"]),
                cumulative_twr=to_decimal(row["cumulative_twr"]),
                annualized_twr=to_decimal(row["annualized_twr"]),
                gain_loss_amount=to_decimal(row["gain_loss_amount"]),
                simple_return=to_decimal(row["simple_return"]),
                annualized_simple_return=to_decimal(row["annualized_simple_return"]),
                volatility=to_decimal(row["volatility"]),
                max_drawdown=to_decimal(row["max_drawdown"]),
            )

    def calculate_simple_performance(
        self, account_ids: list[str]
    ) -> list[SimplePerformanceMetrics]:
        """Return simple performance for ``account_ids`` in one query.

        Accounts without any valuation are left out. The result keeps
        the order of ``account_ids``.
        """
        if not account_ids:
            return []

        query = text(
            """
            SELECT account_id, valuation_date, account_currency, base_currency,
                   fx_rate_to_base, total_value, net_contribution
            FROM (
                SELECT v.*,
                       ROW_NUMBER() OVER (
                           PARTITION BY account_id ORDER BY valuation_date DESC
                       ) AS recency
                FROM daily_account_valuation v
                WHERE account_id IN :account_ids
            ) ranked
            WHERE recency <= 2
            ORDER BY account_id, valuation_date DESC
            """
        ).bindparams(bindparam("account_ids", expanding=True))
        with provider_errors("performance"), self._engine.connect() as conn:
            rows = conn.execute(query, {"account_ids": list(account_ids)}).mappings().all()
            return _summarize(account_ids, rows)


def _summarize(account_ids: list[str], rows) -> list[SimplePerformanceMetrics]:
    """Derive simple metrics from the last two valuations of each account."""
    history: dict[str, list] = {}
    for row in rows:
        history.setdefault(row["account_id"], []).append(row)

    base_values = {
        account_id: to_decimal(valuations[0]["total_value"])
        * to_decimal(valuations[0]["fx_rate_to_base"])
        for account_id, valuations in history.items()
    }
    portfolio_total = sum(base_values.values(), Decimal("0"))

    metrics = []
    for account_id in account_ids:
        valuations = history.get(account_id)
        if not valuations:
            logger.debug("No valuation for account_id=%s", account_id)
            continue
        metrics.append(
            _simple_metrics(
                account_id,
                valuations[0],
                valuations[1] if len(valuations) > 1 else None,
                base_values[account_id],
                portfolio_total,
            )
        )
    return metrics


def _ratio(numerator: Decimal, denominator: Decimal) -> Optional[Decimal]:
    return None if denominator == 0 else numerator / denominator


def _simple_metrics(
    account_id: str,
    latest,
    previous,
    base_value: Decimal,
    portfolio_total: Decimal,
) -> SimplePerformanceMetrics:
    total_value = to_decimal(latest["total_value"])
    contribution = to_decimal(latest["net_contribution"])
    total_gain = total_value - contribution

    day_gain = None
    day_return = None
    if previous is not None:
        previous_value = to_decimal(previous["total_value"])
        contribution_change = contribution - to_decimal(previous["net_contribution"])
        day_gain = total_value - previous_value - contribution_change
        day_return = _ratio(day_gain, previous_value)

    return SimplePerformanceMetrics(
        account_id=account_id,
        total_value=total_value,
        account_currency=latest["account_currency"],
        base_currency=latest["base_currency"],
        fx_rate_to_base=to_decimal(latest["fx_rate_to_base"]),
        total_gain_loss_amount=total_gain,
        cumulative_return_percent=_ratio(total_gain, contribution),
        day_gain_loss_amount=day_gain,
        day_return_percent=day_return,
        portfolio_weight=_ratio(base_value, portfolio_total),
    )
