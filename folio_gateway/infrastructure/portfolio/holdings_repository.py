"""
Adapter: Holdings repository.

Implements HoldingsProvider port.
The holdings valuation engine writes one row per holding, per account
and base currency, into ``holding_valuations``. This adapter reads the
rows for the requested pair and attaches the instrument from ``assets``.
"""

import logging

from sqlalchemy import text
from sqlalchemy.engine import Engine

from folio_gateway.domain.portfolio.entities import Holding, Instrument, MonetaryPair
from folio_gateway.domain.portfolio.ports import HoldingsProvider
from folio_gateway.infrastructure.portfolio.sql_support import (
    provider_errors,
    to_date,
    to_decimal,
    to_optional_datetime,
    to_optional_decimal,
    to_pair,
    to_weighted_names,
)

logger = logging.getLogger(__name__)


class HoldingsRepositoryAdapter(HoldingsProvider):
    """Reads valued holdings from the shared portfolio store."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_holdings(self, account_id: str, base_currency: str) -> list[Holding]:
        """Return the holdings of an account valued in ``base_currency``.

        Args:
            account_id: Account whose holdings are requested.
            base_currency: Base currency the valuation was computed in.

        Returns:
            Holdings in the order the engine wrote them.
        """
        query = text(
            """
            SELECT
                h.*,
                a.symbol AS asset_symbol,
                a.name AS asset_name,
                a.currency AS asset_currency,
                a.asset_class AS asset_class,
                a.asset_sub_class AS asset_sub_class,
                a.countries AS asset_countries,
                a.sectors AS asset_sectors
            FROM holding_valuations h
            LEFT JOIN assets a ON a.id = h.asset_id
            WHERE h.account_id = :account_id
              AND h.base_currency = :base_currency
            ORDER BY h.position ASC, h.id ASC
            """
        )
        params = {"account_id": account_id, "base_currency": base_currency}
        with provider_errors("holdings"), self._engine.connect() as conn:
            rows = conn.execute(query, params).mappings().all()
            holdings = [_to_holding(row) for row in rows]

        logger.debug("Loaded %d holdings for account_id=%s", len(holdings), account_id)
        return holdings


def _to_instrument(row) -> Instrument | None:
    if row["asset_id"] is None or row["asset_symbol"] is None:
        return None
    return Instrument(
        id=row["asset_id"],
        symbol=row["asset_symbol"],
        currency=row["asset_currency"],
        name=row["asset_name"],
        asset_class=row["asset_class"],
        asset_subclass=row["asset_sub_class"],
        countries=to_weighted_names(row["asset_countries"]),
        sectors=to_weighted_names(row["asset_sectors"]),
    )


def _to_holding(row) -> Holding:
    return Holding(
        id=row["id"],
        account_id=row["account_id"],
        holding_type=row["holding_type"],
        instrument=_to_instrument(row),
        quantity=to_decimal(row["quantity"]),
        open_date=to_optional_datetime(row["open_date"]),
        local_currency=row["local_currency"],
        base_currency=row["base_currency"],
        fx_rate=to_optional_decimal(row["fx_rate"]),
        market_value=MonetaryPair(
            local=to_decimal(row["market_value_local"]),
            base=to_decimal(row["market_value_base"]),
        ),
        cost_basis=to_pair(row["cost_basis_local"], row["cost_basis_base"]),
        price=to_optional_decimal(row["price"]),
        unrealized_gain=to_pair(
            row["unrealized_gain_local"], row["unrealized_gain_base"]
        ),
        unrealized_gain_pct=to_optional_decimal(row["unrealized_gain_pct"]),
        realized_gain=to_pair(row["realized_gain_local"], row["realized_gain_base"]),
        realized_gain_pct=to_optional_decimal(row["realized_gain_pct"]),
        total_gain=to_pair(row["total_gain_local"], row["total_gain_base"]),
        total_gain_pct=to_optional_decimal(row["total_gain_pct"]),
        day_change=to_pair(row["day_change_local"], row["day_change_base"]),
        day_change_pct=to_optional_decimal(row["day_change_pct"]),
        weight=to_decimal(row["weight"]),
        as_of_date=to_date(row["as_of_date"]),
    )
