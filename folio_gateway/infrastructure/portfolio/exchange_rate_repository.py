"""
Adapter: Exchange rate repository.

Implements FxProvider port.
Returns the most recent rate of every (from, to, source) triple.
"""

from sqlalchemy import text
from sqlalchemy.engine import Engine

from folio_gateway.domain.portfolio.entities import ExchangeRate
from folio_gateway.domain.portfolio.ports import FxProvider
from folio_gateway.infrastructure.portfolio.sql_support import (
    provider_errors,
    to_datetime,
    to_decimal,
)


class ExchangeRateRepositoryAdapter(FxProvider):
    """Reads rates from the ``exchange_rates`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_latest_exchange_rates(self) -> list[ExchangeRate]:
        """Return one row per currency pair per rate source: the newest."""
        query = text(
            """
            SELECT r.from_currency, r.to_currency, r.rate, r.source, r.timestamp
            FROM exchange_rates r
            JOIN (
                SELECT from_currency, to_currency, source,
                       MAX(timestamp) AS latest
                FROM exchange_rates
                GROUP BY from_currency, to_currency, source
            ) newest
              ON r.from_currency = newest.from_currency
             AND r.to_currency = newest.to_currency
             AND r.source = newest.source
             AND r.timestamp = newest.latest
            ORDER BY r.from_currency, r.to_currency, r.source
            """
        )
        with provider_errors("exchange rates"), self._engine.connect() as conn:
            rows = conn.execute(query).mappings().all()
            return [
                ExchangeRate(
                    from_currency=row["from_currency"],
                    to_currency=row["to_currency"],
                    rate=to_decimal(row["rate"]),
                    source=row["source"],
                    timestamp=to_datetime(row["timestamp"]),
                )
                for row in rows
            ]
