"""
Adapter: Market data repository.

Implements MarketDataProvider port.
Symbol search runs over the ``assets`` table; quotes come from
the ``quotes`` table filled by the market data sync.
"""

from sqlalchemy import text
from sqlalchemy.engine import Engine

from folio_gateway.domain.portfolio.entities import Quote, QuoteSummary
from folio_gateway.domain.portfolio.errors import SymbolNotFoundError
from folio_gateway.domain.portfolio.ports import MarketDataProvider
from folio_gateway.infrastructure.portfolio.sql_support import (
    provider_errors,
    to_datetime,
    to_decimal,
)

SEARCH_LIMIT = 25

QUOTE_COLUMNS = """
    id, symbol, timestamp, open, high, low, close, adjclose,
    volume, currency, data_source
"""


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class MarketDataRepositoryAdapter(MarketDataProvider):
    """Reads symbols and quotes from the shared portfolio store."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def search_symbol(self, query: str) -> list[QuoteSummary]:
        """Return assets whose symbol or name contains ``query``.

        Exact symbol matches come first, then prefix matches.

        Args:
            query: Free-text search term, case-insensitive.

        Returns:
            At most SEARCH_LIMIT summaries.
        """
        term = query.strip()
        if not term:
            return []

        sql = text(
            """
            SELECT symbol, exchange, name, quote_type
            FROM assets
            WHERE UPPER(symbol) LIKE :pattern ESCAPE '\\'
               OR UPPER(COALESCE(name, '')) LIKE :pattern ESCAPE '\\'
            ORDER BY
                CASE
                    WHEN UPPER(symbol) = :exact THEN 0
                    WHEN UPPER(symbol) LIKE :prefix ESCAPE '\\' THEN 1
                    ELSE 2
                END,
                symbol
            LIMIT :limit
            """
        )
        upper = term.upper()
        params = {
            "pattern": f"%{_escape_like(upper)}%",
            "prefix": f"{_escape_like(upper)}%",
            "exact": upper,
            "limit": SEARCH_LIMIT,
        }
        with provider_errors("market data"), self._engine.connect() as conn:
            rows = conn.execute(sql, params).mappings().all()
            return [
                QuoteSummary(
                    symbol=row["symbol"],
                    exchange=row["exchange"],
                    short_name=row["name"],
                    quote_type=row["quote_type"],
                )
                for row in rows
            ]

    def get_latest_quote(self, symbol: str) -> Quote:
        """Return the newest quote for ``symbol``.

        Raises:
            SymbolNotFoundError: If there is no quote for the symbol.
        """
        sql = text(
            f"""
            SELECT {QUOTE_COLUMNS}
            FROM quotes
            WHERE symbol = :symbol
            ORDER BY timestamp DESC
            LIMIT 1
            """
        )
        with provider_errors("market data"), self._engine.connect() as conn:
            row = conn.execute(sql, {"symbol": symbol}).mappings().first()
            if row is None:
                raise SymbolNotFoundError(symbol)
            return _to_quote(row)

    def get_historical_quotes(self, symbol: str) -> list[Quote]:
        """Return every stored quote for ``symbol``, oldest first."""
        sql = text(
            f"""
            SELECT {QUOTE_COLUMNS}
            FROM quotes
            WHERE symbol = :symbol
            ORDER BY timestamp ASC
            """
        )
        with provider_errors("market data"), self._engine.connect() as conn:
            rows = conn.execute(sql, {"symbol": symbol}).mappings().all()
            return [_to_quote(row) for row in rows]


def _to_quote(row) -> Quote:
    return Quote(
        id=row["id"],
        symbol=row["symbol"],
        timestamp=to_datetime(row["timestamp"]),
        open=to_decimal(row["open"]),
        high=to_decimal(row["high"]),
        low=to_decimal(row["low"]),
        close=to_decimal(row["close"]),
        adjclose=to_decimal(row["adjclose"]),
        volume=to_decimal(row["volume"]),
        currency=row["currency"],
        data_source=row["data_source"],
    )
