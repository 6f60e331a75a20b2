"""
Tables of the shared portfolio store read by the SQL adapters.

The internal engines own and populate these tables; the gateway only
reads them. ``create_schema`` exists for local setups and tests.
"""

from sqlalchemy import text
from sqlalchemy.engine import Engine

TABLES = (
    """
    CREATE TABLE IF NOT EXISTS app_settings (
        setting_key TEXT PRIMARY KEY,
        setting_value TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS accounts (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        account_type TEXT NOT NULL,
        currency TEXT NOT NULL,
        is_active BOOLEAN NOT NULL DEFAULT 1
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS assets (
        id TEXT PRIMARY KEY,
        symbol TEXT NOT NULL,
        name TEXT,
        currency TEXT NOT NULL,
        asset_class TEXT,
        asset_sub_class TEXT,
        countries TEXT,
        sectors TEXT,
        exchange TEXT,
        quote_type TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS quotes (
        id TEXT PRIMARY KEY,
        symbol TEXT NOT NULL,
        timestamp TEXT NOT NULL,
        open NUMERIC NOT NULL,
        high NUMERIC NOT NULL,
        low NUMERIC NOT NULL,
        close NUMERIC NOT NULL,
        adjclose NUMERIC NOT NULL,
        volume NUMERIC NOT NULL,
        currency TEXT NOT NULL,
        data_source TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS exchange_rates (
        id TEXT PRIMARY KEY,
        from_currency TEXT NOT NULL,
        to_currency TEXT NOT NULL,
        rate NUMERIC NOT NULL,
        source TEXT NOT NULL,
        timestamp TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS activities (
        id TEXT PRIMARY KEY,
        account_id TEXT NOT NULL,
        activity_type TEXT NOT NULL,
        activity_date TEXT NOT NULL,
        asset_id TEXT,
        quantity NUMERIC,
        unit_price NUMERIC,
        currency TEXT NOT NULL,
        fee NUMERIC,
        amount NUMERIC
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS holding_valuations (
        id TEXT NOT NULL,
        account_id TEXT NOT NULL,
        base_currency TEXT NOT NULL,
        holding_type TEXT NOT NULL,
        asset_id TEXT,
        quantity NUMERIC NOT NULL,
        open_date TEXT,
        local_currency TEXT NOT NULL,
        fx_rate NUMERIC,
        market_value_local NUMERIC NOT NULL,
        market_value_base NUMERIC NOT NULL,
        cost_basis_local NUMERIC,
        cost_basis_base NUMERIC,
        price NUMERIC,
        unrealized_gain_local NUMERIC,
        unrealized_gain_base NUMERIC,
        unrealized_gain_pct NUMERIC,
        realized_gain_local NUMERIC,
        realized_gain_base NUMERIC,
        realized_gain_pct NUMERIC,
        total_gain_local NUMERIC,
        total_gain_base NUMERIC,
        total_gain_pct NUMERIC,
        day_change_local NUMERIC,
        day_change_base NUMERIC,
        day_change_pct NUMERIC,
        weight NUMERIC NOT NULL,
        as_of_date TEXT NOT NULL,
        position INTEGER NOT NULL DEFAULT 0,
        PRIMARY KEY (id, base_currency)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS performance_metrics (
        id TEXT PRIMARY KEY,
        currency TEXT NOT NULL,
        period_start_date TEXT,
        period_end_date TEXT,
        cumulative_twr NUMERIC NOT NULL,
        annualized_twr NUMERIC NOT NULL,
        gain_loss_amount NUMERIC NOT NULL,
        simple_return NUMERIC NOT NULL,
        annualized_simple_return NUMERIC NOT NULL,
        volatility NUMERIC NOT NULL,
        max_drawdown NUMERIC NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS daily_account_valuation (
        account_id TEXT NOT NULL,
        valuation_date TEXT NOT NULL,
        account_currency TEXT NOT NULL,
        base_currency TEXT NOT NULL,
        fx_rate_to_base NUMERIC NOT NULL,
        total_value NUMERIC NOT NULL,
        net_contribution NUMERIC NOT NULL,
        PRIMARY KEY (account_id, valuation_date)
    )
    """,
)


def create_schema(engine: Engine) -> None:
    """Create every table the adapters read, if missing."""
    with engine.begin() as conn:
        for ddl in TABLES:
            conn.execute(text(ddl))
