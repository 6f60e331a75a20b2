"""
Adapter: Settings repository.

Implements SettingsProvider port.
Reads installation settings stored as key/value rows.
"""

from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine

from folio_gateway.domain.portfolio.ports import SettingsProvider
from folio_gateway.infrastructure.portfolio.sql_support import provider_errors

BASE_CURRENCY_KEY = "base_currency"


class SettingsRepositoryAdapter(SettingsProvider):
    """Reads settings from the ``app_settings`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_base_currency(self) -> Optional[str]:
        """Return the base currency, or None if the setting is missing or blank."""
        query = text(
            "SELECT setting_value FROM app_settings WHERE setting_key = :key"
        )
        with provider_errors("settings"), self._engine.connect() as conn:
            value = conn.execute(query, {"key": BASE_CURRENCY_KEY}).scalar_one_or_none()
        if value is None or not str(value).strip():
            return None
        return str(value).strip()
