"""
Adapter: Account repository.

Implements AccountProvider port.
Reads the account list from the shared portfolio store.
"""

from sqlalchemy import text
from sqlalchemy.engine import Engine

from folio_gateway.domain.portfolio.entities import Account
from folio_gateway.domain.portfolio.ports import AccountProvider
from folio_gateway.infrastructure.portfolio.sql_support import provider_errors


class AccountRepositoryAdapter(AccountProvider):
    """Reads accounts from the ``accounts`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_all_accounts(self) -> list[Account]:
        """Return every account, ordered by name then id."""
        query = text(
            """
            SELECT id, name, account_type, currency, is_active
            FROM accounts
            ORDER BY name ASC, id ASC
            """
        )
        with provider_errors("accounts"), self._engine.connect() as conn:
            rows = conn.execute(query).mappings().all()
            return [
                Account(
                    id=row["id"],
                    name=row["name"],
                    account_type=row["account_type"],
                    currency=row["currency"],
                    is_active=bool(row["is_active"]),
                )
                for row in rows
            ]
