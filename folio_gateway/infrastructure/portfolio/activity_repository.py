"""
Adapter: Activity repository.

Implements ActivityProvider port.
Reads ledger entries from the ``activities`` table, newest first.
"""

from sqlalchemy import text
from sqlalchemy.engine import Engine

from folio_gateway.domain.portfolio.entities import Activity
from folio_gateway.domain.portfolio.ports import ActivityProvider
from folio_gateway.infrastructure.portfolio.sql_support import (
    provider_errors,
    to_datetime,
    to_optional_decimal,
)

ACTIVITY_COLUMNS = """
    id, account_id, activity_type, activity_date, asset_id,
    quantity, unit_price, currency, fee, amount
"""


class ActivityRepositoryAdapter(ActivityProvider):
    """Reads activities from the shared portfolio store."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_activities(self) -> list[Activity]:
        """Return activities of every account."""
        query = text(
            f"""
            SELECT {ACTIVITY_COLUMNS}
            FROM activities
            ORDER BY activity_date DESC, id ASC
            """
        )
        with provider_errors("activities"), self._engine.connect() as conn:
            rows = conn.execute(query).mappings().all()
            return [_to_activity(row) for row in rows]

    def get_activities_for_account(self, account_id: str) -> list[Activity]:
        """Return activities of one account."""
        query = text(
            f"""
            SELECT {ACTIVITY_COLUMNS}
            FROM activities
            WHERE account_id = :account_id
            ORDER BY activity_date DESC, id ASC
            """
        )
        with provider_errors("activities"), self._engine.connect() as conn:
            rows = conn.execute(query, {"account_id": account_id}).mappings().all()
            return [_to_activity(row) for row in rows]


def _to_activity(row) -> Activity:
    return Activity(
        id=row["id"],
        account_id=row["account_id"],
        activity_type=row["activity_type"],
        activity_date=to_datetime(row["activity_date"]),
        currency=row["currency"],
        asset_id=row["asset_id"],
        quantity=to_optional_decimal(row["quantity"]),
        unit_price=to_optional_decimal(row["unit_price"]),
        fee=to_optional_decimal(row["fee"]),
        amount=to_optional_decimal(row["amount"]),
    )
