"""
Helpers shared by the SQL provider adapters.

Converts raw column values into domain types and translates
database failures and malformed rows into ProviderError at the
adapter boundary.
"""

import json
import logging
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterator, Optional

from dateutil.parser import isoparse
from sqlalchemy.exc import SQLAlchemyError

from folio_gateway.domain.portfolio.entities import MonetaryPair, WeightedName
from folio_gateway.domain.portfolio.errors import ProviderError

logger = logging.getLogger(__name__)


# Raised by the converters below on a malformed column value.
ROW_ERRORS = (ValueError, KeyError, TypeError, InvalidOperation)


@contextmanager
def provider_errors(capability: str) -> Iterator[None]:
    """Re-raise store failures as ProviderError for ``capability``.

    Covers both the query and the conversion of its rows, so the
    entities must be built inside the block.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("%s query failed: %s", capability, type(exc).__name__)
        raise ProviderError(
            f"{capability} store unavailable", capability=capability
        ) from exc
    except ROW_ERRORS as exc:
        logger.error("%s row is malformed: %s", capability, type(exc).__name__)
        raise ProviderError(
            f"{capability} store returned a malformed row", capability=capability
        ) from exc


def to_decimal(value: Any) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def to_optional_decimal(value: Any) -> Optional[Decimal]:
    return None if value is None else to_decimal(value)


def to_datetime(value: Any) -> datetime:
    return value if isinstance(value, datetime) else isoparse(str(value))


def to_optional_datetime(value: Any) -> Optional[datetime]:
    return None if value is None else to_datetime(value)


def to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return isoparse(str(value)).date()


def to_optional_date(value: Any) -> Optional[date]:
    return None if value is None else to_date(value)


def to_pair(local: Any, base: Any) -> Optional[MonetaryPair]:
    """Build a monetary pair, or None unless both sides are present."""
    if local is None or base is None:
        return None
    return MonetaryPair(local=to_decimal(local), base=to_decimal(base))


def to_weighted_names(raw: Optional[str]) -> Optional[tuple[WeightedName, ...]]:
    """Decode a JSON list of ``{"name", "weight"}`` objects."""
    if raw is None:
        return None
    return tuple(
        WeightedName(name=entry["name"], weight=to_decimal(entry.get("weight", 0)))
        for entry in json.loads(raw)
    )
