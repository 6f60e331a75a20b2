"""
Best-effort collection policy.

Fetches one list per key, strictly in key order and one call at a
time, and concatenates the results. A key whose fetch raises a
domain error is logged and skipped; the collection still succeeds.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterable, TypeVar

from folio_gateway.domain.portfolio.errors import PortfolioDomainError

logger = logging.getLogger(__name__)

K = TypeVar("K")
T = TypeVar("T")


@dataclass
class Collected(Generic[K, T]):
    """Outcome of a best-effort collection.

    Attributes:
        items: Concatenated items of every successful fetch, in key order.
        skipped: Keys whose fetch failed, in key order.
    """

    items: list[T] = field(default_factory=list)
    skipped: list[K] = field(default_factory=list)


class BestEffortCollector:
    """Collect-or-skip combinator over a sequence of keys.

    Only PortfolioDomainError is treated as a skippable partial failure.
    Anything else propagates to the caller.
    """

    def collect(
        self,
        keys: Iterable[K],
        fetch: Callable[[K], list[T]],
        describe: Callable[[K], str] = str,
    ) -> Collected[K, T]:
        """Run ``fetch`` for each key sequentially and gather the results.

        Args:
            keys: Keys to fetch, in the order results must appear.
            fetch: Returns the items for one key.
            describe: Renders a key for log messages.

        Returns:
            The collected items and the skipped keys.
        """
        collected: Collected[K, T] = Collected()
        for key in keys:
            try:
                items = fetch(key)
            except PortfolioDomainError as exc:
                logger.warning("Skipping %s: %s", describe(key), exc.message)
                collected.skipped.append(key)
                continue
            collected.items.extend(items)
        return collected
