"""
Domain-specific errors for the portfolio bounded context.

Provider adapters raise these errors; the aggregation service
turns them into error results at its boundary.
No framework imports allowed.
"""

from typing import Optional


class PortfolioDomainError(Exception):
    """Base error for all portfolio domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ProviderError(PortfolioDomainError):
    """Raised when a backing provider fails to answer."""

    def __init__(self, message: str, capability: Optional[str] = None) -> None:
        super().__init__(message)
        self.capability = capability


class SymbolNotFoundError(PortfolioDomainError):
    """Raised when market data has no quote for a symbol."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"Symbol not found: {symbol}")
        self.symbol = symbol


class BaseCurrencyNotSetError(PortfolioDomainError):
    """Raised when the installation has no base currency configured."""

    def __init__(self) -> None:
        super().__init__("Base currency not set")
