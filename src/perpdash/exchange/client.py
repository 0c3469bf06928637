"""Abstract venue client interface.

Adapters depend only on this interface, keeping ccxt-specific details
isolated in the concrete implementation.
"""

from abc import ABC, abstractmethod


class ExchangeClient(ABC):
    """Abstract base class for venue API clients."""

    @abstractmethod
    async def connect(self) -> None:
        """Initialize connection and load markets."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources (CRITICAL for ccxt async)."""
        ...

    @abstractmethod
    async def fetch_tickers(self) -> dict:
        """Fetch ticker data for all perpetual markets."""
        ...

    @abstractmethod
    async def fetch_vault_details(self, vault_address: str, user: str) -> dict:
        """Fetch the raw vault-details payload for a vault address."""
        ...
