"""Venue client layer -- Hyperliquid API integration via ccxt."""

from perpdash.exchange.client import ExchangeClient
from perpdash.exchange.hyperliquid_client import HyperliquidClient

__all__ = ["ExchangeClient", "HyperliquidClient"]
