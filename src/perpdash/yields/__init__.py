"""Yield adapters -- per-venue vault yields normalized to seven look-back windows."""

from perpdash.yields.annualize import compute_venue_yield, fallback_yield
from perpdash.yields.hyperliquid import HyperliquidYieldAdapter
from perpdash.yields.lighter import LighterYieldAdapter

__all__ = [
    "HyperliquidYieldAdapter",
    "LighterYieldAdapter",
    "compute_venue_yield",
    "fallback_yield",
]
