"""Hyperliquid vault yield adapter.

Fetches vault details for the configured vault and turns them into a
VenueYield. Any failure on the way degrades to the static fallback record;
callers never see an exception.
"""

from perpdash.config import HyperliquidSettings
from perpdash.exchange.client import ExchangeClient
from perpdash.logging import get_logger
from perpdash.models import VenueYield
from perpdash.yields.annualize import compute_venue_yield, fallback_yield

logger = get_logger(__name__)

VENUE_NAME = "Hyperliquid"


class HyperliquidYieldAdapter:
    """Produces live or fallback yields for the Hyperliquid vault."""

    def __init__(self, client: ExchangeClient, settings: HyperliquidSettings) -> None:
        self._client = client
        self._settings = settings

    def fallback(self) -> VenueYield:
        return fallback_yield(
            VENUE_NAME, self._settings.fallback_apr, self._settings.fallback_tvl
        )

    async def fetch(self) -> VenueYield:
        """Fetch vault details and compute yields, or return the fallback record."""
        try:
            raw = await self._client.fetch_vault_details(
                self._settings.vault_address, self._settings.query_user
            )
            result = compute_venue_yield(raw, VENUE_NAME)
        except Exception:
            logger.warning(
                "hyperliquid_yields_fallback",
                vault=self._settings.vault_address,
                exc_info=True,
            )
            return self.fallback()

        logger.debug(
            "hyperliquid_yields_computed",
            current=str(result.current),
            tvl=str(result.tvl),
        )
        return result
