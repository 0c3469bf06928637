"""24h trading volume per tracked venue.

Hyperliquid volume is the sum of 24h quote volume over all perpetual tickers.
Venues without a live source, and venues whose fetch fails, report their fixed
fallback constant. The result always covers every tracked venue, in order.
"""

import asyncio
from collections.abc import Awaitable, Callable
from decimal import Decimal, InvalidOperation

from perpdash.config import VenueConfig
from perpdash.exceptions import UpstreamPayloadError
from perpdash.exchange.client import ExchangeClient
from perpdash.logging import get_logger
from perpdash.models import VenueVolume

logger = get_logger(__name__)


def sum_quote_volume(tickers: dict) -> Decimal:
    """Sum `quoteVolume` across ccxt tickers, skipping missing or invalid values.

    Raises:
        UpstreamPayloadError: If no ticker carries a usable quote volume.
    """
    total = Decimal("0")
    counted = 0
    for symbol, ticker in tickers.items():
        raw = ticker.get("quoteVolume") if isinstance(ticker, dict) else None
        if raw is None:
            continue
        try:
            volume = Decimal(str(raw))
        except InvalidOperation:
            logger.debug("invalid_quote_volume", symbol=symbol, raw=raw)
            continue
        if not volume.is_finite() or volume < 0:
            continue
        total += volume
        counted += 1

    if counted == 0:
        raise UpstreamPayloadError("no tickers with quote volume")
    return total


class VolumeAdapter:
    """Builds a VenueVolume for each tracked venue.

    Args:
        venues: Tracked venues in display order.
        hyperliquid_client: Client used for the Hyperliquid live volume.
    """

    def __init__(
        self,
        venues: tuple[VenueConfig, ...],
        hyperliquid_client: ExchangeClient | None = None,
    ) -> None:
        self._venues = venues
        self._sources: dict[str, Callable[[], Awaitable[Decimal]]] = {}
        if hyperliquid_client is not None:
            self._hyperliquid_client = hyperliquid_client
            self._sources["Hyperliquid"] = self._hyperliquid_volume

    async def _hyperliquid_volume(self) -> Decimal:
        tickers = await self._hyperliquid_client.fetch_tickers()
        return sum_quote_volume(tickers)

    async def _venue_volume(self, venue: VenueConfig) -> VenueVolume:
        source = self._sources.get(venue.name)
        if not venue.live_volume or source is None:
            return VenueVolume(venue.name, venue.fallback_volume, is_fallback=True)

        try:
            volume = await source()
        except Exception:
            logger.warning("venue_volume_fallback", venue=venue.name, exc_info=True)
            return VenueVolume(venue.name, venue.fallback_volume, is_fallback=True)

        return VenueVolume(venue.name, volume)

    async def fetch(self) -> list[VenueVolume]:
        """Return one VenueVolume per tracked venue. Never raises for upstream failures."""
        volumes = await asyncio.gather(
            *(self._venue_volume(venue) for venue in self._venues)
        )
        logger.debug(
            "venue_volumes_fetched",
            volumes={v.venue: str(v.volume) for v in volumes},
        )
        return list(volumes)
