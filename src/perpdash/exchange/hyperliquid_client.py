"""Hyperliquid client implementation via ccxt async.

Wraps ccxt.async_support.hyperliquid for ticker data and uses its implicit
info endpoint for vault details, translating ccxt errors into UpstreamError.
"""

import ccxt.async_support as ccxt_async
from ccxt.base.errors import BaseError as CcxtError

from perpdash.config import HyperliquidSettings
from perpdash.exceptions import UpstreamError, UpstreamPayloadError
from perpdash.exchange.client import ExchangeClient
from perpdash.logging import get_logger

logger = get_logger(__name__)


class HyperliquidClient(ExchangeClient):
    """Concrete Hyperliquid client using ccxt async."""

    def __init__(self, settings: HyperliquidSettings) -> None:
        self._settings = settings
        self._exchange = ccxt_async.hyperliquid(
            {
                "enableRateLimit": True,
                "options": {"defaultType": "swap"},
            }
        )
        if settings.testnet:
            self._exchange.set_sandbox_mode(True)
        self._markets: dict = {}

    async def connect(self) -> None:
        """Load markets so the first ticker poll does not pay for it."""
        logger.info("connecting_to_hyperliquid", testnet=self._settings.testnet)
        try:
            self._markets = await self._exchange.load_markets()
        except CcxtError as e:
            # Tickers load markets lazily; a failed warm-up is not fatal
            logger.warning("hyperliquid_load_markets_failed", error=str(e))
            return
        logger.info("hyperliquid_connected", market_count=len(self._markets))

    async def close(self) -> None:
        """Clean up ccxt async resources. CRITICAL: must be called to avoid resource leaks."""
        logger.info("closing_hyperliquid_connection")
        await self._exchange.close()

    async def fetch_tickers(self) -> dict:
        """Fetch tickers for all perpetual markets."""
        try:
            return await self._exchange.fetch_tickers(None, params={"type": "swap"})
        except CcxtError as e:
            raise UpstreamError(f"hyperliquid tickers: {e}") from e

    async def fetch_vault_details(self, vault_address: str, user: str) -> dict:
        """POST a vaultDetails query to the info endpoint and return the raw body."""
        request = {
            "type": "vaultDetails",
            "vaultAddress": vault_address,
            "user": user,
        }
        try:
            data = await self._exchange.public_post_info(request)
        except CcxtError as e:
            raise UpstreamError(f"hyperliquid vaultDetails: {e}") from e

        if not isinstance(data, dict):
            raise UpstreamPayloadError(
                f"hyperliquid vaultDetails returned {type(data).__name__}"
            )
        return data
