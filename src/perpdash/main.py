"""Entry point for the vault dashboard.

Wires all components together and serves the FastAPI dashboard through
uvicorn's programmatic API. The snapshot poll loop shares the server's
asyncio event loop and is managed by the FastAPI lifespan.

Component wiring order (in build_components):
1. AppSettings (configuration)
2. Logging setup
3. HyperliquidClient (ccxt, vault details and tickers)
4. VolumeAdapter (per-venue 24h volume with fallbacks)
5. HyperliquidYieldAdapter (vault yields with fallback record)
6. LighterYieldAdapter (mock pool yields)
7. SnapshotCache (latest result per source key)
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from perpdash.config import AppSettings
from perpdash.exchange.hyperliquid_client import HyperliquidClient
from perpdash.logging import get_logger, setup_logging
from perpdash.market_data.snapshot_cache import SnapshotCache
from perpdash.market_data.volume import VolumeAdapter
from perpdash.yields.hyperliquid import HyperliquidYieldAdapter
from perpdash.yields.lighter import LighterYieldAdapter


def build_components(settings: AppSettings) -> dict[str, Any]:
    """Build all dashboard components from settings.

    Does NOT call client.connect(); that happens in the lifespan.

    Args:
        settings: Application-wide settings.

    Returns:
        Dict mapping component names to instances.
    """
    venues = settings.venues()
    client = HyperliquidClient(settings.hyperliquid)

    return {
        "venues": venues,
        "exchange_client": client,
        "volume_adapter": VolumeAdapter(venues, hyperliquid_client=client),
        "hl_yield_adapter": HyperliquidYieldAdapter(client, settings.hyperliquid),
        "lighter_yield_adapter": LighterYieldAdapter(settings.lighter),
        "snapshot_cache": SnapshotCache(),
    }


def attach_components(app: FastAPI, settings: AppSettings, components: dict[str, Any]) -> None:
    """Store settings and components on app.state for route handler access."""
    app.state.settings = settings
    for name, component in components.items():
        setattr(app.state, name, component)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the exchange client and run the poll loop for the app's lifetime."""
    from perpdash.dashboard.update_loop import snapshot_poll_loop

    logger = get_logger("perpdash.main")

    await app.state.exchange_client.connect()
    poll_task = asyncio.create_task(snapshot_poll_loop(app))

    logger.info("lifespan_started", venues=[v.name for v in app.state.venues])

    yield

    poll_task.cancel()
    try:
        await poll_task
    except asyncio.CancelledError:
        pass

    await app.state.exchange_client.close()

    logger.info("vault_dashboard_stopped")


async def run() -> None:
    """Run the dashboard server until interrupted."""
    settings = AppSettings()

    setup_logging(settings.log_level, settings.log_format)
    logger = get_logger("perpdash.main")

    components = build_components(settings)

    from perpdash.dashboard.app import create_dashboard_app

    app = create_dashboard_app(lifespan=lifespan)
    attach_components(app, settings, components)

    logger.info(
        "starting_dashboard",
        host=settings.dashboard.host,
        port=settings.dashboard.port,
    )

    config = uvicorn.Config(
        app,
        host=settings.dashboard.host,
        port=settings.dashboard.port,
        log_level="warning",  # Suppress uvicorn access logs
    )
    server = uvicorn.Server(config)
    await server.serve()


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
