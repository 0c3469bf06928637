"""Periodic refresh of the snapshot cache from all data-source adapters.

The dashboard only ever reads the cache. This loop is what keeps it fresh:
every iteration refreshes the volume and yield sources concurrently.
"""

from __future__ import annotations

import asyncio

import structlog
from fastapi import FastAPI

from perpdash.market_data.snapshot_cache import (
    HL_YIELDS,
    LIGHTER_YIELDS,
    VOLUMES,
    Loader,
)

log = structlog.get_logger(__name__)


def source_loaders(app: FastAPI) -> dict[str, Loader]:
    """Map each cache key to the adapter call that produces it."""
    return {
        VOLUMES: app.state.volume_adapter.fetch,
        HL_YIELDS: app.state.hl_yield_adapter.fetch,
        LIGHTER_YIELDS: app.state.lighter_yield_adapter.fetch,
    }


async def snapshot_poll_loop(app: FastAPI) -> None:
    """Refresh every source, then sleep for the poll interval, until cancelled.

    Args:
        app: The FastAPI application with state containing snapshot_cache,
             the three adapters and settings.
    """
    poll_interval = app.state.settings.dashboard.poll_interval
    cache = app.state.snapshot_cache

    log.info("snapshot_poll_loop_started", interval=poll_interval)

    while True:
        try:
            await cache.refresh_all(source_loaders(app))
            await asyncio.sleep(poll_interval)
        except asyncio.CancelledError:
            log.info("snapshot_poll_loop_cancelled")
            break
        except Exception:
            log.warning("snapshot_poll_loop_error", exc_info=True)
            # Keep polling; the next iteration may succeed
            await asyncio.sleep(1)
