"""JSON API endpoints for venue volumes and vault yields.

Each endpoint answers 200 with a well-formed body. Upstream failures are
absorbed by the adapters, which substitute fallback data.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

log = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/volumes")
async def get_volumes(request: Request) -> JSONResponse:
    """24h volume per tracked venue: [{dex, volume}]."""
    volumes = await request.app.state.volume_adapter.fetch()
    fallbacks = [v.venue for v in volumes if v.is_fallback]
    if fallbacks:
        log.info("serving_fallback_volumes", dex=fallbacks)
    return JSONResponse(content=[v.to_dict() for v in volumes])


@router.get("/yields")
async def get_hyperliquid_yields(request: Request) -> JSONResponse:
    """Hyperliquid vault yields: {dex, current, periods, tvl}."""
    result = await request.app.state.hl_yield_adapter.fetch()
    if result.is_fallback:
        log.info("serving_fallback_yields", dex=result.venue)
    return JSONResponse(content=result.to_dict())


@router.get("/lighter-yields")
async def get_lighter_yields(request: Request) -> JSONResponse:
    """Lighter pool yields (mock data): {dex, current, periods, tvl}."""
    result = await request.app.state.lighter_yield_adapter.fetch()
    return JSONResponse(content=result.to_dict())
