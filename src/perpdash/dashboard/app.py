"""FastAPI dashboard application factory with Jinja2 templates."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from perpdash.dashboard.routes import actions, api, pages
from perpdash.dashboard.view import format_tvl, format_volume, format_yield

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _time_ago(value: float | None) -> str:
    """Convert a unix timestamp in seconds to a relative time string (e.g., '2m ago')."""
    if value is None:
        return "n/a"
    diff_seconds = time.time() - value
    if diff_seconds < 60:
        return "just now"
    if diff_seconds < 3600:
        return f"{int(diff_seconds / 60)}m ago"
    if diff_seconds < 86400:
        return f"{int(diff_seconds / 3600)}h ago"
    return f"{int(diff_seconds / 86400)}d ago"


def create_dashboard_app(lifespan: Any = None) -> FastAPI:
    """Create and configure the FastAPI dashboard application.

    Args:
        lifespan: Optional async context manager for application lifespan events.
                  Used by main.py to inject startup/shutdown logic.

    Returns:
        Configured FastAPI application with templates and routes. Adapters,
        the snapshot cache and settings are attached to app.state by the caller.
    """
    app = FastAPI(
        title="Perp DEX Vault Dashboard",
        lifespan=lifespan,
    )

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.filters["volume"] = format_volume
    templates.env.filters["tvl"] = format_tvl
    templates.env.filters["pct"] = format_yield
    templates.env.filters["time_ago"] = _time_ago
    app.state.templates = templates

    app.include_router(pages.router)
    app.include_router(api.router, prefix="/api")
    app.include_router(actions.router, prefix="/actions")

    return app
