"""Page routes serving the dashboard and its polled table fragment."""

from __future__ import annotations

from typing import Annotated, Any
from urllib.parse import urlencode

import structlog
from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from perpdash.dashboard.view import PeriodSelection, build_view
from perpdash.models import PeriodKey

log = structlog.get_logger(__name__)

router = APIRouter()


def selection_from_values(request: Request, values: list[str] | None) -> PeriodSelection:
    """Parse the requested periods, defaulting to the configured selection."""
    settings = request.app.state.settings.dashboard
    if values is None:
        values = settings.default_periods
    return PeriodSelection.from_values(values, max_size=settings.max_selected_periods)


def period_query(selection: PeriodSelection) -> str:
    """Query string that reproduces a selection, oldest period first.

    An empty selection is sent as one blank `period` so it is not read back
    as "no preference" and replaced by the defaults.
    """
    pairs = [("period", key.value) for key in selection.selected]
    return urlencode(pairs or [("period", "")])


def table_context(request: Request, selection: PeriodSelection) -> dict[str, Any]:
    """Template context for the vault table partial."""
    state = request.app.state
    view = build_view(state.snapshot_cache.snapshots(), state.venues, selection)
    return {
        "view": view,
        "all_periods": list(PeriodKey),
        "period_query": period_query(selection),
        "refresh_interval": state.settings.dashboard.client_refresh_interval,
    }


@router.get("/", response_class=HTMLResponse)
async def dashboard_index(
    request: Request,
    period: Annotated[list[str] | None, Query()] = None,
) -> HTMLResponse:
    """Main dashboard page with the wallet widget and the vault table."""
    templates: Jinja2Templates = request.app.state.templates
    selection = selection_from_values(request, period)

    context = table_context(request, selection)
    context["chains"] = [
        chain.model_dump() for chain in request.app.state.settings.wallet.chains
    ]
    return templates.TemplateResponse(request, "index.html", context)


@router.get("/partials/table", response_class=HTMLResponse)
async def vault_table(
    request: Request,
    period: Annotated[list[str] | None, Query()] = None,
) -> HTMLResponse:
    """Table fragment, polled by the page via htmx."""
    templates: Jinja2Templates = request.app.state.templates
    selection = selection_from_values(request, period)
    return templates.TemplateResponse(
        request, "partials/vault_table.html", table_context(request, selection)
    )
