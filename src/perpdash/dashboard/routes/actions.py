"""POST endpoints for period filtering and manual refresh."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from perpdash.dashboard.routes.pages import (
    period_query,
    selection_from_values,
    table_context,
)
from perpdash.dashboard.update_loop import source_loaders
from perpdash.models import PeriodKey

log = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/periods/toggle", response_class=HTMLResponse)
async def toggle_period(request: Request) -> HTMLResponse:
    """Toggle one period in the submitted selection and return the updated table partial."""
    templates: Jinja2Templates = request.app.state.templates
    form = await request.form()

    selection = selection_from_values(
        request, [str(v) for v in form.getlist("selected")]
    )
    toggled = PeriodKey.parse(str(form.get("period", "")))
    if toggled is None:
        log.warning("unknown_period_toggled", period=form.get("period"))
    else:
        selection.toggle(toggled)

    context = table_context(request, selection)
    response = templates.TemplateResponse(request, "partials/vault_table.html", context)
    response.headers["HX-Push-Url"] = f"/?{context['period_query']}"
    return response


@router.post("/refresh")
async def refresh(request: Request) -> RedirectResponse:
    """Refresh every source, then reload the full page with the same selection."""
    form = await request.form()
    # A form without any selected field carries no preference
    values = [str(v) for v in form.getlist("selected")] if "selected" in form else None
    selection = selection_from_values(request, values)

    await request.app.state.snapshot_cache.refresh_all(source_loaders(request.app))
    log.info("sources_refreshed_via_dashboard")

    return RedirectResponse(url=f"/?{period_query(selection)}", status_code=303)
