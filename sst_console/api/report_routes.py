"""
===============================================================================
TARJETA CRC — api/report_routes.py (Reportes de Cumplimiento)
===============================================================================

Responsabilidades:
  - Exponer la vista de reportes: lista filtrada, estadísticas, banner de error.
  - Refrescar desde la fuente remota.
  - Abrir el PDF de un reporte (redirect) registrando auditoría.

Colaboradores:
  - application.console.ReportsView
  - api.dependencies.require_session
===============================================================================
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field

from ..application.console import ReportsView
from ..container import get_reports_view
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES, validation_error
from ..domain.entities import Session
from .dependencies import require_session

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)


class ReportViewRequest(BaseModel):
    search: str | None = Field(default=None, max_length=200)
    result: str | None = None
    status: str | None = None
    date_range: str | None = None


@router.get("/reports", tags=["reports"])
async def get_reports_view_snapshot(
    _session: Session = Depends(require_session),
    view: ReportsView = Depends(get_reports_view),
) -> dict[str, Any]:
    await view.ensure_loaded()
    return view.snapshot()


@router.patch("/reports/view", tags=["reports"])
def update_reports_view(
    req: ReportViewRequest,
    _session: Session = Depends(require_session),
    view: ReportsView = Depends(get_reports_view),
) -> dict[str, Any]:
    try:
        view.update_filters(**req.model_dump())
    except ValueError as exc:
        raise validation_error(f"Filtro inválido: {exc}")
    return view.snapshot()


@router.post("/reports/refresh", tags=["reports"])
async def refresh_reports(
    _session: Session = Depends(require_session),
    view: ReportsView = Depends(get_reports_view),
) -> dict[str, Any]:
    await view.load(refresh=True)
    return view.snapshot()


@router.get("/reports/{report_id}/pdf", tags=["reports"])
async def open_report_pdf(
    report_id: str,
    _session: Session = Depends(require_session),
    view: ReportsView = Depends(get_reports_view),
) -> RedirectResponse:
    link = await view.open_pdf(report_id)
    return RedirectResponse(link, status_code=307)


__all__ = ["router"]
