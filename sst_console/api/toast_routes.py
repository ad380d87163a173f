"""Notificaciones transitorias (toasts) pendientes de mostrar."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Response

from ..application.toasts import ToastCenter
from ..container import get_toast_center
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES, not_found

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)


@router.get("/toasts", tags=["toasts"])
def list_toasts(
    toasts: ToastCenter = Depends(get_toast_center),
) -> list[dict[str, Any]]:
    # R: Más reciente primero.
    return toasts.to_list()


@router.delete("/toasts/{toast_id}", status_code=204, tags=["toasts"])
def dismiss_toast(
    toast_id: int,
    toasts: ToastCenter = Depends(get_toast_center),
) -> Response:
    if not toasts.dismiss(toast_id):
        raise not_found("Toast", str(toast_id))
    return Response(status_code=204)


__all__ = ["router"]
