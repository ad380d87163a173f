"""
============================================================
TARJETA CRC — infrastructure/reports_client.py
============================================================
Class: HttpReportsClient

Responsibilities:
  - GET contra el endpoint externo de reportes.
  - Distinguir "el host ni respondió" (CorsOrNetworkError) de una respuesta
    HTTP no exitosa (ReportsApiError "HTTP <status>: <reason>").
  - Devolver el sobre JSON decodificado; la validación del shape vive en
    application.report_catalog.

Collaborators:
  - crosscutting.exceptions
  - httpx (HTTP client; sigue redirects del endpoint publicado)
============================================================
"""

from __future__ import annotations

from typing import Any

import httpx

from ..crosscutting.exceptions import CorsOrNetworkError, ReportsApiError
from ..crosscutting.logger import logger


class HttpReportsClient:
    def __init__(self, url: str, *, client: httpx.AsyncClient | None = None):
        self._url = (url or "").strip()
        self._client = client or httpx.AsyncClient(follow_redirects=True)

    @property
    def configured(self) -> bool:
        return bool(self._url)

    async def fetch(self) -> Any:
        try:
            resp = await self._client.get(
                self._url,
                headers={"Content-Type": "application/json"},
                follow_redirects=True,
            )
        except httpx.TransportError as exc:
            logger.warning("Reports: endpoint inalcanzable", extra={"error": str(exc)})
            raise CorsOrNetworkError(str(exc), original_error=exc) from exc

        if not resp.is_success:
            raise ReportsApiError(f"HTTP {resp.status_code}: {resp.reason_phrase}")

        try:
            return resp.json()
        except ValueError as exc:
            raise ReportsApiError(
                "Respuesta inválida de la API de reportes",
                key="fetchReportsError",
                original_error=exc,
            ) from exc
