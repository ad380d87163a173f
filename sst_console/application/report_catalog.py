"""
===============================================================================
TARJETA CRC — application/report_catalog.py
===============================================================================

Responsabilidades:
  - Obtener reportes del endpoint externo y validar el sobre
    {success, data, message?}.
  - Endpoint no configurado => lista vacía (no es error).
  - Convertir filas con Report.from_wire (literales -> enums, una sola vez).

Colaboradores:
  - domain.ports.ReportSource
  - domain.entities.Report
===============================================================================
"""

from __future__ import annotations

from typing import List, Mapping

from ..crosscutting.exceptions import ReportsApiError
from ..crosscutting.logger import logger
from ..domain.entities import Report
from ..domain.ports import ReportSource

DEFAULT_API_ERROR = "Error en API de reportes"
MALFORMED_RESPONSE = "Respuesta inválida de la API de reportes"


class ReportCatalog:
    def __init__(self, source: ReportSource):
        self._source = source

    async def fetch_reports(self) -> List[Report]:
        if not self._source.configured:
            logger.warning("REPORTS_API_URL no configurada")
            return []

        logger.info("Obteniendo reportes")
        body = await self._source.fetch()

        if not isinstance(body, Mapping):
            raise ReportsApiError(MALFORMED_RESPONSE, key="fetchReportsError")
        if not body.get("success"):
            raise ReportsApiError(body.get("message") or DEFAULT_API_ERROR)

        rows = body.get("data") or []
        if not isinstance(rows, list) or not all(isinstance(r, Mapping) for r in rows):
            raise ReportsApiError(MALFORMED_RESPONSE, key="fetchReportsError")

        reports = [Report.from_wire(row) for row in rows]
        logger.info("Reportes obtenidos", extra={"count": len(reports)})
        return reports
