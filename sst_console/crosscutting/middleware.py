# sst_console/crosscutting/middleware.py
"""
===============================================================================
MÓDULO: Middleware HTTP (contexto de request)
===============================================================================

Objetivo
--------
RequestContextMiddleware:
   - Generar/propagar request_id
   - Setear contextvars (method/path)
   - Log por request (latencia + status)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  RequestContextMiddleware

Responsabilidades:
  - Observabilidad (request_id + logs)
  - Devolver X-Request-Id en la respuesta

Colaboradores:
  - sst_console/context.py
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger

REQUEST_ID_HEADER = "X-Request-Id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      RequestContextMiddleware

    Responsabilidades:
      - Generar/aceptar X-Request-Id
      - Setear contextvars para correlación de logs
      - Garantizar clear_context() para evitar leaks
    ----------------------------------------------------------------------------
    """

    _QUIET_PATHS = {"/healthz"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = (request.headers.get("x-request-id") or "").strip()
        request_id = (
            incoming if self._is_valid_request_id(incoming) else str(uuid.uuid4())
        )

        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )
        request.state.request_id = request_id

        start = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        except Exception:
            latency = time.perf_counter() - start
            logger.exception(
                "request falló",
                extra={"status_code": 500, "latency_ms": round(latency * 1000, 2)},
            )
            raise
        finally:
            latency = time.perf_counter() - start
            if request.url.path not in self._QUIET_PATHS:
                logger.info(
                    "request completado",
                    extra={
                        "status_code": status_code,
                        "latency_ms": round(latency * 1000, 2),
                    },
                )
            clear_context()

    @staticmethod
    def _is_valid_request_id(value: str) -> bool:
        # Aceptamos UUIDs y también ids cortos razonables.
        return bool(value) and len(value) <= 128
