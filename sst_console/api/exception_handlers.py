"""
===============================================================================
TARJETA CRC — api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir ConsoleError y derivadas a respuestas HTTP RFC7807.
  - Usar el texto traducido (idioma activo) como `detail` cuando hay key.
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos en errores no controlados.

Patrones aplicados:
  - Exception Mapping (Presentation Layer).
  - Fail-safe: cualquier excepción no tipada -> INTERNAL_ERROR (con logging).

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, app_exception_handler
  - crosscutting.exceptions: ConsoleError y derivadas
  - container.get_translator
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from ..container import get_translator
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
)
from ..crosscutting.exceptions import (
    AdminRequired,
    ConsoleError,
    DuplicateEmailError,
    InvalidCredentials,
    NotAuthenticated,
    PermissionDeniedError,
    ReportNotFoundError,
    UserNotFoundError,
    ValidationFailed,
)
from ..crosscutting.logger import logger

# R: Orden importa: primera coincidencia por isinstance gana.
_STATUS_MAP: tuple[tuple[type[ConsoleError], int, ErrorCode], ...] = (
    (ValidationFailed, 422, ErrorCode.VALIDATION_ERROR),
    (InvalidCredentials, 401, ErrorCode.UNAUTHORIZED),
    (NotAuthenticated, 401, ErrorCode.UNAUTHORIZED),
    (AdminRequired, 403, ErrorCode.FORBIDDEN),
    (PermissionDeniedError, 403, ErrorCode.FORBIDDEN),
    (UserNotFoundError, 404, ErrorCode.NOT_FOUND),
    (ReportNotFoundError, 404, ErrorCode.NOT_FOUND),
    (DuplicateEmailError, 409, ErrorCode.CONFLICT),
)


def _status_for(exc: ConsoleError) -> tuple[int, ErrorCode]:
    for exc_type, status_code, code in _STATUS_MAP:
        if isinstance(exc, exc_type):
            return status_code, code
    # R: Resto = fallas del backend remoto / transporte.
    return 502, ErrorCode.BAD_GATEWAY


def _detail_for(exc: ConsoleError) -> str:
    translator = get_translator()
    if exc.key and translator.has(exc.key):
        return translator.t(exc.key, exc.params)
    return exc.message


async def console_error_handler(request: Request, exc: ConsoleError) -> JSONResponse:
    status_code, code = _status_for(exc)

    log = logger.warning if status_code < 500 else logger.error
    log(
        "Error de consola",
        extra={
            "code": code.value,
            "error_code": exc.error_code,
            "error_id": exc.error_id,
            "error": exc.message,
        },
    )

    errors = [{"error_id": exc.error_id, "error_code": exc.error_code}]
    if isinstance(exc, ValidationFailed):
        translator = get_translator()
        errors = [
            {"field": field, "key": key, "detail": translator.t(key)}
            for field, key in sorted(exc.field_errors.items())
        ] + errors

    app_exc = AppHTTPException(
        status_code=status_code,
        code=code,
        detail=_detail_for(exc),
        errors=errors,
    )
    return await app_exception_handler(request, app_exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica (evita filtrar internos).
    """
    logger.error(
        "Excepción no controlada",
        exc_info=True,
        extra={"error": str(exc)},
    )

    try:
        production = get_settings().is_production()
    except Exception:
        production = True
    detail = "Error interno." if production else str(exc)

    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=detail,
    )
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Importante:
      - AppHTTPException debe registrarse para respetar RFC7807.
      - Exception genérica se registra al final como fallback.
    """
    app.add_exception_handler(ConsoleError, console_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
