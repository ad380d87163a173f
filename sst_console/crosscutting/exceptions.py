# sst_console/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas de la consola (errores internos)
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- key opcional de traducción (la UI muestra t(key) en lugar del texto crudo)
- message "humana" (texto crudo del backend cuando no hay key reconocida)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  ConsoleError + subclases

Responsabilidades:
  - Estandarizar errores de validación, sesión, backend y transporte
  - Generar error_id para rastreo

Colaboradores:
  - application/error_classification.py (mapea texto del backend -> tipo)
  - api/exception_handlers.py (mapea a AppHTTPException)
  - application/console.py (convierte a toasts)
===============================================================================
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4


class ConsoleError(Exception):
    """
    Base para errores internos de la consola.

    `key` es la clave de traducción reconocida (si existe); `message` conserva
    el texto original (por ejemplo, el mensaje crudo del backend).
    """

    error_code: str = "CONSOLE_ERROR"
    default_key: str | None = None

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        params: dict[str, Any] | None = None,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.key = key or self.default_key
        self.params = params or {}
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


# -----------------------------------------------------------------------------
# Validación (antes de cualquier llamada de red)
# -----------------------------------------------------------------------------


class ValidationFailed(ConsoleError):
    """Errores de formulario, localizados por campo (field -> translation key)."""

    error_code = "VALIDATION_ERROR"

    def __init__(self, field_errors: dict[str, str]):
        self.field_errors = dict(field_errors)
        fields = ", ".join(sorted(self.field_errors))
        super().__init__(f"Datos inválidos: {fields}")


# -----------------------------------------------------------------------------
# Sesión
# -----------------------------------------------------------------------------


class InvalidCredentials(ConsoleError):
    error_code = "INVALID_CREDENTIALS"
    default_key = "loginError"


class NotAuthenticated(ConsoleError):
    error_code = "NOT_AUTHENTICATED"
    default_key = "sessionRequired"


class AdminRequired(ConsoleError):
    error_code = "ADMIN_REQUIRED"
    default_key = "adminRequired"


# -----------------------------------------------------------------------------
# Transporte
# -----------------------------------------------------------------------------


class NetworkError(ConsoleError):
    """El host no respondió (DNS, conexión rechazada, timeout de transporte)."""

    error_code = "NETWORK_ERROR"
    default_key = "networkError"


class BackendCallError(ConsoleError):
    """Respuesta estructurada de error del backend (texto libre en message)."""

    error_code = "BACKEND_ERROR"

    def __init__(self, message: str, *, status_code: int = 0, **kwargs: Any):
        self.status_code = status_code
        super().__init__(message, **kwargs)


# -----------------------------------------------------------------------------
# Usuarios (conjunto cerrado de condiciones reconocidas)
# -----------------------------------------------------------------------------


class AmbiguousIdentifierError(ConsoleError):
    error_code = "AMBIGUOUS_IDENTIFIER"
    default_key = "supabaseAmbiguousIdError"


class MissingProcedureError(ConsoleError):
    error_code = "MISSING_PROCEDURE"
    default_key = "databaseFunctionError"


class PermissionDeniedError(ConsoleError):
    error_code = "PERMISSION_DENIED"
    default_key = "permissionDenied"


class UnknownBackendError(ConsoleError):
    """Fallback: el texto crudo del backend viaja en message."""

    error_code = "UNKNOWN_BACKEND_ERROR"


class DuplicateEmailError(ConsoleError):
    error_code = "DUPLICATE_EMAIL"
    default_key = "duplicateEmail"


class ProvisioningUnavailableError(ConsoleError):
    error_code = "PROVISIONING_UNAVAILABLE"
    default_key = "provisioningUnavailable"


class UpdateFailedError(ConsoleError):
    error_code = "UPDATE_FAILED"


class UserNotFoundError(ConsoleError):
    error_code = "USER_NOT_FOUND"
    default_key = "userNotFound"


# -----------------------------------------------------------------------------
# Reportes
# -----------------------------------------------------------------------------


class CorsOrNetworkError(ConsoleError):
    """El endpoint de reportes no es alcanzable (ni siquiera respondió)."""

    error_code = "REPORTS_UNREACHABLE"
    default_key = "appsScriptCorsError"


class ReportsApiError(ConsoleError):
    error_code = "REPORTS_API_ERROR"


class ReportNotFoundError(ConsoleError):
    error_code = "REPORT_NOT_FOUND"
    default_key = "noReportsFound"


# -----------------------------------------------------------------------------
# Auditoría externa
# -----------------------------------------------------------------------------


class ActionScriptError(ConsoleError):
    """Solo escapa de ActionScriptClient.send() con fallback deshabilitado."""

    error_code = "ACTION_SCRIPT_ERROR"
