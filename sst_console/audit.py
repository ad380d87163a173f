"""
===============================================================================
TARJETA CRC — sst_console/audit.py (Emisión de auditoría externa)
===============================================================================

Responsabilidades:
  - Punto único que usa el resto de la consola para registrar acciones
    (login, logout, CRUD de usuarios, vista de reportes).
  - Normalizar `data` a valores serializables (JSON).
  - "Best-effort": si el cliente falla (incluso con fallback deshabilitado),
    NO rompe la operación principal; solo se loguea.

Colaboradores:
  - domain.ports.ActionLogSink (ActionScriptClient)
  - domain.entities.AuditAction
  - crosscutting.logger.logger
===============================================================================
"""

from __future__ import annotations

from typing import Any

from .crosscutting.logger import logger
from .domain.entities import AuditAction
from .domain.ports import ActionLogSink


def _sanitize(value: Any) -> Any:
    """
    Convierte valores a tipos serializables para JSON.
    - primitives -> OK
    - dict/list/tuple -> sanitiza recursivamente
    - otros -> str(value)
    """
    if value is None or isinstance(value, (str, int, float, bool)):
        return value

    if isinstance(value, dict):
        return {str(k): _sanitize(v) for k, v in value.items()}

    if isinstance(value, (list, tuple)):
        return [_sanitize(v) for v in value]

    return str(value)


async def log_to_action_script(
    client: ActionLogSink | None,
    action: AuditAction | str,
    user_email: str,
    data: dict[str, Any] | None = None,
) -> None:
    """
    Registra una acción del operador en el endpoint externo.

    Regla clave:
      - Si client es None, la acción es desconocida o el envío falla,
        NO se lanza excepción.
    """
    if client is None:
        return

    action_name = getattr(action, "value", action)
    try:
        action_name = AuditAction(action).value
        await client.log_user_action(action_name, user_email, _sanitize(data or {}))
    except Exception as exc:
        # Best-effort: logueamos y seguimos.
        logger.warning(
            "Falló el registro de auditoría externa",
            extra={"action": action_name, "error": str(exc)},
        )
