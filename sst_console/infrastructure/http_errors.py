"""
===============================================================================
TARJETA CRC — infrastructure/http_errors.py
===============================================================================

Responsabilidades:
  - Extraer el mensaje de error "humano" de una respuesta del backend.
  - Centralizar los headers del backend de identidad/datos (apikey + Bearer).

Colaboradores:
  - identity_client, profiles_client (consumidores)
===============================================================================
"""

from __future__ import annotations

from typing import Dict, Optional

import httpx

# Orden de preferencia de los campos de error que devuelve el backend
# (PostgREST: message; GoTrue: error_description / msg).
_ERROR_FIELDS = ("message", "error_description", "msg", "error")


def error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for name in _ERROR_FIELDS:
            value = body.get(name)
            if isinstance(value, str) and value.strip():
                return value.strip()

    text = (resp.text or "").strip()
    return text or f"HTTP {resp.status_code}: {resp.reason_phrase}"


def backend_headers(anon_key: str, access_token: Optional[str] = None) -> Dict[str, str]:
    return {
        "apikey": anon_key,
        "Authorization": f"Bearer {access_token or anon_key}",
        "Content-Type": "application/json",
    }
