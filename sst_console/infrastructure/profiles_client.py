"""
============================================================
TARJETA CRC — infrastructure/profiles_client.py
============================================================
Class: HttpProfilesClient

Responsibilities:
  - Implementar ProfileBackend contra la API REST del backend de datos.
  - Invocar procedimientos remotos (rpc) con parámetros JSON.
  - Operaciones directas sobre la relación `profiles` (update/select por id).
  - Traducir errores: respuesta estructurada -> BackendCallError(message),
    host inalcanzable -> NetworkError.

Collaborators:
  - crosscutting.exceptions
  - application.user_directory (consumidor)
  - httpx (HTTP client)
============================================================
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..crosscutting.exceptions import BackendCallError, NetworkError
from ..crosscutting.logger import logger
from .http_errors import backend_headers, error_message

_RPC_PATH = "/rest/v1/rpc/{name}"
_PROFILES_PATH = "/rest/v1/profiles"


class HttpProfilesClient:
    def __init__(
        self,
        base_url: str,
        anon_key: str,
        *,
        client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._anon_key = anon_key
        self._client = client or httpx.AsyncClient()
        self._access_token: Optional[str] = None

    def set_access_token(self, access_token: Optional[str]) -> None:
        """Las políticas de fila del backend se evalúan con el token del operador."""
        self._access_token = access_token

    def _headers(self, **extra: str) -> Dict[str, str]:
        headers = backend_headers(self._anon_key, self._access_token)
        headers.update(extra)
        return headers

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = await self._client.request(
                method, f"{self._base_url}{path}", **kwargs
            )
        except httpx.TransportError as exc:
            logger.warning(
                "Profiles: host inalcanzable",
                extra={"http_method": method, "target": path, "error": str(exc)},
            )
            raise NetworkError(str(exc), original_error=exc) from exc

        if not resp.is_success:
            message = error_message(resp)
            logger.warning(
                "Profiles: respuesta de error del backend",
                extra={"status_code": resp.status_code, "target": path, "error": message},
            )
            raise BackendCallError(message, status_code=resp.status_code)
        return resp

    @staticmethod
    def _decode(resp: httpx.Response) -> Any:
        if not resp.content:
            return None
        return resp.json()

    async def rpc(self, name: str, params: Optional[Dict[str, Any]] = None) -> Any:
        resp = await self._send(
            "POST",
            _RPC_PATH.format(name=name),
            json=params or {},
            headers=self._headers(),
        )
        return self._decode(resp)

    async def update_profile(
        self, user_id: str, fields: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        resp = await self._send(
            "PATCH",
            _PROFILES_PATH,
            params={"id": f"eq.{user_id}", "select": "*"},
            json=fields,
            headers=self._headers(Prefer="return=representation"),
        )
        rows = self._decode(resp)
        if isinstance(rows, list):
            return rows[0] if rows else None
        return rows or None

    async def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        resp = await self._send(
            "GET",
            _PROFILES_PATH,
            params={"id": f"eq.{user_id}", "select": "*"},
            headers=self._headers(),
        )
        rows = self._decode(resp) or []
        return rows[0] if rows else None
