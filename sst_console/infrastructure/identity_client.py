"""
============================================================
TARJETA CRC — infrastructure/identity_client.py
============================================================
Class: HttpIdentityClient

Responsibilities:
  - Implementar IdentityBackend contra el servicio de identidad hospedado.
  - Sign-in con email + password (password grant).
  - Resolver el usuario de un access token (sesión persistida).
  - Sign-out remoto.
  - Persistir/restaurar la sesión en un archivo JSON (opcional).
  - Diferenciar credenciales inválidas (4xx) vs host inalcanzable.

Collaborators:
  - domain.entities.Session
  - crosscutting.exceptions (InvalidCredentials, NetworkError, BackendCallError)
  - httpx (HTTP client)
============================================================
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from ..crosscutting.exceptions import (
    BackendCallError,
    InvalidCredentials,
    NetworkError,
)
from ..crosscutting.logger import logger
from ..domain.entities import Session
from .http_errors import backend_headers, error_message

_TOKEN_PATH = "/auth/v1/token"
_USER_PATH = "/auth/v1/user"
_LOGOUT_PATH = "/auth/v1/logout"


class HttpIdentityClient:
    def __init__(
        self,
        base_url: str,
        anon_key: str,
        *,
        client: httpx.AsyncClient | None = None,
        session_file: str = "",
    ):
        if not base_url:
            raise ValueError("base_url is required for HttpIdentityClient")
        self._base_url = base_url.rstrip("/")
        self._anon_key = anon_key
        self._client = client or httpx.AsyncClient()
        self._session_path = Path(session_file) if session_file else None

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        try:
            resp = await self._client.post(
                f"{self._base_url}{_TOKEN_PATH}",
                params={"grant_type": "password"},
                json={"email": email, "password": password},
                headers=backend_headers(self._anon_key),
            )
        except httpx.TransportError as exc:
            logger.warning(
                "Identity: sign-in sin respuesta del host",
                extra={"error": str(exc)},
            )
            raise NetworkError(str(exc), original_error=exc) from exc

        if 400 <= resp.status_code < 500:
            raise InvalidCredentials(error_message(resp))
        if not resp.is_success:
            raise NetworkError(error_message(resp))

        body = resp.json()
        user = body.get("user") or {}
        return Session(
            access_token=body["access_token"],
            refresh_token=body.get("refresh_token") or "",
            user_id=str(user.get("id", "")),
            email=user.get("email") or email,
        )

    async def get_user(self, access_token: str) -> Optional[Dict[str, Any]]:
        try:
            resp = await self._client.get(
                f"{self._base_url}{_USER_PATH}",
                headers=backend_headers(self._anon_key, access_token),
            )
        except httpx.TransportError as exc:
            raise NetworkError(str(exc), original_error=exc) from exc

        # Token vencido o revocado: la sesión simplemente no existe.
        if resp.status_code in (401, 403):
            return None
        if not resp.is_success:
            raise BackendCallError(error_message(resp), status_code=resp.status_code)
        return resp.json()

    async def sign_out(self, access_token: str) -> None:
        try:
            resp = await self._client.post(
                f"{self._base_url}{_LOGOUT_PATH}",
                headers=backend_headers(self._anon_key, access_token),
            )
        except httpx.TransportError as exc:
            raise NetworkError(str(exc), original_error=exc) from exc

        if not resp.is_success and resp.status_code != 401:
            raise BackendCallError(error_message(resp), status_code=resp.status_code)

    # ------------------------------------------------------------------
    # Persistencia local de la sesión
    # ------------------------------------------------------------------

    def load_persisted_session(self) -> Optional[Session]:
        if self._session_path is None or not self._session_path.exists():
            return None
        try:
            raw = json.loads(self._session_path.read_text(encoding="utf-8"))
            return Session(
                access_token=raw["access_token"],
                refresh_token=raw.get("refresh_token", ""),
                user_id=raw["user_id"],
                email=raw["email"],
            )
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning(
                "Identity: sesión persistida ilegible, se ignora",
                extra={"path": str(self._session_path), "error": str(exc)},
            )
            return None

    def persist_session(self, session: Optional[Session]) -> None:
        if self._session_path is None:
            return
        if session is None:
            self._session_path.unlink(missing_ok=True)
            return

        payload = {
            "access_token": session.access_token,
            "refresh_token": session.refresh_token,
            "user_id": session.user_id,
            "email": session.email,
        }
        self._session_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._session_path.parent, suffix=".tmp")
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(payload, fh)
        os.replace(tmp, self._session_path)
