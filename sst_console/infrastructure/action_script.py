"""
============================================================
TARJETA CRC — infrastructure/action_script.py
============================================================
Class: ActionScriptClient

Responsibilities:
  - POST de eventos de auditoría {action, timestamp, user, data} al endpoint
    externo.
  - Timeout duro por intento (asyncio.wait_for => cancelación).
  - Retry acotado con backoff lineal (tenacity AsyncRetrying).
  - Modo fallback: intentos agotados => éxito local con marca {"fallback": True}.
  - log_user_action(): fire-and-forget, nunca lanza.

Collaborators:
  - infrastructure.retry.RetryPolicy
  - domain.entities.ActionScriptResult
  - crosscutting.logger (canal de diagnóstico)
  - httpx, tenacity
============================================================
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx
from tenacity import AsyncRetrying, RetryCallState, retry_if_exception_type

from ..crosscutting.exceptions import ActionScriptError
from ..crosscutting.logger import logger
from ..domain.entities import ActionScriptResult
from .retry import RetryPolicy

FALLBACK_MESSAGE = "Apps Script no disponible, operación completada localmente"

Sleep = Callable[[float], Awaitable[None]]


def utc_timestamp() -> str:
    """ISO-8601 UTC con milisegundos y sufijo Z (mismo formato que el navegador)."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ActionScriptClient:
    def __init__(
        self,
        url: str,
        policy: RetryPolicy | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self._url = (url or "").strip()
        self._policy = policy or RetryPolicy()
        self._client = client or httpx.AsyncClient(follow_redirects=True)
        self._sleep = sleep

    @property
    def configured(self) -> bool:
        return bool(self._url)

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    async def _post_once(self, payload: Dict[str, Any]) -> Any:
        try:
            resp = await asyncio.wait_for(
                self._client.post(self._url, json=payload),
                timeout=self._policy.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise ActionScriptError(
                f"Timeout tras {self._policy.timeout_ms} ms", original_error=exc
            ) from exc
        except httpx.HTTPError as exc:
            raise ActionScriptError(str(exc), original_error=exc) from exc

        if not resp.is_success:
            raise ActionScriptError(f"HTTP {resp.status_code}: {resp.reason_phrase}")

        try:
            return resp.json()
        except ValueError as exc:
            raise ActionScriptError(
                "Respuesta no JSON del Apps Script", original_error=exc
            ) from exc

    def _log_retry(self, retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "Action Script: intento falló, reintentando",
            extra={
                "attempt": retry_state.attempt_number,
                "max_attempts": self._policy.max_attempts,
                "wait_s": self._policy.delay_for(retry_state.attempt_number),
                "error": str(exc) if exc else None,
            },
        )

    async def send(self, payload: Dict[str, Any]) -> ActionScriptResult:
        """
        Envía el payload con retry acotado.

        Raises:
            ActionScriptError: solo si se agotan los intentos con fallback
            deshabilitado.
        """
        if not self.configured:
            logger.debug("Action Script no configurado; evento descartado")
            return ActionScriptResult(success=True, message="Action Script no configurado")

        attempts = 0
        try:
            async for attempt in AsyncRetrying(
                stop=self._policy.stop_strategy(),
                wait=self._policy.wait_strategy(),
                retry=retry_if_exception_type(ActionScriptError),
                before_sleep=self._log_retry,
                sleep=self._sleep,
                reraise=True,
            ):
                with attempt:
                    attempts = attempt.retry_state.attempt_number
                    data = await self._post_once(payload)
        except ActionScriptError as exc:
            if not self._policy.fallback_mode:
                raise
            logger.info(
                "Action Script en modo fallback; se continúa sin logging remoto",
                extra={"attempts": attempts, "error": exc.message},
            )
            return ActionScriptResult(
                success=True,
                data={"fallback": True},
                message=FALLBACK_MESSAGE,
                fallback=True,
                attempts=attempts,
            )

        return ActionScriptResult(success=True, data=data, attempts=attempts)

    async def log_user_action(
        self,
        action: str,
        user_email: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        payload = {
            "action": getattr(action, "value", action),
            "timestamp": utc_timestamp(),
            "user": user_email,
            "data": data or {},
        }
        try:
            await self.send(payload)
        except Exception as exc:
            # Nunca se propaga: la operación principal continúa.
            if self._policy.log_errors:
                logger.error(
                    "Action Script logging failed",
                    extra={"action": payload["action"], "error": str(exc)},
                )
