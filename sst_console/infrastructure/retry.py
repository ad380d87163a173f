"""sst_console.infrastructure.retry

Name: Bounded Retry Policy (linear backoff + fallback)

Qué es
------
Policy Object de **resiliencia** para el cliente de auditoría externa.
Parametriza una única operación `send`:
  - Techo de intentos (`max_attempts`)
  - Backoff lineal: `backoff_ms × número_de_intento` entre intentos
  - Timeout duro por intento (`timeout_ms`), aplicado con cancelación
  - Qué hacer al agotar intentos (`fallback_mode`)

CRC (Component Card)
--------------------
Component: RetryPolicy
Responsibilities:
  - Calcular la espera entre intentos
  - Proveer las estrategias de `tenacity` (stop/wait) equivalentes
  - Construirse desde Settings
Collaborators:
  - tenacity (motor de retry)
  - crosscutting.config.Settings
  - infrastructure.action_script.ActionScriptClient (consumidor)
Constraints:
  - Se reintenta TODO fallo (status no-2xx, transporte, timeout)
  - Sin jitter: la secuencia de esperas es determinística (1s, 2s, ...)
"""

from __future__ import annotations

from dataclasses import dataclass

from tenacity import stop_after_attempt, wait_incrementing

from ..crosscutting.config import Settings


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 2
    backoff_ms: int = 1_000
    timeout_ms: int = 15_000
    fallback_mode: bool = True
    log_errors: bool = True

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.backoff_ms < 0 or self.timeout_ms <= 0:
            raise ValueError("backoff_ms must be >= 0 and timeout_ms > 0")

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            max_attempts=settings.action_script_retry_attempts,
            backoff_ms=settings.action_script_backoff_ms,
            timeout_ms=settings.action_script_timeout_ms,
            fallback_mode=settings.action_script_fallback_mode,
            log_errors=settings.action_script_log_errors,
        )

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    def delay_for(self, attempt: int) -> float:
        """R: Segundos de espera después del intento `attempt` (base 1)."""
        return self.backoff_ms * attempt / 1000

    def stop_strategy(self):
        return stop_after_attempt(self.max_attempts)

    def wait_strategy(self):
        # R: wait_incrementing espera start + increment*(n-1) => backoff*n.
        unit = self.backoff_ms / 1000
        return wait_incrementing(start=unit, increment=unit)
