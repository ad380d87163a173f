"""
===============================================================================
TARJETA CRC — application/toasts.py
===============================================================================

Responsabilidades:
  - Mantener la lista ordenada de toasts activos (más nuevo primero).
  - Notificar SINCRÓNICAMENTE a todos los suscriptores en cada mutación.
  - Auto-descartar cada toast tras `duration_ms` salvo descarte explícito.

Colaboradores:
  - domain.entities.Toast / ToastSeverity
  - asyncio (loop.call_later) o un scheduler inyectado (tests)

Notas:
  - Contenedor explícito e inyectable: una instancia por aplicación,
    construida en container.py. No hay estado global de módulo.
===============================================================================
"""

from __future__ import annotations

import asyncio
from itertools import count
from typing import Any, Callable, Dict, List, Optional, Protocol

from ..crosscutting.logger import logger
from ..domain.entities import Toast, ToastSeverity

Listener = Callable[[List[Toast]], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], Optional[TimerHandle]]


def _loop_scheduler(delay: float, callback: Callable[[], None]) -> Optional[TimerHandle]:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        # Fuera del loop (scripts sync): el toast queda hasta dismiss explícito.
        return None
    return loop.call_later(delay, callback)


class ToastCenter:
    def __init__(self, duration_ms: int = 5_000, scheduler: Scheduler | None = None):
        self._duration_ms = duration_ms
        self._scheduler = scheduler or _loop_scheduler
        self._ids = count(1)
        self._toasts: List[Toast] = []
        self._timers: Dict[int, TimerHandle] = {}
        self._listeners: List[Listener] = []

    @property
    def toasts(self) -> List[Toast]:
        return list(self._toasts)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.toasts
        for listener in list(self._listeners):
            listener(snapshot)

    def show(
        self, message: str, severity: ToastSeverity | str = ToastSeverity.INFO
    ) -> Toast:
        toast = Toast(
            id=next(self._ids), message=message, severity=ToastSeverity(severity)
        )
        self._toasts.insert(0, toast)
        handle = self._scheduler(
            self._duration_ms / 1000, lambda: self.dismiss(toast.id)
        )
        if handle is not None:
            self._timers[toast.id] = handle

        log = logger.warning if toast.severity is ToastSeverity.ERROR else logger.debug
        log("toast", extra={"toast_id": toast.id, "severity": toast.severity.value})

        self._notify()
        return toast

    def success(self, message: str) -> Toast:
        return self.show(message, ToastSeverity.SUCCESS)

    def error(self, message: str) -> Toast:
        return self.show(message, ToastSeverity.ERROR)

    def dismiss(self, toast_id: int) -> bool:
        handle = self._timers.pop(toast_id, None)
        if handle is not None:
            handle.cancel()

        before = len(self._toasts)
        self._toasts = [t for t in self._toasts if t.id != toast_id]
        if len(self._toasts) == before:
            return False

        self._notify()
        return True

    def clear(self) -> None:
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()
        self._toasts = []
        self._notify()

    def to_list(self) -> List[Dict[str, Any]]:
        return [t.to_dict() for t in self._toasts]
